import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from ImageUpload.api.middleware import BodySizeLimitMiddleware
from ImageUpload.core.config import Settings, get_settings
from ImageUpload.core.errors import MethodNotAllowed, UploadError
from ImageUpload.core.intake import parse_upload
from ImageUpload.core.models import UploadResult
from ImageUpload.core.object_store import S3ObjectStore
from ImageUpload.core.service import UploadService

UPLOAD_PATH = "/api/upload"

# Missing credentials or bucket settings abort here, at startup.
settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger("imageupload")

app = FastAPI(title=settings.APP_NAME, version=settings.VERSION)
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

# One client per process, shared read-only by every request.
object_store = S3ObjectStore.from_settings(settings)


# ---- DI Setup ----
def get_object_store() -> S3ObjectStore:
    return object_store


def get_upload_service(
    store: S3ObjectStore = Depends(get_object_store),
    config: Settings = Depends(get_settings),
) -> UploadService:
    return UploadService(store=store, settings=config)


# ---- Middleware ----
app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.MAX_REQUEST_BYTES)

# Must stay outside the size guard so 413 responses get CORS headers too.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- API Endpoints ----
@app.get("/", response_class=HTMLResponse)
async def upload_form(request: Request):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "upload_path": UPLOAD_PATH,
            "max_upload_mb": settings.MAX_UPLOAD_BYTES / (1024 * 1024),
        },
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "service": settings.APP_NAME, "version": settings.VERSION}


@app.post(UPLOAD_PATH, response_model=UploadResult)
async def upload_image(
    request: Request,
    config: Settings = Depends(get_settings),
    service: UploadService = Depends(get_upload_service),
) -> UploadResult:
    uploaded = await parse_upload(request, config)
    return await service.upload(uploaded)


# ---- Error Handling ----
@app.exception_handler(UploadError)
async def upload_error_handler(request: Request, exc: UploadError):
    if exc.status_code < 500:
        logger.warning("Upload rejected (%s): %s", exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        error = MethodNotAllowed(request.method)
        return JSONResponse(status_code=error.status_code, content=error.to_payload(), headers=exc.headers)
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("API Error: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": f"Something went wrong: {exc}"},
    )
