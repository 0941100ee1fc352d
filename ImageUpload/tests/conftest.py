import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test-access-key")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test-secret-key")
os.environ.setdefault("AWS_BUCKET_NAME", "test-bucket")

from ImageUpload.api.main import app, get_object_store


class FakeStore:
    def __init__(self, error: Exception = None):
        self.error = error
        self.calls = []

    def put(self, key: str, content: bytes, content_type: str) -> None:
        if self.error is not None:
            raise self.error
        self.calls.append({"key": key, "size": len(content), "content_type": content_type})


@pytest.fixture()
def fake_store():
    return FakeStore()


@pytest.fixture()
def client(fake_store):
    app.dependency_overrides[get_object_store] = lambda: fake_store
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
