import pytest
from minio.error import S3Error

from ImageUpload.core.errors import StorageError
from ImageUpload.core.object_store import S3ObjectStore


class FakeS3Error(S3Error):
    def __init__(self, code, message):
        Exception.__init__(self, message)
        self._fake_code = code
        self._fake_message = message

    @property
    def code(self):
        return self._fake_code

    @property
    def message(self):
        return self._fake_message


class FakeMinio:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def put_object(self, **kwargs):
        if self.error is not None:
            raise self.error
        kwargs["data"] = kwargs["data"].read()
        self.calls.append(kwargs)


def test_put_sends_bytes_and_content_type():
    client = FakeMinio()
    store = S3ObjectStore(client, "pics")

    store.put("uploads/1-abc.png", b"\x89PNG", "image/png")

    assert client.calls == [
        {
            "bucket_name": "pics",
            "object_name": "uploads/1-abc.png",
            "data": b"\x89PNG",
            "length": 4,
            "content_type": "image/png",
        }
    ]


def test_provider_error_code_passes_through():
    store = S3ObjectStore(FakeMinio(FakeS3Error("AccessDenied", "Access Denied.")), "pics")

    with pytest.raises(StorageError) as excinfo:
        store.put("uploads/1-abc.png", b"data", "image/png")

    assert excinfo.value.to_payload() == {"error": "Access Denied.", "code": "AccessDenied"}


def test_transport_error_maps_to_unknown_code():
    store = S3ObjectStore(FakeMinio(ConnectionError("connection refused")), "pics")

    with pytest.raises(StorageError) as excinfo:
        store.put("uploads/1-abc.png", b"data", "image/png")

    assert excinfo.value.code == "UNKNOWN_ERROR"
    assert excinfo.value.message == "connection refused"
    assert excinfo.value.status_code == 500


def test_empty_message_falls_back():
    store = S3ObjectStore(FakeMinio(RuntimeError()), "pics")

    with pytest.raises(StorageError) as excinfo:
        store.put("uploads/1-abc.png", b"data", "image/png")

    assert excinfo.value.to_payload() == {"error": "Upload failed", "code": "UNKNOWN_ERROR"}
