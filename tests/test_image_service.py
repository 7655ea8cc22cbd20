import asyncio
import io

import pytest
from PIL import Image
from starlette.datastructures import Headers, UploadFile

from app.application.services.image_service import ImageUploadService, UploadedAsset
from app.config import settings
from app.exceptions import ProcessingError, StorageError, UploadCancelledError, ValidationError
from app.validation import SERVER_SIZE_MESSAGE, SERVER_TYPE_MESSAGE
from tests.conftest import FakeObjectStore, make_image_bytes, make_split_image_bytes


def asset(data: bytes, content_type: str = "image/jpeg", filename: str = "photo.jpg", size=None):
    return UploadedAsset(data=data, content_type=content_type, size=size or len(data), filename=filename)


def test_upload_compresses_and_stores():
    store = FakeObjectStore()
    svc = ImageUploadService(object_store=store)

    ref = asyncio.run(svc.upload(asset(make_split_image_bytes(2000, 3000, orientation=6))))

    assert ref.image_key in store.objects
    assert ref.image_url == f"https://cdn.example.test/{ref.image_key}"
    assert ref.image_key.endswith(".jpg")
    data, content_type = store.objects[ref.image_key]
    assert content_type == "image/jpeg"
    assert Image.open(io.BytesIO(data)).size == (1200, 800)


def test_png_upload_stored_as_jpeg_with_jpg_key():
    store = FakeObjectStore()
    ref = asyncio.run(ImageUploadService(store).upload(
        asset(make_image_bytes(400, 400, fmt="PNG"), content_type="image/png", filename="art.png")
    ))
    assert ref.image_key.endswith(".jpg")
    assert store.put_calls == [(ref.image_key, "image/jpeg")]


def test_disallowed_type_never_reaches_storage():
    store = FakeObjectStore()
    with pytest.raises(ValidationError) as err:
        asyncio.run(ImageUploadService(store).upload(
            asset(b"%PDF-1.4", content_type="application/pdf", filename="doc.pdf")
        ))
    assert err.value.message == SERVER_TYPE_MESSAGE
    assert store.put_calls == []


def test_oversized_rejected_before_compression(monkeypatch):
    store = FakeObjectStore()
    with pytest.raises(ValidationError) as err:
        asyncio.run(ImageUploadService(store).upload(asset(b"x", size=10 * 1024 * 1024 + 1)))
    assert err.value.message == SERVER_SIZE_MESSAGE
    assert store.put_calls == []


@pytest.mark.parametrize("value", [None, asset(b"")])
def test_missing_file(value):
    with pytest.raises(ValidationError) as err:
        asyncio.run(ImageUploadService(FakeObjectStore()).upload(value))
    assert err.value.message == "No file uploaded"


def test_corrupt_image_raises_processing_error():
    store = FakeObjectStore()
    with pytest.raises(ProcessingError):
        asyncio.run(ImageUploadService(store).upload(asset(b"\xff\xd8 not really a jpeg")))
    assert store.put_calls == []


def test_storage_failure_yields_no_reference():
    store = FakeObjectStore(fail_put=True)
    with pytest.raises(StorageError):
        asyncio.run(ImageUploadService(store).upload(asset(make_image_bytes(50, 50))))
    assert store.objects == {}


def test_disconnected_client_aborts_before_put():
    store = FakeObjectStore()

    async def gone():
        return True

    with pytest.raises(UploadCancelledError):
        asyncio.run(ImageUploadService(store).upload(asset(make_image_bytes(50, 50)), is_disconnected=gone))
    assert store.put_calls == []


def test_concurrent_uploads_get_distinct_keys():
    store = FakeObjectStore()
    svc = ImageUploadService(store)
    data = make_image_bytes(300, 200)

    async def both():
        return await asyncio.gather(svc.upload(asset(data)), svc.upload(asset(data)))

    first, second = asyncio.run(both())
    assert first.image_key != second.image_key
    assert len(store.objects) == 2


def upload_file(data: bytes, content_type: str = "image/jpeg", size=None) -> UploadFile:
    return UploadFile(
        io.BytesIO(data),
        size=size,
        filename="photo.jpg",
        headers=Headers({"content-type": content_type}),
    )


def test_from_upload_file_refuses_known_oversize_without_reading(monkeypatch):
    monkeypatch.setattr(settings, "MAX_FILE_SIZE", 100)
    upload = upload_file(b"x" * 500, size=500)

    with pytest.raises(ValidationError) as err:
        asyncio.run(UploadedAsset.from_upload_file(upload))

    assert err.value.message == SERVER_SIZE_MESSAGE
    assert upload.file.tell() == 0


def test_from_upload_file_reads_at_most_one_byte_past_limit(monkeypatch):
    monkeypatch.setattr(settings, "MAX_FILE_SIZE", 100)
    upload = upload_file(b"x" * 500)

    with pytest.raises(ValidationError):
        asyncio.run(UploadedAsset.from_upload_file(upload))

    assert upload.file.tell() == 101


def test_from_upload_file_within_limit():
    data = make_image_bytes(20, 20)
    asset = asyncio.run(UploadedAsset.from_upload_file(upload_file(data, size=len(data))))
    assert asset.data == data
    assert asset.size == len(data)
    assert asset.content_type == "image/jpeg"
