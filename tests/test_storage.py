import os
import re

import pytest
from botocore.exceptions import ClientError

from app.config import Settings
from app.exceptions import StorageError
from app.infrastructure.storage import LocalObjectStore, S3ObjectStore, build_object_store
from app.infrastructure.storage.keys import extension_for, generate_storage_key, random_token

KEY_PATTERN = re.compile(r"^artworks/\d+-[a-z0-9]{13}\.jpg$")


class TestKeys:
    def test_key_format(self):
        key = generate_storage_key("artworks", "holiday.PNG", "image/jpeg")
        assert KEY_PATTERN.match(key)

    def test_keys_distinct_for_same_filename(self):
        keys = {generate_storage_key("artworks", "a.jpg", "image/jpeg") for _ in range(200)}
        assert len(keys) == 200

    def test_extension_follows_content_type(self):
        assert extension_for("photo.png", "image/jpeg") == "jpg"
        assert extension_for("photo.jpg", "image/webp") == "webp"

    def test_extension_falls_back_to_filename(self):
        assert extension_for("photo.PNG") == "png"
        assert extension_for("photo") == "bin"
        assert extension_for("", None) == "bin"

    def test_random_token_alphabet(self):
        assert re.fullmatch(r"[a-z0-9]{13}", random_token())


class TestLocalObjectStore:
    def test_put_writes_file_and_returns_url(self, tmp_path):
        store = LocalObjectStore(str(tmp_path), "http://localhost:8000/")
        key = store.generate_key("a.png", "image/jpeg")

        url = store.put(b"payload", key, "image/jpeg")

        assert url == f"http://localhost:8000/uploads/{key}"
        assert (tmp_path / key).read_bytes() == b"payload"
        # no temp files left next to the object
        assert os.listdir(tmp_path / "artworks") == [os.path.basename(key)]

    def test_delete_removes_file_and_tolerates_missing(self, tmp_path):
        store = LocalObjectStore(str(tmp_path), "http://x")
        store.put(b"1", "artworks/1.jpg", "image/jpeg")
        store.delete("artworks/1.jpg")
        assert not (tmp_path / "artworks" / "1.jpg").exists()
        store.delete("artworks/1.jpg")

    def test_key_cannot_escape_upload_dir(self, tmp_path):
        store = LocalObjectStore(str(tmp_path / "uploads"), "http://x")
        with pytest.raises(StorageError):
            store.put(b"1", "../evil.jpg", "image/jpeg")
        with pytest.raises(StorageError):
            store.delete("../../etc/passwd")

    def test_write_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "artworks"
        blocker.write_text("a file where a directory should be")
        store = LocalObjectStore(str(tmp_path), "http://x")
        with pytest.raises(StorageError) as err:
            store.put(b"1", "artworks/1.jpg", "image/jpeg")
        assert err.value.detail == "Image storage failed"


class FakeS3Client:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.put_params = []
        self.deleted = []

    def _error(self, op):
        return ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, op)

    def put_object(self, **params):
        if self.fail:
            raise self._error("PutObject")
        self.put_params.append(params)

    def delete_object(self, Bucket, Key):
        if self.fail:
            raise self._error("DeleteObject")
        self.deleted.append((Bucket, Key))


class TestS3ObjectStore:
    def test_put_uploads_public_object(self):
        client = FakeS3Client()
        store = S3ObjectStore("gallery", region="eu-west-1", client=client)

        url = store.put(b"data", "artworks/1-abc.jpg", "image/jpeg")

        assert url == "https://gallery.s3.eu-west-1.amazonaws.com/artworks/1-abc.jpg"
        params = client.put_params[0]
        assert params["Bucket"] == "gallery"
        assert params["ContentType"] == "image/jpeg"
        assert params["ACL"] == "public-read"

    def test_private_bucket_skips_acl(self):
        client = FakeS3Client()
        S3ObjectStore("gallery", client=client, public_read=False).put(b"d", "k.jpg", "image/jpeg")
        assert "ACL" not in client.put_params[0]

    def test_client_errors_become_storage_errors(self):
        store = S3ObjectStore("gallery", region="us-east-1", client=FakeS3Client(fail=True))
        with pytest.raises(StorageError):
            store.put(b"d", "k.jpg", "image/jpeg")
        with pytest.raises(StorageError):
            store.delete("k.jpg")

    def test_delete(self):
        client = FakeS3Client()
        S3ObjectStore("gallery", client=client).delete("artworks/1.jpg")
        assert client.deleted == [("gallery", "artworks/1.jpg")]


def test_build_object_store_selects_backend(tmp_path):
    local = build_object_store(Settings(STORAGE_BACKEND="local", UPLOAD_DIR=str(tmp_path)))
    assert isinstance(local, LocalObjectStore)

    with pytest.raises(ValueError):
        build_object_store(Settings(STORAGE_BACKEND="s3", AWS_S3_BUCKET_NAME=None))
    with pytest.raises(ValueError):
        build_object_store(Settings(STORAGE_BACKEND="ftp"))
