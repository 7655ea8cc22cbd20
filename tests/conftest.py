import io
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlmodel import Session

from app.database import build_engine, create_db_and_tables, get_session
from app.exceptions import StorageError
from app.infrastructure.storage.keys import generate_storage_key
from app.main import create_app
from app.models import AdminUser, Artwork, Category
from app.utils import create_jwt_token, hash_password

ORIENTATION_TAG = 0x0112


def make_image_bytes(width: int, height: int, fmt: str = "JPEG", mode: str = "RGB",
                     color=(200, 30, 30), orientation: Optional[int] = None) -> bytes:
    img = Image.new(mode, (width, height), color)
    buf = io.BytesIO()
    kwargs = {}
    if orientation is not None:
        exif = Image.Exif()
        exif[ORIENTATION_TAG] = orientation
        kwargs["exif"] = exif.tobytes()
    img.save(buf, format=fmt, **kwargs)
    return buf.getvalue()


def make_split_image_bytes(width: int, height: int, orientation: Optional[int] = None) -> bytes:
    """Top half red, bottom half blue, so rotations are observable."""
    img = Image.new("RGB", (width, height), (0, 0, 255))
    img.paste((255, 0, 0), (0, 0, width, height // 2))
    buf = io.BytesIO()
    kwargs = {}
    if orientation is not None:
        exif = Image.Exif()
        exif[ORIENTATION_TAG] = orientation
        kwargs["exif"] = exif.tobytes()
    img.save(buf, format="JPEG", quality=95, **kwargs)
    return buf.getvalue()


class FakeObjectStore:
    def __init__(self, fail_put: bool = False, fail_delete: bool = False):
        self.objects = {}
        self.put_calls = []
        self.delete_calls = []
        self.fail_put = fail_put
        self.fail_delete = fail_delete

    def generate_key(self, original_filename, content_type=None):
        return generate_storage_key("artworks", original_filename, content_type)

    def public_url(self, key):
        return f"https://cdn.example.test/{key}"

    def put(self, data, key, content_type):
        self.put_calls.append((key, content_type))
        if self.fail_put:
            raise StorageError("Failed to upload image to storage")
        self.objects[key] = (data, content_type)
        return self.public_url(key)

    def delete(self, key):
        self.delete_calls.append(key)
        if self.fail_delete:
            raise StorageError("Failed to delete image from storage")
        self.objects.pop(key, None)


@pytest.fixture(scope="session")
def admin_password_hash():
    return hash_password("s3cret-pass")


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def object_store():
    return FakeObjectStore()


@pytest.fixture
def app(engine, object_store):
    application = create_app(object_store=object_store, create_tables=False)

    def override_get_session():
        with Session(engine) as session:
            yield session

    application.dependency_overrides[get_session] = override_get_session
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin(session, admin_password_hash):
    user = AdminUser(username="admin", password_hash=admin_password_hash)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def auth_headers(admin):
    token = create_jwt_token({"sub": admin.id, "username": admin.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def category(session):
    cat = Category(name="Paintings", slug="paintings", description="Oil and acrylic")
    session.add(cat)
    session.commit()
    session.refresh(cat)
    return cat


@pytest.fixture
def make_artwork(session, category):
    def _make(title="Untitled", is_published=True, is_featured=False, image_key=None, category_id=None, **extra):
        key = image_key or f"artworks/{title.lower().replace(' ', '-')}.jpg"
        artwork = Artwork(
            title=title,
            image_url=f"https://cdn.example.test/{key}",
            image_key=key,
            category_id=category_id or category.id,
            is_published=is_published,
            is_featured=is_featured,
            **extra,
        )
        session.add(artwork)
        session.commit()
        session.refresh(artwork)
        return artwork
    return _make
