from ...config import Settings
from ...application.ports.storage_repo import ObjectStore
from .local_storage import LocalObjectStore
from .s3_storage import S3ObjectStore


def build_object_store(settings: Settings) -> ObjectStore:
    """Construct the process-wide object store for the configured backend."""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "s3":
        if not settings.AWS_S3_BUCKET_NAME:
            raise ValueError("AWS_S3_BUCKET_NAME must be set when STORAGE_BACKEND=s3")
        return S3ObjectStore(
            bucket=settings.AWS_S3_BUCKET_NAME,
            region=settings.AWS_REGION,
            namespace=settings.STORAGE_KEY_NAMESPACE,
            access_key_id=settings.AWS_ACCESS_KEY_ID,
            secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            public_read=settings.S3_PUBLIC_READ,
        )
    if backend == "local":
        return LocalObjectStore(
            upload_dir=settings.UPLOAD_DIR,
            base_url=settings.BASE_URL,
            namespace=settings.STORAGE_KEY_NAMESPACE,
        )
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")


__all__ = ["ObjectStore", "LocalObjectStore", "S3ObjectStore", "build_object_store"]
