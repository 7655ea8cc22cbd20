from typing import Optional, Protocol


class ObjectStore(Protocol):
    """Durable blob storage addressed by generated keys.

    ``put`` and ``delete`` raise ``StorageError`` on failure; a key is never
    reused, so a single ``put`` either lands completely or leaves nothing.
    """

    def put(self, data: bytes, key: str, content_type: str) -> str:
        ...

    def delete(self, key: str) -> None:
        ...

    def generate_key(self, original_filename: str, content_type: Optional[str] = None) -> str:
        ...

    def public_url(self, key: str) -> str:
        ...
