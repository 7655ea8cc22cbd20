import logging
from dataclasses import dataclass
from typing import Optional

from ..ports.storage_repo import ObjectStore
from ...exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CleanupOutcome:
    key: str
    removed: bool
    skipped: bool = False
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class CleanupCoordinator:
    """Best-effort removal of storage objects no record references any more.

    ``discard`` never raises: a failure is logged and returned as an outcome,
    leaving an orphaned object behind rather than failing the mutation that
    triggered it.
    """

    def __init__(self, object_store: ObjectStore):
        self.object_store = object_store

    def discard(self, key: Optional[str]) -> CleanupOutcome:
        if not key:
            return CleanupOutcome(key="", removed=False, skipped=True)
        try:
            self.object_store.delete(key)
        except StorageError as e:
            logger.error(f"Failed to delete image {key} from storage: {e}")
            return CleanupOutcome(key=key, removed=False, error=str(e))
        except Exception as e:
            logger.exception(f"Unexpected error deleting image {key}")
            return CleanupOutcome(key=key, removed=False, error=str(e))
        logger.info(f"Deleted image {key} from storage")
        return CleanupOutcome(key=key, removed=True)
