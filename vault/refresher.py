"""Full refresh of the store from the file service list operation."""

from common.logging_config import get_logger
from vault.exceptions import FetchError, VaultError
from vault.file_service import FileServiceClient
from vault.store import FileRecordStore

logger = get_logger(__name__)


class StoreRefresher:
    def __init__(self, service: FileServiceClient, store: FileRecordStore):
        self.service = service
        self.store = store

    async def refresh(self) -> bool:
        """
        Reload every record and replace the store snapshot.

        The store version is read before the list call. If the store was
        mutated while the call was in flight (e.g. by a delete), the listed
        records are stale and are dropped.

        Returns:
            True if the snapshot was replaced, False if the result was stale

        Raises:
            FetchError: If listing failed; the previous snapshot is kept
        """
        started_at = self.store.version
        try:
            records = await self.service.list_files()
            replaced = self.store.replace_all(records, expected_version=started_at)
        except VaultError as e:
            logger.error(f"Refresh failed: {e}")
            raise FetchError(f"Failed to fetch files: {e}") from e

        if replaced:
            logger.info(f"Store refreshed with {len(self.store)} record(s)")
        return replaced
