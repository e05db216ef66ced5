"""Wires the store, search filter and coordinators behind one user-facing API."""

from pathlib import Path
from typing import Optional, Sequence

from common.logging_config import get_logger
from vault.deletion_coordinator import ConfirmCallback, DeletionCoordinator
from vault.exceptions import (
    DeleteError,
    FetchError,
    UploadBatchError,
    UploadInProgressError,
    VaultError,
)
from vault.file_service import FileServiceClient
from vault.models import DownloadResult, FileRecord, LocalFile, UploadResult
from vault.notifier import LoggingNotifier, Notifier
from vault.refresher import StoreRefresher
from vault.search_filter import SearchFilter
from vault.store import FileRecordStore
from vault.upload_coordinator import UploadCoordinator

logger = get_logger(__name__)


class VaultSession:
    """
    Coordinator boundary used by the user interface.

    Every VaultError raised below is caught here and turned into a single
    notification. Methods report the outcome through their return value and
    never leave the store partially mutated.
    """

    def __init__(
        self,
        service: FileServiceClient,
        confirm: ConfirmCallback,
        notifier: Optional[Notifier] = None,
        store: Optional[FileRecordStore] = None,
    ):
        self.service = service
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self.store = store if store is not None else FileRecordStore()
        self.query = ""

        self.search = SearchFilter(self.store)
        self.refresher = StoreRefresher(service, self.store)
        self.uploader = UploadCoordinator(service, self.refresher)
        self.deleter = DeletionCoordinator(service, self.store, confirm)

    @property
    def busy(self) -> bool:
        return self.uploader.busy

    def set_query(self, query: str) -> None:
        self.query = query

    def visible_files(self) -> tuple[FileRecord, ...]:
        """Records of the store matching the current query."""
        return self.search.apply(self.query)

    async def refresh(self) -> bool:
        try:
            await self.refresher.refresh()
        except FetchError:
            self.notifier.error("Failed to fetch files.")
            return False
        return True

    async def upload(self, files: Sequence[LocalFile]) -> Optional[UploadResult]:
        """
        Upload a batch and notify the outcome.

        Returns:
            UploadResult on success, None on failure
        """
        if not files:
            return UploadResult()

        try:
            result = await self.uploader.upload(files)
        except UploadInProgressError as e:
            self.notifier.error(str(e))
            return None
        except UploadBatchError as e:
            self.notifier.error(e.message or "An upload failed.")
            return None
        except FetchError:
            self.notifier.success(f"{len(files)} file(s) uploaded successfully!")
            self.notifier.error("Failed to fetch files.")
            return None

        self.notifier.success(f"{result.count} file(s) uploaded successfully!")
        return result

    async def delete(self, record_id: int) -> bool:
        """
        Delete a record after confirmation.

        Returns:
            True if the record was deleted, False if declined or failed
        """
        try:
            deleted = await self.deleter.delete(record_id)
        except DeleteError:
            self.notifier.error("Failed to delete file.")
            return False

        if deleted:
            self.notifier.success("File deleted successfully!")
        return deleted

    def download_url(self, record_id: int) -> str:
        return self.service.download_url(record_id)

    async def download(self, record_id: int, destination: Path) -> Optional[DownloadResult]:
        try:
            result = await self.service.download(record_id, destination)
        except VaultError as e:
            logger.error(f"Download of record {record_id} failed: {e}")
            self.notifier.error(f"Failed to download file: {e}")
            return None

        self.notifier.success(f"Downloaded to {result.path}")
        return result

    async def close(self) -> None:
        await self.service.close()
