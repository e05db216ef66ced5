"""Concurrent upload of a batch of local files."""

import asyncio
from typing import Sequence

from common.logging_config import get_logger
from vault.exceptions import UploadBatchError, UploadInProgressError
from vault.file_service import FileServiceClient
from vault.models import LocalFile, UploadResult
from vault.refresher import StoreRefresher

logger = get_logger(__name__)


class UploadCoordinator:
    """
    Uploads a batch of files concurrently and refreshes the store afterwards.

    The batch succeeds only if every upload succeeds. On failure the store
    is not refreshed and uploads that went through are not rolled back.
    """

    def __init__(self, service: FileServiceClient, refresher: StoreRefresher):
        self.service = service
        self.refresher = refresher
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def upload(self, files: Sequence[LocalFile]) -> UploadResult:
        """
        Upload every file of the batch.

        All uploads are started before any is awaited. The outcome is decided
        once every upload has settled.

        Args:
            files: Ordered batch of local files; an empty batch does nothing

        Returns:
            UploadResult with one receipt per file, in batch order

        Raises:
            UploadInProgressError: If another batch is still running
            UploadBatchError: If one or more uploads failed
            FetchError: If the uploads succeeded but the refresh failed
        """
        if not files:
            logger.debug("Empty upload batch, nothing to do")
            return UploadResult()

        if self._busy:
            raise UploadInProgressError("An upload is already in progress.")

        self._busy = True
        try:
            logger.info(f"Uploading batch of {len(files)} file(s)")
            settled: list[asyncio.Future] = []
            tasks = []
            for local_file in files:
                task = asyncio.ensure_future(self.service.upload_file(local_file))
                task.add_done_callback(settled.append)
                tasks.append(task)

            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
            self._raise_on_failure(files, outcomes, settled)

            refreshed = await self.refresher.refresh()
            return UploadResult(receipts=tuple(outcomes), refreshed=refreshed)
        finally:
            self._busy = False

    @staticmethod
    def _raise_on_failure(files, outcomes, settled) -> None:
        for outcome in outcomes:
            if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
                raise outcome

        failed = [f.name for f, o in zip(files, outcomes) if isinstance(o, Exception)]
        if not failed:
            return

        # Report the failure that settled first, as concurrent uploads race.
        first_error = next(
            t.exception() for t in settled if not t.cancelled() and t.exception() is not None
        )
        succeeded = len(files) - len(failed)
        logger.error(
            f"Upload batch failed: {len(failed)} of {len(files)} file(s) failed "
            f"({', '.join(failed)}), {succeeded} uploaded"
        )
        message = getattr(first_error, 'message', None) or str(first_error) or "An upload failed."
        raise UploadBatchError(message, failed=failed, succeeded=succeeded) from first_error
