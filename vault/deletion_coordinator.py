"""Confirmed deletion of a single file record."""

import inspect
from typing import Awaitable, Callable, Optional, Union

from common.logging_config import get_logger
from vault.exceptions import DeleteError, VaultError
from vault.file_service import FileServiceClient
from vault.models import FileRecord
from vault.store import FileRecordStore

logger = get_logger(__name__)

ConfirmCallback = Callable[[int, Optional[FileRecord]], Union[bool, Awaitable[bool]]]


class DeletionCoordinator:
    """
    Deletes one record after user confirmation.

    The record is removed from the store only once the file service has
    acknowledged the deletion, so the list never drops a record the server
    still holds.
    """

    def __init__(self, service: FileServiceClient, store: FileRecordStore, confirm: ConfirmCallback):
        self.service = service
        self.store = store
        self.confirm = confirm

    async def delete(self, record_id: int) -> bool:
        """
        Delete a record.

        Args:
            record_id: Id of the record to delete

        Returns:
            True if deleted, False if the user declined

        Raises:
            DeleteError: If the file service did not confirm the deletion
        """
        record = self.store.get(record_id)
        answer = self.confirm(record_id, record)
        if inspect.isawaitable(answer):
            answer = await answer

        if not answer:
            logger.info(f"Deletion of record {record_id} declined")
            return False

        try:
            await self.service.delete_file(record_id)
        except VaultError as e:
            logger.error(f"Failed to delete record {record_id}: {e}")
            raise DeleteError(record_id, str(e)) from e

        self.store.remove_by_id(record_id)
        return True
