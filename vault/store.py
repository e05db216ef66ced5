"""In-memory snapshot of the file records held by the file service."""

from typing import Iterable, Optional

from common.logging_config import get_logger
from vault.exceptions import DuplicateRecordError
from vault.models import FileRecord

logger = get_logger(__name__)


class FileRecordStore:
    """
    Client-owned cache of the server's file records.

    The snapshot is an immutable tuple that is swapped as a whole, so a
    snapshot handed out by get_all() is never changed by later mutations.
    Every effective mutation bumps ``version``.
    """

    def __init__(self, records: Iterable[FileRecord] = ()):
        self._records: tuple[FileRecord, ...] = ()
        self._version = 0
        initial = tuple(records)
        if initial:
            self.replace_all(initial)

    @property
    def version(self) -> int:
        return self._version

    def get_all(self) -> tuple[FileRecord, ...]:
        """Return the current snapshot."""
        return self._records

    def get(self, record_id: int) -> Optional[FileRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def replace_all(self, records: Iterable[FileRecord], expected_version: Optional[int] = None) -> bool:
        """
        Atomically replace the whole snapshot.

        Args:
            records: New records, in display order
            expected_version: Version the caller read before fetching; if the
                store changed since, the replacement is stale and dropped

        Returns:
            True if the snapshot was replaced, False if it was stale

        Raises:
            DuplicateRecordError: If two records share an id (snapshot untouched)
        """
        snapshot = tuple(records)

        seen: set[int] = set()
        for record in snapshot:
            if record.id in seen:
                raise DuplicateRecordError(record.id)
            seen.add(record.id)

        if expected_version is not None and expected_version != self._version:
            logger.info(
                f"Discarding stale snapshot [expected_version={expected_version}, version={self._version}]"
            )
            return False

        self._records = snapshot
        self._version += 1
        logger.debug(f"Replaced snapshot with {len(snapshot)} record(s) [version={self._version}]")
        return True

    def remove_by_id(self, record_id: int) -> None:
        """Remove a record if present. Removing an absent id does nothing."""
        remaining = tuple(r for r in self._records if r.id != record_id)
        if len(remaining) == len(self._records):
            return

        self._records = remaining
        self._version += 1
        logger.debug(f"Removed record {record_id} [version={self._version}]")

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return any(r.id == record_id for r in self._records)
