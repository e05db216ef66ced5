"""Search view over the file record store."""

from typing import Iterable, Optional

from vault.models import FileRecord
from vault.store import FileRecordStore


def filter_records(records: Iterable[FileRecord], query: str) -> tuple[FileRecord, ...]:
    """
    Select records whose filename contains the query, ignoring case.

    An empty query matches every record. Input order is preserved.
    """
    records = tuple(records)
    if not query:
        return records

    needle = query.lower()
    return tuple(r for r in records if needle in r.filename.lower())


class SearchFilter:
    """
    Memoized filter bound to a store.

    The result is recomputed only when the store version or the query
    changed since the last call; otherwise the previous tuple object is
    returned as is.
    """

    def __init__(self, store: FileRecordStore):
        self.store = store
        self.recompute_count = 0
        self._key: Optional[tuple[int, str]] = None
        self._result: tuple[FileRecord, ...] = ()

    def apply(self, query: str) -> tuple[FileRecord, ...]:
        key = (self.store.version, query)
        if key != self._key:
            self._result = filter_records(self.store.get_all(), query)
            self._key = key
            self.recompute_count += 1
        return self._result
