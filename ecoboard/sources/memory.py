"""In-memory entry source, mainly for tests and demos."""

import copy
from typing import Any, Dict, List, Optional

from core.entry_source import EntrySource, FetchResult, SourceStatus


class InMemoryEntrySource(EntrySource):
    """
    Serves a fixed list of records.

    ``records=None`` models an unconfigured store; an empty list is a
    configured store with no entries yet.
    """

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None):
        self._records = None if records is None else [dict(r) for r in records]

    @classmethod
    def from_config(cls, config) -> "InMemoryEntrySource":
        return cls(records=config.records)

    @property
    def source_type(self) -> str:
        return "memory"

    def check_configuration(self) -> SourceStatus:
        if self._records is None:
            return SourceStatus(
                is_valid=False,
                message="In-memory source has no records configured",
            )
        return SourceStatus(is_valid=True)

    async def fetch_entries(self, limit: Optional[int] = None) -> FetchResult:
        records = copy.deepcopy(self._records or [])
        if limit is not None:
            records = records[:limit]
        return FetchResult.ok(records)

    def add(self, record: Dict[str, Any]) -> None:
        if self._records is None:
            self._records = []
        self._records.append(dict(record))
