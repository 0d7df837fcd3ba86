"""
JSON file entry store.

Reads score records from a ``.json`` or ``.json.gz`` file. The file holds
either a bare list of records or an object with an ``entries`` list:

    {
        "schema_version": "1.0.0",
        "entries": [
            {"user_id": "...", "composite_score": 31.5, "created_at": "..."}
        ]
    }
"""

import asyncio
import gzip
import json
import logging
import zlib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from core.entry_source import EntrySource, FetchResult, SourceStatus, UpstreamFailure

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0.0"


def _read_json(path: Path) -> Any:
    if path.name.endswith(".gz"):
        with gzip.open(path, "rt", encoding="utf-8") as f:
            return json.load(f)
    return json.loads(path.read_text(encoding="utf-8"))


def _extract_records(data: Any, path: Path) -> List[Dict[str, Any]]:
    if isinstance(data, dict):
        data = data.get("entries")
    if not isinstance(data, list):
        raise UpstreamFailure(f"Malformed entry store {path}: expected a list of entries")
    if not all(isinstance(r, dict) for r in data):
        raise UpstreamFailure(f"Malformed entry store {path}: entries must be objects")
    return data


class JsonFileEntrySource(EntrySource):
    """
    File-backed entry source.

    Example:
        source = JsonFileEntrySource("./data/leaderboard.json")
        result = await source.fetch_entries()
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None

    @classmethod
    def from_config(cls, config) -> "JsonFileEntrySource":
        return cls(path=config.path)

    @property
    def source_type(self) -> str:
        return "json_file"

    def check_configuration(self) -> SourceStatus:
        if self.path is None:
            return SourceStatus(
                is_valid=False,
                message="Leaderboard store not configured: set ECOBOARD_SOURCE_PATH or source.path",
            )
        if not self.path.exists():
            return SourceStatus(
                is_valid=False,
                message=f"Leaderboard store not found: {self.path}",
            )
        return SourceStatus(is_valid=True)

    def load(self) -> List[Dict[str, Any]]:
        """
        Read all records from disk.

        Raises:
            UpstreamFailure: If the file cannot be read or is malformed
        """
        if self.path is None:
            raise UpstreamFailure("No entry store path configured")
        try:
            data = _read_json(self.path)
        except (OSError, EOFError, zlib.error, ValueError) as e:
            raise UpstreamFailure(f"Failed to read entry store {self.path}: {e}") from e
        return _extract_records(data, self.path)

    async def fetch_entries(self, limit: Optional[int] = None) -> FetchResult:
        try:
            records = await asyncio.to_thread(self.load)
        except UpstreamFailure as e:
            logger.error("Entry store fetch failed: %s", e)
            return FetchResult.from_error(e)

        if limit is not None:
            records = records[:limit]
        return FetchResult.ok(records)

    def save(self, records: List[Dict[str, Any]]) -> None:
        """
        Write records to the store, replacing its contents.

        Paths ending in .gz are written gzip-compressed.
        """
        if self.path is None:
            raise UpstreamFailure("No entry store path configured")
        self.path.parent.mkdir(parents=True, exist_ok=True)

        content = json.dumps(
            {"schema_version": SCHEMA_VERSION, "entries": records},
            indent=2,
            default=str,
        )

        if self.path.name.endswith(".gz"):
            with gzip.open(self.path, "wt", encoding="utf-8") as f:
                f.write(content)
        else:
            self.path.write_text(content, encoding="utf-8")
