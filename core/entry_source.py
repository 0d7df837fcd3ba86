"""
Abstract EntrySource interface for leaderboard data access.

An entry source is the only collaborator the leaderboard pipeline talks to.
It hides the transport, store, or protocol behind two calls: a cheap
configuration check and an async fetch of raw score records.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class FetchErrorCategory(Enum):
    """Why a fetch did not produce entries."""
    CONFIGURATION = "configuration"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"


class EntrySourceError(Exception):
    """
    Raised when an entry source cannot deliver records.

    Attributes:
        message: Human-readable error description
        category: FetchErrorCategory the pipeline branches on
    """

    category = FetchErrorCategory.UPSTREAM

    def __init__(self, message: str, category: Optional[FetchErrorCategory] = None):
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category


class ConfigurationUnavailable(EntrySourceError):
    """The data source is not configured."""

    category = FetchErrorCategory.CONFIGURATION


class UpstreamFailure(EntrySourceError):
    """The source is configured but the query itself failed."""

    category = FetchErrorCategory.UPSTREAM


class TransportFailure(EntrySourceError):
    """The source could not be reached at all (network down, refused, timed out)."""

    category = FetchErrorCategory.TRANSPORT


@dataclass(frozen=True)
class SourceStatus:
    """Result of EntrySource.check_configuration()."""

    is_valid: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class FetchResult:
    """
    Result of EntrySource.fetch_entries().

    On success ``data`` holds raw score records (plain dicts); ``warning`` and
    ``message`` carry labels the source attached to the data (e.g. a remote
    service serving its own demo records). On failure ``error`` carries the
    message and ``category`` says what kind of failure it was.
    """

    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    error: Optional[str] = None
    category: Optional[FetchErrorCategory] = None
    warning: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def ok(
        cls,
        data: List[Dict[str, Any]],
        warning: Optional[str] = None,
        message: Optional[str] = None,
    ) -> "FetchResult":
        return cls(success=True, data=list(data), warning=warning, message=message)

    @classmethod
    def failed(
        cls,
        error: str,
        category: FetchErrorCategory = FetchErrorCategory.UPSTREAM,
    ) -> "FetchResult":
        return cls(success=False, error=error, category=category)

    @classmethod
    def from_error(cls, exc: EntrySourceError) -> "FetchResult":
        return cls.failed(exc.message, exc.category)


class EntrySource(ABC):
    """
    Abstract base class for leaderboard data sources.

    Implementations must never raise for an ordinary fetch failure; they
    return ``FetchResult.failed`` with the right category instead. Raising an
    EntrySourceError subclass is tolerated and mapped the same way.

    Example:
        class StaticSource(EntrySource):
            def check_configuration(self):
                return SourceStatus(is_valid=True)

            async def fetch_entries(self, limit=None):
                return FetchResult.ok([{"user_id": "u1", "composite_score": 20}])
    """

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the registry identifier of this source (e.g., "json_file")."""
        pass

    @abstractmethod
    def check_configuration(self) -> SourceStatus:
        """
        Check whether the source is usable before fetching.

        Returns:
            SourceStatus; ``is_valid=False`` sends the pipeline straight to
            fallback data, with ``message`` surfaced as the warning.
        """
        pass

    @abstractmethod
    async def fetch_entries(self, limit: Optional[int] = None) -> FetchResult:
        """
        Fetch stored score records.

        Args:
            limit: Optional maximum number of records to return

        Returns:
            FetchResult with raw record dicts or a categorized failure
        """
        pass
