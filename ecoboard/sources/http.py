"""
Remote entry source.

Fetches records from another leaderboard service over HTTP. Network-level
failures are reported as TRANSPORT so the pipeline can switch to offline
mode; anything the remote service answers with (error status, failed
payload, malformed JSON) is an UPSTREAM failure.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from core.entry_source import (
    EntrySource,
    FetchResult,
    SourceStatus,
    TransportFailure,
    UpstreamFailure,
)

logger = logging.getLogger(__name__)


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _records_from_payload(payload: Any) -> List[Dict[str, Any]]:
    """Accept a bare list or a ``{"success": ..., "leaderboard"|"data": [...]}`` body."""
    if isinstance(payload, dict):
        if payload.get("success") is False:
            raise UpstreamFailure(str(payload.get("error") or "Remote leaderboard reported failure"))
        records = payload.get("leaderboard", payload.get("data"))
    else:
        records = payload

    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise UpstreamFailure("Malformed leaderboard response: expected a list of entries")
    return records


class HttpEntrySource(EntrySource):
    """
    Entry source backed by a remote JSON endpoint.

    Example:
        source = HttpEntrySource("http://localhost:8000/api/leaderboard")
        result = await source.fetch_entries(limit=50)
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            url: Endpoint returning leaderboard records
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.url = url
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config) -> "HttpEntrySource":
        return cls(url=config.url, timeout=config.timeout)

    @property
    def source_type(self) -> str:
        return "http"

    def check_configuration(self) -> SourceStatus:
        if not self.url:
            return SourceStatus(
                is_valid=False,
                message="Remote leaderboard URL not configured: set ECOBOARD_SOURCE_URL or source.url",
            )
        if not self.url.startswith(("http://", "https://")):
            return SourceStatus(
                is_valid=False,
                message=f"Remote leaderboard URL must be http(s): {self.url}",
            )
        return SourceStatus(is_valid=True)
    async def _get(self, limit: Optional[int]) -> FetchResult:
        params = {"limit": limit} if limit is not None else None
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.get(self.url, params=params)
            except httpx.TransportError as e:
                raise TransportFailure(f"{type(e).__name__}: {e}") from e
            except httpx.RequestError as e:
                raise UpstreamFailure(f"Remote leaderboard request failed: {type(e).__name__}: {e}") from e

        if response.status_code >= 400:
            detail = response.text[:200]
            raise UpstreamFailure(f"Remote leaderboard returned HTTP {response.status_code}: {detail}")

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamFailure(f"Malformed leaderboard response: {e}") from e

        records = _records_from_payload(payload)
        if isinstance(payload, dict):
            return FetchResult.ok(
                records,
                warning=_optional_text(payload.get("warning")),
                message=_optional_text(payload.get("message")),
            )
        return FetchResult.ok(records)

    async def fetch_entries(self, limit: Optional[int] = None) -> FetchResult:
        try:
            result = await self._get(limit)
        except TransportFailure as e:
            logger.warning("Remote leaderboard unreachable: %s", e)
            return FetchResult.from_error(e)
        except UpstreamFailure as e:
            logger.error("Remote leaderboard fetch failed: %s", e)
            return FetchResult.from_error(e)

        if result.warning:
            logger.warning("Remote leaderboard labeled its data: %s", result.warning)
        return result
