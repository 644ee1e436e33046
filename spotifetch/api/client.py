"""
Async client for the third-party service that turns a Spotify track link into a
download link.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp
from pydantic import ValidationError

from spotifetch.exceptions import (
    MalformedResponseError,
    NotResolvableError,
    ServiceError,
    TrackLookupError,
)
from spotifetch.models.config import DEFAULT_API_BASE_URL
from spotifetch.models.track import LookupResult

from .messages import NOT_RESOLVABLE_MESSAGE, describe_error

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupOutcome:
    """Either a resolved track or the error that prevented it, never both."""

    result: Optional[LookupResult] = None
    error: Optional[TrackLookupError] = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    @property
    def message(self) -> Optional[str]:
        """The user-facing error message, if the lookup failed."""
        return describe_error(self.error) if self.error else None


class LookupClient:
    """
    Async client for the lookup service.

    Every call yields a `LookupOutcome`; failures are classified into typed
    errors and returned, not raised. Nothing is retried.
    """

    def __init__(self, base_url: str = DEFAULT_API_BASE_URL, timeout: float = 30.0):
        """
        Initializes the lookup client.

        Args:
            base_url: Endpoint that accepts the track link in its `url` query parameter.
            timeout: Total time allowed for one request, in seconds.
        """
        self.base_url = base_url
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
                    "Accept": "application/json",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "LookupClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def resolve(self, canonical_url: str) -> LookupOutcome:
        """Looks up a canonical track link and classifies the answer."""
        try:
            result = await self._fetch(canonical_url)
        except TrackLookupError as e:
            log.debug(f"Lookup for {canonical_url} failed: {type(e).__name__}: {e}")
            return LookupOutcome(error=e)
        return LookupOutcome(result=result)

    async def _fetch(self, canonical_url: str) -> LookupResult:
        await self._initialize_session()
        start_time = time.monotonic()

        try:
            async with self._session.get(
                self.base_url, params={"url": canonical_url}
            ) as r:
                duration_ms = (time.monotonic() - start_time) * 1000
                log.debug(
                    f"Lookup service answered {r.status} in {duration_ms:.0f} ms"
                )

                try:
                    payload = await r.json(content_type=None)
                except ValueError as e:
                    log.debug(f"Lookup service returned non-JSON (status {r.status}).")
                    raise MalformedResponseError(r.status) from e

                return self._classify(r.status, payload)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ServiceError(
                f"Could not reach the lookup service: {str(e) or type(e).__name__}"
            ) from e

    @staticmethod
    def _classify(status: int, payload: Any) -> LookupResult:
        """Applies the response rules to an already-decoded body."""
        if not isinstance(payload, dict):
            raise MalformedResponseError(status)

        message = payload.get("message")
        if not isinstance(message, str) or not message:
            message = None

        if status >= 400:
            raise ServiceError(
                message or f"Failed to fetch song data. API Status: {status}",
                status_code=status,
            )

        if (
            payload.get("success") is True
            and payload.get("title")
            and payload.get("DownloadLink")
        ):
            try:
                return LookupResult.from_api_payload(payload)
            except ValidationError as e:
                log.debug(f"Lookup payload did not match the expected shape: {e}")

        raise NotResolvableError(message or NOT_RESOLVABLE_MESSAGE, status_code=status)
