"""Page Fetcher — bounded, non-retrying HTTP GET with failure classification.

Invariants:
    - Total time per fetch bounded by timeout_seconds (httpx phase timeouts
      plus an outer asyncio deadline)
    - Zero automatic retries unless configured otherwise
    - Every failure raised as PageFetchError tagged with a FetchFailure
    - Non-2xx upstream responses are failures (FetchFailure.OTHER)
    - asyncio.CancelledError passes through untouched

Design Decisions:
    - Fresh AsyncClient per fetch: invocations share no connection state
    - Name-resolution failure detected by socket.gaierror in the exception
      chain; httpx/httpcore re-raise with `from`, so the cause survives
"""

import asyncio
import logging
import socket

import httpx

from ampcheck.core.domain_types import FetchFailure
from ampcheck.core.errors import ErrorContext, PageFetchError

logger = logging.getLogger(__name__)


def _is_name_resolution_failure(exc: BaseException) -> bool:
    """Walk __cause__/__context__ looking for a DNS lookup error."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, socket.gaierror):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def classify_fetch_error(exc: Exception) -> FetchFailure:
    """Map an httpx / asyncio failure onto the FetchFailure tag."""
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return FetchFailure.TIMEOUT
    if _is_name_resolution_failure(exc):
        return FetchFailure.HOST_NOT_FOUND
    return FetchFailure.OTHER


class PageFetcher:
    """Fetches page source over HTTP(S) with a hard deadline."""

    def __init__(
        self,
        timeout_seconds: float = 11.0,
        retries: int = 0,
        user_agent: str = "amp-checker/1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout_seconds = timeout_seconds
        self.retries = retries
        self.user_agent = user_agent
        self._transport = transport

    async def fetch(self, url: str) -> str:
        """GET url and return the decoded body, or raise PageFetchError."""
        context = ErrorContext(target_url=url)
        try:
            return await asyncio.wait_for(
                self._get(url), timeout=self.timeout_seconds,
            )
        except httpx.HTTPStatusError as e:
            raise PageFetchError(
                f"upstream returned HTTP {e.response.status_code}",
                FetchFailure.OTHER,
                context,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError) as e:
            reason = classify_fetch_error(e)
            logger.debug(
                f"Fetch of {url} failed: {type(e).__name__}: {e}",
                extra={"target_url": url, "fetch_failure": reason.value},
            )
            raise PageFetchError(
                str(e) or type(e).__name__, reason, context,
            ) from e

    async def _get(self, url: str) -> str:
        transport = self._transport or httpx.AsyncHTTPTransport(
            retries=self.retries,
        )
        async with httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(self.timeout_seconds),
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text
