"""Validate Website — the check pipeline: presence → syntax → fetch → validate.

Invariants:
    - Exactly one VerdictResponse per call; every branch is terminal
    - Presence and syntax checks happen before any IO
    - PageFetchError mapped by its FetchFailure tag (core/verdict.py table)
    - Any exception from validator acquisition or execution → validator verdict
    - asyncio.CancelledError is never converted into a verdict

Design Decisions:
    - Method guard lives in the adapters (api/), not here: it is a
      caller-contract check that must escape before a verdict exists
    - Fetcher and validator factory injected: the pipeline never touches
      httpx or subprocesses directly
"""

import logging
import time

from ampcheck.core.errors import PageFetchError
from ampcheck.core.validator_protocols import PageSource, ValidatorFactory
from ampcheck.core.verdict import (
    fetch_failure_verdict,
    invalid_url_verdict,
    missing_url_verdict,
    validated_verdict,
    validator_failure_verdict,
)
from ampcheck.core.web_uri import is_web_uri
from ampcheck.schemas.verdict import VerdictResponse

logger = logging.getLogger(__name__)


async def validate_website(
    target_url: str | None,
    *,
    fetcher: PageSource,
    validator_factory: ValidatorFactory,
) -> VerdictResponse:
    """Run the full check for target_url and return its verdict."""
    if target_url is None:
        return _logged(missing_url_verdict(), target_url)
    if not is_web_uri(target_url):
        return _logged(invalid_url_verdict(target_url), target_url)

    started = time.monotonic()
    try:
        source = await fetcher.fetch(target_url)
    except PageFetchError as e:
        logger.warning(
            f"Could not fetch target: {e.message}",
            extra={
                "target_url": target_url,
                "fetch_failure": e.reason.value,
                "error_code": e.code,
            },
        )
        return _logged(
            fetch_failure_verdict(target_url, e.reason), target_url, started,
        )

    try:
        validator = await validator_factory()
        result = await validator.validate_string(source)
    except Exception as e:
        logger.warning(
            f"Validator failed for target: {e}",
            extra={"target_url": target_url},
            exc_info=True,
        )
        return _logged(
            validator_failure_verdict(target_url), target_url, started,
        )

    logger.info(
        f"AMP validation finished: {result.status}",
        extra={
            "target_url": target_url,
            "validator_status": result.status,
            "error_count": len(result.errors),
        },
    )
    return _logged(validated_verdict(target_url, result), target_url, started)


def _logged(
    verdict: VerdictResponse, target_url: str | None, started: float | None = None,
) -> VerdictResponse:
    """Emit one record per verdict."""
    duration_ms = (
        round((time.monotonic() - started) * 1000) if started is not None else None
    )
    logger.info(
        f"Verdict {verdict.status_code}",
        extra={
            "target_url": target_url,
            "status_code": verdict.status_code,
            "duration_ms": duration_ms,
        },
    )
    return verdict
