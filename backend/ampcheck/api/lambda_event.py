"""Lambda Event Adapter — AWS Lambda function-URL / API Gateway trigger.

Invariants:
    - Method read from requestContext.http.method (v2), falling back to httpMethod (v1)
    - Non-GET raises UnsupportedMethodError before any IO; the platform reports
      it as a function error
    - queryStringParameters may be null: treated as "no targeturl"
    - Returns {"statusCode": int, "body": str} for every other outcome
"""

import asyncio
import logging
from typing import Any

from ampcheck.api.dependencies import get_page_fetcher, get_validator_factory
from ampcheck.config import get_settings
from ampcheck.core.validator_protocols import PageSource, ValidatorFactory
from ampcheck.core.verdict import ensure_get_method
from ampcheck.infrastructure.observability import setup_logging
from ampcheck.services.validate_website import validate_website

logger = logging.getLogger(__name__)

_logging_ready = False


def _ensure_logging() -> None:
    global _logging_ready
    if not _logging_ready:
        settings = get_settings()
        setup_logging(settings.log_level, settings.log_format)
        _logging_ready = True


def extract_method(event: dict[str, Any]) -> str | None:
    http = (event.get("requestContext") or {}).get("http") or {}
    return http.get("method") or event.get("httpMethod")


def extract_target_url(event: dict[str, Any]) -> str | None:
    params = event.get("queryStringParameters") or {}
    return params.get("targeturl")


def lambda_handler(
    event: dict[str, Any],
    context: Any = None,
    *,
    fetcher: PageSource | None = None,
    validator_factory: ValidatorFactory | None = None,
) -> dict:
    """Entry point configured as the Lambda handler."""
    _ensure_logging()
    target_url = extract_target_url(event)
    ensure_get_method(extract_method(event), target_url)

    verdict = asyncio.run(validate_website(
        target_url,
        fetcher=fetcher or get_page_fetcher(),
        validator_factory=validator_factory or get_validator_factory(),
    ))
    return verdict.to_event_response()
