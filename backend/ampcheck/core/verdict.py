"""Verdict Builders — pure constructors for every terminal branch of a check.

Invariants:
    - Every FetchFailure member has exactly one (status, message) entry
    - Bodies are serialized once, here, with the public field aliases
    - Validator error fields pass through as given, explicit nulls included
    - ensure_get_method raises; it never builds a verdict
"""

from ampcheck.core.domain_types import FetchFailure, TestResultMessage
from ampcheck.core.errors import ErrorContext, UnsupportedMethodError
from ampcheck.schemas.verdict import AmpTestResult, VerdictBody, VerdictResponse


FETCH_FAILURE_RESPONSES: dict[FetchFailure, tuple[int, TestResultMessage]] = {
    FetchFailure.HOST_NOT_FOUND: (410, TestResultMessage.UNREACHABLE),
    FetchFailure.TIMEOUT: (504, TestResultMessage.TIMED_OUT),
    FetchFailure.OTHER: (502, TestResultMessage.FETCH_FAILED),
}


def ensure_get_method(method: str | None, target_url: str | None = None) -> None:
    """Raise UnsupportedMethodError unless the trigger method is GET."""
    if method != "GET":
        raise UnsupportedMethodError(
            str(method), ErrorContext(target_url=target_url),
        )


def build_verdict(
    status_code: int, url: str, test_result: str | AmpTestResult,
) -> VerdictResponse:
    body = VerdictBody(url=url, test_result=test_result)
    return VerdictResponse(
        status_code=status_code,
        body=body.model_dump_json(by_alias=True, exclude_unset=True),
    )


def missing_url_verdict() -> VerdictResponse:
    return build_verdict(400, "", TestResultMessage.MISSING_URL.value)


def invalid_url_verdict(url: str) -> VerdictResponse:
    return build_verdict(400, url, TestResultMessage.INVALID_URL.value)


def fetch_failure_verdict(url: str, reason: FetchFailure) -> VerdictResponse:
    status_code, message = FETCH_FAILURE_RESPONSES[reason]
    return build_verdict(status_code, url, message.value)


def validator_failure_verdict(url: str) -> VerdictResponse:
    return build_verdict(400, url, TestResultMessage.VALIDATOR_FAILED.value)


def validated_verdict(url: str, result: AmpTestResult) -> VerdictResponse:
    # status and errors always present, even if the validator omitted errors
    return build_verdict(
        200, url, AmpTestResult(status=result.status, errors=result.errors),
    )
