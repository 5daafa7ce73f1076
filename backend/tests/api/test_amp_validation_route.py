"""AMP validation route tests — HTTP mapping of verdicts and the method guard.

Invariants:
    - Verdict statusCode becomes the HTTP status; body sent verbatim as JSON
    - Absent targeturl → missing; empty targeturl → invalid
    - Non-GET (HEAD and OPTIONS included) → 405 UNSUPPORTED_METHOD error
      envelope, collaborators untouched
    - Unexpected exceptions → 500 INTERNAL_ERROR envelope without details
"""

import pytest
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from httpx import ASGITransport, AsyncClient

from ampcheck.api.dependencies import get_page_fetcher
from ampcheck.core.domain_types import FetchFailure
from ampcheck.main import app

from tests.fakes import FAIL_RESULT, FakeFetcher, FakeValidator

ROUTE = "/api/v1/amp/validate"
URL = "https://example.com/amp"


async def test_pass_verdict(client, deps):
    res = await client.get(ROUTE, params={"targeturl": URL})
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/json"
    assert res.json() == {
        "url": URL, "testResult": {"status": "PASS", "errors": []},
    }
    assert deps["fetcher"].calls == [URL]


async def test_fail_verdict_includes_errors(client, deps):
    deps["validator"] = FakeValidator(result=FAIL_RESULT)
    res = await client.get(ROUTE, params={"targeturl": URL})
    assert res.status_code == 200
    errors = res.json()["testResult"]["errors"]
    assert errors[0]["code"] == "MANDATORY_TAG_MISSING"


async def test_missing_targeturl(client):
    res = await client.get(ROUTE)
    assert res.status_code == 400
    assert res.json() == {
        "url": "", "testResult": "No targeturl parameter was found",
    }


async def test_empty_targeturl_is_invalid(client):
    res = await client.get(ROUTE, params={"targeturl": ""})
    assert res.status_code == 400
    assert res.json() == {
        "url": "", "testResult": "Parameter targeturl is not a valid URL",
    }


async def test_malformed_targeturl(client):
    res = await client.get(ROUTE, params={"targeturl": "not a url"})
    assert res.status_code == 400
    assert res.json()["url"] == "not a url"


@pytest.mark.parametrize("failure, expected_status", [
    (FetchFailure.HOST_NOT_FOUND, 410),
    (FetchFailure.TIMEOUT, 504),
    (FetchFailure.OTHER, 502),
])
async def test_fetch_failures(client, deps, failure, expected_status):
    deps["fetcher"] = FakeFetcher(failure=failure)
    res = await client.get(ROUTE, params={"targeturl": URL})
    assert res.status_code == expected_status
    assert res.json()["url"] == URL


async def test_validator_failure(client, deps):
    deps["validator"] = FakeValidator(error=ValueError("bad ruleset"))
    res = await client.get(ROUTE, params={"targeturl": URL})
    assert res.status_code == 400
    assert res.json()["testResult"] == "Something happened with the validator"


@pytest.mark.parametrize("method", ["OPTIONS", "POST", "PUT", "PATCH", "DELETE"])
async def test_non_get_is_rejected_before_any_work(client, deps, method):
    res = await client.request(method, ROUTE, params={"targeturl": URL})
    assert res.status_code == 405
    error = res.json()["error"]
    assert error["code"] == "UNSUPPORTED_METHOD"
    assert error["message"].endswith(method)
    assert "testResult" not in res.json()
    assert deps["fetcher"].calls == []


async def test_head_reaches_method_guard(client, deps):
    res = await client.head(ROUTE, params={"targeturl": URL})
    assert res.status_code == 405
    assert res.headers["content-type"] == "application/json"
    assert deps["fetcher"].calls == []


def test_request_validation_uses_fastapi_default_handler():
    assert app.exception_handlers[RequestValidationError] is (
        request_validation_exception_handler
    )


class _ExplodingFetcher:
    async def fetch(self, url: str) -> str:
        raise RuntimeError("secret connection string")


async def test_unexpected_error_is_internal_error_envelope():
    app.dependency_overrides[get_page_fetcher] = lambda: _ExplodingFetcher()
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            res = await c.get(ROUTE, params={"targeturl": URL})
    finally:
        app.dependency_overrides.clear()

    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert "secret" not in res.text


async def test_health_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_validator(client, monkeypatch):
    monkeypatch.setattr(
        "ampcheck.api.routes.health.resolve_executable", lambda name: None,
    )
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "validator_unavailable"


async def test_readiness_with_validator(client, monkeypatch):
    monkeypatch.setattr(
        "ampcheck.api.routes.health.resolve_executable",
        lambda name: f"/usr/bin/{name}",
    )
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"] == {"validator": "available"}
