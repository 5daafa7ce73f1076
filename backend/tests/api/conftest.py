"""API test fixtures — FastAPI client with collaborator dependencies overridden.

Invariants:
    - get_page_fetcher / get_validator_factory replaced per test; cleared after
    - Tests configure the fakes through the returned `deps` dict
"""

import pytest
from httpx import ASGITransport, AsyncClient

from ampcheck.api.dependencies import get_page_fetcher, get_validator_factory
from ampcheck.main import app

from tests.fakes import FakeFetcher, FakeValidator, factory_for


@pytest.fixture
def deps():
    return {"fetcher": FakeFetcher(), "validator": FakeValidator()}


@pytest.fixture
async def client(deps):
    """FastAPI test client with fetch/validate dependencies overridden."""
    app.dependency_overrides[get_page_fetcher] = lambda: deps["fetcher"]
    app.dependency_overrides[get_validator_factory] = (
        lambda: factory_for(deps["validator"])
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
