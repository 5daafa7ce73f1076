"""Route Dependencies — build the fetcher and validator factory from settings.

Overridden via app.dependency_overrides in tests.
"""

from ampcheck.config import get_settings
from ampcheck.core.validator_protocols import PageSource, ValidatorFactory
from ampcheck.infrastructure.amp_validator import make_validator_factory
from ampcheck.infrastructure.page_fetcher import PageFetcher


def get_page_fetcher() -> PageSource:
    settings = get_settings()
    return PageFetcher(
        timeout_seconds=settings.fetch_timeout_seconds,
        retries=settings.fetch_retries,
        user_agent=settings.fetch_user_agent,
    )


def get_validator_factory() -> ValidatorFactory:
    return make_validator_factory(get_settings())
