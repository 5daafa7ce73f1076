"""Boundary Protocols — contracts between the check pipeline and its collaborators.

Invariants:
    - The service depends only on these Protocols, never on httpx or subprocesses
    - Implementations provided by the shell via dependency injection
    - Failures surface as PageFetchError / ValidatorError (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no base class
    - ValidatorFactory is an async callable: acquiring a validator may itself
      do IO (resolve the executable, load the ruleset)
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from ampcheck.schemas.verdict import AmpTestResult


class PageSource(Protocol):
    """Contract for fetching the raw HTML of a page."""
    async def fetch(self, url: str) -> str: ...


class AmpValidator(Protocol):
    """Contract for running the AMP ruleset against HTML text."""
    async def validate_string(self, html: str) -> AmpTestResult: ...


ValidatorFactory = Callable[[], Awaitable[AmpValidator]]
