"""Domain Types — enums that replace bare strings across the codebase.

Invariants:
    - Every fetch failure is one of exactly three FetchFailure members
    - Every user-facing testResult string lives in TestResultMessage
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum


class FetchFailure(str, Enum):
    """Classified outcome of a failed page fetch."""
    HOST_NOT_FOUND = "host_not_found"
    TIMEOUT = "timeout"
    OTHER = "other"


class TestResultMessage(str, Enum):
    """Literal testResult strings for every non-success verdict."""
    __test__ = False  # not a pytest test class

    MISSING_URL = "No targeturl parameter was found"
    INVALID_URL = "Parameter targeturl is not a valid URL"
    UNREACHABLE = "Could not reach targeturl"
    TIMED_OUT = "Website timed out"
    FETCH_FAILED = "Could not fetch targeturl"
    VALIDATOR_FAILED = "Something happened with the validator"
