"""AMP Validation Route — HTTP trigger for the website check.

Invariants:
    - Non-GET methods reach ensure_get_method and raise UnsupportedMethodError
      (rendered as a 405 error envelope, never as a verdict body)
    - The verdict's statusCode becomes the HTTP status; its body is sent verbatim
    - targeturl absent → None (missing); present but empty → "" (invalid)
"""

from fastapi import APIRouter, Depends, Request, Response

from ampcheck.api.dependencies import get_page_fetcher, get_validator_factory
from ampcheck.core.validator_protocols import PageSource, ValidatorFactory
from ampcheck.core.verdict import ensure_get_method
from ampcheck.services.validate_website import validate_website

router = APIRouter(prefix="/api/v1/amp", tags=["amp-validation"])

# Registered for every method so misuse surfaces through the method guard.
_ACCEPTED_METHODS = ["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"]


@router.api_route("/validate", methods=_ACCEPTED_METHODS)
async def validate_amp_website(
    request: Request,
    targeturl: str | None = None,
    fetcher: PageSource = Depends(get_page_fetcher),
    validator_factory: ValidatorFactory = Depends(get_validator_factory),
):
    """Fetch targeturl and return its AMP validation verdict."""
    ensure_get_method(request.method, targeturl)
    verdict = await validate_website(
        targeturl, fetcher=fetcher, validator_factory=validator_factory,
    )
    return Response(
        content=verdict.body,
        status_code=verdict.status_code,
        media_type="application/json",
    )
