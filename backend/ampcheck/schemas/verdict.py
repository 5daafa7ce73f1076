"""Verdict Schemas — validator result and the {statusCode, body} envelope.

Invariants:
    - AmpError keeps every field the validator emits (extra="allow")
    - VerdictResponse.body is always a compact JSON string of VerdictBody
    - testResult is either a plain message or an AmpTestResult, never both
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AmpError(BaseModel):
    """One validation error record as reported by the AMP validator."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    severity: str | None = None
    line: int | None = None
    col: int | None = None
    message: str | None = None
    spec_url: str | None = Field(default=None, alias="specUrl")
    code: str | None = None
    params: list[Any] = Field(default_factory=list)


class AmpTestResult(BaseModel):
    """Validator verdict for one document."""
    status: str
    errors: list[AmpError] = Field(default_factory=list)


class VerdictBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    test_result: str | AmpTestResult = Field(alias="testResult")


class VerdictResponse(BaseModel):
    """Response envelope returned by every non-fatal invocation."""

    model_config = ConfigDict(populate_by_name=True)

    status_code: int = Field(alias="statusCode")
    body: str

    def to_event_response(self) -> dict:
        """Lambda-style {"statusCode", "body"} mapping."""
        return self.model_dump(by_alias=True)
