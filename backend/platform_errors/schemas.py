"""Pydantic schemas for problem-details payloads and error statistics."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """RFC 7807 problem-details body."""

    type: str = "about:blank"
    title: str
    detail: str
    status: int
    instance: str
    error_code: Optional[str] = Field(default=None, alias="errorCode")
    # Passed through as supplied; only the JSON dump coerces keys and sequences.
    data: Any = None
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict; optional members are omitted when absent."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ErrorDescription(BaseModel):
    error_code: str = Field(alias="errorCode")
    status: int
    title: str
    detail: str
    has_data: bool = Field(alias="hasData")
    has_root_cause: bool = Field(alias="hasRootCause")
    model_config = ConfigDict(populate_by_name=True)


class TimeRange(BaseModel):
    start: str = ""
    end: str = ""


class ExceptionStats(BaseModel):
    """Counts over a batch of errors, grouped by severity, code and status."""

    total: int = 0
    by_level: dict[str, int] = Field(default_factory=dict, alias="byLevel")
    by_error_code: dict[str, int] = Field(default_factory=dict, alias="byErrorCode")
    by_status: dict[int, int] = Field(default_factory=dict, alias="byStatus")
    time_range: TimeRange = Field(default_factory=TimeRange, alias="timeRange")
    model_config = ConfigDict(populate_by_name=True)
