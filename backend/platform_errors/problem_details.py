"""RFC 7807 Problem Details helpers."""
from __future__ import annotations

from typing import Optional

from fastapi.responses import JSONResponse

from .domain_errors import DomainError, ErrorKind
from .message_resolver import MessageField, MessageResolver
from .schemas import ErrorResponse

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"
DEFAULT_PROBLEM_TYPE = "about:blank"

_UNEXPECTED_TITLE = "Internal Server Error"
_UNEXPECTED_DETAIL = "An unexpected error occurred"


def _resolve(
    resolver: Optional[MessageResolver],
    key: str,
    field: MessageField,
    fallback: str,
) -> str:
    if resolver is None:
        return fallback
    return resolver.get_message(key, field) or fallback


def to_error_response(
    error: DomainError,
    request_id: str,
    message_resolver: Optional[MessageResolver] = None,
    documentation_url: Optional[str] = None,
) -> ErrorResponse:
    """Translate a DomainError into a problem-details body.

    Resolved text wins over the error's own title/detail when the resolver
    returns a non-empty string. The root cause is never copied.
    """
    key = error.lookup_key
    return ErrorResponse(
        type=documentation_url or DEFAULT_PROBLEM_TYPE,
        title=_resolve(message_resolver, key, "title", error.title),
        detail=_resolve(message_resolver, key, "detail", error.detail),
        status=error.status,
        instance=request_id,
        error_code=error.error_code,
        data=error.data,
    )


def unexpected_error_response(
    request_id: str,
    message_resolver: Optional[MessageResolver] = None,
    documentation_url: Optional[str] = None,
) -> ErrorResponse:
    """Generic 500 body for failures raised outside the DomainError contract."""
    kind = ErrorKind.INTERNAL_ERROR
    return ErrorResponse(
        type=documentation_url or DEFAULT_PROBLEM_TYPE,
        title=_resolve(message_resolver, kind.message_key, "title", _UNEXPECTED_TITLE),
        detail=_resolve(message_resolver, kind.message_key, "detail", _UNEXPECTED_DETAIL),
        status=kind.status,
        instance=request_id,
        error_code=kind.error_code,
    )


def render_problem(body: ErrorResponse, headers: Optional[dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(
        status_code=body.status,
        content=body.to_payload(),
        headers=headers or None,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


def build_problem_details_response(
    error: DomainError,
    request_id: str,
    message_resolver: Optional[MessageResolver] = None,
    documentation_url: Optional[str] = None,
) -> JSONResponse:
    """Render DomainError as RFC 7807 payload with stable error code."""
    body = to_error_response(error, request_id, message_resolver, documentation_url)
    return render_problem(body, error.preset_headers())
