"""FastAPI boundary: maps raised errors to problem-details responses.

No stack traces or root causes are exposed to clients. Every response body is
an ErrorResponse with a stable error code; 204 and 304 responses carry no body.
"""
from __future__ import annotations

import logging
import re
import threading
from collections import deque
from http import HTTPStatus
from typing import Any, Optional
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .analytics import aggregate_errors
from .domain_errors import DomainError, ErrorKind, build_error, internal_server_error
from .message_resolver import MessageResolver
from .problem_details import build_problem_details_response, render_problem, unexpected_error_response
from .schemas import ExceptionStats
from .severity import classify_level, logging_level

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_ID_HEADER = "X-Request-ID"

_NON_CODE_CHARS = re.compile(r"[^A-Z0-9]+")

# Statuses that must not carry a response body.
BODILESS_STATUSES = frozenset({204, 304})


class ErrorJournal:
    """Bounded buffer of recently handled errors, safe to share between workers."""

    def __init__(self, maxlen: int = 500) -> None:
        self._entries: deque[DomainError] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def record(self, error: DomainError) -> None:
        with self._lock:
            self._entries.append(error)

    def snapshot(self) -> list[DomainError]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self, *, use_occurrence_times: bool = False) -> ExceptionStats:
        return aggregate_errors(self.snapshot(), use_occurrence_times=use_occurrence_times)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def resolve_request_id(request: Request, header_name: str = DEFAULT_REQUEST_ID_HEADER) -> str:
    """Request id from state, then the request header, else a generated one."""
    existing = getattr(request.state, "request_id", None)
    if existing:
        return existing
    request_id = request.headers.get(header_name) or f"req-{uuid4().hex}"
    request.state.request_id = request_id
    return request_id


def _status_error_code(status: int) -> str:
    for kind in ErrorKind:
        if kind.status == status:
            return kind.error_code
    try:
        return _NON_CODE_CHARS.sub("_", HTTPStatus(status).phrase.upper()).strip("_")
    except ValueError:
        return "HTTP_ERROR"


def _status_title(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "HTTP Error"


def error_from_http_exception(exc: StarletteHTTPException) -> DomainError:
    """Wrap a framework HTTPException so it flows through the same translation."""
    title = _status_title(exc.status_code)
    data: Optional[Any] = None
    if isinstance(exc.detail, str):
        detail = exc.detail
    else:
        detail = title
        if isinstance(exc.detail, dict) or (
            isinstance(exc.detail, list) and all(isinstance(item, dict) for item in exc.detail)
        ):
            data = jsonable_encoder(exc.detail)
    error_code = _status_error_code(exc.status_code)
    return DomainError(
        error_code=error_code,
        title=title,
        detail=detail,
        status=exc.status_code,
        data=data,
        message_key=error_code,
    )


def error_from_validation_error(exc: RequestValidationError) -> DomainError:
    violations = [
        {
            "loc": list(item.get("loc", ())),
            "msg": item.get("msg", ""),
            "type": item.get("type", ""),
        }
        for item in exc.errors()
    ]
    return build_error(
        ErrorKind.UNPROCESSABLE_ENTITY,
        "Validation failed",
        "The request could not be processed because of validation errors",
        jsonable_encoder(violations),
    )


def register_error_handlers(
    app: FastAPI,
    *,
    message_resolver: Optional[MessageResolver] = None,
    documentation_url: Optional[str] = None,
    journal: Optional[ErrorJournal] = None,
    request_id_header: str = DEFAULT_REQUEST_ID_HEADER,
    log_root_cause: bool = True,
) -> None:
    """Register problem-details handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
        message_resolver: Optional lookup for localized titles/details. It is
            read-only once registered.
        documentation_url: Problem ``type`` URI; ``about:blank`` when unset.
        journal: Optional sink that receives every handled error.
        request_id_header: Header carrying the caller's request id.
        log_root_cause: Whether root causes are written to the log.
    """

    def _report(request: Request, request_id: str, error: DomainError) -> None:
        if journal is not None:
            journal.record(error)
        info = error.describe()
        level = logging_level(classify_level(error.status))
        message = "domain_error code=%s status=%s method=%s path=%s request_id=%s title=%r"
        args: tuple[Any, ...] = (
            info["errorCode"],
            info["status"],
            request.method,
            request.url.path,
            request_id,
            info["title"],
        )
        if log_root_cause and error.root_cause is not None:
            message += " root_cause=%r"
            args += (error.root_cause,)
        logger.log(level, message, *args)

    def _respond(request: Request, error: DomainError, headers: Optional[dict[str, str]] = None) -> JSONResponse:
        request_id = resolve_request_id(request, request_id_header)
        _report(request, request_id, error)
        response = build_problem_details_response(error, request_id, message_resolver, documentation_url)
        if headers:
            response.headers.update(headers)
        return response

    async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
        return _respond(request, exc)

    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
        headers = getattr(exc, "headers", None)
        error = error_from_http_exception(exc)
        if exc.status_code in BODILESS_STATUSES:
            _report(request, resolve_request_id(request, request_id_header), error)
            return Response(status_code=exc.status_code, headers=headers)
        return _respond(request, error, headers)

    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _respond(request, error_from_validation_error(exc))

    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        request_id = resolve_request_id(request, request_id_header)
        logger.exception(
            "unexpected_error type=%s method=%s path=%s request_id=%s",
            type(exc).__name__,
            request.method,
            request.url.path,
            request_id,
        )
        if journal is not None:
            journal.record(
                internal_server_error(
                    "Unexpected error",
                    "An unexpected error occurred",
                    root_cause=exc,
                )
            )
        body = unexpected_error_response(request_id, message_resolver, documentation_url)
        return render_problem(body)

    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected)
