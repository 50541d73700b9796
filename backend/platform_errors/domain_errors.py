"""Domain-level exception primitives with stable machine-readable codes."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

ErrorData = Union[Mapping[Any, Any], Sequence[Mapping[Any, Any]]]

# Fields pinned for the lifetime of an error once __init__ has assigned them.
_PINNED_FIELDS = frozenset({"error_code", "status", "message_key", "occurred_at"})


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class DomainError(Exception):
    """Failure with a stable error code and HTTP status mapping.

    ``root_cause`` is kept for internal diagnostics only and is never copied
    into a client-facing payload.
    """

    error_code: str
    title: str
    detail: str
    status: int
    data: Optional[ErrorData] = None
    message_key: Optional[str] = None
    root_cause: Any = None
    occurred_at: datetime = field(default_factory=now_utc)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _PINNED_FIELDS and name in self.__dict__:
            raise AttributeError(f"{name} cannot be changed after the error is constructed")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in _PINNED_FIELDS:
            raise AttributeError(f"{name} cannot be removed from a constructed error")
        super().__delattr__(name)

    def __str__(self) -> str:
        return self.detail

    @property
    def lookup_key(self) -> str:
        """Key used for message resolution; falls back to the error code."""
        return self.message_key or self.error_code

    @property
    def kind(self) -> Optional["ErrorKind"]:
        for kind in ErrorKind:
            if kind.error_code == self.error_code and kind.status == self.status:
                return kind
        return None

    def describe(self) -> dict[str, Any]:
        """Summary for logging. Reports only the presence of the root cause.

        Presence means "not None": empty containers, ``""`` and ``0`` were
        supplied by the caller and count as present.
        """
        return {
            "errorCode": self.error_code,
            "status": self.status,
            "title": self.title,
            "detail": self.detail,
            "hasData": self.data is not None,
            "hasRootCause": self.root_cause is not None,
        }

    def preset_headers(self) -> dict[str, str]:
        if self.status == ErrorKind.SERVICE_UNAVAILABLE.status and isinstance(self.data, dict):
            retry_after = self.data.get("retryAfter")
            if retry_after is not None:
                return {"Retry-After": str(retry_after)}
        return {}


class ErrorKind(Enum):
    """Closed set of failure kinds, each pinning its code and HTTP status."""

    BAD_REQUEST = ("BAD_REQUEST", 400)
    UNAUTHORIZED = ("UNAUTHORIZED", 401)
    FORBIDDEN = ("FORBIDDEN", 403)
    NOT_FOUND = ("NOT_FOUND", 404)
    CONFLICT = ("CONFLICT", 409)
    UNPROCESSABLE_ENTITY = ("UNPROCESSABLE_ENTITY", 422)
    INTERNAL_ERROR = ("INTERNAL_ERROR", 500)
    SERVICE_UNAVAILABLE = ("SERVICE_UNAVAILABLE", 503)

    def __init__(self, error_code: str, status: int) -> None:
        self.error_code = error_code
        self.status = status

    @property
    def message_key(self) -> str:
        return self.error_code

    def build(
        self,
        title: str,
        detail: str,
        data: Optional[ErrorData] = None,
        root_cause: Any = None,
    ) -> DomainError:
        return build_error(self, title, detail, data, root_cause)


def build_error(
    kind: ErrorKind,
    title: str,
    detail: str,
    data: Optional[ErrorData] = None,
    root_cause: Any = None,
) -> DomainError:
    """Create an error whose code, status and message key come from ``kind``."""
    return DomainError(
        error_code=kind.error_code,
        title=title,
        detail=detail,
        status=kind.status,
        data=data,
        message_key=kind.message_key,
        root_cause=root_cause,
    )


def bad_request(
    title: str,
    detail: str,
    data: Optional[ErrorData] = None,
    root_cause: Any = None,
) -> DomainError:
    return build_error(ErrorKind.BAD_REQUEST, title, detail, data, root_cause)


def not_found(
    title: str,
    detail: str,
    data: Optional[ErrorData] = None,
    root_cause: Any = None,
) -> DomainError:
    return build_error(ErrorKind.NOT_FOUND, title, detail, data, root_cause)


def internal_server_error(
    title: str,
    detail: str,
    data: Optional[ErrorData] = None,
    root_cause: Any = None,
) -> DomainError:
    return build_error(ErrorKind.INTERNAL_ERROR, title, detail, data, root_cause)
