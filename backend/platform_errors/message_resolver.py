"""Message lookup used to localize problem-details titles and details."""
from __future__ import annotations

import re
from typing import Any, Literal, Mapping, Optional, Protocol, runtime_checkable

MessageField = Literal["title", "detail"]

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

DEFAULT_MESSAGES: dict[str, dict[str, str]] = {
    "INTERNAL_ERROR": {
        "title": "Internal Server Error",
        "detail": "An unexpected error occurred while processing your request",
    },
    "BAD_REQUEST": {
        "title": "Bad Request",
        "detail": "The request is invalid or malformed",
    },
    "UNAUTHORIZED": {
        "title": "Unauthorized",
        "detail": "Authentication is required to access this resource",
    },
    "FORBIDDEN": {
        "title": "Forbidden",
        "detail": "You do not have permission to access this resource",
    },
    "NOT_FOUND": {
        "title": "Not Found",
        "detail": "The requested resource was not found",
    },
    "CONFLICT": {
        "title": "Conflict",
        "detail": "The request conflicts with the current state of the resource",
    },
    "UNPROCESSABLE_ENTITY": {
        "title": "Unprocessable Entity",
        "detail": "The request could not be processed because of validation errors",
    },
    "SERVICE_UNAVAILABLE": {
        "title": "Service Unavailable",
        "detail": "The service is temporarily unavailable",
    },
}


@runtime_checkable
class MessageResolver(Protocol):
    """Anything that can map a message key and field to display text."""

    def get_message(self, key: str, field: MessageField) -> Optional[str]:
        ...


class DefaultMessageResolver:
    """Catalog-backed resolver with ``{name}`` placeholder substitution.

    The catalog is copied at construction and never mutated afterwards, so a
    single instance can be shared across request handlers.
    """

    def __init__(self, messages: Optional[Mapping[str, Mapping[str, str]]] = None) -> None:
        source = DEFAULT_MESSAGES if messages is None else messages
        self._messages: dict[str, dict[str, str]] = {
            key: dict(fields) for key, fields in source.items()
        }

    def get_message(
        self,
        key: str,
        field: MessageField,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        message = self._messages.get(key, {}).get(field)
        if not message:
            return None
        if params:
            return _PLACEHOLDER.sub(lambda match: _substitute(match, params), message)
        return message

    def has_message(self, key: str, field: MessageField) -> bool:
        return bool(self._messages.get(key, {}).get(field))

    def available_error_codes(self) -> list[str]:
        return list(self._messages)


def _substitute(match: re.Match[str], params: Mapping[str, Any]) -> str:
    value = params.get(match.group(1))
    if value is None:
        return match.group(0)
    return str(value) or match.group(0)
