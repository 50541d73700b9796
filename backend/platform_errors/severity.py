"""Severity tiers derived from HTTP status codes."""
from __future__ import annotations

import logging
from typing import Literal

SeverityLevel = Literal["error", "warn", "info"]

_LOGGING_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
}


def classify_level(status: int) -> SeverityLevel:
    if status >= 500:
        return "error"
    if status >= 400:
        return "warn"
    return "info"


def is_client_error(status: int) -> bool:
    return 400 <= status < 500


def is_server_error(status: int) -> bool:
    return 500 <= status < 600


def logging_level(level: SeverityLevel) -> int:
    """Stdlib logging level used when reporting an error of this tier."""
    return _LOGGING_LEVELS[level]
