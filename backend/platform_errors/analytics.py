"""Aggregate statistics and log formatting over collected errors."""
from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from .domain_errors import DomainError, now_utc
from .schemas import ExceptionStats, TimeRange
from .severity import classify_level


def aggregate_errors(
    errors: Iterable[DomainError],
    *,
    use_occurrence_times: bool = False,
) -> ExceptionStats:
    """Count errors by severity tier, error code and status.

    By default both ends of ``time_range`` are the moment of aggregation.
    With ``use_occurrence_times`` the range spans the earliest and latest
    ``occurred_at`` of the batch instead.
    """
    snapshot = list(errors)
    if not snapshot:
        return ExceptionStats()

    by_level: Counter[str] = Counter()
    by_error_code: Counter[str] = Counter()
    by_status: Counter[int] = Counter()
    for error in snapshot:
        by_level[classify_level(error.status)] += 1
        by_error_code[error.error_code] += 1
        by_status[error.status] += 1

    if use_occurrence_times:
        occurred = sorted(error.occurred_at for error in snapshot)
        time_range = TimeRange(start=occurred[0].isoformat(), end=occurred[-1].isoformat())
    else:
        stamp = now_utc().isoformat()
        time_range = TimeRange(start=stamp, end=stamp)

    return ExceptionStats(
        total=len(snapshot),
        by_level=dict(by_level),
        by_error_code=dict(by_error_code),
        by_status=dict(by_status),
        time_range=time_range,
    )


def format_error_info(error: DomainError) -> dict[str, Any]:
    """Internal log record for an error. Includes the root cause; never send to clients."""
    return {
        "errorCode": error.error_code,
        "title": error.title,
        "detail": error.detail,
        "status": error.status,
        "data": error.data,
        "rootCause": repr(error.root_cause) if error.root_cause is not None else None,
        "occurredAt": error.occurred_at.isoformat(),
        "timestamp": now_utc().isoformat(),
    }


def is_valid_error(candidate: object) -> bool:
    """Duck-typed check that ``candidate`` satisfies the error contract."""
    return (
        isinstance(getattr(candidate, "error_code", None), str)
        and isinstance(getattr(candidate, "title", None), str)
        and isinstance(getattr(candidate, "detail", None), str)
        and isinstance(getattr(candidate, "status", None), int)
        and not isinstance(getattr(candidate, "status", None), bool)
    )
