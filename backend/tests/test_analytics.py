from datetime import datetime, timezone
from types import SimpleNamespace

from platform_errors.analytics import aggregate_errors, format_error_info, is_valid_error
from platform_errors.domain_errors import DomainError, ErrorKind, build_error, internal_server_error, not_found


def test_aggregate_empty_batch() -> None:
    stats = aggregate_errors([])

    assert stats.model_dump(by_alias=True) == {
        "total": 0,
        "byLevel": {},
        "byErrorCode": {},
        "byStatus": {},
        "timeRange": {"start": "", "end": ""},
    }


def test_aggregate_counts_by_level_code_and_status() -> None:
    errors = [
        internal_server_error("Boom", "Database down"),
        not_found("Missing", "User missing"),
        not_found("Missing", "Tenant missing"),
    ]

    stats = aggregate_errors(errors)

    assert stats.total == 3
    assert stats.by_level == {"error": 1, "warn": 2}
    assert stats.by_status == {500: 1, 404: 2}
    assert stats.by_error_code == {"INTERNAL_ERROR": 1, "NOT_FOUND": 2}


def test_aggregate_time_range_defaults_to_aggregation_moment() -> None:
    before = datetime.now(timezone.utc)
    stats = aggregate_errors([not_found("Missing", "User missing")])
    after = datetime.now(timezone.utc)

    start = datetime.fromisoformat(stats.time_range.start)
    assert stats.time_range.start == stats.time_range.end
    assert before <= start <= after


def test_aggregate_time_range_from_occurrence_times() -> None:
    early = DomainError(
        error_code="NOT_FOUND",
        title="Missing",
        detail="Missing",
        status=404,
        occurred_at=datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc),
    )
    late = DomainError(
        error_code="INTERNAL_ERROR",
        title="Boom",
        detail="Boom",
        status=500,
        occurred_at=datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc),
    )

    stats = aggregate_errors([late, early], use_occurrence_times=True)

    assert stats.time_range.start == "2026-03-01T08:00:00+00:00"
    assert stats.time_range.end == "2026-03-01T09:30:00+00:00"


def test_aggregate_accepts_generators() -> None:
    stats = aggregate_errors(build_error(ErrorKind.BAD_REQUEST, "Bad", "Bad") for _ in range(4))

    assert stats.total == 4
    assert stats.by_level == {"warn": 4}


def test_format_error_info_includes_root_cause_for_internal_logs() -> None:
    error = internal_server_error("Boom", "Database down", {"table": "users"}, ValueError("timeout"))

    info = format_error_info(error)

    assert info["errorCode"] == "INTERNAL_ERROR"
    assert info["status"] == 500
    assert info["data"] == {"table": "users"}
    assert info["rootCause"] == "ValueError('timeout')"
    assert info["timestamp"]
    assert info["occurredAt"] == error.occurred_at.isoformat()


def test_is_valid_error() -> None:
    assert is_valid_error(not_found("Missing", "Missing"))
    assert is_valid_error(SimpleNamespace(error_code="X", title="t", detail="d", status=418))
    assert not is_valid_error(SimpleNamespace(error_code="X", title="t", detail="d", status="418"))
    assert not is_valid_error(SimpleNamespace(error_code="X", title="t", status=400))
    assert not is_valid_error(None)
    assert not is_valid_error(ValueError("plain"))
