import logging

import pytest

from platform_errors.severity import classify_level, is_client_error, is_server_error, logging_level


@pytest.mark.parametrize(
    ("status", "level"),
    [
        (100, "info"),
        (200, "info"),
        (302, "info"),
        (399, "info"),
        (400, "warn"),
        (404, "warn"),
        (499, "warn"),
        (500, "error"),
        (503, "error"),
        (599, "error"),
        (600, "error"),
    ],
)
def test_classify_level_boundaries(status: int, level: str) -> None:
    assert classify_level(status) == level


def test_classify_level_is_error_iff_status_at_least_500() -> None:
    for status in range(-10, 1000):
        level = classify_level(status)
        assert level in {"error", "warn", "info"}
        assert (level == "error") == (status >= 500)


def test_client_and_server_partitions() -> None:
    for status in range(0, 1000):
        client = is_client_error(status)
        server = is_server_error(status)
        assert client == (400 <= status < 500)
        assert server == (500 <= status < 600)
        assert not (client and server)
        if status < 400 or status >= 600:
            assert not client and not server


def test_logging_level_per_tier() -> None:
    assert logging_level("error") == logging.ERROR
    assert logging_level("warn") == logging.WARNING
    assert logging_level("info") == logging.INFO
