"""Error taxonomy, RFC 7807 translation and error statistics for platform services."""
from .analytics import aggregate_errors, format_error_info, is_valid_error
from .domain_errors import (
    DomainError,
    ErrorKind,
    bad_request,
    build_error,
    internal_server_error,
    not_found,
)
from .message_resolver import DefaultMessageResolver, MessageResolver
from .problem_details import (
    build_problem_details_response,
    to_error_response,
    unexpected_error_response,
)
from .schemas import ErrorResponse, ExceptionStats, TimeRange
from .severity import classify_level, is_client_error, is_server_error

__all__ = [
    "DefaultMessageResolver",
    "DomainError",
    "ErrorKind",
    "ErrorResponse",
    "ExceptionStats",
    "MessageResolver",
    "TimeRange",
    "aggregate_errors",
    "bad_request",
    "build_error",
    "build_problem_details_response",
    "classify_level",
    "format_error_info",
    "internal_server_error",
    "is_client_error",
    "is_server_error",
    "is_valid_error",
    "not_found",
    "to_error_response",
    "unexpected_error_response",
]
