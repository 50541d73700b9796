"""FastAPI application exposing error monitoring endpoints."""
from typing import Optional

from fastapi import FastAPI, Query

from .config import Settings, get_settings
from .handlers import ErrorJournal, register_error_handlers
from .logging_setup import configure_logging
from .message_resolver import DefaultMessageResolver, MessageResolver
from .schemas import ErrorDescription, ExceptionStats


def create_app(
    settings: Optional[Settings] = None,
    *,
    message_resolver: Optional[MessageResolver] = None,
    journal: Optional[ErrorJournal] = None,
) -> FastAPI:
    """Build the application with problem-details handlers and a shared journal."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    if settings.ENV.lower() == "production" and settings.DEBUG:
        raise RuntimeError("DEBUG must be false in production.")
    if settings.ERROR_JOURNAL_SIZE <= 0:
        raise RuntimeError("ERROR_JOURNAL_SIZE must be a positive integer.")

    journal = journal if journal is not None else ErrorJournal(maxlen=settings.ERROR_JOURNAL_SIZE)
    resolver = message_resolver if message_resolver is not None else DefaultMessageResolver()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Problem-details error handling and error statistics",
    )
    app.state.error_journal = journal
    register_error_handlers(
        app,
        message_resolver=resolver,
        documentation_url=settings.ERROR_DOCUMENTATION_URL,
        journal=journal,
        request_id_header=settings.REQUEST_ID_HEADER,
        log_root_cause=settings.LOG_ROOT_CAUSE,
    )

    @app.get("/api/v1/system/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "ok",
            "version": settings.APP_VERSION,
        }

    @app.get("/api/v1/system/errors/stats", response_model=ExceptionStats, response_model_by_alias=True)
    def error_stats(use_occurrence_times: bool = Query(False, alias="useOccurrenceTimes")):
        """Aggregate statistics over recently handled errors."""
        return journal.stats(use_occurrence_times=use_occurrence_times)

    @app.get("/api/v1/system/errors/recent", response_model=list[ErrorDescription], response_model_by_alias=True)
    def recent_errors(limit: int = Query(50, ge=1, le=500)):
        """Most recent handled errors, newest first, without root causes."""
        entries = journal.snapshot()[-limit:]
        return [error.describe() for error in reversed(entries)]

    return app
