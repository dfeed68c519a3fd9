"""Error reporting seam between the pipeline and its host."""

from typing import Protocol

import structlog

from git_source.core.exceptions import GitSourceError

logger = structlog.get_logger(__name__)


class Reporter(Protocol):
    def error(self, error: Exception) -> None: ...


class LogReporter:
    """Reports errors through structlog."""

    def error(self, error: Exception) -> None:
        details = error.details if isinstance(error, GitSourceError) else {}
        logger.error(
            "Source run failed",
            error_type=type(error).__name__,
            error=str(error),
            **details,
        )


class CollectingReporter:
    """Keeps reported errors in memory, for callers that inspect them later."""

    def __init__(self) -> None:
        self.errors: list[Exception] = []

    def error(self, error: Exception) -> None:
        self.errors.append(error)
