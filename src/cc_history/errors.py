"""Error kinds raised inside cc-history and returned as structured values."""

from typing import Any

from cc_history.models import ErrorResponse


class HistoryError(Exception):
    """Base error; `kind` is the machine-readable error string."""

    kind = "error"

    def __init__(self, message: str, available: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.available = available

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.kind, message=self.message, available=self.available)


class InvalidRefError(HistoryError):
    kind = "invalid_ref"


class RefNotFoundError(HistoryError):
    kind = "ref_not_found"


class SessionNotFoundError(HistoryError):
    kind = "session_not_found"


class ProjectNotFoundError(HistoryError):
    kind = "project_not_found"


class NoCurrentProjectError(HistoryError):
    kind = "no_current_project"


class InvalidPatternError(HistoryError):
    kind = "invalid_pattern"


class InvalidTimeError(HistoryError):
    kind = "invalid_time"


class InvalidArgumentError(HistoryError):
    kind = "invalid_argument"


class ParseError(HistoryError):
    kind = "parse_error"


class HistoryIOError(HistoryError):
    kind = "io_error"
