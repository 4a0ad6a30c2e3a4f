"""Engine-specific exceptions for consistent error handling."""

from typing import Any


class AppError(Exception):
    """Engine error with standardized error code."""

    code = "APP_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | list[Any] | None = None,
    ):
        """Initialize engine error."""
        super().__init__(message)
        self.code = code or self.code
        self.message = message
        self.details = details


class InvalidStateError(AppError):
    """Session engine operation invoked outside its legal state."""

    code = "INVALID_STATE"

    def __init__(self, operation: str, status: str):
        super().__init__(
            f"Cannot {operation} while session is {status}",
            details={"operation": operation, "status": status},
        )
        self.operation = operation
        self.status = status


class FetchFailureError(AppError):
    """Retrieving or parsing the content for one level failed."""

    code = "FETCH_FAILURE"

    def __init__(self, domain: str, level: str, reason: str):
        super().__init__(
            f"Failed to load {domain} level {level}: {reason}",
            details={"domain": domain, "level": level, "reason": reason},
        )
        self.domain = domain
        self.level = level
