"""Custom exception classes for tournament structure errors.

Provides structured error handling with error codes and user-friendly messages.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pokerlog.tournament.prize_validator import PrizeStructureViolation


class ErrorCode(str, Enum):
    """Standard error codes for engine errors."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_DOCUMENT = "INVALID_DOCUMENT"
    MISSING_FIELD = "MISSING_FIELD"

    # Prize structure errors
    ENTRY_RANGE_OVERLAP = "ENTRY_RANGE_OVERLAP"
    POSITION_RANGE_OVERLAP = "POSITION_RANGE_OVERLAP"
    PERCENTAGE_TOTAL_MISMATCH = "PERCENTAGE_TOTAL_MISMATCH"


class EngineError(Exception):
    """Base exception for tournament structure errors.

    Attributes:
        code: Error code for programmatic handling
        message: User-friendly error message
        details: Additional error details
    """

    def __init__(
        self,
        code: ErrorCode | str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "errorCode": self.code,
            "errorMessage": self.message,
            "details": self.details,
        }


class InvalidDocumentError(EngineError):
    """Raised when a stored document cannot be read as the expected model."""

    def __init__(
        self,
        document: str,
        message: str,
        field: str | None = None,
        code: ErrorCode = ErrorCode.INVALID_DOCUMENT,
    ):
        details: dict[str, Any] = {"document": document}
        if field is not None:
            details["field"] = field
        super().__init__(
            code=code,
            message=f"Invalid {document}: {message}",
            details=details,
        )


class PrizeStructureInvalidError(EngineError):
    """Raised at the save boundary when an edited prize table is rejected."""

    def __init__(self, violation: PrizeStructureViolation):
        self.violation = violation
        super().__init__(
            code=violation.error_code,
            message=violation.message,
            details=violation.to_dict(),
        )
