"""
Custom exceptions for cadence-coach.

Every error carries:
- A descriptive message
- An error code for consistent reporting
- Optional details for debugging

Analysis functions never raise for degenerate numeric input; these errors
are reserved for invalid caller input and feedback-channel failures.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Metronome errors
    INVALID_TEMPO = "INVALID_TEMPO"
    FEEDBACK_UNAVAILABLE = "FEEDBACK_UNAVAILABLE"

    # Telemetry errors
    TELEMETRY_INVALID = "TELEMETRY_INVALID"


class CadenceCoachError(Exception):
    """
    Base exception for all cadence-coach errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for reporting."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors
# ============================================================================

class ValidationError(CadenceCoachError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details,
        )


class InvalidTempoError(ValidationError):
    """Raised when a metronome tempo is not a positive finite number."""

    def __init__(
        self,
        bpm: Any,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["bpm"] = repr(bpm)
        super().__init__(
            message=f"Tempo must be a positive finite number of beats per minute, got {bpm!r}",
            field="bpm",
            details=error_details,
        )
        self.code = ErrorCode.INVALID_TEMPO
        self.bpm = bpm


class TelemetryValidationError(ValidationError):
    """Raised when decoded telemetry cannot be turned into samples."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.TELEMETRY_INVALID


# ============================================================================
# Feedback Errors
# ============================================================================

class FeedbackUnavailableError(CadenceCoachError):
    """Raised by a feedback sink whose device cannot signal right now.

    The feedback chain catches this and falls back to the next sink.
    """

    def __init__(
        self,
        sink: str,
        reason: str = "feedback device unavailable",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["sink"] = sink
        super().__init__(
            message=f"{sink}: {reason}",
            code=ErrorCode.FEEDBACK_UNAVAILABLE,
            details=error_details,
        )
        self.sink = sink
