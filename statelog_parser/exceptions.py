"""
Custom exceptions for the State Log Parser.

Error philosophy:
  - MalformedInputError    → FAIL HARD: no JSON span found, nothing is attempted.
  - RecoveryExhaustedError → FAIL HARD: every repair strategy failed; carries diagnostics.
  - ShapeValidationError   → FAIL HARD: parsed fine, but it is not a state log.
  - UnsupportedFormatError → FAIL HARD: neither filename nor content was recognized.
  - InputTooLargeError     → FAIL HARD: refused at the file-read boundary.

All of them are terminal. The only retrying happens inside the recovery
pipeline's strategy cascade, which is exhausted before anything is raised.

`message` is safe to show to an end user. `details` is for operator logs only.
"""

from typing import Optional


class StateLogParserError(Exception):
    """Base exception for all State Log Parser errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_response(self) -> dict:
        """Convert to a serializable error record."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details
        }


class MalformedInputError(StateLogParserError):
    """
    Raised when the input has no recoverable JSON content.

    Raised by the preprocessor before any strategy runs, so `details`
    stays empty for the missing-braces case.
    """
    pass


class RecoveryExhaustedError(StateLogParserError):
    """
    Raised when all recovery strategies fail.

    The primary error is the first strategy's message: it ran on the
    least-transformed text and is the most useful for diagnosis.
    """

    def __init__(
        self,
        message: str,
        primary_error: str,
        strategy_errors: dict[str, str],
        text_sample: str,
        text_length: int
    ):
        super().__init__(
            message,
            details={
                "strategy_errors": dict(strategy_errors),
                "text_sample": text_sample,
                "text_length": text_length
            }
        )
        self.primary_error = primary_error
        self.strategy_errors = dict(strategy_errors)
        self.text_sample = text_sample
        self.text_length = text_length


class ShapeValidationError(StateLogParserError):
    """Raised when a document parses but does not look like a state log."""
    pass


class UnsupportedFormatError(StateLogParserError):
    """Raised when the input is not recognized as a state log at all."""

    def __init__(
        self,
        message: str,
        filename: str = "",
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.filename = filename


class InputTooLargeError(StateLogParserError):
    """Raised when a file exceeds the configured size bound."""

    def __init__(self, message: str, size: int, limit: int):
        super().__init__(message, details={"size": size, "limit": limit})
        self.size = size
        self.limit = limit
