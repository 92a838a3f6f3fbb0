"""Exceptions raised by the tailoring pipeline.

Every failure a request can hit derives from TailorError so the HTTP layer
can collapse it into a single ``{"error": message}`` response.
"""

from typing import Optional


class TailorError(Exception):
    """Base class for request-level failures.

    Attributes:
        message: Human readable description returned to the client
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RequestValidationFailed(TailorError):
    """Missing or malformed inputs (file, job description, options)."""


class ExtractionError(TailorError):
    """The uploaded CV could not be turned into text."""


class CompletionError(TailorError):
    """
    The remote model call failed.

    Attributes:
        message: Error description
        attempts: Number of attempts made before giving up
    """

    def __init__(self, message: str, attempts: Optional[int] = None):
        self.attempts = attempts
        if attempts and attempts > 1:
            message = f"{message} (after {attempts} attempts)"
        super().__init__(message)


class ResumeParseError(TailorError):
    """The model's CV response was not usable structured data."""

    def __init__(self, message: str, raw: Optional[str] = None):
        self.raw = raw
        super().__init__(message)


class RenderError(TailorError):
    """A document could not be rendered to DOCX or PDF."""
