"""
errors.py
=========
Exception taxonomy for the Detective Case Engine.

    DetectiveError
     ├── ConfigurationError   missing API key or unusable settings
     ├── CompletionError      the completion call itself failed
     │    ├── TransportError  network failure, non-2xx status, timeout
     │    └── FormatError     response envelope lacks the completion text
     ├── ExtractionError      no parseable JSON object in the model text
     ├── CaseValidationError  bad solve input, detected before any model call
     └── UnknownEntityError   an id that does not resolve in the store

Transport and format failures are surfaced identically to the player. Only the
analyzers' text-scraping fallbacks and the solver's templated verdict absorb an
ExtractionError; everything else propagates to the caller.
"""

from __future__ import annotations


class DetectiveError(Exception):
    """Base class for every error raised by this project."""


class ConfigurationError(DetectiveError):
    pass


class CompletionError(DetectiveError):
    pass


class TransportError(CompletionError):
    pass


class FormatError(CompletionError):
    pass


class ExtractionError(DetectiveError):
    """Raised when no strategy recovers a JSON object from model output."""

    def __init__(self, message: str, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class CaseValidationError(DetectiveError):
    """Solve input that cannot be adjudicated (user-facing message)."""


class UnknownEntityError(DetectiveError, KeyError):
    """Lookup of a case, clue or suspect id that is not in the state."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown entity"
