"""Exceptions raised while building a coverage report.

Every error carries a short *stage* label naming where in the pipeline it
happened; ``str(err)`` renders as ``"<stage>: <message>"``.
"""

from __future__ import annotations


class CovHTMLError(Exception):
    """Base exception for covhtml failures."""

    stage = "report"

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


class InputReadError(CovHTMLError):
    """Raised when the coverage input stream cannot be fully read."""

    stage = "read coverage data"


class DecodeError(CovHTMLError):
    """Raised when the input does not have the gocov JSON shape."""

    stage = "unmarshal coverage data"


class StylesheetNotFoundError(CovHTMLError):
    """Raised when a custom stylesheet path does not exist."""

    stage = "stylesheet"


class StylesheetReadError(CovHTMLError):
    """Raised when a custom stylesheet exists but cannot be read."""

    stage = "read style"


class RenderError(CovHTMLError):
    """Raised when the theme template fails to execute."""

    stage = "execute template"


class ThemeNotFoundError(CovHTMLError):
    """Raised when an unknown theme identifier is requested."""

    stage = "theme"


class AccumulateError(CovHTMLError):
    """Raised when two coverage records cannot be merged."""

    stage = "accumulate"
