"""Error hierarchy for the h2d conversion engine."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from h2d.model.diagnostic import Diagnostic


class H2DError(Exception):
    """Base error for all h2d errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class StylesheetParseError(H2DError):
    """Stylesheet text could not be parsed."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.line = line
        self.column = column


class VectorParseError(H2DError):
    """Embedded vector markup is malformed (bad number, bad path data)."""


class ResourceFetchError(H2DError):
    """A single image resource could not be fetched or decoded."""

    def __init__(self, message: str, *, url: str = "", cause: Exception | None = None) -> None:
        super().__init__(message, cause=cause)
        self.url = url


class CaptureValidationError(H2DError):
    """Raised when a capture bundle fails structural validation."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [str(d) for d in diagnostics if d.is_error]
        super().__init__(
            f"Capture validation failed with {len(messages)} error(s): "
            + "; ".join(messages)
        )
