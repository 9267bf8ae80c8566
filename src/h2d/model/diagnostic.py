"""Findings reported while checking a capture bundle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Severity(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass(frozen=True)
class Diagnostic:
    """One problem found in a capture bundle.

    ``path`` locates the offending field in dotted/indexed form, e.g.
    ``resources.images[2].mimeType``; it is ``None`` for whole-bundle issues.
    """

    rule: str
    severity: Severity
    message: str
    path: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "rule": self.rule,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.path:
            out["path"] = self.path
        return out

    def __str__(self) -> str:
        where = f" [{self.path}]" if self.path else ""
        return f"{self.severity.value}{where}: {self.message}"
