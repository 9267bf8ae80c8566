"""Capture validator: runs all capture rules and reports diagnostics."""

from __future__ import annotations

from typing import Any, Callable

from h2d.capture.rules import ALL_RULES
from h2d.errors import CaptureValidationError
from h2d.model.capture import CaptureBundle
from h2d.model.diagnostic import Diagnostic

RuleFunc = Callable[[Any], list[Diagnostic]]


def validate_capture(data: Any, extra_rules: list[RuleFunc] | None = None) -> list[Diagnostic]:
    """Run all capture rules against decoded JSON *data*.

    Returns the full list of diagnostics (errors and warnings).
    """
    rules: list[RuleFunc] = list(ALL_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule(data))
    return diagnostics


def load_capture(data: Any) -> CaptureBundle:
    """Validate *data* and build a :class:`CaptureBundle`.

    Raises :class:`CaptureValidationError` carrying every ERROR diagnostic
    before any conversion work begins.
    """
    errors = [d for d in validate_capture(data) if d.is_error]
    if errors:
        raise CaptureValidationError(errors)
    return CaptureBundle.from_dict(data)
