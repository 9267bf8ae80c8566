from h2d.capture.adapters import context_from_capture, context_from_code, embedded_styles
from h2d.capture.validator import load_capture, validate_capture
from h2d.model.capture import default_capture

__all__ = [
    "context_from_capture",
    "context_from_code",
    "default_capture",
    "embedded_styles",
    "load_capture",
    "validate_capture",
]
