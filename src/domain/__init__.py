"""Domain layer: errors, constants and 404 styles."""

from .errors import ErrorCodes, FrontendError
from .styles import STYLES, Style, StyleSet

__all__ = [
    "ErrorCodes",
    "FrontendError",
    "STYLES",
    "Style",
    "StyleSet",
]
