"""
Centralized enums for the image region service.
"""

from enum import Enum


class RenderStatus(str, Enum):
    """Terminal outcome of one render request."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class RenderingModelName(str, Enum):
    """Rendering models commonly exposed by the rendering engine."""

    GREYSCALE = "greyscale"
    RGB = "rgb"
