"""
Constants and configuration values for the Image Region Service.
Centralizes all magic numbers and configuration constants.
"""


# Rendering Constants
class RenderingConstants:
    """Constants related to the remote rendering engine."""

    # Compression
    DEFAULT_COMPRESSION_QUALITY = 0.9
    MIN_COMPRESSION_QUALITY = 0.0
    MAX_COMPRESSION_QUALITY = 1.0

    # Group context sent with every settings call
    GROUP_CONTEXT_KEY = "omero.group"
    ALL_GROUPS = "-1"  # Query across every group the session can see

    # Color codec
    SHORT_COLOR_LENGTHS = (3, 4)
    RGB_HEX_LENGTH = 6
    RGBA_HEX_LENGTH = 8
    OPAQUE_ALPHA_HEX = "FF"


# Request parsing constants
class RequestConstants:
    """Delimiters used by the render_image_region query string."""

    LIST_SEPARATOR = ","
    CHANNEL_WINDOW_SEPARATOR = "|"
    WINDOW_RANGE_SEPARATOR = ":"
    COLOR_SEPARATOR = "$"

    TILE_FIELDS = (3, 5)  # res,x,y[,w,h]
    REGION_FIELDS = 4  # x,y,w,h


# API Constants
class APIConstants:
    """Constants for API endpoints."""

    API_VERSION = "v1"
    SERVICE_NAME = "Image Region Service"

    # Legacy behavior: failures look the same as a missing image
    NOT_FOUND_STATUS_CODE = 404
    FAILURE_STATUS_CODE = 404

    IMAGE_MEDIA_TYPE = "image/jpeg"


# System Constants
class SystemConstants:
    """Constants for system operations."""

    LOG_LEVEL_DEFAULT = "INFO"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
