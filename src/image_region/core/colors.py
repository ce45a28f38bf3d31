"""
HTML-style hex color parsing for channel color overrides.
"""

import logging
import string
from typing import Optional

from image_region.common.base import RGBAColor
from image_region.common.constants import RenderingConstants

logger = logging.getLogger(__name__)


def split_html_color(color: Optional[str]) -> Optional[RGBAColor]:
    """
    Split a hex color string into RGBA bytes.

    - abc      -> (0xAA, 0xBB, 0xCC, 0xFF)
    - abcd     -> (0xAA, 0xBB, 0xCC, 0xDD)
    - abbccd   -> (0xAB, 0xBC, 0xCD, 0xFF)
    - abbccdde -> (0xAB, 0xBC, 0xCD, 0xDE)

    Args:
        color: Hex characters, without a leading '#'

    Returns:
        RGBAColor, or None if the string cannot be parsed
    """
    if color is None:
        return None

    if len(color) in RenderingConstants.SHORT_COLOR_LENGTHS:
        color = "".join(ch * 2 for ch in color)
    if len(color) == RenderingConstants.RGB_HEX_LENGTH:
        color += RenderingConstants.OPAQUE_ALPHA_HEX
    if len(color) != RenderingConstants.RGBA_HEX_LENGTH:
        logger.debug(f"Ignoring color of unsupported length: {color!r}")
        return None

    # int() alone would accept signs and whitespace
    if not all(ch in string.hexdigits for ch in color):
        logger.error(f"Error while parsing color: {color!r} is not hexadecimal")
        return None

    return RGBAColor(*(int(color[i : i + 2], 16) for i in range(0, 8, 2)))
