"""
Utility helpers for the core package.
"""

from .timing import timer

__all__ = ["timer"]
