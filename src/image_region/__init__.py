"""
Image Region Service - renders image regions through a remote rendering engine.
"""

__version__ = "1.0.0"
