"""
Core modules for the Image Region Service
"""

from .channels import ChannelSelector, ChannelSetting, apply_channel_plan, build_channel_plan
from .colors import split_html_color
from .region import get_region_def, resolve_region
from .rendering import PlaneDef, RenderingClient, RenderingEngine, rendering_session

__all__ = [
    "ChannelSelector",
    "ChannelSetting",
    "PlaneDef",
    "RenderingClient",
    "RenderingEngine",
    "apply_channel_plan",
    "build_channel_plan",
    "get_region_def",
    "rendering_session",
    "resolve_region",
    "split_html_color",
]
