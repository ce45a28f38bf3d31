"""
Channel configuration - activation, contrast windows and colors per channel.

The request carries a flat list of signed 1-based selectors: a positive value
activates a channel, a negative value names a channel that stays inactive
but still owns an entry in the windows/colors lists. Those lists are dense
over the mentioned channels, not over the physical ones, so a separate slot
cursor walks them.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from image_region.common.base import ChannelWindow, RGBAColor
from image_region.core.colors import split_html_color
from image_region.core.rendering import CallContext, RenderingEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChannelSelector:
    """One decoded selector from the request."""

    channel_index: int  # 0-based physical channel
    active: bool
    reserves_slot: bool


@dataclass(frozen=True)
class ChannelSetting:
    """Everything to apply to one physical channel."""

    index: int
    active: bool
    window: Optional[ChannelWindow] = None
    color: Optional[RGBAColor] = None


ChannelPlan = Tuple[ChannelSetting, ...]


def parse_channel_selectors(channels: Sequence[int], size_c: int) -> List[ChannelSelector]:
    """
    Decode signed selectors into one record per physical channel.

    A channel listed both positively and negatively is active; selectors
    whose magnitude exceeds the channel count never match a channel.

    Args:
        channels: Signed 1-based selectors
        size_c: Number of channels in the image

    Returns:
        ChannelSelector for every channel in [0, size_c)
    """
    wanted = set(channels)
    selectors = []
    for c in range(size_c):
        active = (c + 1) in wanted
        selectors.append(
            ChannelSelector(
                channel_index=c, active=active, reserves_slot=active or -(c + 1) in wanted
            )
        )
    return selectors


def _slot(values: Optional[Sequence], idx: int, name: str, channel: int):
    if values is None:
        return None
    if idx >= len(values):
        raise IndexError(f"No {name} entry at position {idx} for channel {channel}")
    return values[idx]


def build_channel_plan(
    channels: Sequence[int],
    size_c: int,
    windows: Optional[Sequence[Optional[Tuple[float, float]]]] = None,
    colors: Optional[Sequence[Optional[str]]] = None,
) -> ChannelPlan:
    """
    Build the per-channel plan for an image.

    Args:
        channels: Signed 1-based selectors
        size_c: Number of channels in the image
        windows: Optional (start, end) per mentioned channel
        colors: Optional hex color per mentioned channel

    Returns:
        One ChannelSetting per physical channel, in channel order

    Raises:
        IndexError: If an active channel's slot lies past the end of a given
            windows or colors list. None entries are skipped, not errors.
    """
    plan: List[ChannelSetting] = []
    idx = 0  # cursor into windows/colors
    for selector in parse_channel_selectors(channels, size_c):
        c = selector.channel_index
        if not selector.active:
            plan.append(ChannelSetting(index=c, active=False))
            if selector.reserves_slot:
                idx += 1
            continue

        window = _slot(windows, idx, "window", c)
        if window is not None:
            window = ChannelWindow(float(window[0]), float(window[1]))
        color = split_html_color(_slot(colors, idx, "color", c))
        plan.append(ChannelSetting(index=c, active=True, window=window, color=color))
        idx += 1
    return tuple(plan)


def apply_channel_plan(engine: RenderingEngine, plan: ChannelPlan, ctx: CallContext) -> None:
    """
    Issue activation, window and color calls to the engine in channel order.

    Args:
        engine: Rendering engine bound to the image's pixel set
        plan: Channel plan from build_channel_plan
        ctx: Group context for the calls
    """
    logger.debug("Setting active channels")
    for setting in plan:
        engine.set_active(setting.index, setting.active, ctx)
        if not setting.active:
            continue
        if setting.window is not None:
            logger.debug(
                f"Channel: {setting.index}, [{setting.window.start}, {setting.window.end}]"
            )
            engine.set_channel_window(setting.index, setting.window.start, setting.window.end, ctx)
        if setting.color is not None:
            engine.set_rgba(setting.index, *setting.color, ctx)
