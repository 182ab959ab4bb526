"""Colour palette and theme settings for the driver tagging interface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float channels in the range 0.0 to 1.0."""

    r: float
    g: float
    b: float
    a: float = 1.0

    def to_u32(self) -> int:
        """Pack the colour as a 32-bit value laid out as A,B,G,R from high to low byte."""

        def channel(value: float) -> int:
            clamped = min(max(value, 0.0), 1.0)
            return int(clamped * 255.0 + 0.5)

        return (
            channel(self.r)
            | (channel(self.g) << 8)
            | (channel(self.b) << 16)
            | (channel(self.a) << 24)
        )


class Theme:
    """Base colours of the dark interface theme."""

    WINDOW_BG = Color(0.06, 0.06, 0.08, 1.00)
    PANEL_BG = Color(0.08, 0.08, 0.10, 1.00)
    FRAME_BG = Color(0.12, 0.12, 0.15, 1.00)

    INTERACTIVE_1 = Color(0.15, 0.15, 0.18, 1.00)
    INTERACTIVE_2 = Color(0.18, 0.18, 0.22, 1.00)
    INTERACTIVE_3 = Color(0.20, 0.20, 0.25, 1.00)
    INTERACTIVE_4 = Color(0.25, 0.25, 0.30, 1.00)
    INTERACTIVE_5 = Color(0.35, 0.35, 0.40, 1.00)
    INTERACTIVE_6 = Color(0.45, 0.45, 0.50, 1.00)

    TEXT = Color(0.90, 0.90, 0.90, 1.00)
    TEXT_DISABLED = Color(0.50, 0.50, 0.50, 1.00)
    TEXT_LABEL = Color(0.7, 0.7, 0.8, 1.0)

    BORDER = Color(0.15, 0.15, 0.20, 1.00)
    BORDER_SHADOW = Color(0.00, 0.00, 0.00, 0.00)


class DriverTagColors:
    """Colours of the behaviour tags."""

    CLEAN_DRIVER = Color(0.2, 0.8, 0.2, 1.0)
    GOOD_RACER = Color(0.0, 0.8, 1.0, 1.0)
    AGGRESSIVE = Color(1.0, 0.7, 0.0, 1.0)
    DIRTY_DRIVER = Color(1.0, 0.4, 0.0, 1.0)
    RAMMER = Color(1.0, 0.0, 0.0, 1.0)
    BLOCKING = Color(0.8, 0.8, 0.0, 1.0)
    UNSAFE_REJOIN = Color(1.0, 0.5, 0.0, 1.0)
    NEWBIE = Color(0.0, 1.0, 1.0, 1.0)


class IRatingColors:
    """Colours of the iRating bands."""

    GOLD = Color(1.0, 0.84, 0.0, 1.0)
    PURPLE = Color(0.5, 0.0, 0.5, 1.0)
    BLUE = Color(0.0, 0.5, 1.0, 1.0)
    GREEN = Color(0.0, 0.8, 0.0, 1.0)
    ORANGE = Color(1.0, 0.65, 0.0, 1.0)
    RED = Color(1.0, 0.25, 0.25, 1.0)


class SafetyRatingColors:
    """Colours of the safety rating bands."""

    EXCELLENT = Color(0.0, 0.9, 0.3, 1.0)
    GOOD = Color(0.0, 0.8, 0.2, 1.0)
    AVERAGE = Color(0.9, 0.8, 0.0, 1.0)
    POOR = Color(1.0, 0.6, 0.0, 1.0)
    BAD = Color(1.0, 0.25, 0.25, 1.0)


class SpecialColors:
    """Colours for selection, highlights and status messages."""

    SELECTED_ITEM = Color(0.2, 0.6, 1.0, 1.0)
    POSITION_GOLD = Color(1.0, 0.8, 0.0, 1.0)
    ERROR_RED = Color(1.0, 0.3, 0.3, 1.0)

    SELECTED_BASE = Color(0.8, 0.1, 0.1, 0.7)
    SELECTED_HOVER = Color(0.9, 0.2, 0.2, 0.8)
    SELECTED_ACTIVE = Color(0.7, 0.05, 0.05, 0.9)

    PLAYER_HIGHLIGHT = IRatingColors.GOLD
    WARNING = SafetyRatingColors.POOR
    SUCCESS = DriverTagColors.CLEAN_DRIVER


def get_irating_color(irating: int) -> Color:
    """Return the colour of the band an iRating falls in."""
    if irating >= 4000:
        return IRatingColors.GOLD
    if irating >= 3000:
        return IRatingColors.PURPLE
    if irating >= 2000:
        return IRatingColors.BLUE
    if irating >= 1500:
        return IRatingColors.GREEN
    if irating >= 1000:
        return IRatingColors.ORANGE
    return IRatingColors.RED


def get_safety_rating_color(sr: float) -> Color:
    """Return the colour of the band a safety rating falls in."""
    if sr >= 4.0:
        return SafetyRatingColors.EXCELLENT
    if sr >= 3.0:
        return SafetyRatingColors.GOOD
    if sr >= 2.5:
        return SafetyRatingColors.AVERAGE
    if sr >= 2.0:
        return SafetyRatingColors.POOR
    return SafetyRatingColors.BAD


def dark_gaming_theme() -> dict[str, Any]:
    """Return the style settings of the dark theme: colours, rounding and spacing."""
    colors = {
        "window_bg": Theme.WINDOW_BG,
        "child_bg": Theme.PANEL_BG,
        "popup_bg": Theme.PANEL_BG,
        "header": Theme.INTERACTIVE_1,
        "header_hovered": Theme.INTERACTIVE_3,
        "header_active": Theme.INTERACTIVE_4,
        "separator": Theme.INTERACTIVE_3,
        "button": Theme.INTERACTIVE_1,
        "button_hovered": Theme.INTERACTIVE_4,
        "button_active": Theme.INTERACTIVE_5,
        "text": Theme.TEXT,
        "text_disabled": Theme.TEXT_DISABLED,
        "border": Theme.BORDER,
        "border_shadow": Theme.BORDER_SHADOW,
        "frame_bg": Theme.FRAME_BG,
        "frame_bg_hovered": Theme.INTERACTIVE_2,
        "frame_bg_active": Theme.INTERACTIVE_4,
        "scrollbar_bg": Theme.PANEL_BG,
        "scrollbar_grab": Theme.INTERACTIVE_4,
        "scrollbar_grab_hovered": Theme.INTERACTIVE_5,
        "scrollbar_grab_active": Theme.INTERACTIVE_6,
    }
    return {
        "colors": colors,
        "window_rounding": 12.0,
        "child_rounding": 8.0,
        "frame_rounding": 8.0,
        "scrollbar_rounding": 12.0,
        "grab_rounding": 6.0,
        "window_border_size": 1.0,
        "child_border_size": 1.0,
        "frame_border_size": 0.0,
        "window_padding": (16.0, 16.0),
        "frame_padding": (12.0, 8.0),
        "item_spacing": (12.0, 8.0),
        "item_inner_spacing": (8.0, 6.0),
        "indent_spacing": 30.0,
    }