import pytest

from racerep.colors import (
    Color,
    IRatingColors,
    SafetyRatingColors,
    SpecialColors,
    Theme,
    dark_gaming_theme,
    get_irating_color,
    get_safety_rating_color,
)


@pytest.mark.parametrize(
    "irating, expected",
    [
        (5000, IRatingColors.GOLD),
        (4000, IRatingColors.GOLD),
        (3999, IRatingColors.PURPLE),
        (3000, IRatingColors.PURPLE),
        (2000, IRatingColors.BLUE),
        (1500, IRatingColors.GREEN),
        (1000, IRatingColors.ORANGE),
        (999, IRatingColors.RED),
        (0, IRatingColors.RED),
    ],
)
def test_irating_bands(irating, expected):
    assert get_irating_color(irating) == expected


@pytest.mark.parametrize(
    "sr, expected",
    [
        (4.8, SafetyRatingColors.EXCELLENT),
        (4.0, SafetyRatingColors.EXCELLENT),
        (3.0, SafetyRatingColors.GOOD),
        (2.5, SafetyRatingColors.AVERAGE),
        (2.0, SafetyRatingColors.POOR),
        (1.9, SafetyRatingColors.BAD),
    ],
)
def test_safety_rating_bands(sr, expected):
    assert get_safety_rating_color(sr) == expected


def test_white_packs_to_all_ones():
    assert Color(1.0, 1.0, 1.0, 1.0).to_u32() == 0xFFFFFFFF


def test_transparent_black_packs_to_zero():
    assert Theme.BORDER_SHADOW.to_u32() == 0


def test_red_occupies_low_byte():
    packed = Color(1.0, 0.0, 0.0, 0.0).to_u32()
    assert packed & 0xFF == 0xFF
    assert packed >> 8 == 0


def test_channels_are_clamped():
    assert Color(2.0, 2.0, 2.0, 2.0).to_u32() == Color(1.0, 1.0, 1.0, 1.0).to_u32()
    assert Color(-1.0, -1.0, -1.0, -1.0).to_u32() == 0


def test_aliases_point_to_shared_colours():
    assert get_irating_color(4500) == SpecialColors.PLAYER_HIGHLIGHT
    assert get_safety_rating_color(2.2) == SpecialColors.WARNING
    assert SpecialColors.PLAYER_HIGHLIGHT.to_u32() == IRatingColors.GOLD.to_u32()


def test_dark_theme_settings():
    style = dark_gaming_theme()
    assert style["window_rounding"] == 12.0
    assert style["indent_spacing"] == 30.0
    assert style["colors"]["window_bg"] == Theme.WINDOW_BG
    assert style["colors"]["scrollbar_grab_active"] == Theme.INTERACTIVE_6