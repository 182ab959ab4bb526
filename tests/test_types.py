import pytest

from racerep.colors import DriverTagColors
from racerep.types import (
    DriverData,
    DriverFlags,
    DriverReputation,
    DriverTrustLevel,
    IconPaths,
    ProximityWarning,
    default_tags,
    driver_flags_to_string,
)


def test_reputation_defaults():
    rep = DriverReputation()
    assert rep.customer_id == -1
    assert rep.trust_level == DriverTrustLevel.NEUTRAL
    assert rep.behavior_flags == 0
    assert rep.trust_score == 0.5


def test_driver_defaults():
    driver = DriverData()
    assert driver.license_level == "D"
    assert driver.gap_to_player == 999.0
    assert driver.is_valid is False


def test_add_and_remove_behavior_round_trip():
    rep = DriverReputation()
    rep.add_behavior(DriverFlags.RAMMER)
    rep.add_behavior(DriverFlags.NEWBIE)
    assert rep.has_behavior(DriverFlags.RAMMER)
    assert rep.has_behavior(DriverFlags.NEWBIE)
    rep.remove_behavior(DriverFlags.RAMMER)
    assert not rep.has_behavior(DriverFlags.RAMMER)
    assert rep.behavior_flags == int(DriverFlags.NEWBIE)


def test_unknown_flag_is_never_present():
    rep = DriverReputation(behavior_flags=0xFF)
    assert not rep.has_behavior(DriverFlags.UNKNOWN)


@pytest.mark.parametrize(
    "flag, warns",
    [
        (DriverFlags.DIRTY_DRIVER, True),
        (DriverFlags.RAMMER, True),
        (DriverFlags.BLOCKING, True),
        (DriverFlags.UNSAFE_REJOIN, True),
        (DriverFlags.AGGRESSIVE, False),
        (DriverFlags.CLEAN_DRIVER, False),
        (DriverFlags.NEWBIE, False),
    ],
)
def test_warning_flags(flag, warns):
    rep = DriverReputation()
    rep.add_behavior(flag)
    assert rep.has_warning_flags() is warns


def test_is_positive():
    assert DriverReputation(behavior_flags=int(DriverFlags.GOOD_RACER)).is_positive()
    assert DriverReputation(behavior_flags=int(DriverFlags.CLEAN_DRIVER)).is_positive()
    assert not DriverReputation(behavior_flags=int(DriverFlags.RAMMER)).is_positive()


def _warning(flags):
    driver = DriverData(display_name="Ana", car_number="7")
    return ProximityWarning(driver=driver, reputation=DriverReputation(behavior_flags=int(flags)))


def test_warning_text_prefers_dirty_over_rammer():
    warning = _warning(DriverFlags.DIRTY_DRIVER | DriverFlags.RAMMER)
    assert warning.warning_text() == "Ana (#7) - DIRTY DRIVER"


def test_warning_text_without_flags():
    assert _warning(0).warning_text() == "Ana (#7)"


def test_warning_text_rookie():
    assert _warning(DriverFlags.NEWBIE).warning_text() == "Ana (#7) - ROOKIE"


def test_warning_color_prefers_rammer_over_dirty():
    assert _warning(DriverFlags.DIRTY_DRIVER | DriverFlags.RAMMER).warning_color() == 0xFF0000FF
    assert _warning(DriverFlags.DIRTY_DRIVER).warning_color() == 0xFF4444FF
    assert _warning(DriverFlags.NEWBIE).warning_color() == 0x00FFFFFF
    assert _warning(DriverFlags.UNSAFE_REJOIN).warning_color() == 0xFFFFFFFF


def test_flag_names():
    assert driver_flags_to_string(DriverFlags.CLEAN_DRIVER) == "Clean Driver"
    assert driver_flags_to_string(DriverFlags.NEWBIE) == "Newbie"
    assert driver_flags_to_string(DriverFlags.UNKNOWN) == "Unknown"
    assert driver_flags_to_string(DriverFlags.RAMMER | DriverFlags.BLOCKING) == "Unknown"


def test_default_tags_cover_every_flag_once():
    tags = default_tags()
    behaviors = [tag.behavior for tag in tags]
    assert len(set(behaviors)) == len(behaviors)
    assert set(behaviors) == {flag for flag in DriverFlags if flag != DriverFlags.UNKNOWN}


def test_default_tag_details():
    tags = default_tags()
    assert tags[0].name == "Clean Driver"
    assert tags[0].color == DriverTagColors.CLEAN_DRIVER
    assert tags[-1].name == "Rookie"
    assert tags[-1].icon_path == IconPaths.ROOKIE_FRIENDLY
    assert all(tag.icon_texture is None for tag in tags)


def test_default_tags_are_fresh_lists():
    first = default_tags()
    first[0].icon_texture = object()
    assert default_tags()[0].icon_texture is None