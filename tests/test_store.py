import re

import pytest

from racerep.store import (
    DriverTagModel,
    is_placeholder_driver,
    truncate_text,
    update_trust_level,
)
from racerep.types import (
    AppView,
    DriverData,
    DriverFlags,
    DriverReputation,
    DriverTrustLevel,
)


class Clock:
    def __init__(self, now=1_000_000):
        self.now = now

    def __call__(self):
        return self.now


def rep_with(*flags):
    rep = DriverReputation()
    for flag in flags:
        rep.add_behavior(flag)
    return rep


@pytest.mark.parametrize(
    "flags, expected",
    [
        ((DriverFlags.CLEAN_DRIVER, DriverFlags.GOOD_RACER), DriverTrustLevel.TRUSTED),
        ((DriverFlags.GOOD_RACER,), DriverTrustLevel.TRUSTED),
        ((DriverFlags.CLEAN_DRIVER,), DriverTrustLevel.NEUTRAL),
        ((DriverFlags.AGGRESSIVE,), DriverTrustLevel.NEUTRAL),
        ((DriverFlags.BLOCKING,), DriverTrustLevel.CAUTION),
        ((DriverFlags.RAMMER,), DriverTrustLevel.AVOID),
        ((DriverFlags.DIRTY_DRIVER,), DriverTrustLevel.AVOID),
        ((DriverFlags.CLEAN_DRIVER, DriverFlags.DIRTY_DRIVER), DriverTrustLevel.NEUTRAL),
        ((), DriverTrustLevel.NEUTRAL),
    ],
)
def test_update_trust_level(flags, expected):
    rep = rep_with(*flags)
    assert update_trust_level(rep) == expected
    assert rep.trust_level == expected


def test_is_placeholder_driver():
    assert is_placeholder_driver(DriverData(display_name="Piloto #3", is_valid=True))
    assert is_placeholder_driver(DriverData(display_name="", is_valid=True))
    assert is_placeholder_driver(DriverData(display_name="Ana", is_valid=False))
    assert not is_placeholder_driver(DriverData(display_name="Ana", is_valid=True))


def test_truncate_text():
    assert truncate_text("abcdef", 10, len) == "abcdef"
    assert truncate_text("", 0, len) == ""
    assert truncate_text("abcdef", 5, len) == "ab..."
    assert truncate_text("abcdef", 2, len) == "..."
    shortened = truncate_text("a long driver name", 9, len)
    assert shortened.endswith("...") and len(shortened) <= 9


def test_get_or_create_reputation_reuses_entry():
    model = DriverTagModel(clock=Clock())
    first = model.get_or_create_reputation(42, "Ana")
    second = model.get_or_create_reputation(42, "Other")
    assert first is second
    assert first.user_name == "Ana"
    assert first.trust_level == DriverTrustLevel.NEUTRAL
    assert first.last_updated == 1_000_000
    assert model.get_driver_reputation(42) is first
    assert model.get_driver_reputation(7) is None


def test_load_mock_data():
    model = DriverTagModel()
    model.load_mock_data()
    assert [d.display_name for d in model.drivers] == [
        "Carlos Rodriguez",
        "Anna Thompson",
        "Mike Johnson",
        "Sarah Wilson",
        "Alex Martinez",
    ]
    players = [d for d in model.drivers if d.is_player]
    assert [p.customer_id for p in players] == [901234]
    assert [d.position for d in model.drivers] == [1, 2, 3, 4, 5]
    assert model.using_real_data is False


def test_session_data_creates_reputations():
    model = DriverTagModel()
    drivers = [DriverData(customer_id=11, display_name="A"), DriverData(customer_id=12, display_name="B")]
    model.load_session_data(drivers)
    assert model.using_real_data is True
    assert sorted(model.reputations) == [11, 12]
    model.update_session_data([DriverData(customer_id=13, display_name="C")])
    assert sorted(model.reputations) == [11, 12, 13]
    assert [d.customer_id for d in model.drivers] == [13]


def test_update_driver_list_keeps_data_source():
    model = DriverTagModel()
    model.update_driver_list([DriverData(customer_id=5, display_name="E")])
    assert model.using_real_data is False
    assert [d.customer_id for d in model.drivers] == [5]
    assert model.reputations == {}


def test_flagged_drivers_and_views():
    model = DriverTagModel()
    model.get_or_create_reputation(30, "Zed").add_behavior(DriverFlags.RAMMER)
    model.get_or_create_reputation(10, "Amy").add_behavior(DriverFlags.CLEAN_DRIVER)
    model.get_or_create_reputation(20, "Bob")
    assert model.count_drivers_with_flags() == 2
    flagged = model.flagged_drivers()
    assert [d.customer_id for d in flagged] == [10, 30]
    assert [d.car_idx for d in flagged] == [0, 1]
    assert all(d.car_number == "DB" and d.license_level == "?" for d in flagged)
    assert model.drivers_for_view(AppView.DRIVERS_WITH_FLAGS) == flagged
    model.load_mock_data()
    assert model.drivers_for_view(AppView.CURRENT_SESSION) == model.drivers
    with pytest.raises(ValueError):
        model.drivers_for_view(99)


def test_mark_dirty_ignored_without_persistence():
    model = DriverTagModel()
    model.get_or_create_reputation(1, "A")
    model.mark_dirty(1)
    assert model.dirty_ids == []
    assert model.flush_dirty(True) == 0


def test_flush_is_debounced_and_persists(tmp_path):
    clock = Clock()
    db_path = tmp_path / "rep.db"
    model = DriverTagModel(clock=clock)
    assert model.init_persistence(db_path) is True
    rep = model.get_or_create_reputation(77, "Dana")
    rep.add_behavior(DriverFlags.GOOD_RACER)
    model.mark_dirty(77)
    model.mark_dirty(77)
    assert model.dirty_ids == [77]
    assert model.flush_dirty() == 0
    clock.now += 5
    assert model.flush_dirty() == 1
    assert model.dirty_ids == []
    assert rep.last_updated == clock.now
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", rep.last_seen)
    model.database.close()

    reloaded = DriverTagModel(clock=clock)
    assert reloaded.init_persistence(db_path) is True
    stored = reloaded.get_driver_reputation(77)
    assert stored.user_name == "Dana"
    assert stored.has_behavior(DriverFlags.GOOD_RACER)
    assert stored.last_seen == rep.last_seen
    reloaded.database.close()


def test_force_flush_ignores_debounce(tmp_path):
    model = DriverTagModel(clock=Clock())
    model.init_persistence(tmp_path / "rep.db")
    model.get_or_create_reputation(3, "C")
    model.mark_dirty(3)
    assert model.flush_dirty(True) == 1
    assert model.reputations_dirty is False
    model.database.close()


def test_init_persistence_failure(tmp_path):
    model = DriverTagModel()
    assert model.init_persistence(tmp_path / "missing" / "rep.db") is False
    assert model.persistence_initialized is False


def test_initialize_tagging_and_shutdown(tmp_path):
    db_path = tmp_path / "rep.db"
    model = DriverTagModel(clock=Clock())
    assert model.initialize(db_path) is True
    assert model.initialize(db_path) is True
    assert all(tag.icon_texture is not None for tag in model.available_tags)

    model.side_menu.select(AppView.CURRENT_SESSION)
    assert model.current_view == AppView.CURRENT_SESSION

    clean = model.available_tags[0]
    rep = model.tag_manager.tags_component.toggle_tag(clean)
    assert rep.customer_id == 123456
    assert model.dirty_ids == [123456]
    assert model.count_drivers_with_flags() == 1
    model.shutdown()
    assert model.initialized is False

    reloaded = DriverTagModel()
    reloaded.init_persistence(db_path)
    stored = reloaded.get_driver_reputation(123456)
    assert stored.has_behavior(DriverFlags.CLEAN_DRIVER)
    assert stored.trust_level == DriverTrustLevel.TRUSTED
    reloaded.database.close()