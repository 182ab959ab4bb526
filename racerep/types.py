"""Core data types: drivers, reputations, behaviour flags and tags."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from .colors import Color, DriverTagColors

_UINT32_MASK = 0xFFFFFFFF


class ConnectionStatus(enum.IntEnum):
    DISCONNECTED = 0
    CONNECTED = 1
    IN_SESSION = 2


class SessionType(enum.IntEnum):
    UNKNOWN = 0
    PRACTICE = 1
    QUALIFY = 2
    RACE = 3


class DriverFlags(enum.IntFlag):
    """Behaviour flags that can be attached to a driver."""

    UNKNOWN = 0
    CLEAN_DRIVER = 1
    AGGRESSIVE = 2
    DIRTY_DRIVER = 4
    RAMMER = 8
    BLOCKING = 16
    UNSAFE_REJOIN = 32
    GOOD_RACER = 64
    NEWBIE = 128


class DriverTrustLevel(enum.IntEnum):
    AVOID = 0
    CAUTION = 1
    NEUTRAL = 2
    TRUSTED = 3


class AppView(enum.IntEnum):
    """Main views of the tagging interface."""

    DRIVERS_WITH_FLAGS = 0
    CURRENT_SESSION = 1


class IconPaths:
    """Paths of the behaviour icon images."""

    CLEAN_RACING = "Assets/Icons/clean_driver.png"
    FAIR_PLAY = "Assets/Icons/good_racer.png"
    AGGRESSIVE = "Assets/Icons/aggressive.png"
    RECKLESS = "Assets/Icons/dirty_driver.png"
    ROOKIE_FRIENDLY = "Assets/Icons/newbie.png"
    PROFESSIONAL = "Assets/Icons/professional.png"
    HELPFUL = "Assets/Icons/helpful.png"
    FAST = "Assets/Icons/fast.png"
    TEAM_PLAYER = "Assets/Icons/team_player.png"
    INCONSISTENT = "Assets/Icons/inconsistent.png"

    ICON_CLEAN_DRIVER = CLEAN_RACING
    ICON_GOOD_RACER = FAIR_PLAY
    ICON_AGGRESSIVE = AGGRESSIVE
    ICON_DIRTY_DRIVER = RECKLESS
    ICON_RAMMER = RECKLESS
    ICON_BLOCKING = AGGRESSIVE
    ICON_UNSAFE_REJOIN = RECKLESS
    ICON_NEWBIE = ROOKIE_FRIENDLY


@dataclass
class DriverData:
    """A driver as seen in the current session."""

    car_idx: int = -1
    customer_id: int = -1
    user_name: str = ""
    display_name: str = ""
    car_number: str = ""
    irating: int = 0
    license_string: str = ""
    license_level: str = "D"
    safety_rating: float = 0.0
    position: int = 0
    lap_dist_pct: float = 0.0
    is_player: bool = False
    is_valid: bool = False
    gap_to_player: float = 999.0
    distance_to_player: float = 0.0
    is_ahead: bool = False


_WARNING_FLAGS = (
    DriverFlags.DIRTY_DRIVER
    | DriverFlags.RAMMER
    | DriverFlags.BLOCKING
    | DriverFlags.UNSAFE_REJOIN
)


@dataclass
class DriverReputation:
    """What the user has recorded about one driver."""

    customer_id: int = -1
    user_name: str = ""
    trust_level: DriverTrustLevel = DriverTrustLevel.NEUTRAL
    notes: str = ""
    last_updated: int = 0
    behavior_flags: int = 0
    encounter_count: int = 0
    last_seen: str = ""
    trust_score: float = 0.5

    def has_behavior(self, behavior: DriverFlags) -> bool:
        return (self.behavior_flags & int(behavior)) != 0

    def add_behavior(self, behavior: DriverFlags) -> None:
        self.behavior_flags = (self.behavior_flags | int(behavior)) & _UINT32_MASK

    def remove_behavior(self, behavior: DriverFlags) -> None:
        self.behavior_flags = self.behavior_flags & ~int(behavior) & _UINT32_MASK

    def has_warning_flags(self) -> bool:
        return (self.behavior_flags & int(_WARNING_FLAGS)) != 0

    def is_positive(self) -> bool:
        return self.has_behavior(DriverFlags.CLEAN_DRIVER) or self.has_behavior(
            DriverFlags.GOOD_RACER
        )


_WARNING_SUFFIXES = (
    (DriverFlags.DIRTY_DRIVER, " - DIRTY DRIVER"),
    (DriverFlags.RAMMER, " - RAMMER"),
    (DriverFlags.AGGRESSIVE, " - AGGRESSIVE"),
    (DriverFlags.BLOCKING, " - BLOCKER"),
    (DriverFlags.UNSAFE_REJOIN, " - UNSAFE REJOINS"),
    (DriverFlags.NEWBIE, " - ROOKIE"),
)

_WARNING_COLORS = (
    (DriverFlags.RAMMER, 0xFF0000FF),
    (DriverFlags.DIRTY_DRIVER, 0xFF4444FF),
    (DriverFlags.AGGRESSIVE, 0xFFAA00FF),
    (DriverFlags.BLOCKING, 0xFFFF00FF),
    (DriverFlags.NEWBIE, 0x00FFFFFF),
)


@dataclass
class ProximityWarning:
    """A flagged driver who is close to the player on track."""

    driver: DriverData = field(default_factory=DriverData)
    reputation: DriverReputation = field(default_factory=DriverReputation)
    time_nearby: float = 0.0
    is_active: bool = True

    def warning_text(self) -> str:
        text = f"{self.driver.display_name} (#{self.driver.car_number})"
        for flag, suffix in _WARNING_SUFFIXES:
            if self.reputation.has_behavior(flag):
                return text + suffix
        return text

    def warning_color(self) -> int:
        for flag, color in _WARNING_COLORS:
            if self.reputation.has_behavior(flag):
                return color
        return 0xFFFFFFFF


_FLAG_NAMES = {
    DriverFlags.CLEAN_DRIVER: "Clean Driver",
    DriverFlags.AGGRESSIVE: "Aggressive",
    DriverFlags.DIRTY_DRIVER: "Dirty Driver",
    DriverFlags.RAMMER: "Rammer",
    DriverFlags.BLOCKING: "Blocking",
    DriverFlags.UNSAFE_REJOIN: "Unsafe Rejoin",
    DriverFlags.GOOD_RACER: "Good Racer",
    DriverFlags.NEWBIE: "Newbie",
}


def driver_flags_to_string(behavior: DriverFlags) -> str:
    """Return the display name of a single behaviour flag."""
    return _FLAG_NAMES.get(behavior, "Unknown")


@dataclass
class TagInfo:
    """A behaviour tag that can be toggled on a driver."""

    behavior: DriverFlags
    name: str
    icon_path: str | None
    color: Color
    description: str
    icon_texture: Any = None


def default_tags() -> list[TagInfo]:
    """Return the tags offered by the tagging interface, in display order."""
    return [
        TagInfo(DriverFlags.CLEAN_DRIVER, "Clean Driver", IconPaths.ICON_CLEAN_DRIVER,
                DriverTagColors.CLEAN_DRIVER, "Piloto limpio y respetuoso"),
        TagInfo(DriverFlags.GOOD_RACER, "Good Racer", IconPaths.ICON_GOOD_RACER,
                DriverTagColors.GOOD_RACER, "Excelente piloto, recomendado"),
        TagInfo(DriverFlags.AGGRESSIVE, "Aggressive", IconPaths.ICON_AGGRESSIVE,
                DriverTagColors.AGGRESSIVE, "Agresivo pero justo"),
        TagInfo(DriverFlags.DIRTY_DRIVER, "Dirty Driver", IconPaths.ICON_DIRTY_DRIVER,
                DriverTagColors.DIRTY_DRIVER, "Piloto sucio"),
        TagInfo(DriverFlags.RAMMER, "Rammer", IconPaths.ICON_RAMMER,
                DriverTagColors.RAMMER, "Peligroso - contacto intencional"),
        TagInfo(DriverFlags.BLOCKING, "Blocker", IconPaths.ICON_BLOCKING,
                DriverTagColors.BLOCKING, "Bloqueo excesivo"),
        TagInfo(DriverFlags.UNSAFE_REJOIN, "Unsafe Rejoin", IconPaths.ICON_UNSAFE_REJOIN,
                DriverTagColors.UNSAFE_REJOIN, "Reentradas peligrosas"),
        TagInfo(DriverFlags.NEWBIE, "Rookie", IconPaths.ICON_NEWBIE,
                DriverTagColors.NEWBIE, "Piloto novato"),
    ]