"""Session information derived from simulator state and the session string."""

from __future__ import annotations

import enum
from collections.abc import Iterable

from .types import DriverData, SessionType

_TRACK_KEY = "TrackDisplayName:"


class SessionState(enum.IntEnum):
    """Session state values reported by the simulator telemetry."""

    INVALID = 0
    GET_IN_CAR = 1
    WARMUP = 2
    PARADE_LAPS = 3
    RACING = 4
    CHECKERED = 5
    COOL_DOWN = 6


_STATE_NAMES = {
    SessionState.INVALID: "Invalid",
    SessionState.GET_IN_CAR: "GetInCar",
    SessionState.WARMUP: "Warmup",
    SessionState.PARADE_LAPS: "ParadeLaps",
    SessionState.RACING: "Racing",
    SessionState.CHECKERED: "Checkered",
    SessionState.COOL_DOWN: "CoolDown",
}


def session_state_name(state: int | None) -> str:
    """Return the display name of a session state, or "Unknown"."""
    if state is None:
        return "Unknown"
    try:
        return _STATE_NAMES[SessionState(state)]
    except (ValueError, TypeError):
        return "Unknown"


def current_session_info(session_info: str, state: int | None) -> str:
    """Summarise the session state and, when present, the track name."""
    if not session_info:
        return ""
    result = "Session: " + session_state_name(state)
    found = session_info.find(_TRACK_KEY)
    if found != -1:
        start = found + len(_TRACK_KEY)
        end = session_info.find("\n", start)
        if end != -1:
            track_name = session_info[start:end]
            if track_name:
                result += " | Track: " + track_name
    return result


def strength_of_field(drivers: Iterable[DriverData]) -> float:
    """Average iRating of the drivers that have one; 0.0 if none do."""
    ratings = [d.irating for d in drivers if d.irating > 0]
    if not ratings:
        return 0.0
    return float(sum(ratings)) / len(ratings)


def determine_session_type(session_info: str) -> SessionType:
    """Classify a session by the first keyword found: practice, qualify, then race."""
    if "Practice" in session_info:
        return SessionType.PRACTICE
    if "Qualify" in session_info:
        return SessionType.QUALIFY
    if "Race" in session_info:
        return SessionType.RACE
    return SessionType.UNKNOWN