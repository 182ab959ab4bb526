"""View models for the side menu and the driver list, detail and notes panels."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import NamedTuple

from . import logger
from .colors import (
    Color,
    SpecialColors,
    Theme,
    get_irating_color,
    get_safety_rating_color,
)
from .types import AppView, DriverData, DriverReputation

ReputationLookup = Callable[[int, str], DriverReputation]
MarkDirty = Callable[[int], None]

NOTES_CAPACITY = 512
PLACEHOLDER_PREFIX = "Piloto #"
PLAYER_BANNER = ">>> (ESTE ERES TU) <<<"


@dataclass
class DriverSelection:
    """Drivers shown in a panel, the selected index and the notes edit buffer.

    The buffer holds at most ``notes_capacity - 1`` characters.
    """

    drivers: list[DriverData] = field(default_factory=list)
    selected_index: int = 0
    notes_buffer: str = ""
    notes_capacity: int = NOTES_CAPACITY

    def selected_driver(self) -> DriverData | None:
        """Return the selected driver, or None when the index is out of range."""
        if 0 <= self.selected_index < len(self.drivers):
            return self.drivers[self.selected_index]
        return None

    def _fit(self, text: str) -> str:
        return text[: max(self.notes_capacity - 1, 0)]


class _MenuEntry(NamedTuple):
    label: str
    view: AppView
    active: bool
    counter: int | None


class SideMenu:
    """Navigation between the main views."""

    width = 160.0

    def __init__(self, on_change: Callable[[AppView], None] | None = None) -> None:
        self.current_view = AppView.DRIVERS_WITH_FLAGS
        self.on_change = on_change

    def select(self, view: AppView) -> None:
        """Switch to a view and notify the listener, as a click on its button does."""
        self.current_view = AppView(view)
        if self.on_change is not None:
            self.on_change(self.current_view)

    def entries(self, flagged_count: int) -> list[_MenuEntry]:
        """Return the menu buttons in display order.

        The registered-drivers entry carries a counter when any driver is flagged.
        """
        return [
            _MenuEntry(
                "Pilotos registrados",
                AppView.DRIVERS_WITH_FLAGS,
                self.current_view == AppView.DRIVERS_WITH_FLAGS,
                flagged_count if flagged_count > 0 else None,
            ),
            _MenuEntry(
                "Sesion Actual",
                AppView.CURRENT_SESSION,
                self.current_view == AppView.CURRENT_SESSION,
                None,
            ),
        ]


class DriverListComponent:
    """The list of selectable drivers."""

    def __init__(
        self,
        selection: DriverSelection,
        on_selection_changed: Callable[[int], None] | None = None,
    ) -> None:
        self.selection = selection
        self.on_selection_changed = on_selection_changed

    @staticmethod
    def is_placeholder(driver: DriverData) -> bool:
        """True for unparsed slots: a "Piloto #" name with the synthetic customer id."""
        return (
            driver.display_name.startswith(PLACEHOLDER_PREFIX)
            and driver.customer_id == driver.car_idx + 1000
        )

    def visible_drivers(self) -> list[tuple[int, DriverData]]:
        """Return (index, driver) pairs of the drivers shown, skipping placeholders."""
        return [
            (index, driver)
            for index, driver in enumerate(self.selection.drivers)
            if not self.is_placeholder(driver)
        ]

    def real_count(self) -> int:
        """Number of drivers that are not placeholders."""
        return len(self.visible_drivers())

    def select(self, index: int) -> bool:
        """Select the driver at index; return True if the selection changed.

        A change empties the notes buffer and notifies the listener.
        """
        if not 0 <= index < len(self.selection.drivers):
            raise IndexError(f"driver index {index} out of range")
        driver = self.selection.drivers[index]
        changed = self.selection.selected_index != index
        self.selection.selected_index = index
        if changed:
            self.selection.notes_buffer = ""
            if self.on_selection_changed is not None:
                self.on_selection_changed(index)
        logger.info(f"Piloto {index} seleccionado: {driver.display_name}")
        return changed

    @staticmethod
    def button_label(driver: DriverData) -> str:
        """Label of a driver's button: position (or car slot), number and name."""
        rank = driver.position if driver.position > 0 else driver.car_idx + 1
        return f"{rank}: #{driver.car_number} {driver.display_name}"

    @staticmethod
    def tooltip_lines(driver: DriverData) -> list[str]:
        """Lines of the tooltip shown when hovering a driver."""
        lines = [
            f"Posición: {driver.position}",
            f"iRating: {driver.irating}",
            f"Licencia: {driver.license_level}",
            f"SR: {driver.safety_rating:.1f}",
        ]
        if driver.is_player:
            lines.append("(TÚ)")
        return lines


class _Field(NamedTuple):
    label: str
    value: str
    color: Color


class DriverInfoComponent:
    """Details of the selected driver."""

    def __init__(
        self,
        selection: DriverSelection,
        get_or_create_reputation: ReputationLookup,
        tags_component: object | None = None,
        notes_component: object | None = None,
    ) -> None:
        self.selection = selection
        self.get_or_create_reputation = get_or_create_reputation
        self.tags_component = tags_component
        self.notes_component = notes_component

    def fields(self) -> list[_Field]:
        """Return the labelled fields of the selected driver; empty if none is selected.

        Ensures the driver has a reputation entry. The player gets a closing banner line.
        """
        driver = self.selection.selected_driver()
        if driver is None:
            return []
        self.get_or_create_reputation(driver.customer_id, driver.display_name)
        result = [
            _Field("Nombre:", driver.display_name, Theme.TEXT),
            _Field("Numero:", "#" + driver.car_number, Theme.TEXT),
            _Field("Posicion:", str(driver.position), SpecialColors.POSITION_GOLD),
            _Field("iRating:", str(driver.irating), get_irating_color(driver.irating)),
            _Field("Licencia:", driver.license_level, Theme.TEXT),
            _Field(
                "Safety:",
                f"{driver.safety_rating:.1f}",
                get_safety_rating_color(driver.safety_rating),
            ),
        ]
        if driver.is_player:
            result.append(_Field("", PLAYER_BANNER, SpecialColors.PLAYER_HIGHLIGHT))
        return result


class DriverNotesComponent:
    """Personal notes about the selected driver."""

    def __init__(
        self,
        selection: DriverSelection,
        get_or_create_reputation: ReputationLookup,
        mark_dirty: MarkDirty,
    ) -> None:
        self.selection = selection
        self.get_or_create_reputation = get_or_create_reputation
        self.mark_dirty = mark_dirty

    def _reputation(self) -> DriverReputation | None:
        driver = self.selection.selected_driver()
        if driver is None:
            return None
        return self.get_or_create_reputation(driver.customer_id, driver.display_name)

    def _touch(self, rep: DriverReputation) -> None:
        rep.last_updated = int(time.time())
        self.mark_dirty(rep.customer_id)

    def sync_notes_to_buffer(self) -> DriverReputation | None:
        """Copy the stored notes into the buffer when the buffer is empty."""
        rep = self._reputation()
        if rep is not None and not self.selection.notes_buffer and rep.notes:
            self.selection.notes_buffer = self.selection._fit(rep.notes)
        return rep

    def edit(self, text: str) -> DriverReputation | None:
        """Apply a live edit of the notes text and mark the driver for saving."""
        rep = self.sync_notes_to_buffer()
        if rep is None:
            return None
        self.selection.notes_buffer = self.selection._fit(text)
        rep.notes = self.selection.notes_buffer
        self._touch(rep)
        return rep

    def save(self) -> DriverReputation | None:
        """Store the buffer as the driver's notes."""
        rep = self._reputation()
        if rep is None:
            return None
        rep.notes = self.selection.notes_buffer
        rep.last_updated = int(time.time())
        logger.info("Notas guardadas para: " + rep.user_name)
        self.mark_dirty(rep.customer_id)
        return rep

    def clear(self) -> DriverReputation | None:
        """Erase the driver's notes and the buffer."""
        rep = self._reputation()
        if rep is None:
            return None
        rep.notes = ""
        self.selection.notes_buffer = ""
        self._touch(rep)
        return rep