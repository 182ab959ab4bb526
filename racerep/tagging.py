"""Behaviour tag toggling and the manager that wires the driver tagging panels together."""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Sequence
from typing import Any

from . import logger
from .panels import (
    DriverInfoComponent,
    DriverListComponent,
    DriverNotesComponent,
    DriverSelection,
    MarkDirty,
    ReputationLookup,
)
from .types import DriverFlags, DriverReputation, DriverTrustLevel, TagInfo

COLUMN_WIDTH = 170.0
MIN_COLUMNS = 1
MAX_COLUMNS = 6

BUTTON_WIDTH = 160.0
BUTTON_HEIGHT = 56.0
BUTTON_PADDING = 8.0
ICON_SIZE = 32.0
MIN_TEXT_WIDTH = 10.0
ELLIPSIS = "..."

_AVOID = (DriverFlags.RAMMER, DriverFlags.DIRTY_DRIVER)
_CAUTION = (DriverFlags.AGGRESSIVE, DriverFlags.BLOCKING, DriverFlags.UNSAFE_REJOIN)
_TRUSTED = (DriverFlags.CLEAN_DRIVER, DriverFlags.GOOD_RACER)


def columns_for_width(width: float) -> int:
    """Number of tag buttons per row that fit in the given width, between 1 and 6."""
    columns = math.floor(width / COLUMN_WIDTH)
    return min(max(columns, MIN_COLUMNS), MAX_COLUMNS)


def shrink_to_fit(text: str, max_width: float, measure: Callable[[str], float]) -> str:
    """Cut characters off the end of text until measure says it fits in max_width.

    Text that is down to four characters and still too wide becomes "...".
    """
    result = text
    while result and measure(result) > max_width:
        if len(result) <= 4:
            result = ELLIPSIS
            break
        result = result[:-1]
    if measure(result) > max_width and len(result) > 3:
        result = ELLIPSIS
    return result


def trust_level_from_flags(reputation: DriverReputation) -> DriverTrustLevel:
    """Trust level implied by a reputation's behaviour flags; negative flags win."""
    if any(reputation.has_behavior(flag) for flag in _AVOID):
        return DriverTrustLevel.AVOID
    if any(reputation.has_behavior(flag) for flag in _CAUTION):
        return DriverTrustLevel.CAUTION
    if any(reputation.has_behavior(flag) for flag in _TRUSTED):
        return DriverTrustLevel.TRUSTED
    return DriverTrustLevel.NEUTRAL


def _ignore_dirty(customer_id: int) -> None:
    return None


class DriverTagsComponent:
    """The behaviour tag buttons of the selected driver."""

    def __init__(
        self,
        selection: DriverSelection,
        available_tags: Sequence[TagInfo],
        get_or_create_reputation: ReputationLookup,
        mark_dirty: MarkDirty,
        fallback_icon: Any = None,
    ) -> None:
        self.selection = selection
        self.available_tags = available_tags
        self.get_or_create_reputation = get_or_create_reputation
        self.mark_dirty = mark_dirty
        self.fallback_icon = fallback_icon

    def _reputation(self) -> DriverReputation | None:
        driver = self.selection.selected_driver()
        if driver is None:
            return None
        return self.get_or_create_reputation(driver.customer_id, driver.display_name)

    def toggle_tag(self, tag: TagInfo) -> DriverReputation | None:
        """Switch a tag on or off for the selected driver, as a click on its button does.

        Adding a tag stamps the update time and recomputes the trust level; removing
        one leaves the trust level as it was. Returns None when no driver is selected.
        """
        driver = self.selection.selected_driver()
        rep = self._reputation()
        if driver is None or rep is None:
            return None
        if rep.has_behavior(tag.behavior):
            rep.remove_behavior(tag.behavior)
            logger.info(f"Piloto {driver.display_name} - removido tag: {tag.name}")
        else:
            rep.add_behavior(tag.behavior)
            rep.last_updated = int(time.time())
            logger.info(f"Piloto {driver.display_name} - agregado tag: {tag.name}")
            rep.trust_level = trust_level_from_flags(rep)
        self.mark_dirty(rep.customer_id)
        return rep

    def active_tags(self) -> list[TagInfo]:
        """Tags set on the selected driver, in the order they are offered."""
        rep = self._reputation()
        if rep is None or rep.behavior_flags == 0:
            return []
        return [tag for tag in self.available_tags if rep.has_behavior(tag.behavior)]


class DriverTagManager:
    """Builds the list, detail, tag and notes panels over one shared selection."""

    def __init__(
        self,
        selection: DriverSelection,
        reputations: dict[int, DriverReputation],
        available_tags: Sequence[TagInfo],
        fallback_icon: Any = None,
        get_or_create_reputation: ReputationLookup | None = None,
        mark_dirty: MarkDirty | None = None,
        update_trust_level: Callable[[DriverReputation], None] | None = None,
    ) -> None:
        self.selection = selection
        self.reputations = reputations
        self.available_tags = available_tags
        self.fallback_icon = fallback_icon
        self.get_or_create_reputation = get_or_create_reputation
        self.mark_dirty = mark_dirty
        self.update_trust_level = update_trust_level
        self.list_component: DriverListComponent | None = None
        self.info_component: DriverInfoComponent | None = None
        self.tags_component: DriverTagsComponent | None = None
        self.notes_component: DriverNotesComponent | None = None

    def _lookup(self, customer_id: int, user_name: str) -> DriverReputation:
        if self.get_or_create_reputation is not None:
            return self.get_or_create_reputation(customer_id, user_name)
        return self.reputations.setdefault(customer_id, DriverReputation())

    def _dirty(self, customer_id: int) -> None:
        (self.mark_dirty or _ignore_dirty)(customer_id)

    def _on_selection_changed(self, index: int) -> None:
        self.selection.selected_index = index

    @property
    def initialized(self) -> bool:
        return self.list_component is not None

    def initialize(self) -> None:
        """Create the panels and link the tag and notes panels into the detail panel."""
        self.list_component = DriverListComponent(
            self.selection, on_selection_changed=self._on_selection_changed
        )
        self.tags_component = DriverTagsComponent(
            self.selection,
            self.available_tags,
            self._lookup,
            self._dirty,
            self.fallback_icon,
        )
        self.notes_component = DriverNotesComponent(self.selection, self._lookup, self._dirty)
        self.info_component = DriverInfoComponent(
            self.selection,
            self._lookup,
            tags_component=self.tags_component,
            notes_component=self.notes_component,
        )

    def shutdown(self) -> None:
        """Drop every panel."""
        self.list_component = None
        self.info_component = None
        self.tags_component = None
        self.notes_component = None

    def select_driver(self, index: int) -> bool:
        """Select a driver through the list panel; True if the selection changed."""
        if self.list_component is None:
            raise RuntimeError("tag manager is not initialized")
        return self.list_component.select(index)