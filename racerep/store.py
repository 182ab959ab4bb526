"""State of the driver tagging window: session drivers, reputations and their storage."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from . import logger
from .icons import IconManager, IconTexture, create_fallback_icon
from .panels import DriverSelection, SideMenu
from .persistence import Database, PersistenceError, ReputationRepository
from .tagging import DriverTagManager
from .types import (
    AppView,
    DriverData,
    DriverFlags,
    DriverReputation,
    DriverTrustLevel,
    TagInfo,
    default_tags,
)

DB_FILENAME = "reputation.db"
FLUSH_DEBOUNCE_SECONDS = 3
PLACEHOLDER_PREFIX = "Piloto #"
ELLIPSIS = "..."

_TRUST_WEIGHTS = (
    (DriverFlags.CLEAN_DRIVER, 3),
    (DriverFlags.GOOD_RACER, 4),
    (DriverFlags.AGGRESSIVE, 1),
    (DriverFlags.DIRTY_DRIVER, -3),
    (DriverFlags.RAMMER, -5),
    (DriverFlags.BLOCKING, -2),
    (DriverFlags.UNSAFE_REJOIN, -2),
)

_MOCK_DRIVERS = (
    (123456, "Carlos Rodriguez", "42", 2400, "A", 4.2, False),
    (789012, "Anna Thompson", "07", 1850, "B", 3.8, False),
    (345678, "Mike Johnson", "15", 1250, "C", 2.1, False),
    (901234, "Sarah Wilson", "88", 3200, "A", 4.8, True),
    (567890, "Alex Martinez", "23", 980, "D", 1.9, False),
)


def update_trust_level(reputation: DriverReputation) -> DriverTrustLevel:
    """Set a reputation's trust level from the weighted score of its flags and return it."""
    score = sum(weight for flag, weight in _TRUST_WEIGHTS if reputation.has_behavior(flag))
    if score >= 4:
        level = DriverTrustLevel.TRUSTED
    elif score >= 1:
        level = DriverTrustLevel.NEUTRAL
    elif score <= -3:
        level = DriverTrustLevel.AVOID
    elif score <= -1:
        level = DriverTrustLevel.CAUTION
    else:
        level = DriverTrustLevel.NEUTRAL
    reputation.trust_level = level
    return level


def is_placeholder_driver(driver: DriverData) -> bool:
    """True for drivers without a real name or that were never parsed as valid."""
    return (
        driver.display_name.startswith(PLACEHOLDER_PREFIX)
        or not driver.display_name
        or not driver.is_valid
    )


def truncate_text(text: str, max_width: float, measure: Callable[[str], float]) -> str:
    """Shorten text with a trailing "..." until measure says it fits in max_width."""
    if not text or measure(text) <= max_width:
        return text
    truncated = text
    while truncated and measure(truncated + ELLIPSIS) > max_width:
        truncated = truncated[:-1]
    return truncated + ELLIPSIS if truncated else ELLIPSIS


def _default_db_path() -> Path:
    return Path(sys.argv[0] or ".").resolve().parent / DB_FILENAME


class DriverTagModel:
    """Drivers of the session, their reputations and the debounced saving of changes."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self.selection = DriverSelection()
        self.reputations: dict[int, DriverReputation] = {}
        self.available_tags: list[TagInfo] = default_tags()
        self.using_real_data = False
        self.initialized = False
        self.visible = False
        self.should_close = False
        self.current_view = AppView.DRIVERS_WITH_FLAGS

        self.database = Database()
        self.repository = ReputationRepository()
        self.persistence_initialized = False
        self.reputations_dirty = False
        self._dirty_ids: list[int] = []
        self.last_flush = 0

        self.icon_manager: IconManager | None = None
        self.fallback_icon: IconTexture | None = None
        self.tag_manager: DriverTagManager | None = None
        self.side_menu: SideMenu | None = None

    def __enter__(self) -> DriverTagModel:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    @property
    def drivers(self) -> list[DriverData]:
        return self.selection.drivers

    @property
    def dirty_ids(self) -> list[int]:
        return list(self._dirty_ids)

    def _now(self) -> int:
        return int(self._clock())

    def _fallback(self) -> IconTexture:
        if self.fallback_icon is None:
            self.fallback_icon = create_fallback_icon()
        return self.fallback_icon

    def _load_icons(self) -> None:
        assert self.icon_manager is not None
        for tag in self.available_tags:
            if tag.icon_path:
                try:
                    self.icon_manager.load_icon(tag.name, tag.icon_path)
                except OSError:
                    pass
                icon = self.icon_manager.get_icon(tag.name)
                tag.icon_texture = icon.texture if icon is not None else None
                if tag.icon_texture is None:
                    logger.warning("Failed to load icon: " + tag.icon_path)
                    tag.icon_texture = self._fallback().texture
            else:
                tag.icon_texture = self._fallback().texture

    def _set_view(self, view: AppView) -> None:
        self.current_view = view

    def initialize(self, db_path: str | Path | None = None) -> bool:
        """Load icons, open storage, load sample drivers and build the panels."""
        if self.initialized:
            logger.warning("DriverTagWindow ya está inicializado")
            return True
        logger.info("Inicializando DriverTagWindow...")
        self.icon_manager = IconManager()
        self._load_icons()
        if self.init_persistence(db_path):
            logger.info("Persistencia SQLite inicializada")
        else:
            logger.warning("Persistencia SQLite deshabilitada (fallo al inicializar)")
        self.load_mock_data()
        fallback: Any = self.fallback_icon.texture if self.fallback_icon else None
        self.tag_manager = DriverTagManager(
            self.selection,
            self.reputations,
            self.available_tags,
            fallback,
            get_or_create_reputation=self.get_or_create_reputation,
            mark_dirty=self.mark_dirty,
        )
        self.tag_manager.initialize()
        self.side_menu = SideMenu(self._set_view)
        self.initialized = True
        logger.info("DriverTagWindow inicializado correctamente")
        return True

    def shutdown(self) -> None:
        """Save pending changes and release panels, icons and the database."""
        if not self.initialized:
            return
        self.flush_dirty(True)
        if self.tag_manager is not None:
            self.tag_manager.shutdown()
            self.tag_manager = None
        if self.icon_manager is not None:
            self.icon_manager.shutdown()
            self.icon_manager = None
        self.side_menu = None
        self.database.close()
        self.persistence_initialized = False
        self.initialized = False
        logger.info("DriverTagWindow cerrado correctamente")

    def init_persistence(self, db_path: str | Path | None = None) -> bool:
        """Open the reputation database and load what it holds; False if it cannot be used.

        Without a path the database lives next to the running program.
        """
        if self.persistence_initialized:
            return True
        path = Path(db_path) if db_path is not None else _default_db_path()
        try:
            self.database.open(str(path))
        except PersistenceError:
            logger.error(f"No se pudo abrir/crear la base de datos: {path}")
            return False
        try:
            self.repository.init(self.database)
        except PersistenceError:
            logger.error("No se pudo inicializar el repositorio de reputaciones")
            return False
        try:
            self.reputations.update(self.repository.load_all(self.database))
        except PersistenceError:
            logger.warning("No se pudieron cargar reputaciones existentes (continuando vacío)")
        self.persistence_initialized = True
        self.last_flush = self._now()
        return True

    def get_or_create_reputation(self, customer_id: int, user_name: str) -> DriverReputation:
        """Return the reputation of a driver, creating a neutral one if there is none."""
        rep = self.reputations.get(customer_id)
        if rep is None:
            rep = DriverReputation(
                customer_id=customer_id,
                user_name=user_name,
                behavior_flags=int(DriverFlags.UNKNOWN),
                trust_level=DriverTrustLevel.NEUTRAL,
                notes="",
                last_updated=self._now(),
                last_seen="",
            )
            self.reputations[customer_id] = rep
        return rep

    def mark_dirty(self, customer_id: int) -> None:
        """Queue a driver's reputation for saving; ignored when storage is off."""
        if not self.persistence_initialized:
            return
        if customer_id not in self._dirty_ids:
            self._dirty_ids.append(customer_id)
        self.reputations_dirty = True

    def flush_dirty(self, force: bool = False) -> int:
        """Save queued reputations and return how many were saved.

        Unless forced, nothing is saved within a few seconds of the previous save.
        """
        if not self.persistence_initialized or not self.reputations_dirty:
            return 0
        now = self._now()
        if not force and now - self.last_flush < FLUSH_DEBOUNCE_SECONDS:
            return 0
        flushed = 0
        for customer_id in self._dirty_ids:
            rep = self.reputations.get(customer_id)
            if rep is None:
                continue
            rep.last_updated = now
            if not rep.last_seen:
                rep.last_seen = time.strftime("%Y-%m-%d", time.localtime(now))
            try:
                self.repository.upsert(self.database, rep)
            except PersistenceError:
                logger.warning(f"Fallo guardando reputación para id={customer_id}")
            else:
                flushed += 1
        self._dirty_ids.clear()
        self.reputations_dirty = False
        self.last_flush = now
        if flushed:
            logger.info(f"Reputaciones guardadas: {flushed}")
        return flushed

    def update(self) -> None:
        """Periodic work: save queued reputations once the debounce time has passed."""
        if not self.initialized:
            return
        self.flush_dirty(False)

    def load_mock_data(self) -> None:
        """Replace the driver list with a fixed set of sample drivers."""
        self.using_real_data = False
        self.selection.drivers = [
            DriverData(
                customer_id=customer_id,
                display_name=name,
                car_number=number,
                car_idx=index,
                position=index + 1,
                irating=irating,
                license_level=license_level,
                safety_rating=safety,
                is_player=is_player,
                is_valid=True,
            )
            for index, (customer_id, name, number, irating, license_level, safety, is_player)
            in enumerate(_MOCK_DRIVERS)
        ]
        logger.info(f"Datos mock cargados: {len(self.selection.drivers)} pilotos")

    def update_driver_list(self, drivers: Iterable[DriverData]) -> None:
        """Replace the driver list."""
        self.selection.drivers = list(drivers)
        logger.info(f"Lista de pilotos actualizada: {len(self.selection.drivers)} pilotos")

    def _take_session(self, drivers: Iterable[DriverData]) -> None:
        self.selection.drivers = list(drivers)
        self.using_real_data = True
        for driver in self.selection.drivers:
            self.get_or_create_reputation(driver.customer_id, driver.display_name)

    def load_session_data(self, drivers: Iterable[DriverData]) -> None:
        """Take the drivers of a live session and make sure each has a reputation."""
        self._take_session(drivers)
        logger.info(f"Datos de sesión cargados: {len(self.selection.drivers)} pilotos")

    def update_session_data(self, drivers: Iterable[DriverData]) -> None:
        """Refresh the drivers of a live session during the session."""
        self._take_session(drivers)

    def get_driver_reputation(self, customer_id: int) -> DriverReputation | None:
        """Return a driver's reputation without creating one."""
        return self.reputations.get(customer_id)

    def count_drivers_with_flags(self) -> int:
        """Number of reputations with at least one behaviour flag."""
        return sum(1 for rep in self.reputations.values() if rep.behavior_flags != 0)

    def flagged_drivers(self) -> list[DriverData]:
        """Drivers built from flagged reputations, ordered by customer id."""
        result: list[DriverData] = []
        for customer_id in sorted(self.reputations):
            rep = self.reputations[customer_id]
            if rep.behavior_flags == 0:
                continue
            result.append(
                DriverData(
                    customer_id=customer_id,
                    display_name=rep.user_name,
                    car_number="DB",
                    car_idx=len(result),
                    position=0,
                    irating=0,
                    license_level="?",
                    safety_rating=0.0,
                    is_player=False,
                    is_valid=True,
                )
            )
        return result

    def drivers_for_view(self, view: AppView) -> list[DriverData]:
        """Drivers listed by a view: stored flagged drivers or the current session."""
        if view == AppView.DRIVERS_WITH_FLAGS:
            return self.flagged_drivers()
        if view == AppView.CURRENT_SESSION:
            return list(self.selection.drivers)
        raise ValueError(f"unknown view: {view!r}")