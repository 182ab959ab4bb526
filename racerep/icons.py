"""Loading and caching of behaviour tag icons."""

from __future__ import annotations

import os
from dataclasses import dataclass

from PIL import Image, ImageDraw

from . import logger

FALLBACK_SIZE = 32
_FALLBACK_FILL = (0x55, 0x55, 0x55, 0xFF)
_FALLBACK_BORDER = (0xAA, 0xAA, 0xAA, 0xFF)

_STANDARD_ICONS = (
    "clean_driver",
    "good_racer",
    "aggressive",
    "dirty_driver",
    "rammer",
    "blocking",
    "unsafe_rejoin",
    "newbie",
)


@dataclass
class IconTexture:
    """A decoded RGBA icon image and its size."""

    texture: Image.Image | None = None
    width: int = 0
    height: int = 0
    loaded: bool = False


class IconManager:
    """Keeps loaded icons by name."""

    def __init__(self) -> None:
        self._icons: dict[str, IconTexture] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._icons

    def load_icon(self, name: str, filepath: str | os.PathLike[str]) -> IconTexture:
        """Load an image file as an RGBA icon stored under name.

        Raises FileNotFoundError if the file is missing and OSError if it
        cannot be decoded.
        """
        path = os.fspath(filepath)
        logger.info("Attempting to load texture: " + path)
        if not os.path.isfile(path):
            logger.error("File not found: " + path)
            logger.error(f"Failed to load icon: {name} from {path}")
            raise FileNotFoundError(path)
        try:
            with Image.open(path) as source:
                image = source.convert("RGBA")
        except OSError as exc:
            logger.error(f"Failed to load icon: {name} from {path} - Error: {exc}")
            raise
        icon = IconTexture(texture=image, width=image.width, height=image.height, loaded=True)
        self._icons[name] = icon
        logger.info(f"Icon loaded: {name} ({icon.width}x{icon.height})")
        return icon

    def get_icon(self, name: str) -> IconTexture | None:
        """Return the loaded icon stored under name, or None."""
        icon = self._icons.get(name)
        if icon is not None and icon.loaded:
            return icon
        return None

    def load_all_icons(self, icon_dir: str | os.PathLike[str] = "Assets/Icons") -> bool:
        """Try to load every standard tag icon; True only if all of them loaded."""
        all_loaded = True
        for name in _STANDARD_ICONS:
            try:
                self.load_icon(name, os.path.join(os.fspath(icon_dir), name + ".png"))
            except OSError:
                all_loaded = False
        if all_loaded:
            logger.info("All icons loaded successfully")
        else:
            logger.warning("Some icons failed to load, falling back to text")
        return all_loaded

    def shutdown(self) -> None:
        """Release every loaded icon."""
        for icon in self._icons.values():
            if icon.texture is not None:
                icon.texture.close()
        self._icons.clear()


def create_fallback_icon() -> IconTexture:
    """Make the generic 32x32 grey icon with a light border used when a file is missing."""
    image = Image.new("RGBA", (FALLBACK_SIZE, FALLBACK_SIZE), _FALLBACK_FILL)
    ImageDraw.Draw(image).rectangle(
        [0, 0, FALLBACK_SIZE - 1, FALLBACK_SIZE - 1], outline=_FALLBACK_BORDER, width=1
    )
    return IconTexture(texture=image, width=FALLBACK_SIZE, height=FALLBACK_SIZE, loaded=True)