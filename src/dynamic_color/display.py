"""Read-only view of the host's display colour space.

The engine works on plain sRGB channel values and never looks at the display;
only the render step uses this to tag its CSS colours (``color(display-p3 …)``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from coloraide import Color

log = logging.getLogger(__name__)

LABELS = {
    "srgb": "sRGB",
    "display-p3": "Display P3",
    "rec2020": "Rec. 2020",
    "a98-rgb": "Adobe RGB (1998)",
    "prophoto-rgb": "ProPhoto RGB",
}

DEFAULT_SPACE = "display-p3"


@dataclass(frozen=True)
class DisplayColorSpace:
    name: str
    label: str

    @classmethod
    def named(cls, name: str) -> DisplayColorSpace:
        key = (name or "").strip().lower()
        if key not in Color.CS_MAP:
            raise ValueError(f"unknown colour space '{name}'")
        return cls(key, LABELS.get(key, key))


class ColorSpaceProvider(Protocol):
    def current_color_space(self) -> DisplayColorSpace: ...


class StaticColorSpaceProvider:
    """Resolves the space once (at display attach) and serves it unchanged."""

    def __init__(self, name: str = DEFAULT_SPACE) -> None:
        self._space = DisplayColorSpace.named(name)
        log.info("Display colour space: %s", self._space.label)

    def current_color_space(self) -> DisplayColorSpace:
        return self._space


__all__ = [
    "ColorSpaceProvider",
    "DEFAULT_SPACE",
    "DisplayColorSpace",
    "LABELS",
    "StaticColorSpaceProvider",
]
