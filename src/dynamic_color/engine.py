# engine.py – luminance heuristic → contrasting text / overlay colours + blend modes
#   - BT.709 weights applied straight to gamma-encoded channels (no linearisation)
#   - black/white polarity picked at a single luminance threshold
#   - lighten/darken ("plus-lighter"/"plus-darker") variants for the blend modes

from __future__ import annotations

import enum
import string
from dataclasses import dataclass, replace
from typing import Any, Mapping

import numpy as np
from coloraide import Color as CAColor

# --- constants ---------------------------------------------------------------
BT709 = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)
CHANNELS = ("red", "green", "blue")
RANDOM_STEPS = 2**53  # closed grid over [0, 1], both ends reachable


def canon_hex(s: str) -> str:
    """Normalize to '#rrggbb'; accept 3- or 6-digit hex only."""
    raw = (s or "").strip().lstrip("#")
    if len(raw) == 3 and all(c in string.hexdigits for c in raw):
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6 or not all(c in string.hexdigits for c in raw):
        raise ValueError("hex must be 3 or 6 hex digits")
    return "#" + raw.lower()


def _unit(name: str, v: float) -> float:
    v = float(v)
    if not 0.0 <= v <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {v!r}")
    return v


@dataclass(frozen=True)
class Color:
    red: float
    green: float
    blue: float
    opacity: float = 1.0

    def __post_init__(self) -> None:
        for name in CHANNELS + ("opacity",):
            object.__setattr__(self, name, _unit(name, getattr(self, name)))

    @property
    def rgb(self) -> np.ndarray:
        return np.array([self.red, self.green, self.blue], dtype=np.float64)

    def with_opacity(self, opacity: float) -> Color:
        return replace(self, opacity=opacity)

    def with_channel(self, channel: str, value: float) -> Color:
        if channel not in CHANNELS:
            raise ValueError(f"unknown channel '{channel}'")
        return replace(self, **{channel: value})

    @classmethod
    def from_hex(cls, s: str, opacity: float = 1.0) -> Color:
        r, g, b = CAColor(canon_hex(s)).convert("srgb").coords()
        return cls(r, g, b, opacity)

    def _ca(self) -> CAColor:
        return CAColor("srgb", self.rgb.tolist(), self.opacity)

    def to_hex(self) -> str:
        """'#rrggbb' of the channels; opacity is not encoded."""
        return CAColor("srgb", self.rgb.tolist()).to_string(hex=True)

    def to_css(self, space: str = "srgb") -> str:
        """CSS colour string, tagged in `space` (e.g. 'color(display-p3 …)')."""
        if space == "srgb":
            return self._ca().to_string(comma=True, precision=4)
        return self._ca().convert(space).to_string(precision=4)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
DEFAULT_COLOR = Color(0.98, 0.9, 0.2)


class BlendMode(enum.Enum):
    NORMAL = "normal"
    PLUS_LIGHTER = "plus-lighter"  # lighten variant
    PLUS_DARKER = "plus-darker"  # darken variant

    @property
    def css(self) -> str:
        return self.value

    def inverse(self) -> BlendMode:
        if self is BlendMode.PLUS_LIGHTER:
            return BlendMode.PLUS_DARKER
        if self is BlendMode.PLUS_DARKER:
            return BlendMode.PLUS_LIGHTER
        return self


@dataclass(frozen=True)
class EngineConfig:
    text_black_opacity: float = 0.5
    text_white_opacity: float = 0.3
    overlay_opacity: float = 0.75
    threshold: float = 0.5
    unify_midpoint: bool = False

    def __post_init__(self) -> None:
        for name in ("text_black_opacity", "text_white_opacity", "overlay_opacity", "threshold"):
            object.__setattr__(self, name, _unit(name, getattr(self, name)))

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> EngineConfig:
        """Build from Flask-style upper-case config keys; missing keys keep defaults."""
        kwargs: dict[str, Any] = {}
        for key in ("TEXT_BLACK_OPACITY", "TEXT_WHITE_OPACITY", "OVERLAY_OPACITY", "THRESHOLD"):
            if cfg.get(key) is not None:
                kwargs[key.lower()] = float(cfg[key])
        if cfg.get("UNIFY_MIDPOINT") is not None:
            kwargs["unify_midpoint"] = bool(cfg["UNIFY_MIDPOINT"])
        return cls(**kwargs)


@dataclass(frozen=True)
class DerivedAppearance:
    luminance: float
    foreground_color: Color
    foreground_blend_mode: BlendMode
    background_overlay_color: Color
    background_blend_mode: BlendMode


class ContrastEngine:
    """Stateless colour → appearance mapping; `config` only holds constants."""

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    # ---- polarity ----

    def _is_light(self, lum: float) -> bool:
        return lum >= self.config.threshold

    def _blend_is_light(self, lum: float) -> bool:
        # The colour branch flips at >= but the blend branch at >, so a colour
        # exactly on the threshold gets black text with the lighten blend.
        if self.config.unify_midpoint:
            return lum >= self.config.threshold
        return lum > self.config.threshold

    # ---- operations ----

    @staticmethod
    def luminance(color: Color) -> float:
        # left-to-right sum: (r*wr + g*wg) + b*wb
        w_r, w_g, w_b = BT709
        return float((w_r * color.red + w_g * color.green) + w_b * color.blue)

    def foreground_color(self, color: Color) -> Color:
        return self._foreground(self.luminance(color))

    def foreground_blend_mode(self, color: Color) -> BlendMode:
        return self._foreground_blend(self.luminance(color))

    def background_blend_mode(self, color: Color) -> BlendMode:
        return self._foreground_blend(self.luminance(color)).inverse()

    def background_overlay_color(self, color: Color) -> Color:
        return self._overlay(self.luminance(color))

    def derive(self, color: Color) -> DerivedAppearance:
        return self.appearance_for_luminance(self.luminance(color))

    def appearance_for_luminance(self, lum: float) -> DerivedAppearance:
        fg_blend = self._foreground_blend(lum)
        return DerivedAppearance(
            luminance=lum,
            foreground_color=self._foreground(lum),
            foreground_blend_mode=fg_blend,
            background_overlay_color=self._overlay(lum),
            background_blend_mode=fg_blend.inverse(),
        )

    # ---- internals ----

    def _foreground(self, lum: float) -> Color:
        if self._is_light(lum):
            return BLACK.with_opacity(self.config.text_black_opacity)
        return WHITE.with_opacity(self.config.text_white_opacity)

    def _foreground_blend(self, lum: float) -> BlendMode:
        return BlendMode.PLUS_DARKER if self._blend_is_light(lum) else BlendMode.PLUS_LIGHTER

    def _overlay(self, lum: float) -> Color:
        base = BLACK if self._is_light(lum) else WHITE
        return base.with_opacity(self.config.overlay_opacity)


def random_color(
    rng: np.random.Generator | None = None, *, opacity: float = 1.0
) -> Color:
    """Each channel drawn independently and uniformly from the closed [0, 1]."""
    rng = rng if rng is not None else np.random.default_rng()
    r, g, b = rng.integers(0, RANDOM_STEPS, size=3, endpoint=True) / RANDOM_STEPS
    return Color(float(r), float(g), float(b), opacity)


_DEFAULT = ContrastEngine()


def luminance(color: Color) -> float:
    return _DEFAULT.luminance(color)


def foreground_color(color: Color) -> Color:
    return _DEFAULT.foreground_color(color)


def foreground_blend_mode(color: Color) -> BlendMode:
    return _DEFAULT.foreground_blend_mode(color)


def background_blend_mode(color: Color) -> BlendMode:
    return _DEFAULT.background_blend_mode(color)


def background_overlay_color(color: Color) -> Color:
    return _DEFAULT.background_overlay_color(color)


def derive(color: Color) -> DerivedAppearance:
    return _DEFAULT.derive(color)


__all__ = [
    "BLACK",
    "BT709",
    "BlendMode",
    "CHANNELS",
    "Color",
    "ContrastEngine",
    "DEFAULT_COLOR",
    "DerivedAppearance",
    "EngineConfig",
    "WHITE",
    "background_blend_mode",
    "background_overlay_color",
    "canon_hex",
    "derive",
    "foreground_blend_mode",
    "foreground_color",
    "luminance",
    "random_color",
]
