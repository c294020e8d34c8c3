from __future__ import annotations

from typing import Any

from .display import DisplayColorSpace
from .engine import CHANNELS, Color, DerivedAppearance
from .state import AppState

PAGE_OPACITY = 0.5
SWATCH_OPACITY = 0.2


def describe(color: Color) -> str:
    return f"{color.to_hex()} @ {color.opacity:.2f}"


def render(
    state: AppState,
    appearance: DerivedAppearance,
    space: DisplayColorSpace,
    *,
    swatch_opacity: float = SWATCH_OPACITY,
) -> dict[str, Any]:
    """Flatten state + derived appearance into the JSON the page paints from."""
    c = state.color
    scheme = "dark" if state.dark_mode else "light"
    fg = appearance.foreground_color
    fg_blend = appearance.foreground_blend_mode.css
    bg_blend = appearance.background_blend_mode.css
    return {
        "color": {**{ch: getattr(c, ch) for ch in CHANNELS}, "hex": c.to_hex()},
        "sliders": {ch: f"{getattr(c, ch):.2f}" for ch in CHANNELS},
        "luminance": round(appearance.luminance, 4),
        "dark_mode": state.dark_mode,
        "color_scheme": scheme,
        "color_space": {"name": space.name, "label": space.label},
        "css": {
            "page_background": c.with_opacity(PAGE_OPACITY).to_css(space.name),
            "swatch": c.with_opacity(swatch_opacity).to_css(space.name),
            "swatch_blend": bg_blend,
            "text": fg.to_css(space.name),
            "text_blend": fg_blend,
            "overlay": appearance.background_overlay_color.to_css(space.name),
        },
        "description": [
            f"text color: {describe(fg)}",
            f"text blend: {fg_blend}",
            f"bg color: {c.to_hex()}",
            f"bg blend: {bg_blend}",
            f"color scheme: {scheme}",
            f"color space: {space.label}",
        ],
    }


__all__ = ["PAGE_OPACITY", "SWATCH_OPACITY", "describe", "render"]
