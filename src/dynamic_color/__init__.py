from .engine import (
    BLACK,
    DEFAULT_COLOR,
    WHITE,
    BlendMode,
    Color,
    ContrastEngine,
    DerivedAppearance,
    EngineConfig,
    background_blend_mode,
    background_overlay_color,
    derive,
    foreground_blend_mode,
    foreground_color,
    luminance,
    random_color,
)

__all__ = [
    "BLACK",
    "BlendMode",
    "Color",
    "ContrastEngine",
    "DEFAULT_COLOR",
    "DerivedAppearance",
    "EngineConfig",
    "WHITE",
    "background_blend_mode",
    "background_overlay_color",
    "derive",
    "foreground_blend_mode",
    "foreground_color",
    "luminance",
    "random_color",
]
