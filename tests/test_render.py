import pytest

from dynamic_color.display import DisplayColorSpace, StaticColorSpaceProvider
from dynamic_color.engine import Color, ContrastEngine
from dynamic_color.render import render
from dynamic_color.state import AppState


def test_display_space_defaults_to_p3():
    space = StaticColorSpaceProvider().current_color_space()
    assert space == DisplayColorSpace("display-p3", "Display P3")


def test_display_space_rejects_unknown():
    with pytest.raises(ValueError):
        DisplayColorSpace.named("not-a-space")
    assert DisplayColorSpace.named("SRGB").label == "sRGB"


def test_render_yellow():
    state = AppState()
    view = render(state, ContrastEngine().derive(state.color), DisplayColorSpace.named("srgb"))
    assert view["color"]["hex"] == state.color.to_hex()
    assert view["sliders"] == {"red": "0.98", "green": "0.90", "blue": "0.20"}
    assert view["luminance"] == 0.8665
    assert view["css"]["text_blend"] == "plus-darker"
    assert view["css"]["swatch_blend"] == "plus-lighter"
    assert view["color_scheme"] == "light"
    assert "text color: #000000 @ 0.50" in view["description"]
    assert view["description"][-1] == "color space: sRGB"


def test_render_dark_mode_and_p3():
    state = AppState(color=Color(0, 0, 0), dark_mode=True)
    view = render(
        state,
        ContrastEngine().derive(state.color),
        DisplayColorSpace.named("display-p3"),
        swatch_opacity=0.3,
    )
    assert view["color_scheme"] == "dark"
    assert view["css"]["text_blend"] == "plus-lighter"
    assert "display-p3" in view["css"]["swatch"]
    assert "text color: #ffffff @ 0.30" in view["description"]
