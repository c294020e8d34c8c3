import threading

import numpy as np
import pytest

from dynamic_color.engine import DEFAULT_COLOR, Color
from dynamic_color.state import (
    AppState,
    ApplyPreset,
    Randomize,
    SetChannel,
    SetColor,
    SetDarkMode,
    Store,
    ToggleDarkMode,
    reduce,
)


def test_initial_state():
    s = AppState()
    assert s.color == DEFAULT_COLOR
    assert s.dark_mode is False


def test_set_channel_returns_new_state():
    s0 = AppState()
    s1 = reduce(s0, SetChannel("green", 0.1))
    assert s1.color == Color(0.98, 0.1, 0.2)
    assert s0.color == DEFAULT_COLOR
    assert s1 is not s0


def test_set_channel_rejects_bad_input():
    with pytest.raises(ValueError):
        reduce(AppState(), SetChannel("alpha", 0.5))
    with pytest.raises(ValueError):
        reduce(AppState(), SetChannel("red", 1.5))


def test_set_color():
    c = Color(0.1, 0.2, 0.3)
    assert reduce(AppState(), SetColor(c)).color == c


def test_presets():
    assert reduce(AppState(), ApplyPreset("white")).color == Color(1, 1, 1)
    assert reduce(AppState(), ApplyPreset("Black")).color == Color(0, 0, 0)
    with pytest.raises(ValueError):
        reduce(AppState(), ApplyPreset("magenta"))


def test_randomize_is_seeded_and_keeps_opacity():
    s0 = AppState(color=Color(0.5, 0.5, 0.5, 0.7))
    a = reduce(s0, Randomize(), rng=np.random.default_rng(42))
    b = reduce(s0, Randomize(), rng=np.random.default_rng(42))
    assert a == b
    assert a.color.opacity == pytest.approx(0.7)
    assert a.dark_mode is s0.dark_mode


def test_dark_mode_is_orthogonal_to_color():
    s0 = AppState()
    s1 = reduce(s0, ToggleDarkMode())
    assert s1.dark_mode is True
    assert s1.color == s0.color
    assert reduce(s1, ToggleDarkMode()).dark_mode is False
    assert reduce(s1, SetDarkMode(True)).dark_mode is True


def test_unknown_action():
    with pytest.raises(TypeError):
        reduce(AppState(), object())


def test_store_dispatch_notifies_and_unsubscribes():
    store = Store(rng=np.random.default_rng(3))
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.dispatch(ApplyPreset("black"))
    assert store.state.color == Color(0, 0, 0)
    assert seen == [store.state]
    unsubscribe()
    store.dispatch(ToggleDarkMode())
    assert len(seen) == 1
    assert store.state.dark_mode is True


def test_store_keeps_state_on_error():
    store = Store()
    before = store.state
    with pytest.raises(ValueError):
        store.dispatch(ApplyPreset("nope"))
    assert store.state is before


def test_store_serializes_concurrent_dispatch():
    store = Store()
    seen = []
    store.subscribe(lambda s: seen.append(s.dark_mode))

    def toggle_many():
        for _ in range(250):
            store.dispatch(ToggleDarkMode())

    threads = [threading.Thread(target=toggle_many) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 2000
    assert store.state.dark_mode is False
    assert seen == [i % 2 == 0 for i in range(2000)]
