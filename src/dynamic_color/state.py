from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Callable, List, Union

import numpy as np

from .engine import BLACK, CHANNELS, DEFAULT_COLOR, WHITE, Color, random_color

log = logging.getLogger(__name__)

PRESETS = {"white": WHITE, "black": BLACK}


@dataclass(frozen=True)
class AppState:
    color: Color = DEFAULT_COLOR
    dark_mode: bool = False


# ----------------------------- actions ----------------------------------


@dataclass(frozen=True)
class SetChannel:
    channel: str
    value: float


@dataclass(frozen=True)
class SetColor:
    color: Color


@dataclass(frozen=True)
class Randomize:
    pass


@dataclass(frozen=True)
class ApplyPreset:
    name: str


@dataclass(frozen=True)
class ToggleDarkMode:
    pass


@dataclass(frozen=True)
class SetDarkMode:
    value: bool


Action = Union[SetChannel, SetColor, Randomize, ApplyPreset, ToggleDarkMode, SetDarkMode]


def reduce(
    state: AppState, action: Action, *, rng: np.random.Generator | None = None
) -> AppState:
    """Return the state that follows `action`; `state` itself is never touched."""
    if isinstance(action, SetChannel):
        if action.channel not in CHANNELS:
            raise ValueError(f"unknown channel '{action.channel}'")
        return replace(state, color=state.color.with_channel(action.channel, action.value))
    if isinstance(action, SetColor):
        return replace(state, color=action.color)
    if isinstance(action, Randomize):
        return replace(state, color=random_color(rng, opacity=state.color.opacity))
    if isinstance(action, ApplyPreset):
        try:
            preset = PRESETS[action.name.lower()]
        except KeyError:
            raise ValueError(
                f"unknown preset '{action.name}' (expected one of {sorted(PRESETS)})"
            ) from None
        return replace(state, color=preset.with_opacity(state.color.opacity))
    if isinstance(action, ToggleDarkMode):
        return replace(state, dark_mode=not state.dark_mode)
    if isinstance(action, SetDarkMode):
        return replace(state, dark_mode=bool(action.value))
    raise TypeError(f"unsupported action {type(action).__name__}")


Listener = Callable[[AppState], None]


@dataclass
class Store:
    """Holds the one current AppState; `dispatch` is its only writer.

    Dispatches are serialized, so a threaded server (`flask run`) still sees
    one update at a time.
    """

    state: AppState = field(default_factory=AppState)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)
    _listeners: List[Listener] = field(default_factory=list, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def dispatch(self, action: Action) -> AppState:
        with self._lock:
            new = reduce(self.state, action, rng=self.rng)
            log.debug("%s: %s → %s", type(action).__name__, self.state, new)
            self.state = new
            for fn in list(self._listeners):
                fn(new)
        return new

    def subscribe(self, fn: Listener) -> Callable[[], None]:
        self._listeners.append(fn)

        def unsubscribe() -> None:
            if fn in self._listeners:
                self._listeners.remove(fn)

        return unsubscribe


__all__ = [
    "Action",
    "AppState",
    "ApplyPreset",
    "PRESETS",
    "Randomize",
    "SetChannel",
    "SetColor",
    "SetDarkMode",
    "Store",
    "ToggleDarkMode",
    "reduce",
]
