from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np
from flask import Flask, current_app, jsonify, render_template, request

from .display import DEFAULT_SPACE, StaticColorSpaceProvider
from .engine import CHANNELS, Color, ContrastEngine, EngineConfig
from .render import SWATCH_OPACITY, render
from .state import (
    Action,
    ApplyPreset,
    Randomize,
    SetChannel,
    SetColor,
    SetDarkMode,
    Store,
    ToggleDarkMode,
)

log = logging.getLogger(__name__)

DEFAULTS: Mapping[str, Any] = {
    "TEXT_BLACK_OPACITY": 0.5,
    "TEXT_WHITE_OPACITY": 0.3,
    "OVERLAY_OPACITY": 0.75,
    "SWATCH_OPACITY": SWATCH_OPACITY,
    "UNIFY_MIDPOINT": False,
    "DISPLAY_COLOR_SPACE": DEFAULT_SPACE,
    "RANDOM_SEED": None,
    "LOG_LEVEL": "INFO",
}

EXT_KEY = "dynamic_color"


def _unit_float(v: Any, name: str) -> float:
    try:
        x = float(v)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number") from None
    if not 0.0 <= x <= 1.0:
        raise ValueError(f"{name} must be in [0, 1]")
    return x


def parse_color(args: Mapping[str, Any]) -> Color:
    """Accept {hex} or {r,g,b} / {red,green,blue} in [0, 1]."""
    if args.get("hex"):
        return Color.from_hex(str(args["hex"]))
    vals = []
    for ch in CHANNELS:
        v = args.get(ch, args.get(ch[0]))
        if v is None:
            raise ValueError(f"missing channel '{ch}'")
        vals.append(_unit_float(v, ch))
    return Color(*vals)


def parse_color_action(body: Mapping[str, Any]) -> Action:
    if "channel" in body:
        channel = str(body["channel"]).lower()
        if channel not in CHANNELS:
            raise ValueError(f"unknown channel '{channel}'")
        return SetChannel(channel, _unit_float(body.get("value"), channel))
    return SetColor(parse_color(body))


def _json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValueError("request body must be a JSON object")
    return body


# ----------------------------- Flask app ----------------------------------


def _ctx() -> dict[str, Any]:
    return current_app.extensions[EXT_KEY]


def view_model() -> dict[str, Any]:
    ctx = _ctx()
    state = ctx["store"].state
    return render(
        state,
        ctx["engine"].derive(state.color),
        ctx["display"].current_color_space(),
        swatch_opacity=current_app.config["SWATCH_OPACITY"],
    )


def create_app(config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.update(DEFAULTS)
    app.config.from_prefixed_env("DYNAMIC_COLOR")
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=str(app.config["LOG_LEVEL"]).upper(),
        format="%(levelname)s: %(message)s",
    )

    app.config["SWATCH_OPACITY"] = _unit_float(app.config["SWATCH_OPACITY"], "SWATCH_OPACITY")
    seed = app.config["RANDOM_SEED"]
    app.extensions[EXT_KEY] = {
        "engine": ContrastEngine(EngineConfig.from_mapping(app.config)),
        "display": StaticColorSpaceProvider(app.config["DISPLAY_COLOR_SPACE"]),
        "store": Store(rng=np.random.default_rng(None if seed is None else int(seed))),
    }

    def apply(action: Action):
        try:
            _ctx()["store"].dispatch(action)
        except ValueError as exc:
            log.warning("Rejected %s: %s", type(action).__name__, exc)
            return jsonify({"error": str(exc)}), 400
        except Exception as exc:
            log.exception("State update failed")
            return jsonify({"error": str(exc)}), 500
        return jsonify(view_model())

    @app.route("/")
    def index():
        return render_template("index.html", view=view_model())

    @app.route("/state")
    def state():
        return jsonify(view_model())

    @app.route("/color", methods=["POST"])
    def color():
        try:
            action = parse_color_action(_json_body())
        except ValueError as exc:
            log.warning("Rejected colour: %s", exc)
            return jsonify({"error": str(exc)}), 400
        return apply(action)

    @app.route("/randomize", methods=["POST"])
    def randomize():
        return apply(Randomize())

    @app.route("/preset/<name>", methods=["POST"])
    def preset(name: str):
        return apply(ApplyPreset(name))

    @app.route("/dark-mode", methods=["POST"])
    def dark_mode():
        try:
            body = _json_body()
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400
        if "dark_mode" in body:
            if not isinstance(body["dark_mode"], bool):
                return jsonify({"error": "dark_mode must be a boolean"}), 400
            return apply(SetDarkMode(body["dark_mode"]))
        return apply(ToggleDarkMode())

    @app.route("/appearance")
    def appearance():
        try:
            c = parse_color(request.args)
        except ValueError as exc:
            return jsonify({"error": f"invalid color: {exc}"}), 400
        engine: ContrastEngine = _ctx()["engine"]
        a = engine.derive(c)
        return jsonify(
            {
                "color": c.to_hex(),
                "luminance": a.luminance,
                "foreground_color": {
                    "hex": a.foreground_color.to_hex(),
                    "opacity": a.foreground_color.opacity,
                },
                "foreground_blend_mode": a.foreground_blend_mode.css,
                "background_overlay_color": {
                    "hex": a.background_overlay_color.to_hex(),
                    "opacity": a.background_overlay_color.opacity,
                },
                "background_blend_mode": a.background_blend_mode.css,
            }
        )

    return app


if __name__ == "__main__":
    create_app().run(debug=False, threaded=False)
