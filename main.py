"""
main.py — Maze Pathfinding Visualizer Flask App
================================================
JSON front door to the MazeSession.  A renderer polls /api/state and
draws the rows; everything else is an input.

Routes:
  GET  /api/state               – grid rows + session status
  GET  /api/algorithms          – registered algorithms
  GET  /api/results             – latest comparison (ranked + best)
  POST /api/start               – place Start            {row, col}
  POST /api/end                 – place End              {row, col}
  POST /api/wall                – set / clear a wall     {row, col, wall}
  POST /api/cell/clear          – drop marker or wall    {row, col}
  POST /api/run                 – run one algo or "ALL"  {algorithm}
  POST /api/clear               – cancel, wipe, re-roll walls
  POST /api/walls/generate      – new random walls
  POST /api/config/density      – wall density           {density}
  POST /api/config/speed        – pacing preset          {speed}

Configuration lives in app.config (ROWS, WALL_DENSITY, SPEED, SEED) and
can be overridden from the environment with a MAZE_ prefix, e.g.
MAZE_ROWS=40 MAZE_SPEED=fast.
"""

import logging
import os
from typing import Optional, Tuple

from flask import Flask, current_app, jsonify, request

from grid import ROWS
from algorithms import list_algorithms
from engine import MazeSession, RUN_ALL
from engine.session import DEFAULT_WALL_DENSITY
from engine.stepper import DEFAULT_SPEED


DEFAULT_CONFIG = {
    "ROWS":         ROWS,
    "WALL_DENSITY": DEFAULT_WALL_DENSITY,
    "SPEED":        DEFAULT_SPEED,
    "SEED":         None,
}


class BadRequest(ValueError):
    """Malformed request body."""


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[dict] = None, session: Optional[MazeSession] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env("MAZE")
    if config:
        app.config.from_mapping(config)

    if session is None:
        session = MazeSession(
            rows=app.config["ROWS"],
            wall_density=app.config["WALL_DENSITY"],
            speed=app.config["SPEED"],
            seed=app.config["SEED"],
        )
    app.extensions["maze_session"] = session

    app.register_error_handler(BadRequest, _bad_request)
    _register_routes(app)
    return app


def get_session() -> MazeSession:
    return current_app.extensions["maze_session"]


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def _body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("Expected a JSON object")
    return data


def _coords(data: dict) -> Tuple[int, int]:
    try:
        row, col = data["row"], data["col"]
    except KeyError as e:
        raise BadRequest(f"Missing field: {e.args[0]}")
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (row, col)):
        raise BadRequest("row and col must be integers")
    return row, col


def _outcome(accepted: bool):
    session = get_session()
    return jsonify({"accepted": accepted, "notice": session.notice, **session.status()})


def _bad_request(error: BadRequest):
    current_app.logger.debug("Bad request: %s", error)
    return jsonify({"error": str(error)}), 400


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def _register_routes(app: Flask) -> None:

    @app.route("/api/state")
    def api_state():
        session = get_session()
        return jsonify({"grid": session.to_rows(), **session.status()})

    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify([
            {
                "key":         a.key,
                "name":        a.name,
                "label":       a.label,
                "optimal":     a.optimal,
                "tags":        a.tags,
                "complexity":  {"time": a.complexity_time, "space": a.complexity_space},
                "description": a.description,
            }
            for a in list_algorithms()
        ])

    @app.route("/api/results")
    def api_results():
        session = get_session()
        comparison = session.last_comparison
        recorder = session.recorder
        return jsonify({
            "running":    session.running,
            "table":      recorder.table() if recorder else [],
            "comparison": comparison.to_dict() if comparison else None,
        })

    # -- grid edits --
    @app.route("/api/start", methods=["POST"])
    def api_start():
        return _outcome(get_session().place_start(*_coords(_body())))

    @app.route("/api/end", methods=["POST"])
    def api_end():
        return _outcome(get_session().place_end(*_coords(_body())))

    @app.route("/api/wall", methods=["POST"])
    def api_wall():
        data = _body()
        row, col = _coords(data)
        wall = data.get("wall", True)
        if not isinstance(wall, bool):
            raise BadRequest("wall must be true or false")
        return _outcome(get_session().set_wall(row, col, wall))

    @app.route("/api/cell/clear", methods=["POST"])
    def api_cell_clear():
        return _outcome(get_session().clear_cell(*_coords(_body())))

    @app.route("/api/walls/generate", methods=["POST"])
    def api_walls_generate():
        return _outcome(get_session().generate_walls())

    # -- run / clear --
    @app.route("/api/run", methods=["POST"])
    def api_run():
        name = _body().get("algorithm", RUN_ALL)
        if not isinstance(name, str):
            raise BadRequest("algorithm must be a string")
        accepted = get_session().request_run(name)
        if accepted:
            current_app.logger.info("Run requested: %s", name)
        return _outcome(accepted)

    @app.route("/api/clear", methods=["POST"])
    def api_clear():
        return _outcome(get_session().request_clear())

    # -- config --
    @app.route("/api/config/density", methods=["POST"])
    def api_config_density():
        density = _body().get("density")
        if isinstance(density, bool) or not isinstance(density, (int, float)):
            raise BadRequest("density must be a number")
        return _outcome(get_session().set_wall_density(density))

    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        return _outcome(get_session().set_speed(str(_body().get("speed", DEFAULT_SPEED))))


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("MAZE_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app()
    app.logger.info("Maze Pathfinding Visualizer on http://localhost:5000")
    app.run(debug=False, host="0.0.0.0", port=5000, threaded=True)
