from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, send_from_directory

from chatnoir_core.board import Board, Position, in_bounds
from chatnoir_core.state import GameState
from chatnoir_core.deal import deal_board
from chatnoir_core.moves import valid_cat_moves
from chatnoir_core.ai import depth_from_env, search
from chatnoir_core.turn import Phase, phase_of, play_fence_turn
from chatnoir_core.db import (
    CAT_WINS,
    PLAYER_WINS,
    db_increment_score,
    db_load_scores,
    db_reset_scores,
)

logger = logging.getLogger(__name__)

DEFAULT_DB = os.getenv("CHATNOIR_DB", "data/chatnoir.db")
# Full-width search grows quickly with depth; keep HTTP requests bounded.
MAX_SEARCH_DEPTH = 4

STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))
app = Flask(__name__, static_url_path="/static", static_folder=STATIC_DIR)
app.config.setdefault("CHATNOIR_DB", DEFAULT_DB)


class ApiError(ValueError):
    pass


def _db_path() -> str:
    return app.config["CHATNOIR_DB"]


def _json_body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ApiError("JSON object required")
    return body


def _as_int(value: Any, what: str) -> int:
    # bool is an int subclass; JSON true/false is not a coordinate.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ApiError(f"{what} must be an integer, got {value!r}")
    return value


def _as_pair(obj: Any, what: str) -> Position:
    try:
        r, c = obj
    except (TypeError, ValueError) as e:
        raise ApiError(f"bad {what}: {obj!r}") from e
    return Position(_as_int(r, f"{what} row"), _as_int(c, f"{what} col"))


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {"rows": s.board.to_rows(), "cat": [int(s.cat.row), int(s.cat.col)]}


def json_to_state(obj: Any) -> GameState:
    if not isinstance(obj, dict):
        raise ApiError("state required")
    rows = obj.get("rows")
    if not isinstance(rows, list) or not all(isinstance(line, str) for line in rows):
        raise ApiError("bad state: rows must be a list of strings")
    try:
        board = Board.from_rows(rows)
    except ValueError as e:
        raise ApiError(f"bad state: {e}") from e
    state = GameState(board=board, cat=_as_pair(obj.get("cat"), "cat"))
    if not state.is_consistent():
        raise ApiError("bad state: cat position does not match board")
    return state


def _parse_depth(body: Dict[str, Any]) -> int:
    depth = _as_int(body.get("depth", depth_from_env()), "depth")
    if depth < 1 or depth > MAX_SEARCH_DEPTH:
        raise ApiError(f"depth must be between 1 and {MAX_SEARCH_DEPTH}")
    return depth


def _game_payload(state: GameState, phase: Phase, cat_move: Optional[Position] = None) -> Dict[str, Any]:
    return {
        "ok": True,
        "state": state_to_json(state),
        "phase": phase.value,
        "catMoves": [list(p) for p in valid_cat_moves(state)],
        "catMove": list(cat_move) if cat_move is not None else None,
        "scores": db_load_scores(_db_path()),
    }


@app.errorhandler(ApiError)
def _api_error(e: ApiError) -> Any:
    return jsonify({"ok": False, "error": str(e)}), 400


# ---------- Static routes ----------

@app.get("/")
def index() -> Any:
    return send_from_directory(app.static_folder, "index.html")


@app.get("/main.js")
def main_js() -> Any:
    resp = send_from_directory(app.static_folder, "main.js")
    resp.headers["Content-Type"] = "application/javascript; charset=utf-8"
    return resp


@app.get("/styles.css")
def styles_css() -> Any:
    resp = send_from_directory(app.static_folder, "styles.css")
    resp.headers["Content-Type"] = "text/css; charset=utf-8"
    return resp


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    seed = body.get("seed", None)
    if seed is not None:
        seed = _as_int(seed, "seed")
    state = deal_board(seed=seed)
    return jsonify(_game_payload(state, phase_of(state)))


@app.post("/api/fence")
def api_fence() -> Any:
    body = _json_body()
    state = json_to_state(body.get("state"))
    cell = _as_pair(body.get("cell"), "cell")
    depth = _parse_depth(body)

    before = phase_of(state)
    if before.is_over:
        return jsonify({"ok": False, "error": "game is over", "phase": before.value}), 409
    if not in_bounds(cell):
        raise ApiError(f"cell {list(cell)} is off the board")

    result = play_fence_turn(state, cell, depth)
    if not result.accepted:
        return jsonify({
            "ok": False,
            "error": "cell is not empty",
            "state": state_to_json(state),
            "phase": result.phase.value,
        }), 400

    if result.phase is Phase.FENCE_WON:
        db_increment_score(_db_path(), PLAYER_WINS)
    elif result.phase is Phase.CAT_WON:
        db_increment_score(_db_path(), CAT_WINS)
    logger.debug("fence at %s -> cat %s, phase %s", cell, result.cat_move, result.phase.value)
    return jsonify(_game_payload(state, result.phase, result.cat_move))


@app.post("/api/hint")
def api_hint() -> Any:
    body = _json_body()
    state = json_to_state(body.get("state"))
    depth = _parse_depth(body)
    res = search(state, depth)
    return jsonify({
        "ok": True,
        "move": list(res.best_move) if res.best_move is not None else None,
        "score": res.score,
        "nodes": res.nodes,
    })


@app.get("/api/scores")
def api_scores() -> Any:
    return jsonify({"ok": True, "scores": db_load_scores(_db_path())})


@app.post("/api/scores/reset")
def api_scores_reset() -> Any:
    db_reset_scores(_db_path())
    return jsonify({"ok": True, "scores": db_load_scores(_db_path())})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    chatty = os.getenv("CHATNOIR_DEBUG", "0").lower() in ("1", "true", "yes", "on")
    logging.basicConfig(level=logging.DEBUG if chatty else logging.INFO)
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
