"""HTTP session service.

Every game lives in an in-process table keyed by a random session id; each
request runs one engine call to completion under the table lock.
"""

import logging
import threading
import uuid
from typing import Any, Dict, Optional, Tuple

import numpy as np
from flask import Flask, jsonify, request

from slide2048.engine import InvalidDirection, Session, apply_move, initialize
from slide2048.storage import BestScoreStore

log = logging.getLogger(__name__)


def session_to_json(session: Session) -> Dict[str, Any]:
    return {
        "score": session.score,
        "bestScore": session.best_score,
        "gameOver": session.game_over,
        "gameWon": session.game_won,
        "tiles": session.tile_dicts(),
    }


def _error(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({"error": message}), status


def create_app(rng: Optional[np.random.Generator] = None, store: Optional[BestScoreStore] = None) -> Flask:
    app = Flask(__name__)
    games: Dict[str, Session] = {}
    lock = threading.Lock()
    rng = np.random.default_rng() if rng is None else rng

    def _stored_best() -> int:
        return store.load() if store is not None else 0

    def _remember(session: Session) -> None:
        if store is not None:
            store.update(session)

    def _lookup(body: Optional[Dict[str, Any]]) -> Tuple[Optional[str], Optional[Tuple[Any, int]]]:
        if not isinstance(body, dict):
            return None, _error("Invalid JSON", 400)
        session_id = body.get("sessionId")
        if not isinstance(session_id, str) or session_id not in games:
            return None, _error("Game session not found", 404)
        return session_id, None

    @app.post("/api/game/new")
    def new_game() -> Any:
        with lock:
            session_id = uuid.uuid4().hex
            session = initialize(rng=rng, best_score=_stored_best())
            games[session_id] = session
        log.info("New game %s", session_id)
        return jsonify({"sessionId": session_id, **session_to_json(session)})

    @app.post("/api/game/move")
    def move() -> Any:
        body = request.get_json(silent=True)
        with lock:
            session_id, err = _lookup(body)
            if err is not None:
                return err
            try:
                result = apply_move(games[session_id], body.get("direction"), rng=rng)
            except InvalidDirection as e:
                return _error(str(e), 400)
            games[session_id] = result.session
            if result.moved:
                _remember(result.session)
        payload = session_to_json(result.session)
        payload["moved"] = result.moved
        payload["reachedWinThreshold"] = result.reached_win_threshold
        return jsonify(payload)

    @app.post("/api/game/reset")
    def reset() -> Any:
        body = request.get_json(silent=True)
        with lock:
            session_id, err = _lookup(body)
            if err is not None:
                return err
            best = max(games[session_id].best_score, _stored_best())
            session = initialize(rng=rng, best_score=best)
            games[session_id] = session
        log.info("Reset game %s", session_id)
        return jsonify(session_to_json(session))

    return app
