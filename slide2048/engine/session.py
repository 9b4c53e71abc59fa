import logging
from dataclasses import dataclass

import numpy as np

from .grid import is_terminal
from .moves import slide
from .spawn import spawn_tile
from .tiles import WIN_VALUE, Direction, Session

log = logging.getLogger(__name__)

_default_rng = np.random.default_rng()


@dataclass(frozen=True)
class MoveResult:
    session: Session
    moved: bool
    reached_win_threshold: bool


def initialize(rng: np.random.Generator | None = None, best_score: int = 0) -> Session:
    """Start a fresh game: empty board, two spawned tiles, ids restarting at 1."""
    rng = _default_rng if rng is None else rng
    tiles = ()
    next_id = 1
    for _ in range(2):
        tile = spawn_tile(tiles, next_id, rng)
        tiles += (tile,)
        next_id += 1
    return Session(tiles=tiles, best_score=max(0, int(best_score)), next_id=next_id)


def apply_move(session: Session, direction, rng: np.random.Generator | None = None) -> MoveResult:
    """
    Slide, merge, score, spawn and check for game over in one step.

    A finished game or a move that changes nothing returns the given session
    object unchanged with moved=False.
    """
    direction = Direction.parse(direction)
    if session.game_over:
        return MoveResult(session, False, False)

    outcome = slide(session.tiles, direction)
    if not outcome.moved:
        return MoveResult(session, False, False)

    rng = _default_rng if rng is None else rng
    score = session.score + outcome.score_gained
    reached = not session.game_won and WIN_VALUE in outcome.merged_values

    tiles = outcome.tiles
    next_id = session.next_id
    spawned = spawn_tile(tiles, next_id, rng)
    if spawned is None:
        log.debug("No empty cell after %s, skipping spawn", direction.value)
    else:
        tiles += (spawned,)
        next_id += 1

    game_over = is_terminal(tiles)
    new_session = Session(
        tiles=tiles,
        score=score,
        best_score=max(session.best_score, score),
        game_over=game_over,
        game_won=session.game_won or reached,
        next_id=next_id,
    )
    log.debug("Moved %s: +%d (score %d, %d tiles)", direction.value, outcome.score_gained, score, len(tiles))
    if reached:
        log.debug("Reached %d", WIN_VALUE)
    if game_over:
        log.debug("No moves left, final score %d", score)
    return MoveResult(new_session, True, reached)
