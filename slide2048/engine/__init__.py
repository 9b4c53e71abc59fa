"""Board engine: immutable sessions, the move/merge rule, spawning and game-over detection."""

from .errors import BoardError, InvalidDirection
from .grid import empty_cells, is_terminal, value_grid
from .moves import compact_line, legal_directions, slide
from .session import MoveResult, apply_move, initialize
from .tiles import BOARD_SIZE, SPAWN_PROB_2, WIN_VALUE, Direction, Session, Tile

__all__ = [
    "BOARD_SIZE",
    "SPAWN_PROB_2",
    "WIN_VALUE",
    "BoardError",
    "Direction",
    "InvalidDirection",
    "MoveResult",
    "Session",
    "Tile",
    "apply_move",
    "compact_line",
    "empty_cells",
    "initialize",
    "is_terminal",
    "legal_directions",
    "slide",
    "value_grid",
]
