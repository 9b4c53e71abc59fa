"""slide2048: sliding-tile 2048 board engine and its hosts.

Expose the engine entry points and the Gymnasium environment as `Game2048Env`.
"""

from .engine import Direction, MoveResult, Session, Tile, apply_move, initialize, is_terminal
from .envs.game2048 import Game2048Env

__all__ = [
    "Direction",
    "Game2048Env",
    "MoveResult",
    "Session",
    "Tile",
    "apply_move",
    "initialize",
    "is_terminal",
]
