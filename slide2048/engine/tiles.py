from dataclasses import dataclass, replace
from enum import Enum

from .errors import InvalidDirection

BOARD_SIZE = 4
WIN_VALUE = 2048
SPAWN_PROB_2 = 0.9


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value) -> "Direction":
        """Accept a Direction or its lowercase name; anything else is a programming error."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        raise InvalidDirection(f"Invalid direction: {value!r}")


@dataclass(frozen=True)
class Tile:
    """A numbered tile. `id` survives merges; the flags only drive animation."""

    id: int
    value: int
    row: int
    col: int
    just_spawned: bool = False
    just_merged: bool = False

    def cleared(self) -> "Tile":
        if not (self.just_spawned or self.just_merged):
            return self
        return replace(self, just_spawned=False, just_merged=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "value": self.value,
            "row": self.row,
            "col": self.col,
            "isNew": self.just_spawned,
            "isMerged": self.just_merged,
        }


@dataclass(frozen=True)
class Session:
    """Complete game state between two moves."""

    tiles: tuple[Tile, ...] = ()
    score: int = 0
    best_score: int = 0
    game_over: bool = False
    game_won: bool = False
    next_id: int = 1

    @property
    def max_tile(self) -> int:
        return max((t.value for t in self.tiles), default=0)

    def tile_dicts(self) -> list[dict]:
        return [t.to_dict() for t in self.tiles]
