from typing import Iterable

import numpy as np

from .grid import empty_cells
from .tiles import SPAWN_PROB_2, Tile


def spawn_tile(tiles: Iterable[Tile], tile_id: int, rng: np.random.Generator) -> Tile | None:
    """
    Create a new tile on a uniformly chosen empty cell.

    The value is 2 with probability SPAWN_PROB_2, otherwise 4. Returns None
    when the board has no empty cell.
    """
    empty_positions = empty_cells(tiles)
    if empty_positions.size == 0:
        return None
    idx = rng.integers(0, len(empty_positions))
    y, x = empty_positions[idx]
    value = 2 if rng.random() < SPAWN_PROB_2 else 4
    return Tile(id=int(tile_id), value=value, row=int(y), col=int(x), just_spawned=True)
