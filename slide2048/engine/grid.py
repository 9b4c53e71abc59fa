"""Derived grid views over a tile collection.

The tiles are the source of truth; every function here rebuilds its grid from
them and never keeps it around.
"""

from typing import Iterable

import numpy as np

from .errors import BoardError
from .tiles import BOARD_SIZE, Tile


def tile_grid(tiles: Iterable[Tile], size: int = BOARD_SIZE) -> np.ndarray:
    """Return a (size, size) object array holding each Tile at its position, None elsewhere."""
    grid = np.full((size, size), None, dtype=object)
    for tile in tiles:
        if not (0 <= tile.row < size and 0 <= tile.col < size):
            raise BoardError(f"Tile {tile.id} is off the board at ({tile.row}, {tile.col})")
        if grid[tile.row, tile.col] is not None:
            raise BoardError(f"Tiles {grid[tile.row, tile.col].id} and {tile.id} share ({tile.row}, {tile.col})")
        grid[tile.row, tile.col] = tile
    return grid


def value_grid(tiles: Iterable[Tile], size: int = BOARD_SIZE) -> np.ndarray:
    """Return a (size, size) int32 array of tile values, 0 for empty cells."""
    board = np.zeros((size, size), dtype=np.int32)
    for tile in tiles:
        board[tile.row, tile.col] = tile.value
    return board


def empty_cells(tiles: Iterable[Tile], size: int = BOARD_SIZE) -> np.ndarray:
    """Return an (n, 2) array of the empty (row, col) positions in row-major order."""
    return np.argwhere(value_grid(tiles, size) == 0)


def is_terminal(tiles: Iterable[Tile], size: int = BOARD_SIZE) -> bool:
    """True iff every cell is occupied and no two 4-adjacent cells hold equal values."""
    tiles = tuple(tiles)
    if len(tiles) < size * size:
        return False
    board = value_grid(tiles, size)
    if (board == 0).any():
        return False
    # any adjacent equal tiles?
    for axis in [0, 1]:
        arr = board if axis == 1 else board.T
        if np.any(arr[:, :-1] == arr[:, 1:]):
            return False
    return True
