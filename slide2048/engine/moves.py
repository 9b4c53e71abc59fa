from dataclasses import dataclass, replace
from typing import Iterable, Sequence

import numpy as np

from .grid import tile_grid
from .tiles import BOARD_SIZE, Direction, Tile

# Quarter turns that bring each direction's destination edge to column 0,
# so every line is compacted toward index 0.
ROTATIONS = {
    Direction.LEFT: 0,
    Direction.UP: 1,
    Direction.RIGHT: 2,
    Direction.DOWN: 3,
}


@dataclass(frozen=True)
class SlideOutcome:
    tiles: tuple[Tile, ...]
    score_gained: int
    moved: bool
    merged_values: tuple[int, ...]


def compact_line(line: Sequence[Tile | None]) -> tuple[list[Tile | None], list[int]]:
    """
    Slide one line toward index 0 and merge equal neighbours once.

    The tile met first in the scan keeps its id and takes the doubled value;
    its partner disappears. A merged tile is never merged again in the same
    pass, so [2, 2, 2, 2] becomes [4, 4], not [8].

    Returns the new line (padded with None) and the list of merged values.
    """
    compressed = [t.cleared() for t in line if t is not None]
    result: list[Tile | None] = []
    merged_values: list[int] = []
    j = 0
    L = len(compressed)
    while j < L:
        current = compressed[j]
        if j + 1 < L and current.value == compressed[j + 1].value:
            merged = replace(current, value=current.value * 2, just_merged=True)
            result.append(merged)
            merged_values.append(merged.value)
            j += 2
        else:
            result.append(current)
            j += 1
    result.extend([None] * (len(line) - len(result)))
    return result, merged_values


def _line_ids(line: Iterable[Tile | None]) -> list[int]:
    return [0 if t is None else t.id for t in line]


def slide(tiles: Iterable[Tile], direction, size: int = BOARD_SIZE) -> SlideOutcome:
    """Apply the move/merge rule to every line. Does not spawn."""
    direction = Direction.parse(direction)
    k = ROTATIONS[direction]
    grid = tile_grid((t.cleared() for t in tiles), size)
    rotated = np.rot90(grid, k)

    new_rotated = np.full((size, size), None, dtype=object)
    moved_any = False
    merged_values: list[int] = []
    for i in range(size):
        row = list(rotated[i, :])
        new_row, merged = compact_line(row)
        merged_values.extend(merged)
        for j, tile in enumerate(new_row):
            new_rotated[i, j] = tile
        if _line_ids(new_row) != _line_ids(row):
            moved_any = True

    # rotate back and stamp the final positions
    restored = np.rot90(new_rotated, (4 - k) % 4)
    new_tiles = []
    for r in range(size):
        for c in range(size):
            tile = restored[r, c]
            if tile is None:
                continue
            if tile.row != r or tile.col != c:
                tile = replace(tile, row=r, col=c)
            new_tiles.append(tile)

    return SlideOutcome(
        tiles=tuple(new_tiles),
        score_gained=sum(merged_values),
        moved=moved_any,
        merged_values=tuple(merged_values),
    )


def legal_directions(tiles: Iterable[Tile], size: int = BOARD_SIZE) -> list[Direction]:
    """Directions that would change the board."""
    tiles = tuple(tiles)
    return [d for d in Direction if slide(tiles, d, size).moved]
