import numpy as np
import pytest
from boards import tiles_from_rows

from slide2048.engine import BoardError, Tile, empty_cells, is_terminal, value_grid
from slide2048.engine.grid import tile_grid

LOCKED = [
    [2, 4, 2, 4],
    [4, 2, 4, 2],
    [2, 4, 2, 4],
    [4, 2, 4, 2],
]


def test_full_board_without_equal_neighbours_is_terminal():
    assert is_terminal(tiles_from_rows(LOCKED))


def test_one_equal_pair_is_not_terminal():
    rows = [list(r) for r in LOCKED]
    rows[3][3] = 4  # vertical pair with (2, 3)
    assert not is_terminal(tiles_from_rows(rows))

    rows = [list(r) for r in LOCKED]
    rows[1][0] = 2  # horizontal pair with (1, 1)
    assert not is_terminal(tiles_from_rows(rows))


def test_board_with_empty_cell_is_never_terminal():
    rows = [list(r) for r in LOCKED]
    rows[0][0] = 0
    assert not is_terminal(tiles_from_rows(rows))


def test_is_terminal_has_no_side_effects():
    tiles = tiles_from_rows(LOCKED)
    assert is_terminal(tiles) == is_terminal(tiles)
    assert value_grid(tiles).tolist() == LOCKED


def test_empty_cells_row_major():
    tiles = tiles_from_rows([
        [2, 0, 2, 2],
        [2, 2, 2, 2],
        [2, 2, 2, 2],
        [2, 2, 2, 0],
    ])
    assert empty_cells(tiles).tolist() == [[0, 1], [3, 3]]


def test_value_grid_dtype_and_shape():
    board = value_grid(tiles_from_rows(LOCKED))
    assert board.shape == (4, 4)
    assert board.dtype == np.int32


def test_duplicate_position_is_rejected():
    tiles = (Tile(id=1, value=2, row=1, col=1), Tile(id=2, value=4, row=1, col=1))
    with pytest.raises(BoardError):
        tile_grid(tiles)


def test_off_board_tile_is_rejected():
    with pytest.raises(BoardError):
        tile_grid((Tile(id=1, value=2, row=4, col=0),))
