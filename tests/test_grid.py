import pytest

from brickgame.grid import EMPTY, HEIGHT, MARKER, OCCUPIED, WIDTH, Grid


def test_off_grid_cells_are_blocked():
    grid = Grid()
    assert grid.blocked(-1, 0)
    assert grid.blocked(0, -1)
    assert grid.blocked(HEIGHT, 0)
    assert grid.blocked(0, WIDTH)
    assert not grid.blocked(0, 0)


def test_markers_do_not_block_but_blocks_do():
    grid = Grid()
    grid.set_cell(3, 3, MARKER)
    grid.set_cell(3, 4, OCCUPIED)
    assert not grid.blocked(3, 3)
    assert grid.get_cell(3, 3) == MARKER
    assert grid.blocked(3, 4)


def test_cell_access_out_of_bounds_raises():
    grid = Grid()
    with pytest.raises(IndexError):
        grid.get_cell(HEIGHT, 0)
    with pytest.raises(IndexError):
        grid.set_cell(0, WIDTH, OCCUPIED)
    with pytest.raises(IndexError):
        grid.fill([(0, 0), (-1, 0)])


def test_clearing_one_row_drops_rows_above():
    grid = Grid()
    grid.cells[HEIGHT - 1] = OCCUPIED
    grid.set_cell(HEIGHT - 2, 0, OCCUPIED)
    grid.set_cell(HEIGHT - 3, 5, OCCUPIED)

    assert grid.clear_full_rows() == 1

    assert grid.to_rows()[HEIGHT - 1] == (OCCUPIED,) + (EMPTY,) * (WIDTH - 1)
    assert grid.get_cell(HEIGHT - 2, 5) == OCCUPIED
    assert grid.get_cell(HEIGHT - 3, 5) == EMPTY
    assert not grid.row_occupied(0)


def test_clearing_separated_rows_keeps_the_row_between():
    grid = Grid()
    grid.cells[HEIGHT - 1] = OCCUPIED
    grid.cells[HEIGHT - 3] = OCCUPIED
    grid.set_cell(HEIGHT - 2, 2, OCCUPIED)

    assert grid.clear_full_rows() == 2

    assert grid.get_cell(HEIGHT - 1, 2) == OCCUPIED
    assert int(grid.cells.sum()) == OCCUPIED
    assert not grid.row_occupied(HEIGHT - 2)


def test_empty_cells_skip_blocks_and_markers():
    grid = Grid()
    grid.set_cell(0, 0, OCCUPIED)
    grid.set_cell(0, 1, MARKER)
    free = grid.empty_cells()
    assert len(free) == WIDTH * HEIGHT - 2
    assert (0, 0) not in free
    assert (0, 1) not in free
    assert free[0] == (0, 2)


def test_clear_resets_everything():
    grid = Grid()
    grid.fill([(1, 1), (2, 2)])
    grid.clear()
    assert all(cell == EMPTY for row in grid.to_rows() for cell in row)
