import copy

import pytest

from tetris_board import Board

O = [[1,1],[1,1]]
I = [[0,0,0,0],[1,1,1,1],[0,0,0,0],[0,0,0,0]]


def fill_row(board, row, skip=(), kind="Z"):
    for c in range(board.cols):
        if c not in skip:
            board.cells[row][c] = kind


def test_new_board_is_empty():
    b = Board()
    assert (b.rows, b.cols) == (20, 10)
    assert all(c is None for row in b.cells for c in row)


@pytest.mark.parametrize("x,y", [(-1, 5), (9, 5), (4, 19), (4, 25)])
def test_out_of_bounds_collides(x, y):
    assert Board().collides(O, x, y)


@pytest.mark.parametrize("x,y", [(0, 0), (8, 18), (4, -1), (4, -2), (0, -5)])
def test_in_bounds_does_not_collide(x, y):
    assert not Board().collides(O, x, y)


def test_rows_above_top_still_hit_walls():
    assert Board().collides(O, -1, -3)
    assert Board().collides(O, 9, -3)


def test_empty_matrix_rows_are_ignored():
    b = Board()
    assert not b.collides(I, 0, -1)
    assert not b.collides(I, 0, 18)
    assert b.collides(I, 0, 19)


def test_occupied_cell_collides():
    b = Board()
    b.cells[10][5] = "T"
    assert b.collides(O, 4, 9)
    assert not b.collides(O, 6, 9)


def test_collides_is_read_only():
    b = Board()
    b.cells[3][3] = "S"
    before = copy.deepcopy(b.cells)
    b.collides(O, 2, 2)
    assert b.cells == before


def test_merge_drops_cells_above_top():
    b = Board()
    b.merge(O, 3, -1, "O")
    assert b.cells[0][3] == "O" and b.cells[0][4] == "O"
    assert sum(c is not None for row in b.cells for c in row) == 2


def test_sweep_without_full_rows_leaves_board_unchanged():
    b = Board()
    fill_row(b, 19, skip=(0,))
    b.cells[5][5] = "L"
    before = copy.deepcopy(b.cells)
    assert b.sweep() == 0
    assert b.cells == before


def test_sweep_adjacent_rows():
    b = Board()
    fill_row(b, 19)
    fill_row(b, 18)
    b.cells[17][2] = "T"
    assert b.sweep() == 2
    assert b.cells[19][2] == "T"
    assert all(c is None for row in b.cells[:19] for c in row)


def test_sweep_rechecks_the_cleared_index():
    b = Board()
    fill_row(b, 19)
    fill_row(b, 18, skip=(0,))
    fill_row(b, 17)
    fill_row(b, 16)
    assert b.sweep() == 3
    assert b.cells[19] == [None] + ["Z"] * 9
    assert len(b.cells) == 20


def test_sweep_is_not_capped_at_four():
    b = Board()
    for r in range(14, 20):
        fill_row(b, r)
    assert b.sweep() == 6


def test_lowest_empty():
    b = Board()
    assert b.lowest_empty(4) == 19
    b.cells[19][4] = "X"
    b.cells[10][4] = "X"
    assert b.lowest_empty(4) == 18
    for r in range(20):
        b.cells[r][4] = "X"
    assert b.lowest_empty(4) is None


def test_clear_and_rows_view():
    b = Board()
    fill_row(b, 19)
    v = b.rows_view()
    assert isinstance(v, tuple) and v[19][0] == "Z"
    b.clear()
    assert v[19][0] == "Z"
    assert b.cells[19][0] is None
