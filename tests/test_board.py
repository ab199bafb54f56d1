import numpy as np
import pytest

from tetris_engine.game import Board, OutOfBoundsError, PieceKind, format_board
from tests.helpers import fill_row, make_piece


def test_new_board_is_empty_with_fixed_dimensions():
    board = Board(10, 20)
    assert board.grid.shape == (20, 10)
    assert all(cell is PieceKind.NONE for row in board.rows() for cell in row)


def test_clear_empties_every_cell():
    board = Board(4, 3)
    for y in range(3):
        fill_row(board, y, kind=PieceKind.T)
    board.clear()
    assert not board.grid.any()


def test_set_and_read_cell():
    board = Board(4, 3)
    board.set_cell(3, 2, PieceKind.L)
    assert board.cell_at(3, 2) is PieceKind.L
    assert board.is_empty(0, 0)
    assert not board.is_empty(3, 2)


@pytest.mark.parametrize("x,y", [(-1, 0), (4, 0), (0, -1), (0, 3)])
def test_out_of_range_access_fails_fast(x, y):
    board = Board(4, 3)
    with pytest.raises(OutOfBoundsError):
        board.cell_at(x, y)
    with pytest.raises(IndexError):
        board.set_cell(x, y, PieceKind.I)


def test_remove_row_shifts_rows_above_down():
    board = Board(3, 4)
    board.set_cell(0, 0, PieceKind.I)
    board.set_cell(1, 1, PieceKind.O)
    fill_row(board, 2, kind=PieceKind.T)
    board.set_cell(2, 3, PieceKind.S)

    assert board.remove_row(2)

    assert board.grid.shape == (4, 3)
    assert board.rows()[0] == [PieceKind.NONE] * 3
    assert board.cell_at(0, 1) is PieceKind.I
    assert board.cell_at(1, 2) is PieceKind.O
    assert board.cell_at(2, 3) is PieceKind.S


@pytest.mark.parametrize("line", [-1, 4, 100])
def test_remove_row_out_of_range_is_noop(line):
    board = Board(3, 4)
    board.set_cell(1, 3, PieceKind.J)
    before = board.clone_state()
    assert board.remove_row(line) is False
    assert np.array_equal(board.grid, before)


def test_is_row_full():
    board = Board(3, 2)
    fill_row(board, 1, except_cols=(2,))
    assert not board.is_row_full(1)
    board.set_cell(2, 1, PieceKind.O)
    assert board.is_row_full(1)
    assert not board.is_row_full(0)


def test_can_place_rejects_outside_and_occupied_cells():
    board = Board(3, 3)
    board.set_cell(1, 1, PieceKind.T)
    assert board.can_place([(0, 0), (2, 2)])
    assert not board.can_place([(0, 0), (1, 1)])
    assert not board.can_place([(3, 0)])
    assert not board.can_place([(0, -1)])


def test_snapshot_overlays_piece_without_mutating_board():
    board = Board(10, 20)
    piece = make_piece(PieceKind.O, 4, 0)
    snapshot = board.snapshot_with_overlay(piece)
    assert snapshot.cell_at(4, 0) is PieceKind.O
    assert snapshot.cell_at(5, 1) is PieceKind.O
    assert not board.grid.any()


def test_snapshot_of_invalid_piece_is_plain_copy():
    board = Board(4, 4)
    board.set_cell(0, 3, PieceKind.Z)
    snapshot = board.snapshot_with_overlay(make_piece(PieceKind.NONE, 0, 0))
    assert snapshot == board
    assert snapshot is not board


def test_equality_compares_every_cell():
    left = Board(3, 2)
    right = Board(3, 2)
    assert left == right
    right.set_cell(2, 1, PieceKind.I)
    assert left != right
    assert Board(3, 2) != Board(2, 3)
    assert Board(0, 0) != Board(0, 0)


def test_text_format():
    board = Board(3, 2)
    board.set_cell(0, 1, PieceKind.T)
    board.set_cell(2, 1, PieceKind.I)
    assert format_board(board) == "* * *\nT * I"
    assert str(board) == format_board(board)


def test_from_string_reads_text_format():
    board = Board.from_string(
        """
        * O O
        J * *
        """
    )
    assert (board.width, board.height) == (3, 2)
    assert board.cell_at(1, 0) is PieceKind.O
    assert board.cell_at(0, 1) is PieceKind.J
    assert board.cell_at(2, 1) is PieceKind.NONE


def test_from_string_rejects_ragged_rows():
    with pytest.raises(ValueError):
        Board.from_string("* *\n* * *")


def test_board_is_unhashable():
    with pytest.raises(TypeError):
        hash(Board(3, 3))
