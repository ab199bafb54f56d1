from __future__ import annotations

from typing import Iterable

from tetris_engine.game import Board, Piece, PieceKind, Position, Rotation


def make_piece(kind: PieceKind, x: int, y: int, rotation: int = Rotation.BOTTOM) -> Piece:
    """Build a piece of ``kind`` anchored at ``(x, y)``."""
    piece = Piece()
    piece.set_shape(kind, rotation)
    piece.set_shape_pos(Position(x, y))
    return piece


def fill_row(board: Board, y: int, except_cols: Iterable[int] = (), kind: PieceKind = PieceKind.Z) -> None:
    skip = set(except_cols)
    for x in range(board.width):
        if x not in skip:
            board.set_cell(x, y, kind)
