from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .pieces import Piece, PieceKind


logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]

EMPTY_GLYPH = "*"


class OutOfBoundsError(IndexError):
    """Raised when a cell outside the board is read or written."""


class Board:
    """Fixed-size grid of cell states.

    Cells hold ``PieceKind`` values; ``PieceKind.NONE`` (0) is empty. Row 0 is
    the top of the well. The array shape never changes after construction,
    full rows are removed by deleting them and inserting an empty row at
    the top.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise OutOfBoundsError(f"cell ({x}, {y}) outside {self.width}x{self.height} board")

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> PieceKind:
        self._check_bounds(x, y)
        return PieceKind(int(self.grid[y, x]))

    def set_cell(self, x: int, y: int, state: PieceKind) -> None:
        self._check_bounds(x, y)
        self.grid[y, x] = int(state)

    def is_empty(self, x: int, y: int) -> bool:
        return self.cell_at(x, y) is PieceKind.NONE

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if not self.is_inside(x, y):
                return False
            if self.grid[y, x] != 0:
                return False
        return True

    def place(self, cells: Iterable[Coordinate], kind: PieceKind) -> None:
        for x, y in cells:
            self.set_cell(x, y, kind)

    def clear(self) -> None:
        self.grid.fill(0)

    def is_row_full(self, line: int) -> bool:
        if not 0 <= line < self.height:
            return False
        return bool(np.all(self.grid[line] != 0))

    def remove_row(self, line: int) -> bool:
        """Delete row ``line`` and push an empty row in at the top."""
        if not 0 <= line < self.height:
            return False
        remaining = np.delete(self.grid, line, axis=0)
        self.grid = np.vstack((np.zeros((1, self.width), dtype=np.int8), remaining))
        logger.debug(f"Removed row {line}")
        return True

    def snapshot_with_overlay(self, piece: Optional[Piece]) -> "Board":
        snapshot = self.copy()
        if piece is None or not piece.is_valid():
            return snapshot
        snapshot.place(piece.cells(), piece.kind)
        return snapshot

    def copy(self) -> "Board":
        new_board = Board(self.width, self.height)
        new_board.grid = self.grid.copy()
        return new_board

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def rows(self) -> List[List[PieceKind]]:
        return [[PieceKind(int(v)) for v in row] for row in self.grid]

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """Parse the text format produced by ``format_board``."""
        lines = [line.split() for line in text.strip().splitlines()]
        height = len(lines)
        width = len(lines[0]) if lines else 0
        board = cls(width, height)
        for y, tokens in enumerate(lines):
            if len(tokens) != width:
                raise ValueError(f"row {y} has {len(tokens)} cells, expected {width}")
            for x, token in enumerate(tokens):
                if token != EMPTY_GLYPH:
                    board.set_cell(x, y, PieceKind[token])
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        if self.grid.size == 0 or other.grid.size == 0:
            return False
        return self.grid.shape == other.grid.shape and bool(np.array_equal(self.grid, other.grid))

    # Mutable grid
    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return format_board(self)

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height})"


def format_board(board: Board) -> str:
    """Render cells as kind letters, ``*`` for empty, space separated."""
    lines = []
    for row in board.grid:
        lines.append(" ".join(PieceKind(int(v)).name if v else EMPTY_GLYPH for v in row))
    return "\n".join(lines)
