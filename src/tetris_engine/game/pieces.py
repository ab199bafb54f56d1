from __future__ import annotations

import random
from enum import IntEnum
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np


class PieceKind(IntEnum):
    NONE = 0
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


# Board cells carry the kind of the piece that filled them; NONE is empty.
CellState = PieceKind

KINDS: Tuple[PieceKind, ...] = tuple(k for k in PieceKind if k is not PieceKind.NONE)


class Rotation(IntEnum):
    BOTTOM = 0  # spawn orientation
    RIGHT = 1
    TOP = 2
    LEFT = 3


class Position(NamedTuple):
    x: int
    y: int


Shape = np.ndarray


BASE_SHAPES = {
    PieceKind.I: np.array([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8),
    PieceKind.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    PieceKind.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    PieceKind.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    PieceKind.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
    PieceKind.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    PieceKind.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
}


def _offsets(shape: Shape) -> Tuple[Position, ...]:
    ys, xs = np.nonzero(shape)
    return tuple(Position(int(x), int(y)) for y, x in zip(ys, xs))


def _build_rotation_table() -> Dict[Tuple[PieceKind, int], Tuple[Position, ...]]:
    table: Dict[Tuple[PieceKind, int], Tuple[Position, ...]] = {}
    for kind, base in BASE_SHAPES.items():
        for rotation in Rotation:
            # np.rot90 turns counter-clockwise for positive k
            table[(kind, int(rotation))] = _offsets(np.rot90(base, int(rotation)))
    for rotation in Rotation:
        table[(PieceKind.NONE, int(rotation))] = ()
    return table


ROTATION_TABLE = _build_rotation_table()


def spawn_offset(kind: PieceKind) -> Position:
    """Anchor that puts the top occupied row of a fresh piece on board row 0."""
    block = ROTATION_TABLE[(kind, int(Rotation.BOTTOM))]
    if not block:
        return Position(0, 0)
    return Position(0, -min(p.y for p in block))


class Piece:
    """A falling (or upcoming) tetromino: kind, rotation index and anchor.

    The occupied cells are looked up in ``ROTATION_TABLE`` from the
    ``(kind, rotation)`` pair and translated by the anchor. A piece whose
    kind is ``PieceKind.NONE`` is the "no piece" placeholder.
    """

    def __init__(
        self,
        kind: PieceKind = PieceKind.NONE,
        rotation: int = Rotation.BOTTOM,
        position: Optional[Position] = None,
    ) -> None:
        self.kind = PieceKind(kind)
        self.rotation = int(rotation) % 4
        self.position = Position(*position) if position is not None else spawn_offset(self.kind)

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    def is_valid(self) -> bool:
        return self.kind is not PieceKind.NONE

    def set_random_shape(self, rng: random.Random) -> None:
        """Pick a uniformly random kind in the spawn orientation."""
        self.set_shape(rng.choice(KINDS), Rotation.BOTTOM)

    def set_shape(self, kind: PieceKind, rotation: int = Rotation.BOTTOM) -> None:
        self.kind = PieceKind(kind)
        self.rotation = int(rotation) % 4
        self.position = spawn_offset(self.kind)

    def rotate(self, direction: int) -> None:
        """Turn by one step: -1 clockwise, +1 counter-clockwise, 0 none."""
        if direction not in (-1, 0, 1):
            raise ValueError(f"rotation direction must be -1, 0 or 1, got {direction}")
        self.rotation = (self.rotation + direction) % 4

    def set_shape_pos(self, position: Position) -> None:
        self.position = Position(*position)

    def block(self) -> Tuple[Position, ...]:
        return ROTATION_TABLE[(self.kind, self.rotation)]

    def cells(self, x_step: int = 0, y_step: int = 0) -> List[Tuple[int, int]]:
        ox = self.position.x + x_step
        oy = self.position.y + y_step
        return [(ox + p.x, oy + p.y) for p in self.block()]

    def copy(self) -> "Piece":
        return Piece(self.kind, self.rotation, self.position)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (self.kind, self.rotation, self.position) == (other.kind, other.rotation, other.position)

    # Rotation and anchor change in place
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Piece(kind={self.kind.name}, rotation={self.rotation}, position=({self.x}, {self.y}))"
