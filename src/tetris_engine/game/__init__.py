"""Game module for the falling-block rules engine.

Exports the core game engine and supporting classes:
- Board: Grid of cell states with bounds-checked access and row removal
- Piece: Tetromino with rotation index and anchor position
- PieceKind: Enum of piece kinds, doubling as the board cell state
- ScoringRules: Line-clear score table and level progression
- GameEngine: Start/stop/pause lifecycle, movement, gravity and landing
"""

from .grid import Board, OutOfBoundsError, format_board
from .pieces import CellState, Piece, PieceKind, Position, Rotation, ROTATION_TABLE
from .rules import ScoringRules, gravity_delay
from .core import Action, GameConfig, GameEngine

__all__ = [
    "Board",
    "OutOfBoundsError",
    "format_board",
    "CellState",
    "Piece",
    "PieceKind",
    "Position",
    "Rotation",
    "ROTATION_TABLE",
    "ScoringRules",
    "gravity_delay",
    "Action",
    "GameConfig",
    "GameEngine",
]
