from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np

from .grid import Board, format_board
from .pieces import Piece, PieceKind, Position, Rotation
from .rules import ScoringRules, gravity_delay


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None


class GameEngine:
    """Rules engine for a falling-block puzzle.

    Idle until ``start()``; afterwards an external driver pushes commands in
    (``move``/``rotate``/``fast_forward``) and gravity ticks (``step``) at the
    cadence suggested by ``timer_delay()``. Landing into a blocked spawn
    ends the game; ``stop()`` returns to idle from any state.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = Board(self.config.width, self.config.height)
        self.current_piece = Piece()
        self.next_piece = Piece()
        self.started = False
        self.paused = False
        self.game_over = False
        self.level = 0
        self.score = 0
        self.lines_cleared = 0

    # Lifecycle

    def start(self) -> None:
        if self.started:
            return
        self.grid.clear()
        self.level = 1
        self.score = 0
        self.lines_cleared = 0
        self.started = True
        self.paused = False
        self.game_over = False

        self.current_piece.set_random_shape(self.rng)
        self.next_piece.set_random_shape(self.rng)
        self._center(self.current_piece)
        logger.debug(f"Game started with {self.current_piece.kind.name}, next {self.next_piece.kind.name}")

    def stop(self) -> None:
        self.grid.clear()
        self.level = 0
        self.score = 0
        self.lines_cleared = 0
        self.started = False
        self.paused = False
        self.game_over = False
        self.current_piece.set_shape(PieceKind.NONE, Rotation.BOTTOM)
        self.next_piece.set_shape(PieceKind.NONE, Rotation.BOTTOM)
        logger.debug("Game stopped")

    def pause(self) -> None:
        if self.started:
            self.paused = not self.paused
            logger.debug(f"Paused: {self.paused}")

    # Commands

    def move(self, x_step: int, y_step: int, rotate: int = 0) -> bool:
        """Rotate and translate the current piece as one legality-checked move.

        The rotation is applied first and rolled back if the rotated piece
        does not fit at the stepped anchor. Returns whether the piece moved.
        """
        if not self.started or self.paused:
            return False
        if not self.current_piece.is_valid():
            return False

        self.current_piece.rotate(rotate)
        if not self.is_valid_position(self.current_piece, x_step, y_step):
            self.current_piece.rotate(-rotate)
            return False
        self.current_piece.set_shape_pos(
            Position(self.current_piece.x + x_step, self.current_piece.y + y_step)
        )
        return True

    def rotate(self, direction: int) -> bool:
        return self.move(0, 0, direction)

    def step(self) -> None:
        """Gravity tick: fall one row, or land and bring in the next piece."""
        if not self.started or self.paused:
            return
        if self.move(0, 1, 0):
            return

        self._land()

        self._center(self.next_piece)
        if self.is_valid_position(self.next_piece, 0, 0):
            self.current_piece, self.next_piece = self.next_piece, self.current_piece
            self.next_piece.set_random_shape(self.rng)
        else:
            # The landed piece stays current; the blocked one stays in preview
            self.started = False
            self.game_over = True
            logger.info(f"Game over: score {self.score}, level {self.level}, lines {self.lines_cleared}")

    def fast_forward(self) -> None:
        if self.game_over:
            return
        if not self.move(0, 1, 0):
            return
        self.step()

    def hard_drop(self) -> None:
        if not self.started or self.paused:
            return
        while self.move(0, 1, 0):
            pass
        self.step()

    def perform(self, action: Action) -> bool:
        """Apply one ``Action``; returns False when it had no effect."""
        if action == Action.LEFT:
            return self.move(-1, 0, 0)
        if action == Action.RIGHT:
            return self.move(1, 0, 0)
        if action == Action.ROTATE_CW:
            return self.move(0, 0, -1)
        if action == Action.ROTATE_CCW:
            return self.move(0, 0, 1)
        if not self.started or self.paused:
            return False
        if action == Action.SOFT_DROP:
            self.step()
            return True
        if action == Action.HARD_DROP:
            self.hard_drop()
            return True
        return False

    # Rules

    def timer_delay(self) -> int:
        return gravity_delay(self.level)

    def is_valid_position(self, piece: Piece, x_step: int, y_step: int) -> bool:
        return self.grid.can_place(piece.cells(x_step, y_step))

    @staticmethod
    def get_shape_width(piece: Piece) -> int:
        block = piece.block()
        if not block:
            return 0
        xs = [p.x for p in block]
        return max(xs) - min(xs) + 1

    def _center(self, piece: Piece) -> None:
        min_x = min((p.x for p in piece.block()), default=0)
        x = (self.grid.width - self.get_shape_width(piece)) // 2 - min_x
        piece.set_shape_pos(Position(x, piece.y))

    def _land(self) -> int:
        piece = self.current_piece
        cells = piece.cells()
        self.grid.place(cells, piece.kind)

        # Full rows are found before any removal; removing them top to bottom
        # only shifts rows that were already checked.
        touched = sorted({y for _, y in cells})
        full_rows = [line for line in touched if self.grid.is_row_full(line)]
        removed = sum(1 for line in full_rows if self.grid.remove_row(line))

        self.lines_cleared += removed
        self.level = self.rules.level_for_lines(self.lines_cleared)
        self.score += self.rules.score_for_lines(removed, self.level)
        logger.debug(f"{piece.kind.name} landed at ({piece.x}, {piece.y}), {removed} line(s) cleared")
        return removed

    # Queries

    def board(self) -> Board:
        return self.grid.snapshot_with_overlay(self.current_piece)

    def board_element(self, x: int, y: int) -> PieceKind:
        return self.grid.cell_at(x, y)

    def get_state(self) -> np.ndarray:
        return self.board().clone_state()

    def get_stats(self) -> dict:
        return {
            "score": self.score,
            "level": self.level,
            "lines_cleared": self.lines_cleared,
            "next_piece": self.next_piece.kind.name,
            "started": self.started,
            "paused": self.paused,
            "game_over": self.game_over,
            "timer_delay": self.timer_delay(),
        }


def run_game_demo(seed: int = 0, ticks: int = 40) -> GameEngine:  # pragma: no cover
    game = GameEngine(GameConfig(random_seed=seed))
    game.start()
    print("=== Falling Block Engine Demo ===")
    print(f"Current: {game.current_piece.kind.name}, next: {game.next_piece.kind.name}")
    for _ in range(ticks):
        game.step()
        if game.game_over:
            break
    print(format_board(game.board()))
    print(f"Score: {game.score}  Level: {game.level}  Lines: {game.lines_cleared}")
    return game


if __name__ == "__main__":  # pragma: no cover
    run_game_demo()
