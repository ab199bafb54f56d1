from __future__ import annotations

import logging
from dataclasses import dataclass


logger = logging.getLogger(__name__)


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (50, 100, 300, 1200)
    lines_per_level: int = 10

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1] * level
        # A four-cell piece cannot complete more rows than the table covers
        logger.warning(f"Unexpected {lines}-line clear, no score awarded")
        return 0

    def level_for_lines(self, lines_cleared: int) -> int:
        return lines_cleared // self.lines_per_level + 1


def gravity_delay(level: int) -> int:
    """Gravity tick interval: 1000 at level 1, decaying towards 100."""
    return int(100 + 900 * 0.75 ** (level - 1))
