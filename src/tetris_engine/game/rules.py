from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 40, 100, 300, 1200)
    rows_per_level: int = 10
    initial_drop_interval: float = 1000.0  # milliseconds
    speedup: float = 0.8

    def score_for_lines(self, lines: int, level: int = 0) -> int:
        if lines <= 0:
            return 0
        # A single piece spans at most four rows.
        lines = min(lines, len(self.line_clear_scores) - 1)
        return self.line_clear_scores[lines] * (level + 1)

    def level_for_rows(self, rows: int) -> int:
        return rows // self.rows_per_level

    def drop_interval_for_level(self, level: int) -> float:
        return self.initial_drop_interval * self.speedup ** level
