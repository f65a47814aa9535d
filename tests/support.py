from __future__ import annotations

import random

from tetris_engine.game import TetrominoType


class FixedKinds(random.Random):
    """Random source that deals the given kinds in order, repeating the last one."""

    def __init__(self, *kinds: TetrominoType) -> None:
        super().__init__(0)
        self._kinds = list(kinds) or [TetrominoType.O]

    def choice(self, seq):  # type: ignore[override]
        if len(self._kinds) > 1:
            return self._kinds.pop(0)
        return self._kinds[0]


def empty_rows(width: int = 10, height: int = 20) -> list[list[int]]:
    return [[0] * width for _ in range(height)]
