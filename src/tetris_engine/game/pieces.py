from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


# Square masks so every rotation keeps the same footprint around the anchor.
BASE_SHAPES = {
    TetrominoType.I: np.array([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
}

PIECE_COLORS: Dict[TetrominoType, Tuple[int, int, int]] = {
    TetrominoType.I: (0, 240, 240),
    TetrominoType.O: (240, 240, 0),
    TetrominoType.T: (160, 0, 240),
    TetrominoType.S: (0, 240, 0),
    TetrominoType.Z: (240, 0, 0),
    TetrominoType.J: (0, 0, 240),
    TetrominoType.L: (240, 160, 0),
}


def _precompute_rotations() -> Dict[TetrominoType, Tuple[Shape, ...]]:
    rotations: Dict[TetrominoType, Tuple[Shape, ...]] = {}
    for kind, base in BASE_SHAPES.items():
        states = []
        for r in range(4):
            mask = np.ascontiguousarray(_rot90(base, r))
            mask.flags.writeable = False
            states.append(mask)
        rotations[kind] = tuple(states)
    return rotations


ROTATIONS = _precompute_rotations()


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    rotation: int = 0  # 0..3

    @property
    def color(self) -> Tuple[int, int, int]:
        return PIECE_COLORS[self.kind]

    @property
    def width(self) -> int:
        """Width of the rotation-0 mask, used to center the piece on spawn."""
        return int(ROTATIONS[self.kind][0].shape[1])

    def shape(self) -> Shape:
        return ROTATIONS[self.kind][self.rotation % 4]

    def rotated(self, delta: int = 1) -> "Piece":
        return Piece(self.kind, (self.rotation + delta) % 4)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells
