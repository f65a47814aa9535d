from __future__ import annotations

from typing import Iterable, Sequence, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class GameGrid:
    """Immutable 2D board, row-major with row 0 at the top.

    The grid uses 0 for empty cells and positive integers for occupied cells.
    Integer values are the tetromino kind of the piece that was merged there,
    which doubles as its color tag. Every operation that changes cells returns
    a new grid; the backing array is read-only.
    """

    __slots__ = ("width", "height", "_cells")

    def __init__(self, cells: np.ndarray) -> None:
        if cells.ndim != 2:
            raise ValueError(f"expected a 2D board, got shape {cells.shape}")
        self.height, self.width = (int(n) for n in cells.shape)
        data = np.array(cells, dtype=np.int8, copy=True)
        data.flags.writeable = False
        self._cells = data

    @classmethod
    def empty(cls, width: int = 10, height: int = 20) -> "GameGrid":
        return cls(np.zeros((int(height), int(width)), dtype=np.int8))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "GameGrid":
        return cls(np.asarray(rows, dtype=np.int8))

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    def cell(self, x: int, y: int) -> int:
        return int(self._cells[y, x])

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collides(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return True
            # Above the visible board: nothing to hit.
            if y < 0:
                continue
            if self._cells[y, x] != 0:
                return True
        return False

    def merged(self, cells: Iterable[Coordinate], value: int) -> "GameGrid":
        data = self.clone_state()
        for x, y in cells:
            if self.is_inside(x, y):
                data[y, x] = value
        return GameGrid(data)

    def filled_rows(self) -> np.ndarray:
        return np.where(np.all(self._cells != 0, axis=1))[0]

    def cleared(self) -> Tuple["GameGrid", int]:
        """Remove complete rows and drop everything above them.

        Returns the new grid and the number of rows removed.
        """
        full_rows = self.filled_rows()
        if full_rows.size == 0:
            return self, 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        remaining = np.delete(self._cells, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        return GameGrid(np.vstack((new_rows, remaining))), num

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def clone_state(self) -> np.ndarray:
        return self._cells.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameGrid):
            return NotImplemented
        return bool(np.array_equal(self._cells, other._cells))

    def __hash__(self) -> int:
        return hash((self.width, self.height, self._cells.tobytes()))

    def __repr__(self) -> str:
        return f"GameGrid(width={self.width}, height={self.height}, occupied={self.occupied_count()})"
