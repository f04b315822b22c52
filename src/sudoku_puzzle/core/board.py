from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import IntEnum
from typing import Final

import numpy as np
import numpy.typing as npt

__all__ = [
    "SIZE",
    "Board",
    "CoordinateError",
    "DifficultyLevel",
    "DomainError",
    "ShapeError",
    "box_of",
]


SIZE: Final[int] = 9
BOX_SIZE: Final[int] = 3


class ShapeError(ValueError):
    """Raised when an imported grid is not 9 rows of 9 cells."""


class DomainError(ValueError):
    """Raised when a single cell is assigned a value outside 0..9."""


class CoordinateError(IndexError):
    """Raised for row, column or box coordinates outside the board."""


class DifficultyLevel(IntEnum):
    VERY_EASY = 1
    EASY = 2
    MEDIUM = 3
    DIFFICULT = 4
    EVIL = 5

    @classmethod
    def parse(cls, value: str | int) -> DifficultyLevel:
        """Accept ``"very-easy"``, ``"VERY_EASY"``, ``"evil"``, ``3`` or ``"3"``."""
        if isinstance(value, (int, np.integer)):
            return cls(int(value))
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        if key.isdigit():
            return cls(int(key))
        try:
            return cls[key]
        except KeyError:
            msg = f"Unknown difficulty level: {value!r}"
            raise ValueError(msg) from None

    @classmethod
    def from_score(cls, score: float) -> DifficultyLevel:
        """Nearest level for a continuous difficulty score."""
        return cls(min(max(round(score), cls.VERY_EASY), cls.EVIL))


def _check_index(name: str, value: int, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        msg = f"{name} must be an integer, got {value!r}"
        raise CoordinateError(msg)
    if not 1 <= value <= upper:
        msg = f"{name} {value} out of range 1..{upper}"
        raise CoordinateError(msg)
    return int(value) - 1


def _coerce_cell(value: object) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, np.integer)) and 1 <= value <= SIZE:
        return int(value)
    return 0


def box_of(r: int, c: int) -> tuple[int, int]:
    """1-based box coordinates of the 1-based cell ``(r, c)``."""
    return (r - 1) // BOX_SIZE + 1, (c - 1) // BOX_SIZE + 1


class Board:
    """A 9x9 sudoku grid. Coordinates are 1-based, ``0`` marks an empty cell."""

    __slots__ = ("cells",)

    def __init__(self, cells: npt.NDArray[np.integer] | None = None) -> None:
        """Values outside 1..9 are stored as 0, as in :meth:`set_all`."""
        self.cells = np.zeros((SIZE, SIZE), dtype=np.int8)
        if cells is None:
            return
        cells = np.asarray(cells)
        if cells.shape != (SIZE, SIZE):
            msg = f"Board must have shape (9, 9), got {cells.shape}."
            raise ShapeError(msg)
        if not np.issubdtype(cells.dtype, np.integer):
            self.set_all(cells)
            return
        in_range = (cells >= 1) & (cells <= SIZE)
        self.cells[:, :] = np.where(in_range, cells, 0)

    @classmethod
    def from_list(cls, grid: Sequence[Sequence[object]]) -> Board:
        board = cls()
        board.set_all(grid)
        return board

    def copy(self) -> Board:
        return Board(self.cells)

    def get(self, r: int, c: int) -> int:
        i, j = _check_index("row", r, SIZE), _check_index("col", c, SIZE)
        return int(self.cells[i, j])

    def set(self, r: int, c: int, value: int) -> None:
        i, j = _check_index("row", r, SIZE), _check_index("col", c, SIZE)
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, np.integer))
            or not 0 <= value <= SIZE
        ):
            msg = f"Cell value must be in 0..9, got {value!r}"
            raise DomainError(msg)
        self.cells[i, j] = value

    def get_row(self, r: int) -> list[int]:
        return self.cells[_check_index("row", r, SIZE), :].tolist()

    def get_col(self, c: int) -> list[int]:
        return self.cells[:, _check_index("col", c, SIZE)].tolist()

    def get_box(self, x: int, y: int) -> list[int]:
        """The nine cells of box ``(x, y)`` in row-major order, x and y in 1..3."""
        i = _check_index("box row", x, BOX_SIZE) * BOX_SIZE
        j = _check_index("box col", y, BOX_SIZE) * BOX_SIZE
        return self.cells[i : i + BOX_SIZE, j : j + BOX_SIZE].flatten().tolist()

    def clear(self) -> None:
        self.cells.fill(0)

    def set_all(self, grid: Sequence[Sequence[object]]) -> None:
        """Import a 9x9 grid.

        Values outside 1..9 are stored as 0. A grid with the wrong number of
        rows or cells raises :class:`ShapeError` and leaves the board unchanged.
        """
        if isinstance(grid, np.ndarray):
            grid = grid.tolist()
        if isinstance(grid, (str, bytes)) or len(grid) != SIZE:
            msg = f"Board must have 9 rows, got {len(grid)}."
            raise ShapeError(msg)
        for index, row in enumerate(grid, start=1):
            if isinstance(row, (str, bytes)) or len(row) != SIZE:
                msg = f"Row {index} must have 9 cells, got {len(row)}."
                raise ShapeError(msg)
        self.cells[:, :] = [[_coerce_cell(value) for value in row] for row in grid]

    def to_list(self) -> list[list[int]]:
        return self.cells.tolist()

    def givens_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def row_givens(self, r: int) -> int:
        return int(np.count_nonzero(self.cells[_check_index("row", r, SIZE), :]))

    def col_givens(self, c: int) -> int:
        return int(np.count_nonzero(self.cells[:, _check_index("col", c, SIZE)]))

    def min_givens_row_col(self) -> int:
        """Lowest number of givens found in any row or column."""
        filled = self.cells != 0
        return int(min(filled.sum(axis=1).min(), filled.sum(axis=0).min()))

    def is_full(self) -> bool:
        return bool(np.all(self.cells != 0))

    def empty_cells(self) -> Iterator[tuple[int, int]]:
        for i, j in np.argwhere(self.cells == 0):
            yield int(i) + 1, int(j) + 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board({self.to_list()!r})"

    def __str__(self) -> str:
        lines = []
        for i, row in enumerate(self.to_list()):
            if i and i % BOX_SIZE == 0:
                lines.append("------+-------+------")
            chunks = [
                " ".join(str(v) if v else "." for v in row[j : j + BOX_SIZE])
                for j in range(0, SIZE, BOX_SIZE)
            ]
            lines.append(" | ".join(chunks))
        return "\n".join(lines)
