from __future__ import annotations

from logging import getLogger
from typing import Final

import numpy as np

from sudoku_puzzle.core.board import BOX_SIZE, SIZE, Board
from sudoku_puzzle.core.rules import validate_puzzle

__all__ = ["Solver"]


logger = getLogger(__name__)

NUM_CELLS: Final[int] = SIZE * SIZE
_BOX_INDEX: Final[tuple[int, ...]] = tuple(
    (r // BOX_SIZE) * BOX_SIZE + c // BOX_SIZE for r in range(SIZE) for c in range(SIZE)
)


class Solver:
    """Depth-first sudoku solver driven by an explicit stack.

    The cursor walks the board in row-major order. Every empty cell gets the
    smallest legal value above the one it currently holds; when none is left the
    cell is cleared and the cursor jumps back to the most recently filled cell.
    Cells that were filled when the search started are never touched.

    Row, column and box contents are tracked as bitmasks, which answers the
    same question as scanning the nine cells of each unit.
    """

    def __init__(self) -> None:
        self._search_effort = 0

    @property
    def search_effort(self) -> int:
        """Forward assignments made by the last call to :meth:`solve`."""
        return self._search_effort

    def solve(self, board: Board) -> bool:
        """Fill ``board`` in place with its first solution.

        Returns ``False`` when the givens already clash or no completion exists;
        the board is then left exactly as it was passed in.
        """
        solutions = self._search(board, limit=1)
        if not solutions:
            return False
        board.cells[:, :] = np.asarray(solutions[0], dtype=np.int8).reshape(SIZE, SIZE)
        return True

    def is_solvable(self, board: Board) -> bool:
        """Solve a copy of ``board`` and check it ends in a valid terminal pattern."""
        scratch = board.copy()
        return self.solve(scratch) and validate_puzzle(scratch)

    def count_solutions(self, board: Board, limit: int = 2) -> int:
        """Number of completions of ``board``, counting stops at ``limit``."""
        if limit < 1:
            msg = f"limit must be positive, got {limit}"
            raise ValueError(msg)
        return len(self._search(board, limit=limit))

    def has_unique_solution(self, board: Board) -> bool:
        return self.count_solutions(board, limit=2) == 1

    def _search(self, board: Board, *, limit: int) -> list[list[int]]:
        self._search_effort = 0
        if not validate_puzzle(board, ignore_zeroes=True):
            logger.debug("Givens contain duplicates, nothing to search")
            return []

        # Snapshot of the givens for this search only.
        locked = tuple(bool(v) for v in board.cells.flatten().tolist())
        grid = board.cells.flatten().tolist()
        rows, cols, boxes = [0] * SIZE, [0] * SIZE, [0] * SIZE
        for i, value in enumerate(grid):
            if value:
                bit = 1 << value
                rows[i // SIZE] |= bit
                cols[i % SIZE] |= bit
                boxes[_BOX_INDEX[i]] |= bit

        solutions: list[list[int]] = []
        processed: list[int] = []
        effort = 0
        i = 0
        while True:
            if i == NUM_CELLS:
                solutions.append(grid.copy())
                if len(solutions) >= limit or not processed:
                    break
                i = processed.pop()
                continue

            if locked[i]:
                i += 1
                continue

            r, c, b = i // SIZE, i % SIZE, _BOX_INDEX[i]
            current = grid[i]
            if current:
                bit = 1 << current
                rows[r] &= ~bit
                cols[c] &= ~bit
                boxes[b] &= ~bit

            used = rows[r] | cols[c] | boxes[b]
            for value in range(current + 1, SIZE + 1):
                bit = 1 << value
                if not used & bit:
                    grid[i] = value
                    rows[r] |= bit
                    cols[c] |= bit
                    boxes[b] |= bit
                    processed.append(i)
                    effort += 1
                    i += 1
                    break
            else:
                grid[i] = 0
                if not processed:
                    break
                i = processed.pop()

        self._search_effort = effort
        logger.debug(
            "Search finished with %d solution(s) after %d assignments",
            len(solutions),
            effort,
        )
        return solutions
