from __future__ import annotations

from enum import Enum
from logging import getLogger
from typing import Final, NamedTuple

import numpy as np

from sudoku_puzzle.core.board import SIZE, Board, DifficultyLevel
from sudoku_puzzle.core.rules import candidates, satisfies_rules
from sudoku_puzzle.engine.scorer import evaluate_difficulty
from sudoku_puzzle.engine.solver import Solver

__all__ = [
    "DIGGING_CONFIGS",
    "DiggingConfig",
    "GeneratedPuzzle",
    "GenerationExhaustedError",
    "Generator",
    "Hint",
    "Traversal",
    "traversal_order",
]


logger = getLogger(__name__)

SEED_GIVENS: Final[int] = 11
MAX_SEED_DRAWS: Final[int] = 10_000


class GenerationExhaustedError(RuntimeError):
    """The terminal pattern search ran out of attempts."""


class Traversal(Enum):
    RANDOM = "random"
    SERPENTINE_ODD = "serpentine-odd"
    SERPENTINE = "serpentine"
    ROW_MAJOR = "row-major"


class DiggingConfig(NamedTuple):
    givens_range: tuple[int, int]
    line_floor: int
    traversal: Traversal


DIGGING_CONFIGS: Final[dict[DifficultyLevel, DiggingConfig]] = {
    DifficultyLevel.VERY_EASY: DiggingConfig((50, 64), 5, Traversal.RANDOM),
    DifficultyLevel.EASY: DiggingConfig((36, 49), 4, Traversal.RANDOM),
    DifficultyLevel.MEDIUM: DiggingConfig((32, 35), 3, Traversal.SERPENTINE_ODD),
    DifficultyLevel.DIFFICULT: DiggingConfig((28, 31), 2, Traversal.SERPENTINE),
    DifficultyLevel.EVIL: DiggingConfig((22, 27), 0, Traversal.ROW_MAJOR),
}


class Hint(NamedTuple):
    position: tuple[int, int]
    value: int


class GeneratedPuzzle(NamedTuple):
    board: Board
    score: float


def _row_major(index: int) -> tuple[int, int]:
    r, c = divmod(index, SIZE)
    return r + 1, c + 1


def _serpentine(index: int) -> tuple[int, int]:
    """Cell at ``index`` when even-numbered rows are read right to left."""
    r, c = divmod(index, SIZE)
    if r % 2 == 1:
        c = SIZE - 1 - c
    return r + 1, c + 1


def traversal_order(
    traversal: Traversal, rng: np.random.Generator | None = None
) -> list[tuple[int, int]]:
    """1-based cell coordinates in the order the digging phase visits them."""
    match traversal:
        case Traversal.RANDOM:
            if rng is None:
                msg = "Random traversal needs an rng."
                raise ValueError(msg)
            return [_row_major(i) for i in rng.permutation(SIZE * SIZE).tolist()]
        case Traversal.SERPENTINE_ODD:
            return [_serpentine(i) for i in range(0, SIZE * SIZE, 2)]
        case Traversal.SERPENTINE:
            return [_serpentine(i) for i in range(SIZE * SIZE)]
        case Traversal.ROW_MAJOR:
            return [_row_major(i) for i in range(SIZE * SIZE)]
        case _:
            msg = f"Unknown traversal: {traversal}"
            raise ValueError(msg)


class Generator:
    """Builds unique-solution puzzles of a requested difficulty.

    Generation first seeds an empty board with a few random givens and solves it
    into a terminal pattern, retrying up to ``loop_threshold`` times. Cells are
    then dug out in a level-specific order as long as the remaining givens still
    force the removed value.
    """

    def __init__(
        self,
        loop_threshold: int = 100,
        rng: np.random.Generator | int | None = None,
        solver: Solver | None = None,
    ) -> None:
        if not isinstance(rng, np.random.Generator):
            rng = np.random.default_rng(rng)
        self.rng = rng
        self.solver = solver if solver is not None else Solver()
        self.loop_threshold = loop_threshold

    @property
    def loop_threshold(self) -> int:
        return self._loop_threshold

    @loop_threshold.setter
    def loop_threshold(self, value: int) -> None:
        if value <= 0:
            msg = f"loop_threshold must be positive, got {value}"
            raise ValueError(msg)
        self._loop_threshold = int(value)

    def generate(self, difficulty: DifficultyLevel | str | int) -> GeneratedPuzzle:
        level = DifficultyLevel.parse(difficulty)
        board = self.terminal_pattern()
        self.dig(board, level)
        score = evaluate_difficulty(board, self.solver)
        logger.info(
            "Generated %s puzzle with %d givens, score %.2f",
            level.name,
            board.givens_count(),
            score,
        )
        return GeneratedPuzzle(board=board, score=score)

    def terminal_pattern(self, start: Board | None = None) -> Board:
        """Return a fully solved board extending ``start`` (empty by default).

        Every attempt seeds its own copy of ``start``, so a failed attempt leaves
        nothing behind for the next one.
        """
        start = Board() if start is None else start
        for attempt in range(1, self.loop_threshold + 1):
            working = start.copy()
            if not self._place_seed_givens(working):
                logger.debug("Attempt %d: could not place seed givens", attempt)
                continue
            if self.solver.is_solvable(working):
                self.solver.solve(working)
                logger.debug("Terminal pattern found on attempt %d", attempt)
                return working
            logger.debug("Attempt %d: seeded board is unsolvable", attempt)

        logger.warning("No terminal pattern after %d attempts", self.loop_threshold)
        msg = (
            "Failed to generate a terminal pattern after "
            f"{self.loop_threshold} attempts."
        )
        raise GenerationExhaustedError(msg)

    def _place_seed_givens(self, board: Board) -> bool:
        placed = 0
        for _draw in range(MAX_SEED_DRAWS):
            if placed == SEED_GIVENS:
                return True
            r, c, value = self.rng.integers(1, SIZE, size=3, endpoint=True).tolist()
            if board.get(r, c) == 0 and satisfies_rules(board, r, c, value):
                board.set(r, c, value)
                placed += 1
        return placed == SEED_GIVENS

    def dig(self, board: Board, difficulty: DifficultyLevel | str | int) -> int:
        """Remove forced givens from a solved ``board`` in place.

        Returns the number of cells removed.
        """
        config = DIGGING_CONFIGS[DifficultyLevel.parse(difficulty)]
        low, high = config.givens_range
        target = int(self.rng.integers(low, high, endpoint=True))
        logger.debug(
            "Digging towards %d givens, line floor %d, %s traversal",
            target,
            config.line_floor,
            config.traversal.value,
        )

        removed = 0
        for r, c in traversal_order(config.traversal, self.rng):
            value = board.get(r, c)
            if value == 0:
                continue
            if board.givens_count() - 1 < target:
                break
            if (
                board.row_givens(r) - 1 < config.line_floor
                or board.col_givens(c) - 1 < config.line_floor
            ):
                continue

            board.set(r, c, 0)
            if self._has_alternative(board, r, c, value):
                board.set(r, c, value)
            else:
                removed += 1

        logger.debug("Dug %d cells, %d givens left", removed, board.givens_count())
        return removed

    def _has_alternative(self, board: Board, r: int, c: int, value: int) -> bool:
        """Whether the emptied cell also completes with a value other than ``value``."""
        for other in range(1, SIZE + 1):
            if other == value or not satisfies_rules(board, r, c, other):
                continue
            board.set(r, c, other)
            solvable = self.solver.is_solvable(board)
            board.set(r, c, 0)
            if solvable:
                return True
        return False

    def hint(self, board: Board) -> Hint | None:
        """A random legal placement among all empty cells, ``None`` if there is none.

        Only values 1..9 are offered.
        """
        found = [
            Hint(position=(r, c), value=value)
            for r, c in board.empty_cells()
            for value in candidates(board, r, c)
        ]
        if not found:
            return None
        return found[int(self.rng.integers(len(found)))]
