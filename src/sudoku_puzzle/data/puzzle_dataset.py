from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import numpy as np
import numpy.typing as npt
from torch.utils.data import Dataset

from sudoku_puzzle.core.board import Board, DifficultyLevel
from sudoku_puzzle.core.transform import shuffle_board
from sudoku_puzzle.engine.generator import Generator

if TYPE_CHECKING:
    from concurrent.futures import Executor


__all__ = [
    "PuzzleDataset",
    "PuzzleSample",
    "generate_puzzles",
]


class PuzzleSample(NamedTuple):
    puzzle: npt.NDArray[np.int64]
    solution: npt.NDArray[np.int64]
    difficulty: int
    score: float


def _split_rng_seeds(rng: np.random.Generator, count: int) -> tuple[int, ...]:
    return tuple(rng.integers(0, 2**32 - 1, size=count).tolist())


def _generate_one(
    seed: int, difficulty: DifficultyLevel, loop_threshold: int
) -> PuzzleSample:
    generator = Generator(loop_threshold=loop_threshold, rng=seed)
    board, score = generator.generate(difficulty)
    solution = board.copy()
    if not generator.solver.solve(solution):
        msg = "Generated puzzle turned out unsolvable."
        raise RuntimeError(msg)
    return PuzzleSample(
        puzzle=board.cells.astype(np.int64).flatten(),
        solution=solution.cells.astype(np.int64).flatten(),
        difficulty=int(difficulty),
        score=score,
    )


def generate_puzzles(
    count: int,
    difficulty: DifficultyLevel | str | int,
    rng: np.random.Generator | int | None = None,
    *,
    executor: Executor | None = None,
    loop_threshold: int = 100,
) -> tuple[PuzzleSample, ...]:
    """Generate ``count`` independent puzzles, one seed per puzzle."""
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)
    level = DifficultyLevel.parse(difficulty)

    seeds = _split_rng_seeds(rng, count)
    levels = (level,) * count
    thresholds = (loop_threshold,) * count
    if executor is None:
        return tuple(map(_generate_one, seeds, levels, thresholds))
    return tuple(executor.map(_generate_one, seeds, levels, thresholds))


class PuzzleDataset(Dataset[PuzzleSample]):
    """Generated puzzles with their solutions.

    With an ``rng`` every access returns a randomly permuted but equivalent copy
    of the stored sample.
    """

    def __init__(
        self,
        samples: tuple[PuzzleSample, ...],
        rng: np.random.Generator | int | None = None,
    ) -> None:
        if not all(
            s.puzzle.shape == (81,) and s.solution.shape == (81,) for s in samples
        ):
            msg = "All puzzles and solutions must have 81 cells."
            raise ValueError(msg)

        self.samples = samples
        if rng is not None and not isinstance(rng, np.random.Generator):
            rng = np.random.default_rng(rng)
        self.rng = rng

    def __len__(self) -> int:
        return len(self.samples)

    def __getitem__(self, index: int) -> PuzzleSample:
        sample = self.samples[index]
        if self.rng is None:
            return sample

        # One seed for both so puzzle and solution get the same permutation.
        seed = int(self.rng.integers(0, 2**32 - 1))
        puzzle = shuffle_board(Board(sample.puzzle.reshape(9, 9)), seed)
        solution = shuffle_board(Board(sample.solution.reshape(9, 9)), seed)
        return sample._replace(
            puzzle=puzzle.cells.astype(np.int64).flatten(),
            solution=solution.cells.astype(np.int64).flatten(),
        )

