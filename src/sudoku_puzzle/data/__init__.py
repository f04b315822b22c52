from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from concurrent.futures import Executor

    import numpy as np

    from sudoku_puzzle.core.board import DifficultyLevel

from sudoku_puzzle.data import puzzle_dataset

__all__ = ["make_puzzle_dataset", "puzzle_dataset"]


logger = getLogger(__name__)


def make_puzzle_dataset(
    num_puzzles: int,
    difficulty: DifficultyLevel | str | int,
    rng: np.random.Generator | int | None = None,
    executor: Executor | None = None,
    *,
    mode: Literal["train", "val"] = "val",
    loop_threshold: int = 100,
) -> puzzle_dataset.PuzzleDataset:
    samples = puzzle_dataset.generate_puzzles(
        num_puzzles,
        difficulty,
        rng=rng,
        executor=executor,
        loop_threshold=loop_threshold,
    )
    ds = puzzle_dataset.PuzzleDataset(
        samples=samples,
        rng=(rng if mode == "train" else None),
    )
    if len(ds):
        logger.debug("Example dataset solution: %s", str(ds[0].solution))
        logger.debug("Example dataset puzzle: %s", str(ds[0].puzzle))
    return ds
