from __future__ import annotations

from typing import TYPE_CHECKING

from sudoku_puzzle.engine import generator, scorer, solver
from sudoku_puzzle.engine.generator import (
    GeneratedPuzzle,
    GenerationExhaustedError,
    Generator,
    Hint,
)
from sudoku_puzzle.engine.scorer import evaluate_difficulty
from sudoku_puzzle.engine.solver import Solver

if TYPE_CHECKING:
    import numpy as np

__all__ = [
    "GeneratedPuzzle",
    "GenerationExhaustedError",
    "Generator",
    "Hint",
    "Solver",
    "evaluate_difficulty",
    "generator",
    "make_generator",
    "scorer",
    "solver",
]


def make_generator(
    rng: np.random.Generator | int | None = None,
    *,
    loop_threshold: int = 100,
) -> Generator:
    return Generator(loop_threshold=loop_threshold, rng=rng, solver=Solver())
