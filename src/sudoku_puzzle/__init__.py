"""Sudoku puzzle engine: generation, solving, consistency checks and hints."""

from __future__ import annotations

from collections.abc import Sequence
from logging import getLogger
from typing import TYPE_CHECKING

from sudoku_puzzle.core import rules
from sudoku_puzzle.core.board import (
    Board,
    CoordinateError,
    DifficultyLevel,
    DomainError,
    ShapeError,
)
from sudoku_puzzle.engine import make_generator
from sudoku_puzzle.engine.generator import (
    GeneratedPuzzle,
    GenerationExhaustedError,
    Hint,
)
from sudoku_puzzle.engine.scorer import evaluate_difficulty
from sudoku_puzzle.engine.solver import Solver

if TYPE_CHECKING:
    import numpy as np

__all__ = [
    "Board",
    "CoordinateError",
    "DifficultyLevel",
    "DomainError",
    "GeneratedPuzzle",
    "GenerationExhaustedError",
    "Hint",
    "ShapeError",
    "Solver",
    "check",
    "evaluate_difficulty",
    "generate",
    "hint",
    "solve",
]

__version__ = "0.1.0"


logger = getLogger(__name__)

BoardLike = Board | Sequence[Sequence[int]]


def _as_board(board: BoardLike) -> Board:
    """Private copy of ``board``; nested sequences are validated on the way in."""
    if isinstance(board, Board):
        return board.copy()
    return Board.from_list(board)


def generate(
    difficulty: DifficultyLevel | str | int,
    rng: np.random.Generator | int | None = None,
    *,
    loop_threshold: int = 100,
) -> GeneratedPuzzle:
    """Generate a unique-solution puzzle and its difficulty score.

    Raises :class:`GenerationExhaustedError` when no terminal pattern is found
    within ``loop_threshold`` attempts.
    """
    return make_generator(rng, loop_threshold=loop_threshold).generate(difficulty)


def solve(board: BoardLike) -> Board | None:
    """Solved copy of ``board``, or ``None`` if it has no solution."""
    solved = _as_board(board)
    if not Solver().solve(solved):
        logger.info("Board is unsolvable")
        return None
    return solved


def check(board: BoardLike) -> bool:
    """Whether the filled cells are free of duplicates. Empty cells are allowed."""
    return rules.check_puzzle(_as_board(board))


def hint(
    board: BoardLike, rng: np.random.Generator | int | None = None
) -> Hint | None:
    return make_generator(rng).hint(_as_board(board))
