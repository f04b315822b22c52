"""Heuristic difficulty score.

The score blends three factors, each expressed on the 1..5 level scale:
the total number of givens, the sparsest row or column, and the effort the
backtracking solver needs. How hard a puzzle is for a human also depends on the
solving techniques it requires; that factor is not modelled, and its weight is
shared between the last two terms.
"""

from __future__ import annotations

from logging import getLogger
from typing import Final, NamedTuple

from sudoku_puzzle.core.board import Board, DifficultyLevel
from sudoku_puzzle.engine.solver import Solver

__all__ = [
    "DifficultyReport",
    "evaluate_difficulty",
    "min_givens_factor",
    "report_difficulty",
    "search_factor",
    "total_givens_factor",
]


logger = getLogger(__name__)

TOTAL_GIVENS_WEIGHT: Final[float] = 0.4
MIN_GIVENS_WEIGHT: Final[float] = 0.3
SEARCH_WEIGHT: Final[float] = 0.3


class DifficultyReport(NamedTuple):
    total_givens: DifficultyLevel
    min_givens: DifficultyLevel
    search: DifficultyLevel
    search_effort: int
    score: float


def total_givens_factor(givens: int) -> DifficultyLevel:
    # Counts below 22 clamp to EVIL, anything from 50 up is VERY_EASY.
    if givens >= 50:
        return DifficultyLevel.VERY_EASY
    if givens >= 36:
        return DifficultyLevel.EASY
    if givens >= 32:
        return DifficultyLevel.MEDIUM
    if givens >= 28:
        return DifficultyLevel.DIFFICULT
    return DifficultyLevel.EVIL


def min_givens_factor(min_givens: int) -> DifficultyLevel:
    """``6 - min_givens`` clamped to 1..5, so rows with six or more givens count
    as very easy rather than going negative."""
    if min_givens == 0:
        return DifficultyLevel.EVIL
    return DifficultyLevel.from_score(6 - min_givens)


def search_factor(search_effort: int) -> DifficultyLevel:
    if search_effort < 100:
        return DifficultyLevel.VERY_EASY
    if search_effort < 1_000:
        return DifficultyLevel.EASY
    if search_effort < 10_000:
        return DifficultyLevel.MEDIUM
    if search_effort < 100_000:
        return DifficultyLevel.DIFFICULT
    return DifficultyLevel.EVIL


def report_difficulty(board: Board, solver: Solver | None = None) -> DifficultyReport:
    """Score ``board`` and keep the individual factors. ``board`` is not modified."""
    solver = solver if solver is not None else Solver()

    total = total_givens_factor(board.givens_count())
    lowest = min_givens_factor(board.min_givens_row_col())

    if solver.solve(board.copy()):
        effort = solver.search_effort
        search = search_factor(effort)
    else:
        logger.warning("Scoring an unsolvable board, search factor set to EVIL")
        effort = solver.search_effort
        search = DifficultyLevel.EVIL

    score = (
        TOTAL_GIVENS_WEIGHT * total
        + MIN_GIVENS_WEIGHT * lowest
        + SEARCH_WEIGHT * search
    )
    return DifficultyReport(
        total_givens=total,
        min_givens=lowest,
        search=search,
        search_effort=effort,
        score=score,
    )


def evaluate_difficulty(board: Board, solver: Solver | None = None) -> float:
    return report_difficulty(board, solver).score
