from sudoku_puzzle.core import board, rules, transform
from sudoku_puzzle.core.board import (
    Board,
    CoordinateError,
    DifficultyLevel,
    DomainError,
    ShapeError,
)

__all__ = [
    "Board",
    "CoordinateError",
    "DifficultyLevel",
    "DomainError",
    "ShapeError",
    "board",
    "rules",
    "transform",
]
