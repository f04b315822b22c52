from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from sudoku_puzzle.core.board import BOX_SIZE, SIZE, Board, CoordinateError

__all__ = [
    "relabel",
    "shuffle_board",
    "swap_block_columns",
    "swap_block_rows",
    "swap_columns",
    "swap_rows",
]


def _line(name: str, value: int, upper: int) -> int:
    if not 1 <= value <= upper:
        msg = f"{name} {value} out of range 1..{upper}"
        raise CoordinateError(msg)
    return value - 1


def swap_columns(board: Board, c1: int, c2: int) -> None:
    """Swap two columns of the same block column in place."""
    i, j = _line("col", c1, SIZE), _line("col", c2, SIZE)
    if i // BOX_SIZE != j // BOX_SIZE:
        msg = f"Columns {c1} and {c2} belong to different block columns."
        raise ValueError(msg)
    board.cells[:, [i, j]] = board.cells[:, [j, i]]


def swap_rows(board: Board, r1: int, r2: int) -> None:
    """Swap two rows of the same block row in place."""
    i, j = _line("row", r1, SIZE), _line("row", r2, SIZE)
    if i // BOX_SIZE != j // BOX_SIZE:
        msg = f"Rows {r1} and {r2} belong to different block rows."
        raise ValueError(msg)
    board.cells[[i, j], :] = board.cells[[j, i], :]


def swap_block_columns(board: Board, b1: int, b2: int) -> None:
    i, j = _line("block col", b1, BOX_SIZE), _line("block col", b2, BOX_SIZE)
    first = slice(i * BOX_SIZE, (i + 1) * BOX_SIZE)
    second = slice(j * BOX_SIZE, (j + 1) * BOX_SIZE)
    board.cells[:, first], board.cells[:, second] = (
        board.cells[:, second].copy(),
        board.cells[:, first].copy(),
    )


def swap_block_rows(board: Board, b1: int, b2: int) -> None:
    i, j = _line("block row", b1, BOX_SIZE), _line("block row", b2, BOX_SIZE)
    first = slice(i * BOX_SIZE, (i + 1) * BOX_SIZE)
    second = slice(j * BOX_SIZE, (j + 1) * BOX_SIZE)
    board.cells[first, :], board.cells[second, :] = (
        board.cells[second, :].copy(),
        board.cells[first, :].copy(),
    )


def relabel(board: Board, permutation: Sequence[int]) -> None:
    """Replace digit ``d`` by ``permutation[d - 1]`` in place, skipping empty cells."""
    if sorted(permutation) != list(range(1, SIZE + 1)):
        msg = f"Not a permutation of 1..9: {list(permutation)}"
        raise ValueError(msg)
    lookup = np.array([0, *permutation], dtype=np.int8)
    board.cells[:, :] = lookup[board.cells]


def _shuffle_inner_columns_inplace(board: Board, rng: np.random.Generator) -> None:
    """Shuffle the inner columns of each 3-column block."""
    for block_col in range(BOX_SIZE):
        cols = [block_col * BOX_SIZE + i for i in range(BOX_SIZE)]
        shuffled_cols = rng.permutation(cols)
        board.cells[:, cols] = board.cells[:, shuffled_cols]


def _shuffle_inner_rows_inplace(board: Board, rng: np.random.Generator) -> None:
    """Shuffle the inner rows of each 3-row block."""
    for block_row in range(BOX_SIZE):
        rows = [block_row * BOX_SIZE + i for i in range(BOX_SIZE)]
        shuffled_rows = rng.permutation(rows)
        board.cells[rows, :] = board.cells[shuffled_rows, :]


def shuffle_board(
    board: Board, rng: np.random.Generator | int | None = None
) -> Board:
    """Return a randomly permuted copy that keeps validity and solution count."""
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)

    out = board.copy()
    _shuffle_inner_columns_inplace(out, rng)
    _shuffle_inner_rows_inplace(out, rng)

    bands = out.cells.reshape(BOX_SIZE, BOX_SIZE, SIZE)
    out.cells[:, :] = bands[rng.permutation(BOX_SIZE)].reshape(SIZE, SIZE)
    stacks = out.cells.reshape(SIZE, BOX_SIZE, BOX_SIZE)
    out.cells[:, :] = stacks[:, rng.permutation(BOX_SIZE)].reshape(SIZE, SIZE)

    relabel(out, (rng.permutation(SIZE) + 1).tolist())
    return out
