"""Stateless sudoku rule predicates.

Every predicate scans the nine cells of the unit it inspects; none of them keeps
an index structure between calls.
"""

from __future__ import annotations

from collections.abc import Iterable

from sudoku_puzzle.core.board import BOX_SIZE, SIZE, Board, box_of

__all__ = [
    "candidates",
    "check_puzzle",
    "conflicts",
    "satisfies_rules",
    "validate_box",
    "validate_col",
    "validate_puzzle",
    "validate_row",
]


def satisfies_rules(board: Board, r: int, c: int, value: int) -> bool:
    """True if ``value`` is absent from row ``r``, column ``c`` and their box."""
    return (
        value not in board.get_row(r)
        and value not in board.get_col(c)
        and value not in board.get_box(*box_of(r, c))
    )


def _validate_unit(cells: Iterable[int], *, ignore_zeroes: bool) -> bool:
    seen: set[int] = set()
    for cell in cells:
        if cell == 0:
            if not ignore_zeroes:
                return False
            continue
        if cell in seen:
            return False
        seen.add(cell)
    return ignore_zeroes or len(seen) == SIZE


def validate_row(board: Board, r: int, *, ignore_zeroes: bool = False) -> bool:
    return _validate_unit(board.get_row(r), ignore_zeroes=ignore_zeroes)


def validate_col(board: Board, c: int, *, ignore_zeroes: bool = False) -> bool:
    return _validate_unit(board.get_col(c), ignore_zeroes=ignore_zeroes)


def validate_box(board: Board, x: int, y: int, *, ignore_zeroes: bool = False) -> bool:
    return _validate_unit(board.get_box(x, y), ignore_zeroes=ignore_zeroes)


def validate_puzzle(board: Board, *, ignore_zeroes: bool = False) -> bool:
    """With ``ignore_zeroes=False`` this holds only for a correctly solved board."""
    units = range(1, BOX_SIZE + 1)
    lines = range(1, SIZE + 1)
    return (
        all(
            validate_box(board, x, y, ignore_zeroes=ignore_zeroes)
            for x in units
            for y in units
        )
        and all(validate_row(board, r, ignore_zeroes=ignore_zeroes) for r in lines)
        and all(validate_col(board, c, ignore_zeroes=ignore_zeroes) for c in lines)
    )


def check_puzzle(board: Board) -> bool:
    """Whether every filled cell sits in duplicate-free units. Empty cells are fine."""
    for r in range(1, SIZE + 1):
        for c in range(1, SIZE + 1):
            if board.get(r, c) == 0:
                continue
            if not (
                validate_row(board, r, ignore_zeroes=True)
                and validate_col(board, c, ignore_zeroes=True)
                and validate_box(board, *box_of(r, c), ignore_zeroes=True)
            ):
                return False
    return True


def candidates(board: Board, r: int, c: int) -> list[int]:
    """Legal values for an empty cell; a filled cell has none."""
    if board.get(r, c) != 0:
        return []
    return [v for v in range(1, SIZE + 1) if satisfies_rules(board, r, c, v)]


def conflicts(board: Board) -> set[tuple[int, int]]:
    """Coordinates of every filled cell that shares its value with a peer."""
    units: list[list[tuple[int, int]]] = []
    units.extend([(r, c) for c in range(1, SIZE + 1)] for r in range(1, SIZE + 1))
    units.extend([(r, c) for r in range(1, SIZE + 1)] for c in range(1, SIZE + 1))
    for x in range(BOX_SIZE):
        for y in range(BOX_SIZE):
            units.append(
                [
                    (x * BOX_SIZE + i + 1, y * BOX_SIZE + j + 1)
                    for i in range(BOX_SIZE)
                    for j in range(BOX_SIZE)
                ]
            )

    found: set[tuple[int, int]] = set()
    for unit in units:
        by_value: dict[int, list[tuple[int, int]]] = {}
        for pos in unit:
            value = board.get(*pos)
            if value:
                by_value.setdefault(value, []).append(pos)
        for positions in by_value.values():
            if len(positions) > 1:
                found.update(positions)
    return found
