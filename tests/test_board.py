import numpy as np
import pytest

from sudoku_puzzle.core.board import (
    Board,
    CoordinateError,
    DifficultyLevel,
    DomainError,
    ShapeError,
    box_of,
)

from .conftest import CLASSIC_PUZZLE, CLASSIC_SOLUTION


def test_new_board_is_empty():
    board = Board()
    assert board.givens_count() == 0
    assert board.to_list() == [[0] * 9 for _ in range(9)]
    assert not board.is_full()


def test_get_set_use_one_based_coordinates():
    board = Board()
    board.set(1, 1, 4)
    board.set(9, 9, 7)
    assert board.get(1, 1) == 4
    assert board.get(9, 9) == 7
    assert board.cells[0, 0] == 4
    assert board.cells[8, 8] == 7


@pytest.mark.parametrize(("r", "c"), [(0, 1), (1, 0), (10, 1), (1, 10), (-1, 5)])
def test_out_of_range_coordinates_fail_cleanly(r, c):
    board = Board()
    with pytest.raises(CoordinateError):
        board.get(r, c)
    with pytest.raises(CoordinateError):
        board.set(r, c, 1)
    assert board.givens_count() == 0


def test_coordinate_error_is_an_index_error():
    with pytest.raises(IndexError):
        Board().get_row(10)


@pytest.mark.parametrize("value", [-1, 10, 3.5, "5", True])
def test_set_rejects_values_outside_domain(value):
    board = Board()
    with pytest.raises(DomainError):
        board.set(1, 1, value)
    assert board.get(1, 1) == 0


def test_rows_cols_and_boxes(solution):
    assert solution.get_row(1) == CLASSIC_SOLUTION[0]
    assert solution.get_col(1) == [row[0] for row in CLASSIC_SOLUTION]
    assert solution.get_box(1, 1) == [5, 3, 4, 6, 7, 2, 1, 9, 8]
    assert solution.get_box(3, 3) == [2, 8, 4, 6, 3, 5, 1, 7, 9]


@pytest.mark.parametrize(("x", "y"), [(0, 1), (4, 1), (1, 4)])
def test_box_coordinates_are_checked(x, y):
    with pytest.raises(CoordinateError):
        Board().get_box(x, y)


def test_box_of():
    assert box_of(1, 1) == (1, 1)
    assert box_of(3, 4) == (1, 2)
    assert box_of(9, 7) == (3, 3)
    assert box_of(4, 6) == (2, 2)


def test_clear(solution):
    solution.clear()
    assert solution == Board()


def test_set_all_coerces_out_of_domain_values():
    grid = [row[:] for row in CLASSIC_PUZZLE]
    grid[0][2] = 10
    grid[0][3] = -3
    grid[0][5] = "7"
    grid[0][6] = None
    grid[0][7] = 2.5
    board = Board.from_list(grid)
    assert board.get_row(1) == [5, 3, 0, 0, 7, 0, 0, 0, 0]


@pytest.mark.parametrize(
    "grid",
    [
        [[0] * 9 for _ in range(8)],
        [[0] * 9 for _ in range(10)],
        [[0] * 9 for _ in range(8)] + [[0] * 8],
        [[0] * 9 for _ in range(8)] + [[0] * 10],
    ],
)
def test_set_all_rejects_wrong_shape_and_keeps_state(grid, puzzle):
    with pytest.raises(ShapeError):
        puzzle.set_all(grid)
    assert puzzle.to_list() == CLASSIC_PUZZLE


def test_constructor_coerces_out_of_domain_values():
    cells = np.array(CLASSIC_PUZZLE)
    cells[0, 2] = 10
    cells[0, 3] = 300
    cells[0, 5] = -1
    board = Board(cells)
    assert board.get_row(1) == [5, 3, 0, 0, 7, 0, 0, 0, 0]
    assert board.cells.dtype == np.int8
    assert Board(np.array(CLASSIC_SOLUTION)).to_list() == CLASSIC_SOLUTION


def test_constructor_treats_float_cells_like_set_all():
    cells = np.array(CLASSIC_PUZZLE, dtype=np.float64)
    cells[0, 0] = 5.5
    assert Board(cells) == Board.from_list(cells)
    assert Board(cells).givens_count() == 0


def test_constructor_rejects_wrong_shape():
    with pytest.raises(ShapeError):
        Board(np.zeros((9, 8), dtype=np.int8))


def test_set_all_accepts_numpy_arrays():
    board = Board.from_list(np.array(CLASSIC_SOLUTION))
    assert board.to_list() == CLASSIC_SOLUTION


def test_export_import_round_trip(puzzle):
    again = Board()
    again.set_all(puzzle.to_list())
    assert again == puzzle
    again.set_all(again.to_list())
    assert again == puzzle


def test_copy_is_independent(puzzle):
    other = puzzle.copy()
    other.set(1, 3, 4)
    assert puzzle.get(1, 3) == 0
    assert other != puzzle


def test_givens_statistics(puzzle):
    assert puzzle.givens_count() == 30
    assert puzzle.row_givens(1) == 3
    assert puzzle.col_givens(5) == 6
    assert puzzle.min_givens_row_col() == 1
    assert len(list(puzzle.empty_cells())) == 51
    assert (1, 3) in set(puzzle.empty_cells())


def test_full_board(solution):
    assert solution.is_full()
    assert solution.min_givens_row_col() == 9
    assert list(solution.empty_cells()) == []


def test_str_marks_empty_cells(puzzle):
    lines = str(puzzle).splitlines()
    assert lines[0] == "5 3 . | . 7 . | . . ."
    assert lines[3] == "------+-------+------"
    assert len(lines) == 11


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("very-easy", DifficultyLevel.VERY_EASY),
        ("VERY_EASY", DifficultyLevel.VERY_EASY),
        ("Easy", DifficultyLevel.EASY),
        ("medium", DifficultyLevel.MEDIUM),
        ("difficult", DifficultyLevel.DIFFICULT),
        ("evil", DifficultyLevel.EVIL),
        ("5", DifficultyLevel.EVIL),
        (3, DifficultyLevel.MEDIUM),
        (np.int64(4), DifficultyLevel.DIFFICULT),
    ],
)
def test_difficulty_level_parse(value, expected):
    assert DifficultyLevel.parse(value) is expected


@pytest.mark.parametrize("value", ["impossible", 0, 6, np.int64(7)])
def test_difficulty_level_parse_rejects_unknown(value):
    with pytest.raises(ValueError):
        DifficultyLevel.parse(value)


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (0.2, DifficultyLevel.VERY_EASY),
        (1.0, DifficultyLevel.VERY_EASY),
        (2.6, DifficultyLevel.MEDIUM),
        (4.4, DifficultyLevel.DIFFICULT),
        (7.0, DifficultyLevel.EVIL),
    ],
)
def test_difficulty_level_from_score(score, expected):
    assert DifficultyLevel.from_score(score) is expected


def test_difficulty_levels_are_ordered():
    assert [int(level) for level in DifficultyLevel] == [1, 2, 3, 4, 5]
