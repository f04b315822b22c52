import numpy as np
import pytest

pytest.importorskip("torch")

from sudoku_puzzle.core.board import Board  # noqa: E402
from sudoku_puzzle.core.rules import validate_puzzle  # noqa: E402
from sudoku_puzzle.data import make_puzzle_dataset  # noqa: E402
from sudoku_puzzle.data.puzzle_dataset import (  # noqa: E402
    PuzzleDataset,
    PuzzleSample,
    generate_puzzles,
)


def _check_sample(sample: PuzzleSample) -> None:
    assert sample.puzzle.shape == (81,)
    assert sample.solution.shape == (81,)
    assert sample.puzzle.dtype == np.int64
    givens = sample.puzzle != 0
    assert np.array_equal(sample.puzzle[givens], sample.solution[givens])
    assert validate_puzzle(Board(sample.solution.reshape(9, 9)))


def test_generate_puzzles_is_seeded():
    first = generate_puzzles(2, "very-easy", rng=0)
    second = generate_puzzles(2, "very-easy", rng=0)
    assert len(first) == 2
    for a, b in zip(first, second):
        assert np.array_equal(a.puzzle, b.puzzle)
        _check_sample(a)
        assert a.difficulty == 1


def test_val_dataset_returns_stored_samples():
    ds = make_puzzle_dataset(2, "easy", rng=1, mode="val")
    assert len(ds) == 2
    assert ds[0] is ds.samples[0]
    _check_sample(ds[1])


def test_train_dataset_augments_consistently():
    ds = make_puzzle_dataset(1, "very-easy", rng=2, mode="train")
    sample = ds[0]
    _check_sample(sample)
    assert np.count_nonzero(sample.puzzle) == np.count_nonzero(ds.samples[0].puzzle)


def test_dataset_rejects_bad_shapes():
    bad = PuzzleSample(
        puzzle=np.zeros(80, dtype=np.int64),
        solution=np.zeros(81, dtype=np.int64),
        difficulty=1,
        score=1.0,
    )
    with pytest.raises(ValueError, match="81 cells"):
        PuzzleDataset((bad,))
