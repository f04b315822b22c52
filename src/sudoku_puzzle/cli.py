"""Command-line front end.

Boards travel as JSON: either a 9x9 list of lists or an object with a
``"board"`` key. Exit status is 0 on success, 1 for a negative answer
(unsolvable, inconsistent, no hint, generation failed) and 2 for bad input.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Sequence
from logging import basicConfig, getLogger
from typing import Any, TextIO

import sudoku_puzzle
from sudoku_puzzle.core.board import Board, DifficultyLevel, ShapeError
from sudoku_puzzle.core.rules import conflicts
from sudoku_puzzle.engine.scorer import report_difficulty

__all__ = ["main"]


logger = getLogger(__name__)

EXIT_OK, EXIT_NEGATIVE, EXIT_BAD_INPUT = 0, 1, 2


class InputError(Exception):
    pass


def _read_board(stream: TextIO) -> Board:
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as e:
        msg = f"Input is not valid JSON: {e}"
        raise InputError(msg) from e
    if isinstance(payload, dict):
        payload = payload.get("board")
    if not isinstance(payload, list):
        msg = "Expected a 9x9 list or an object with a 'board' key."
        raise InputError(msg)
    try:
        return Board.from_list(payload)
    except (ShapeError, TypeError) as e:
        raise InputError(str(e)) from e


def _emit(payload: dict[str, Any], *, pretty: bool) -> None:
    json.dump(payload, sys.stdout, indent=2 if pretty else None)
    sys.stdout.write("\n")


def _cmd_generate(args: argparse.Namespace) -> int:
    try:
        board, score = sudoku_puzzle.generate(
            args.difficulty, rng=args.seed, loop_threshold=args.loop_threshold
        )
    except sudoku_puzzle.GenerationExhaustedError as e:
        logger.error("%s", e)
        return EXIT_NEGATIVE
    _emit(
        {
            "board": board.to_list(),
            "score": score,
            "level": DifficultyLevel.from_score(score).name,
        },
        pretty=args.pretty,
    )
    return EXIT_OK


def _cmd_solve(args: argparse.Namespace) -> int:
    solved = sudoku_puzzle.solve(_read_board(args.board))
    if solved is None:
        _emit({"error": "unsolvable"}, pretty=args.pretty)
        return EXIT_NEGATIVE
    _emit({"board": solved.to_list()}, pretty=args.pretty)
    return EXIT_OK


def _cmd_check(args: argparse.Namespace) -> int:
    board = _read_board(args.board)
    ok = sudoku_puzzle.check(board)
    _emit(
        {"ok": ok, "conflicts": sorted(list(pos) for pos in conflicts(board))},
        pretty=args.pretty,
    )
    return EXIT_OK if ok else EXIT_NEGATIVE


def _cmd_hint(args: argparse.Namespace) -> int:
    found = sudoku_puzzle.hint(_read_board(args.board), rng=args.seed)
    if found is None:
        _emit({"error": "no hint available"}, pretty=args.pretty)
        return EXIT_NEGATIVE
    _emit({"position": list(found.position), "value": found.value}, pretty=args.pretty)
    return EXIT_OK


def _cmd_score(args: argparse.Namespace) -> int:
    report = report_difficulty(_read_board(args.board))
    _emit(
        {
            "score": report.score,
            "level": DifficultyLevel.from_score(report.score).name,
            "total_givens_factor": int(report.total_givens),
            "min_givens_factor": int(report.min_givens),
            "search_factor": int(report.search),
            "search_effort": report.search_effort,
        },
        pretty=args.pretty,
    )
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sudoku-puzzle",
        description="Generate, solve, check and score sudoku puzzles.",
    )
    parser.add_argument("--pretty", action="store_true", help="indent JSON output")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="generate a new puzzle")
    gen.add_argument(
        "-d",
        "--difficulty",
        type=DifficultyLevel.parse,
        default=DifficultyLevel.VERY_EASY,
        help="very-easy, easy, medium, difficult, evil or 1..5",
    )
    gen.add_argument("--seed", type=int, default=None)
    gen.add_argument("--loop-threshold", type=int, default=100)
    gen.set_defaults(handler=_cmd_generate)

    for name, handler, help_text in (
        ("solve", _cmd_solve, "solve a board"),
        ("check", _cmd_check, "check a partially filled board for duplicates"),
        ("hint", _cmd_hint, "suggest one legal placement"),
        ("score", _cmd_score, "estimate the difficulty of a board"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument(
            "board",
            nargs="?",
            type=argparse.FileType("r"),
            default=sys.stdin,
            help="JSON board file, stdin by default",
        )
        if name == "hint":
            cmd.add_argument("--seed", type=int, default=None)
        cmd.set_defaults(handler=handler)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    basicConfig(level=os.environ.get("SUDOKU_LOG_LEVEL", "WARNING"))
    args = _build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except InputError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    finally:
        board_file = getattr(args, "board", None)
        if board_file is not None and board_file is not sys.stdin:
            board_file.close()


if __name__ == "__main__":
    sys.exit(main())
