"""Parsing and formatting of textual puzzle literals.

A literal is 81 whitespace-separated integers in row-major order, 0 meaning
an empty cell. ``/`` and ``|`` tokens may be used as visual separators and
``#`` starts a comment. A single 81-character token such as
``"53..7...."`` (``.`` or ``0`` for empty) is accepted as well.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..core.constants import CELL_COUNT, GRID_SIZE
from ..core.exceptions import DigitRangeError, PuzzleFormatError
from ..engine.board import Board


SEPARATORS = {"/", "|"}

CLASSIC_PUZZLE = """
5 3 0 0 7 0 0 0 0
6 0 0 1 9 5 0 0 0
0 9 8 0 0 0 0 6 0
8 0 0 0 6 0 0 0 3
4 0 0 8 0 3 0 0 1
7 0 0 0 2 0 0 0 6
0 6 0 0 0 0 2 8 0
0 0 0 4 1 9 0 0 5
0 0 0 0 8 0 0 7 9
"""


def _tokens(text: str) -> List[str]:
    tokens: List[str] = []
    for line in text.splitlines():
        line = line.split("#", 1)[0]
        tokens.extend(tok for tok in line.split() if tok not in SEPARATORS)
    return tokens


def parse_puzzle(text: str) -> Board:
    """Build a board from a literal, raising :class:`PuzzleFormatError` if malformed."""

    tokens = _tokens(text)
    if len(tokens) == 1 and len(tokens[0]) == CELL_COUNT:
        tokens = ["0" if ch == "." else ch for ch in tokens[0]]
    if len(tokens) != CELL_COUNT:
        raise PuzzleFormatError(f"Expected {CELL_COUNT} cells, got {len(tokens)}")

    values: List[int] = []
    for index, token in enumerate(tokens):
        try:
            value = int(token)
        except ValueError as exc:
            raise PuzzleFormatError(
                f"Cell {index + 1} is not an integer: {token!r}"
            ) from exc
        if not 0 <= value <= GRID_SIZE:
            raise PuzzleFormatError(f"Cell {index + 1} out of range [0,9]: {value}")
        values.append(value)

    try:
        return Board(values)
    except DigitRangeError as exc:
        raise PuzzleFormatError(str(exc)) from exc


def load_puzzle(path: Path | str) -> Board:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise PuzzleFormatError(f"Cannot read puzzle file {path}: {exc}") from exc
    return parse_puzzle(text)


def format_literal(board: Board) -> str:
    """Inverse of :func:`parse_puzzle`: nine lines of space-separated digits."""

    return "\n".join(" ".join(str(value) for value in row) for row in board.to_jsonable())
