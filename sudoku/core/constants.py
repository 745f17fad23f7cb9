"""Shared constants and enumerations for the Sudoku solver."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Iterator, List, NamedTuple

from .exceptions import DigitRangeError


BOX_SIZE = 3
GRID_SIZE = BOX_SIZE * BOX_SIZE
CELL_COUNT = GRID_SIZE * GRID_SIZE


class Digit(IntEnum):
    """The closed set of Sudoku digits, doubling as row/column/box numbers."""

    D1 = 1
    D2 = 2
    D3 = 3
    D4 = 4
    D5 = 5
    D6 = 6
    D7 = 7
    D8 = 8
    D9 = 9

    @classmethod
    def parse(cls, value: int) -> "Digit":
        """Range-checked construction from a raw integer."""

        try:
            return cls(int(value))
        except (TypeError, ValueError) as exc:
            raise DigitRangeError(f"Digit out of range [1,9]: {value!r}") from exc

    @classmethod
    def all(cls) -> Iterator["Digit"]:
        return iter(cls)

    def row_positions(self) -> List["Position"]:
        return [Position(self, col) for col in Digit]

    def column_positions(self) -> List["Position"]:
        return [Position(row, self) for row in Digit]

    def box_positions(self) -> List["Position"]:
        """Positions of box ``self`` in row-major order (boxes numbered left-to-right, top-to-bottom)."""

        first_row = ((self - 1) // BOX_SIZE) * BOX_SIZE + 1
        first_col = ((self - 1) % BOX_SIZE) * BOX_SIZE + 1
        return [
            Position(Digit(first_row + n // BOX_SIZE), Digit(first_col + n % BOX_SIZE))
            for n in range(GRID_SIZE)
        ]

    @staticmethod
    def box_of(row: int, col: int) -> "Digit":
        band = _bucket(row)
        stack = _bucket(col)
        return Digit(band * BOX_SIZE + stack + 1)


def _bucket(coord: int) -> int:
    if 1 <= coord <= 3:
        return 0
    if 4 <= coord <= 6:
        return 1
    if 7 <= coord <= 9:
        return 2
    raise DigitRangeError(f"Coordinate out of range [1,9]: {coord!r}")


class Position(NamedTuple):
    """A (row, column) coordinate identifying one of the 81 cells.

    Build untrusted coordinates with :meth:`of`, which range-checks both.
    """

    row: Digit
    col: Digit

    @classmethod
    def of(cls, row: int, col: int) -> "Position":
        return cls(Digit.parse(row), Digit.parse(col))

    @property
    def flat_index(self) -> int:
        return (self.row - 1) * GRID_SIZE + (self.col - 1)

    @property
    def box(self) -> Digit:
        return Digit.box_of(self.row, self.col)

    def __str__(self) -> str:
        return f"({int(self.row)},{int(self.col)})"


ALL_POSITIONS: tuple = tuple(Position(row, col) for row in Digit for col in Digit)


class CandidateOrder(str, Enum):
    """Order in which candidate digits are offered for a cell."""

    DESCENDING = "descending"
    ASCENDING = "ascending"


class SearchPhase(str, Enum):
    """States of the backtracking state machine."""

    PROBING = "PROBING"
    DESCENDING = "DESCENDING"
    BACKTRACKING = "BACKTRACKING"
    SOLVED = "SOLVED"
    EXHAUSTED = "EXHAUSTED"

    @property
    def is_terminal(self) -> bool:
        return self in {SearchPhase.SOLVED, SearchPhase.EXHAUSTED}


class SolveStatus(str, Enum):
    """Outcome of a solve attempt."""

    SOLVED = "SOLVED"
    NO_SOLUTION = "NO_SOLUTION"
    PAUSED = "PAUSED"
