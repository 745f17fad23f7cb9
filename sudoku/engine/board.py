"""Board representation and helper utilities."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Set

from ..core.constants import ALL_POSITIONS, CELL_COUNT, GRID_SIZE, Digit, Position
from ..core.exceptions import InvalidMoveError, NonEmptyCellError, PuzzleFormatError
from ..core.models import Move


class Board:
    """Fixed 81-cell grid of optional digits, indexed row-major."""

    def __init__(self, cells: Optional[Sequence[Optional[int]]] = None) -> None:
        if cells is None:
            self.cells: List[Optional[Digit]] = [None] * CELL_COUNT
            return
        if len(cells) != CELL_COUNT:
            raise PuzzleFormatError(f"Expected {CELL_COUNT} cells, got {len(cells)}")
        self.cells = [None if not value else Digit.parse(value) for value in cells]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[int]]]) -> "Board":
        if len(rows) != GRID_SIZE or any(len(row) != GRID_SIZE for row in rows):
            raise PuzzleFormatError(f"Expected a {GRID_SIZE}x{GRID_SIZE} grid")
        return cls([value for row in rows for value in row])

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def get(self, pos: Position) -> Optional[Digit]:
        return self.cells[_index(pos)]

    def set(self, pos: Position, digit: Optional[Digit]) -> None:
        """Unconditional write; callers are responsible for validation."""

        self.cells[_index(pos)] = digit

    def clear(self, pos: Position) -> Optional[Digit]:
        """Empty the cell at ``pos`` and return what it held."""

        index = _index(pos)
        previous = self.cells[index]
        self.cells[index] = None
        return previous

    # ------------------------------------------------------------------
    # Line and box queries
    # ------------------------------------------------------------------
    def row(self, num: Digit) -> List[Digit]:
        return self._present(Digit(num).row_positions())

    def column(self, num: Digit) -> List[Digit]:
        return self._present(Digit(num).column_positions())

    def box(self, num: Digit) -> List[Digit]:
        return self._present(Digit(num).box_positions())

    @staticmethod
    def box_of(row: int, col: int) -> Digit:
        return Digit.box_of(row, col)

    def _present(self, positions: Sequence[Position]) -> List[Digit]:
        values = (self.cells[pos.flat_index] for pos in positions)
        return [value for value in values if value is not None]

    def peers_digits(self, pos: Position) -> Set[Digit]:
        """Digits already used in the row, column and box of ``pos``."""

        row, col = Position.of(*pos)
        used = set(self.row(row))
        used.update(self.column(col))
        used.update(self.box(self.box_of(row, col)))
        return used

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def play(self, move: Move) -> None:
        """Write ``move`` after checking the cell is empty and the digit is legal."""

        if self.get(move.position) is not None:
            raise NonEmptyCellError(
                f"Cell {move.position} already holds {self.get(move.position)}"
            )
        if move.digit in self.peers_digits(move.position):
            raise InvalidMoveError(
                f"Digit {move.digit} conflicts at {move.position}"
            )
        self.set(move.position, move.digit)

    # ------------------------------------------------------------------
    # Whole-board helpers
    # ------------------------------------------------------------------
    def empty_positions(self) -> Iterator[Position]:
        return (pos for pos in ALL_POSITIONS if self.cells[pos.flat_index] is None)

    def is_complete(self) -> bool:
        return all(value is not None for value in self.cells)

    def copy(self) -> "Board":
        clone = Board()
        clone.cells = list(self.cells)
        return clone

    def to_jsonable(self) -> List[List[int]]:
        return [
            [int(self.cells[(row - 1) * GRID_SIZE + col - 1] or 0) for col in Digit]
            for row in Digit
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self) -> str:
        filled = sum(1 for value in self.cells if value is not None)
        return f"Board(filled={filled}/{CELL_COUNT})"

    def __str__(self) -> str:
        from ..utils.pretty import format_board

        return format_board(self)


def _index(pos: Position) -> int:
    """Flat cell index of ``pos``, rejecting coordinates outside [1,9]."""

    return Position.of(*pos).flat_index
