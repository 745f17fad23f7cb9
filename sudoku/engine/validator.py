"""Deterministic rule validation for Sudoku boards."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence

from ..core.constants import Digit
from ..core.exceptions import ValidationError
from .board import Board
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class BoardValidator:
    """Checks that no row, column or box repeats a digit."""

    def __init__(self, require_complete: bool = True) -> None:
        self.require_complete = require_complete

    def validate(self, board: Board) -> ValidationResult:
        try:
            self._check_units(board, "row", board.row)
            self._check_units(board, "column", board.column)
            self._check_units(board, "box", board.box)
            if self.require_complete:
                self._check_complete(board)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _check_units(board: Board, kind: str, values_of) -> None:
        for num in Digit:
            values: Sequence[Digit] = values_of(num)
            repeated = sorted(int(d) for d, n in Counter(values).items() if n > 1)
            if repeated:
                raise ValidationError(f"Digit(s) {repeated} repeated in {kind} {int(num)}")

    @staticmethod
    def _check_complete(board: Board) -> None:
        empty = next(board.empty_positions(), None)
        if empty is not None:
            raise ValidationError(f"Board is incomplete; first empty cell at {empty}")
