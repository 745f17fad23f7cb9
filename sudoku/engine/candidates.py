"""Candidate digit generation for empty cells."""

from __future__ import annotations

from typing import List, Optional

from ..core.constants import CandidateOrder, Digit, Position
from .board import Board


class CandidateGenerator:
    """Computes the legal digits for a position given the current board.

    The result depends only on the digits in the position's row, column and
    box, and the order is fixed by ``order``. Re-querying after an exact undo
    therefore reproduces the same sequence, which is what lets the search
    resume from a stored offset instead of recomputing what was tried.
    """

    def __init__(self, order: CandidateOrder = CandidateOrder.DESCENDING) -> None:
        self.order = CandidateOrder(order)
        universe = list(Digit.all())
        if self.order == CandidateOrder.DESCENDING:
            universe.reverse()
        self._universe = tuple(universe)

    def candidates(self, board: Board, pos: Position) -> List[Digit]:
        used = board.peers_digits(pos)
        return [digit for digit in self._universe if digit not in used]

    def candidate_at(self, board: Board, pos: Position, offset: int) -> Optional[Digit]:
        """Return the candidate at ``offset`` or ``None`` past the end."""

        options = self.candidates(board, pos)
        if 0 <= offset < len(options):
            return options[offset]
        return None
