"""Data models supporting the backtracking search."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from .constants import Digit, Position, SearchPhase, SolveStatus

if TYPE_CHECKING:
    from ..engine.board import Board


@dataclass(frozen=True)
class Move:
    """A candidate or committed assignment of a digit to a position."""

    position: Position
    digit: Digit

    @classmethod
    def of(cls, row: int, col: int, digit: int) -> "Move":
        return cls(Position.of(row, col), Digit.parse(digit))

    @property
    def row(self) -> Digit:
        return self.position.row

    @property
    def col(self) -> Digit:
        return self.position.col

    def to_jsonable(self) -> List[int]:
        return [int(self.row), int(self.col), int(self.digit)]


@dataclass
class SearchState:
    """Working memory of the search: committed moves and per-depth offsets.

    ``path[k]`` is the candidate offset that produced ``moves[k]``;
    ``next_candidate_index`` is the offset to try at the current depth.
    """

    moves: List[Move] = field(default_factory=list)
    path: List[int] = field(default_factory=list)
    next_candidate_index: int = 0

    @property
    def depth(self) -> int:
        return len(self.moves)

    def copy(self) -> "SearchState":
        return SearchState(
            moves=list(self.moves),
            path=list(self.path),
            next_candidate_index=self.next_candidate_index,
        )


@dataclass
class SearchStats:
    steps: int = 0
    commits: int = 0
    backtracks: int = 0
    max_depth: int = 0


@dataclass(frozen=True)
class SearchEvent:
    """Notification emitted once per state-machine transition.

    ``board`` is the live engine board, so observers should render it
    immediately rather than keep a reference.
    """

    phase: SearchPhase
    depth: int
    position: Optional[Position]
    board: "Board"


@dataclass
class SolveResult:
    status: SolveStatus
    board: "Board"
    stats: SearchStats
    state: SearchState

    @property
    def solved(self) -> bool:
        return self.status == SolveStatus.SOLVED
