"""Backtracking search over the empty cells of a board.

The search fills the cells that were empty in the starting board in a fixed
row-major order. Its whole state is explicit:

  * ``SearchState.moves``: the committed moves, one per depth.
  * ``SearchState.path``: the candidate offset that produced each move.
  * ``SearchState.next_candidate_index``: the offset to try next at the
    current depth.

Each call to :meth:`SearchEngine.step` performs one transition: commit the
next untried candidate at the current depth, or, when none is left, undo the
previous commit and advance its offset. Because undo restores the board
exactly and candidate generation is deterministic, resuming at
``offset + 1`` visits exactly the candidates not yet tried.

A puzzle whose givens already repeat a digit in some row, column or box is
exhausted on the first step without searching.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Protocol, Tuple

from ..core.constants import CandidateOrder, Position, SearchPhase, SolveStatus
from ..core.exceptions import (CheckpointError, MoveError, NonEmptyCellError,
                               SearchCancelled)
from ..core.models import Move, SearchEvent, SearchState, SearchStats, SolveResult
from ..utils.logger import get_logger
from .board import Board
from .candidates import CandidateGenerator
from .validator import BoardValidator


LOGGER = get_logger(__name__)

Observer = Callable[[SearchEvent], None]


class CancellationToken(Protocol):
    def is_set(self) -> bool:
        ...


@dataclass
class SearchConfig:
    """Configuration values driving the search."""

    candidate_order: CandidateOrder = CandidateOrder.DESCENDING
    max_steps: Optional[int] = None


class EmptyPositionIndex:
    """Row-major positions that were empty in the starting board.

    Element ``k`` is the position targeted when exactly ``k`` moves are
    committed.
    """

    def __init__(self, positions: Iterable[Position]) -> None:
        self._positions: Tuple[Position, ...] = tuple(Position(*pos) for pos in positions)

    @classmethod
    def from_board(cls, board: Board) -> "EmptyPositionIndex":
        return cls(board.empty_positions())

    def target_for(self, depth: int) -> Optional[Position]:
        if 0 <= depth < len(self._positions):
            return self._positions[depth]
        return None

    def __len__(self) -> int:
        return len(self._positions)

    def __getitem__(self, depth: int) -> Position:
        return self._positions[depth]

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions)


class SearchEngine:
    """Backtracking driver owning the board and the explicit search state."""

    def __init__(
        self,
        board: Board,
        config: Optional[SearchConfig] = None,
        observer: Optional[Observer] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> None:
        self.board = board
        self.puzzle = board.copy()
        self.config = config or SearchConfig()
        self.generator = CandidateGenerator(self.config.candidate_order)
        self.empty_index = EmptyPositionIndex.from_board(board)
        self.givens = BoardValidator(require_complete=False).validate(self.puzzle)
        self.state = SearchState()
        self.stats = SearchStats()
        self.phase = SearchPhase.PROBING
        self.observer = observer
        self.cancel_token = cancel_token

    @property
    def depth(self) -> int:
        return self.state.depth

    @property
    def remaining(self) -> int:
        return len(self.empty_index) - self.state.depth

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def run(self, max_steps: Optional[int] = None) -> SolveResult:
        limit = max_steps if max_steps is not None else self.config.max_steps
        LOGGER.info(
            "Searching %d empty cells (order=%s, resume depth=%d)",
            len(self.empty_index),
            self.generator.order.value,
            self.depth,
        )
        taken = 0
        while not self.phase.is_terminal:
            if limit is not None and taken >= limit:
                LOGGER.info("Pausing after %d steps at depth %d", taken, self.depth)
                return self.result()
            self.step()
            taken += 1

        if self.phase == SearchPhase.SOLVED:
            LOGGER.info(
                "Solved after %d steps (%d commits, %d backtracks)",
                self.stats.steps,
                self.stats.commits,
                self.stats.backtracks,
            )
        else:
            LOGGER.warning(
                "Search exhausted without a solution after %d steps", self.stats.steps
            )
        return self.result()

    def step(self) -> SearchPhase:
        """Perform one state-machine transition and return the new phase."""

        if self.phase.is_terminal:
            return self.phase
        if self.cancel_token is not None and self.cancel_token.is_set():
            raise SearchCancelled(f"Search cancelled at depth {self.depth}")

        self.stats.steps += 1
        if not self.givens.ok:
            # Repeated givens rule out every completion.
            return self._transition(SearchPhase.EXHAUSTED, None)
        target = self.empty_index.target_for(self.depth)
        if target is None:
            return self._transition(SearchPhase.SOLVED, None)

        offset = self.state.next_candidate_index
        digit = self.generator.candidate_at(self.board, target, offset)
        if digit is not None:
            self._push(Move(target, digit), offset)
            phase = SearchPhase.SOLVED if self.remaining == 0 else SearchPhase.DESCENDING
            return self._transition(phase, target)

        if self.depth == 0:
            return self._transition(SearchPhase.EXHAUSTED, target)

        undone = self._pop()
        return self._transition(SearchPhase.BACKTRACKING, undone.position)

    def result(self) -> SolveResult:
        if self.phase == SearchPhase.SOLVED:
            status = SolveStatus.SOLVED
        elif self.phase == SearchPhase.EXHAUSTED:
            status = SolveStatus.NO_SOLUTION
        else:
            status = SolveStatus.PAUSED
        return SolveResult(
            status=status,
            board=self.board,
            stats=self.stats,
            state=self.state.copy(),
        )

    # ------------------------------------------------------------------
    # Commit / undo
    # ------------------------------------------------------------------
    def commit(self, move: Move) -> None:
        """Validate and commit ``move`` at the current depth.

        The move must target the next empty position in index order; its
        offset within that position's candidates is recorded so a later undo
        resumes after it.
        """

        target = self.empty_index.target_for(self.depth)
        if target is None:
            raise MoveError(
                f"No empty cell left to fill; cannot play {int(move.digit)} at {move.position}"
            )
        if self.board.get(move.position) is not None:
            raise NonEmptyCellError(f"Cell {move.position} is already filled")
        if move.position != target:
            raise MoveError(
                f"Expected a move at {target}, got {move.position}"
            )
        options = self.generator.candidates(self.board, target)
        self.board.play(move)
        self._record(move, options.index(move.digit))
        self.phase = SearchPhase.SOLVED if self.remaining == 0 else SearchPhase.DESCENDING

    def undo(self) -> Optional[Move]:
        """Remove the most recent commit, restoring the board exactly."""

        if not self.state.moves:
            return None
        move = self._pop()
        self.phase = SearchPhase.BACKTRACKING
        return move

    def restore(self, state: SearchState) -> None:
        """Replay a saved search state onto a fresh engine."""

        if self.state.moves:
            raise CheckpointError("Can only restore into an engine at depth 0")
        if not self.givens.ok:
            raise CheckpointError(f"Puzzle givens conflict: {self.givens.messages[0]}")
        if len(state.moves) != len(state.path):
            raise CheckpointError("Move stack and offset stack differ in length")
        for move, offset in zip(state.moves, state.path):
            target = self.empty_index.target_for(self.depth)
            if move.position != target:
                raise CheckpointError(
                    f"Move at {move.position} does not match next empty cell {target}"
                )
            options = self.generator.candidates(self.board, target)
            if not 0 <= offset < len(options) or options[offset] != move.digit:
                raise CheckpointError(
                    f"Offset {offset} does not select {move.digit} at {move.position}"
                )
            try:
                self.board.play(move)
            except MoveError as exc:
                raise CheckpointError(str(exc)) from exc
            self._record(move, offset)
        if state.next_candidate_index < 0:
            raise CheckpointError("Negative candidate cursor")
        self.state.next_candidate_index = state.next_candidate_index
        self.stats = SearchStats(max_depth=self.depth)
        LOGGER.info("Restored search state at depth %d", self.depth)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _push(self, move: Move, offset: int) -> None:
        self.board.set(move.position, move.digit)
        self._record(move, offset)
        LOGGER.debug(
            "Commit %s at (%s,%s) depth=%d offset=%d",
            int(move.digit), int(move.row), int(move.col), self.depth, offset,
        )

    def _record(self, move: Move, offset: int) -> None:
        self.state.moves.append(move)
        self.state.path.append(offset)
        self.state.next_candidate_index = 0
        self.stats.commits += 1
        self.stats.max_depth = max(self.stats.max_depth, self.depth)

    def _pop(self) -> Move:
        move = self.state.moves.pop()
        self.board.clear(move.position)
        self.state.next_candidate_index = self.state.path.pop() + 1
        self.stats.backtracks += 1
        LOGGER.debug(
            "Backtrack from (%s,%s) to depth=%d next offset=%d",
            int(move.row), int(move.col), self.depth, self.state.next_candidate_index,
        )
        return move

    def _transition(self, phase: SearchPhase, position: Optional[Position]) -> SearchPhase:
        self.phase = phase
        if self.observer is not None:
            self.observer(SearchEvent(phase=phase, depth=self.depth, position=position, board=self.board))
        return phase


def solve(
    board: Board,
    config: Optional[SearchConfig] = None,
    observer: Optional[Observer] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> SolveResult:
    """Solve a copy of ``board``; the input board is left untouched."""

    engine = SearchEngine(board.copy(), config=config, observer=observer, cancel_token=cancel_token)
    return engine.run()
