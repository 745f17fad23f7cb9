"""Pretty-print helpers for Sudoku boards."""

from __future__ import annotations

import sys
import time
from typing import TYPE_CHECKING, Callable, List, Optional, TextIO

from ..core.constants import BOX_SIZE, Digit

if TYPE_CHECKING:
    from ..core.models import SearchEvent, SolveResult
    from ..engine.board import Board


BORDER = "+-----+-----+-----+"
EMPTY_SYMBOL = " "
CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[1;1H"


def cell_symbol(value: Optional[int]) -> str:
    return str(int(value)) if value else EMPTY_SYMBOL


def format_board(board: Board) -> str:
    """Render ``board`` as a boxed 9x9 grid. Pure; safe to call mid-search."""

    lines: List[str] = [BORDER]
    for row in Digit:
        if row != 1 and (row - 1) % BOX_SIZE == 0:
            lines.append(BORDER)
        parts = ["|"]
        for col in Digit:
            sep = "|" if col % BOX_SIZE == 0 else " "
            parts.append(cell_symbol(board.get((row, col))) + sep)
        lines.append("".join(parts))
    lines.append(BORDER)
    return "\n".join(lines)


def pretty_print_board(board: Board, *, label: str | None = None, stream=None) -> None:
    """Print the board in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_board(board), file=stream)


def print_solve_stats(result: SolveResult, *, stream=None) -> None:
    stream = stream or sys.stdout
    stats = result.stats
    print("--- Search ---", file=stream)
    print(f"  Status:        {result.status.value}", file=stream)
    print(f"  Steps:         {stats.steps}", file=stream)
    print(f"  Commits:       {stats.commits}", file=stream)
    print(f"  Backtracks:    {stats.backtracks}", file=stream)
    print(f"  Max depth:     {stats.max_depth}", file=stream)


class TerminalPresenter:
    """Redraws the board in place after every search transition.

    Intended as the ``observer`` of a :class:`~sudoku.engine.search.SearchEngine`.
    The delay is purely visual; the search outcome does not depend on it.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        delay_seconds: float = 0.01,
        clear_screen: bool = True,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.stream = stream or sys.stdout
        self.delay_seconds = delay_seconds
        self.clear_screen = clear_screen
        self._sleep = sleep
        self.frames = 0

    def render(self, board: Board) -> None:
        if self.delay_seconds > 0:
            self._sleep(self.delay_seconds)
        prefix = CLEAR_SCREEN + CURSOR_HOME if self.clear_screen else ""
        self.stream.write(prefix + format_board(board) + "\n")
        self.stream.flush()
        self.frames += 1

    def __call__(self, event: SearchEvent) -> None:
        self.render(event.board)
