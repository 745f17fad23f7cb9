"""Backtracking Sudoku solver with an explicit, inspectable search state.

This package exposes the public API surface via:

- ``sudoku.engine.board.Board``: the 81-cell grid and its row/column/box queries.
- ``sudoku.engine.search.SearchEngine``: the step-wise backtracking driver.
- ``sudoku.engine.search.solve``: one-shot solve of a board copy.
- ``sudoku.io.literal.parse_puzzle``: build a board from a textual literal.
"""

from .engine.board import Board
from .engine.search import SearchConfig, SearchEngine, solve
from .io.literal import parse_puzzle

__all__ = [
    "Board",
    "SearchConfig",
    "SearchEngine",
    "solve",
    "parse_puzzle",
]

__version__ = "0.1.0"
