"""Custom exception hierarchy for the Sudoku solver."""


class SudokuError(Exception):
    """Base exception for solver failures."""


class DigitRangeError(SudokuError, ValueError):
    """Raised when a value outside [1,9] is used as a digit or coordinate."""


class PuzzleFormatError(SudokuError):
    """Raised when a puzzle literal cannot be parsed into a board."""


class MoveError(SudokuError):
    """Raised when a move cannot be played on the board."""


class NonEmptyCellError(MoveError):
    """Raised when the target cell already holds a digit."""


class InvalidMoveError(MoveError):
    """Raised when the digit already occurs in the target's row, column or box."""


class CheckpointError(SudokuError):
    """Raised when a saved search state cannot be restored."""


class SearchCancelled(SudokuError):
    """Raised when the search is cancelled through its token."""


class ValidationError(SudokuError):
    """Raised when the board integrity checks fail."""
