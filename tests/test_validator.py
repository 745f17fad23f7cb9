import unittest

from sudoku.core.constants import Digit
from sudoku.engine.validator import BoardValidator
from sudoku.io.literal import CLASSIC_PUZZLE, parse_puzzle


SOLUTION = (
    "534678912672195348198342567859761423426853791"
    "713924856961537284287419635345286179"
)


class BoardValidatorTests(unittest.TestCase):
    def test_solution_passes(self) -> None:
        result = BoardValidator().validate(parse_puzzle(SOLUTION))
        self.assertTrue(result.ok)
        self.assertEqual(result.messages, [])

    def test_incomplete_board_fails_when_completion_required(self) -> None:
        result = BoardValidator().validate(parse_puzzle(CLASSIC_PUZZLE))
        self.assertFalse(result.ok)
        self.assertIn("incomplete", result.messages[0])

    def test_partial_board_passes_without_completion(self) -> None:
        result = BoardValidator(require_complete=False).validate(parse_puzzle(CLASSIC_PUZZLE))
        self.assertTrue(result.ok)

    def test_duplicate_in_row_is_reported(self) -> None:
        board = parse_puzzle(CLASSIC_PUZZLE)
        board.set((1, 9), Digit.D5)
        result = BoardValidator(require_complete=False).validate(board)
        self.assertFalse(result.ok)
        self.assertIn("row 1", result.messages[0])

    def test_duplicate_in_column_is_reported(self) -> None:
        board = parse_puzzle(CLASSIC_PUZZLE)
        board.set((9, 1), Digit.D5)
        result = BoardValidator(require_complete=False).validate(board)
        self.assertFalse(result.ok)
        self.assertIn("column 1", result.messages[0])

    def test_duplicate_in_box_is_reported(self) -> None:
        board = parse_puzzle(CLASSIC_PUZZLE)
        board.set((2, 2), Digit.D8)
        result = BoardValidator(require_complete=False).validate(board)
        self.assertFalse(result.ok)
        self.assertIn("box 1", result.messages[0])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
