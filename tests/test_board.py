import unittest
from collections import Counter

from sudoku.core.constants import ALL_POSITIONS, Digit, Position
from sudoku.core.exceptions import (DigitRangeError, InvalidMoveError, NonEmptyCellError,
                                    PuzzleFormatError)
from sudoku.core.models import Move
from sudoku.engine.board import Board
from sudoku.io.literal import CLASSIC_PUZZLE, parse_puzzle


class DigitTests(unittest.TestCase):
    def test_parse_accepts_one_to_nine(self) -> None:
        self.assertEqual([int(Digit.parse(v)) for v in range(1, 10)], list(range(1, 10)))

    def test_parse_rejects_out_of_range(self) -> None:
        for value in (0, 10, -1):
            with self.assertRaises(DigitRangeError):
                Digit.parse(value)

    def test_range_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            Digit.parse(42)

    def test_position_flat_index_is_row_major(self) -> None:
        self.assertEqual(Position.of(1, 1).flat_index, 0)
        self.assertEqual(Position.of(1, 9).flat_index, 8)
        self.assertEqual(Position.of(2, 1).flat_index, 9)
        self.assertEqual(Position.of(9, 9).flat_index, 80)


class BoxGeometryTests(unittest.TestCase):
    def test_box_of_partitions_grid_into_nine_boxes(self) -> None:
        counts = Counter(Board.box_of(row, col) for row, col in ALL_POSITIONS)
        self.assertEqual(sorted(int(box) for box in counts), list(range(1, 10)))
        self.assertTrue(all(n == 9 for n in counts.values()))

    def test_box_of_agrees_with_box_traversal(self) -> None:
        for box in Digit:
            for row, col in box.box_positions():
                self.assertEqual(Board.box_of(row, col), box)

    def test_box_of_middle_band(self) -> None:
        self.assertEqual(Board.box_of(6, 1), 4)
        self.assertEqual(Board.box_of(6, 6), 5)
        self.assertEqual(Board.box_of(4, 9), 6)

    def test_box_traversal_literals(self) -> None:
        self.assertEqual(
            Digit.D1.box_positions(),
            [(1, 1), (1, 2), (1, 3), (2, 1), (2, 2), (2, 3), (3, 1), (3, 2), (3, 3)],
        )
        self.assertEqual(
            Digit.D2.box_positions(),
            [(1, 4), (1, 5), (1, 6), (2, 4), (2, 5), (2, 6), (3, 4), (3, 5), (3, 6)],
        )
        self.assertEqual(
            Digit.D5.box_positions(),
            [(4, 4), (4, 5), (4, 6), (5, 4), (5, 5), (5, 6), (6, 4), (6, 5), (6, 6)],
        )
        self.assertEqual(
            Digit.D7.box_positions(),
            [(7, 1), (7, 2), (7, 3), (8, 1), (8, 2), (8, 3), (9, 1), (9, 2), (9, 3)],
        )
        self.assertEqual(
            Digit.D9.box_positions(),
            [(7, 7), (7, 8), (7, 9), (8, 7), (8, 8), (8, 9), (9, 7), (9, 8), (9, 9)],
        )

    def test_boxes_are_disjoint_and_cover_grid(self) -> None:
        seen = [pos for box in Digit for pos in box.box_positions()]
        self.assertEqual(len(seen), 81)
        self.assertEqual(set(seen), set(ALL_POSITIONS))


class BoardQueryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.board = parse_puzzle(CLASSIC_PUZZLE)

    def test_row_column_box_skip_empties_in_order(self) -> None:
        self.assertEqual(self.board.row(Digit.D1), [5, 3, 7])
        self.assertEqual(self.board.column(Digit.D1), [5, 6, 8, 4, 7])
        self.assertEqual(self.board.box(Digit.D1), [5, 3, 6, 9, 8])
        self.assertEqual(self.board.box(Digit.D9), [2, 8, 5, 7, 9])

    def test_get_and_set(self) -> None:
        self.assertEqual(self.board.get((1, 1)), 5)
        self.assertIsNone(self.board.get((1, 3)))
        self.board.set((1, 3), Digit.D4)
        self.assertEqual(self.board.get(Position.of(1, 3)), 4)

    def test_set_does_not_validate(self) -> None:
        self.board.set((1, 3), Digit.D5)
        self.assertEqual(self.board.row(Digit.D1), [5, 3, 5, 7])

    def test_clear_returns_previous_value(self) -> None:
        self.assertEqual(self.board.clear((1, 2)), 3)
        self.assertIsNone(self.board.get((1, 2)))
        self.assertIsNone(self.board.clear((1, 2)))

    def test_empty_positions_row_major(self) -> None:
        empties = list(self.board.empty_positions())
        self.assertEqual(len(empties), 51)
        self.assertEqual(empties[:3], [(1, 3), (1, 4), (1, 6)])
        self.assertEqual(empties[-1], (9, 7))

    def test_out_of_range_coordinates_are_rejected(self) -> None:
        board = Board()
        with self.assertRaises(DigitRangeError):
            board.set((0, 1), Digit.D7)
        self.assertIsNone(board.get((9, 1)))
        for pos in ((10, 1), (1, 0), (-1, 5)):
            with self.assertRaises(DigitRangeError):
                board.get(pos)
        with self.assertRaises(DigitRangeError):
            board.clear((1, 10))
        with self.assertRaises(DigitRangeError):
            board.peers_digits((0, 3))

    def test_copy_is_independent(self) -> None:
        clone = self.board.copy()
        clone.set((1, 3), Digit.D4)
        self.assertIsNone(self.board.get((1, 3)))
        self.assertNotEqual(clone, self.board)

    def test_to_jsonable_uses_zero_for_empty(self) -> None:
        grid = self.board.to_jsonable()
        self.assertEqual(grid[0], [5, 3, 0, 0, 7, 0, 0, 0, 0])
        self.assertEqual(grid[8], [0, 0, 0, 0, 8, 0, 0, 7, 9])


class BoardConstructionTests(unittest.TestCase):
    def test_wrong_cell_count(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            Board([0] * 80)

    def test_out_of_range_digit(self) -> None:
        with self.assertRaises(DigitRangeError):
            Board([10] + [0] * 80)

    def test_from_rows_requires_square_grid(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            Board.from_rows([[0] * 9] * 8)

    def test_default_board_is_empty(self) -> None:
        board = Board()
        self.assertEqual(len(list(board.empty_positions())), 81)
        self.assertFalse(board.is_complete())


class PlayTests(unittest.TestCase):
    def setUp(self) -> None:
        self.board = parse_puzzle(CLASSIC_PUZZLE)

    def test_play_rejects_digit_in_row(self) -> None:
        # Row 1 already holds a 5 at (1,1).
        with self.assertRaises(InvalidMoveError):
            self.board.play(Move.of(1, 9, 5))
        self.assertIsNone(self.board.get((1, 9)))

    def test_play_rejects_digit_in_column(self) -> None:
        with self.assertRaises(InvalidMoveError):
            self.board.play(Move.of(3, 1, 4))

    def test_play_rejects_digit_in_box(self) -> None:
        with self.assertRaises(InvalidMoveError):
            self.board.play(Move.of(2, 2, 8))

    def test_play_rejects_filled_cell(self) -> None:
        with self.assertRaises(NonEmptyCellError):
            self.board.play(Move.of(1, 1, 1))

    def test_filled_cell_reported_before_conflict(self) -> None:
        with self.assertRaises(NonEmptyCellError):
            self.board.play(Move.of(1, 2, 5))

    def test_play_writes_legal_digit(self) -> None:
        self.board.play(Move.of(1, 3, 4))
        self.assertEqual(self.board.get((1, 3)), 4)

    def test_move_of_checks_range(self) -> None:
        with self.assertRaises(DigitRangeError):
            Move.of(0, 1, 1)
        with self.assertRaises(DigitRangeError):
            Move.of(1, 1, 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
