import unittest

import numpy as np

from connectfour.game.board import Board
from connectfour.utils import ROWS, COLS, InvalidColumnError, Player
from tests.boards import draw_grid, DRAW_PHASES


def all_lines():
    """Every 4-cell line on the board, grouped by orientation."""
    horizontal = [[(row, col + i) for i in range(4)]
                  for row in range(ROWS) for col in range(COLS - 3)]
    vertical = [[(row + i, col) for i in range(4)]
                for col in range(COLS) for row in range(ROWS - 3)]
    rising = [[(row - i, col + i) for i in range(4)]
              for row in range(3, ROWS) for col in range(COLS - 3)]
    falling = [[(row + i, col + i) for i in range(4)]
               for row in range(ROWS - 3) for col in range(COLS - 3)]
    return {'horizontal': horizontal, 'vertical': vertical,
            'rising': rising, 'falling': falling}


class TestMoves(unittest.TestCase):
    def setUp(self):
        self.board = Board()

    def test_gravity_single_column(self):
        for k in range(1, ROWS + 1):
            self.assertEqual(self.board.available_row(2), ROWS - k)
            self.assertTrue(self.board.apply_move(2, Player.ONE if k % 2 else Player.TWO))
            self.assertNotEqual(self.board.grid[ROWS - k, 2], Player.EMPTY.value)

        self.assertTrue(self.board.is_column_full(2))
        self.assertIsNone(self.board.available_row(2))

        before = self.board.get_state()
        self.assertFalse(self.board.apply_move(2, Player.ONE))
        np.testing.assert_array_equal(self.board.grid, before)

    def test_move_count_tracks_applied_moves(self):
        for col in [3, 3, 4, 0]:
            self.board.apply_move(col, Player.TWO)
        self.assertEqual(self.board.move_count, 4)

    def test_invalid_column_is_rejected(self):
        for column in (-1, COLS):
            with self.assertRaises(InvalidColumnError):
                self.board.is_column_full(column)
            with self.assertRaises(InvalidColumnError):
                self.board.available_row(column)
            with self.assertRaises(InvalidColumnError):
                self.board.apply_move(column, Player.ONE)
        self.assertEqual(self.board.move_count, 0)

    def test_non_integer_column_is_rejected(self):
        for column in (2.5, True, "3", None):
            with self.subTest(column=column):
                with self.assertRaises(InvalidColumnError):
                    self.board.is_column_full(column)
                with self.assertRaises(InvalidColumnError):
                    self.board.apply_move(column, Player.ONE)
        self.assertEqual(self.board.move_count, 0)

    def test_numpy_integer_column_is_accepted(self):
        self.assertTrue(self.board.apply_move(np.int64(4), Player.ONE))
        self.assertEqual(self.board.grid[ROWS - 1, 4], Player.ONE.value)

    def test_invalid_column_error_is_value_error(self):
        self.assertTrue(issubclass(InvalidColumnError, ValueError))

    def test_empty_player_cannot_move(self):
        with self.assertRaises(ValueError):
            self.board.apply_move(3, Player.EMPTY)

    def test_valid_moves_skip_full_columns(self):
        for _ in range(ROWS):
            self.board.apply_move(1, Player.ONE)
        self.assertEqual(self.board.get_valid_moves(), [0, 2, 3, 4, 5, 6])


class TestWinDetection(unittest.TestCase):
    def test_empty_board_has_no_win(self):
        board = Board()
        for player in (Player.ONE, Player.TWO):
            result = board.check_win(player)
            self.assertFalse(result.won)
            self.assertEqual(result.line, [])

    def test_three_in_a_row_is_not_a_win(self):
        board = Board()
        for col in range(3):
            board.apply_move(col, Player.ONE)
        self.assertFalse(board.check_win(Player.ONE).won)
        board.apply_move(3, Player.ONE)
        self.assertTrue(board.check_win(Player.ONE).won)

    def test_every_line_is_detected(self):
        for orientation, lines in all_lines().items():
            for line in lines:
                with self.subTest(orientation=orientation, line=line):
                    board = Board()
                    for row, col in line:
                        board.grid[row, col] = Player.TWO.value

                    result = board.check_win(Player.TWO)
                    self.assertTrue(result.won)
                    self.assertEqual(result.line, line)
                    self.assertEqual(board.winning_line, line)
                    self.assertFalse(board.check_win(Player.ONE).won)

    def test_line_count(self):
        self.assertEqual(sum(len(lines) for lines in all_lines().values()), 69)

    def test_broken_line_is_not_a_win(self):
        board = Board()
        for col in (0, 1, 3, 4):
            board.apply_move(col, Player.ONE)
        self.assertFalse(board.check_win(Player.ONE).won)

    def test_horizontal_reported_before_vertical(self):
        board = Board()
        for col in range(4):
            board.grid[ROWS - 1, col] = Player.ONE.value
        for row in range(2, ROWS):
            board.grid[row, 6] = Player.ONE.value

        result = board.check_win(Player.ONE)
        self.assertEqual(result.line, [(5, 0), (5, 1), (5, 2), (5, 3)])

    def test_upper_row_reported_first(self):
        board = Board()
        for col in range(1, 5):
            board.grid[5, col] = Player.ONE.value
            board.grid[4, col] = Player.ONE.value

        self.assertEqual(board.check_win(Player.ONE).line, [(4, 1), (4, 2), (4, 3), (4, 4)])

    def test_winning_line_cleared_on_each_check(self):
        board = Board()
        for _ in range(4):
            board.apply_move(0, Player.ONE)
        self.assertTrue(board.check_win(Player.ONE).won)
        self.assertFalse(board.check_win(Player.TWO).won)
        self.assertEqual(board.winning_line, [])

    def test_vertical_win_example(self):
        board = Board()
        for _ in range(3):
            board.apply_move(3, Player.ONE)
            self.assertFalse(board.check_win(Player.ONE).won)
            board.apply_move(0, Player.TWO)
        board.apply_move(3, Player.ONE)

        result = board.check_win(Player.ONE)
        self.assertTrue(result.won)
        self.assertEqual(result.line, [(2, 3), (3, 3), (4, 3), (5, 3)])
        self.assertEqual(set(result.line), {(5, 3), (4, 3), (3, 3), (2, 3)})
        self.assertEqual(board.available_row(3), 1)


class TestDrawAndReset(unittest.TestCase):
    def fill_draw_board(self, board):
        for col in range(COLS):
            for row in range(ROWS - 1, -1, -1):
                player = Player.TWO if (row + DRAW_PHASES[col]) % 2 else Player.ONE
                self.assertTrue(board.apply_move(col, player))

    def test_full_board_without_win_is_draw(self):
        board = Board()
        self.fill_draw_board(board)

        np.testing.assert_array_equal(board.grid, draw_grid())
        self.assertTrue(board.is_board_full())
        self.assertFalse(board.check_win(Player.ONE).won)
        self.assertFalse(board.check_win(Player.TWO).won)
        self.assertEqual(board.move_count, ROWS * COLS)

    def test_board_with_one_gap_is_not_full(self):
        grid = draw_grid()
        grid[0, 3] = Player.EMPTY.value
        board = Board.from_grid(grid)
        self.assertFalse(board.is_board_full())
        self.assertEqual(board.get_valid_moves(), [3])

    def test_reset_is_idempotent(self):
        board = Board()
        self.fill_draw_board(board)
        for _ in range(2):
            board.reset()
            self.assertFalse(board.is_board_full())
            self.assertTrue(all(not board.is_column_full(col) for col in range(COLS)))
            self.assertEqual(board.move_count, 0)
            self.assertEqual(board.winning_line, [])

        self.fill_draw_board(board)
        self.assertTrue(board.is_board_full())


class TestSnapshots(unittest.TestCase):
    def test_from_grid_copies_input(self):
        grid = draw_grid()
        board = Board.from_grid(grid)
        grid[0, 0] = 0
        self.assertTrue(board.is_column_full(0))

    def test_from_grid_accepts_nested_lists(self):
        rows = [[0] * COLS for _ in range(ROWS)]
        rows[5][3] = 1
        board = Board.from_grid(rows)
        self.assertEqual(board.available_row(3), 4)

    def test_from_grid_rejects_floating_piece(self):
        grid = np.zeros((ROWS, COLS), dtype=int)
        grid[3, 2] = 1
        with self.assertRaises(ValueError):
            Board.from_grid(grid)

    def test_from_grid_rejects_bad_values_and_shape(self):
        grid = np.zeros((ROWS, COLS), dtype=int)
        grid[5, 0] = 3
        with self.assertRaises(ValueError):
            Board.from_grid(grid)
        with self.assertRaises(ValueError):
            Board.from_grid(np.zeros((COLS, ROWS), dtype=int))

    def test_from_grid_rejects_values_that_would_wrap(self):
        for value in (257, 258, -255):
            with self.subTest(value=value):
                grid = np.zeros((ROWS, COLS), dtype=int)
                grid[5, 0] = value
                with self.assertRaises(ValueError):
                    Board.from_grid(grid)

    def test_get_state_is_independent(self):
        board = Board()
        board.apply_move(0, Player.ONE)
        state = board.get_state()
        state[5, 0] = 0
        self.assertEqual(board.grid[5, 0], Player.ONE.value)

    def test_copy_is_independent(self):
        board = Board()
        clone = board.copy()
        clone.apply_move(4, Player.TWO)
        self.assertEqual(board.move_count, 0)

    def test_render_marks_pieces(self):
        board = Board()
        board.apply_move(0, Player.ONE)
        board.apply_move(1, Player.TWO)
        lines = board.render().splitlines()
        self.assertEqual(lines[ROWS], "|X O          |")
        self.assertEqual(lines[-1], "|0 1 2 3 4 5 6|")


if __name__ == "__main__":
    unittest.main()
