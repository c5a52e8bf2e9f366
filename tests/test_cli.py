import io
import unittest
from contextlib import redirect_stdout
from unittest import mock

from connectfour.interfaces.cli import SimpleCLI, main, parse_position

# Player 1 on (5, 0)-(5, 2), player 2 on (4, 0)-(4, 1); player 2 to move
THREAT_POSITION = ",".join(["0"] * 28 + ["2", "2", "0", "0", "0", "0", "0"]
                           + ["1", "1", "1", "0", "0", "0", "0"])


def run_cli(argv):
    out = io.StringIO()
    with redirect_stdout(out):
        code = main(argv)
    return code, out.getvalue()


class TestParsePosition(unittest.TestCase):
    def test_parses_rows_top_first(self):
        board = parse_position(THREAT_POSITION)
        self.assertEqual(board.grid[5, 0], 1)
        self.assertEqual(board.grid[4, 1], 2)
        self.assertEqual(board.move_count, 5)

    def test_wrong_length(self):
        with self.assertRaises(ValueError):
            parse_position("0,0,1")

    def test_out_of_range_value(self):
        with self.assertRaises(ValueError):
            parse_position(",".join(["0"] * 41 + ["258"]))

    def test_non_numeric(self):
        with self.assertRaises(ValueError):
            parse_position(",".join(["x"] * 42))


class TestAnalyzeCommand(unittest.TestCase):
    def test_suggests_block(self):
        code, output = run_cli(['analyze', '--position', THREAT_POSITION, '--depth', '2'])
        self.assertEqual(code, 0)
        self.assertIn("No win detected", output)
        self.assertIn("Suggestions for TWO", output)
        self.assertIn("medium: column 3", output)
        self.assertIn("hard: column 3", output)

    def test_reports_win(self):
        position = ",".join(["0"] * 35 + ["1", "1", "1", "1", "2", "2", "2"])
        code, output = run_cli(['analyze', '--position', position])
        self.assertEqual(code, 0)
        self.assertIn("Win for ONE on [(5, 0), (5, 1), (5, 2), (5, 3)]", output)

    def test_bad_position(self):
        code, output = run_cli(['analyze', '--position', '1,2,3'])
        self.assertEqual(code, 1)
        self.assertIn("Error parsing position", output)


class TestPlayCommand(unittest.TestCase):
    def test_quit_immediately(self):
        cli = SimpleCLI(['play', '--ai', 'easy', '--seed', '1'])
        out = io.StringIO()
        with mock.patch('builtins.input', side_effect=['q']), redirect_stdout(out):
            self.assertEqual(cli.run(), 0)
        self.assertIn("Quitting game.", out.getvalue())

    def test_two_players_to_a_win(self):
        moves = ['3', '0', '3', '0', '3', '0', '3', 'n']
        cli = SimpleCLI(['play', '--ai', 'none'])
        out = io.StringIO()
        with mock.patch('builtins.input', side_effect=moves), redirect_stdout(out):
            cli.run()
        self.assertIn("Player X wins!", out.getvalue())
        self.assertIn("Thanks for playing", out.getvalue())

    def test_bad_input_reprompts(self):
        moves = ['nine', '9', 'q']
        cli = SimpleCLI(['play', '--ai', 'none'])
        out = io.StringIO()
        with mock.patch('builtins.input', side_effect=moves), redirect_stdout(out):
            cli.run()
        self.assertIn("Invalid input", out.getvalue())
        self.assertIn("Column must be between 0 and 6.", out.getvalue())


class TestNoCommand(unittest.TestCase):
    def test_prints_help_hint(self):
        code, output = run_cli([])
        self.assertEqual(code, 1)
        self.assertIn("Please specify a command", output)


if __name__ == "__main__":
    unittest.main()
