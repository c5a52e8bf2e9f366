"""
cli.py - Command-line interface for Connect Four

This module provides a console front end to play against another person or
the computer, to analyze a board position, and to benchmark the engine.
"""

import argparse
import sys
from typing import List, Optional

import numpy as np

from connectfour.ai.player import Difficulty, choose_move
from connectfour.ai.strategies import blocking_move, random_move
from connectfour.ai.minimax import MinimaxSearch, evaluate_board
from connectfour.debug import debug, DebugLevel
from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame
from connectfour.utils import ROWS, COLS, SEARCH_DEPTH, Player

QUIT = -1
RESTART = -2


def parse_position(position: str) -> Board:
    """
    Build a board from a comma-separated list of ROWS * COLS cell values.

    Values are listed row by row from the top row down.
    """
    try:
        cells = [int(value) for value in position.split(',')]
    except ValueError:
        raise ValueError("Position must contain only integers 0, 1 or 2") from None
    if len(cells) != ROWS * COLS:
        raise ValueError(f"Position string must have {ROWS * COLS} values, got {len(cells)}")
    return Board.from_grid(np.array(cells).reshape(ROWS, COLS))


class SimpleCLI:
    """Console front end for Connect Four."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv
        self.args = None
        self.game = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description='Connect Four with a computer opponent',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
    Examples:

    # Play against the hard computer opponent
    python run.py play --ai hard

    # Two human players
    python run.py play --ai none

    # Let the computer open
    python run.py play --ai medium --ai-first

    # Analyze a position (42 values, top row first)
    python run.py analyze --position 0,0,0,...,1,1,1,0,2,2,0 --player 2

    # Benchmark the engine
    python run.py benchmark --iterations 500 --depth 4
    """)
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug mode (equivalent to --debug_level debug)')
        parser.add_argument('--debug_level',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            default='warning', help='Set logging verbosity')
        parser.add_argument('--log_file', type=str, default=None,
                            help='Also write log messages to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a game interactively')
        play_parser.add_argument('--ai', choices=['none', 'easy', 'medium', 'hard'],
                                 default='medium', help='Computer opponent level')
        play_parser.add_argument('--ai-first', action='store_true',
                                 help='Computer plays first (as X)')
        play_parser.add_argument('--seed', type=int, default=None,
                                 help='Seed for the computer opponent')
        play_parser.add_argument('--depth', type=int, default=SEARCH_DEPTH,
                                 help='Search depth for the hard opponent')

        analyze_parser = subparsers.add_parser('analyze', help='Analyze a board position')
        analyze_parser.add_argument('--position', type=str, required=True,
                                    help='Comma-separated cell values, top row first')
        analyze_parser.add_argument('--player', type=int, choices=[1, 2], default=None,
                                    help='Player to suggest moves for (default: side to move)')
        analyze_parser.add_argument('--depth', type=int, default=SEARCH_DEPTH,
                                    help='Search depth for the hard suggestion')
        analyze_parser.add_argument('--seed', type=int, default=0,
                                    help='Seed for the random suggestions')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=int, default=1000,
                                      help='Number of iterations for benchmarking')
        benchmark_parser.add_argument('--depth', type=int, default=4,
                                      help='Search depth for the minimax benchmark')
        return parser

    def parse_args(self) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(self.argv)
        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play games until the user declines a rematch."""
        difficulty = None if self.args.ai == 'none' else Difficulty.from_string(self.args.ai)
        ai_player = Player.ONE if self.args.ai_first else Player.TWO
        rng = np.random.default_rng(self.args.seed)
        self.game = ConnectFourGame(difficulty, ai_player, rng=rng, depth=self.args.depth)

        print("Starting a new Connect Four game!")
        print(f"Enter column number (0-{COLS - 1}) to make a move. 'q' quits, 'r' restarts.")

        while True:
            self.game.reset()
            if not self.play_round():
                print("Quitting game.")
                return
            if not self.ask_play_again():
                print("Thanks for playing Connect 4!")
                return

    def play_round(self) -> bool:
        """
        Play one game to the end.

        Returns:
            False if the user quit, True when the game finished
        """
        print(self.game.render())

        while not self.game.is_game_over():
            if self.game.is_ai_turn():
                print("AI is thinking...")
                column = self.game.play_ai_move()
                print(f"AI plays column {column}")
                print(self.game.render())
                continue

            player = self.game.get_current_player()
            move = self.get_human_move(player)
            if move is None:
                continue
            if move == QUIT:
                return False
            if move == RESTART:
                self.game.reset()
                print("Game restarted.")
                print(self.game.render())
                continue

            if self.game.make_move(move):
                print(self.game.render())
            else:
                print("Column is full. Please choose another column!")

        self.report_result()
        return True

    def report_result(self) -> None:
        winner = self.game.get_winner()
        print("Game over!")
        if winner is None:
            print("It's a draw!")
        elif self.game.ai is not None and winner == self.game.ai.ai_player:
            print("AI wins! Better luck next time.")
        else:
            print(f"Player {winner} wins!")
        if winner is not None:
            print(f"Winning line: {self.game.get_winning_line()}")

    def get_human_move(self, player: Player) -> Optional[int]:
        """
        Read one move from the console.

        Returns:
            Column index, QUIT, RESTART, or None if the input was invalid
        """
        moves_left = (ROWS * COLS - self.game.move_count + 1) // 2
        user_input = input(f"Player {player} ({moves_left} moves left), "
                           f"column 0-{COLS - 1} or q/r: ").strip().lower()
        if user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART
        try:
            column = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or 'q'/'r'.")
            return None
        if not 0 <= column < COLS:
            print(f"Column must be between 0 and {COLS - 1}.")
            return None
        return column

    def ask_play_again(self) -> bool:
        while True:
            answer = input("Do you want to play again? (y/n): ").strip().lower()
            if answer in ('y', 'n'):
                return answer == 'y'
            print("Please enter 'y' for yes or 'n' for no.")

    def analyze_position(self) -> int:
        """Report wins, fullness and suggested moves for a position."""
        try:
            board = parse_position(self.args.position)
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        has_win = False
        for player in (Player.ONE, Player.TWO):
            result = board.check_win(player)
            if result.won:
                has_win = True
                print(f"Win for {player.name} on {result.line}")
        if not has_win:
            print("No win detected for any player")

        if board.is_board_full():
            print("Board is full" + ("" if has_win else ": draw"))
            return 0
        print(f"Empty spaces: {ROWS * COLS - board.move_count}")
        print(f"Valid moves: {board.get_valid_moves()}")
        if has_win:
            return 0

        if self.args.player is not None:
            player = Player(self.args.player)
        else:
            player = Player.ONE if board.move_count % 2 == 0 else Player.TWO
        print(f"\nSuggestions for {player.name}:")
        print(f"  Heuristic score now: {evaluate_board(board.grid, player)}")
        for difficulty in Difficulty:
            rng = np.random.default_rng(self.args.seed)
            column = choose_move(board, difficulty, player, rng, depth=self.args.depth)
            print(f"  {difficulty.value:>6}: column {column}")
        return 0

    def benchmark(self) -> None:
        """Benchmark board operations and each move strategy."""
        iterations = self.args.iterations
        rng = np.random.default_rng(0)
        print(f"Running benchmark with {iterations} iterations...")

        board = Board()
        moves_made = 0
        debug.start_timer("moves")
        for _ in range(iterations):
            col = int(rng.integers(0, COLS))
            if board.apply_move(col, Player.ONE if moves_made % 2 == 0 else Player.TWO):
                moves_made += 1
                if board.check_win(Player.ONE).won or board.check_win(Player.TWO).won \
                        or board.is_board_full():
                    board.reset()
        moves_time = debug.end_timer("moves")
        print(f"Made {moves_made} moves with win checks: {moves_time:.6f} seconds total, "
              f"{moves_time / max(moves_made, 1) * 1000:.6f} ms per move")

        positions = []
        for _ in range(max(iterations // 100, 1)):
            board = Board()
            for turn in range(int(rng.integers(4, 16))):
                board.apply_move(int(rng.integers(0, COLS)), Player.ONE if turn % 2 == 0 else Player.TWO)
            if not board.check_win(Player.ONE).won and not board.check_win(Player.TWO).won:
                positions.append(board.get_state())

        for name, strategy in (("random", lambda grid: random_move(grid, rng)),
                               ("blocking", lambda grid: blocking_move(grid, Player.ONE, rng))):
            debug.start_timer(name)
            for _ in range(iterations):
                strategy(positions[0] if positions else Board().get_state())
            elapsed = debug.end_timer(name)
            print(f"{name:>8} strategy: {elapsed / iterations * 1000:.6f} ms per move")

        search = MinimaxSearch(depth=self.args.depth)
        total_nodes = 0
        debug.start_timer("search")
        for grid in positions:
            search.get_move(grid, Player.TWO, rng)
            total_nodes += search.nodes_evaluated
        elapsed = debug.end_timer("search")
        if positions:
            print(f"minimax depth {self.args.depth}: {len(positions)} positions, "
                  f"{elapsed / len(positions) * 1000:.3f} ms per move, "
                  f"{total_nodes / max(elapsed, 1e-9):.0f} nodes per second")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI(argv)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
