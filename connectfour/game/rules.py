"""
rules.py - Game flow and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, which alternates turns, detects wins and draws and
   optionally drives a computer opponent
2. ConnectFourEnv, a gymnasium-compatible environment in which an agent
   plays against the computer opponent
"""

from typing import Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connectfour.ai.player import AIPlayer, Difficulty
from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import ROWS, COLS, SEARCH_DEPTH, GameResult, Player


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    Player ONE always starts. When a difficulty is given, ai_player is
    controlled by the computer through play_ai_move().
    """

    def __init__(self, difficulty: Optional[Difficulty] = None,
                 ai_player: Player = Player.TWO,
                 rng: Optional[np.random.Generator] = None,
                 depth: int = SEARCH_DEPTH):
        """
        Initialize a new Connect Four game.

        Args:
            difficulty: Computer opponent level, or None for two humans
            ai_player: The side the computer plays
            rng: Random generator handed to the computer opponent
            depth: Search depth for the hard difficulty
        """
        self.board = Board()
        self.ai = None
        if difficulty is not None:
            self.ai = AIPlayer(self.board, difficulty, ai_player, rng, depth)
        self.reset()

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board.reset()
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.winning_line: List[Tuple[int, int]] = []
        self.move_count = 0
        self.last_move: Optional[Tuple[int, int]] = None

    def make_move(self, column: int) -> bool:
        """
        Drop the current player's piece into a column.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            True if the move was made, False if the game is over or the
            column is full
        """
        if self.is_game_over():
            debug.debug(f"Move in column {column} ignored: game is over", "game")
            return False

        row = self.board.available_row(column)
        if not self.board.apply_move(column, self.current_player):
            return False

        self.move_count += 1
        self.last_move = (row, column)
        debug.debug(f"{self.current_player.name} plays column {column}", "game")

        win = self.board.check_win(self.current_player)
        if win.won:
            self.game_result = GameResult.win_for(self.current_player)
            self.winning_line = win.line
            debug.info(f"{self.current_player.name} wins on {win.line}", "game")
        elif self.board.is_board_full():
            self.game_result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")
        else:
            self.current_player = self.current_player.other()

        return True

    def is_ai_turn(self) -> bool:
        """Whether the computer opponent is to move."""
        return (self.ai is not None and not self.is_game_over()
                and self.current_player == self.ai.ai_player)

    def play_ai_move(self) -> Optional[int]:
        """
        Let the computer opponent make its move.

        Returns:
            The column played, or None if it is not the computer's turn
        """
        if not self.is_ai_turn():
            return None
        column = self.ai.get_move()
        self.make_move(column)
        return column

    def is_game_over(self) -> bool:
        return self.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        if self.game_result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.game_result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def get_winning_line(self) -> List[Tuple[int, int]]:
        return list(self.winning_line)

    def get_current_player(self) -> Player:
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.board.get_valid_moves()

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays agent_player; the other side is the computer opponent
    at the chosen difficulty, replying inside step().
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, opponent_difficulty: Difficulty = Difficulty.EASY,
                 agent_player: Player = Player.ONE,
                 render_mode: Optional[str] = None,
                 depth: int = SEARCH_DEPTH):
        """
        Initialize the Connect Four environment.

        Args:
            opponent_difficulty: Level of the computer opponent
            agent_player: The side the agent plays
            render_mode: Mode for rendering the environment
            depth: Search depth for a hard opponent
        """
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.action_space = spaces.Discrete(COLS)
        # Observation space: 6x7 board with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.opponent_difficulty = opponent_difficulty
        self.agent_player = agent_player
        self.render_mode = render_mode
        self.depth = depth
        self.game = ConnectFourGame()

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster wins

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Start a new game; the opponent opens if the agent plays second.

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        debug.debug("Resetting environment", "env")

        self.game = ConnectFourGame(self.opponent_difficulty, self.agent_player.other(),
                                    rng=self.np_random, depth=self.depth)
        self.game.play_ai_move()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's move and the opponent's reply.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        if (self.game.is_game_over() or not 0 <= action < COLS
                or self.game.board.is_column_full(action)):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.game.make_move(action)
        self.game.play_ai_move()

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if terminated:
            winner = self.game.get_winner()
            if winner == self.agent_player:
                reward = self.reward_win
            elif winner is None:
                reward = self.reward_draw
            else:
                reward = self.reward_lose
            debug.info(f"Episode over: {self.game.game_result.name}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[Union[str, np.ndarray]]:
        if self.render_mode == "ascii":
            return self.game.render()
        elif self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state().astype(np.int8)

    def _get_info(self) -> Dict:
        valid_moves = self.game.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.current_player.value,
            'game_result': self.game.game_result.name,
            'moves_made': self.game.move_count,
            'winning_line': self.game.get_winning_line(),
            'last_move': self.game.last_move,
        }
