"""
player.py - Computer opponent with three difficulty levels

Easy plays a random legal column, Medium blocks the opponent's immediate
wins, Hard runs the minimax search.
"""

from enum import Enum
from typing import Optional

import numpy as np

from connectfour.ai.minimax import MinimaxSearch
from connectfour.ai.strategies import blocking_move, random_move
from connectfour.debug import debug
from connectfour.utils import SEARCH_DEPTH, Player, as_grid, player_value


class Difficulty(Enum):
    """Difficulty tiers of the computer opponent."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def from_string(cls, name: str) -> 'Difficulty':
        """
        Parse a difficulty name such as 'Hard' or 'easy'.

        Raises:
            ValueError: If the name is not one of the three tiers
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty '{name}', expected one of: {choices}") from None


def choose_move(board, difficulty: Difficulty, ai_player: Player,
                rng: Optional[np.random.Generator] = None,
                depth: int = SEARCH_DEPTH) -> int:
    """
    Choose the computer's column.

    The board is copied on entry, so the caller's board may be read while
    the search runs.

    Args:
        board: Board or grid snapshot
        difficulty: Strategy to apply
        ai_player: The player the computer controls
        rng: Random generator for random moves and fallbacks
        depth: Search depth for the hard difficulty

    Returns:
        The chosen column
    """
    grid = as_grid(board)
    ai_player = Player(player_value(ai_player))
    rng = rng if rng is not None else np.random.default_rng()

    if difficulty == Difficulty.EASY:
        return random_move(grid, rng)
    elif difficulty == Difficulty.MEDIUM:
        return blocking_move(grid, ai_player.other(), rng)
    elif difficulty == Difficulty.HARD:
        return MinimaxSearch(depth=depth).get_move(grid, ai_player, rng)
    raise ValueError(f"Unsupported difficulty: {difficulty!r}")


class AIPlayer:
    """
    A computer opponent bound to one board.

    The board is read fresh on every get_move call.
    """

    def __init__(self, board, difficulty: Difficulty, ai_player: Player = Player.TWO,
                 rng: Optional[np.random.Generator] = None, depth: int = SEARCH_DEPTH):
        if not isinstance(difficulty, Difficulty):
            raise ValueError(f"Difficulty must be a Difficulty, got {difficulty!r}")
        self.board = board
        self.difficulty = difficulty
        self.ai_player = Player(player_value(ai_player))
        self.opponent = self.ai_player.other()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.depth = depth

    def get_move(self) -> int:
        """Return the column the computer wants to play next."""
        column = choose_move(self.board, self.difficulty, self.ai_player,
                             self.rng, self.depth)
        debug.info(f"AI ({self.difficulty.value}) chooses column {column}", "search")
        return column
