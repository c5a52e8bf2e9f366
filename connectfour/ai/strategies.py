"""
strategies.py - Random and blocking move selection

The two lighter computer strategies. Both read a grid snapshot and leave it
untouched; any simulated move is made on a private copy.
"""

from typing import Optional

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (COLS, Player, NoValidMovesError, drop_piece,
                               has_won, open_columns, player_value)


def random_move(grid: np.ndarray, rng: Optional[np.random.Generator] = None) -> int:
    """
    Pick a uniformly random column that is not full.

    Args:
        grid: Board snapshot
        rng: Random generator; a fresh unseeded one is used if omitted

    Returns:
        The chosen column
    """
    if not open_columns(grid):
        raise NoValidMovesError("No open column to play")
    rng = rng if rng is not None else np.random.default_rng()

    while True:
        column = int(rng.integers(0, COLS))
        if grid[0, column] == Player.EMPTY.value:
            debug.trace(f"Random move: column {column}", "search")
            return column


def find_blocking_move(grid: np.ndarray, opponent: Player) -> Optional[int]:
    """
    Find the first column where the opponent would complete four in a row.

    Only the opponent's immediate (single ply) threats are considered.

    Returns:
        The column to block, or None if the opponent has no immediate win
    """
    value = player_value(opponent)
    for column in open_columns(grid):
        child = drop_piece(grid, column, value)
        if has_won(child, value):
            return column
    return None


def blocking_move(grid: np.ndarray, opponent: Player,
                  rng: Optional[np.random.Generator] = None) -> int:
    """
    Block the opponent's immediate win, otherwise play randomly.

    Args:
        grid: Board snapshot
        opponent: The player the computer is playing against
        rng: Random generator for the fallback move

    Returns:
        The chosen column
    """
    if not open_columns(grid):
        raise NoValidMovesError("No open column to play")

    column = find_blocking_move(grid, opponent)
    if column is not None:
        debug.debug(f"Blocking opponent win in column {column}", "search")
        return column
    return random_move(grid, rng)
