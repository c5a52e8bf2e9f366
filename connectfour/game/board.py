"""
board.py - Board representation and core game mechanics for Connect Four

This module implements the Board class, the authoritative owner of the grid.
It applies moves under gravity, reports column and board fullness, and
detects 4-in-a-row wins together with the cells of the winning line.
The board does not track turns or whether the game is over.
"""

from typing import List, NamedTuple, Optional, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.utils import (ROWS, COLS, Player, WINDOW_CELLS, as_grid,
                               check_column, find_winning_window,
                               get_available_row, player_value,
                               render_board_ascii)


class WinCheck(NamedTuple):
    """Outcome of a win query: whether the player won, and the winning cells."""
    won: bool
    line: List[Tuple[int, int]]


class Board:
    """
    Represents a Connect Four game board.

    Row 0 is the top row and row ROWS-1 the bottom row. Cells hold
    Player.EMPTY, Player.ONE or Player.TWO values.
    """

    def __init__(self):
        """Initialize an empty Connect Four board."""
        self.grid = np.zeros((ROWS, COLS), dtype=np.int8)
        self.winning_line: List[Tuple[int, int]] = []

    @classmethod
    def from_grid(cls, grid) -> 'Board':
        """
        Build a board from a snapshot.

        Args:
            grid: A ROWS x COLS array or nested list of 0, 1 and 2 values

        Returns:
            A new Board holding a copy of the snapshot

        Raises:
            ValueError: If the shape or a cell value is wrong, or a piece
                floats above an empty cell
        """
        snapshot = as_grid(grid)
        occupied = snapshot != Player.EMPTY.value
        # Every occupied cell above the bottom row needs an occupied cell below it
        if np.any(occupied[:-1] & ~occupied[1:]):
            raise ValueError("Board violates gravity: a piece sits above an empty cell")

        board = cls()
        board.grid = snapshot
        return board

    def reset(self):
        """Clear every cell and the winning line."""
        debug.debug("Resetting board", "board")
        self.grid.fill(Player.EMPTY.value)
        self.winning_line = []

    def copy(self) -> 'Board':
        """Create an independent copy of the board."""
        new_board = Board()
        new_board.grid = self.grid.copy()
        new_board.winning_line = list(self.winning_line)
        return new_board

    @property
    def move_count(self) -> int:
        """Number of occupied cells, equal to moves applied since reset."""
        return int(np.count_nonzero(self.grid))

    def is_column_full(self, column: int) -> bool:
        """
        Check whether a column has no room left.

        Raises:
            InvalidColumnError: If the column is outside the board
        """
        check_column(column)
        return bool(self.grid[0, column] != Player.EMPTY.value)

    def available_row(self, column: int) -> Optional[int]:
        """
        Find the row a piece dropped into the column would land in.

        Args:
            column: The column to inspect (0-indexed)

        Returns:
            The lowest empty row, or None if the column is full
        """
        check_column(column)
        return get_available_row(self.grid, column)

    def get_valid_moves(self) -> List[int]:
        """Get the columns that still accept a piece, in increasing order."""
        return [col for col in range(COLS) if not self.is_column_full(col)]

    def apply_move(self, column: int, player: Player) -> bool:
        """
        Drop a player's piece into a column.

        Args:
            column: The column to place a piece (0-indexed)
            player: Player.ONE or Player.TWO

        Returns:
            True if the piece was placed, False if the column is full
        """
        value = player_value(player)
        row = self.available_row(column)
        if row is None:
            debug.debug(f"Column {column} is full, move rejected", "board")
            return False

        debug.trace(f"Placing {Player(value).name} at ({row}, {column})", "board")
        self.grid[row, column] = value
        return True

    def check_win(self, player: Player) -> WinCheck:
        """
        Check whether a player has four in a row.

        Windows are scanned horizontal, vertical, diagonal "/" then
        diagonal "\\", and the first match is recorded in winning_line.

        Args:
            player: Player.ONE or Player.TWO

        Returns:
            WinCheck with the winning cells, or an empty line if no win
        """
        self.winning_line = []
        index = find_winning_window(self.grid, player_value(player))
        if index < 0:
            return WinCheck(False, [])

        self.winning_line = [(int(r), int(c)) for r, c in WINDOW_CELLS[index]]
        debug.debug(f"{Player(player_value(player)).name} wins on {self.winning_line}", "board")
        return WinCheck(True, list(self.winning_line))

    def is_board_full(self) -> bool:
        """True when every column is full."""
        return all(self.is_column_full(col) for col in range(COLS))

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            A copy of the grid the caller may modify freely
        """
        return self.grid.copy()

    def render(self) -> str:
        """Render the board as a string."""
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        return self.render()
