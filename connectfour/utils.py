"""
utils.py - Constants, enumerations and grid helpers for Connect Four

This module holds the board dimensions, the player and result enumerations,
the precomputed table of 4-cell windows, and the raw-grid helpers shared by
the board engine and the search engine.
"""

from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win
CENTER_COL = COLS // 2

# Search constants
SEARCH_DEPTH = 6
WIN_SCORE = 100000
CENTER_WEIGHT = 6
THREE_SCORE = 100
TWO_SCORE = 10
OPP_THREE_PENALTY = 500
OPP_TWO_PENALTY = 200


class InvalidColumnError(ValueError):
    """Raised when a column index falls outside the board."""


class NoValidMovesError(RuntimeError):
    """Raised when a move is requested on a board with no open column."""


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self):
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        """Result value for a win by the given player."""
        return cls.PLAYER_ONE_WIN if player == Player.ONE else cls.PLAYER_TWO_WIN


def _build_windows() -> List[List[Tuple[int, int]]]:
    """
    Enumerate every 4-cell window on the board.

    The order is the win-scan order: horizontal (rows top to bottom, then
    columns left to right), vertical (columns left to right, then rows top to
    bottom), diagonal "/" starting on rows 3..5 and walking up-right, and
    diagonal "\\" starting on rows 0..2 and walking down-right.
    """
    windows = []
    for row in range(ROWS):
        for col in range(COLS - CONNECT_N + 1):
            windows.append([(row, col + i) for i in range(CONNECT_N)])
    for col in range(COLS):
        for row in range(ROWS - CONNECT_N + 1):
            windows.append([(row + i, col) for i in range(CONNECT_N)])
    for row in range(CONNECT_N - 1, ROWS):
        for col in range(COLS - CONNECT_N + 1):
            windows.append([(row - i, col + i) for i in range(CONNECT_N)])
    for row in range(ROWS - CONNECT_N + 1):
        for col in range(COLS - CONNECT_N + 1):
            windows.append([(row + i, col + i) for i in range(CONNECT_N)])
    return windows


# (69, 4, 2) cell coordinates and (69, 4) flat indexes into a raveled grid
WINDOW_CELLS = np.array(_build_windows(), dtype=np.intp)
WINDOW_INDEX = WINDOW_CELLS[..., 0] * COLS + WINDOW_CELLS[..., 1]


def player_value(player) -> int:
    """
    Normalise a player argument to its cell value.

    Args:
        player: A Player (ONE or TWO) or the matching integer 1 or 2

    Returns:
        The cell value of the player
    """
    value = player.value if isinstance(player, Player) else player
    if value not in (Player.ONE.value, Player.TWO.value):
        raise ValueError(f"Player must be ONE or TWO, got {player!r}")
    return int(value)


def check_column(column: int) -> None:
    """Raise InvalidColumnError unless the column is an integer index on the board."""
    if not isinstance(column, (int, np.integer)) or isinstance(column, bool):
        raise InvalidColumnError(f"Column must be an integer, got {column!r}")
    if not 0 <= column < COLS:
        raise InvalidColumnError(f"Column {column} out of range 0-{COLS - 1}")


def as_grid(board) -> np.ndarray:
    """
    Take an independent integer snapshot of a board.

    Args:
        board: A Board, numpy array or nested list of shape (ROWS, COLS)

    Returns:
        A fresh numpy array the caller owns

    Raises:
        ValueError: If the shape is wrong or a cell is not 0, 1 or 2
    """
    cells = np.asarray(getattr(board, 'grid', board))
    if cells.shape != (ROWS, COLS):
        raise ValueError(f"Board must be {ROWS}x{COLS}, got shape {cells.shape}")
    # Checked before the int8 cast, which would wrap values such as 257
    if not np.isin(cells, (0, 1, 2)).all():
        raise ValueError("Cells must be 0 (empty), 1 or 2")
    return cells.astype(np.int8)


def get_available_row(grid: np.ndarray, column: int) -> Optional[int]:
    """
    Find the lowest empty row of a column.

    Args:
        grid: The game board
        column: The column to check

    Returns:
        The row index, or None if the column is full
    """
    for row in range(ROWS - 1, -1, -1):
        if grid[row, column] == Player.EMPTY.value:
            return row
    return None


def open_columns(grid: np.ndarray) -> List[int]:
    """Columns whose top cell is empty, in increasing order."""
    return [col for col in range(COLS) if grid[0, col] == Player.EMPTY.value]


def drop_piece(grid: np.ndarray, column: int, value: int) -> Optional[np.ndarray]:
    """
    Simulate a move on a private copy of the grid.

    Args:
        grid: The game board (left untouched)
        column: The column to drop into
        value: Cell value of the moving player

    Returns:
        A new grid with the piece placed, or None if the column is full
    """
    row = get_available_row(grid, column)
    if row is None:
        return None
    child = grid.copy()
    child[row, column] = value
    return child


def find_winning_window(grid: np.ndarray, value: int) -> int:
    """
    Find the first window, in scan order, fully owned by a player.

    Args:
        grid: The game board
        value: Cell value of the player

    Returns:
        Index into WINDOW_CELLS, or -1 if the player has no 4-in-a-row
    """
    matches = np.all(grid.ravel()[WINDOW_INDEX] == value, axis=1)
    if not matches.any():
        return -1
    return int(np.argmax(matches))


def has_won(grid: np.ndarray, value: int) -> bool:
    """Check whether a player owns any 4-in-a-row on the grid."""
    return bool(np.all(grid.ravel()[WINDOW_INDEX] == value, axis=1).any())


def render_board_ascii(board: np.ndarray) -> str:
    """
    Render the board as ASCII art.

    Args:
        board: The game board

    Returns:
        ASCII representation of the board
    """
    symbols = {Player.EMPTY.value: " ", Player.ONE.value: "X", Player.TWO.value: "O"}
    border = "|" + "-" * (COLS * 2 - 1) + "|"

    result = [border]
    for row in range(ROWS):
        result.append("|" + " ".join(symbols[int(cell)] for cell in board[row]) + "|")
    result.append(border)
    result.append("|" + " ".join(str(col) for col in range(COLS)) + "|")

    return "\n".join(result)
