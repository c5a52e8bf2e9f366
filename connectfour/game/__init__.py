"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board engine, the turn manager and the
Gymnasium environment.
"""

from connectfour.game.board import Board, WinCheck
from connectfour.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'WinCheck', 'ConnectFourGame', 'ConnectFourEnv']
