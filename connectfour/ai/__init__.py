"""
connectfour/ai/__init__.py - Computer opponent for Connect Four

Random, blocking and minimax move selection behind a single
difficulty-based entry point.
"""

from connectfour.ai.minimax import MinimaxSearch, evaluate_board
from connectfour.ai.player import AIPlayer, Difficulty, choose_move
from connectfour.ai.strategies import blocking_move, random_move

__all__ = ['AIPlayer', 'Difficulty', 'MinimaxSearch', 'blocking_move',
           'choose_move', 'evaluate_board', 'random_move']
