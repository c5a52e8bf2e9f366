"""
connectfour - Connect Four game engine with a computer opponent

This package provides the board engine, win and draw detection, a computer
opponent at three difficulty levels (random, blocking, minimax with
alpha-beta pruning) and a console interface.
"""

# Version number
__version__ = '0.1.0'
