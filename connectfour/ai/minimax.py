"""
minimax.py - Minimax search with alpha-beta pruning for Connect Four

This module provides the MinimaxSearch class used by the hard difficulty and
the static evaluation it applies at the search horizon.

The heuristic evaluation:
1. Rewards AI pieces in the center column
2. Scores every 4-cell window that holds pieces of only one player
3. Weights the opponent's near-wins more heavily than the AI's (defensive bias)

Each ply works on its own copy of the grid, so no move ever has to be undone.
"""

import math
from typing import Dict, Optional

import numpy as np

from connectfour.ai.strategies import random_move
from connectfour.debug import debug
from connectfour.utils import (CENTER_COL, CENTER_WEIGHT, CONNECT_N,
                               OPP_THREE_PENALTY, OPP_TWO_PENALTY,
                               SEARCH_DEPTH, THREE_SCORE, TWO_SCORE, WIN_SCORE,
                               WINDOW_INDEX, NoValidMovesError, Player,
                               as_grid, drop_piece, has_won, open_columns,
                               player_value)


def evaluate_board(grid: np.ndarray, ai_player: Player) -> int:
    """
    Heuristic evaluation of a board position from the AI's point of view.

    Args:
        grid: The board to evaluate
        ai_player: The player the score is computed for

    Returns:
        Positive scores favour the AI, negative scores its opponent
    """
    ai_value = player_value(ai_player)
    opp_value = Player(ai_value).other().value

    score = CENTER_WEIGHT * int(np.count_nonzero(grid[:, CENTER_COL] == ai_value))

    windows = grid.ravel()[WINDOW_INDEX]
    mine = np.count_nonzero(windows == ai_value, axis=1)
    theirs = np.count_nonzero(windows == opp_value, axis=1)
    empty = CONNECT_N - mine - theirs

    score += WIN_SCORE * int(np.count_nonzero(mine == 4))
    score += THREE_SCORE * int(np.count_nonzero((mine == 3) & (empty == 1)))
    score += TWO_SCORE * int(np.count_nonzero((mine == 2) & (empty == 2)))

    score -= WIN_SCORE * int(np.count_nonzero(theirs == 4))
    score -= OPP_THREE_PENALTY * int(np.count_nonzero((theirs == 3) & (empty == 1)))
    score -= OPP_TWO_PENALTY * int(np.count_nonzero((theirs == 2) & (empty == 2)))

    return score


class MinimaxSearch:
    """
    Chooses a column by searching the game tree to a fixed depth.

    The root first looks for a move that wins on the spot. Otherwise every
    open column is scored by a minimax search with the opponent to move,
    and the best score wins, ties going to the column nearest the center.
    """

    def __init__(self, depth: int = SEARCH_DEPTH, prune: bool = True):
        """
        Initialize the search.

        Args:
            depth: Plies searched below each candidate move
            prune: Apply alpha-beta cutoffs (False runs plain minimax)
        """
        if depth < 0:
            raise ValueError(f"Search depth must be non-negative, got {depth}")
        self.depth = depth
        self.prune = prune
        self.nodes_evaluated = 0

    def get_move(self, board, ai_player: Player,
                 rng: Optional[np.random.Generator] = None) -> int:
        """
        Get the best column for the AI.

        Args:
            board: Board or grid snapshot (never modified)
            ai_player: The player the search plays for
            rng: Random generator for the fallback move

        Returns:
            The chosen column
        """
        grid = as_grid(board)
        ai_value = player_value(ai_player)
        self.nodes_evaluated = 0
        if not open_columns(grid):
            raise NoValidMovesError("No open column to play")

        winning = self.find_winning_move(grid, ai_player)
        if winning is not None:
            debug.debug(f"Immediate win in column {winning}", "search")
            return winning

        scores = self.score_moves(grid, ai_player)
        best_column = None
        best_score = -math.inf
        for column, score in scores.items():
            if score > best_score:
                best_score = score
                best_column = column
            elif score == best_score and abs(column - CENTER_COL) < abs(best_column - CENTER_COL):
                best_column = column

        if best_column is None:
            return random_move(grid, rng)

        debug.debug(f"{Player(ai_value).name} plays column {best_column} "
                    f"(score {best_score}, {self.nodes_evaluated} nodes)", "search")
        return best_column

    def find_winning_move(self, grid: np.ndarray, ai_player: Player) -> Optional[int]:
        """First column, in increasing order, that wins for the AI at once."""
        value = player_value(ai_player)
        for column in open_columns(grid):
            if has_won(drop_piece(grid, column, value), value):
                return column
        return None

    def score_moves(self, board, ai_player: Player) -> Dict[int, float]:
        """
        Score every open column by searching the position it leads to.

        Each candidate is searched with a full (-inf, inf) window, so the
        scores are exact minimax values and comparable for tie-breaking.

        Returns:
            Mapping of column to score, in increasing column order
        """
        grid = as_grid(board)
        ai_value = player_value(ai_player)
        self.nodes_evaluated = 0

        debug.start_timer("minimax")
        scores = {}
        for column in open_columns(grid):
            child = drop_piece(grid, column, ai_value)
            scores[column] = self._minimax(child, self.depth, -math.inf, math.inf,
                                           False, ai_value)
            debug.trace(f"Column {column} scores {scores[column]}", "search")
        debug.end_timer("minimax", "search")

        return scores

    def _minimax(self, grid: np.ndarray, depth: int, alpha: float, beta: float,
                 is_maximizing: bool, ai_value: int) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            grid: Position to evaluate, owned by this call
            depth: Remaining search depth
            alpha: Best score the maximizer can guarantee so far
            beta: Best score the minimizer can guarantee so far
            is_maximizing: True if the AI is to move
            ai_value: Cell value of the AI

        Returns:
            The evaluation score for this position
        """
        self.nodes_evaluated += 1
        opp_value = Player(ai_value).other().value

        if has_won(grid, ai_value):
            return WIN_SCORE
        if has_won(grid, opp_value):
            return -WIN_SCORE

        columns = open_columns(grid)
        if depth == 0 or not columns:
            return evaluate_board(grid, Player(ai_value))

        if is_maximizing:
            max_score = -math.inf
            for column in columns:
                child = drop_piece(grid, column, ai_value)
                score = self._minimax(child, depth - 1, alpha, beta, False, ai_value)
                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if self.prune and beta <= alpha:
                    break
            return max_score

        min_score = math.inf
        for column in columns:
            child = drop_piece(grid, column, opp_value)
            score = self._minimax(child, depth - 1, alpha, beta, True, ai_value)
            min_score = min(min_score, score)
            beta = min(beta, score)
            if self.prune and beta <= alpha:
                break
        return min_score
