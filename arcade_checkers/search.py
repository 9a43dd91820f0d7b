"""
AI move selection: one strategy per difficulty tier, plus the hint search.

All tiers draw from the same candidate pool (legal moves with forced capture
already applied, or the jump continuations of a piece mid multi-jump), so the
difficulty only changes how a candidate is picked.
"""
from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple, Union

from .eval import Evaluator, get_evaluator
from .moves import all_legal_moves, apply_move, continues_capture
from .types import Board, Color, Difficulty, Move, Square

logger = logging.getLogger(__name__)

DEFAULT_HARD_DEPTH = 3
_INF = float("inf")
_TIE_EPS = 1e-9


def candidate_moves(board: Board, color: Color, forced_piece: Optional[Square] = None) -> List[Move]:
    """Moves the side to move may choose from right now."""
    if forced_piece is not None:
        return continues_capture(board, forced_piece)
    return all_legal_moves(board, color)


def successor(board: Board, move: Move, side: Color) -> Tuple[Board, Color, Optional[Square]]:
    """Position after `move`: (board, side to move, piece forced to keep jumping).

    A jump that crowns a man ends the turn.
    """
    result = apply_move(board, move)
    if move.is_capture and not result.promoted and continues_capture(result.board, move.end):
        return result.board, side, move.end
    return result.board, side.opponent, None


class SearchStrategy(ABC):
    """Abstract interface for move selection strategies."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    @abstractmethod
    def select(self, board: Board, color: Color, candidates: List[Move]) -> Move:  # pragma: no cover
        raise NotImplementedError

    def choose(self, board: Board, color: Color, forced_piece: Optional[Square] = None) -> Optional[Move]:
        candidates = candidate_moves(board, color, forced_piece)
        if not candidates:
            return None
        return self.select(board, color, candidates)

    def _pick_best(self, scored: List[Tuple[float, Move]]) -> Move:
        best = max(score for score, _ in scored)
        ties = [m for score, m in scored if score >= best - _TIE_EPS]
        return ties[self.rng.randrange(len(ties))]


class RandomStrategy(SearchStrategy):
    """Easy: uniform choice among candidates."""

    def select(self, board: Board, color: Color, candidates: List[Move]) -> Move:
        return candidates[self.rng.randrange(len(candidates))]


class GreedyStrategy(SearchStrategy):
    """Medium: one-ply lookahead on the evaluator."""

    def __init__(self, evaluator: Optional[Evaluator] = None,
                 rng: Optional[random.Random] = None) -> None:
        super().__init__(rng)
        self.evaluator = evaluator or get_evaluator()

    def select(self, board: Board, color: Color, candidates: List[Move]) -> Move:
        scored = [(self.evaluator.evaluate_position(apply_move(board, m).board, color), m)
                  for m in candidates]
        return self._pick_best(scored)


class MinimaxStrategy(SearchStrategy):
    """Hard: depth-bounded minimax, alpha-beta below the root.

    Root moves are searched with a full window so that equal values stay
    exact and ties can be broken at random.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None, depth: int = DEFAULT_HARD_DEPTH,
                 rng: Optional[random.Random] = None) -> None:
        super().__init__(rng)
        if depth < 1:
            raise ValueError("Search depth must be at least 1")
        self.evaluator = evaluator or get_evaluator()
        self.depth = depth

    def _minimax(self, board: Board, side: Color, forced: Optional[Square], color: Color,
                 depth: int, alpha: float, beta: float) -> float:
        moves = candidate_moves(board, side, forced)
        if depth == 0 or not moves:
            return self.evaluator.evaluate_position(board, color)
        if side is color:
            val = -_INF
            for m in moves:
                child, next_side, next_forced = successor(board, m, side)
                val = max(val, self._minimax(child, next_side, next_forced, color, depth - 1, alpha, beta))
                alpha = max(alpha, val)
                if alpha >= beta:
                    break
            return val
        val = _INF
        for m in moves:
            child, next_side, next_forced = successor(board, m, side)
            val = min(val, self._minimax(child, next_side, next_forced, color, depth - 1, alpha, beta))
            beta = min(beta, val)
            if alpha >= beta:
                break
        return val

    def score_moves(self, board: Board, color: Color, candidates: List[Move]) -> List[Tuple[float, Move]]:
        scored: List[Tuple[float, Move]] = []
        for m in candidates:
            child, next_side, next_forced = successor(board, m, color)
            scored.append((self._minimax(child, next_side, next_forced, color,
                                         self.depth - 1, -_INF, _INF), m))
        return scored

    def select(self, board: Board, color: Color, candidates: List[Move]) -> Move:
        return self._pick_best(self.score_moves(board, color, candidates))


def get_search_strategy(difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
                        evaluator: Optional[Evaluator] = None,
                        rng: Optional[random.Random] = None,
                        depth: int = DEFAULT_HARD_DEPTH) -> SearchStrategy:
    """Factory for the strategy of a difficulty tier."""
    difficulty = Difficulty(difficulty)
    if difficulty is Difficulty.EASY:
        return RandomStrategy(rng)
    if difficulty is Difficulty.MEDIUM:
        return GreedyStrategy(evaluator, rng)
    return MinimaxStrategy(evaluator, depth, rng)


def choose_move(board: Board, color: Color, difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
                forced_piece: Optional[Square] = None, rng: Optional[random.Random] = None,
                depth: int = DEFAULT_HARD_DEPTH) -> Optional[Move]:
    """Pick a move for `color`, or None when it has no legal move."""
    strategy = get_search_strategy(difficulty, rng=rng, depth=depth)
    move = strategy.choose(board, color, forced_piece)
    logger.debug("AI (%s, %s) chose %s", color.value, Difficulty(difficulty).value, move)
    return move


def get_hint(board: Board, color: Color, forced_piece: Optional[Square] = None,
             rng: Optional[random.Random] = None, depth: int = DEFAULT_HARD_DEPTH) -> Optional[Move]:
    """Suggest a move for `color` using the Hard-tier search."""
    return choose_move(board, color, Difficulty.HARD, forced_piece, rng, depth)


__all__ = [
    "SearchStrategy",
    "RandomStrategy",
    "GreedyStrategy",
    "MinimaxStrategy",
    "get_search_strategy",
    "candidate_moves",
    "successor",
    "choose_move",
    "get_hint",
    "DEFAULT_HARD_DEPTH",
]
