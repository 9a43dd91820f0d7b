"""
Evaluation interfaces and the heuristic position scorer shared by AI and hints.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .board import board_to_array
from .moves import has_no_moves
from .types import BOARD_SIZE, Board, Color


@dataclass(frozen=True)
class EvalWeights:
    """Weights of the heuristic evaluation."""

    man: float = 1.0
    king: float = 3.0
    advancement: float = 0.1  # per row a man has moved toward its promotion row
    center: float = 0.05      # per piece standing on files 2..5
    win: float = 100.0        # opponent has no legal move

    def __post_init__(self) -> None:
        if self.king <= self.man:
            raise ValueError("King weight must be greater than man weight")


# Rows advanced by a man standing on each square
_ROWS = np.repeat(np.arange(BOARD_SIZE, dtype=np.float64)[:, None], BOARD_SIZE, axis=1)
_ADVANCE_BLACK: np.ndarray = _ROWS
_ADVANCE_RED: np.ndarray = (BOARD_SIZE - 1) - _ROWS

_CENTER_FILES: np.ndarray = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=bool)
_CENTER_FILES[:, 2:6] = True


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate_position(self, board: Board, color: Color) -> float:  # pragma: no cover
        """Score `board` from `color`'s point of view; higher is better for `color`."""
        raise NotImplementedError

    def batch_predict(self, boards: Sequence[Board], colors: Sequence[Color]) -> np.ndarray:
        """Score several positions. Default uses per-position evaluation."""
        out = np.zeros(len(boards), dtype=np.float64)
        for i, (board, color) in enumerate(zip(boards, colors)):
            out[i] = self.evaluate_position(board, color)
        return out


class HeuristicEvaluator(Evaluator):
    """Material, advancement and centre control, plus a no-moves bonus.

    The score is a pure function of the board and antisymmetric in colour:
    evaluate_position(b, RED) == -evaluate_position(b, BLACK).
    """

    def __init__(self, weights: Optional[EvalWeights] = None) -> None:
        self.weights = weights or EvalWeights()

    def _black_score(self, board: Board) -> float:
        w = self.weights
        arr = board_to_array(board)
        black_men = arr == 1
        red_men = arr == -1
        black_kings = arr == 2
        red_kings = arr == -2

        material = (w.man * (int(black_men.sum()) - int(red_men.sum()))
                    + w.king * (int(black_kings.sum()) - int(red_kings.sum())))
        advancement = w.advancement * (float(_ADVANCE_BLACK[black_men].sum())
                                       - float(_ADVANCE_RED[red_men].sum()))
        center = w.center * (int(((arr > 0) & _CENTER_FILES).sum())
                             - int(((arr < 0) & _CENTER_FILES).sum()))
        score = material + advancement + center

        if has_no_moves(board, Color.RED):
            score += w.win
        if has_no_moves(board, Color.BLACK):
            score -= w.win
        return score

    def evaluate_position(self, board: Board, color: Color) -> float:
        score = self._black_score(board)
        return float(score if color is Color.BLACK else -score)


_default_evaluator: Optional[HeuristicEvaluator] = None


def get_evaluator() -> Evaluator:
    """Shared default evaluator (stateless, safe to reuse)."""
    global _default_evaluator
    if _default_evaluator is None:
        _default_evaluator = HeuristicEvaluator()
    return _default_evaluator


def score_position(board: Board, for_color: Color) -> float:
    return get_evaluator().evaluate_position(board, for_color)


__all__: List[str] = [
    "EvalWeights",
    "Evaluator",
    "HeuristicEvaluator",
    "get_evaluator",
    "score_position",
]
