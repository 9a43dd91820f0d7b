"""
AI engine integration for the session: computer moves and hints.
"""
from __future__ import annotations

import logging
import random
import time
from typing import Optional, Union

from ..board import move_to_str
from ..eval import Evaluator, get_evaluator
from ..search import DEFAULT_HARD_DEPTH, MinimaxStrategy, SearchStrategy, get_search_strategy
from ..types import Difficulty, Move
from .game_state import GameState

logger = logging.getLogger(__name__)


class EngineIntegration:
    """Picks computer moves at the session's difficulty and computes hints."""

    def __init__(self, evaluator: Optional[Evaluator] = None, rng: Optional[random.Random] = None,
                 hard_depth: int = DEFAULT_HARD_DEPTH,
                 difficulty: Union[Difficulty, str] = Difficulty.MEDIUM) -> None:
        self.evaluator = evaluator or get_evaluator()
        self.rng = rng or random.Random()
        self.hard_depth = hard_depth
        self.hint_strategy = MinimaxStrategy(self.evaluator, hard_depth, self.rng)
        self.set_difficulty(difficulty)

    def set_difficulty(self, difficulty: Union[Difficulty, str]) -> None:
        self.difficulty = Difficulty(difficulty)
        self.strategy: SearchStrategy = get_search_strategy(
            self.difficulty, self.evaluator, self.rng, self.hard_depth
        )

    def choose_move(self, state: GameState) -> Optional[Move]:
        """Move for the side to move in `state` at the current difficulty."""
        t0 = time.time()
        move = self.strategy.choose(state.board, state.current_turn, state.forced_piece)
        logger.debug("Engine %s picked %s in %.3fs", self.difficulty.value,
                     move_to_str(move) if move else None, time.time() - t0)
        return move

    def hint(self, state: GameState) -> Optional[Move]:
        """Best move for the side to move according to the Hard-tier search."""
        return self.hint_strategy.choose(state.board, state.current_turn, state.forced_piece)
