"""
Computer-vs-computer games for smoke testing and tuning the AI tiers.
"""
from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .board import count_pieces, initial_board, move_to_str
from .eval import Evaluator, get_evaluator
from .moves import apply_move, continues_capture, has_no_moves
from .search import DEFAULT_HARD_DEPTH, get_search_strategy
from .types import PIECES_PER_SIDE, Board, Color, Difficulty, Move, RemovedPieces, Square

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLIES = 200


@dataclass
class GameRecord:
    """Outcome of one self-play game. `winner` is None for a draw by ply limit."""

    winner: Optional[Color]
    plies: int
    board: Board
    removed: RemovedPieces
    moves: List[Move] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def notation(self) -> List[str]:
        return [move_to_str(m) for m in self.moves]


def play_game(red: Union[Difficulty, str] = Difficulty.MEDIUM,
              black: Union[Difficulty, str] = Difficulty.MEDIUM,
              max_plies: int = DEFAULT_MAX_PLIES,
              rng: Optional[random.Random] = None,
              evaluator: Optional[Evaluator] = None,
              hard_depth: int = DEFAULT_HARD_DEPTH) -> GameRecord:
    """Play one game between two AI tiers from the standard layout.

    A ply is a single step or jump, so a multi-jump uses several plies.
    """
    rng = rng or random.Random()
    evaluator = evaluator or get_evaluator()
    strategies = {
        Color.RED: get_search_strategy(red, evaluator, rng, hard_depth),
        Color.BLACK: get_search_strategy(black, evaluator, rng, hard_depth),
    }
    board = initial_board()
    side = Color.RED
    forced: Optional[Square] = None
    removed = RemovedPieces()
    moves: List[Move] = []
    winner: Optional[Color] = None
    t0 = time.time()

    while len(moves) < max_plies:
        if forced is None and has_no_moves(board, side):
            winner = side.opponent
            break
        move = strategies[side].choose(board, side, forced)
        if move is None:
            winner = side.opponent
            break
        result = apply_move(board, move)
        board = result.board
        moves.append(move)
        if result.captured is not None:
            removed = removed.with_added(result.captured.piece)
        if move.is_capture and not result.promoted and continues_capture(board, move.end):
            forced = move.end
        else:
            forced = None
            side = side.opponent

    for color in Color:
        assert count_pieces(board, color) + len(removed.of(color)) == PIECES_PER_SIDE

    record = GameRecord(winner=winner, plies=len(moves), board=board, removed=removed,
                        moves=moves, elapsed=time.time() - t0)
    logger.debug("Self-play %s vs %s: winner=%s after %d plies", Difficulty(red).value,
                 Difficulty(black).value, winner.value if winner else None, record.plies)
    return record


def run_matches(red: Union[Difficulty, str], black: Union[Difficulty, str], games: int,
                max_plies: int = DEFAULT_MAX_PLIES, seed: Optional[int] = None,
                hard_depth: int = DEFAULT_HARD_DEPTH) -> Dict[str, int]:
    """Play several games and tally results by winner ("red", "black", "draw")."""
    rng = random.Random(seed)
    tally = {"red": 0, "black": 0, "draw": 0}
    for i in range(games):
        record = play_game(red, black, max_plies=max_plies, rng=rng, hard_depth=hard_depth)
        key = record.winner.value if record.winner else "draw"
        tally[key] += 1
        logger.info("Game %d/%d: %s in %d plies (%.2fs)", i + 1, games, key, record.plies,
                    record.elapsed)
    return tally
