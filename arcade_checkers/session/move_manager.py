"""
Selection management for the session: which piece is picked and where it may go.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from ..board import is_valid_square
from ..types import Move, Square
from .game_state import GameState


def group_moves_by_dest(moves: List[Move]) -> Dict[Square, List[Move]]:
    """Group moves by their landing square."""
    result: Dict[Square, List[Move]] = {}
    for move in moves:
        result.setdefault(move.end, []).append(move)
    return result


class MoveManager:
    """Tracks the selected piece and its legal moves for the current turn."""

    def __init__(self) -> None:
        self.moves_by_start: Dict[Square, List[Move]] = {}
        self.selected: Optional[Square] = None
        self.valid_moves: List[Move] = []

    def set_game_state(self, state: GameState) -> None:
        """Recompute legal moves and drop the selection.

        Mid multi-jump the forced piece is selected straight away.
        """
        self.moves_by_start = state.legal_moves()
        self.clear_selection()
        if state.forced_piece is not None:
            self.select(state.forced_piece)

    def clear_selection(self) -> None:
        self.selected = None
        self.valid_moves = []

    def select(self, square: Tuple[int, int]) -> bool:
        """Select `square` if it holds a piece that can move this turn."""
        if not is_valid_square(*square):
            return False
        sq = Square(*square)
        moves = self.moves_by_start.get(sq)
        if not moves:
            return False
        self.selected = sq
        self.valid_moves = list(moves)
        return True

    def find_move(self, square: Tuple[int, int]) -> Optional[Move]:
        """The selected piece's move landing on `square`, if any."""
        if self.selected is None:
            return None
        moves = group_moves_by_dest(self.valid_moves).get(Square(*square))
        return moves[0] if moves else None

    @property
    def movable_squares(self) -> List[Square]:
        return list(self.moves_by_start)
