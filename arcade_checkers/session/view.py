from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..types import Board, Color, Difficulty, GameMode, Move, Phase, RemovedPieces, Square


@dataclass(frozen=True)
class SessionView:
    """Read-only snapshot of everything a renderer needs."""

    board: Board
    current_turn: Color
    phase: Phase
    game_mode: GameMode
    human_color: Color
    computer_color: Color
    difficulty: Difficulty
    selected_piece: Optional[Square]
    valid_moves: Tuple[Move, ...]
    winner: Optional[Color]
    removed_pieces: RemovedPieces
    message: str
    show_hints: bool
    current_hint: Optional[Move]
    last_move: Optional[Move]
    multi_jump_piece: Optional[Square]
    can_undo: bool
    is_computer_turn: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": [
                [cell.to_dict() if cell is not None else None for cell in row]
                for row in self.board
            ],
            "current_turn": self.current_turn.value,
            "phase": self.phase.value,
            "game_mode": self.game_mode.value,
            "human_color": self.human_color.value,
            "computer_color": self.computer_color.value,
            "difficulty": self.difficulty.value,
            "selected_piece": self.selected_piece.to_dict() if self.selected_piece else None,
            "valid_moves": [m.to_dict() for m in self.valid_moves],
            "winner": self.winner.value if self.winner else None,
            "removed_pieces": self.removed_pieces.to_dict(),
            "message": self.message,
            "show_hints": self.show_hints,
            "current_hint": self.current_hint.to_dict() if self.current_hint else None,
            "last_move": self.last_move.to_dict() if self.last_move else None,
            "multi_jump_piece": self.multi_jump_piece.to_dict() if self.multi_jump_piece else None,
            "can_undo": self.can_undo,
            "is_computer_turn": self.is_computer_turn,
        }
