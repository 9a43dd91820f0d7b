"""
Game state management for a checkers session: board, turn and history.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..board import initial_board, validate_board
from ..moves import apply_move, continues_capture, has_no_moves, legal_moves_for_turn
from ..types import (
    Board,
    Color,
    HistoryEntry,
    Move,
    MoveResult,
    Mover,
    RemovedPieces,
    Square,
)

logger = logging.getLogger(__name__)


class GameState:
    """Owns the live board, the side to move and the undo history."""

    def __init__(self, board: Optional[Board] = None) -> None:
        self.reset_game(board)

    def reset_game(self, board: Optional[Board] = None, current_turn: Color = Color.RED) -> None:
        """Reset to a fresh position (the standard layout unless `board` is given)."""
        if board is not None:
            validate_board(board)
        self.board: Board = board if board is not None else initial_board()
        self.current_turn: Color = current_turn
        self.removed: RemovedPieces = RemovedPieces()
        self.last_move: Optional[Move] = None
        self.forced_piece: Optional[Square] = None
        self.history: List[HistoryEntry] = []

    def snapshot(self, mover: Mover) -> HistoryEntry:
        return HistoryEntry(
            board=self.board,
            current_turn=self.current_turn,
            removed=self.removed,
            last_move=self.last_move,
            mover=mover,
            forced_piece=self.forced_piece,
        )

    def make_move(self, move: Move, mover: Mover) -> MoveResult:
        """Apply a validated move, recording history first.

        The turn passes unless the move was a jump with a follow-up jump for
        the same piece; a jump that crowns a man always ends the turn.
        """
        self.history.append(self.snapshot(mover))
        result = apply_move(self.board, move)
        self.board = result.board
        if result.captured is not None:
            self.removed = self.removed.with_added(result.captured.piece)
        self.last_move = move

        if move.is_capture and not result.promoted and continues_capture(self.board, move.end):
            self.forced_piece = move.end
        else:
            self.forced_piece = None
            self.current_turn = self.current_turn.opponent
        return result

    def restore(self, entry: HistoryEntry) -> None:
        self.board = entry.board
        self.current_turn = entry.current_turn
        self.removed = entry.removed
        self.forced_piece = entry.forced_piece
        self.last_move = None

    def undo_moves(self, count: int = 1) -> bool:
        """Pop `count` history entries and restore the oldest one popped."""
        if count <= 0 or count > len(self.history):
            return False
        entry = self.history[-count]
        del self.history[-count:]
        self.restore(entry)
        logger.debug("Undid %d move(s), %s to move", count, self.current_turn.value)
        return True

    def legal_moves(self) -> Dict[Square, List[Move]]:
        """Legal moves this turn, restricted to the forced piece mid multi-jump."""
        if self.forced_piece is not None:
            return {self.forced_piece: continues_capture(self.board, self.forced_piece)}
        return legal_moves_for_turn(self.board, self.current_turn)

    def is_terminal(self) -> bool:
        """True when the side to move has no legal move (and so has lost)."""
        return self.forced_piece is None and has_no_moves(self.board, self.current_turn)
