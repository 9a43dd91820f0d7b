"""Checkers rules, AI and session controller for the arcade.

Usage examples:
    from arcade_checkers import initial_board, legal_moves_for, apply_move
    from arcade_checkers import choose_move, get_hint
    from arcade_checkers import GameController, ManualScheduler
"""
from __future__ import annotations

from .types import (
    Color,
    Rank,
    GameMode,
    Phase,
    Difficulty,
    Mover,
    Square,
    Piece,
    Move,
    MoveResult,
    RemovedPieces,
    HistoryEntry,
    CheckersError,
    IllegalMoveError,
)

# Rules engine
from .board import initial_board, empty_board, build_board, cell_at, render_board
from .moves import (
    legal_moves_for,
    get_all_captures,
    has_any_capture,
    legal_moves_for_turn,
    all_legal_moves,
    continues_capture,
    has_no_moves,
    apply_move,
)

# Evaluator and AI
from .eval import score_position, HeuristicEvaluator
from .search import choose_move, get_hint

# Session
from .session import GameController, ManualScheduler, TkScheduler, SessionView, create_controller
