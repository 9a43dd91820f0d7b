"""
Session components for the checkers game.
"""
from __future__ import annotations

from .constants import *
from .scheduler import ManualScheduler, ScheduledTask, Scheduler, TaskGroup, TkScheduler
from .game_state import GameState
from .move_manager import MoveManager, group_moves_by_dest
from .engine_integration import EngineIntegration
from .factory import SessionFactory
from .view import SessionView
from .controller import GameController, create_controller

__all__ = [
    # Constants
    "DEFAULT_GAME_MODE", "DEFAULT_HUMAN_COLOR", "DEFAULT_DIFFICULTY",
    "MSG_TURN", "MSG_WIN", "MSG_CONTINUE_JUMP", "MSG_THINKING",
    "TASK_AI_MOVE", "TASK_MESSAGE", "TASK_HINT_CLEAR",
    "turn_message", "win_message", "continue_jump_message",

    # Scheduling
    "Scheduler",
    "ScheduledTask",
    "ManualScheduler",
    "TkScheduler",
    "TaskGroup",

    # Core components
    "GameState",
    "MoveManager",
    "EngineIntegration",
    "SessionView",

    # Factories
    "SessionFactory",
    "create_controller",

    # Controller
    "GameController",

    # Utility functions
    "group_moves_by_dest",
]
