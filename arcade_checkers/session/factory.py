"""
Factory for creating and wiring session components.
"""
from __future__ import annotations

import random
from typing import Any, Optional

from ..config import CheckersConfig
from .engine_integration import EngineIntegration
from .game_state import GameState
from .move_manager import MoveManager
from .scheduler import ManualScheduler, Scheduler, TaskGroup, TkScheduler


class SessionFactory:
    """Creates the components a GameController is built from."""

    @staticmethod
    def create_game_state() -> GameState:
        return GameState()

    @staticmethod
    def create_move_manager() -> MoveManager:
        return MoveManager()

    @staticmethod
    def create_engine_integration(config: CheckersConfig) -> EngineIntegration:
        """Engine seeded from the AI settings (unseeded when no seed is set)."""
        return EngineIntegration(
            rng=random.Random(config.ai.seed),
            hard_depth=config.ai.hard_depth,
            difficulty=config.ai.default_difficulty,
        )

    @staticmethod
    def create_scheduler(widget: Optional[Any] = None) -> Scheduler:
        """Tk-driven scheduler when a widget is given, manual clock otherwise."""
        if widget is not None:
            return TkScheduler(widget)
        return ManualScheduler()

    @staticmethod
    def create_task_group(scheduler: Scheduler) -> TaskGroup:
        return TaskGroup(scheduler)
