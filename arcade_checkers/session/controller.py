"""
Game session controller: the single call surface a front end talks to.

A controller owns one session (board, history, selection, hints, timers).
Invalid calls are ignored and leave the session untouched; deferred work
such as the computer's move runs through the injected Scheduler.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Union

from ..board import move_to_str, validate_board
from ..config import CheckersConfig, get_config
from ..types import (
    Board,
    Color,
    Difficulty,
    GameMode,
    Move,
    Mover,
    Phase,
    RemovedPieces,
    Square,
    is_valid_color,
)
from .constants import (
    DEFAULT_GAME_MODE,
    DEFAULT_HUMAN_COLOR,
    MSG_THINKING,
    TASK_AI_MOVE,
    TASK_HINT_CLEAR,
    TASK_MESSAGE,
    continue_jump_message,
    turn_message,
    win_message,
)
from .engine_integration import EngineIntegration
from .factory import SessionFactory
from .scheduler import Scheduler
from .view import SessionView

logger = logging.getLogger(__name__)

Listener = Callable[[SessionView], None]


class GameController:
    """Runs one checkers session for a front end."""

    def __init__(self, scheduler: Optional[Scheduler] = None, config: Optional[CheckersConfig] = None,
                 engine: Optional[EngineIntegration] = None) -> None:
        self.config = config or get_config()
        self.scheduler = scheduler or SessionFactory.create_scheduler()
        self.tasks = SessionFactory.create_task_group(self.scheduler)
        self.engine = engine or SessionFactory.create_engine_integration(self.config)
        self.game_state = SessionFactory.create_game_state()
        self.move_manager = SessionFactory.create_move_manager()
        self._listeners: List[Listener] = []
        self._generation = 0
        self._closed = False

        self.game_mode = DEFAULT_GAME_MODE
        self.human_color = DEFAULT_HUMAN_COLOR
        self.difficulty = Difficulty(self.config.ai.default_difficulty)
        self._reset_session()

    def _reset_session(self, board: Optional[Board] = None) -> None:
        self.tasks.cancel_all()
        self._generation += 1
        self.game_state.reset_game(board)
        self.move_manager.clear_selection()
        self.move_manager.moves_by_start = {}
        self.phase = Phase.SETUP
        self.winner: Optional[Color] = None
        self.message = ""
        self.show_hints = False
        self.current_hint: Optional[Move] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def board(self) -> Board:
        return self.game_state.board

    @property
    def current_turn(self) -> Color:
        return self.game_state.current_turn

    @property
    def computer_color(self) -> Color:
        return self.human_color.opponent

    @property
    def selected_piece(self) -> Optional[Square]:
        return self.move_manager.selected

    @property
    def valid_moves(self) -> List[Move]:
        return list(self.move_manager.valid_moves)

    @property
    def last_move(self) -> Optional[Move]:
        return self.game_state.last_move

    @property
    def removed_pieces(self) -> RemovedPieces:
        return self.game_state.removed

    @property
    def multi_jump_piece(self) -> Optional[Square]:
        return self.game_state.forced_piece

    @property
    def is_computer_turn(self) -> bool:
        return (self.game_mode is GameMode.HUMAN_VS_COMPUTER
                and self.game_state.current_turn is self.computer_color)

    @property
    def can_undo(self) -> bool:
        return self.phase is Phase.PLAYING and self._undo_count() > 0

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> SessionView:
        return SessionView(
            board=self.board,
            current_turn=self.current_turn,
            phase=self.phase,
            game_mode=self.game_mode,
            human_color=self.human_color,
            computer_color=self.computer_color,
            difficulty=self.difficulty,
            selected_piece=self.selected_piece,
            valid_moves=tuple(self.move_manager.valid_moves),
            winner=self.winner,
            removed_pieces=self.removed_pieces,
            message=self.message,
            show_hints=self.show_hints,
            current_hint=self.current_hint,
            last_move=self.last_move,
            multi_jump_piece=self.multi_jump_piece,
            can_undo=self.can_undo,
            is_computer_turn=self.is_computer_turn,
        )

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register a callback for state changes; returns a function that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _notify(self) -> None:
        if not self._listeners:
            return
        view = self.snapshot()
        for listener in list(self._listeners):
            listener(view)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def start_game(self, mode: Union[GameMode, str] = DEFAULT_GAME_MODE,
                   human_color: Union[Color, str] = DEFAULT_HUMAN_COLOR,
                   difficulty: Union[Difficulty, str, None] = None,
                   position: Optional[Board] = None) -> None:
        """Begin a game. `position` replaces the standard layout (red to move)."""
        if self._closed:
            return
        try:
            mode = GameMode(mode)
            difficulty = Difficulty(difficulty) if difficulty is not None else self.difficulty
        except ValueError:
            logger.debug("Rejected start_game(%r, %r, %r)", mode, human_color, difficulty)
            return
        if not is_valid_color(human_color):
            logger.debug("Rejected start_game: bad colour %r", human_color)
            return

        if position is not None:
            try:
                validate_board(position)
            except ValueError:
                logger.debug("Rejected start_game: malformed position")
                return
        self._reset_session(position)
        self.game_mode = mode
        self.human_color = Color(human_color)
        self.difficulty = difficulty
        self.engine.set_difficulty(difficulty)
        self.phase = Phase.PLAYING
        logger.info("Game started: %s, human %s, %s", mode.value, self.human_color.value,
                    difficulty.value)
        self._begin_turn(previous_mover=None)
        self._notify()

    def select_piece(self, row: int, col: int) -> None:
        if not self._accepts_human_input():
            logger.debug("Ignored select_piece(%s, %s)", row, col)
            return
        if self.move_manager.select((row, col)):
            self._notify()
        else:
            logger.debug("Nothing selectable at (%s, %s)", row, col)

    def move_piece(self, row: int, col: int) -> None:
        if not self._accepts_human_input():
            logger.debug("Ignored move_piece(%s, %s)", row, col)
            return
        move = self.move_manager.find_move((row, col))
        if move is None:
            logger.debug("No legal move to (%s, %s)", row, col)
            return
        self._apply(move, Mover.HUMAN)

    def undo_move(self) -> None:
        if self._closed or self.phase is not Phase.PLAYING:
            return
        count = self._undo_count()
        if count == 0:
            logger.debug("Nothing to undo")
            return
        self.tasks.cancel(TASK_AI_MOVE)
        self.tasks.cancel(TASK_MESSAGE)
        self._clear_hint()
        self.game_state.undo_moves(count)
        self.move_manager.set_game_state(self.game_state)
        if self.game_state.forced_piece is not None:
            self.message = continue_jump_message(self.current_turn)
        else:
            self.message = turn_message(self.current_turn)
        if self.is_computer_turn:
            self._schedule_ai_move()
        self._notify()

    def toggle_hints(self) -> None:
        if self._closed:
            return
        self.show_hints = not self.show_hints
        self._notify()

    def get_hint_move(self) -> Optional[Move]:
        """Compute a hint for the side to move; it clears itself after a while."""
        if self._closed or self.phase is not Phase.PLAYING or self.is_computer_turn:
            return None
        hint = self.engine.hint(self.game_state)
        if hint is None:
            return None
        self.current_hint = hint
        self.tasks.schedule(TASK_HINT_CLEAR, self.config.timing.hint_duration_ms,
                            self._guard(self._expire_hint))
        self._notify()
        return hint

    def reset_game(self) -> None:
        if self._closed:
            return
        self._reset_session()
        logger.info("Game reset")
        self._notify()

    def close(self) -> None:
        """Cancel all pending work; every later call is ignored."""
        if self._closed:
            return
        self.tasks.cancel_all()
        self._generation += 1
        self._closed = True
        self._listeners.clear()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _accepts_human_input(self) -> bool:
        return not self._closed and self.phase is Phase.PLAYING and not self.is_computer_turn

    def _guard(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Wrap a deferred callback so it does nothing once the session is gone."""
        generation = self._generation

        def run() -> None:
            if self._closed or generation != self._generation:
                return
            callback()

        return run

    def _undo_count(self) -> int:
        """How many history entries one undo pops (0 when it is a no-op)."""
        history = self.game_state.history
        if not history:
            return 0
        if self.game_mode is GameMode.HUMAN_VS_HUMAN or history[-1].mover is Mover.HUMAN:
            return 1
        i = len(history) - 1
        while i >= 0 and history[i].mover is Mover.AI:
            i -= 1
        if i < 0:
            return 0
        j = i
        while j >= 0 and history[j].mover is Mover.HUMAN:
            j -= 1
        return len(history) - (j + 1)

    def _apply(self, move: Move, mover: Mover) -> None:
        side = self.current_turn
        self._clear_hint()
        self.tasks.cancel(TASK_MESSAGE)
        result = self.game_state.make_move(move, mover)
        logger.debug("%s (%s) played %s%s", side.value, mover.value, move_to_str(move),
                     " and crowned" if result.promoted else "")
        self.move_manager.set_game_state(self.game_state)

        if self.game_state.forced_piece is not None:
            self.message = continue_jump_message(side)
            if self.is_computer_turn:
                self._schedule_ai_move()
        else:
            self._begin_turn(previous_mover=mover)
        self._notify()

    def _begin_turn(self, previous_mover: Optional[Mover]) -> None:
        """Settle the new side to move: end the game or hand over the turn."""
        self.move_manager.set_game_state(self.game_state)
        if self.game_state.is_terminal():
            self._end_game(self.current_turn.opponent)
            return
        if self.is_computer_turn:
            self.message = MSG_THINKING
            self._schedule_ai_move()
        elif previous_mover is Mover.AI:
            self.tasks.schedule(TASK_MESSAGE, self.config.timing.message_delay_ms,
                                self._guard(self._update_turn_message))
        else:
            self.message = turn_message(self.current_turn)

    def _end_game(self, winner: Color) -> None:
        self.tasks.cancel_all()
        self.phase = Phase.ENDED
        self.winner = winner
        self.message = win_message(winner)
        self.move_manager.clear_selection()
        logger.info("Game over: %s wins", winner.value)

    def _schedule_ai_move(self) -> None:
        self.tasks.schedule(TASK_AI_MOVE, self.config.timing.ai_move_delay_ms,
                            self._guard(self._run_ai_move))

    def _run_ai_move(self) -> None:
        if self.phase is not Phase.PLAYING or not self.is_computer_turn:
            return
        move = self.engine.choose_move(self.game_state)
        if move is None:
            self._end_game(self.human_color)
            self._notify()
            return
        self._apply(move, Mover.AI)

    def _update_turn_message(self) -> None:
        if self.phase is not Phase.PLAYING:
            return
        self.message = turn_message(self.current_turn)
        self._notify()

    def _expire_hint(self) -> None:
        self.current_hint = None
        self._notify()

    def _clear_hint(self) -> None:
        self.tasks.cancel(TASK_HINT_CLEAR)
        self.current_hint = None


def create_controller(config: Optional[CheckersConfig] = None, widget: Optional[Any] = None) -> GameController:
    """Build a controller on a Tk scheduler when `widget` is given, else a manual clock."""
    return GameController(scheduler=SessionFactory.create_scheduler(widget), config=config)
