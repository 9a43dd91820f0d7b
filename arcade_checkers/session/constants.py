from __future__ import annotations

from ..types import Color, Difficulty, GameMode

# Session defaults before a game is configured
DEFAULT_GAME_MODE = GameMode.HUMAN_VS_COMPUTER
DEFAULT_HUMAN_COLOR = Color.RED
DEFAULT_DIFFICULTY = Difficulty.MEDIUM

# Status text
MSG_TURN = "{side}'s Turn!"
MSG_WIN = "{side} Wins!"
MSG_CONTINUE_JUMP = "{side} must keep jumping!"
MSG_THINKING = "Computer is thinking..."

# Task names in the session's TaskGroup
TASK_AI_MOVE = "ai-move"
TASK_MESSAGE = "turn-message"
TASK_HINT_CLEAR = "hint-clear"


def turn_message(color: Color) -> str:
    return MSG_TURN.format(side=color.label)


def win_message(color: Color) -> str:
    return MSG_WIN.format(side=color.label)


def continue_jump_message(color: Color) -> str:
    return MSG_CONTINUE_JUMP.format(side=color.label)
