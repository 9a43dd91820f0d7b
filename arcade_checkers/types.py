"""
Type definitions for the checkers rules engine and session controller.

This module provides:
- Closed enumerations for colours, ranks, modes, phases and difficulty
- Frozen dataclasses for pieces, moves and history snapshots
- Type aliases for boards and placement maps
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple

BOARD_SIZE = 8
PIECES_PER_SIDE = 12


class Color(str, Enum):
    """Side colour. Red always opens."""

    RED = "red"
    BLACK = "black"

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self is Color.RED else Color.RED

    @property
    def forward(self) -> int:
        """Row delta of a forward step for a normal piece."""
        return -1 if self is Color.RED else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self is Color.RED else BOARD_SIZE - 1

    @property
    def label(self) -> str:
        return self.value.capitalize()


class Rank(str, Enum):
    NORMAL = "normal"
    KING = "king"


class GameMode(str, Enum):
    HUMAN_VS_HUMAN = "human-vs-human"
    HUMAN_VS_COMPUTER = "human-vs-computer"


class Phase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    ENDED = "ended"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Mover(str, Enum):
    """Who applied a move; drives undo in human-vs-computer games."""

    HUMAN = "human"
    AI = "ai"


class Square(NamedTuple):
    """Board coordinate, 0..7 for both row and column."""

    row: int
    col: int

    @property
    def is_dark(self) -> bool:
        return (self.row + self.col) % 2 == 1

    def offset(self, dr: int, dc: int) -> Square:
        return Square(self.row + dr, self.col + dc)

    def to_dict(self) -> Dict[str, int]:
        return {"row": self.row, "col": self.col}


@dataclass(frozen=True)
class Piece:
    color: Color
    rank: Rank = Rank.NORMAL

    @property
    def is_king(self) -> bool:
        return self.rank is Rank.KING

    def crowned(self) -> Piece:
        """Return the king version of this piece."""
        return Piece(self.color, Rank.KING)

    def to_dict(self) -> Dict[str, str]:
        return {"color": self.color.value, "rank": self.rank.value}


@dataclass(frozen=True)
class Move:
    """A single diagonal step or a single jump."""

    start: Square
    end: Square
    is_capture: bool = False
    captured: Optional[Square] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", Square(*self.start))
        object.__setattr__(self, "end", Square(*self.end))
        if self.captured is not None:
            object.__setattr__(self, "captured", Square(*self.captured))
        if self.is_capture and self.captured is None:
            raise ValueError("A capture must name the jumped square")
        if not self.is_capture and self.captured is not None:
            raise ValueError("Only captures may name a jumped square")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "from": self.start.to_dict(),
            "to": self.end.to_dict(),
            "is_capture": self.is_capture,
        }
        if self.captured is not None:
            data["captured"] = self.captured.to_dict()
        return data


# Board state: 8 rows of 8 cells, each empty (None) or a Piece
Cell = Optional[Piece]
Board = Tuple[Tuple[Cell, ...], ...]


@dataclass(frozen=True)
class CapturedPiece:
    square: Square
    piece: Piece


@dataclass(frozen=True)
class MoveResult:
    """Outcome of applying one move to a board."""

    board: Board
    captured: Optional[CapturedPiece] = None
    promoted: bool = False


@dataclass(frozen=True)
class RemovedPieces:
    """Pieces taken off the board, per colour of the piece taken."""

    red: Tuple[Piece, ...] = ()
    black: Tuple[Piece, ...] = ()

    def of(self, color: Color) -> Tuple[Piece, ...]:
        return self.red if color is Color.RED else self.black

    def with_added(self, piece: Piece) -> RemovedPieces:
        if piece.color is Color.RED:
            return RemovedPieces(red=self.red + (piece,), black=self.black)
        return RemovedPieces(red=self.red, black=self.black + (piece,))

    def to_dict(self) -> Dict[str, list]:
        return {
            "red": [p.to_dict() for p in self.red],
            "black": [p.to_dict() for p in self.black],
        }


@dataclass(frozen=True)
class HistoryEntry:
    """Immutable snapshot taken before a move was applied."""

    board: Board
    current_turn: Color
    removed: RemovedPieces
    last_move: Optional[Move]
    mover: Mover
    forced_piece: Optional[Square] = None


class CheckersError(Exception):
    """Base class for checkers engine errors."""


class IllegalMoveError(CheckersError, ValueError):
    """Raised when a move cannot be applied to the given board."""


def is_valid_color(value: Any) -> bool:
    """Check if a value names a side colour."""
    try:
        Color(value)
    except ValueError:
        return False
    return True
