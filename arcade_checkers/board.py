"""
Board model: an immutable 8x8 grid of cells plus a few primitives.

Boards are tuples of tuples, so every board value doubles as a snapshot:
`with_cells_set` builds a new board and never touches its input.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np

from .types import BOARD_SIZE, Board, Cell, Color, Move, Piece, Rank, Square

SQUARES: int = 32

# Mapping between 1..32 standard notation and (row, col) of dark squares
_rc_of: List[Optional[Square]] = [None] * (SQUARES + 1)
idx_map: Dict[Tuple[int, int], int] = {}


def _build_mappings() -> None:
    i: int = 1
    for r in range(BOARD_SIZE):
        for c in range(BOARD_SIZE):
            if (r + c) % 2 == 1:
                _rc_of[i] = Square(r, c)
                idx_map[(r, c)] = i
                i += 1


_build_mappings()


def rc(i: int) -> Square:
    """Convert a 1..32 square number to row/column coordinates."""
    return _rc_of[i]  # type: ignore[return-value]


def is_valid_square(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_dark_square(row: int, col: int) -> bool:
    return (row + col) % 2 == 1


# ============================
# Construction
# ============================
def empty_board() -> Board:
    return tuple(tuple(None for _ in range(BOARD_SIZE)) for _ in range(BOARD_SIZE))


def initial_board() -> Board:
    """Standard layout: Black on rows 0..2, Red on rows 5..7, dark squares only."""
    rows: List[Tuple[Cell, ...]] = []
    for r in range(BOARD_SIZE):
        row: List[Cell] = []
        for c in range(BOARD_SIZE):
            if not is_dark_square(r, c):
                row.append(None)
            elif r <= 2:
                row.append(Piece(Color.BLACK))
            elif r >= 5:
                row.append(Piece(Color.RED))
            else:
                row.append(None)
        rows.append(tuple(row))
    return tuple(rows)


Placements = Union[Mapping[Tuple[int, int], Piece], Iterable[Tuple[int, int, Piece]]]


def build_board(placements: Placements) -> Board:
    """Build a board from {(row, col): piece} or an iterable of (row, col, piece)."""
    if isinstance(placements, Mapping):
        items = [(r, c, p) for (r, c), p in placements.items()]
    else:
        items = list(placements)
    patch: Dict[Square, Cell] = {}
    for r, c, p in items:
        if not is_dark_square(r, c):
            raise ValueError(f"Pieces may only stand on dark squares, got ({r}, {c})")
        patch[Square(r, c)] = p
    return with_cells_set(empty_board(), patch)


def validate_board(board: Board) -> None:
    """Raise ValueError unless `board` is an 8x8 grid of cells."""
    if len(board) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in board):
        raise ValueError("Board must be an 8x8 grid")


# ============================
# Primitives
# ============================
def cell_at(board: Board, square: Tuple[int, int]) -> Cell:
    r, c = square
    if not is_valid_square(r, c):
        raise ValueError(f"Square off the board: ({r}, {c})")
    return board[r][c]


def with_cells_set(board: Board, patch: Mapping[Tuple[int, int], Cell]) -> Board:
    """Return a new board with the patched cells replaced."""
    if not patch:
        return board
    rows = [list(row) for row in board]
    for (r, c), cell in patch.items():
        if not is_valid_square(r, c):
            raise ValueError(f"Square off the board: ({r}, {c})")
        rows[r][c] = cell
    return tuple(tuple(row) for row in rows)


def iter_pieces(board: Board, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
    """Yield (square, piece) in row-major order, optionally for one colour."""
    for r, row in enumerate(board):
        for c, cell in enumerate(row):
            if cell is not None and (color is None or cell.color is color):
                yield Square(r, c), cell


def count_pieces(board: Board, color: Color) -> int:
    return sum(1 for _ in iter_pieces(board, color))


def board_to_array(board: Board) -> np.ndarray:
    """Encode a board as int8 (8, 8): black +1/+2, red -1/-2, empty 0."""
    arr = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
    for (r, c), piece in iter_pieces(board):
        v = 2 if piece.rank is Rank.KING else 1
        arr[r, c] = v if piece.color is Color.BLACK else -v
    return arr


# ============================
# Display helpers
# ============================
_GLYPHS = {
    (Color.RED, Rank.NORMAL): "r",
    (Color.RED, Rank.KING): "R",
    (Color.BLACK, Rank.NORMAL): "b",
    (Color.BLACK, Rank.KING): "B",
}


def render_board(board: Board) -> str:
    """Plain-text diagram, row 0 at the top."""
    lines = ["  " + " ".join(str(c) for c in range(BOARD_SIZE))]
    for r, row in enumerate(board):
        cells = []
        for c, cell in enumerate(row):
            if cell is None:
                cells.append("." if is_dark_square(r, c) else " ")
            else:
                cells.append(_GLYPHS[(cell.color, cell.rank)])
        lines.append(f"{r} " + " ".join(cells))
    return "\n".join(lines)


def move_to_str(move: Move) -> str:
    """Standard notation, e.g. '22-18' for a step and '22x15' for a jump."""
    sep = "x" if move.is_capture else "-"
    return f"{idx_map[tuple(move.start)]}{sep}{idx_map[tuple(move.end)]}"
