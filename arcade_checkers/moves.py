from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .board import cell_at, is_dark_square, is_valid_square, iter_pieces, with_cells_set
from .types import (
    Board,
    CapturedPiece,
    Color,
    IllegalMoveError,
    Move,
    MoveResult,
    Piece,
    Square,
)

# -----------------------------
# Directions
# -----------------------------
_DIRS: List[Tuple[int, int]] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]


def _directions(piece: Piece) -> List[Tuple[int, int]]:
    if piece.is_king:
        return _DIRS
    dr = piece.color.forward
    return [(dr, -1), (dr, 1)]


def _on_board(square: Square) -> bool:
    return is_valid_square(square.row, square.col)


class MoveGenerator:
    """Generates legal moves for a board under standard American rules.

    Captures are mandatory: whenever the side to move has a jump anywhere on
    the board, only jumps are legal that turn. Every returned move is a single
    step or a single jump; multi-jumps are driven one jump at a time through
    `continues_capture`.
    """

    def _gen_simple_moves(self, board: Board, square: Square, piece: Piece) -> List[Move]:
        moves: List[Move] = []
        for dr, dc in _directions(piece):
            dest = square.offset(dr, dc)
            if _on_board(dest) and cell_at(board, dest) is None:
                moves.append(Move(square, dest))
        return moves

    def _gen_captures_from(self, board: Board, square: Square, piece: Piece) -> List[Move]:
        moves: List[Move] = []
        for dr, dc in _directions(piece):
            mid = square.offset(dr, dc)
            dest = square.offset(2 * dr, 2 * dc)
            if not (_on_board(mid) and _on_board(dest)):
                continue
            jumped = cell_at(board, mid)
            if jumped is not None and jumped.color is not piece.color and cell_at(board, dest) is None:
                moves.append(Move(square, dest, is_capture=True, captured=mid))
        return moves

    def moves_for(self, board: Board, square: Tuple[int, int], color: Optional[Color] = None) -> List[Move]:
        """All moves of the piece on `square`, captures first; ignores the forced-capture rule."""
        sq = Square(*square)
        if not _on_board(sq):
            return []
        piece = cell_at(board, sq)
        if piece is None or (color is not None and piece.color is not color):
            return []
        moves = self._gen_captures_from(board, sq, piece) + self._gen_simple_moves(board, sq, piece)
        for m in moves:
            assert is_dark_square(*m.end) and cell_at(board, m.end) is None, m
        return moves

    def captures_for(self, board: Board, square: Tuple[int, int]) -> List[Move]:
        sq = Square(*square)
        if not _on_board(sq):
            return []
        piece = cell_at(board, sq)
        if piece is None:
            return []
        return self._gen_captures_from(board, sq, piece)

    def get_all_captures(self, board: Board, color: Color) -> Dict[Square, List[Move]]:
        result: Dict[Square, List[Move]] = {}
        for sq, piece in iter_pieces(board, color):
            caps = self._gen_captures_from(board, sq, piece)
            if caps:
                result[sq] = caps
        return result

    def has_any_capture(self, board: Board, color: Color) -> bool:
        for sq, piece in iter_pieces(board, color):
            if self._gen_captures_from(board, sq, piece):
                return True
        return False

    def legal_moves_for_turn(self, board: Board, color: Color) -> Dict[Square, List[Move]]:
        """Movable pieces of `color` mapped to their legal moves this turn.

        Pieces without a legal move are left out of the mapping.
        """
        captures = self.get_all_captures(board, color)
        if captures:
            return captures
        quiets: Dict[Square, List[Move]] = {}
        for sq, piece in iter_pieces(board, color):
            steps = self._gen_simple_moves(board, sq, piece)
            if steps:
                quiets[sq] = steps
        return quiets

    def legal_moves(self, board: Board, color: Color) -> List[Move]:
        """Flattened `legal_moves_for_turn`, in row-major order of the moving piece."""
        moves: List[Move] = []
        for square_moves in self.legal_moves_for_turn(board, color).values():
            moves.extend(square_moves)
        return moves


class MoveValidator:
    """Validates moves against generated legal moves."""

    @staticmethod
    def is_legal(board: Board, color: Color, move: Move,
                 forced_piece: Optional[Square] = None) -> bool:
        if forced_piece is not None:
            if move.start != forced_piece:
                return False
            return move in continues_capture(board, forced_piece)
        return move in MoveGenerator().legal_moves_for_turn(board, color).get(move.start, [])


_generator = MoveGenerator()


# Convenience functional API

def legal_moves_for(board: Board, square: Tuple[int, int], color: Optional[Color] = None) -> List[Move]:
    return _generator.moves_for(board, square, color)


def captures_for(board: Board, square: Tuple[int, int]) -> List[Move]:
    return _generator.captures_for(board, square)


def get_all_captures(board: Board, color: Color) -> Dict[Square, List[Move]]:
    return _generator.get_all_captures(board, color)


def has_any_capture(board: Board, color: Color) -> bool:
    return _generator.has_any_capture(board, color)


def legal_moves_for_turn(board: Board, color: Color) -> Dict[Square, List[Move]]:
    return _generator.legal_moves_for_turn(board, color)


def all_legal_moves(board: Board, color: Color) -> List[Move]:
    return _generator.legal_moves(board, color)


def continues_capture(board: Board, square: Tuple[int, int]) -> List[Move]:
    """Further jumps for the piece now on `square`; non-empty means the turn continues."""
    return _generator.captures_for(board, square)


def has_no_moves(board: Board, color: Color) -> bool:
    return not legal_moves_for_turn(board, color)


# ============================
# Applying moves
# ============================
def apply_move(board: Board, move: Move) -> MoveResult:
    """Apply a single step or jump, promoting on the back rank.

    Turn switching is left to the caller because a jump may continue.
    """
    piece = cell_at(board, move.start)
    if piece is None:
        raise IllegalMoveError(f"No piece on {tuple(move.start)}")
    if not is_dark_square(*move.end) or cell_at(board, move.end) is not None:
        raise IllegalMoveError(f"Target {tuple(move.end)} is not an empty dark square")

    patch = {move.start: None}
    captured: Optional[CapturedPiece] = None
    if move.is_capture:
        jumped = cell_at(board, move.captured)
        if jumped is None or jumped.color is piece.color:
            raise IllegalMoveError(f"Nothing to capture on {tuple(move.captured)}")
        captured = CapturedPiece(move.captured, jumped)
        patch[move.captured] = None

    promoted = not piece.is_king and move.end.row == piece.color.promotion_row
    patch[move.end] = piece.crowned() if promoted else piece
    return MoveResult(with_cells_set(board, patch), captured, promoted)
