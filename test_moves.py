import pytest

from arcade_checkers.board import build_board, cell_at, initial_board
from arcade_checkers.moves import (
    MoveGenerator,
    MoveValidator,
    all_legal_moves,
    apply_move,
    continues_capture,
    has_any_capture,
    has_no_moves,
    legal_moves_for,
    legal_moves_for_turn,
)
from arcade_checkers.types import Color, IllegalMoveError, Move, Piece, Rank, Square

# Helpers

RED = Piece(Color.RED)
BLACK = Piece(Color.BLACK)
RED_KING = Piece(Color.RED, Rank.KING)
BLACK_KING = Piece(Color.BLACK, Rank.KING)


def ends(moves):
    return {tuple(m.end) for m in moves}


def test_opening_moves_for_both_sides():
    board = initial_board()
    red_moves = all_legal_moves(board, Color.RED)
    black_moves = all_legal_moves(board, Color.BLACK)
    assert len(red_moves) == 7
    assert len(black_moves) == 7
    assert all(m.start.row == 5 and m.end.row == 4 for m in red_moves)
    assert all(m.start.row == 2 and m.end.row == 3 for m in black_moves)
    assert not any(m.is_capture for m in red_moves + black_moves)


def test_men_only_move_forward():
    board = build_board({(4, 3): RED, (1, 4): BLACK})
    assert ends(legal_moves_for(board, (4, 3))) == {(3, 2), (3, 4)}
    assert ends(legal_moves_for(board, (1, 4))) == {(2, 3), (2, 5)}


def test_kings_move_in_all_directions():
    board = build_board({(4, 3): RED_KING})
    assert ends(legal_moves_for(board, (4, 3))) == {(3, 2), (3, 4), (5, 2), (5, 4)}


def test_edge_piece_has_one_step():
    board = build_board({(5, 0): RED})
    assert ends(legal_moves_for(board, (5, 0))) == {(4, 1)}


def test_captures_listed_before_steps():
    board = build_board({(5, 2): RED, (4, 3): BLACK})
    moves = legal_moves_for(board, (5, 2))
    assert moves[0] == Move((5, 2), (3, 4), is_capture=True, captured=(4, 3))
    assert moves[1:] == [Move((5, 2), (4, 1))]


def test_legal_moves_for_respects_color_filter():
    board = initial_board()
    assert legal_moves_for(board, (5, 2), Color.BLACK) == []
    assert legal_moves_for(board, (3, 2)) == []
    assert legal_moves_for(board, (9, 9)) == []


def test_capture_is_mandatory():
    board = build_board({(5, 2): RED, (4, 3): BLACK, (5, 6): RED})
    assert has_any_capture(board, Color.RED)
    turn = legal_moves_for_turn(board, Color.RED)
    assert list(turn) == [Square(5, 2)]
    assert turn[Square(5, 2)] == [Move((5, 2), (3, 4), is_capture=True, captured=(4, 3))]


def test_blocked_jump_is_not_a_capture():
    board = build_board({(5, 2): RED, (4, 3): BLACK, (3, 4): BLACK})
    assert not has_any_capture(board, Color.RED)
    assert ends(legal_moves_for_turn(board, Color.RED)[Square(5, 2)]) == {(4, 1)}


def test_cannot_jump_own_piece():
    board = build_board({(5, 2): RED, (4, 3): RED})
    assert not has_any_capture(board, Color.RED)


def test_apply_step_moves_piece():
    board = initial_board()
    result = apply_move(board, Move((5, 2), (4, 3)))
    assert cell_at(result.board, (5, 2)) is None
    assert cell_at(result.board, (4, 3)) == RED
    assert result.captured is None
    assert not result.promoted
    # the input board is untouched
    assert cell_at(board, (5, 2)) == RED


def test_apply_capture_removes_jumped_piece():
    board = build_board({(5, 2): RED, (4, 3): BLACK})
    result = apply_move(board, Move((5, 2), (3, 4), is_capture=True, captured=(4, 3)))
    assert cell_at(result.board, (4, 3)) is None
    assert cell_at(result.board, (3, 4)) == RED
    assert result.captured.piece == BLACK
    assert result.captured.square == Square(4, 3)


def test_promotion_on_back_rank():
    board = build_board({(1, 2): RED, (6, 1): BLACK})
    result = apply_move(board, Move((1, 2), (0, 1)))
    assert result.promoted
    assert cell_at(result.board, (0, 1)) == RED_KING

    result = apply_move(board, Move((6, 1), (7, 0)))
    assert result.promoted
    assert cell_at(result.board, (7, 0)) == BLACK_KING


def test_king_is_not_promoted_again():
    board = build_board({(1, 2): RED_KING})
    result = apply_move(board, Move((1, 2), (0, 1)))
    assert not result.promoted
    assert cell_at(result.board, (0, 1)) == RED_KING


def test_multi_jump_continuation():
    board = build_board({(5, 0): RED, (4, 1): BLACK, (2, 3): BLACK})
    first = apply_move(board, Move((5, 0), (3, 2), is_capture=True, captured=(4, 1)))
    follow = continues_capture(first.board, (3, 2))
    assert follow == [Move((3, 2), (1, 4), is_capture=True, captured=(2, 3))]

    second = apply_move(first.board, follow[0])
    assert continues_capture(second.board, (1, 4)) == []


def test_apply_move_rejects_bad_moves():
    board = build_board({(5, 2): RED, (4, 3): RED})
    with pytest.raises(IllegalMoveError):
        apply_move(board, Move((5, 0), (4, 1)))
    with pytest.raises(IllegalMoveError):
        apply_move(board, Move((5, 2), (4, 3)))
    with pytest.raises(IllegalMoveError):
        apply_move(board, Move((5, 2), (3, 4), is_capture=True, captured=(4, 3)))


def test_capture_move_requires_jumped_square():
    with pytest.raises(ValueError):
        Move((5, 2), (3, 4), is_capture=True)
    with pytest.raises(ValueError):
        Move((5, 2), (4, 3), captured=(4, 3))


def test_no_moves_when_blocked_or_empty():
    blocked = build_board({(7, 0): RED, (6, 1): BLACK, (5, 2): BLACK})
    assert has_no_moves(blocked, Color.RED)
    assert not has_no_moves(blocked, Color.BLACK)

    only_black = build_board({(2, 3): BLACK})
    assert has_no_moves(only_black, Color.RED)


def test_move_validator_checks_forced_piece():
    board = build_board({(5, 0): RED, (4, 1): BLACK, (2, 3): BLACK, (5, 6): RED})
    first = apply_move(board, Move((5, 0), (3, 2), is_capture=True, captured=(4, 1))).board
    follow = Move((3, 2), (1, 4), is_capture=True, captured=(2, 3))
    assert MoveValidator.is_legal(first, Color.RED, follow, forced_piece=Square(3, 2))
    assert not MoveValidator.is_legal(first, Color.RED, Move((5, 6), (4, 5)), forced_piece=Square(3, 2))
    assert not MoveValidator.is_legal(board, Color.RED, Move((5, 6), (4, 5)))


def test_generator_targets_are_empty_dark_squares():
    gen = MoveGenerator()
    board = initial_board()
    for color in Color:
        for m in gen.legal_moves(board, color):
            assert (m.end.row + m.end.col) % 2 == 1
            assert cell_at(board, m.end) is None


def test_player_may_choose_shorter_capture_chain():
    # (5, 2) can take one piece via (4, 1) or two via (4, 3) and (2, 5);
    # both first jumps are offered, nothing forces the longer chain
    board = build_board({(5, 2): RED, (4, 1): BLACK, (4, 3): BLACK, (2, 5): BLACK})
    turn = legal_moves_for_turn(board, Color.RED)
    assert ends(turn[Square(5, 2)]) == {(3, 0), (3, 4)}

    short = apply_move(board, Move((5, 2), (3, 0), is_capture=True, captured=(4, 1)))
    assert continues_capture(short.board, (3, 0)) == []
