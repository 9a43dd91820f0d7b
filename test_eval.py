import random

import numpy as np
import pytest

from arcade_checkers.board import build_board, initial_board
from arcade_checkers.eval import EvalWeights, HeuristicEvaluator, get_evaluator, score_position
from arcade_checkers.moves import all_legal_moves, apply_move
from arcade_checkers.types import Color, Piece, Rank


def random_position(seed, plies=12):
    rng = random.Random(seed)
    board = initial_board()
    side = Color.RED
    for _ in range(plies):
        moves = all_legal_moves(board, side)
        if not moves:
            break
        board = apply_move(board, rng.choice(moves)).board
        side = side.opponent
    return board


def test_initial_position_is_balanced():
    assert score_position(initial_board(), Color.RED) == pytest.approx(0.0)
    assert score_position(initial_board(), Color.BLACK) == pytest.approx(0.0)


@pytest.mark.parametrize("seed", range(5))
def test_score_is_antisymmetric(seed):
    board = random_position(seed)
    assert score_position(board, Color.RED) == pytest.approx(-score_position(board, Color.BLACK))


def test_score_is_deterministic():
    board = random_position(42)
    assert score_position(board, Color.RED) == score_position(board, Color.RED)


def test_king_worth_more_than_man():
    man = build_board({(4, 1): Piece(Color.RED), (1, 0): Piece(Color.BLACK)})
    king = build_board({(4, 1): Piece(Color.RED, Rank.KING), (1, 0): Piece(Color.BLACK)})
    assert score_position(king, Color.RED) > score_position(man, Color.RED)


def test_advancement_rewarded():
    back = build_board({(6, 1): Piece(Color.RED), (0, 7): Piece(Color.BLACK)})
    forward = build_board({(3, 0): Piece(Color.RED), (0, 7): Piece(Color.BLACK)})
    assert score_position(forward, Color.RED) > score_position(back, Color.RED)


def test_no_moves_is_decisive():
    board = build_board({(3, 2): Piece(Color.RED)})
    assert score_position(board, Color.RED) >= 100.0
    assert score_position(board, Color.BLACK) <= -100.0


def test_custom_weights():
    evaluator = HeuristicEvaluator(EvalWeights(man=1.0, king=5.0, advancement=0.0, center=0.0))
    board = build_board({(4, 1): Piece(Color.RED, Rank.KING), (1, 0): Piece(Color.BLACK)})
    assert evaluator.evaluate_position(board, Color.RED) == pytest.approx(4.0)


def test_weights_require_king_above_man():
    with pytest.raises(ValueError):
        EvalWeights(man=2.0, king=1.0)


def test_batch_predict_matches_single():
    evaluator = get_evaluator()
    boards = [random_position(s) for s in range(3)]
    colors = [Color.RED, Color.BLACK, Color.RED]
    out = evaluator.batch_predict(boards, colors)
    assert isinstance(out, np.ndarray)
    for i, (b, c) in enumerate(zip(boards, colors)):
        assert out[i] == pytest.approx(evaluator.evaluate_position(b, c))
