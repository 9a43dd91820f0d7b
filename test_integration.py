from __future__ import annotations

import random

import pytest

from arcade_checkers.board import count_pieces
from arcade_checkers.eval import get_evaluator
from arcade_checkers.moves import has_no_moves
from arcade_checkers.selfplay import play_game, run_matches
from arcade_checkers.types import Color, Difficulty


@pytest.mark.parametrize("red,black", [
    (Difficulty.EASY, Difficulty.EASY),
    (Difficulty.MEDIUM, Difficulty.EASY),
    (Difficulty.EASY, Difficulty.HARD),
])
def test_selfplay_game_conserves_pieces(red, black):
    record = play_game(red, black, max_plies=120, rng=random.Random(3), hard_depth=2)
    assert 0 < record.plies <= 120
    for color in Color:
        assert count_pieces(record.board, color) + len(record.removed.of(color)) == 12
    if record.winner is not None:
        assert has_no_moves(record.board, record.winner.opponent)
    assert len(record.notation) == record.plies


def test_selfplay_is_reproducible():
    a = play_game("easy", "medium", max_plies=60, rng=random.Random(9))
    b = play_game("easy", "medium", max_plies=60, rng=random.Random(9))
    assert a.moves == b.moves
    assert a.winner == b.winner


def test_run_matches_tallies_every_game():
    tally = run_matches("easy", "easy", games=3, max_plies=80, seed=1)
    assert sum(tally.values()) == 3
    assert set(tally) == {"red", "black", "draw"}


def test_end_to_end_move_and_eval():
    evaluator = get_evaluator()
    record = play_game(Difficulty.MEDIUM, Difficulty.MEDIUM, max_plies=10, rng=random.Random(0))
    score = evaluator.evaluate_position(record.board, Color.RED)
    assert isinstance(score, float)
    assert score == pytest.approx(-evaluator.evaluate_position(record.board, Color.BLACK))
