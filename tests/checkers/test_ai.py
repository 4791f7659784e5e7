"""Unit tests for /src/checkers/ai.py"""

import random
from typing import Callable
from unittest.mock import Mock

from src.checkers.ai import candidate_moves, choose_move, continue_chain
from src.checkers.board import Board
from src.checkers.moves import Move, PlayedMove
from src.checkers.pieces import Side
from src.checkers.square import Square

MakeBoard = Callable[[dict[tuple[int, int], str]], Board]


def test_candidates_are_all_moves_without_captures() -> None:
    board = Board.initial_layout()
    candidates = candidate_moves(board, Side.O)
    assert len(candidates) == 7
    assert not any(played.move.is_capture for played in candidates)


def test_captures_are_preferred(make_board: MakeBoard) -> None:
    """(0,7) has a simple move, (2,1) can capture: only the capture is a candidate."""
    board = make_board({(0, 7): "o", (2, 1): "o", (3, 2): "x"})
    candidates = candidate_moves(board, Side.O)
    assert candidates == [
        PlayedMove(Square(2, 1), Move(Square(4, 3), True, Square(3, 2)))
    ]


def test_choose_move_picks_from_candidates(make_board: MakeBoard) -> None:
    """The random source decides among the candidates."""
    board = Board.initial_layout()
    rng = Mock(spec=random.Random)
    rng.choice.side_effect = lambda options: options[-1]
    played = choose_move(board, Side.X, rng)
    rng.choice.assert_called_once()
    assert played == PlayedMove(Square(5, 6), Move(Square(4, 7)))


def test_choose_move_without_moves() -> None:
    assert choose_move(Board.empty(), Side.O, random.Random(0)) is None


def test_choose_move_is_reproducible() -> None:
    board = Board.initial_layout()
    first = [choose_move(board, Side.X, random.Random(seed)) for seed in range(10)]
    second = [choose_move(board, Side.X, random.Random(seed)) for seed in range(10)]
    assert first == second


def test_continue_chain(make_board: MakeBoard) -> None:
    board = make_board({(3, 4): "o", (4, 5): "x", (4, 3): "x", (5, 2): "x"})
    move = continue_chain(board, Square(3, 4), Side.O, random.Random(3))
    assert move == Move(Square(5, 6), True, Square(4, 5))


def test_continue_chain_ignores_simple_moves(make_board: MakeBoard) -> None:
    board = make_board({(3, 4): "o"})
    assert continue_chain(board, Square(3, 4), Side.O, random.Random(3)) is None
