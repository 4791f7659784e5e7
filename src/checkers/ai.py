"""
The computer opponent.

No evaluation at all: any capture beats any simple move, and among the preferred moves the pick is uniformly random.
The random source is passed in, so a seeded `random.Random` makes the games reproducible.
"""

import random
from typing import Optional

from src.checkers.moves import (
    Board,
    Move,
    PlayedMove,
    all_legal_moves,
    capture_moves_from,
)
from src.checkers.pieces import Side
from src.checkers.square import Square


def candidate_moves(board: Board, side: Side) -> list[PlayedMove]:
    """Every legal move of every piece of `side`, restricted to the captures if there is at least one."""
    played_moves = [
        PlayedMove(origin, move)
        for origin, moves in all_legal_moves(board, side).items()
        for move in moves
    ]
    captures = [played for played in played_moves if played.move.is_capture]
    return captures or played_moves


def choose_move(board: Board, side: Side, rng: random.Random) -> Optional[PlayedMove]:
    """First step of the computer's turn. None means the side cannot move (the Game detects the loss, not the AI)."""
    candidates = candidate_moves(board, side)
    if not candidates:
        return None
    return rng.choice(candidates)


def continue_chain(
    board: Board, square: Square, side: Side, rng: random.Random
) -> Optional[Move]:
    """Next jump for the piece that just captured, if it has one."""
    captures = capture_moves_from(board, square, side)
    if not captures:
        return None
    return rng.choice(captures)
