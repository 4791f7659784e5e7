"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the step directions for each piece type.
Every direction yields at most one move: a single diagonal step, or a jump over an adjacent opponent piece.
No sliding and no flying kings.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from src.checkers.pieces import Piece, PieceType, Side
from src.checkers.square import BOARD_DIMENSIONS, Square


class Board(Protocol):
    """Just the parts the movement rules need"""

    def get(self, square: Square) -> Piece: ...
    def locate_side(self, side: Side) -> list[Square]: ...


Vector = tuple[int, int]

# Scan order is fixed so move lists are reproducible: down-left, down-right, up-left, up-right
DOWN_LEFT: Vector = (1, -1)
DOWN_RIGHT: Vector = (1, 1)
UP_LEFT: Vector = (-1, -1)
UP_RIGHT: Vector = (-1, 1)
ALL_DIRECTIONS: list[Vector] = [DOWN_LEFT, DOWN_RIGHT, UP_LEFT, UP_RIGHT]


@dataclass(frozen=True)
class Move:
    """A legal destination for the selected piece. Only lives between generation and application."""

    destination: Square
    is_capture: bool = False
    captured_square: Optional[Square] = None


@dataclass(frozen=True)
class PlayedMove:
    """A move together with the square it was played from. This is what ends up in the game history."""

    origin: Square
    move: Move

    def to_notation(self) -> str:
        """ex. 'a3-b4' for a step, 'c3xe5' for a capture"""
        separator = "x" if self.move.is_capture else "-"
        return f"{self.origin.to_algebraic()}{separator}{self.move.destination.to_algebraic()}"


# --- ORIENTATION ---
def forward_direction(side: Side) -> int:
    """Side X moves up the board (decreasing row), side O moves down (increasing row)"""
    return -1 if side == Side.X else 1


def promotion_row(side: Side) -> int:
    """The far edge as seen from the side's starting rows"""
    return 0 if side == Side.X else BOARD_DIMENSIONS[0] - 1


# --- MOVEMENT RULES ---
def man_directions(side: Side) -> list[Vector]:
    """Men only ever move (and capture) diagonally forward"""
    d_row = forward_direction(side)
    return [(d_row, -1), (d_row, 1)]


def king_directions(side: Side) -> list[Vector]:
    """Kings move a single step in any of the four diagonal directions"""
    return list(ALL_DIRECTIONS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
DirectionsFn = Callable[[Side], list[Vector]]
MOVEMENT_RULES: dict[PieceType, DirectionsFn] = {
    PieceType.MAN: man_directions,
    PieceType.KING: king_directions,
}


def single_step_moves(
    square: Square, board: Board, side: Side, directions: list[Vector]
) -> list[Move]:
    """
    For each direction:
    * the neighbouring square is empty --> simple move
    * the neighbouring square holds an opponent piece and the square behind it is empty --> capture
    """
    moves: list[Move] = []
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        if not target_square.is_within_bounds():
            continue

        target = board.get(target_square)
        if target.is_empty:
            moves.append(Move(destination=target_square))
            continue

        if not target.is_opponent_of(side):
            continue

        landing_square = target_square.offset(d_row, d_col)
        if landing_square.is_within_bounds() and board.get(landing_square).is_empty:
            moves.append(
                Move(
                    destination=landing_square,
                    is_capture=True,
                    captured_square=target_square,
                )
            )
    return moves


def legal_moves_from(board: Board, square: Square, side: Side) -> list[Move]:
    """
    Legal destinations for the piece standing on `square`.

    NOTE: Checking ownership is the caller's job. An empty square or a piece of the other side simply has no moves.
    """
    piece = board.get(square)
    if not piece.belongs_to(side):
        return []

    directions = MOVEMENT_RULES[piece.type](side)
    return single_step_moves(square, board, side, directions)


def capture_moves_from(board: Board, square: Square, side: Side) -> list[Move]:
    """Only the jumps. This is the move set offered while continuing a capture chain."""
    return [move for move in legal_moves_from(board, square, side) if move.is_capture]


def all_legal_moves(board: Board, side: Side) -> dict[Square, list[Move]]:
    """Every piece of `side` that can move, with its moves (row-major scan)."""
    moves: dict[Square, list[Move]] = {}
    for square in board.locate_side(side):
        piece_moves = legal_moves_from(board, square, side)
        if piece_moves:
            moves[square] = piece_moves
    return moves


def has_any_legal_move(board: Board, side: Side) -> bool:
    return any(
        legal_moves_from(board, square, side) for square in board.locate_side(side)
    )
