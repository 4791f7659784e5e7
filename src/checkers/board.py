"""The Game board: storage of the cells plus the basic queries the rules need."""

from dataclasses import dataclass
from typing import Self

from src.checkers.pieces import EMPTY, Piece, PieceType, Side
from src.checkers.square import BOARD_DIMENSIONS, Square, assert_within_bounds

# Rows occupied at the start of the game
STARTING_ROWS: dict[Side, range] = {
    Side.O: range(0, 3),
    Side.X: range(BOARD_DIMENSIONS[0] - 3, BOARD_DIMENSIONS[0]),
}


@dataclass
class Board:
    grid: list[list[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls([[EMPTY] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])])

    @classmethod
    def initial_layout(cls, starting_rows: dict[Side, range] = STARTING_ROWS) -> Self:
        """Men on the dark squares of the three back rows of each side, everything else empty.

        By default: side O occupies rows 0-2, side X rows 5-7, rows 3-4 stay empty.
        """
        board = cls.empty()
        for side, rows in starting_rows.items():
            for row in rows:
                for col in range(BOARD_DIMENSIONS[1]):
                    square = Square(row, col)
                    if square.is_dark():
                        board.set(square, Piece(PieceType.MAN, side))
        return board

    @classmethod
    def from_rows(cls, rows: list[str]) -> Self:
        """Construct a board from a text snapshot.

        One string per row, top row first, one character per column:
        * ' ' or '.' is an empty square
        * 'x' / 'o' are men, 'X' / 'O' are kings
        ex. starting position:
        [" o o o o", "o o o o ", " o o o o", "        ", "        ", "x x x x ", " x x x x", "x x x x "]
        """
        if len(rows) != BOARD_DIMENSIONS[0] or any(
            len(row) != BOARD_DIMENSIONS[1] for row in rows
        ):
            raise ValueError(
                f"A board snapshot needs {BOARD_DIMENSIONS[0]} rows of {BOARD_DIMENSIONS[1]} characters."
            )
        return cls([[Piece.from_char(char) for char in row] for row in rows])

    def to_rows(self) -> list[str]:
        return ["".join(piece.to_char() for piece in row) for row in self.grid]

    def get(self, square: Square) -> Piece:
        assert_within_bounds(square)
        return self.grid[square.row][square.col]

    def set(self, square: Square, piece: Piece) -> None:
        """No validation beyond the bounds: callers guarantee legality."""
        assert_within_bounds(square)
        self.grid[square.row][square.col] = piece

    def squares(self) -> list[Square]:
        """All squares in row-major order"""
        return [
            Square(row, col)
            for row in range(BOARD_DIMENSIONS[0])
            for col in range(BOARD_DIMENSIONS[1])
        ]

    def locate_side(self, side: Side) -> list[Square]:
        return [square for square in self.squares() if self.get(square).belongs_to(side)]

    def occupied_squares(self) -> list[Square]:
        return [square for square in self.squares() if not self.get(square).is_empty]

    def count_pieces(self) -> dict[Side, int]:
        """Tally the pieces each side has left"""
        return {
            side: len(self.locate_side(side)) for side in Side if side != Side.NONE
        }

    def move_piece(self, from_square: Square, to_square: Square) -> None:
        """Relocate whatever stands on from_square"""
        piece_that_moved = self.get(from_square)
        self.set(from_square, EMPTY)
        self.set(to_square, piece_that_moved)

    def remove_piece(self, square: Square) -> None:
        self.set(square, EMPTY)

    def promote_piece(self, square: Square) -> None:
        self.set(square, self.get(square).promoted())

    def mirrored(self) -> Self:
        """The position seen from the other side of the table, with the sides of every piece swapped."""
        return type(self)(
            [
                [piece.swapped() for piece in reversed(row)]
                for row in reversed(self.grid)
            ]
        )

    def copy(self) -> Self:
        return type(self)([row[:] for row in self.grid])
