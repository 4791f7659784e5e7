"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import OutOfRangeError

# Checkers board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    """Row 0 is the top of the screen, column 0 the left edge."""

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' is the bottom-left corner (7,0), 'h8' the top-right corner (0,7)"""
        col = ord(sq[0]) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1:])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def is_dark(self) -> bool:
        """Only the dark squares are ever played on."""
        return (self.row + self.col) % 2 == 1

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)

    def mirrored(self) -> Square:
        """The square as seen from the other side of the table (row -> 7 - row, col -> 7 - col).

        NOTE flipping the rows alone would send dark squares onto light ones.
        """
        return Square(
            BOARD_DIMENSIONS[0] - 1 - self.row, BOARD_DIMENSIONS[1] - 1 - self.col
        )


def assert_within_bounds(square: Square) -> None:
    """Coordinates outside the board are a bug in the caller, never a game-rule failure."""
    if not square.is_within_bounds():
        raise OutOfRangeError(
            f"Square {(square.row, square.col)} is outside the {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} board."
        )
