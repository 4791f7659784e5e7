"""Defines the sides and the types of checkers pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    EMPTY = auto()
    MAN = auto()
    KING = auto()


class Side(Enum):
    NONE = auto()
    X = auto()
    O = auto()  # noqa: E741

    @property
    def opponent(self) -> "Side":
        if self == Side.X:
            return Side.O
        if self == Side.O:
            return Side.X
        return Side.NONE


AVAILABLE_SIDE_NAMES: list[str] = [side.name for side in Side if side != Side.NONE]

# lower case: a man, upper case: a king
SIDE_TO_CHAR: dict[Side, str] = {Side.X: "x", Side.O: "o"}
CHAR_TO_SIDE: dict[str, Side] = {value: key for key, value in SIDE_TO_CHAR.items()}
EMPTY_CHAR = " "


@dataclass(frozen=True)
class Piece:
    type: PieceType
    side: Side

    @classmethod
    def from_char(cls, character: str) -> Self:
        if character in (EMPTY_CHAR, "."):
            return cls(PieceType.EMPTY, Side.NONE)
        side = CHAR_TO_SIDE[character.lower()]
        piece_type = PieceType.KING if character.isupper() else PieceType.MAN
        return cls(piece_type, side)

    def to_char(self) -> str:
        if self.type == PieceType.EMPTY:
            return EMPTY_CHAR
        char = SIDE_TO_CHAR[self.side]
        return char.upper() if self.type == PieceType.KING else char

    @property
    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY

    @property
    def is_king(self) -> bool:
        return self.type == PieceType.KING

    def belongs_to(self, side: Side) -> bool:
        return not self.is_empty and self.side == side

    def is_opponent_of(self, side: Side) -> bool:
        return not self.is_empty and self.side == side.opponent

    def promoted(self) -> Self:
        """Pieces are immutable values: promotion hands back the King of the same side."""
        return type(self)(PieceType.KING, self.side)

    def swapped(self) -> Self:
        """Same rank, other side. Empty stays empty."""
        if self.is_empty:
            return self
        return type(self)(self.type, self.side.opponent)


EMPTY = Piece(PieceType.EMPTY, Side.NONE)
