"""
Boundary layer data model(s).

Transport-safe objects passed between the domain layer (Game), the Service, the persistence layer and the commentary client.
Only strings (and string enums) / ints / lists, so none of those layers needs to know about Board or Square.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.shared_types import SideName, Status


@dataclass
class GameSummary:
    """What the commentary service gets to see of a game."""

    round_number: int
    side_to_move: SideName
    status: Status
    pieces_left: dict[str, int]
    last_move: Optional[str] = None
    ai_side: Optional[SideName] = None
    winner: Optional[SideName] = None


@dataclass
class GameRecordModel:
    """A finished game, as stored in the repository."""

    first_side: SideName
    winner: Optional[SideName]
    rounds: int
    moves: list[str] = field(default_factory=list)
    final_board: list[str] = field(default_factory=list)
    ai_side: Optional[SideName] = None
    commentary: Optional[str] = None
