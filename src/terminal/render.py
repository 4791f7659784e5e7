"""
Text rendering of a game. Pure functions returning lines, so they can be tested without a terminal.

Cell markers:
* [x] the cursor
* {x} the selected piece
* (x) a legal destination of the selected piece
"""

from typing import Optional

from src.checkers.game import Game, Phase
from src.checkers.square import BOARD_DIMENSIONS, Square
from src.core.models import GameRecordModel

BORDER = "   " + "-" * (BOARD_DIMENSIONS[1] * 3 + 2)
FILE_LABELS = "    " + "".join(
    f" {chr(ord('a') + col)} " for col in range(BOARD_DIMENSIONS[1])
)


def render_cell(game: Game, square: Square, cursor: Optional[Square]) -> str:
    char = game.cell_at(square).to_char()
    if cursor == square:
        return f"[{char}]"
    if game.phase == Phase.AWAITING_DESTINATION:
        if square == game.selection:
            return f"{{{char}}}"
        if any(move.destination == square for move in game.legal_moves):
            return f"({char})"
    return f" {char} "


def render_game(game: Game, cursor: Optional[Square] = None) -> list[str]:
    """The whole screen: header, board, key help, status message and the opponent's trash talk."""
    # the cursor is hidden while the computer is moving or once the game is over
    if game.is_terminal or game.is_ai_turn:
        cursor = None

    lines = [
        f"Current player: {game.current_side.name}",
        f"Round: {game.round_number}",
        FILE_LABELS,
        BORDER,
    ]
    for row in range(BOARD_DIMENSIONS[0]):
        cells = "".join(
            render_cell(game, Square(row, col), cursor)
            for col in range(BOARD_DIMENSIONS[1])
        )
        lines.append(f"{BOARD_DIMENSIONS[0] - row:>2} |{cells}|")
    lines.append(BORDER)

    if game.is_terminal:
        lines.append("Press any key to leave")
    elif game.is_ai_turn:
        lines.append("AI is thinking...")
    else:
        lines.append(
            "Use arrow keys to select destination and 'spacebar' to move"
            if game.phase == Phase.AWAITING_DESTINATION
            else "Use arrow keys to select a piece and 'spacebar' to select it"
        )
        lines.append("'c' to unselect piece, 'escape' to quit")

    lines.append(game.message)
    if game.commentary:
        lines.append(f"Opponent says: {game.commentary}")
    return lines


def render_record(record: GameRecordModel) -> str:
    """One line per finished game for the --history listing"""
    opponent = f"computer as {record.ai_side.upper()}" if record.ai_side else "two players"
    winner = record.winner.upper() if record.winner else "nobody"
    return f"{winner} won after {record.rounds} rounds ({opponent}, {len(record.moves)} moves)"
