"""Orchestration of communication from the terminal layer to the business logic, commentary and persistence layers (and the reverse direction)."""

import logging
import random
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from src.checkers.game import Game, Phase
from src.checkers.pieces import Side
from src.checkers.square import Square
from src.commentary.worker import CommentaryWorker
from src.core.exceptions import GameStateError, RepositoryError
from src.core.models import GameRecordModel
from src.db.repository import GameRecordRepository

logger = logging.getLogger(__name__)


class CheckersService:
    """Orchestration of layers for one terminal session (one game at a time)."""

    def __init__(
        self,
        repository: GameRecordRepository,
        commentary: Optional[CommentaryWorker] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.commentary = commentary
        self.rng = rng or random.Random()
        self._game: Optional[Game] = None
        self._recorded = False

    @property
    def game(self) -> Game:
        if self._game is None:
            raise GameStateError("No game started yet.")
        return self._game

    # -- Terminal actions ---
    def start_game(
        self, first_side: Side = Side.X, ai_enabled: bool = False, ai_side: Side = Side.O
    ) -> Game:
        self._game = Game.new_game(
            first_side=first_side, ai_enabled=ai_enabled, ai_side=ai_side
        )
        self._recorded = False
        return self._game

    def press(self, square: Square) -> str:
        """
        The 'select' key was pressed on `square`.
        ----

        * nothing selected yet --> select the piece
        * pressed the selected piece again --> deselect it
        * otherwise --> try to move there
        """
        game = self.game
        if game.phase != Phase.AWAITING_DESTINATION:
            return game.select_square(square)
        if square == game.selection and not game.in_capture_chain:
            return game.cancel_selection()
        moves_before = len(game.history)
        return self._after_action(game.choose_destination(square), moves_before)

    def cancel(self) -> str:
        return self.game.cancel_selection()

    def play_ai_turn(self) -> str:
        moves_before = len(self.game.history)
        return self._after_action(self.game.ai_take_turn(self.rng), moves_before)

    def poll_commentary(self) -> Optional[str]:
        """Hand a freshly arrived commentary line to the game (display only)."""
        if self.commentary is None:
            return None
        text = self.commentary.poll()
        if text is not None:
            self.game.attach_commentary(text)
        return text

    def recent_games(self, limit: int = 10) -> list[GameRecordModel]:
        try:
            return self.repo.list_records(limit)
        except SQLAlchemyError as error:
            raise RepositoryError(f"Could not load game records: {error}") from error

    def close(self) -> None:
        if self.commentary is not None:
            self.commentary.shutdown()

    # -- Internal helpers --
    def _after_action(self, message: str, moves_before: int) -> str:
        """A move may have ended the turn or the game: ask for commentary and store finished games."""
        game = self.game
        moved = len(game.history) > moves_before
        turn_ended = moved and game.phase != Phase.AWAITING_DESTINATION
        if turn_ended and self.commentary is not None:
            self.commentary.request(game.summary())

        if game.is_terminal and not self._recorded:
            self._record_game(game)
        return message

    def _record_game(self, game: Game) -> None:
        self._recorded = True
        try:
            _, record_id = self.repo.add_record(game.to_record())
        except SQLAlchemyError as error:
            raise RepositoryError(f"Could not store the finished game: {error}") from error
        logger.info("Stored finished game as record %s", record_id)
