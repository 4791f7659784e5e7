"""
The Game class is the entrypoint into the domain layer for the service and terminal layers.
It owns the board and runs the turn state machine:

AWAITING_SELECTION --select own piece--> AWAITING_DESTINATION --legal destination--> (next side's) AWAITING_SELECTION
                                                               --capture with more captures--> AWAITING_DESTINATION (same side)
any side that has no legal move on its turn --> TERMINAL (the other side wins)

Rule violations (wrong piece, no moves, invalid destination, acting out of turn) are never fatal:
the public actions revert to a safe state and hand back a status message.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional, Self

from src.checkers.ai import choose_move, continue_chain
from src.checkers.board import Board
from src.checkers.moves import (
    Move,
    PlayedMove,
    capture_moves_from,
    has_any_legal_move,
    legal_moves_from,
    promotion_row,
)
from src.checkers.pieces import AVAILABLE_SIDE_NAMES, Piece, Side
from src.checkers.square import Square, assert_within_bounds
from src.core.exceptions import (
    CaptureChainError,
    GameOverError,
    GameStateError,
    InvalidDestinationError,
    NoLegalMovesError,
    NotYourPieceError,
    NotYourTurnError,
    RuleViolationError,
)
from src.core.models import GameRecordModel, GameSummary
from src.core.shared_types import SideName, Status

logger = logging.getLogger(__name__)

# The commentary service is a black box that turns a summary into a line of text.
FetchCommentary = Callable[[GameSummary], str]

SELECT_OWN_PIECE = "Select one of your own pieces"
NO_POSSIBLE_MOVES = "This piece has no possible moves"
INVALID_DESTINATION = "Invalid move, piece unselected"
ANOTHER_CAPTURE = "You can make another capture"
MUST_CONTINUE_CAPTURE = "You must continue capturing with the same piece"
SELECTION_CLEARED = "Selection cleared"
NOTHING_SELECTED = "No piece selected"
WAIT_FOR_COMPUTER = "Wait for the computer to move"
NOT_COMPUTER_TURN = "It is not the computer's turn"
GAME_IS_OVER = "The game is over"


class Phase(Enum):
    AWAITING_SELECTION = auto()
    AWAITING_DESTINATION = auto()
    TERMINAL = auto()


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE / TERMINAL ---

    board: Board
    current_side: Side
    first_side: Side = Side.X
    ai_side: Optional[Side] = None
    phase: Phase = Phase.AWAITING_SELECTION
    selection: Optional[Square] = None
    legal_moves: list[Move] = field(default_factory=list)
    in_capture_chain: bool = False
    round_number: int = 1
    winner: Optional[Side] = None
    history: list[PlayedMove] = field(default_factory=list)
    commentary: Optional[str] = None
    message: str = ""

    @classmethod
    def new_game(
        cls,
        first_side: Side = Side.X,
        ai_enabled: bool = False,
        ai_side: Side = Side.O,
        board: Optional[Board] = None,
    ) -> Self:
        """
        Start a game with `first_side` to move in round 1.

        With `ai_enabled`, the computer plays `ai_side`. A custom `board` can be supplied (handy for puzzles and tests),
        otherwise the regular starting layout is used.
        """
        for side in (first_side, ai_side):
            if side.name not in AVAILABLE_SIDE_NAMES:
                raise GameStateError(
                    f"Cannot create new game. Side {side.name} not in {','.join(AVAILABLE_SIDE_NAMES)}."
                )

        game = cls(
            board=board if board is not None else Board.initial_layout(),
            current_side=first_side,
            first_side=first_side,
            ai_side=ai_side if ai_enabled else None,
        )
        logger.info(
            "New game: %s moves first, computer plays %s",
            first_side.name,
            game.ai_side.name if game.ai_side else "nobody",
        )
        game._enter_turn()
        return game

    @property
    def is_terminal(self) -> bool:
        return self.phase == Phase.TERMINAL

    @property
    def is_ai_turn(self) -> bool:
        return not self.is_terminal and self.current_side == self.ai_side

    def cell_at(self, square: Square) -> Piece:
        """Read-only access for rendering."""
        return self.board.get(square)

    def select_square(self, square: Square) -> str:
        """
        Pick the piece to move.
        ----

        1. Must be your turn (and the game still running)
        2. While a capture chain is running, the capturing piece stays selected
        3. The square must hold one of your own pieces
        4. That piece must have at least one legal move
        """
        assert_within_bounds(square)
        try:
            self._assert_human_may_act()
            if self.in_capture_chain:
                raise CaptureChainError(MUST_CONTINUE_CAPTURE)

            # picking another piece simply replaces the previous selection
            self._clear_selection()

            if not self.board.get(square).belongs_to(self.current_side):
                raise NotYourPieceError(SELECT_OWN_PIECE)

            moves = legal_moves_from(self.board, square, self.current_side)
            if not moves:
                raise NoLegalMovesError(NO_POSSIBLE_MOVES)

        except RuleViolationError as error:
            return self._report(str(error))

        self.selection = square
        self.legal_moves = moves
        self.phase = Phase.AWAITING_DESTINATION
        logger.debug(
            "%s selected %s with %d move(s)",
            self.current_side.name,
            square.to_algebraic(),
            len(moves),
        )
        return self._report(
            f"Selected {square.to_algebraic()}. Choose a destination"
        )

    def choose_destination(self, square: Square) -> str:
        """
        Move the selected piece.
        ----

        An illegal destination clears the selection, except during a capture chain:
        then the piece stays selected until it has no capture left.
        """
        assert_within_bounds(square)
        try:
            self._assert_human_may_act()
            if self.phase != Phase.AWAITING_DESTINATION or self.selection is None:
                raise InvalidDestinationError(NOTHING_SELECTED)

            move = self._find_move(square)
            if move is None:
                if self.in_capture_chain:
                    raise CaptureChainError(MUST_CONTINUE_CAPTURE)
                self._clear_selection()
                raise InvalidDestinationError(INVALID_DESTINATION)

        except RuleViolationError as error:
            return self._report(str(error))

        origin = self.selection
        self._apply_move(origin, move)
        return self._continue_or_pass_turn(move)

    def cancel_selection(self) -> str:
        """Drop the selected piece. Not possible halfway a capture chain."""
        try:
            self._assert_human_may_act()
            if self.in_capture_chain:
                raise CaptureChainError(MUST_CONTINUE_CAPTURE)
        except RuleViolationError as error:
            return self._report(str(error))

        if self.phase != Phase.AWAITING_DESTINATION:
            return self._report(NOTHING_SELECTED)
        self._clear_selection()
        return self._report(SELECTION_CLEARED)

    def ai_take_turn(self, rng: random.Random) -> str:
        """
        Let the computer play its full turn: one move, then every forced continuation capture.

        Synchronous: any artificial 'thinking time' is up to the caller.
        """
        try:
            if self.is_terminal:
                raise GameOverError(GAME_IS_OVER)
            if not self.is_ai_turn:
                raise NotYourTurnError(NOT_COMPUTER_TURN)
        except RuleViolationError as error:
            return self._report(str(error))

        self._clear_selection()
        played = choose_move(self.board, self.current_side, rng)
        if played is None:
            # A side without moves is already caught when its turn starts. Just in case the board was edited since.
            return self._enter_turn()

        self._apply_move(played.origin, played.move)
        square = played.move.destination
        if played.move.is_capture:
            next_move = continue_chain(self.board, square, self.current_side, rng)
            while next_move is not None:
                self._apply_move(square, next_move)
                square = next_move.destination
                next_move = continue_chain(self.board, square, self.current_side, rng)

        return self._pass_turn()

    def attach_commentary(self, text: str) -> None:
        """Display-only. Never touches the board or the turn state."""
        self.commentary = text

    def status(self) -> Status:
        if self.winner == Side.X:
            return Status.X_WINS
        if self.winner == Side.O:
            return Status.O_WINS
        return Status.IN_PROGRESS

    def summary(self) -> GameSummary:
        """Encode into the format the commentary service uses"""
        return GameSummary(
            round_number=self.round_number,
            side_to_move=_side_name(self.current_side),
            status=self.status(),
            pieces_left={
                _side_name(side): count
                for side, count in self.board.count_pieces().items()
            },
            last_move=self.history[-1].to_notation() if self.history else None,
            ai_side=_side_name(self.ai_side) if self.ai_side else None,
            winner=_side_name(self.winner) if self.winner else None,
        )

    def to_record(self) -> GameRecordModel:
        """Encode into the format the repository stores"""
        return GameRecordModel(
            first_side=_side_name(self.first_side),
            winner=_side_name(self.winner) if self.winner else None,
            rounds=self.round_number,
            moves=[played.to_notation() for played in self.history],
            final_board=self.board.to_rows(),
            ai_side=_side_name(self.ai_side) if self.ai_side else None,
            commentary=self.commentary,
        )

    # -- PRIVATE HELPERS ---
    def _assert_human_may_act(self) -> None:
        if self.is_terminal:
            raise GameOverError(GAME_IS_OVER)
        if self.is_ai_turn:
            raise NotYourTurnError(WAIT_FOR_COMPUTER)

    def _find_move(self, destination: Square) -> Optional[Move]:
        return next(
            (move for move in self.legal_moves if move.destination == destination),
            None,
        )

    def _clear_selection(self) -> None:
        self.selection = None
        self.legal_moves = []
        self.in_capture_chain = False
        if not self.is_terminal:
            self.phase = Phase.AWAITING_SELECTION

    def _report(self, message: str) -> str:
        self.message = message
        return message

    def _apply_move(self, origin: Square, move: Move) -> None:
        """
        Update the board
        ----

        1. relocate the piece
        2. remove the captured piece (if any)
        3. promote a man reaching the far edge, also when it arrives there halfway a capture chain
        4. add the move to the history
        """
        self.board.move_piece(origin, move.destination)
        if move.is_capture:
            # for the type checker: captures always carry the captured square
            assert move.captured_square is not None
            self.board.remove_piece(move.captured_square)

        if self._is_promotion(move.destination):
            self.board.promote_piece(move.destination)
            logger.debug("%s crowned on %s", self.current_side.name, move.destination.to_algebraic())

        played = PlayedMove(origin, move)
        self.history.append(played)
        logger.debug("Round %d: %s played %s", self.round_number, self.current_side.name, played.to_notation())

    def _is_promotion(self, square: Square) -> bool:
        piece = self.board.get(square)
        return not piece.is_king and square.row == promotion_row(self.current_side)

    def _continue_or_pass_turn(self, move: Move) -> str:
        """After a capture, the same piece keeps the turn for as long as it can capture again."""
        if move.is_capture:
            continuation = capture_moves_from(
                self.board, move.destination, self.current_side
            )
            if continuation:
                self.selection = move.destination
                self.legal_moves = continuation
                self.in_capture_chain = True
                self.phase = Phase.AWAITING_DESTINATION
                return self._report(ANOTHER_CAPTURE)
        return self._pass_turn()

    def _pass_turn(self) -> str:
        self._clear_selection()
        self.current_side = self.current_side.opponent
        self.round_number += 1
        return self._enter_turn()

    def _enter_turn(self) -> str:
        """A side that cannot move on its turn has lost."""
        if not has_any_legal_move(self.board, self.current_side):
            self.phase = Phase.TERMINAL
            self.winner = self.current_side.opponent
            logger.info(
                "Game over after %d rounds: %s wins", self.round_number, self.winner.name
            )
            return self._report(
                f"Player {self.winner.name} wins. Congratulations!"
            )

        self.phase = Phase.AWAITING_SELECTION
        return self._report(
            f"Turn {self.round_number}: Player {self.current_side.name} to move"
        )


def _side_name(side: Side) -> SideName:
    return SideName(side.name.lower())
