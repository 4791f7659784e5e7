"""Curses front-end: draws the game, moves the cursor and forwards the keys to the service."""

import curses
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from src.checkers.square import Square
from src.core.config import Settings
from src.core.exceptions import RepositoryError
from src.services.checkers_service import CheckersService
from src.terminal.render import render_game

logger = logging.getLogger(__name__)

# getch() gives up after this many milliseconds, so commentary that arrives gets drawn without a key press
POLL_INTERVAL_MS = 100
# curses holds back a bare ESC for ESCDELAY ms (default 1000) to tell it apart from escape sequences
ESCAPE_DELAY_MS = 25

KEY_ESCAPE = 27
SELECT_KEYS = (ord(" "), ord("\n"), ord("\r"), curses.KEY_ENTER)
CANCEL_KEYS = (ord("c"), curses.KEY_BACKSPACE, 127)
QUIT_KEYS = (KEY_ESCAPE, ord("q"))
CURSOR_KEYS: dict[int, tuple[int, int]] = {
    curses.KEY_UP: (-1, 0),
    curses.KEY_DOWN: (1, 0),
    curses.KEY_LEFT: (0, -1),
    curses.KEY_RIGHT: (0, 1),
}


@dataclass
class Cursor:
    square: Square = field(default_factory=lambda: Square(0, 1))

    def move(self, d_row: int, d_col: int) -> None:
        """Stays put at the edges of the board"""
        target = self.square.offset(d_row, d_col)
        if target.is_within_bounds():
            self.square = target

    def jump_to_first_piece(self, service: CheckersService) -> None:
        """At the start of a turn, put the cursor on the first piece of the side to move."""
        game = service.game
        own_pieces = game.board.locate_side(game.current_side)
        if own_pieces:
            self.square = own_pieces[0]


def safe_addstr(win: "curses.window", y: int, x: int, text: str) -> None:
    """addstr that silently ignores curses errors at screen edges."""
    try:
        win.addstr(y, x, text)
    except curses.error:
        pass


def draw(stdscr: "curses.window", service: CheckersService, cursor: Cursor) -> None:
    stdscr.erase()
    for y, line in enumerate(render_game(service.game, cursor.square)):
        safe_addstr(stdscr, y, 0, line)
    stdscr.refresh()


def handle_key(key: int, service: CheckersService, cursor: Cursor) -> bool:
    """Returns False when the player wants to quit."""
    if key in QUIT_KEYS:
        return False
    if key in CURSOR_KEYS:
        cursor.move(*CURSOR_KEYS[key])
    elif key in SELECT_KEYS:
        _guard_repository(service, lambda: service.press(cursor.square))
    elif key in CANCEL_KEYS:
        service.cancel()
    return True


def run(stdscr: "curses.window", service: CheckersService, settings: Settings) -> None:
    """Main loop. Ends on a quit key, or on any key once the game is over."""
    curses.curs_set(0)
    curses.set_escdelay(ESCAPE_DELAY_MS)
    stdscr.keypad(True)
    stdscr.timeout(POLL_INTERVAL_MS)

    cursor = Cursor()
    cursor.jump_to_first_piece(service)
    last_round = service.game.round_number

    while True:
        service.poll_commentary()
        game = service.game
        if game.round_number != last_round:
            last_round = game.round_number
            cursor.jump_to_first_piece(service)
        draw(stdscr, service, cursor)

        if game.is_ai_turn:
            # cosmetic 'thinking time', the move itself is computed in one go
            time.sleep(settings.ai_delay)
            _guard_repository(service, service.play_ai_turn)
            continue

        key = stdscr.getch()
        if key == -1:
            continue
        if game.is_terminal:
            break
        if not handle_key(key, service, cursor):
            logger.info("Player quit in round %d", game.round_number)
            break


def _guard_repository(service: CheckersService, action: Callable[[], str]) -> None:
    """Failing to store a finished game should not crash the session."""
    try:
        action()
    except RepositoryError as error:
        logger.error("%s", error)
        service.game.message = f"{service.game.message} (could not save the game record)"

