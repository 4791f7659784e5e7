"""Unit tests for src/terminal/app.py (no real terminal: the screen is a Mock)"""

import curses
from unittest.mock import Mock
from uuid import UUID, uuid4

import pytest

from src.checkers.game import Phase
from src.checkers.pieces import Side
from src.checkers.square import Square
from src.core.config import Settings
from src.core.exceptions import RepositoryError
from src.core.models import GameRecordModel
from src.services.checkers_service import CheckersService
from src.terminal.app import ESCAPE_DELAY_MS, Cursor, draw, handle_key, run


class MockRepository:
    """Keeps the finished games in a list"""

    def __init__(self) -> None:
        self.records: list[GameRecordModel] = []

    def add_record(self, record: GameRecordModel) -> tuple[GameRecordModel, UUID]:
        self.records.append(record)
        return record, uuid4()

    def list_records(self, limit: int = 10) -> list[GameRecordModel]:
        return self.records[-limit:]


@pytest.fixture
def service() -> CheckersService:
    service = CheckersService(MockRepository())  # type: ignore[arg-type]
    service.start_game()
    return service


# --- CURSOR ---
def test_cursor_moves() -> None:
    cursor = Cursor(Square(3, 3))
    cursor.move(-1, 0)
    cursor.move(0, 1)
    assert cursor.square == Square(2, 4)


@pytest.mark.parametrize(
    "start, d_row, d_col",
    [(Square(0, 3), -1, 0), (Square(7, 3), 1, 0), (Square(3, 0), 0, -1), (Square(3, 7), 0, 1)],
)
def test_cursor_stays_on_the_board(start: Square, d_row: int, d_col: int) -> None:
    cursor = Cursor(start)
    cursor.move(d_row, d_col)
    assert cursor.square == start


def test_cursor_jumps_to_first_piece(service: CheckersService) -> None:
    cursor = Cursor()
    cursor.jump_to_first_piece(service)
    assert cursor.square == Square(5, 0)


# --- KEYS ---
def test_arrow_keys(service: CheckersService) -> None:
    cursor = Cursor(Square(5, 0))
    assert handle_key(curses.KEY_UP, service, cursor)
    assert handle_key(curses.KEY_RIGHT, service, cursor)
    assert cursor.square == Square(4, 1)


def test_select_and_move(service: CheckersService) -> None:
    cursor = Cursor(Square(5, 0))
    handle_key(ord(" "), service, cursor)
    assert service.game.phase == Phase.AWAITING_DESTINATION
    cursor.move(-1, 1)
    handle_key(ord("\n"), service, cursor)
    assert service.game.current_side == Side.O


def test_cancel_key(service: CheckersService) -> None:
    cursor = Cursor(Square(5, 0))
    handle_key(ord(" "), service, cursor)
    handle_key(ord("c"), service, cursor)
    assert service.game.selection is None


@pytest.mark.parametrize("key", [27, ord("q")])
def test_quit_keys(service: CheckersService, key: int) -> None:
    assert not handle_key(key, service, Cursor())


def test_unknown_key_is_ignored(service: CheckersService) -> None:
    cursor = Cursor(Square(5, 0))
    assert handle_key(ord("z"), service, cursor)
    assert cursor.square == Square(5, 0)
    assert service.game.phase == Phase.AWAITING_SELECTION


def test_storage_failure_does_not_crash(service: CheckersService) -> None:
    service.press = Mock(side_effect=RepositoryError("disk full"))  # type: ignore[method-assign]
    assert handle_key(ord(" "), service, Cursor())
    assert service.game.message.endswith("(could not save the game record)")


# --- SCREEN ---
def test_draw(service: CheckersService) -> None:
    screen = Mock()
    draw(screen, service, Cursor())
    screen.erase.assert_called_once()
    screen.refresh.assert_called_once()
    first_line = screen.addstr.call_args_list[0].args
    assert first_line == (0, 0, "Current player: X")


def test_draw_survives_small_terminals(service: CheckersService) -> None:
    screen = Mock()
    screen.addstr.side_effect = curses.error
    draw(screen, service, Cursor())
    screen.refresh.assert_called_once()


def test_run_until_quit(service: CheckersService, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(curses, "curs_set", Mock())
    monkeypatch.setattr(curses, "set_escdelay", Mock())
    screen = Mock()
    # no key yet, then select a3, move the cursor to b4, move there, and quit
    screen.getch.side_effect = [-1, ord(" "), curses.KEY_UP, curses.KEY_RIGHT, ord(" "), ord("q")]
    run(screen, service, Settings(ai_delay=0))
    assert service.game.history[0].to_notation() == "a3-b4"
    assert service.game.current_side == Side.O


def test_run_plays_the_computer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(curses, "curs_set", Mock())
    monkeypatch.setattr(curses, "set_escdelay", Mock())
    service = CheckersService(MockRepository())  # type: ignore[arg-type]
    service.start_game(first_side=Side.O, ai_enabled=True)
    screen = Mock()
    screen.getch.side_effect = [ord("q")]
    run(screen, service, Settings(ai_delay=0))
    assert len(service.game.history) == 1
    assert service.game.current_side == Side.X


def test_escape_quits_without_delay(service: CheckersService, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(curses, "curs_set", Mock())
    set_escdelay = Mock()
    monkeypatch.setattr(curses, "set_escdelay", set_escdelay)
    screen = Mock()
    screen.getch.side_effect = [27]
    run(screen, service, Settings(ai_delay=0))
    set_escdelay.assert_called_once_with(ESCAPE_DELAY_MS)
    assert ESCAPE_DELAY_MS < 100
