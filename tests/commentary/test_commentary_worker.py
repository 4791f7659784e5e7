"""Unit tests for src/commentary/worker.py"""

import subprocess
import sys
import textwrap
import threading
import time
from pathlib import Path
from typing import Generator, Optional

import pytest

from src.commentary.worker import CommentaryWorker
from src.core.models import GameSummary

SUMMARY = GameSummary(
    round_number=3, side_to_move="o", status="in progress", pieces_left={"x": 12, "o": 11}
)


def wait_for(worker: CommentaryWorker, timeout: float = 2.0) -> Optional[str]:
    """Poll the way the game loop does, until something arrives."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        result = worker.poll()
        if result is not None:
            return result
        time.sleep(0.01)
    return None


@pytest.fixture
def echo_worker() -> Generator[CommentaryWorker, None, None]:
    worker = CommentaryWorker(lambda summary: f"round {summary.round_number}")
    try:
        yield worker
    finally:
        worker.shutdown()


def test_nothing_to_poll(echo_worker: CommentaryWorker) -> None:
    assert echo_worker.poll() is None
    assert not echo_worker.is_busy


def test_result_arrives(echo_worker: CommentaryWorker) -> None:
    echo_worker.request(SUMMARY)
    assert wait_for(echo_worker) == "round 3"
    # handed out once
    assert echo_worker.poll() is None


def test_poll_does_not_block() -> None:
    release = threading.Event()

    def slow_fetch(summary: GameSummary) -> str:
        release.wait(timeout=2.0)
        return "finally"

    worker = CommentaryWorker(slow_fetch)
    try:
        worker.request(SUMMARY)
        assert worker.poll() is None
        assert worker.is_busy
        release.set()
        assert wait_for(worker) == "finally"
    finally:
        release.set()
        worker.shutdown()


def test_newest_request_wins() -> None:
    release = threading.Event()

    def fetch(summary: GameSummary) -> str:
        release.wait(timeout=2.0)
        return f"round {summary.round_number}"

    worker = CommentaryWorker(fetch)
    try:
        worker.request(SUMMARY)
        # the first request occupies the only thread, so the second one is cancelled by the third
        worker.request(GameSummary(4, "x", "in progress", {"x": 12, "o": 11}))
        latest = worker.request(GameSummary(5, "o", "in progress", {"x": 11, "o": 11}))
        release.set()
        assert latest.result(timeout=2.0) == "round 5"
        assert wait_for(worker) == "round 5"
    finally:
        release.set()
        worker.shutdown()


def test_failure_is_absorbed() -> None:
    def broken_fetch(summary: GameSummary) -> str:
        raise RuntimeError("service exploded")

    worker = CommentaryWorker(broken_fetch)
    try:
        future = worker.request(SUMMARY)
        with pytest.raises(RuntimeError):
            future.result(timeout=2.0)
        assert worker.poll() is None
        assert not worker.is_busy
    finally:
        worker.shutdown()


def test_shutdown_refuses_new_work(echo_worker: CommentaryWorker) -> None:
    echo_worker.shutdown()
    with pytest.raises(RuntimeError):
        echo_worker.request(SUMMARY)


def test_quitting_does_not_wait_for_a_slow_service() -> None:
    """A fresh interpreter with a request stuck in the service has to exit right after shutdown()."""
    script = textwrap.dedent(
        """
        import time
        from src.commentary.worker import CommentaryWorker
        from src.core.models import GameSummary

        worker = CommentaryWorker(lambda summary: (time.sleep(5), "too late")[1])
        worker.request(GameSummary(1, "x", "in progress", {"x": 12, "o": 12}))
        time.sleep(0.2)
        worker.shutdown()
        """
    )
    project_root = Path(__file__).resolve().parents[2]
    start = time.monotonic()
    subprocess.run(
        [sys.executable, "-c", script], cwd=project_root, check=True, timeout=10
    )
    assert time.monotonic() - start < 3.0
