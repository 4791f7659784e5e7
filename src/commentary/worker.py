"""
Runs commentary requests in the background.

The game loop never waits for the service: it submits a summary and later polls for the result.
Only the newest request matters, older ones that have not started yet get cancelled.
Requests run one at a time on a daemon thread, so a slow service never holds up quitting.
"""

import logging
import queue
import threading
from concurrent.futures import Future
from typing import Optional

from src.checkers.game import FetchCommentary
from src.core.models import GameSummary

logger = logging.getLogger(__name__)

Job = tuple[Future[str], GameSummary]


class CommentaryWorker:
    def __init__(self, fetch: FetchCommentary) -> None:
        self.fetch = fetch
        self._jobs: queue.SimpleQueue[Optional[Job]] = queue.SimpleQueue()
        self._pending: Optional[Future[str]] = None
        self._closed = False
        self._thread = threading.Thread(
            target=self._work, name="commentary", daemon=True
        )
        self._thread.start()

    @property
    def is_busy(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def request(self, summary: GameSummary) -> Future[str]:
        if self._closed:
            raise RuntimeError("Cannot request commentary after shutdown.")
        if self._pending is not None and self._pending.cancel():
            logger.debug("Dropped a commentary request that had not started yet")
        future: Future[str] = Future()
        self._jobs.put((future, summary))
        self._pending = future
        return future

    def poll(self) -> Optional[str]:
        """The commentary text once it has arrived, otherwise None. Each result is handed out once."""
        future = self._pending
        if future is None or not future.done():
            return None

        self._pending = None
        if future.cancelled():
            return None
        error = future.exception()
        if error is not None:
            logger.warning("Commentary request failed: %s", error)
            return None
        return future.result()

    def shutdown(self) -> None:
        """Quit is immediate: a request still talking to the service is abandoned, not awaited."""
        self._closed = True
        if self._pending is not None:
            self._pending.cancel()
        self._jobs.put(None)

    def _work(self) -> None:
        while True:
            job = self._jobs.get()
            if job is None:
                return
            future, summary = job
            if not future.set_running_or_notify_cancel():
                continue
            try:
                text = self.fetch(summary)
            except Exception as error:
                # handed to whoever polls the future
                future.set_exception(error)
            else:
                future.set_result(text)
