"""Session-wide countdown."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from .race import CancelToken, OneShot

logger = logging.getLogger(__name__)

PrintFn = Callable[[str], None]


class CountdownTimer:
    """Signal expiry once after a fixed number of seconds."""

    def __init__(self, seconds: float, print_fn: PrintFn = print) -> None:
        if seconds <= 0:
            raise ValueError(f"Countdown must be positive, got {seconds}.")
        self.seconds = seconds
        self._print = print_fn

    def run(self, token: CancelToken, channel: OneShot) -> bool:
        """Wait out the countdown. Returns True if expiry was signalled."""
        if token.wait(self.seconds):
            logger.debug("Countdown cancelled before expiry")
            return False
        logger.info("Countdown of %s seconds expired", self.seconds)
        return channel.send()

    def start(self, token: CancelToken, channel: OneShot) -> threading.Thread:
        """Announce the countdown and run it in a daemon thread."""
        self._print(f"Countdown started: {self.seconds} seconds")
        thread = threading.Thread(target=self.run, args=(token, channel), name="quiz-countdown", daemon=True)
        thread.start()
        return thread
