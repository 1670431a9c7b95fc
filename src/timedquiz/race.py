"""First-result-wins race between independent threads.

Each contender gets a :class:`OneShot` channel from a :class:`Race`. The first
value sent on any channel decides the race; everything sent afterwards is
dropped. Sends never block, so an abandoned contender can always finish (or
be killed with the process, since contenders run as daemon threads).
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any

logger = logging.getLogger(__name__)

# Upper bound on how long Race.wait sits in one blocking get. Keeps the main
# thread returning to the interpreter so pending signal handlers run.
POLL_INTERVAL_SECONDS = 0.1


class CancelToken:
    """Shared flag telling losing contenders to stop where they can."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return True if cancelled."""
        return self._event.wait(timeout)


class OneShot:
    """Single-value channel into a race.

    ``send`` is safe to call from a signal handler: it only touches a
    ``SimpleQueue``, whose ``put`` is reentrant.
    """

    def __init__(self, name: str, sink: queue.SimpleQueue[tuple[str, Any]]) -> None:
        self.name = name
        self._sink = sink
        self._sent = False

    @property
    def sent(self) -> bool:
        return self._sent

    def send(self, value: Any = None) -> bool:
        """Deliver ``value`` once. Returns False for every send after the first."""
        if self._sent:
            return False
        self._sent = True
        self._sink.put((self.name, value))
        return True


class Race:
    """Wait for whichever channel fires first."""

    def __init__(self) -> None:
        self.token = CancelToken()
        self._events: queue.SimpleQueue[tuple[str, Any]] = queue.SimpleQueue()
        self._channels: dict[str, OneShot] = {}
        self._winner: tuple[str, Any] | None = None

    def channel(self, name: str) -> OneShot:
        """Create the channel for one contender."""
        if name in self._channels:
            raise ValueError(f"Channel '{name}' already exists in this race.")
        channel = OneShot(name, self._events)
        self._channels[name] = channel
        return channel

    @property
    def decided(self) -> bool:
        return self._winner is not None

    def wait(self, timeout: float | None = None) -> tuple[str, Any]:
        """Block until the first channel fires and return ``(name, value)``.

        Cancels the token before returning. Calling ``wait`` again returns the
        same winner. Raises ``TimeoutError`` if ``timeout`` passes first.
        """
        if self._winner is not None:
            return self._winner
        remaining = timeout
        while True:
            slice_seconds = POLL_INTERVAL_SECONDS if remaining is None else min(POLL_INTERVAL_SECONDS, remaining)
            try:
                winner = self._events.get(timeout=slice_seconds)
            except queue.Empty:
                if remaining is not None:
                    remaining -= slice_seconds
                    if remaining <= 0:
                        raise TimeoutError("No contender finished before the wait timeout.") from None
                continue
            break
        self._winner = winner
        self.token.cancel()
        logger.debug("Race decided by '%s'", winner[0])
        return winner
