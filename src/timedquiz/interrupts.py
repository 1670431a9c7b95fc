"""Turn interrupt and terminate signals into a race event."""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from types import FrameType, TracebackType
from typing import Any

from .race import OneShot

logger = logging.getLogger(__name__)


def default_signals() -> tuple[signal.Signals, ...]:
    """Interrupt and terminate, where the platform has them."""
    names = ("SIGINT", "SIGTERM")
    return tuple(getattr(signal, name) for name in names if hasattr(signal, name))


@contextmanager
def terminate_as_interrupt() -> Iterator[None]:
    """Make SIGTERM raise KeyboardInterrupt, like SIGINT, inside the block.

    Used around blocking reads outside a session, where there is no race to
    report to. Does nothing off the main thread or without SIGTERM.
    """
    sigterm = getattr(signal, "SIGTERM", None)
    if sigterm is None or threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(sigterm, signal.default_int_handler)
    try:
        yield
    finally:
        signal.signal(sigterm, previous if previous is not None else signal.SIG_DFL)


class InterruptWatcher:
    """Send one event on the first interrupt or terminate request.

    Handlers can only be installed from the main thread. Elsewhere the
    watcher stays inert and the session simply cannot be interrupted.
    """

    def __init__(self, signals: Iterable[signal.Signals] | None = None) -> None:
        self.signals = tuple(signals) if signals is not None else default_signals()
        self._channel: OneShot | None = None
        self._previous: dict[signal.Signals, Any] = {}
        self.received: signal.Signals | None = None

    @property
    def active(self) -> bool:
        return bool(self._previous)

    def subscribe(self, channel: OneShot) -> bool:
        """Install handlers feeding ``channel``. Returns False if nothing was installed."""
        if threading.current_thread() is not threading.main_thread():
            logger.warning("Interrupt handling is only available on the main thread")
            return False
        self._channel = channel
        for signum in self.signals:
            try:
                self._previous[signum] = signal.signal(signum, self._handle)
            except (OSError, ValueError) as exc:
                logger.warning("Cannot watch %s: %s", signum, exc)
        return self.active

    def restore(self) -> None:
        """Put back the handlers that were active before ``subscribe``."""
        for signum, previous in self._previous.items():
            signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous.clear()
        self._channel = None

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        if self.received is None:
            self.received = signal.Signals(signum)
        if self._channel is not None:
            self._channel.send(signum)

    def __enter__(self) -> InterruptWatcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.restore()
