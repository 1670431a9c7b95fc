from __future__ import annotations

import signal
import sys
import threading
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from timedquiz.interrupts import InterruptWatcher  # noqa: E402
from timedquiz.race import OneShot  # noqa: E402

# Longest a scripted input may block before giving up, so abandoned
# runner threads do not outlive the test session by much.
BLOCK_LIMIT_SECONDS = 5.0


class ScriptedInput:
    """Input function that replays answers, then blocks like an idle user."""

    def __init__(self, answers: Iterable[str], on_read: Callable[[int], None] | None = None) -> None:
        self._answers = list(answers)
        self._on_read = on_read
        self.prompts: list[str] = []
        self.release = threading.Event()

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        index = len(self.prompts) - 1
        if self._on_read is not None:
            self._on_read(index)
        if index < len(self._answers):
            return self._answers[index]
        self.release.wait(BLOCK_LIMIT_SECONDS)
        raise EOFError


class ManualWatcher(InterruptWatcher):
    """Interrupt watcher that never touches process signals; tests fire it by hand."""

    def __init__(self) -> None:
        super().__init__(signals=())
        self.channel: OneShot | None = None
        self.restored = False

    def subscribe(self, channel: OneShot) -> bool:
        self.channel = channel
        return True

    def restore(self) -> None:
        self.restored = True

    def fire(self) -> None:
        assert self.channel is not None
        self.channel.send(signal.SIGINT)


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    def _write(text: str, name: str = "problems.csv") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def scripted_input() -> Iterator[Callable[..., ScriptedInput]]:
    created: list[ScriptedInput] = []

    def _make(answers: Iterable[str], on_read: Callable[[int], None] | None = None) -> ScriptedInput:
        fake = ScriptedInput(answers, on_read)
        created.append(fake)
        return fake

    yield _make
    for fake in created:
        fake.release.set()


@pytest.fixture
def manual_watcher() -> ManualWatcher:
    return ManualWatcher()
