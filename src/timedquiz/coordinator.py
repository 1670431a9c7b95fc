"""Race the quiz against the countdown and external interrupts."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from .countdown import CountdownTimer
from .interrupts import InterruptWatcher
from .models import Question, QuizOutcome
from .race import Race
from .runner import QuizRunner

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]

QUIZ_CHANNEL = "quiz"
TIMER_CHANNEL = "timer"
INTERRUPT_CHANNEL = "interrupt"
INTERRUPTED_LINE = "Program interrupted. Exiting..."


class QuizCoordinator:
    """Run one session and report the first deciding event.

    The runner and the countdown each get a daemon thread; the interrupt
    watcher hooks process signals. Whichever reports first decides the
    outcome, the shared cancel token is set, and later reports are dropped.
    """

    def __init__(
        self,
        questions: Sequence[Question],
        timeout_seconds: float,
        *,
        input_fn: InputFn = input,
        print_fn: PrintFn = print,
        interrupts: InterruptWatcher | None = None,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError(f"Timeout must be a positive number of seconds, got {timeout_seconds}.")
        self.questions = list(questions)
        self.timeout_seconds = timeout_seconds
        self._input = input_fn
        self._print = print_fn
        self._interrupts = interrupts

    def run(self) -> QuizOutcome:
        total = len(self.questions)
        if total == 0:
            logger.info("No questions to ask")
            return QuizOutcome.finished(0, 0)

        race = Race()
        quiz_channel = race.channel(QUIZ_CHANNEL)
        timer_channel = race.channel(TIMER_CHANNEL)
        interrupt_channel = race.channel(INTERRUPT_CHANNEL)
        watcher = self._interrupts if self._interrupts is not None else InterruptWatcher()

        started = time.monotonic()
        with watcher:
            watcher.subscribe(interrupt_channel)
            CountdownTimer(self.timeout_seconds, print_fn=self._print).start(race.token, timer_channel)
            QuizRunner(self.questions, input_fn=self._input, print_fn=self._print).start(race.token, quiz_channel)
            name, value = race.wait()

        logger.info("Session decided by '%s' after %.2fs", name, time.monotonic() - started)
        if name == QUIZ_CHANNEL:
            self._print("Quiz completed.")
            return QuizOutcome.finished(value, total)
        if name == TIMER_CHANNEL:
            self._print("Countdown completed.")
            return QuizOutcome.timed_out(total)
        self._print(INTERRUPTED_LINE)
        return QuizOutcome.interrupted(total)


def run_quiz(
    questions: Sequence[Question],
    timeout_seconds: float,
    *,
    input_fn: InputFn = input,
    print_fn: PrintFn = print,
    interrupts: InterruptWatcher | None = None,
) -> QuizOutcome:
    """Convenience wrapper around :class:`QuizCoordinator`."""
    coordinator = QuizCoordinator(
        questions,
        timeout_seconds,
        input_fn=input_fn,
        print_fn=print_fn,
        interrupts=interrupts,
    )
    return coordinator.run()
