"""Sequential question loop that reads one answer per question."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence

from .models import Question
from .race import CancelToken, OneShot

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
ANSWER_PROMPT = "Enter text: "
RUNNER_THREAD_NAME = "quiz-runner"


class QuizRunner:
    """Ask every question in order and count exact matches."""

    def __init__(self, questions: Sequence[Question], input_fn: InputFn = input, print_fn: PrintFn = print) -> None:
        self.questions = list(questions)
        self._input = input_fn
        self._print = print_fn

    def run(self, token: CancelToken | None = None) -> int | None:
        """Return the number of correct answers, or None if cancelled mid-way."""
        correct = 0
        for index, question in enumerate(self.questions, start=1):
            if token is not None and token.cancelled:
                logger.debug("Runner cancelled before question %d", index)
                return None
            self._print(f"{question.prompt} ?")
            answer = self._read_answer(index)
            if answer is not None and answer == question.answer:
                correct += 1
        return correct

    def start(self, token: CancelToken, channel: OneShot) -> threading.Thread:
        """Run the loop in a daemon thread and send the count on ``channel``."""
        thread = threading.Thread(
            target=self._run_and_report, args=(token, channel), name=RUNNER_THREAD_NAME, daemon=True
        )
        thread.start()
        return thread

    def _run_and_report(self, token: CancelToken, channel: OneShot) -> None:
        result = self.run(token)
        if result is not None:
            channel.send(result)

    def _read_answer(self, index: int) -> str | None:
        """Read one answer; None means the read failed and nothing can match."""
        try:
            raw = self._input(ANSWER_PROMPT)
        except (EOFError, OSError) as exc:
            logger.debug("Could not read answer for question %d: %r", index, exc)
            return None
        return raw.removesuffix("\n")
