"""CLI entrypoint for the timed terminal quiz."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import threading
from collections.abc import Callable, Sequence
from pathlib import Path

from . import __version__
from .coordinator import INTERRUPTED_LINE, QuizCoordinator
from .interrupts import InterruptWatcher, terminate_as_interrupt
from .logging_config import configure_logging, default_log_level
from .models import DEFAULT_FILE_PATH, DEFAULT_TIMEOUT_SECONDS, QuizOutcome, SessionConfig
from .question_source import QuestionSourceError, load_questions, make_rng, shuffle_questions
from .runner import RUNNER_THREAD_NAME

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
START_PROMPT = "Please press enter to start the quiz."
TIMEOUT_MESSAGE = "Didn't finish the quiz in time! Please try again or set a longer timer."
EXIT_STARTUP_ERROR = 1


def _positive_int(text: str) -> int:
    """argparse type for whole seconds greater than zero."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number of seconds, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="timedquiz", description="Timed question-and-answer quiz from a CSV file")
    parser.add_argument(
        "-filePath",
        "--filePath",
        "--file-path",
        dest="file_path",
        type=Path,
        default=DEFAULT_FILE_PATH,
        help=f"CSV file with prompt,answer rows (default: {DEFAULT_FILE_PATH})",
    )
    parser.add_argument(
        "-timeOut",
        "--timeOut",
        "--timeout",
        dest="timeout_seconds",
        type=_positive_int,
        default=DEFAULT_TIMEOUT_SECONDS,
        help=f"seconds allowed for the whole quiz (default: {DEFAULT_TIMEOUT_SECONDS})",
    )
    parser.add_argument(
        "-shuffle",
        "--shuffle",
        dest="shuffle",
        action="store_true",
        help="present the questions in random order",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for --shuffle (default: current time)")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"diagnostic log level on stderr (default: {default_log_level()})",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_config(argv: Sequence[str] | None = None) -> tuple[SessionConfig, str | None]:
    """Parse CLI options into a session config and an optional log level."""
    args = build_parser().parse_args(argv)
    config = SessionConfig(
        file_path=args.file_path,
        timeout_seconds=args.timeout_seconds,
        shuffle=args.shuffle,
        seed=args.seed,
    )
    return config, args.log_level


def run(
    argv: Sequence[str] | None = None,
    input_fn: InputFn = input,
    print_fn: PrintFn = print,
    interrupts: InterruptWatcher | None = None,
) -> int:
    """Run one quiz session and return the process exit code."""
    config, log_level = parse_config(argv)
    configure_logging(log_level)

    try:
        questions = load_questions(config.file_path)
    except QuestionSourceError as exc:
        logger.error("%s", exc)
        print_fn(str(exc))
        return EXIT_STARTUP_ERROR

    if config.shuffle:
        questions = shuffle_questions(questions, make_rng(config.seed))

    if questions:
        try:
            _wait_for_start(input_fn)
        except KeyboardInterrupt:
            logger.info("Interrupted at the start prompt")
            print_fn(INTERRUPTED_LINE)
            print_fn(format_outcome(QuizOutcome.interrupted(len(questions))))
            return 0

    coordinator = QuizCoordinator(
        questions,
        config.timeout_seconds,
        input_fn=input_fn,
        print_fn=print_fn,
        interrupts=interrupts,
    )
    outcome = coordinator.run()
    print_fn(format_outcome(outcome))
    return 0


def _wait_for_start(input_fn: InputFn) -> None:
    """Block until the user acknowledges the start prompt."""
    with terminate_as_interrupt():
        try:
            input_fn(START_PROMPT)
        except EOFError:
            logger.debug("Start prompt hit end of input; starting anyway")


def format_outcome(outcome: QuizOutcome) -> str:
    if outcome.completed:
        return f"{outcome.correct} questions answered correctly out of {outcome.total}"
    return TIMEOUT_MESSAGE


def main_entry() -> None:
    """Console script entrypoint."""
    code = run()
    if _reader_abandoned():
        _exit_immediately(code)
    raise SystemExit(code)


def _reader_abandoned() -> bool:
    """True while a losing quiz runner is still blocked reading stdin."""
    return any(thread.name == RUNNER_THREAD_NAME and thread.is_alive() for thread in threading.enumerate())


def _exit_immediately(code: int) -> None:
    # Interpreter shutdown aborts if a daemon thread still holds the stdin
    # buffer lock, so flush output and leave without finalizing.
    for handler in logging.getLogger("timedquiz").handlers:
        handler.flush()
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(code)


if __name__ == "__main__":  # pragma: no cover
    main_entry()
