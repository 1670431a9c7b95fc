"""Load quiz questions from CSV files and shuffle them."""

from __future__ import annotations

import csv
import logging
import random
import time
from collections.abc import Iterable
from pathlib import Path

from .models import Question

logger = logging.getLogger(__name__)

MIN_COLUMNS = 2


class QuestionSourceError(ValueError):
    """Raised when a question file cannot be read or parsed."""


def load_questions(path: Path | str) -> list[Question]:
    """Load questions from a CSV file, one question per row."""
    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8-sig", newline="") as handle:
            questions = parse_questions(handle, source=str(file_path))
    except OSError as exc:
        raise QuestionSourceError(f"Unable to read input file {file_path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise QuestionSourceError(f"Unable to parse file as CSV for {file_path}: {exc}") from exc
    logger.info("Loaded %d questions from %s", len(questions), file_path)
    return questions


def parse_questions(lines: Iterable[str], source: str = "<input>") -> list[Question]:
    """Parse CSV text lines into questions.

    Blank lines are skipped. Every record must have as many fields as the
    first one, and at least two: the prompt and the expected answer. Any
    further columns are ignored.
    """
    reader = csv.reader(lines, strict=True)
    questions: list[Question] = []
    expected_fields: int | None = None
    try:
        for row in reader:
            if not row:
                continue
            if expected_fields is None:
                expected_fields = len(row)
                if expected_fields < MIN_COLUMNS:
                    raise QuestionSourceError(
                        f"Unable to parse file as CSV for {source}: line {reader.line_num} has "
                        f"{expected_fields} field(s), expected at least {MIN_COLUMNS}"
                    )
            elif len(row) != expected_fields:
                raise QuestionSourceError(
                    f"Unable to parse file as CSV for {source}: line {reader.line_num} has "
                    f"{len(row)} field(s), expected {expected_fields}"
                )
            questions.append(Question(prompt=row[0], answer=row[1]))
    except csv.Error as exc:
        raise QuestionSourceError(f"Unable to parse file as CSV for {source}: line {reader.line_num}: {exc}") from exc
    return questions


def make_rng(seed: int | None = None) -> random.Random:
    """Create a generator owned by the caller, seeded from the clock unless told otherwise."""
    return random.Random(time.time_ns() if seed is None else seed)


def shuffle_questions(questions: Iterable[Question], rng: random.Random) -> list[Question]:
    """Return a uniformly shuffled copy of ``questions``."""
    shuffled = list(questions)
    rng.shuffle(shuffled)
    return shuffled
