"""Value types shared by the quiz components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

DEFAULT_FILE_PATH = Path("./problems.csv")
DEFAULT_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class Question:
    """One prompt and the exact answer expected for it."""

    prompt: str
    answer: str


QuestionSet = list[Question]


class OutcomeStatus(Enum):
    """Which event decided a session."""

    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    INTERRUPTED = "interrupted"


@dataclass(frozen=True)
class QuizOutcome:
    """Final result of one session.

    ``correct`` is only set for completed sessions; a session that ran out of
    time or was interrupted reports no partial score.
    """

    status: OutcomeStatus
    total: int
    correct: int | None = None

    @classmethod
    def finished(cls, correct: int, total: int) -> QuizOutcome:
        if not 0 <= correct <= total:
            raise ValueError(f"Correct count {correct} is outside 0..{total}.")
        return cls(status=OutcomeStatus.COMPLETED, total=total, correct=correct)

    @classmethod
    def timed_out(cls, total: int) -> QuizOutcome:
        return cls(status=OutcomeStatus.TIMED_OUT, total=total)

    @classmethod
    def interrupted(cls, total: int) -> QuizOutcome:
        return cls(status=OutcomeStatus.INTERRUPTED, total=total)

    @property
    def completed(self) -> bool:
        return self.status is OutcomeStatus.COMPLETED


@dataclass(frozen=True)
class SessionConfig:
    """Settings fixed before a session starts."""

    file_path: Path = DEFAULT_FILE_PATH
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    shuffle: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError(f"Timeout must be a positive number of seconds, got {self.timeout_seconds}.")
