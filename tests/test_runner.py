from timedquiz.models import Question
from timedquiz.race import CancelToken, Race
from timedquiz.runner import ANSWER_PROMPT, QuizRunner

QUESTIONS = [
    Question("2+2", "4"),
    Question("cap city of FR", "paris"),
    Question("1+1", "2"),
]


def test_runner_counts_exact_matches() -> None:
    inputs = iter(["4", "paris", "3"])
    outputs: list[str] = []
    prompts: list[str] = []

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return next(inputs)

    correct = QuizRunner(QUESTIONS, input_fn=fake_input, print_fn=outputs.append).run()
    assert correct == 2
    assert outputs == ["2+2 ?", "cap city of FR ?", "1+1 ?"]
    assert prompts == [ANSWER_PROMPT] * 3


def test_runner_comparison_is_case_and_space_sensitive() -> None:
    inputs = iter(["4 ", "Paris", "2\n"])
    correct = QuizRunner(QUESTIONS, input_fn=lambda _: next(inputs), print_fn=lambda _: None).run()
    assert correct == 1


def test_runner_strips_only_one_trailing_newline() -> None:
    questions = [Question("q", "a\n")]
    assert QuizRunner(questions, input_fn=lambda _: "a\n\n", print_fn=lambda _: None).run() == 1
    assert QuizRunner(questions, input_fn=lambda _: "a\n", print_fn=lambda _: None).run() == 0


def test_runner_treats_read_failures_as_wrong_and_continues() -> None:
    answers: list[object] = [EOFError(), "paris", OSError("closed")]

    def flaky_input(_: str) -> str:
        item = answers.pop(0)
        if isinstance(item, BaseException):
            raise item
        return str(item)

    outputs: list[str] = []
    correct = QuizRunner(QUESTIONS, input_fn=flaky_input, print_fn=outputs.append).run()
    assert correct == 1
    assert len(outputs) == 3


def test_runner_with_no_questions_returns_zero() -> None:
    assert QuizRunner([], input_fn=lambda _: "x", print_fn=lambda _: None).run() == 0


def test_runner_stops_before_next_prompt_when_cancelled() -> None:
    token = CancelToken()
    outputs: list[str] = []

    def cancelling_input(_: str) -> str:
        token.cancel()
        return "4"

    result = QuizRunner(QUESTIONS, input_fn=cancelling_input, print_fn=outputs.append).run(token)
    assert result is None
    assert outputs == ["2+2 ?"]


def test_runner_thread_reports_count_on_channel() -> None:
    race = Race()
    inputs = iter(["4", "paris", "2"])
    thread = QuizRunner(QUESTIONS, input_fn=lambda _: next(inputs), print_fn=lambda _: None).start(
        race.token, race.channel("quiz")
    )
    assert thread.daemon is True
    assert race.wait(timeout=3.0) == ("quiz", 3)


def test_failed_read_never_matches_an_empty_answer() -> None:
    def closed_input(_: str) -> str:
        raise EOFError

    questions = [Question("blank?", ""), Question("also blank?", "")]
    assert QuizRunner(questions, input_fn=closed_input, print_fn=lambda _: None).run() == 0
    assert QuizRunner(questions, input_fn=lambda _: "", print_fn=lambda _: None).run() == 2
