import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


class QuizError(Exception):
    pass


class ValidationError(QuizError, ValueError):
    """Raised for out-of-range clock values or unknown levels."""


@dataclass(frozen=True)
class TimeOfDay:
    hour: int
    minute: int

    def __post_init__(self) -> None:
        if (
            isinstance(self.hour, bool)
            or not isinstance(self.hour, int)
            or not 0 <= self.hour <= 23
        ):
            raise ValidationError(f"hour out of range: {self.hour!r}")
        if (
            isinstance(self.minute, bool)
            or not isinstance(self.minute, int)
            or not 0 <= self.minute <= 59
        ):
            raise ValidationError(f"minute out of range: {self.minute!r}")

    def __str__(self) -> str:
        return f"{self.hour}:{self.minute:02d}"


class DifficultyLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestionKind(str, Enum):
    READ_CLOCK = "read_clock"
    SET_CLOCK = "set_clock"


@dataclass(frozen=True)
class LevelConfig:
    minutes: Tuple[int, ...]
    total_questions: int
    # number of multiple-choice options, 0 for free-form answers
    choices: int


LEVELS: Dict[DifficultyLevel, LevelConfig] = {
    DifficultyLevel.EASY: LevelConfig(minutes=(0,), total_questions=5, choices=4),
    DifficultyLevel.MEDIUM: LevelConfig(
        minutes=(0, 15, 30, 45), total_questions=8, choices=0
    ),
    DifficultyLevel.HARD: LevelConfig(
        minutes=tuple(range(60)), total_questions=10, choices=0
    ),
}

FACE_HOURS = 12


@dataclass(frozen=True)
class Question:
    correct_time: TimeOfDay
    kind: QuestionKind
    # Only set when the level offers multiple choice
    choices: Optional[Tuple[TimeOfDay, ...]] = None


def as_level(level: Union[DifficultyLevel, str]) -> DifficultyLevel:
    try:
        return DifficultyLevel(level)
    except ValueError:
        raise ValidationError(f"unknown difficulty level: {level!r}") from None


def _random_time(level: DifficultyLevel, rng: random.Random) -> TimeOfDay:
    hour = rng.randint(0, FACE_HOURS - 1)
    minute = rng.choice(LEVELS[level].minutes)
    return TimeOfDay(hour, minute)


def generate_wrong_answers(
    correct: TimeOfDay,
    level: DifficultyLevel,
    rng: random.Random,
    count: int = 3,
) -> List[TimeOfDay]:
    """Draw ``count`` distinct times at the level's granularity, none equal to ``correct``.

    Rejection sampling; the smallest pool (easy, 12 whole hours) still leaves
    11 candidates, so the loop terminates for any count below that.
    """
    config = LEVELS[level]
    if count > FACE_HOURS * len(config.minutes) - 1:
        raise ValidationError(f"cannot draw {count} distinct wrong answers")
    wrong: List[TimeOfDay] = []
    while len(wrong) < count:
        candidate = _random_time(level, rng)
        if candidate == correct or candidate in wrong:
            continue
        wrong.append(candidate)
    return wrong


def generate_question(
    level: Union[DifficultyLevel, str], rng: random.Random
) -> Question:
    level = as_level(level)
    # draw order: hour, minute, kind, then choices
    correct = _random_time(level, rng)
    kind = rng.choice([QuestionKind.READ_CLOCK, QuestionKind.SET_CLOCK])

    choices: Optional[Tuple[TimeOfDay, ...]] = None
    n_choices = LEVELS[level].choices
    if n_choices:
        options = [correct] + generate_wrong_answers(
            correct, level, rng, count=n_choices - 1
        )
        rng.shuffle(options)
        choices = tuple(options)

    return Question(correct_time=correct, kind=kind, choices=choices)


def generate_question_seeded(
    level: Union[DifficultyLevel, str], seed: int
) -> Question:
    rng = random.Random(seed)
    return generate_question(level, rng)


def grade_answer(question: Question, submitted: TimeOfDay) -> bool:
    return (
        submitted.hour == question.correct_time.hour
        and submitted.minute == question.correct_time.minute
    )
