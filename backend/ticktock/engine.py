"""Quiz session engine: one active clock-reading session per engine."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Tuple, Union

from .generators import (
    LEVELS,
    DifficultyLevel,
    Question,
    QuizError,
    TimeOfDay,
    ValidationError,
    as_level,
    generate_question,
    grade_answer,
)

_log = logging.getLogger("ticktock.engine")

POINTS_PER_STREAK = 10
MIN_POINTS = 10
MAX_POINTS = 50


class InvalidStateError(QuizError, RuntimeError):
    pass


@dataclass(frozen=True)
class AnsweredResult:
    question: Question
    submitted_time: TimeOfDay
    is_correct: bool
    points_earned: int


@dataclass(frozen=True)
class SessionState:
    level: DifficultyLevel
    total_questions: int
    current_question: Optional[Question] = None
    score: int = 0
    streak: int = 0
    questions_answered: int = 0
    results: Tuple[AnsweredResult, ...] = field(default_factory=tuple)
    is_complete: bool = False
    last_answer_correct: Optional[bool] = None


@dataclass(frozen=True)
class SessionSummary:
    level: DifficultyLevel
    score: int
    accuracy: float
    correct_count: int
    best_streak: int
    questions_answered: int
    total_questions: int


def points_for(is_correct: bool, streak: int) -> int:
    """Points for one answer given the streak *before* it."""
    if not is_correct:
        return 0
    return max(MIN_POINTS, min(MAX_POINTS, POINTS_PER_STREAK * (streak + 1)))


CompletionListener = Callable[[SessionState, SessionSummary], None]


class QuizSessionEngine:
    """Owns a single quiz session.

    Not safe to share between concurrent callers; each session gets its own
    engine. ``rng`` is the only source of randomness, so a seeded
    ``random.Random`` makes a whole session reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._state: Optional[SessionState] = None
        self._listeners: List[CompletionListener] = []

    @property
    def state(self) -> Optional[SessionState]:
        return self._state

    def add_completion_listener(self, listener: CompletionListener) -> None:
        self._listeners.append(listener)

    def start_quiz(self, level: Union[DifficultyLevel, str]) -> SessionState:
        level = as_level(level)
        self._state = SessionState(
            level=level,
            total_questions=LEVELS[level].total_questions,
            current_question=generate_question(level, self._rng),
        )
        _log.info(
            "quiz started level=%s total=%d",
            level.value,
            self._state.total_questions,
        )
        return self._state

    def submit_answer(self, submitted: TimeOfDay) -> SessionState:
        state = self._state
        if state is None or state.current_question is None:
            raise InvalidStateError("no active question")
        if not isinstance(submitted, TimeOfDay):
            raise ValidationError(f"expected TimeOfDay, got {submitted!r}")

        question = state.current_question
        is_correct = grade_answer(question, submitted)
        points = points_for(is_correct, state.streak)
        results = state.results + (
            AnsweredResult(
                question=question,
                submitted_time=submitted,
                is_correct=is_correct,
                points_earned=points,
            ),
        )
        answered = state.questions_answered + 1
        is_complete = answered >= state.total_questions
        next_question = (
            None if is_complete else generate_question(state.level, self._rng)
        )

        self._state = replace(
            state,
            results=results,
            questions_answered=answered,
            streak=state.streak + 1 if is_correct else 0,
            score=state.score + points,
            is_complete=is_complete,
            current_question=next_question,
            last_answer_correct=is_correct,
        )

        if is_complete:
            summary = self.summary()
            _log.info(
                "quiz complete level=%s score=%d accuracy=%.2f",
                summary.level.value,
                summary.score,
                summary.accuracy,
            )
            for listener in self._listeners:
                listener(self._state, summary)
        return self._state

    def accuracy(self) -> float:
        state = self._state
        if state is None or state.questions_answered == 0:
            return 0.0
        correct = sum(1 for r in state.results if r.is_correct)
        return correct / state.questions_answered

    def summary(self) -> SessionSummary:
        state = self._state
        if state is None:
            raise InvalidStateError("no session started")
        best = run = 0
        for r in state.results:
            run = run + 1 if r.is_correct else 0
            best = max(best, run)
        return SessionSummary(
            level=state.level,
            score=state.score,
            accuracy=self.accuracy(),
            correct_count=sum(1 for r in state.results if r.is_correct),
            best_streak=best,
            questions_answered=state.questions_answered,
            total_questions=state.total_questions,
        )
