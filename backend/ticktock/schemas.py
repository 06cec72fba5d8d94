from typing import Any, List, Optional

from pydantic import BaseModel, Field

from .engine import AnsweredResult, SessionState, SessionSummary
from .generators import LEVELS, Question, TimeOfDay


class TimeOut(BaseModel):
    hour: int
    minute: int

    @classmethod
    def from_time(cls, t: TimeOfDay) -> "TimeOut":
        return cls(hour=t.hour, minute=t.minute)


class QuestionOut(BaseModel):
    kind: str  # 'read_clock' | 'set_clock'
    # Shown on the clock face for read_clock, spoken/written for set_clock
    time: TimeOut
    choices: Optional[List[TimeOut]] = None

    @classmethod
    def from_question(cls, q: Question) -> "QuestionOut":
        return cls(
            kind=q.kind.value,
            time=TimeOut.from_time(q.correct_time),
            choices=(
                [TimeOut.from_time(c) for c in q.choices]
                if q.choices is not None
                else None
            ),
        )


class ResultOut(BaseModel):
    kind: str
    correct_time: TimeOut
    submitted_time: TimeOut
    is_correct: bool
    points_earned: int

    @classmethod
    def from_result(cls, r: AnsweredResult) -> "ResultOut":
        return cls(
            kind=r.question.kind.value,
            correct_time=TimeOut.from_time(r.question.correct_time),
            submitted_time=TimeOut.from_time(r.submitted_time),
            is_correct=r.is_correct,
            points_earned=r.points_earned,
        )


class SessionStateOut(BaseModel):
    level: str
    current_question: Optional[QuestionOut] = None
    score: int
    streak: int
    questions_answered: int
    total_questions: int
    results: List[ResultOut]
    is_complete: bool
    last_answer_correct: Optional[bool] = None

    @classmethod
    def from_state(cls, s: SessionState) -> "SessionStateOut":
        return cls(
            level=s.level.value,
            current_question=(
                QuestionOut.from_question(s.current_question)
                if s.current_question is not None
                else None
            ),
            score=s.score,
            streak=s.streak,
            questions_answered=s.questions_answered,
            total_questions=s.total_questions,
            results=[ResultOut.from_result(r) for r in s.results],
            is_complete=s.is_complete,
            last_answer_correct=s.last_answer_correct,
        )


class SummaryOut(BaseModel):
    level: str
    score: int
    accuracy: float
    correct_count: int
    best_streak: int
    questions_answered: int
    total_questions: int

    @classmethod
    def from_summary(cls, s: SessionSummary) -> "SummaryOut":
        return cls(
            level=s.level.value,
            score=s.score,
            accuracy=s.accuracy,
            correct_count=s.correct_count,
            best_streak=s.best_streak,
            questions_answered=s.questions_answered,
            total_questions=s.total_questions,
        )


class LevelOut(BaseModel):
    level: str
    total_questions: int
    minutes: List[int]
    choices: int


def level_table() -> List[LevelOut]:
    return [
        LevelOut(
            level=level.value,
            total_questions=cfg.total_questions,
            minutes=list(cfg.minutes),
            choices=cfg.choices,
        )
        for level, cfg in LEVELS.items()
    ]


class StartRequest(BaseModel):
    level: str = Field(default="easy")
    seed: Optional[int] = None


class StartResponse(BaseModel):
    session_id: str
    seed: int
    state: SessionStateOut


class AnswerRequest(BaseModel):
    # Kept loose here; guardrails does the range/type checks and reports reasons
    hour: Optional[Any] = None
    minute: Optional[Any] = None


class AnswerResponse(BaseModel):
    correct: bool
    points_earned: int
    state: SessionStateOut
    summary: Optional[SummaryOut] = None


class AccuracyResponse(BaseModel):
    accuracy: float
    questions_answered: int


class DeleteResponse(BaseModel):
    ok: bool
