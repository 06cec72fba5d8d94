import logging
import os
import random
import uuid
from collections import OrderedDict
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .engine import InvalidStateError, QuizSessionEngine
from .generators import TimeOfDay, ValidationError
from .guardrails import validate_time_payload
from .schemas import (
    AccuracyResponse,
    AnswerRequest,
    AnswerResponse,
    DeleteResponse,
    LevelOut,
    SessionStateOut,
    StartRequest,
    StartResponse,
    SummaryOut,
    level_table,
)

app = FastAPI()

# CORS: use explicit origins to keep headers valid in browsers
_env_origins = os.getenv("FRONTEND_ORIGIN", "").strip()
_origins = [o.strip() for o in _env_origins.split(",") if o.strip()]
if not _origins:
    _origins = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

MAX_SESSIONS = int(os.getenv("TICKTOCK_MAX_SESSIONS", "1000"))

_log = logging.getLogger("ticktock.api")

# session_id -> engine, oldest first
_sessions: "OrderedDict[str, QuizSessionEngine]" = OrderedDict()


def _get_engine(session_id: str) -> QuizSessionEngine:
    engine = _sessions.get(session_id)
    if engine is None:
        raise HTTPException(status_code=404, detail="Session not found")
    try:
        # least recently used sessions are evicted first
        _sessions.move_to_end(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Session not found")
    return engine


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/levels", response_model=List[LevelOut])
def levels():
    return level_table()


@app.post("/quiz/start", response_model=StartResponse)
def start_quiz(req: StartRequest):
    seed = req.seed if req.seed is not None else random.randint(1, 10_000_000)
    session_id = uuid.uuid4().hex
    engine = QuizSessionEngine(rng=random.Random(seed))
    engine.add_completion_listener(
        lambda state, summary: _log.info(
            "session %s finished score=%d best_streak=%d",
            session_id,
            summary.score,
            summary.best_streak,
        )
    )
    try:
        state = engine.start_quiz(req.level)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    _sessions[session_id] = engine
    while len(_sessions) > MAX_SESSIONS:
        evicted, _ = _sessions.popitem(last=False)
        _log.info("evicted session %s", evicted)

    return StartResponse(
        session_id=session_id,
        seed=seed,
        state=SessionStateOut.from_state(state),
    )


@app.get("/quiz/{session_id}", response_model=SessionStateOut)
def get_state(session_id: str):
    engine = _get_engine(session_id)
    return SessionStateOut.from_state(engine.state)


@app.post("/quiz/{session_id}/answer", response_model=AnswerResponse)
def submit_answer(session_id: str, req: AnswerRequest):
    engine = _get_engine(session_id)
    ok, cleaned, reasons = validate_time_payload(req.model_dump())
    if not ok:
        raise HTTPException(status_code=422, detail={"reasons": reasons})

    try:
        state = engine.submit_answer(TimeOfDay(cleaned["hour"], cleaned["minute"]))
    except InvalidStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc))

    last = state.results[-1]
    return AnswerResponse(
        correct=last.is_correct,
        points_earned=last.points_earned,
        state=SessionStateOut.from_state(state),
        summary=(
            SummaryOut.from_summary(engine.summary()) if state.is_complete else None
        ),
    )


@app.get("/quiz/{session_id}/accuracy", response_model=AccuracyResponse)
def accuracy(session_id: str):
    engine = _get_engine(session_id)
    return AccuracyResponse(
        accuracy=engine.accuracy(),
        questions_answered=engine.state.questions_answered,
    )


@app.delete("/quiz/{session_id}", response_model=DeleteResponse)
def discard_session(session_id: str):
    if _sessions.pop(session_id, None) is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return DeleteResponse(ok=True)
