import random

import pytest
from ticktock.generators import (
    LEVELS,
    DifficultyLevel,
    QuestionKind,
    TimeOfDay,
    ValidationError,
    generate_question,
    generate_question_seeded,
    generate_wrong_answers,
    grade_answer,
)


@pytest.mark.parametrize("seed", [1, 42, 12345])
def test_easy_question_has_four_distinct_choices(seed: int):
    rng = random.Random(seed)
    for _ in range(50):
        q = generate_question(DifficultyLevel.EASY, rng)
        assert q.correct_time.minute == 0
        assert 0 <= q.correct_time.hour <= 11
        assert q.choices is not None
        assert len(q.choices) == 4
        assert len(set(q.choices)) == 4
        assert q.correct_time in q.choices
        assert all(c.minute == 0 for c in q.choices)


@pytest.mark.parametrize("seed", [7, 100, 555])
def test_medium_question_quarter_hours_no_choices(seed: int):
    rng = random.Random(seed)
    for _ in range(50):
        q = generate_question(DifficultyLevel.MEDIUM, rng)
        assert q.choices is None
        assert q.correct_time.minute in (0, 15, 30, 45)
        assert 0 <= q.correct_time.hour <= 11


@pytest.mark.parametrize("seed", [3, 9, 21])
def test_hard_question_any_minute_no_choices(seed: int):
    rng = random.Random(seed)
    minutes = set()
    for _ in range(200):
        q = generate_question(DifficultyLevel.HARD, rng)
        assert q.choices is None
        assert 0 <= q.correct_time.minute <= 59
        minutes.add(q.correct_time.minute)
    # not restricted to quarter hours
    assert minutes - {0, 15, 30, 45}


def test_both_question_kinds_are_drawn():
    rng = random.Random(5)
    kinds = {generate_question("hard", rng).kind for _ in range(100)}
    assert kinds == {QuestionKind.READ_CLOCK, QuestionKind.SET_CLOCK}


@pytest.mark.parametrize("seed", [2, 13, 77])
def test_seeded_question_is_reproducible(seed: int):
    assert generate_question_seeded("easy", seed) == generate_question_seeded(
        "easy", seed
    )


@pytest.mark.parametrize("level", list(DifficultyLevel))
def test_wrong_answers_any_level(level: DifficultyLevel):
    rng = random.Random(8)
    correct = TimeOfDay(3, LEVELS[level].minutes[-1])
    wrong = generate_wrong_answers(correct, level, rng)
    assert len(wrong) == 3
    assert len(set(wrong)) == 3
    assert correct not in wrong
    assert all(w.minute in LEVELS[level].minutes for w in wrong)


def test_wrong_answers_exhausts_easy_pool():
    rng = random.Random(1)
    wrong = generate_wrong_answers(TimeOfDay(0, 0), DifficultyLevel.EASY, rng, 11)
    assert sorted(w.hour for w in wrong) == list(range(1, 12))
    with pytest.raises(ValidationError):
        generate_wrong_answers(TimeOfDay(0, 0), DifficultyLevel.EASY, rng, 12)


def test_level_table():
    assert LEVELS[DifficultyLevel.EASY].total_questions == 5
    assert LEVELS[DifficultyLevel.MEDIUM].total_questions == 8
    assert LEVELS[DifficultyLevel.HARD].total_questions == 10


def test_unknown_level_rejected():
    with pytest.raises(ValidationError):
        generate_question("expert", random.Random(0))


@pytest.mark.parametrize(
    "hour,minute", [(-1, 0), (24, 0), (3, 60), (3, -5), (True, 0), (3, False)]
)
def test_time_of_day_range(hour: int, minute: int):
    with pytest.raises(ValidationError):
        TimeOfDay(hour, minute)


def test_grade_answer_exact_match():
    q = generate_question_seeded("medium", 4)
    assert grade_answer(q, q.correct_time) is True
    off = TimeOfDay(q.correct_time.hour, (q.correct_time.minute + 1) % 60)
    assert grade_answer(q, off) is False
