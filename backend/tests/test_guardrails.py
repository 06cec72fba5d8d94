import pytest
from ticktock.guardrails import validate_time_payload


def test_guardrails_accepts_face_time():
    ok, cleaned, reasons = validate_time_payload({"hour": 3, "minute": 45})
    assert ok is True
    assert cleaned == {"hour": 3, "minute": 45}
    assert reasons == []


@pytest.mark.parametrize("hour,expected", [(12, 0), (0, 0), (15, 3), (23, 11)])
def test_guardrails_folds_hours_onto_face(hour: int, expected: int):
    ok, cleaned, _ = validate_time_payload({"hour": hour, "minute": 0})
    assert ok is True
    assert cleaned["hour"] == expected


def test_guardrails_accepts_numeric_strings():
    ok, cleaned, _ = validate_time_payload({"hour": "7", "minute": " 30 "})
    assert ok is True
    assert cleaned == {"hour": 7, "minute": 30}


@pytest.mark.parametrize(
    "data,reason",
    [
        ({"minute": 0}, "hour_missing"),
        ({"hour": 1}, "minute_missing"),
        ({"hour": 24, "minute": 0}, "hour_range"),
        ({"hour": -1, "minute": 0}, "hour_range"),
        ({"hour": 1, "minute": 60}, "minute_range"),
        ({"hour": "noon", "minute": 0}, "hour_type"),
        ({"hour": 1, "minute": 2.5}, "minute_type"),
        ({"hour": True, "minute": 0}, "hour_type"),
        ({"hour": "--5", "minute": 0}, "hour_type"),
        ({"hour": "\u00b2", "minute": 0}, "hour_type"),
        ({"hour": 4, "minute": "1.5"}, "minute_type"),
    ],
)
def test_guardrails_rejects(data, reason):
    ok, cleaned, reasons = validate_time_payload(data)
    assert ok is False
    assert cleaned == {}
    assert reason in reasons
