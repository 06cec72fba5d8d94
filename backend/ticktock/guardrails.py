import logging
from typing import Any, Dict, List, Tuple

from .generators import FACE_HOURS

MAX_HOUR = 23
MAX_MINUTE = 59

_log = logging.getLogger("ticktock.guardrails")


def _coerce_int(value: Any) -> Tuple[bool, int]:
    if isinstance(value, bool):
        return False, -1
    if isinstance(value, int):
        return True, value
    if isinstance(value, str):
        try:
            return True, int(value.strip())
        except ValueError:
            return False, -1
    return False, -1


def validate_time_payload(
    data: Dict[str, Any],
) -> Tuple[bool, Dict[str, int], List[str]]:
    """
    Validate and normalize a submitted clock time.

    Hours are folded onto the 12-hour face: 12 reads as 0 and 13..23 as 1..11,
    matching how generated questions store their correct time.

    Returns: (valid, cleaned, reasons)
      - cleaned holds integer ``hour``/``minute`` when valid
      - reasons: short reason codes for logging
    """
    reasons: List[str] = []

    if data.get("hour") is None:
        reasons.append("hour_missing")
        hour = -1
    else:
        ok, hour = _coerce_int(data.get("hour"))
        if not ok:
            reasons.append("hour_type")
        elif not 0 <= hour <= MAX_HOUR:
            reasons.append("hour_range")

    if data.get("minute") is None:
        reasons.append("minute_missing")
        minute = -1
    else:
        ok, minute = _coerce_int(data.get("minute"))
        if not ok:
            reasons.append("minute_type")
        elif not 0 <= minute <= MAX_MINUTE:
            reasons.append("minute_range")

    if reasons:
        _log.warning("rejected time payload reasons=%s", ",".join(reasons))
        return False, {}, reasons

    return True, {"hour": hour % FACE_HOURS, "minute": minute}, reasons
