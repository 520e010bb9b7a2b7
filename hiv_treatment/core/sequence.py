"""
Sequential record identifiers.

Every entity namespace uses a fixed alphabetic prefix followed by a
zero-padded counter, e.g. ``AP000001`` for ARV protocols or ``PR000042`` for
prescriptions. New identifiers are derived from the highest one already
stored.
"""
from typing import Iterable, Optional

from .config import settings

ARV_PROTOCOL_PREFIX = "AP"
PRESCRIPTION_PREFIX = "PR"
TREATMENT_PLAN_PREFIX = "TP"
APPOINTMENT_PREFIX = "BK"
LAB_TEST_PREFIX = "LT"


def next_id(prefix: str, last_id: Optional[str], width: Optional[int] = None) -> str:
    """Return the identifier following ``last_id`` in the ``prefix`` namespace.

    A missing ``last_id`` or one whose suffix is not a number (wrong prefix,
    empty suffix, stray characters) yields the first identifier of the
    namespace instead of failing.
    """
    width = width or settings.ID_WIDTH
    number = 1

    if last_id and last_id.startswith(prefix):
        suffix = last_id[len(prefix):]
        if suffix.isascii() and suffix.isdigit():
            number = int(suffix) + 1

    return f"{prefix}{number:0{width}d}"


def highest_id(ids: Iterable[Optional[str]]) -> Optional[str]:
    """Pick the highest identifier from ``ids``; fixed width makes string order numeric."""
    return max((i for i in ids if i), default=None)
