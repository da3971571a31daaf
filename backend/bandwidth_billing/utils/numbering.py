import itertools
import secrets
from datetime import datetime
from typing import Optional

BASE36_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Two base36 digits of per-process sequence, then random digits against other workers
SEQUENCE_WIDTH = 2
RANDOM_WIDTH = 3

_sequence = itertools.count()


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_document_number(prefix: str, now: Optional[datetime] = None) -> str:
    """
    Build a human-readable document number from the current time,
    e.g. "PB-LQ3K9Z2A-07XK4" (prefix, millisecond timestamp in base 36, then
    a sequence/random suffix so numbers issued in the same millisecond differ).
    """
    now = now or datetime.now()
    millis = int(now.timestamp() * 1000)
    sequence = to_base36(next(_sequence) % 36 ** SEQUENCE_WIDTH).rjust(SEQUENCE_WIDTH, "0")
    suffix = "".join(secrets.choice(BASE36_DIGITS) for _ in range(RANDOM_WIDTH))
    return f"{prefix}-{to_base36(millis)}-{sequence}{suffix}"
