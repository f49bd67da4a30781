"""Task ID generation.

IDs look like ``task_<time>_<rand>`` where ``<time>`` is the creation time in
milliseconds encoded in base 36 and ``<rand>`` is three random base-36
characters. Uniqueness is probabilistic: two tasks created in the same
millisecond collide with probability 1/46656.
"""

from __future__ import annotations

import random
import re
import string
import time

_BASE36_ALPHABET = string.digits + string.ascii_lowercase

TASK_ID_PATTERN = re.compile(r"^task_[0-9a-z]+_[0-9a-z]{3}$")


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""
    if number < 0:
        raise ValueError("Cannot encode negative numbers")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_task_id(now_ms: int | None = None) -> str:
    """Generate a new task ID.

    Args:
        now_ms: Override for the current time in milliseconds (tests)

    Returns:
        ID string such as ``task_lx2k9q1c_4fz``
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = "".join(random.choices(_BASE36_ALPHABET, k=3))
    return f"task_{to_base36(now_ms)}_{suffix}"


def is_valid_task_id(value: str) -> bool:
    """Check whether a string has the shape of a generated task ID."""
    if not isinstance(value, str):
        return False
    return TASK_ID_PATTERN.match(value) is not None
