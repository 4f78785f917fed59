"""
Identifier generation.

IDs are short strings made of a base-36 millisecond timestamp followed by
a random base-36 suffix. They are unique within a running process for all
practical purposes; no registry of issued IDs is kept.
"""

import secrets
import string
import time
from datetime import datetime, timezone
from typing import Callable, Optional

BASE36_ALPHABET = string.digits + string.ascii_lowercase
RANDOM_SUFFIX_LENGTH = 7


def to_base36(number: int) -> str:
    """Encode a non-negative integer in base 36 (lowercase)."""
    if number < 0:
        raise ValueError("Cannot encode a negative number in base 36")
    if number == 0:
        return "0"

    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


class IdGenerator:
    """
    Produces time-ordered, randomly suffixed string IDs.

    The time component never goes backwards within one generator, even if
    the wall clock does.
    """

    def __init__(
        self,
        clock_ms: Optional[Callable[[], int]] = None,
        suffix_length: int = RANDOM_SUFFIX_LENGTH,
    ):
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._suffix_length = suffix_length
        self._last_ms = 0

    def _time_component(self) -> str:
        now_ms = max(self._clock_ms(), self._last_ms)
        self._last_ms = now_ms
        return to_base36(now_ms)

    def _random_component(self) -> str:
        return "".join(
            secrets.choice(BASE36_ALPHABET) for _ in range(self._suffix_length)
        )

    def __call__(self) -> str:
        return self._time_component() + self._random_component()


_default_generator = IdGenerator()


def generate_id() -> str:
    """Generate a new unique ID using the process-wide generator."""
    return _default_generator()


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
