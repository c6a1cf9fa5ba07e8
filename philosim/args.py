"""Command-line argument parsing for the dining philosophers simulation."""

from __future__ import annotations

import re
from dataclasses import dataclass

INT_MAX = 2**31 - 1
INT_MIN = -(2**31)

THREAD_MAX = 61786

USAGE = (
    "usage: ./philo <number_of_philosophers> <time_to_die_ms>"
    " <time_to_eat_ms> <time_to_sleep_ms> "
    "<(opt)number_of_time_must_eat>"
)

ONE_FORK_MESSAGE = "only 1 fork, this poor man's gonna die"

_SPACES = " \t\n\v\f\r"
_NUMBER = re.compile(r"([+-]?)([0-9]*)")
_DIGITS = frozenset("0123456789")


class ArgumentError(ValueError):
    """Raised when the command-line arguments are unusable."""


@dataclass(frozen=True)
class Settings:
    """Validated simulation parameters; times are in milliseconds."""

    philosophers: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    meals: int | None = None


def atoi_overflow(text: str) -> int:
    """Parse a leading integer like C's atoi, raising OverflowError outside 32-bit range.

    Leading whitespace and one sign are accepted; parsing stops at the first
    non-digit. Text without digits yields 0.
    """
    match = _NUMBER.match(text.lstrip(_SPACES))
    sign, digits = match.group(1), match.group(2)
    value = int(digits) if digits else 0
    if sign == "-":
        if value > -INT_MIN:
            raise OverflowError(f"{text!r} is below {INT_MIN}")
        return -value
    if value > INT_MAX:
        raise OverflowError(f"{text!r} is above {INT_MAX}")
    return value


def _check_argument(text: str) -> int:
    if "-" in text:
        raise ArgumentError(f"args can't be negative numbers\n{USAGE}")
    if not set(text) <= _DIGITS:
        raise ArgumentError("args not digits")
    try:
        value = atoi_overflow(text)
    except OverflowError as exc:
        raise ArgumentError("overflow on args") from exc
    if value == 0:
        raise ArgumentError(f"args value can't be zero\n{USAGE}")
    return value


def parse_args(args) -> Settings:
    """Validate the arguments that follow the program name and build Settings."""
    args = list(args)
    if len(args) not in (4, 5):
        raise ArgumentError(f"wrong args numbers\n{USAGE}")
    values = [_check_argument(text) for text in args]
    if values[0] > THREAD_MAX:
        raise ArgumentError(f"too much threads, max = {THREAD_MAX}")
    philosophers, time_to_die, time_to_eat, time_to_sleep = values[:4]
    meals = values[4] if len(values) == 5 else None
    return Settings(philosophers, time_to_die, time_to_eat, time_to_sleep, meals)