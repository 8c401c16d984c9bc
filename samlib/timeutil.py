"""Month names and time-interval arithmetic on second/microsecond pairs."""

from __future__ import annotations

import math
from dataclasses import dataclass

ONE_SECOND = 1000000

SHORT_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

LONG_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class Timeval:
    """A point in time as whole seconds plus microseconds."""

    sec: int
    usec: int = 0


def get_month(month: int, long_months: bool = False, one_based: bool = False) -> str:
    """Return the month name, or ``"???"`` when out of range."""
    if one_based:
        month -= 1
    if not 0 <= month <= 11:
        return "???"
    return LONG_MONTHS[month] if long_months else SHORT_MONTHS[month]


def timeval_delta_valid(start: Timeval, end: Timeval) -> bool:
    """True if ``end`` is not earlier than ``start``."""
    if end.sec > start.sec:
        return True
    return end.sec == start.sec and end.usec >= start.usec


def delta_timeval(start: Timeval, end: Timeval) -> int:
    """Microseconds from ``start`` to ``end``; raises ValueError if negative."""
    if not timeval_delta_valid(start, end):
        raise ValueError("end is before start")
    return (end.sec - start.sec) * ONE_SECOND + (end.usec - start.usec)


def timeval_delta(start: Timeval, end: Timeval) -> Timeval:
    """Return ``end - start`` normalised; raises ValueError if negative."""
    if not timeval_delta_valid(start, end):
        raise ValueError("end is before start")
    sec = end.sec - start.sec
    usec = end.usec - start.usec
    if usec < 0:
        sec -= 1
        usec += ONE_SECOND
    return Timeval(sec, usec)


def timeval_delta_d(start: Timeval, end: Timeval) -> float:
    """Seconds from ``start`` to ``end`` as a float, or infinity if negative."""
    try:
        delta = timeval_delta(start, end)
    except ValueError:
        return math.inf
    return delta.usec / 1000000 + delta.sec


def timeval_delta2(t1: Timeval, t2: Timeval) -> Timeval:
    """Return the absolute difference between two times."""
    try:
        return timeval_delta(t1, t2)
    except ValueError:
        return timeval_delta(t2, t1)


def mbs(nbytes: int, useconds: int) -> int:
    """Throughput in MiB per second, rounded to the nearest integer."""
    mb = nbytes / 1048576.0
    sec = useconds / 1000000.0
    return int(mb / sec + 0.5)