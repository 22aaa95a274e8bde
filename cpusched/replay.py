from __future__ import annotations

import time
from typing import Callable, Iterator, NamedTuple

from .models import ScheduleResult


class Tick(NamedTuple):
    """
    What the CPU was doing during ``[time, time + 1)``.
    """

    time: int
    subject: str
    elapsed: int  # units the subject has been on the CPU in the current segment, this one included
    segment_length: int


def iter_ticks(result: ScheduleResult) -> Iterator[Tick]:
    """
    Walk a finished schedule one time unit at a time.

    Only reads the result, so abandoning the iteration part way leaves it intact.
    """
    for seg in result.timeline:
        for t in range(seg.start_time, seg.end_time):
            yield Tick(time=t, subject=seg.subject, elapsed=t - seg.start_time + 1, segment_length=seg.duration)


def replay(
    result: ScheduleResult,
    delay: float,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[Tick]:
    """
    Like ``iter_ticks`` but pauses ``delay`` seconds after each tick is consumed.
    """
    for tick in iter_ticks(result):
        yield tick
        if delay > 0:
            sleep(delay)
