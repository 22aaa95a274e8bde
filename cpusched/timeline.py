from __future__ import annotations

from typing import Iterable, List, Tuple, Union

from .errors import MalformedTimeline
from .models import TimelineSegment

EventLike = Union[TimelineSegment, Tuple[str, int, int]]


def _as_triple(event: EventLike) -> Tuple[str, int, int]:
    if isinstance(event, TimelineSegment):
        return event.subject, event.start_time, event.end_time
    subject, start, end = event
    return subject, start, end


def build(raw_events: Iterable[EventLike]) -> List[TimelineSegment]:
    """
    Turn raw execution events into the final Gantt chart.

    Abutting events for the same subject are merged into one segment (priority
    scheduling emits one event per time unit). The result must start at 0 and
    be gap-free and strictly increasing; anything else is a MalformedTimeline.
    """
    merged: List[List] = []
    for event in raw_events:
        subject, start, end = _as_triple(event)
        if start >= end:
            raise MalformedTimeline(f"Empty or negative segment {subject}:{start}-{end}")

        expected = merged[-1][2] if merged else 0
        if start != expected:
            kind = "gap" if start > expected else "overlap"
            raise MalformedTimeline(f"{kind} at t={expected}: next segment {subject} starts at {start}")

        if merged and merged[-1][0] == subject:
            merged[-1][2] = end
        else:
            merged.append([subject, start, end])

    return [TimelineSegment(subject, start, end) for subject, start, end in merged]
