from __future__ import annotations

from typing import Dict, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineSegment

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _time_marks(segments: Sequence[TimelineSegment], offset: int = 0) -> str:
    """
    Boundary times placed under the column where each boundary is drawn.

    The boundary at time t sits at column ``t + offset``; a mark that would touch
    the previous one is pushed right by one space instead.
    """
    marks = ""
    for t in [0] + [seg.end_time for seg in segments]:
        column = t + offset
        if not marks or column > len(marks):
            marks = marks.ljust(column) + str(t)
        else:
            marks += " " + str(t)
    return marks


def render_gantt(segments: Sequence[TimelineSegment]) -> str:
    """
    Plain-text Gantt chart. Idle time is drawn with dots.
    """
    if not segments:
        return "(no execution)"

    line = "|"
    labels = ""
    for seg in segments:
        width = seg.duration
        if seg.is_idle:
            line += "." * width
            labels += " " * width
        else:
            line += "=" * width
            labels += seg.subject[:width].ljust(width)
    line += "|"

    return "\n".join(["Gantt Chart:", line, " " + labels, _time_marks(segments)])


def build_rich_gantt(segments: Sequence[TimelineSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        return Panel("No execution", title="Gantt Chart"), ""

    name_to_color: Dict[str, str] = {}

    def color_for(name: str) -> str:
        if name not in name_to_color:
            name_to_color[name] = COLORS[len(name_to_color) % len(COLORS)]
        return name_to_color[name]

    timeline = Text()
    labels = Text()
    for seg in segments:
        width = seg.duration
        if seg.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(" " * width)
            continue
        timeline.append(" " * width, style=f"on {color_for(seg.subject)}")
        labels.append(seg.subject[:width].ljust(width), style="bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    # Panel.fit puts a border and one padding column before the first time unit.
    return Panel.fit(table, title="Gantt Chart"), _time_marks(segments, offset=1)
