from __future__ import annotations

from typing import List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineSegment

COLORS = ["blue", "red", "green", "yellow", "magenta", "cyan", "bright_blue", "bright_green"]


def segment_color(segment: TimelineSegment) -> str:
    if segment.is_idle:
        return "grey37"
    return COLORS[segment.pid % len(COLORS)]


def render_gantt(segments: List[TimelineSegment]) -> str:
    """
    Plain-text Gantt chart: '=' for execution, '.' for idle time.
    """
    if not segments:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = str(segments[0].start_time)

    for seg in segments:
        width = max(1, seg.duration, len(str(seg.end_time)))
        line += ("." if seg.is_idle else "=") * width
        labels += ("" if seg.is_idle else seg.name)[:width].ljust(width)
        time_marks += f"{seg.end_time:>{width}}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            " " + labels,
            time_marks,
        ]
    )


def build_rich_gantt(segments: List[TimelineSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    timeline = Text()
    labels = Text()
    time_marks = str(segments[0].start_time)

    for seg in segments:
        width = max(len(seg.name) + 1, seg.duration, len(str(seg.end_time)))
        timeline.append(" " * width, style=f"on {segment_color(seg)}")
        labels.append(seg.name[:width].ljust(width), style="dim" if seg.is_idle else "bold")
        time_marks += f"{seg.end_time:>{width}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
