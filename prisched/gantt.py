from __future__ import annotations

from typing import List, Optional, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineSegment

COLORS = ["red", "dark_orange", "yellow", "green_yellow", "green", "sky_blue1", "slate_blue1", "violet"]
IDLE_STYLE = "on grey85"


def segment_color(process_id: Optional[int]) -> Optional[str]:
    """
    Stable color for a process id; ``None`` for idle segments.
    """
    if process_id is None:
        return None
    return COLORS[(process_id - 1) % len(COLORS)]


def render_gantt(timeline: List[TimelineSegment]) -> str:
    """
    Plain-text Gantt chart, one character per tick. Idle ticks are drawn as dots.
    """
    if not timeline:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = "0"

    for seg in timeline:
        width = seg.duration
        if seg.is_idle:
            line += "." * width
            labels += " " * width
        else:
            line += "=" * width
            labels += seg.label[:width].ljust(width)
        time_marks += f"{seg.end_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(timeline: List[TimelineSegment]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not timeline:
        panel = Panel("Run the simulation to generate the Gantt chart.", title="Gantt Chart")
        return panel, ""

    bars = Text()
    labels = Text()
    time_marks = "0"

    for seg in timeline:
        width = seg.duration
        color = segment_color(seg.process_id)
        style = IDLE_STYLE if color is None else f"on {color}"

        bars.append(" " * width, style=style)
        labels.append(seg.label[:width].ljust(width), style="dim" if seg.is_idle else "bold")
        time_marks += f"{seg.end_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
