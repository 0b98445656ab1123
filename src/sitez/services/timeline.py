# Rev 0.2.0
"""Gantt timeline derivation.

Each task with both a start and a due date becomes a bar positioned by its
offset from the project start. Offsets and durations are timedeltas so
partial days survive; inverted ranges (due before start) are kept as
negative durations and flagged for the renderer.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Tuple

from ..models.entities import Project
from ..models.types import TaskStatus
from ..utils.dates import ONE_DAY, fmt_date, parse_utc


@dataclass(frozen=True)
class TimelineBar:
    title: str
    offset: timedelta
    duration: timedelta
    status: TaskStatus
    formatted_start: str
    formatted_due: str

    @property
    def is_inverted(self) -> bool:
        return self.duration < timedelta(0)


@dataclass(frozen=True)
class Timeline:
    project_start: datetime
    axis_start: datetime
    axis_end: datetime
    bars: Tuple[TimelineBar, ...]

    @property
    def is_empty(self) -> bool:
        """No task has both dates; a valid state, rendered as a notice."""
        return not self.bars

    @property
    def axis_span(self) -> timedelta:
        return self.axis_end - self.axis_start


def derive_timeline(project: Project) -> Timeline:
    project_start = parse_utc(project.start_date)
    project_end = parse_utc(project.end_date)

    bars = []
    for task in project.tasks:
        if not task.start_date or not task.due_date:
            continue
        task_start = parse_utc(task.start_date)
        task_due = parse_utc(task.due_date)
        bars.append(
            TimelineBar(
                title=task.title,
                offset=task_start - project_start,
                duration=task_due - task_start,
                status=task.status,
                formatted_start=fmt_date(task_start),
                formatted_due=fmt_date(task_due),
            )
        )

    # sorted() is stable: equal offsets keep task order
    bars = sorted(bars, key=lambda b: b.offset)
    return Timeline(
        project_start=project_start,
        axis_start=project_start - ONE_DAY,
        axis_end=project_end + ONE_DAY,
        bars=tuple(bars),
    )


BAR_COLORS = {
    TaskStatus.DONE: "#10b981",
    TaskStatus.IN_PROGRESS: "#3b82f6",
    TaskStatus.TODO: "#f59e0b",
}
FALLBACK_BAR_COLOR = "#6b7280"


def bar_color(status: TaskStatus) -> str:
    return BAR_COLORS.get(status, FALLBACK_BAR_COLOR)
