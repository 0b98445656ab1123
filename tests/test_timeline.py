# tests/test_timeline.py
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from sitez.models.entities import Task
from sitez.models.types import TaskStatus
from sitez.services.timeline import FALLBACK_BAR_COLOR, bar_color, derive_timeline


def test_foundation_task_offset_and_duration(project_by_id):
    tl = derive_timeline(project_by_id["proj1"])
    foundation = next(b for b in tl.bars if b.title == "Foundation work")
    assert foundation.offset == timedelta(days=27)
    assert foundation.duration == timedelta(days=78)
    assert foundation.formatted_start == "11/02/2023"
    assert foundation.formatted_due == "30/04/2023"
    assert foundation.status is TaskStatus.IN_PROGRESS


def test_axis_is_padded_by_one_day(project_by_id):
    tl = derive_timeline(project_by_id["proj1"])
    assert tl.axis_start == datetime(2023, 1, 14, tzinfo=timezone.utc)
    assert tl.axis_end == datetime(2024, 12, 21, tzinfo=timezone.utc)


def test_every_dated_task_gets_a_bar(projects):
    for p in projects:
        tl = derive_timeline(p)
        assert len(tl.bars) == len(p.tasks)


def test_tasks_missing_a_date_are_skipped(project_by_id):
    base = project_by_id["proj1"]
    tasks = base.tasks + (
        Task("t8", "No due", start_date="2023-03-01"),
        Task("t9", "No start", due_date="2023-03-01"),
        Task("t10", "No dates"),
    )
    tl = derive_timeline(replace(base, tasks=tasks))
    assert len(tl.bars) == len(base.tasks)
    assert len(tl.bars) < len(tasks)
    assert {b.title for b in tl.bars}.isdisjoint({"No due", "No start", "No dates"})


def test_project_without_dated_tasks_is_empty_not_error(project_by_id):
    tl = derive_timeline(project_by_id["proj3"])
    assert tl.is_empty
    assert tl.bars == ()


def test_bars_sorted_by_offset(project_by_id):
    base = project_by_id["proj1"]
    shuffled = tuple(reversed(base.tasks))
    tl = derive_timeline(replace(base, tasks=shuffled))
    offsets = [b.offset for b in tl.bars]
    assert offsets == sorted(offsets)
    assert [b.title for b in tl.bars] == ["Site earthworks", "Foundation work", "Structural framing"]


def test_equal_offsets_keep_input_order(project_by_id):
    base = project_by_id["proj3"]
    tasks = (
        Task("a", "First", start_date="2024-07-01", due_date="2024-07-20"),
        Task("b", "Second", start_date="2024-07-01", due_date="2024-07-05"),
        Task("c", "Earlier", start_date="2024-06-10", due_date="2024-06-11"),
    )
    tl = derive_timeline(replace(base, tasks=tasks))
    assert [b.title for b in tl.bars] == ["Earlier", "First", "Second"]


def test_partial_days_are_preserved(project_by_id):
    base = project_by_id["proj3"]
    tasks = (Task("a", "Half day in", start_date="2024-06-01T12:00:00", due_date="2024-06-03T18:00:00"),)
    bar = derive_timeline(replace(base, tasks=tasks)).bars[0]
    assert bar.offset == timedelta(hours=12)
    assert bar.duration == timedelta(days=2, hours=6)


def test_inverted_range_passes_through(project_by_id):
    base = project_by_id["proj3"]
    tasks = (Task("a", "Backwards", start_date="2024-07-10", due_date="2024-07-01"),)
    bar = derive_timeline(replace(base, tasks=tasks)).bars[0]
    assert bar.duration == timedelta(days=-9)
    assert bar.is_inverted


@pytest.mark.parametrize(
    "status,color",
    [
        (TaskStatus.DONE, "#10b981"),
        (TaskStatus.IN_PROGRESS, "#3b82f6"),
        (TaskStatus.TODO, "#f59e0b"),
    ],
)
def test_bar_colors(status, color):
    assert bar_color(status) == color


def test_unknown_status_uses_fallback_color():
    assert bar_color("Archived") == FALLBACK_BAR_COLOR
