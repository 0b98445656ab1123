# tests/test_filtering.py
from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from sitez.models.types import ALL, ProjectStatus
from sitez.services.filtering import (
    ProjectFilter,
    apply_filter,
    count_by_status,
    filter_projects,
)


def ids(projects):
    return [p.id for p in projects]


def test_cleared_filter_returns_everything_in_order(projects):
    assert filter_projects(projects, ProjectFilter.cleared()) == tuple(projects)
    assert ProjectFilter.cleared().is_cleared


def test_client_filter_cli1(projects):
    out = filter_projects(projects, ProjectFilter(client_id="cli1"))
    assert ids(out) == ["proj1", "proj3"]
    assert all(p.client.id == "cli1" for p in out)


def test_status_filter(projects):
    out = filter_projects(projects, ProjectFilter(status=ProjectStatus.DELAYED))
    assert ids(out) == ["proj2"]
    assert filter_projects(projects, ProjectFilter(status=ProjectStatus.COMPLETED)) == ()


def test_predicates_combine_with_and(projects):
    spec = ProjectFilter(status=ProjectStatus.PLANNED, client_id="cli2")
    assert filter_projects(projects, spec) == ()
    spec = ProjectFilter(status=ProjectStatus.PLANNED, client_id="cli1")
    assert ids(filter_projects(projects, spec)) == ["proj3"]


@pytest.mark.parametrize(
    "after,before,expected",
    [
        (date(2023, 3, 1), None, ["proj2", "proj3"]),        # lower bound is inclusive
        (None, date(2023, 3, 1), ["proj1", "proj2"]),        # upper bound is inclusive
        (date(2023, 1, 16), date(2024, 5, 31), ["proj2"]),
        (date(2025, 1, 1), None, []),
    ],
)
def test_start_date_bounds(projects, after, before, expected):
    spec = ProjectFilter(start_after=after, start_before=before)
    assert ids(filter_projects(projects, spec)) == expected


def test_time_of_day_does_not_skew_bounds(projects):
    # 21:30 UTC on June 1st still counts as June 1st
    late = replace(projects[2], start_date="2024-06-01T18:30:00-03:00")
    spec = ProjectFilter(start_after=date(2024, 6, 1), start_before=date(2024, 6, 1))
    assert ids(filter_projects([late], spec)) == ["proj3"]


def test_filter_is_idempotent(projects):
    for spec in (
        ProjectFilter(client_id="cli1"),
        ProjectFilter(status=ProjectStatus.IN_PROGRESS),
        ProjectFilter(start_after=date(2023, 2, 1)),
        ProjectFilter.cleared(),
    ):
        once = filter_projects(projects, spec)
        assert filter_projects(once, spec) == once


def test_counts_include_zero_statuses(projects):
    counts = count_by_status(projects)
    assert set(counts) == set(ProjectStatus)
    assert counts[ProjectStatus.COMPLETED] == 0
    assert counts[ProjectStatus.PLANNED] == 1
    assert counts[ProjectStatus.IN_PROGRESS] == 1
    assert counts[ProjectStatus.DELAYED] == 1


def test_counts_sum_to_collection_size(projects):
    bigger = list(projects) + [replace(projects[0], id="proj9", status=ProjectStatus.COMPLETED)]
    for coll in (projects, bigger, []):
        assert sum(count_by_status(coll).values()) == len(coll)


def test_apply_filter_counts_full_collection(projects):
    result = apply_filter(projects, ProjectFilter(client_id="cli2"))
    assert ids(result.projects) == ["proj2"]
    assert sum(result.counts.values()) == len(projects)


def test_from_form_treats_blank_as_unset():
    spec = ProjectFilter.from_form(status="All", client_id="", start_after="", start_before="2024-01-31")
    assert spec.status == ALL
    assert spec.client_id == ALL
    assert spec.start_after is None
    assert spec.start_before == date(2024, 1, 31)


def test_from_form_parses_status_value():
    assert ProjectFilter.from_form(status="Delayed").status is ProjectStatus.DELAYED
