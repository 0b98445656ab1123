# tests/test_store.py
from __future__ import annotations

from dataclasses import replace

import pytest

from sitez.models.entities import ProjectDraft
from sitez.models.types import ProjectStatus
from sitez.services import store
from sitez.services.filtering import ProjectFilter
from sitez.services.store import AppState, ProjectValidationError


def draft(**overrides) -> ProjectDraft:
    values = dict(
        name="Galpão Logístico Norte",
        client_id="cli2",
        description="Warehouse with loading docks",
        start_date="2025-02-01",
        end_date="2025-12-15",
        budget=2_500_000,
        status=ProjectStatus.PLANNED,
    )
    values.update(overrides)
    return ProjectDraft(**values)


def test_seeded_state(state):
    assert [p.id for p in state.projects] == ["proj1", "proj2", "proj3"]
    assert [c.id for c in state.clients] == ["cli1", "cli2"]
    assert state.filters.is_cleared
    assert state.selected_project_id is None


def test_add_project_appends_with_defaults(state):
    new_state, project = store.add_project(state, draft())
    assert project.id == "proj4"
    assert project.tasks == ()
    assert project.spent == 0
    assert project.client.id == "cli2"
    assert new_state.projects[-1] is project
    assert len(state.projects) == 3  # input untouched


def test_add_project_without_clients_is_rejected_before_any_change():
    empty = AppState(projects=(), clients=())
    with pytest.raises(ProjectValidationError, match="No client available"):
        store.add_project(empty, draft(client_id=""))
    assert empty.projects == ()


@pytest.mark.parametrize(
    "overrides,match",
    [
        ({"client_id": "cli404"}, "not valid"),
        ({"name": "   "}, "name is required"),
        ({"budget": -1}, "zero or more"),
        ({"start_date": ""}, "Start date"),
        ({"end_date": "soon"}, "Invalid date"),
    ],
)
def test_add_project_validation(state, overrides, match):
    with pytest.raises(ProjectValidationError, match=match):
        store.add_project(state, draft(**overrides))


def test_new_ids_follow_largest_suffix(state):
    gap = replace(state, projects=state.projects + (replace(state.projects[0], id="proj10"),))
    _, project = store.add_project(gap, draft())
    assert project.id == "proj11"


def test_filter_reducers(state):
    s1 = store.replace_filters(state, ProjectFilter(client_id="cli1"))
    assert [p.id for p in store.visible_projects(s1)] == ["proj1", "proj3"]
    assert state.filters.is_cleared
    s2 = store.clear_filters(s1)
    assert s2.filters == ProjectFilter.cleared()
    assert store.visible_projects(s2) == state.projects


def test_counts_ignore_filters(state):
    s1 = store.replace_filters(state, ProjectFilter(status=ProjectStatus.DELAYED))
    assert store.status_counts(s1) == store.status_counts(state)


def test_select_project(state):
    s1 = store.select_project(state, "proj2")
    assert store.selected_project(s1).name == "Casa de Campo Martins"
    assert store.selected_project(store.select_project(s1, None)) is None
    with pytest.raises(ValueError):
        store.select_project(state, "nope")
