# Rev 0.2.0
"""Application state and its transitions.

AppState is immutable; every reducer returns a new state and leaves the input
untouched. Validation happens before anything is built, so a rejected
add_project never produces a partial state.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from ..models.entities import Client, Project, ProjectDraft
from ..models.seed import seed_clients, seed_projects
from ..models.types import ProjectStatus
from ..utils.dates import parse_utc
from .filtering import ProjectFilter, count_by_status, filter_projects


class ProjectValidationError(ValueError):
    """Raised by add_project when the form values can't produce a project."""


NO_CLIENTS_MESSAGE = "No client available. Add a client first."
UNKNOWN_CLIENT_MESSAGE = "The selected client is not valid."


@dataclass(frozen=True)
class AppState:
    projects: Tuple[Project, ...] = ()
    clients: Tuple[Client, ...] = ()
    filters: ProjectFilter = ProjectFilter()
    selected_project_id: Optional[str] = None

    @classmethod
    def seeded(cls) -> "AppState":
        clients = seed_clients()
        return cls(projects=seed_projects(clients), clients=clients)


# ---- reducers ---------------------------------------------------------------

def replace_filters(state: AppState, spec: ProjectFilter) -> AppState:
    return replace(state, filters=spec)


def clear_filters(state: AppState) -> AppState:
    return replace(state, filters=ProjectFilter.cleared())


def select_project(state: AppState, project_id: Optional[str]) -> AppState:
    if project_id is not None and find_project(state, project_id) is None:
        raise ValueError(f"unknown project id: {project_id}")
    return replace(state, selected_project_id=project_id)


def add_project(state: AppState, draft: ProjectDraft) -> Tuple[AppState, Project]:
    """Append a new project with no tasks and nothing spent."""
    if not state.clients:
        raise ProjectValidationError(NO_CLIENTS_MESSAGE)
    client = next((c for c in state.clients if c.id == draft.client_id), None)
    if client is None:
        raise ProjectValidationError(UNKNOWN_CLIENT_MESSAGE)
    name = (draft.name or "").strip()
    if not name:
        raise ProjectValidationError("Project name is required.")
    if draft.budget is None or draft.budget < 0:
        raise ProjectValidationError("Budget must be zero or more.")
    if not draft.start_date:
        raise ProjectValidationError("Start date is required.")
    try:
        parse_utc(draft.start_date)
        if draft.end_date:
            parse_utc(draft.end_date)
    except ValueError as exc:
        raise ProjectValidationError(f"Invalid date: {exc}") from exc

    project = Project(
        id=next_project_id(state.projects),
        name=name,
        client=client,
        description=(draft.description or "").strip(),
        start_date=draft.start_date,
        end_date=draft.end_date or draft.start_date,
        budget=float(draft.budget),
        spent=0.0,
        status=ProjectStatus(draft.status),
        tasks=(),
    )
    return replace(state, projects=state.projects + (project,)), project


_ID_RE = re.compile(r"^proj(\d+)$")


def next_project_id(projects: Tuple[Project, ...]) -> str:
    nums = [int(m.group(1)) for m in (_ID_RE.match(p.id) for p in projects) if m]
    return f"proj{max(nums, default=0) + 1}"


# ---- selectors --------------------------------------------------------------

def find_project(state: AppState, project_id: str) -> Optional[Project]:
    return next((p for p in state.projects if p.id == project_id), None)


def selected_project(state: AppState) -> Optional[Project]:
    if state.selected_project_id is None:
        return None
    return find_project(state, state.selected_project_id)


def visible_projects(state: AppState) -> Tuple[Project, ...]:
    return filter_projects(state.projects, state.filters)


def status_counts(state: AppState) -> Dict[ProjectStatus, int]:
    return count_by_status(state.projects)
