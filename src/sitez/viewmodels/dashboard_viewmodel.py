# Rev 0.2.0
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from ..models.entities import Client, Project, ProjectDraft
from ..models.types import ProjectStatus
from ..services import store
from ..services.filtering import ProjectFilter
from ..services.store import AppState

log = logging.getLogger(__name__)


class DashboardViewModel(QObject):
    """
    Owns the AppState for the session and runs every transition through the
    store reducers.

    Emits:
      filtered(list[Project], dict[ProjectStatus, int])  visible projects + counts
      selectionChanged(object)                           Project or None
      projectsChanged(list[Project])                     full collection (sidebar)
    """

    filtered = Signal(list, object)
    selectionChanged = Signal(object)
    projectsChanged = Signal(list)

    def __init__(self, state: Optional[AppState] = None):
        super().__init__()
        self._state = state if state is not None else AppState.seeded()

    # ---- queries
    @property
    def state(self) -> AppState:
        return self._state

    def clients(self) -> Tuple[Client, ...]:
        return self._state.clients

    def projects(self) -> Tuple[Project, ...]:
        return self._state.projects

    def visible_projects(self) -> Tuple[Project, ...]:
        return store.visible_projects(self._state)

    def status_counts(self) -> Dict[ProjectStatus, int]:
        return store.status_counts(self._state)

    def selected_project(self) -> Optional[Project]:
        return store.selected_project(self._state)

    def filters(self) -> ProjectFilter:
        return self._state.filters

    # ---- commands
    def reload(self) -> None:
        self.projectsChanged.emit(list(self._state.projects))
        self._emit_filtered()
        self.selectionChanged.emit(self.selected_project())

    def set_filters(self, spec: ProjectFilter) -> None:
        if spec == self._state.filters:
            return
        self._state = store.replace_filters(self._state, spec)
        log.debug("filters -> %s", spec)
        self._emit_filtered()

    def clear_filters(self) -> None:
        self.set_filters(ProjectFilter.cleared())

    def select_project(self, project_id: Optional[str]) -> None:
        self._state = store.select_project(self._state, project_id)
        self.selectionChanged.emit(self.selected_project())

    def add_project(self, draft: ProjectDraft) -> Project:
        """Raises store.ProjectValidationError without touching state."""
        self._state, project = store.add_project(self._state, draft)
        log.info("Added project %s (%s) for client %s", project.id, project.name, project.client.id)
        self.projectsChanged.emit(list(self._state.projects))
        self._emit_filtered()
        return project

    # ---- internals
    def _emit_filtered(self) -> None:
        self.filtered.emit(list(self.visible_projects()), self.status_counts())

