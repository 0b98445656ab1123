# Rev 0.2.0
# siteZ main window: sidebar + dashboard/detail stack + diagnostics dock

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QMainWindow, QStackedWidget, QWidget

from ..models.types import AITool
from ..viewmodels.ai_tool_viewmodel import AIToolViewModel
from ..viewmodels.dashboard_viewmodel import DashboardViewModel
from ..viewmodels.project_detail_viewmodel import ProjectDetailViewModel
from .diagnostics_dock import DiagnosticsDock
from .dialogs.add_project_dialog import AddProjectDialog
from .dialogs.ai_tool_dialog import AIToolDialog
from .panels.dashboard_panel import DashboardPanel
from .panels.project_detail_panel import ProjectDetailPanel
from .panels.projects_panel import ProjectsPanel

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(
        self,
        *,
        dashboard_vm: DashboardViewModel,
        ai_vm_factory: Callable[[], AIToolViewModel],
        logfile: Optional[Path] = None,
        show_diagnostics: bool = False,
        parent=None,
    ):
        super().__init__(parent)
        self._vm = dashboard_vm
        self._detail_vm = ProjectDetailViewModel()
        self._ai_vm_factory = ai_vm_factory

        self.setWindowTitle("siteZ - Construction Projects")

        # ---- central ----
        central = QWidget(self)
        h = QHBoxLayout(central)
        h.setContentsMargins(0, 0, 0, 0)
        h.setSpacing(0)

        self._sidebar = ProjectsPanel(self)
        self._dashboard = DashboardPanel(self)
        self._detail = ProjectDetailPanel(self)
        self._stack = QStackedWidget(self)
        self._stack.addWidget(self._dashboard)
        self._stack.addWidget(self._detail)

        h.addWidget(self._sidebar)
        h.addWidget(self._stack, 1)
        self.setCentralWidget(central)

        # ---- diagnostics dock ----
        self._dock = DiagnosticsDock(logfile, self)
        self.addDockWidget(Qt.BottomDockWidgetArea, self._dock)
        self._dock.setVisible(show_diagnostics)

        # ---- wiring ----
        self._sidebar.dashboardRequested.connect(lambda: self._vm.select_project(None))
        self._sidebar.projectSelected.connect(self._vm.select_project)
        self._sidebar.aiToolRequested.connect(self._open_ai_tool)

        self._dashboard.projectSelected.connect(self._vm.select_project)
        self._dashboard.filtersChanged.connect(self._vm.set_filters)
        self._dashboard.clearRequested.connect(self._clear_filters)
        self._dashboard.newProjectRequested.connect(self._open_add_project)

        self._detail.backRequested.connect(lambda: self._vm.select_project(None))

        self._vm.filtered.connect(self._dashboard.set_projects)
        self._vm.projectsChanged.connect(self._sidebar.load)
        self._vm.selectionChanged.connect(self._on_selection)
        self._detail_vm.loaded.connect(self._detail.set_info)

        # initial load
        self._dashboard.set_clients(list(self._vm.clients()))
        self._dashboard.show_filters(self._vm.filters())
        self._vm.reload()

    def diagnostics_visible(self) -> bool:
        return not self._dock.isHidden()

    # -------------------- slots --------------------

    def _on_selection(self, project):
        self._detail_vm.load(project)
        self._sidebar.mark_selected(project.id if project else None)
        self._stack.setCurrentWidget(self._detail if project else self._dashboard)

    def _clear_filters(self):
        self._vm.clear_filters()
        self._dashboard.show_filters(self._vm.filters())

    def _open_add_project(self):
        dlg = AddProjectDialog(self._vm.clients(), self._vm.add_project, parent=self)
        dlg.exec()

    def _open_ai_tool(self, tool: AITool):
        log.info("Opening AI tool %s", tool)
        dlg = AIToolDialog(self._ai_vm_factory(), tool, project=self._vm.selected_project(), parent=self)
        dlg.setAttribute(Qt.WA_DeleteOnClose)
        # non-modal: browsing stays interactive while a request is pending
        dlg.show()
