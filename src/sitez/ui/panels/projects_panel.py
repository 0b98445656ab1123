# src/sitez/ui/panels/projects_panel.py
# Rev 0.2.0
# Sidebar: dashboard link, collapsible project list, AI tools

from __future__ import annotations
from typing import Iterable, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QIcon, QPixmap, QPainter
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QListWidget, QListWidgetItem, QPushButton, QToolButton,
)

from ...models.entities import Project
from ..styles import project_dot_color


def _dot_icon(color: str, size: int = 10) -> QIcon:
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)
    p = QPainter(pm)
    p.setRenderHint(QPainter.Antialiasing)
    p.setPen(Qt.NoPen)
    p.setBrush(QColor(color))
    p.drawEllipse(0, 0, size, size)
    p.end()
    return QIcon(pm)


class ProjectsPanel(QWidget):
    dashboardRequested = Signal()
    projectSelected = Signal(str)   # project id
    aiToolRequested = Signal(str)   # "schedule" | "risk"

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setFixedWidth(256)

        title = QLabel("siteZ")
        title.setStyleSheet("font-size: 18px; font-weight: 700; padding: 8px 4px;")

        self._btn_dashboard = QPushButton("Dashboard")
        self._btn_dashboard.setCheckable(True)
        self._btn_dashboard.setChecked(True)
        self._btn_dashboard.clicked.connect(self.dashboardRequested.emit)

        self._btn_projects = QToolButton()
        self._btn_projects.setText("Projects")
        self._btn_projects.setCheckable(True)
        self._btn_projects.setToolButtonStyle(Qt.ToolButtonTextBesideIcon)
        self._btn_projects.setArrowType(Qt.RightArrow)
        self._btn_projects.toggled.connect(self.set_projects_expanded)

        self._list = QListWidget(self)
        self._list.setVisible(False)
        self._list.itemClicked.connect(self._emit_selection)
        self._list.itemActivated.connect(self._emit_selection)

        tools = QLabel("AI TOOLS")
        tools.setStyleSheet("color: #6b7280; font-size: 11px; font-weight: 600; padding-top: 12px;")
        btn_schedule = QPushButton("Generate Schedule")
        btn_schedule.clicked.connect(lambda: self.aiToolRequested.emit("schedule"))
        btn_risk = QPushButton("Risk Analysis")
        btn_risk.clicked.connect(lambda: self.aiToolRequested.emit("risk"))

        lay = QVBoxLayout(self)
        lay.addWidget(title)
        lay.addWidget(self._btn_dashboard)
        lay.addWidget(self._btn_projects)
        lay.addWidget(self._list)
        lay.addWidget(tools)
        lay.addWidget(btn_schedule)
        lay.addWidget(btn_risk)
        lay.addStretch(1)

    def load(self, projects: Iterable[Project]) -> None:
        current = self.current_project_id()
        self._list.clear()
        for p in projects:
            item = QListWidgetItem(_dot_icon(project_dot_color(p.status)), p.name)
            item.setData(Qt.UserRole, p.id)
            item.setToolTip(f"{p.name} ({p.status.value})")
            self._list.addItem(item)
        if current is not None:
            self.mark_selected(current)

    def set_projects_expanded(self, expanded: bool) -> None:
        self._btn_projects.blockSignals(True)
        self._btn_projects.setChecked(expanded)
        self._btn_projects.blockSignals(False)
        self._btn_projects.setArrowType(Qt.DownArrow if expanded else Qt.RightArrow)
        self._list.setVisible(expanded)

    def mark_selected(self, project_id: Optional[str]) -> None:
        """Highlight the open project (None → dashboard)."""
        self._btn_dashboard.setChecked(project_id is None)
        self._list.blockSignals(True)
        self._list.clearSelection()
        for row in range(self._list.count()):
            item = self._list.item(row)
            if item.data(Qt.UserRole) == project_id:
                self._list.setCurrentItem(item)
                break
        self._list.blockSignals(False)
        if project_id is not None:
            self.set_projects_expanded(True)

    def current_project_id(self) -> Optional[str]:
        item = self._list.currentItem()
        return item.data(Qt.UserRole) if item else None

    def _emit_selection(self, item=None) -> None:
        if item is None:
            item = self._list.currentItem()
        if not item:
            return
        self.projectSelected.emit(str(item.data(Qt.UserRole)))
