# Rev 0.2.0
# siteZ – status colors. Project and task statuses are separate enums with
# separate lookups; they only happen to share a palette.
from __future__ import annotations

from PySide6.QtWidgets import QLabel, QSizePolicy

from ..models.types import ProjectStatus, TaskStatus

_TEXT   = "#222222"
_MUTED  = "#6b7280"
_CARD   = "#ffffff"
_BORDER = "#e5e5e5"
_ACCENT = "#4f46e5"

_GREEN  = ("#166534", "#dcfce7")
_BLUE   = ("#1e40af", "#dbeafe")
_RED    = ("#991b1b", "#fee2e2")
_YELLOW = ("#854d0e", "#fef9c3")
_GRAY   = ("#1f2937", "#f3f4f6")

PROJECT_CHIP = {
    ProjectStatus.COMPLETED: _GREEN,
    ProjectStatus.IN_PROGRESS: _BLUE,
    ProjectStatus.DELAYED: _RED,
    ProjectStatus.PLANNED: _YELLOW,
}

TASK_CHIP = {
    TaskStatus.DONE: _GREEN,
    TaskStatus.IN_PROGRESS: _BLUE,
    TaskStatus.TODO: _YELLOW,
}

PROJECT_DOT = {
    ProjectStatus.COMPLETED: "#22c55e",
    ProjectStatus.IN_PROGRESS: "#3b82f6",
    ProjectStatus.DELAYED: "#ef4444",
    ProjectStatus.PLANNED: "#eab308",
}


def _chip(text: str, colors: tuple[str, str]) -> QLabel:
    fg, bg = colors
    lab = QLabel(text)
    lab.setStyleSheet(
        "QLabel {"
        f"  color: {fg};"
        f"  background-color: {bg};"
        "  border-radius: 8px;"
        "  padding: 2px 8px;"
        "  font-size: 11px;"
        "  font-weight: 600;"
        "}"
    )
    lab.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
    return lab


def project_chip(status: ProjectStatus) -> QLabel:
    return _chip(status.value, PROJECT_CHIP.get(status, _GRAY))


def task_chip(status: TaskStatus) -> QLabel:
    return _chip(status.value, TASK_CHIP.get(status, _GRAY))


def project_dot_color(status: ProjectStatus) -> str:
    return PROJECT_DOT.get(status, _MUTED)


CARD_QSS = (
    "QFrame#card {"
    f"  background-color: {_CARD};"
    f"  border: 1px solid {_BORDER};"
    "  border-radius: 8px;"
    "}"
)
