# Rev 0.2.0
# siteZ dashboard: status cards, filter bar, project cards
from __future__ import annotations

from typing import Dict, List

from PySide6.QtCore import QDate, Qt, Signal
from PySide6.QtWidgets import (
    QComboBox, QDateEdit, QFrame, QGridLayout, QHBoxLayout, QLabel, QProgressBar,
    QPushButton, QScrollArea, QVBoxLayout, QWidget, QCheckBox,
)

from ...models.entities import Client, Project
from ...models.types import ALL, ProjectStatus
from ...services.filtering import ProjectFilter
from ...utils.formatting import budget_used_pct, format_brl, format_pct
from ..styles import CARD_QSS, project_chip

EMPTY_TEXT = "No projects match the selected filters."
_CARD_COLUMNS = 3


class ProjectCard(QFrame):
    clicked = Signal(str)

    def __init__(self, project: Project, parent=None):
        super().__init__(parent)
        self._project_id = project.id
        self.setObjectName("card")
        self.setStyleSheet(CARD_QSS)
        self.setCursor(Qt.PointingHandCursor)

        name = QLabel(project.name)
        name.setStyleSheet("font-size: 16px; font-weight: 700;")
        client = QLabel(project.client.name)
        client.setStyleSheet("color: #6b7280;")

        head = QHBoxLayout()
        titles = QVBoxLayout()
        titles.addWidget(name)
        titles.addWidget(client)
        head.addLayout(titles, 1)
        head.addWidget(project_chip(project.status), 0, Qt.AlignTop)

        desc = QLabel(project.description)
        desc.setStyleSheet("color: #4b5563;")
        desc.setToolTip(project.description)
        desc.setMaximumHeight(desc.fontMetrics().height() + 2)

        pct = budget_used_pct(project.spent, project.budget)
        budget_row = QHBoxLayout()
        budget_row.addWidget(QLabel("Budget"))
        budget_row.addStretch(1)
        pct_lbl = QLabel(format_pct(pct))
        pct_lbl.setStyleSheet("color: #4f46e5; font-weight: 600;")
        budget_row.addWidget(pct_lbl)

        bar = QProgressBar()
        bar.setRange(0, 100)
        bar.setValue(int(min(max(pct, 0), 100)))
        bar.setTextVisible(False)
        bar.setFixedHeight(8)

        money = QHBoxLayout()
        spent = QLabel(format_brl(project.spent))
        budget = QLabel(format_brl(project.budget))
        for lbl in (spent, budget):
            lbl.setStyleSheet("color: #6b7280; font-size: 11px;")
        money.addWidget(spent)
        money.addStretch(1)
        money.addWidget(budget)

        lay = QVBoxLayout(self)
        lay.setContentsMargins(16, 16, 16, 16)
        lay.addLayout(head)
        lay.addWidget(desc)
        lay.addLayout(budget_row)
        lay.addWidget(bar)
        lay.addLayout(money)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.clicked.emit(self._project_id)
        super().mouseReleaseEvent(event)


class _OptionalDate(QWidget):
    """Date edit with an enable checkbox; unchecked means 'no bound'."""
    changed = Signal()

    def __init__(self, label: str, parent=None):
        super().__init__(parent)
        self._check = QCheckBox(label)
        self._date = QDateEdit(QDate.currentDate())
        self._date.setCalendarPopup(True)
        self._date.setDisplayFormat("dd/MM/yyyy")
        self._date.setEnabled(False)
        self._check.toggled.connect(self._date.setEnabled)
        self._check.toggled.connect(self.changed.emit)
        self._date.dateChanged.connect(lambda _d: self._check.isChecked() and self.changed.emit())
        lay = QVBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self._check)
        lay.addWidget(self._date)

    def value(self) -> str:
        return self._date.date().toString(Qt.ISODate) if self._check.isChecked() else ""

    def reset(self) -> None:
        self._check.setChecked(False)


class DashboardPanel(QWidget):
    projectSelected = Signal(str)
    filtersChanged = Signal(object)   # ProjectFilter
    clearRequested = Signal()
    newProjectRequested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._stat_labels: Dict[ProjectStatus, QLabel] = {}
        self._init_ui()

    def _init_ui(self):
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 24, 24, 24)
        root.setSpacing(16)

        header = QHBoxLayout()
        title = QLabel("Projects Dashboard")
        title.setStyleSheet("font-size: 24px; font-weight: 700;")
        btn_new = QPushButton("+ New Project")
        btn_new.clicked.connect(self.newProjectRequested.emit)
        header.addWidget(title)
        header.addStretch(1)
        header.addWidget(btn_new)
        root.addLayout(header)

        stats = QHBoxLayout()
        for status in ProjectStatus:
            card = QFrame()
            card.setObjectName("card")
            card.setStyleSheet(CARD_QSS)
            lay = QVBoxLayout(card)
            name = QLabel(status.value)
            name.setStyleSheet("color: #6b7280;")
            count = QLabel("0")
            count.setStyleSheet("font-size: 26px; font-weight: 700;")
            lay.addWidget(name)
            lay.addWidget(count)
            self._stat_labels[status] = count
            stats.addWidget(card)
        root.addLayout(stats)

        # ---- filter bar ----
        bar = QFrame()
        bar.setObjectName("card")
        bar.setStyleSheet(CARD_QSS)
        fl = QHBoxLayout(bar)

        self._cmb_status = QComboBox()
        self._cmb_status.addItem("All", ALL)
        for s in ProjectStatus:
            self._cmb_status.addItem(s.value, s.value)
        self._cmb_client = QComboBox()
        self._start_after = _OptionalDate("Start after")
        self._start_before = _OptionalDate("Start before")
        btn_clear = QPushButton("Clear filters")
        btn_clear.clicked.connect(self.clearRequested.emit)

        for label, w in (("Status", self._cmb_status), ("Client", self._cmb_client)):
            col = QVBoxLayout()
            col.addWidget(QLabel(label))
            col.addWidget(w)
            fl.addLayout(col)
        fl.addWidget(self._start_after)
        fl.addWidget(self._start_before)
        fl.addWidget(btn_clear, 0, Qt.AlignBottom)
        root.addWidget(bar)

        self._cmb_status.currentIndexChanged.connect(self._emit_filters)
        self._cmb_client.currentIndexChanged.connect(self._emit_filters)
        self._start_after.changed.connect(self._emit_filters)
        self._start_before.changed.connect(self._emit_filters)

        # ---- cards ----
        self._cards_host = QWidget()
        self._grid = QGridLayout(self._cards_host)
        self._grid.setSpacing(16)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setWidget(self._cards_host)
        root.addWidget(scroll, 1)

    # ---------- Public API ----------
    def set_clients(self, clients: List[Client]) -> None:
        self._cmb_client.blockSignals(True)
        self._cmb_client.clear()
        self._cmb_client.addItem("All", ALL)
        for c in clients:
            self._cmb_client.addItem(c.name, c.id)
        self._cmb_client.blockSignals(False)

    def show_filters(self, spec: ProjectFilter) -> None:
        """Reflect a filter spec in the controls without re-emitting."""
        widgets = (self._cmb_status, self._cmb_client, self._start_after, self._start_before)
        for w in widgets:
            w.blockSignals(True)
        status = spec.status.value if isinstance(spec.status, ProjectStatus) else ALL
        self._cmb_status.setCurrentIndex(max(0, self._cmb_status.findData(status)))
        self._cmb_client.setCurrentIndex(max(0, self._cmb_client.findData(spec.client_id)))
        if spec.start_after is None:
            self._start_after.reset()
        if spec.start_before is None:
            self._start_before.reset()
        for w in widgets:
            w.blockSignals(False)

    def set_projects(self, projects: List[Project], counts: Dict[ProjectStatus, int]) -> None:
        for status, lbl in self._stat_labels.items():
            lbl.setText(str(counts.get(status, 0)))

        while self._grid.count():
            item = self._grid.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        if not projects:
            empty = QLabel(EMPTY_TEXT)
            empty.setAlignment(Qt.AlignCenter)
            empty.setStyleSheet("color: #6b7280; font-size: 15px; padding: 40px;")
            self._grid.addWidget(empty, 0, 0, 1, _CARD_COLUMNS)
            return

        for i, p in enumerate(projects):
            card = ProjectCard(p)
            card.clicked.connect(self.projectSelected.emit)
            self._grid.addWidget(card, i // _CARD_COLUMNS, i % _CARD_COLUMNS, Qt.AlignTop)
        self._grid.setRowStretch(len(projects) // _CARD_COLUMNS + 1, 1)

    # ---------- internals ----------
    def _emit_filters(self, *_):
        spec = ProjectFilter.from_form(
            status=self._cmb_status.currentData() or ALL,
            client_id=self._cmb_client.currentData() or ALL,
            start_after=self._start_after.value(),
            start_before=self._start_before.value(),
        )
        self.filtersChanged.emit(spec)
