# Rev 0.2.0
# siteZ AI tools dialog (schedule draft / risk analysis)
from __future__ import annotations

import html
from typing import Optional

from PySide6.QtCore import QDate, Qt
from PySide6.QtWidgets import (
    QDateEdit, QDialog, QFormLayout, QHBoxLayout, QHeaderView, QLabel, QPushButton,
    QSpinBox, QStackedWidget, QTableWidget, QTableWidgetItem, QTextBrowser, QTextEdit,
    QVBoxLayout, QWidget,
)

from ...models.entities import Project, Schedule
from ...models.types import AITool
from ...services.ai_request import RequestPhase, RequestState
from ...utils.dates import date_or_today
from ...viewmodels.ai_tool_viewmodel import AIToolViewModel
from ..window_mode import lock_dialog_fixed

_TITLES = {"schedule": "Generate Schedule with AI", "risk": "Risk Analysis with AI"}
DEFAULT_DURATION_DAYS = 90


class AIToolDialog(QDialog):
    def __init__(self, vm: AIToolViewModel, tool: AITool, project: Optional[Project] = None, parent=None):
        super().__init__(parent)
        self._vm = vm
        self._tool = tool
        self._closed = False
        self.setWindowTitle(_TITLES[tool])

        self._desc = QTextEdit()
        self._desc.setAcceptRichText(False)
        self._desc.setPlaceholderText("Describe the construction project…")
        self._desc.setPlainText(project.description if project else "")
        self._desc.textChanged.connect(self._sync_submit)

        self._duration = QSpinBox()
        self._duration.setRange(1, 3650)
        self._duration.setValue(DEFAULT_DURATION_DAYS)
        self._duration.setSuffix(" days")

        self._start = QDateEdit(QDate.fromString(date_or_today(project.start_date if project else None), Qt.ISODate))
        self._start.setCalendarPopup(True)
        self._start.setDisplayFormat("dd/MM/yyyy")

        form = QFormLayout()
        form.addRow("Project description:", self._desc)
        if tool == "schedule":
            form.addRow("Duration:", self._duration)
            form.addRow("Start date:", self._start)

        self._btn_submit = QPushButton("Generate" if tool == "schedule" else "Analyze risks")
        self._btn_submit.clicked.connect(self._submit)
        btn_close = QPushButton("Close")
        btn_close.clicked.connect(self.reject)
        buttons = QHBoxLayout()
        buttons.addStretch(1)
        buttons.addWidget(btn_close)
        buttons.addWidget(self._btn_submit)

        self._status = QLabel("")
        self._status.setWordWrap(True)

        self._schedule_view = QTextBrowser()
        self._risk_table = QTableWidget(0, 3)
        self._risk_table.setHorizontalHeaderLabels(["Risk", "Probability", "Mitigation"])
        self._risk_table.verticalHeader().setVisible(False)
        self._risk_table.setWordWrap(True)
        h = self._risk_table.horizontalHeader()
        h.setSectionResizeMode(0, QHeaderView.Stretch)
        h.setSectionResizeMode(1, QHeaderView.ResizeToContents)
        h.setSectionResizeMode(2, QHeaderView.Stretch)
        self._results = QStackedWidget()
        self._results.addWidget(QWidget())
        self._results.addWidget(self._schedule_view)
        self._results.addWidget(self._risk_table)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addLayout(buttons)
        root.addWidget(self._status)
        root.addWidget(self._results, 1)

        lock_dialog_fixed(self, width_ratio=0.55, height_ratio=0.75)

        self._vm.stateChanged.connect(self._on_state)
        self._on_state(self._vm.state)

    # ---------- actions ----------
    def _submit(self):
        desc = self._desc.toPlainText().strip()
        if not desc or self._vm.state.is_pending:
            return
        if self._tool == "schedule":
            self._vm.submit_schedule(desc, self._duration.value(), self._start.date().toString(Qt.ISODate))
        else:
            self._vm.submit_risk(desc)

    def _sync_submit(self):
        pending = self._vm.state.is_pending
        self._btn_submit.setEnabled(not pending and bool(self._desc.toPlainText().strip()))

    def done(self, result):
        # Closing abandons any request in flight; a late reply is dropped.
        if not self._closed:
            self._closed = True
            self._vm.stateChanged.disconnect(self._on_state)
            self._vm.close()
        super().done(result)

    # ---------- rendering ----------
    def _on_state(self, state: RequestState):
        self._sync_submit()
        if state.phase is RequestPhase.PENDING:
            self._btn_submit.setText("Generating…")
            self._status.setStyleSheet("color: #4b5563;")
            self._status.setText("Waiting for the AI response…")
            self._results.setCurrentIndex(0)
            return

        self._btn_submit.setText("Generate" if self._tool == "schedule" else "Analyze risks")
        if state.phase is RequestPhase.FAILED:
            self._status.setStyleSheet("color: #b91c1c;")
            self._status.setText(state.error or "")
            self._results.setCurrentIndex(0)
        elif state.phase is RequestPhase.SUCCEEDED:
            self._status.setText("")
            self._render_result(state.result)
        else:
            self._status.setText("")
            self._results.setCurrentIndex(0)

    def _render_result(self, result):
        if isinstance(result, Schedule):
            parts = ["<h3>Suggested Schedule</h3>"]
            for phase in result.phases:
                parts.append(f"<h4 style='color:#4f46e5'>{html.escape(phase.name)} ({html.escape(phase.duration)})</h4><ul>")
                parts.extend(f"<li>{html.escape(t)}</li>" for t in phase.tasks)
                parts.append("</ul>")
            self._schedule_view.setHtml("".join(parts))
            self._results.setCurrentWidget(self._schedule_view)
            return

        risks = list(result or [])
        self._risk_table.setRowCount(len(risks))
        for row, r in enumerate(risks):
            for col, text in enumerate((r.risk, r.probability, r.mitigation)):
                item = QTableWidgetItem(text)
                item.setFlags(item.flags() ^ Qt.ItemIsEditable)
                self._risk_table.setItem(row, col, item)
        self._risk_table.resizeRowsToContents()
        self._results.setCurrentWidget(self._risk_table)
