# Rev 0.2.0
# project header, tasks, timeline, details
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFormLayout, QFrame, QGroupBox, QHBoxLayout, QLabel, QPushButton,
    QScrollArea, QVBoxLayout, QWidget,
)

from ..styles import project_chip, task_chip
from .gantt_panel import GanttPanel

NO_TASKS_TEXT = "No tasks registered."


class ProjectDetailPanel(QWidget):
    backRequested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._init_ui()

    def _init_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        body = QWidget()
        scroll.setWidget(body)
        outer.addWidget(scroll)

        root = QVBoxLayout(body)
        root.setContentsMargins(24, 24, 24, 24)
        root.setSpacing(16)

        btn_back = QPushButton("← Back to all projects")
        btn_back.setFlat(True)
        btn_back.setStyleSheet("color: #4f46e5; text-align: left;")
        btn_back.clicked.connect(self.backRequested.emit)
        root.addWidget(btn_back, 0, Qt.AlignLeft)

        # header
        head = QHBoxLayout()
        titles = QVBoxLayout()
        self._lbl_name = QLabel("-")
        self._lbl_name.setStyleSheet("font-size: 28px; font-weight: 800;")
        self._lbl_client = QLabel("-")
        self._lbl_client.setStyleSheet("color: #6b7280; font-size: 15px;")
        titles.addWidget(self._lbl_name)
        titles.addWidget(self._lbl_client)
        head.addLayout(titles, 1)
        self._chip_host = QHBoxLayout()
        head.addLayout(self._chip_host)
        root.addLayout(head)

        self._lbl_desc = QLabel("-")
        self._lbl_desc.setWordWrap(True)
        self._lbl_desc.setStyleSheet("color: #4b5563;")
        root.addWidget(self._lbl_desc)

        columns = QHBoxLayout()
        columns.setSpacing(16)

        # tasks
        box_tasks = QGroupBox("Tasks")
        self._tasks_layout = QVBoxLayout(box_tasks)
        columns.addWidget(box_tasks, 2)

        side = QVBoxLayout()
        box_timeline = QGroupBox("Project Timeline")
        tl_lay = QVBoxLayout(box_timeline)
        self._gantt = GanttPanel()
        tl_lay.addWidget(self._gantt)
        side.addWidget(box_timeline)

        self._lbl_start = QLabel("-")
        self._lbl_end = QLabel("-")
        self._lbl_contact = QLabel("-")
        self._lbl_email = QLabel("-")
        self._lbl_budget = QLabel("-")
        self._lbl_spent = QLabel("-")
        self._lbl_spent.setStyleSheet("color: #dc2626; font-weight: 600;")
        self._lbl_remaining = QLabel("-")

        form = QFormLayout()
        form.addRow("Start date:", self._lbl_start)
        form.addRow("End date:", self._lbl_end)
        form.addRow("Client contact:", self._lbl_contact)
        form.addRow("Client email:", self._lbl_email)
        form.addRow(QLabel("<hr/>"))
        form.addRow("Total budget:", self._lbl_budget)
        form.addRow("Amount spent:", self._lbl_spent)
        form.addRow("Remaining balance:", self._lbl_remaining)
        box_details = QGroupBox("Details")
        box_details.setLayout(form)
        side.addWidget(box_details)
        side.addStretch(1)
        columns.addLayout(side, 1)

        root.addLayout(columns)
        root.addStretch(1)

    # ---------- Public API ----------
    def set_info(self, info: dict) -> None:
        """Render the dict emitted by ProjectDetailViewModel.loaded."""
        if not info:
            for lbl in (self._lbl_name, self._lbl_client, self._lbl_desc, self._lbl_start, self._lbl_end,
                        self._lbl_contact, self._lbl_email, self._lbl_budget, self._lbl_spent, self._lbl_remaining):
                lbl.setText("-")
            self._clear(self._chip_host)
            self._clear(self._tasks_layout)
            self._gantt.set_timeline(None)
            return

        project = info["project"]
        self._lbl_name.setText(project.name)
        self._lbl_client.setText(project.client.name)
        self._lbl_desc.setText(project.description)

        self._clear(self._chip_host)
        self._chip_host.addWidget(project_chip(project.status))

        self._clear(self._tasks_layout)
        if project.tasks:
            for task in project.tasks:
                self._tasks_layout.addWidget(self._task_row(task))
        else:
            empty = QLabel(NO_TASKS_TEXT)
            empty.setStyleSheet("color: #6b7280;")
            self._tasks_layout.addWidget(empty)
        self._tasks_layout.addStretch(1)

        self._gantt.set_timeline(info["timeline"])

        self._lbl_start.setText(info["start"])
        self._lbl_end.setText(info["end"])
        self._lbl_contact.setText(project.client.contact)
        self._lbl_email.setText(project.client.email)
        self._lbl_budget.setText(info["budget"])
        self._lbl_spent.setText(info["spent"])
        self._lbl_remaining.setText(info["remaining"])
        color = "#dc2626" if info["over_budget"] else "#16a34a"
        self._lbl_remaining.setStyleSheet(f"color: {color}; font-weight: 600;")

    # ---------- internals ----------
    @staticmethod
    def _task_row(task) -> QWidget:
        row = QWidget()
        lay = QHBoxLayout(row)
        lay.setContentsMargins(4, 6, 4, 6)
        text = QVBoxLayout()
        title = QLabel(task.title)
        title.setStyleSheet("font-weight: 600;")
        text.addWidget(title)
        if task.description:
            desc = QLabel(task.description)
            desc.setStyleSheet("color: #6b7280;")
            text.addWidget(desc)
        lay.addLayout(text, 1)
        lay.addWidget(task_chip(task.status))
        return row

    def _clear(self, layout) -> None:
        while layout.count():
            item = layout.takeAt(0)
            if item is None:
                continue
            child_layout = item.layout()
            child_widget = item.widget()
            if child_layout is not None:
                self._clear(child_layout)
            if child_widget is not None:
                child_widget.deleteLater()
