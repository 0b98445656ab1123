# src/sitez/ui/dialogs/add_project_dialog.py
# Rev 0.2.0
from __future__ import annotations
from typing import Callable, Iterable

from PySide6.QtCore import QDate, Qt
from PySide6.QtWidgets import (
    QComboBox, QDateEdit, QDialog, QDialogButtonBox, QDoubleSpinBox, QFormLayout,
    QLabel, QLineEdit, QMessageBox, QTextEdit, QVBoxLayout,
)

from ...models.entities import Client, Project, ProjectDraft
from ...models.types import ProjectStatus
from ...services.store import NO_CLIENTS_MESSAGE, ProjectValidationError
from ...utils.dates import today_iso
from ..window_mode import lock_dialog_fixed


class AddProjectDialog(QDialog):
    """
    Collects a ProjectDraft and hands it to `submit`. The dialog only closes
    when submit succeeds; validation errors are shown and nothing changes.
    """

    def __init__(self, clients: Iterable[Client], submit: Callable[[ProjectDraft], Project], parent=None):
        super().__init__(parent)
        self.setWindowTitle("Add New Project")
        self._submit = submit
        self.created: Project | None = None

        self._name = QLineEdit()
        self._name.setPlaceholderText("e.g. Residencial Vista Verde")

        clients = list(clients)
        self._client = QComboBox()
        for c in clients:
            self._client.addItem(c.name, c.id)
        self._client.setEnabled(bool(clients))

        self.no_clients_notice = QLabel(NO_CLIENTS_MESSAGE)
        self.no_clients_notice.setStyleSheet("QLabel { color: #b91c1c; font-size: 11px; }")

        self._desc = QTextEdit()
        self._desc.setAcceptRichText(False)
        self._desc.setPlaceholderText("Describe the project scope")

        today = QDate.fromString(today_iso(), Qt.ISODate)
        self._start = QDateEdit(today)
        self._end = QDateEdit(today)
        for d in (self._start, self._end):
            d.setCalendarPopup(True)
            d.setDisplayFormat("dd/MM/yyyy")

        self._budget = QDoubleSpinBox()
        self._budget.setRange(0, 1e12)
        self._budget.setDecimals(2)
        self._budget.setPrefix("R$ ")
        self._budget.setGroupSeparatorShown(True)

        self._status = QComboBox()
        for s in ProjectStatus:
            self._status.addItem(s.value, s.value)

        form = QFormLayout()
        form.addRow("Project name:", self._name)
        form.addRow("Client:", self._client)
        form.addRow("", self.no_clients_notice)
        form.addRow("Description:", self._desc)
        form.addRow("Start date:", self._start)
        form.addRow("End date:", self._end)
        form.addRow("Budget:", self._budget)
        form.addRow("Status:", self._status)
        if clients:
            self.no_clients_notice.hide()

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.save_button = btns.button(QDialogButtonBox.Ok)
        self.save_button.setText("Save Project")
        self.save_button.setEnabled(bool(clients))
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)

        lock_dialog_fixed(self, width_ratio=0.4, height_ratio=0.6)
        self._name.setFocus(Qt.OtherFocusReason)

    def values(self) -> ProjectDraft:
        return ProjectDraft(
            name=self._name.text().strip(),
            client_id=self._client.currentData() or "",
            description=self._desc.toPlainText().strip(),
            start_date=self._start.date().toString(Qt.ISODate),
            end_date=self._end.date().toString(Qt.ISODate),
            budget=float(self._budget.value()),
            status=ProjectStatus(self._status.currentData()),
        )

    def accept(self):
        try:
            self.created = self._submit(self.values())
        except ProjectValidationError as exc:
            QMessageBox.warning(self, "Add project", str(exc))
            return
        super().accept()
