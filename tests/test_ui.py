# tests/test_ui.py
from __future__ import annotations

from datetime import timedelta

from sitez.models.types import TaskStatus
from sitez.services.store import NO_CLIENTS_MESSAGE
from sitez.services.timeline import TimelineBar
from sitez.ui.diagnostics_dock import DiagnosticsDock, filter_entries, is_ai_logger, parse_entries
from sitez.ui.dialogs.add_project_dialog import AddProjectDialog
from sitez.ui.panels.gantt_panel import bar_tooltip
from sitez.ui.window_mode import capture_size

LOG_LINES = [
    "2025-01-10 09:00:00 | INFO | sitez.main | Logging initialized\n",
    "2025-01-10 09:00:01 | INFO | sitez.viewmodels.ai_tool_viewmodel | AI schedule request 1 submitted\n",
    "2025-01-10 09:00:05 | ERROR | sitez.services.ai_service | Error generating schedule via gemini\n",
    "Traceback (most recent call last):\n",
    "TimeoutError: deadline exceeded\n",
    "2025-01-10 09:00:06 | DEBUG | sitez.viewmodels.dashboard_viewmodel | filters -> cleared\n",
    "2025-01-10 09:00:09 | INFO | sitez.viewmodels.ai_tool_viewmodel | Discarded late AI response for request 1\n",
]


# ---- diagnostics

def test_tracebacks_stay_with_their_record():
    entries = parse_entries(LOG_LINES)
    assert len(entries) == 5
    err = entries[2]
    assert err.level == "ERROR"
    assert err.logger == "sitez.services.ai_service"
    assert err.lines[-1] == "TimeoutError: deadline exceeded"


def test_level_filter():
    kept = filter_entries(parse_entries(LOG_LINES), min_level="INFO")
    assert "sitez.viewmodels.dashboard_viewmodel" not in {e.logger for e in kept}
    assert len(kept) == 4
    errors = filter_entries(parse_entries(LOG_LINES), min_level="ERROR")
    assert [e.logger for e in errors] == ["sitez.services.ai_service"]


def test_ai_only_filter():
    kept = filter_entries(parse_entries(LOG_LINES), ai_only=True)
    assert [e.lines[0].rsplit("| ", 1)[-1] for e in kept] == [
        "AI schedule request 1 submitted",
        "Error generating schedule via gemini",
        "Discarded late AI response for request 1",
    ]
    assert is_ai_logger("sitez.services.ai_provider")
    assert not is_ai_logger("sitez.services.ai_providers_extra")


def test_dock_renders_filtered_tail(qapp, tmp_path):
    log_file = tmp_path / "siteZ.log"
    log_file.write_text("".join(LOG_LINES), encoding="utf-8")
    dock = DiagnosticsDock(log_file)
    try:
        dock.timer.stop()
        dock.cmb_level.setCurrentText("WARNING")
        text = dock.render_text()
        assert text.splitlines()[0].endswith("Error generating schedule via gemini")
        assert "Traceback" in text
        assert "submitted" not in text

        dock.cmb_level.setCurrentText("DEBUG")
        dock.chk_ai.setChecked(True)
        dock.reload(force=True)
        shown = dock.view.toPlainText()
        assert "Discarded late AI response" in shown
        assert "Logging initialized" not in shown
    finally:
        dock.deleteLater()


def test_dock_without_log_file(qapp):
    dock = DiagnosticsDock(None)
    try:
        dock.timer.stop()
        assert dock.render_text() == "(logging not initialized)"
    finally:
        dock.deleteLater()


# ---- gantt

def test_tooltip_escapes_task_title():
    bar = TimelineBar(
        title="<b>Slab</b> & beams",
        offset=timedelta(days=1),
        duration=timedelta(days=3),
        status=TaskStatus.TODO,
        formatted_start="02/06/2024",
        formatted_due="05/06/2024",
    )
    tip = bar_tooltip(bar)
    assert "&lt;b&gt;Slab&lt;/b&gt; &amp; beams" in tip
    assert "<b>Slab</b>" not in tip
    assert "Start: 02/06/2024" in tip


# ---- add project dialog

def test_add_project_without_clients_shows_notice(qapp):
    dlg = AddProjectDialog((), submit=lambda draft: None)
    try:
        assert not dlg.save_button.isEnabled()
        assert not dlg.no_clients_notice.isHidden()
        assert dlg.no_clients_notice.text() == NO_CLIENTS_MESSAGE
    finally:
        dlg.deleteLater()


def test_add_project_with_clients_hides_notice(qapp, clients):
    dlg = AddProjectDialog(clients, submit=lambda draft: None)
    try:
        assert dlg.save_button.isEnabled()
        assert dlg.no_clients_notice.isHidden()
        assert dlg.values().client_id == "cli1"
    finally:
        dlg.deleteLater()


# ---- window settings

class _Size:
    def __init__(self, w, h):
        self._w, self._h = w, h

    def width(self):
        return self._w

    def height(self):
        return self._h


class _Rect:
    def __init__(self, w, h):
        self._size = _Size(w, h)

    def size(self):
        return self._size


class StubWindow:
    def __init__(self, w, h, maximized=False, normal=(1024, 700)):
        self._size = _Size(w, h)
        self._maximized = maximized
        self._normal = _Rect(*normal)

    def isMaximized(self):
        return self._maximized

    def size(self):
        return self._size

    def normalGeometry(self):
        return self._normal


def test_capture_size_records_window_state():
    settings = {"main_window": {"width": 1280, "height": 800, "is_maximized": False}}
    capture_size(StubWindow(1400, 900), settings)
    assert settings["main_window"] == {"width": 1400, "height": 900, "is_maximized": False}


def test_capture_size_keeps_normal_size_when_maximized():
    settings = {}
    capture_size(StubWindow(2560, 1400, maximized=True), settings)
    assert settings["main_window"] == {"width": 1024, "height": 700, "is_maximized": True}
