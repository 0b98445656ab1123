# Rev 0.2.0
# siteZ diagnostics: log tail with level filter and AI request highlighting
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QColor, QFont, QSyntaxHighlighter, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QDockWidget, QHBoxLayout, QLabel, QPlainTextEdit, QPushButton,
    QVBoxLayout, QWidget,
)

# Loggers that record AI submits, failures and discarded late replies
AI_LOGGERS = (
    "sitez.services.ai_service",
    "sitez.services.ai_provider",
    "sitez.viewmodels.ai_tool_viewmodel",
)

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_SEP = " | "
_AI_COLOR = "#1d4ed8"
_WARN_COLOR = "#b45309"
_ERROR_COLOR = "#b91c1c"


@dataclass
class LogEntry:
    """One record from the log file; `lines` holds any traceback continuation."""
    level: str
    logger: str
    lines: List[str]

    @property
    def levelno(self) -> int:
        return _levelno(self.level)

    @property
    def is_ai(self) -> bool:
        return is_ai_logger(self.logger)


def _levelno(name: str) -> int:
    n = logging.getLevelName(name)
    return n if isinstance(n, int) else logging.INFO


def is_ai_logger(name: str) -> bool:
    return any(name == n or name.startswith(n + ".") for n in AI_LOGGERS)


def split_header(line: str) -> Optional[tuple]:
    """(level, logger) for a line written with logging_setup.FMT, else None."""
    parts = line.split(_SEP, 3)
    if len(parts) < 4:
        return None
    level, logger = parts[1].strip(), parts[2].strip()
    if not isinstance(logging.getLevelName(level), int):
        return None
    return level, logger


def parse_entries(lines: Iterable[str]) -> List[LogEntry]:
    entries: List[LogEntry] = []
    for raw in lines:
        line = raw.rstrip("\n")
        header = split_header(line)
        if header is not None:
            entries.append(LogEntry(header[0], header[1], [line]))
        elif entries:
            entries[-1].lines.append(line)
        elif line:
            entries.append(LogEntry("INFO", "", [line]))
    return entries


def filter_entries(entries: Iterable[LogEntry], min_level: str = "DEBUG", ai_only: bool = False) -> List[LogEntry]:
    floor = _levelno(min_level)
    return [e for e in entries if e.levelno >= floor and (e.is_ai or not ai_only)]


def _tail(path: Optional[Path], max_lines: int = 500) -> List[str]:
    if path is None:
        return ["(logging not initialized)"]
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            return f.readlines()[-max_lines:]
    except FileNotFoundError:
        return ["(log file not found)"]
    except OSError as e:
        return [f"(error reading log: {e})"]


class _LogHighlighter(QSyntaxHighlighter):
    def __init__(self, document):
        super().__init__(document)
        self._fmt = {}
        for key, color, bold in (("ai", _AI_COLOR, False), ("warn", _WARN_COLOR, False), ("error", _ERROR_COLOR, True)):
            f = QTextCharFormat()
            f.setForeground(QColor(color))
            if bold:
                f.setFontWeight(QFont.Bold)
            self._fmt[key] = f

    def highlightBlock(self, text: str) -> None:
        header = split_header(text)
        if header is None:
            # continuation lines keep the state of their record
            state = self.previousBlockState()
            if state > 0:
                self.setFormat(0, len(text), self._fmt[("ai", "warn", "error")[state - 1]])
                self.setCurrentBlockState(state)
            return
        level, logger = header
        state = 0
        if level in ("ERROR", "CRITICAL"):
            state = 3
        elif level == "WARNING":
            state = 2
        elif is_ai_logger(logger):
            state = 1
        self.setCurrentBlockState(state)
        if state:
            self.setFormat(0, len(text), self._fmt[("ai", "warn", "error")[state - 1]])


class DiagnosticsDock(QDockWidget):
    """Tails the application log file."""

    def __init__(self, log_file: Optional[Path], parent=None):
        super().__init__("Diagnostics", parent)
        self.setObjectName("DiagnosticsDock")
        self.setAllowedAreas(Qt.BottomDockWidgetArea | Qt.TopDockWidgetArea)

        self.log_file = log_file

        w = QWidget()
        lay = QVBoxLayout(w)
        top = QHBoxLayout()
        self.lbl = QLabel(f"Log: {self.log_file}")
        self.cmb_level = QComboBox()
        self.cmb_level.addItems(LEVELS)
        self.cmb_level.setCurrentText("INFO")
        self.chk_ai = QCheckBox("AI requests only")
        self.btn_refresh = QPushButton("Refresh")
        self.btn_autorefresh = QPushButton("Auto: On")
        self.btn_autorefresh.setCheckable(True)
        self.btn_autorefresh.setChecked(True)

        top.addWidget(self.lbl, 1)
        top.addWidget(QLabel("Level:"))
        top.addWidget(self.cmb_level)
        top.addWidget(self.chk_ai)
        top.addWidget(self.btn_refresh)
        top.addWidget(self.btn_autorefresh)

        self.view = QPlainTextEdit()
        self.view.setReadOnly(True)
        self.view.setLineWrapMode(QPlainTextEdit.NoWrap)
        self._highlighter = _LogHighlighter(self.view.document())

        lay.addLayout(top)
        lay.addWidget(self.view, 1)
        self.setWidget(w)

        self.timer = QTimer(self)
        self.timer.setInterval(1500)
        self.timer.timeout.connect(self.reload)
        self.timer.start()

        self.btn_refresh.clicked.connect(lambda: self.reload(force=True))
        self.btn_autorefresh.clicked.connect(self._toggle_auto)
        self.cmb_level.currentTextChanged.connect(lambda _t: self.reload(force=True))
        self.chk_ai.toggled.connect(lambda _c: self.reload(force=True))

    def _toggle_auto(self):
        on = self.btn_autorefresh.isChecked()
        self.btn_autorefresh.setText("Auto: On" if on else "Auto: Off")
        if on:
            self.timer.start()
        else:
            self.timer.stop()

    def showEvent(self, event):
        super().showEvent(event)
        self.reload(force=True)

    def render_text(self) -> str:
        entries = filter_entries(
            parse_entries(_tail(self.log_file)),
            min_level=self.cmb_level.currentText(),
            ai_only=self.chk_ai.isChecked(),
        )
        return "\n".join(line for e in entries for line in e.lines)

    def reload(self, force: bool = False):
        if not force and not self.isVisible():
            return
        self.view.setPlainText(self.render_text())
        self.view.moveCursor(QTextCursor.End)
