# Rev 0.2.0
# horizontal task bars over the padded project range
from __future__ import annotations

import html
from typing import List, Optional, Tuple

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QLabel, QStackedLayout, QToolTip, QWidget

from ...services.timeline import Timeline, TimelineBar, bar_color
from ...utils.dates import fmt_day_month

_GRID  = "#d1d5db"
_AXIS  = "#9ca3af"
_TEXT  = "#374151"

_LABEL_W = 150
_MARGIN_T, _MARGIN_R, _MARGIN_B = 20, 30, 28
_ROW_H = 50
_TICKS = 6

EMPTY_TEXT = "No tasks with dates to display in the timeline."


def bar_tooltip(bar: TimelineBar) -> str:
    return f"<b>{html.escape(bar.title)}</b><br/>Start: {bar.formatted_start}<br/>End: {bar.formatted_due}"


class GanttChart(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self._timeline: Optional[Timeline] = None
        self._hit: List[Tuple[QRectF, TimelineBar]] = []
        self.setMouseTracking(True)

    def set_timeline(self, timeline: Optional[Timeline]) -> None:
        self._timeline = timeline
        rows = len(timeline.bars) if timeline else 0
        self.setMinimumHeight(80 + rows * _ROW_H)
        self.update()

    # --- geometry ---
    def _plot_rect(self) -> QRectF:
        return QRectF(
            _LABEL_W,
            _MARGIN_T,
            max(1.0, self.width() - _LABEL_W - _MARGIN_R),
            max(1.0, self.height() - _MARGIN_T - _MARGIN_B),
        )

    def _x_for(self, seconds_from_axis_start: float, plot: QRectF) -> float:
        span = self._timeline.axis_span.total_seconds() or 1.0
        return plot.left() + plot.width() * (seconds_from_axis_start / span)

    # --- painting ---
    def paintEvent(self, _event):
        tl = self._timeline
        if tl is None or tl.is_empty:
            return
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing)
        plot = self._plot_rect()
        self._paint_grid(p, plot)
        self._paint_bars(p, plot)
        p.end()

    def _paint_grid(self, p: QPainter, plot: QRectF) -> None:
        tl = self._timeline
        pen = QPen(QColor(_GRID))
        pen.setStyle(Qt.DashLine)
        small = QFont(self.font())
        small.setPointSize(8)
        p.setFont(small)
        span = tl.axis_span
        for i in range(_TICKS + 1):
            x = plot.left() + plot.width() * i / _TICKS
            p.setPen(pen)
            p.drawLine(QPointF(x, plot.top()), QPointF(x, plot.bottom()))
            p.setPen(QColor(_AXIS))
            label = fmt_day_month(tl.axis_start + span * i / _TICKS)
            p.drawText(QRectF(x - 30, plot.bottom() + 4, 60, 16), Qt.AlignHCenter, label)
        p.setPen(QColor(_AXIS))
        p.drawLine(QPointF(plot.left(), plot.bottom()), QPointF(plot.right(), plot.bottom()))

    def _paint_bars(self, p: QPainter, plot: QRectF) -> None:
        tl = self._timeline
        self._hit.clear()
        lead = (tl.project_start - tl.axis_start).total_seconds()
        row_h = plot.height() / len(tl.bars)
        bar_h = row_h * 0.65  # 35% gap between categories
        p.setFont(self.font())
        for i, bar in enumerate(tl.bars):
            top = plot.top() + i * row_h + (row_h - bar_h) / 2
            x0 = self._x_for(lead + bar.offset.total_seconds(), plot)
            x1 = self._x_for(lead + (bar.offset + bar.duration).total_seconds(), plot)
            rect = QRectF(min(x0, x1), top, max(abs(x1 - x0), 1.0), bar_h)

            color = QColor(bar_color(bar.status))
            if bar.is_inverted:
                # due before start: outline only, dashed
                pen = QPen(color, 1.5)
                pen.setStyle(Qt.DashLine)
                p.setPen(pen)
                p.setBrush(Qt.NoBrush)
            else:
                p.setPen(Qt.NoPen)
                p.setBrush(color)
            p.drawRoundedRect(rect, 3, 3)

            p.setPen(QColor(_TEXT))
            label_rect = QRectF(4, plot.top() + i * row_h, _LABEL_W - 10, row_h)
            elided = self.fontMetrics().elidedText(bar.title, Qt.ElideRight, int(label_rect.width()))
            p.drawText(label_rect, Qt.AlignVCenter | Qt.AlignRight, elided)
            self._hit.append((rect, bar))

    # --- tooltip ---
    def mouseMoveEvent(self, event):
        pos = event.position()
        for rect, bar in self._hit:
            if rect.adjusted(-2, -2, 2, 2).contains(pos):
                QToolTip.showText(event.globalPosition().toPoint(), bar_tooltip(bar), self)
                return
        QToolTip.hideText()
        super().mouseMoveEvent(event)


class GanttPanel(QWidget):
    """Chart, or the empty-state notice when no task has both dates."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._chart = GanttChart(self)
        self._empty = QLabel(EMPTY_TEXT)
        self._empty.setAlignment(Qt.AlignCenter)
        self._empty.setMinimumHeight(200)
        self._empty.setStyleSheet("QLabel { color: #6b7280; background-color: #f9fafb; border-radius: 8px; }")

        self._stack = QStackedLayout(self)
        self._stack.addWidget(self._empty)
        self._stack.addWidget(self._chart)

    def set_timeline(self, timeline: Optional[Timeline]) -> None:
        if timeline is None or timeline.is_empty:
            self._chart.set_timeline(None)
            self._stack.setCurrentWidget(self._empty)
            return
        self._chart.set_timeline(timeline)
        self._stack.setCurrentWidget(self._chart)
