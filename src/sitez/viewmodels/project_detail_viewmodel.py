# Rev 0.2.0
from __future__ import annotations
from typing import Optional

from PySide6.QtCore import QObject, Signal

from ..models.entities import Project
from ..services.timeline import derive_timeline
from ..utils.dates import fmt_date
from ..utils.formatting import budget_used_pct, format_brl, format_pct


class ProjectDetailViewModel(QObject):
    """
    Emits:
      loaded({
        "project": Project,
        "timeline": Timeline,
        "start": str, "end": str,            # dd/mm/yyyy
        "budget": str, "spent": str, "remaining": str,   # BRL
        "used_pct": str,
        "over_budget": bool,
      })
    An empty dict means no project is selected.
    """
    loaded = Signal(object)

    def load(self, project: Optional[Project]) -> None:
        if project is None:
            self.loaded.emit({})
            return

        info = {
            "project": project,
            "timeline": derive_timeline(project),
            "start": fmt_date(project.start_date),
            "end": fmt_date(project.end_date),
            "budget": format_brl(project.budget),
            "spent": format_brl(project.spent),
            "remaining": format_brl(project.remaining),
            "used_pct": format_pct(budget_used_pct(project.spent, project.budget)),
            "over_budget": project.spent > project.budget,
        }
        self.loaded.emit(info)
