# Rev 0.2.0
"""Lightweight in-memory entities. Dates are ISO strings (see utils.dates)."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .types import ProjectStatus, TaskStatus


@dataclass(frozen=True)
class Client:
    id: str
    name: str
    contact: str
    email: str


@dataclass(frozen=True)
class Task:
    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    start_date: Optional[str] = None
    due_date: Optional[str] = None


@dataclass(frozen=True)
class Project:
    id: str
    name: str
    client: Client
    description: str
    start_date: str
    end_date: str
    budget: float
    spent: float = 0.0
    status: ProjectStatus = ProjectStatus.PLANNED
    tasks: Tuple[Task, ...] = ()

    @property
    def remaining(self) -> float:
        # negative when over budget; shown as-is
        return self.budget - self.spent


@dataclass(frozen=True)
class ProjectDraft:
    """Values captured by the add-project form, before an id is assigned."""
    name: str
    client_id: str
    description: str
    start_date: str
    end_date: str
    budget: float = 0.0
    status: ProjectStatus = ProjectStatus.PLANNED


# --- AI results (transient) -------------------------------------------------

@dataclass(frozen=True)
class SchedulePhase:
    name: str
    duration: str
    tasks: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Schedule:
    phases: Tuple[SchedulePhase, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Schedule":
        if not isinstance(data, dict) or not isinstance(data.get("phases"), list):
            raise ValueError("schedule must be an object with a 'phases' list")
        phases: List[SchedulePhase] = []
        for i, raw in enumerate(data["phases"]):
            if not isinstance(raw, dict):
                raise ValueError(f"phase {i} is not an object")
            name, duration, tasks = raw.get("name"), raw.get("duration"), raw.get("tasks")
            if not isinstance(name, str) or not isinstance(duration, str):
                raise ValueError(f"phase {i} needs string 'name' and 'duration'")
            if not isinstance(tasks, list) or not all(isinstance(t, str) for t in tasks):
                raise ValueError(f"phase {i} 'tasks' must be a list of strings")
            phases.append(SchedulePhase(name=name, duration=duration, tasks=tuple(tasks)))
        return cls(phases=tuple(phases))

    def to_dict(self) -> Dict[str, Any]:
        return {"phases": [{"name": p.name, "duration": p.duration, "tasks": list(p.tasks)} for p in self.phases]}


@dataclass(frozen=True)
class Risk:
    risk: str
    probability: str
    mitigation: str

    @classmethod
    def from_dict(cls, data: Any) -> "Risk":
        if not isinstance(data, dict):
            raise ValueError("risk entry is not an object")
        values = {k: data.get(k) for k in ("risk", "probability", "mitigation")}
        missing = [k for k, v in values.items() if not isinstance(v, str)]
        if missing:
            raise ValueError(f"risk entry missing string fields: {', '.join(missing)}")
        return cls(**values)

    @classmethod
    def list_from_json(cls, data: Any) -> List["Risk"]:
        if not isinstance(data, list):
            raise ValueError("risk analysis must be a list")
        return [cls.from_dict(item) for item in data]
