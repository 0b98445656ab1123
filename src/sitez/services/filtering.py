# Rev 0.2.0
"""Project filtering and per-status aggregation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional, Sequence, Tuple, Union

from ..models.entities import Project
from ..models.types import ALL, ProjectStatus, StatusFilter
from ..utils.dates import midnight_utc


@dataclass(frozen=True)
class ProjectFilter:
    status: StatusFilter = ALL
    client_id: str = ALL
    start_after: Optional[date] = None
    start_before: Optional[date] = None

    @classmethod
    def cleared(cls) -> "ProjectFilter":
        return cls()

    @classmethod
    def from_form(
        cls,
        status: Union[str, ProjectStatus] = ALL,
        client_id: str = ALL,
        start_after: Union[str, date, None] = None,
        start_before: Union[str, date, None] = None,
    ) -> "ProjectFilter":
        """Build a filter from raw form values; empty strings mean unset."""
        return cls(
            status=ALL if status in (ALL, "", None) else ProjectStatus(status),
            client_id=client_id or ALL,
            start_after=_as_date(start_after),
            start_before=_as_date(start_before),
        )

    @property
    def is_cleared(self) -> bool:
        return self == ProjectFilter()


def _as_date(value: Union[str, date, None]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def matches(project: Project, spec: ProjectFilter) -> bool:
    if spec.status != ALL and project.status != spec.status:
        return False
    if spec.client_id != ALL and project.client.id != spec.client_id:
        return False
    if spec.start_after is not None or spec.start_before is not None:
        start = midnight_utc(project.start_date)
        if spec.start_after is not None and start < midnight_utc(spec.start_after):
            return False
        if spec.start_before is not None and start > midnight_utc(spec.start_before):
            return False
    return True


def filter_projects(projects: Iterable[Project], spec: ProjectFilter) -> Tuple[Project, ...]:
    return tuple(p for p in projects if matches(p, spec))


def count_by_status(projects: Iterable[Project]) -> Dict[ProjectStatus, int]:
    counts = {status: 0 for status in ProjectStatus}
    for p in projects:
        counts[p.status] += 1
    return counts


@dataclass(frozen=True)
class FilterResult:
    projects: Tuple[Project, ...]
    counts: Dict[ProjectStatus, int]


def apply_filter(projects: Sequence[Project], spec: ProjectFilter) -> FilterResult:
    """Filtered subset plus counts over the full, unfiltered collection."""
    return FilterResult(projects=filter_projects(projects, spec), counts=count_by_status(projects))
