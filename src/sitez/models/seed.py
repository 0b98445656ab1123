# Rev 0.2.0
"""
Session seed: the clients and projects the dashboard starts with.
Nothing is persisted; every launch starts from this data.
"""
from __future__ import annotations

from typing import Tuple

from .entities import Client, Project, Task
from .types import ProjectStatus, TaskStatus


def seed_clients() -> Tuple[Client, ...]:
    return (
        Client(id="cli1", name="Construtora Alfa", contact="João Silva", email="joao@alfa.com"),
        Client(id="cli2", name="Família Martins", contact="Maria Martins", email="maria@martins.com"),
    )


def seed_projects(clients: Tuple[Client, ...] | None = None) -> Tuple[Project, ...]:
    alfa, martins = clients or seed_clients()
    return (
        Project(
            id="proj1",
            name="Residencial Viver Bem",
            client=alfa,
            description=(
                "Construction of a 10-storey residential building with a full leisure area. "
                "Focus on sustainability and modern design."
            ),
            start_date="2023-01-15",
            end_date="2024-12-20",
            budget=5_000_000,
            spent=2_350_000,
            status=ProjectStatus.IN_PROGRESS,
            tasks=(
                Task("t1", "Site earthworks", status=TaskStatus.DONE, start_date="2023-01-15", due_date="2023-02-10"),
                Task("t2", "Foundation work", status=TaskStatus.IN_PROGRESS, start_date="2023-02-11", due_date="2023-04-30"),
                Task("t3", "Structural framing", status=TaskStatus.TODO, start_date="2023-05-01", due_date="2023-08-15"),
            ),
        ),
        Project(
            id="proj2",
            name="Casa de Campo Martins",
            client=martins,
            description=(
                "High-end residence in a gated community, with 4 suites and an infinity-edge pool."
            ),
            start_date="2023-03-01",
            end_date="2024-03-01",
            budget=1_200_000,
            spent=950_000,
            status=ProjectStatus.DELAYED,
            tasks=(
                Task("t4", "City hall project approval", status=TaskStatus.DONE, start_date="2023-03-01", due_date="2023-03-30"),
                Task(
                    "t5",
                    "Plumbing installation",
                    description="Waiting on material supplier",
                    status=TaskStatus.TODO,
                    start_date="2023-10-20",
                    due_date="2023-11-20",
                ),
            ),
        ),
        Project(
            id="proj3",
            name="Reforma Comercial CenterShop",
            client=alfa,
            description=(
                "Facade and common-area modernization of a shopping center. "
                "Night work so the center keeps operating."
            ),
            start_date="2024-06-01",
            end_date="2024-09-30",
            budget=800_000,
            spent=120_000,
            status=ProjectStatus.PLANNED,
            tasks=(),
        ),
    )
