# Rev 0.2.0

"""Pytest fixtures for siteZ (Rev 0.2.0)"""
from __future__ import annotations
import os

import pytest

from PySide6.QtWidgets import QApplication

from sitez.models.seed import seed_clients, seed_projects
from sitez.services.store import AppState


@pytest.fixture(scope="session")
def qapp():
    # offscreen platform: dialogs and docks are built but never shown
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def clients():
    return seed_clients()


@pytest.fixture()
def projects(clients):
    return seed_projects(clients)


@pytest.fixture()
def state() -> AppState:
    return AppState.seeded()


@pytest.fixture()
def project_by_id(projects):
    return {p.id: p for p in projects}
