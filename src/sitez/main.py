# Rev 0.2.0

# src/sitez/main.py  (Rev 0.2.0)
import logging
import sys

from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QApplication

from .services.ai_provider import GeminiProvider
from .services.ai_service import AIService
from .services.store import AppState
from .ui.main_window import MainWindow
from .ui.window_mode import capture_size, restore_size
from .utils.config import AIConfig, load_env, load_settings, save_settings
from .utils.logging_setup import setup_logging
from .viewmodels.ai_tool_viewmodel import AIToolViewModel
from .viewmodels.dashboard_viewmodel import DashboardViewModel

log = logging.getLogger("siteZ")


def _build_ai_service(settings: dict) -> AIService:
    cfg = AIConfig.from_env(settings)
    if not cfg.enabled:
        log.warning("No Gemini API key configured; AI tools will report failures")
    return AIService(GeminiProvider(api_key=cfg.api_key, model=cfg.model))


def main():
    app = QApplication(sys.argv)
    QCoreApplication.setOrganizationName("siteZ")
    QCoreApplication.setApplicationName("siteZ")

    load_env()
    logfile = setup_logging("siteZ")
    settings = load_settings()

    # --- DI wiring ---
    dashboard_vm = DashboardViewModel(AppState.seeded())
    ai_service = _build_ai_service(settings)

    # --- UI ---
    win = MainWindow(
        dashboard_vm=dashboard_vm,
        ai_vm_factory=lambda: AIToolViewModel(ai_service),
        logfile=logfile,
        show_diagnostics=bool(settings.get("ui", {}).get("diagnostics_dock_visible")),
    )
    restore_size(win, settings)

    app.setProperty("mainWindow", win)
    app.setFont(QFont("Sans Serif", 10))
    rc = app.exec()

    capture_size(win, settings)
    settings.setdefault("ui", {})["diagnostics_dock_visible"] = win.diagnostics_visible()
    try:
        save_settings(settings)
    except OSError:
        log.warning("Could not save settings", exc_info=True)
    return rc


if __name__ == "__main__":
    sys.exit(main())
