# Rev 0.2.0

# ui/window_mode.py
from PySide6.QtCore import Qt, QRect
from PySide6.QtGui import QGuiApplication


def restore_size(win, settings: dict):
    """Apply main_window width/height/is_maximized from settings."""
    mw = settings.get("main_window", {})
    win.resize(int(mw.get("width", 1280)), int(mw.get("height", 800)))
    if mw.get("is_maximized"):
        win.showMaximized()
    else:
        win.show()


def lock_dialog_fixed(win, *, width_ratio=0.6, height_ratio=0.7):
    """
    For modal dialogs: keep them *not* maximized, but non-resizable and sized
    as a fraction of the current screen.
    """
    screen = QGuiApplication.screenAt(win.frameGeometry().center()) or QGuiApplication.primaryScreen()
    rect: QRect = screen.availableGeometry()
    w = int(rect.width() * width_ratio)
    h = int(rect.height() * height_ratio)
    win.setFixedSize(w, h)
    win.setWindowFlag(Qt.WindowMaximizeButtonHint, False)


def capture_size(win, settings: dict) -> dict:
    """Write the window's current size/maximized state back into settings."""
    mw = settings.setdefault("main_window", {})
    maximized = bool(win.isMaximized())
    size = win.normalGeometry().size() if maximized else win.size()
    if size.width() > 0 and size.height() > 0:
        mw["width"], mw["height"] = size.width(), size.height()
    mw["is_maximized"] = maximized
    return settings
