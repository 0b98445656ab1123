# src/sitez/utils/config.py
from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .paths import SETTINGS_FILE, config_dir

log = logging.getLogger(__name__)

DEFAULT_AI_MODEL = "gemini-2.5-flash"

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 1280,
        "height": 800,
        "is_maximized": False,
    },
    "ui": {
        "diagnostics_dock_visible": False,
    },
    "ai": {
        "model": DEFAULT_AI_MODEL,
        "api_key": None,
    },
}


def _merge(base: Dict[str, Any], over: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in over.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_settings(path: Path = SETTINGS_FILE) -> Dict[str, Any]:
    if path.exists():
        try:
            return _merge(_DEFAULTS, json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError):
            log.warning("Ignoring unreadable settings file %s", path, exc_info=True)
    return copy.deepcopy(_DEFAULTS)


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    if path is None:
        config_dir()
        path = SETTINGS_FILE
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def load_env(dotenv_path: Optional[str] = None) -> bool:
    """Load a .env file into os.environ without overriding existing variables."""
    return load_dotenv(dotenv_path, override=False)


@dataclass
class AIConfig:
    """Settings for the generative AI backend."""

    api_key: Optional[str] = None
    model: str = DEFAULT_AI_MODEL

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, settings: Optional[Dict[str, Any]] = None) -> "AIConfig":
        """Environment wins over settings.json; GEMINI_API_KEY wins over API_KEY."""
        ai = (settings or {}).get("ai", {}) or {}
        api_key = (
            os.environ.get("GEMINI_API_KEY")
            or os.environ.get("API_KEY")
            or ai.get("api_key")
        )
        model = os.environ.get("SITEZ_AI_MODEL") or ai.get("model") or DEFAULT_AI_MODEL
        return cls(api_key=api_key or None, model=model)
