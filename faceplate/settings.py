"""Per-user settings: export defaults kept in a small JSON file."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Dict, Optional

from .export.options import ExportOptions

logger = logging.getLogger(__name__)

APP_NAME = "Faceplate"


def app_data_dir() -> Path:
    """Return the platform-specific application data directory."""
    override = os.getenv("FACEPLATE_HOME")
    if override:
        target = Path(override)
    else:
        if os.name == "nt":
            base = Path(os.getenv("LOCALAPPDATA", Path.home()))
        else:
            base = Path.home() / ".local" / "share"
        target = base / APP_NAME
    target.mkdir(parents=True, exist_ok=True)
    return target


def settings_path() -> Path:
    return app_data_dir() / "settings.json"


class SettingsManager:
    """Very small settings helper storing JSON data."""

    DEFAULTS: Dict[str, str] = {
        "optimize_assets": "1",
        "responsive_scaling": "1",
        "include_developer_windows": "0",
        "custom_scrollbars": "1",
        "delivery": "archive",
        "target": "host",
        "last_export_dir": "",
    }

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else settings_path()
        self._settings: Dict[str, str] = {}
        self.load()

    def load(self) -> None:
        if self.path.exists():
            try:
                self._settings = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                logger.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
                self._settings = {}
        else:
            self._settings = {}
        if not isinstance(self._settings, dict):
            self._settings = {}

        missing = {k: v for k, v in self.DEFAULTS.items() if self._settings.get(k, "") == "" and v != ""}
        if missing:
            self._settings.update(missing)
            try:
                self.save()
            except OSError as exc:
                logger.warning("Could not write default settings: %s", exc)

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._settings, indent=2), encoding="utf-8")

    def get(self, key: str, default: str = "") -> str:
        return self._settings.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._settings[key] = value
        self.save()

    def export_settings(self) -> "ExportSettings":
        return ExportSettings.from_manager(self)

    def store_export_settings(self, settings: "ExportSettings") -> None:
        for key, value in asdict(settings).items():
            if isinstance(value, bool):
                value = "1" if value else "0"
            self._settings[key] = str(value)
        self.save()


def _flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ExportSettings:
    optimize_assets: bool = True
    responsive_scaling: bool = True
    include_developer_windows: bool = False
    custom_scrollbars: bool = True
    delivery: str = "archive"
    target: str = "host"
    last_export_dir: str = ""

    @classmethod
    def from_manager(cls, manager: SettingsManager) -> "ExportSettings":
        values = {}
        for f in fields(cls):
            raw = manager.get(f.name, "")
            if raw == "":
                continue
            values[f.name] = _flag(raw) if f.type in ("bool", bool) else raw
        settings = cls(**values)
        if settings.delivery not in ("archive", "folder"):
            settings.delivery = "archive"
        if settings.target not in ("host", "standalone"):
            settings.target = "host"
        return settings

    def to_options(self) -> ExportOptions:
        return ExportOptions(
            optimize_assets=self.optimize_assets,
            responsive_scaling=self.responsive_scaling,
            include_developer_windows=self.include_developer_windows,
            custom_scrollbars=self.custom_scrollbars,
            delivery=self.delivery,  # type: ignore[arg-type]
            target=self.target,  # type: ignore[arg-type]
        )
