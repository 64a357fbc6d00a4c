from __future__ import annotations

import json
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.settings import ExportSettings, SettingsManager, app_data_dir, settings_path


def test_app_data_dir_honours_override(isolated_home: Path) -> None:
    assert app_data_dir() == isolated_home
    assert isolated_home.is_dir()
    assert settings_path() == isolated_home / "settings.json"


def test_defaults_are_written_on_first_load(isolated_home: Path) -> None:
    manager = SettingsManager()
    stored = json.loads((isolated_home / "settings.json").read_text(encoding="utf-8"))
    assert stored["delivery"] == "archive"
    assert manager.get("optimize_assets") == "1"
    assert manager.get("missing", "fallback") == "fallback"


def test_set_persists(tmp_path: Path) -> None:
    path = tmp_path / "custom.json"
    SettingsManager(path).set("last_export_dir", "/tmp/out")
    assert SettingsManager(path).get("last_export_dir") == "/tmp/out"


def test_corrupt_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    manager = SettingsManager(path)
    assert manager.get("target") == "host"


def test_export_settings_round_trip(tmp_path: Path) -> None:
    manager = SettingsManager(tmp_path / "settings.json")
    manager.store_export_settings(
        ExportSettings(optimize_assets=False, include_developer_windows=True, delivery="folder", target="standalone")
    )
    settings = SettingsManager(tmp_path / "settings.json").export_settings()
    assert settings.optimize_assets is False
    assert settings.include_developer_windows is True

    options = settings.to_options()
    assert options.delivery == "folder"
    assert options.target == "standalone"
    assert options.responsive_scaling is True


def test_invalid_choices_fall_back(tmp_path: Path) -> None:
    manager = SettingsManager(tmp_path / "settings.json")
    manager.set("delivery", "carrier-pigeon")
    manager.set("target", "mars")
    settings = manager.export_settings()
    assert settings.delivery == "archive"
    assert settings.target == "host"
