from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.core.models import ProjectSnapshot


def make_snapshot_data() -> dict:
    return {
        "name": "Demo Synth",
        "layers": [
            {"id": "default", "name": "Default", "order": 0},
            {"id": "overlay", "name": "Overlay", "order": 1},
        ],
        "windows": [
            {
                "id": "main",
                "name": "Main",
                "type": "release",
                "width": 400,
                "height": 300,
                "backgroundColor": "#202020",
                "elementIds": ["gain", "cutoff", "to-settings", "panel"],
            },
            {
                "id": "settings",
                "name": "Settings",
                "type": "release",
                "width": 320,
                "height": 200,
                "elementIds": ["bypass", "back"],
            },
            {
                "id": "debug",
                "name": "Debug",
                "type": "developer",
                "width": 200,
                "height": 100,
                "elementIds": ["scope"],
            },
        ],
        "elements": [
            {"id": "gain", "type": "knob", "name": "Gain", "x": 10, "y": 10, "width": 60, "height": 60,
             "parameterId": "gain"},
            {"id": "cutoff", "type": "slider", "name": "Cutoff", "x": 90, "y": 10, "width": 30, "height": 120},
            {"id": "to-settings", "type": "button", "name": "Open Settings", "x": 10, "y": 200,
             "width": 100, "height": 30, "action": "navigate-window", "targetWindowId": "settings"},
            {"id": "panel", "type": "panel", "name": "Panel", "x": 150, "y": 150, "width": 200, "height": 100},
            {"id": "mix", "type": "knob", "name": "Mix", "x": 5, "y": 5, "width": 40, "height": 40,
             "parentId": "panel", "parameterId": "mix"},
            {"id": "bypass", "type": "toggleswitch", "name": "Bypass", "x": 10, "y": 10, "width": 50,
             "height": 24, "parameterId": "bypass"},
            {"id": "back", "type": "button", "name": "Back", "x": 10, "y": 50, "width": 80, "height": 30,
             "action": "navigate-window", "targetWindowId": "main"},
            {"id": "scope", "type": "oscilloscope", "name": "Scope", "x": 0, "y": 0, "width": 200, "height": 100},
        ],
    }


@pytest.fixture
def snapshot_data() -> dict:
    return make_snapshot_data()


@pytest.fixture
def snapshot(snapshot_data: dict) -> ProjectSnapshot:
    return ProjectSnapshot.from_dict(snapshot_data)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "app-data"
    monkeypatch.setenv("FACEPLATE_HOME", str(home))
    return home
