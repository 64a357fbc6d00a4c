from __future__ import annotations

import base64
import sys
from pathlib import Path
from typing import Callable, List, Tuple

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.core.models import ProjectSnapshot
from faceplate.export.options import ExportOptions
from faceplate.export.preview import REVOKE_DELAY, preview_project, preview_window, render_preview


class RecordingLauncher:
    def __init__(self, opens: bool = True) -> None:
        self.opens = opens
        self.urls: List[str] = []

    def __call__(self, url: str) -> bool:
        self.urls.append(url)
        return self.opens


class ManualScheduler:
    def __init__(self) -> None:
        self.pending: List[Tuple[float, Callable[[], None]]] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> None:
        self.pending.append((delay, callback))

    def run_all(self) -> None:
        for _, callback in self.pending:
            callback()


def test_single_window_preview_inlines_everything(snapshot: ProjectSnapshot) -> None:
    html, warnings = render_preview(snapshot, ExportOptions(), window_id="main")
    assert '<link rel="stylesheet"' not in html
    assert '<script src=' not in html
    assert html.index("Mock relay") < html.index("Shared component runtime")
    assert html.index("Shared component runtime") < html.index("Parameter bindings")
    assert "var MAX_SCALE = 1;" in html
    assert warnings


def test_preview_fonts_are_data_urls(snapshot_data: dict) -> None:
    snapshot_data["elements"].append({"id": "t", "type": "label", "name": "Title", "fontFamily": "Roboto"})
    snapshot_data["windows"][0]["elementIds"].append("t")
    snapshot_data["fonts"] = [
        {"family": "Roboto", "filename": "Roboto-Regular.woff2", "data_base64": base64.b64encode(b"font").decode()}
    ]
    html, _ = render_preview(ProjectSnapshot.from_dict(snapshot_data), ExportOptions(), window_id="main")
    assert "url('data:font/woff2;base64,Zm9udA==')" in html
    assert "./fonts/" not in html


def test_multi_window_preview_scopes_each_window(snapshot: ProjectSnapshot) -> None:
    html, _ = render_preview(snapshot, ExportOptions())
    assert '<section id="fp-window-main" class="fp-window" data-window-id="main">' in html
    assert '<section id="fp-window-settings" class="fp-window" data-window-id="settings" hidden>' in html
    assert "#fp-window-main #gain {" in html
    assert "#fp-window-settings #bypass {" in html
    assert "\n#gain {" not in html
    assert 'var ROOT_SELECTOR = "#fp-window-settings #plugin-container";' in html
    assert 'class="fp-window-tab is-active" data-window-id="main"' in html
    assert "Preview navigation" in html
    assert "#fp-window-debug" not in html


def test_preview_opens_and_revokes(snapshot: ProjectSnapshot, tmp_path: Path) -> None:
    launcher = RecordingLauncher()
    scheduler = ManualScheduler()
    result = preview_project(snapshot, ExportOptions(), launcher=launcher, scheduler=scheduler, temp_dir=tmp_path)
    assert result.success, result.error
    assert launcher.urls == [result.url]
    assert result.url.startswith("file://")
    assert result.path.exists()
    assert scheduler.pending[0][0] == REVOKE_DELAY

    scheduler.run_all()
    assert not result.path.exists()


def test_blocked_launcher_is_reported(snapshot: ProjectSnapshot, tmp_path: Path) -> None:
    scheduler = ManualScheduler()
    result = preview_window(
        snapshot,
        "settings",
        ExportOptions(),
        launcher=RecordingLauncher(opens=False),
        scheduler=scheduler,
        temp_dir=tmp_path,
    )
    assert not result.success
    assert result.blocked
    assert result.error == "Popup blocked. Please allow popups for preview."
    scheduler.run_all()
    assert list(tmp_path.iterdir()) == []


def test_invalid_project_does_not_open_a_browser(snapshot_data: dict, tmp_path: Path) -> None:
    snapshot_data["elements"][1]["name"] = "Gain"
    launcher = RecordingLauncher()
    result = preview_project(
        ProjectSnapshot.from_dict(snapshot_data),
        launcher=launcher,
        scheduler=ManualScheduler(),
        temp_dir=tmp_path,
    )
    assert not result.success
    assert not result.blocked
    assert launcher.urls == []


@pytest.mark.parametrize("window_id", ["main", "settings"])
def test_preview_window_targets_one_window(snapshot: ProjectSnapshot, tmp_path: Path, window_id: str) -> None:
    result = preview_window(
        snapshot,
        window_id,
        launcher=RecordingLauncher(),
        scheduler=ManualScheduler(),
        temp_dir=tmp_path,
    )
    assert result.success
    text = result.path.read_text(encoding="utf-8")
    assert f'data-window-id="{window_id}"' in text
    assert "fp-window-tabs" not in text


def test_multi_window_preview_keeps_inner_ids_apart(snapshot_data: dict) -> None:
    for window in ("main", "settings"):
        snapshot_data["elements"] += [
            {"id": f"{window}-preset", "type": "combobox", "name": "Preset", "options": ["A", "B"]},
            {"id": f"{window}-mode", "type": "radiogroup", "name": "Mode", "options": ["Stereo", "Mono"]},
            {"id": f"{window}-mute", "type": "checkbox", "name": "Mute"},
        ]
        snapshot_data["windows"][0 if window == "main" else 1]["elementIds"] += [
            f"{window}-preset",
            f"{window}-mode",
            f"{window}-mute",
        ]
    html, _ = render_preview(ProjectSnapshot.from_dict(snapshot_data), ExportOptions())
    for slug in ("main", "settings"):
        assert html.count(f'<datalist id="{slug}__preset__options">') == 1
        assert html.count(f'list="{slug}__preset__options"') == 1
        assert html.count(f'name="{slug}__mode"') == 2
        assert html.count(f'for="{slug}__mute__input"') == 1
    assert 'name="mode"' not in html
