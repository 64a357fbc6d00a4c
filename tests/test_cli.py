from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
import threading
import zipfile
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate import main as cli
from faceplate.export.preview import PreviewResult


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("faceplate")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data: dict) -> Path:
    path = tmp_path / "project.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path


def test_validate_ok(snapshot_file: Path, capsys: pytest.CaptureFixture) -> None:
    assert cli.main(["validate", str(snapshot_file)]) == 0
    out = capsys.readouterr().out
    assert "Main: ok" in out
    assert "Settings: ok" in out
    assert "Debug" not in out


def test_validate_reports_collisions(tmp_path: Path, snapshot_data: dict, capsys: pytest.CaptureFixture) -> None:
    snapshot_data["elements"][1]["name"] = "Gain"
    path = tmp_path / "broken.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    assert cli.main(["validate", str(path)]) == 1
    assert "Main: invalid" in capsys.readouterr().out


def test_missing_snapshot_is_a_usage_error(tmp_path: Path) -> None:
    assert cli.main(["validate", str(tmp_path / "nope.json")]) == 2


def test_bad_arguments_exit_with_two() -> None:
    with pytest.raises(SystemExit) as info:
        cli.main(["export"])
    assert info.value.code == 2


def test_export_archive(snapshot_file: Path, tmp_path: Path) -> None:
    target = tmp_path / "out.zip"
    assert cli.main(["export", str(snapshot_file), "-o", str(target), "--target", "standalone"]) == 0
    with zipfile.ZipFile(target) as zf:
        assert "main/bindings.js" in zf.namelist()
        assert zf.read("main/bindings.js").decode("utf-8").startswith("// Mock relay")


def test_export_archive_into_directory(snapshot_file: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "exports"
    out_dir.mkdir()
    assert cli.main(["export", str(snapshot_file), "-o", str(out_dir), "--window", "main"]) == 0
    assert (out_dir / "demo-synth-bundle.zip").exists()


def test_export_folder(snapshot_file: Path, tmp_path: Path, isolated_home: Path) -> None:
    out_dir = tmp_path / "site"
    code = cli.main(["export", str(snapshot_file), "--delivery", "folder", "-o", str(out_dir), "--include-developer"])
    assert code == 0
    assert (out_dir / "debug" / "index.html").exists()
    stored = json.loads((isolated_home / "settings.json").read_text(encoding="utf-8"))
    assert stored["last_export_dir"] == str(out_dir)


def test_export_folder_without_destination_fails(snapshot_file: Path, capsys: pytest.CaptureFixture) -> None:
    assert cli.main(["export", str(snapshot_file), "--delivery", "folder"]) == 1
    assert "unavailable" in capsys.readouterr().err


def test_preview_uses_preview_project(
    snapshot_file: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
) -> None:
    calls = []

    def fake_preview(snapshot, options, **kwargs):
        calls.append(options)
        return PreviewResult(success=True, url="file:///tmp/preview.html")

    monkeypatch.setattr(cli, "preview_project", fake_preview)
    assert cli.main(["preview", str(snapshot_file), "--no-responsive"]) == 0
    assert calls[0].responsive_scaling is False
    assert "file:///tmp/preview.html" in capsys.readouterr().out


def test_blocked_preview_fails(snapshot_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        cli,
        "preview_window",
        lambda snapshot, window_id, options, **kwargs: PreviewResult(success=False, blocked=True, error="blocked"),
    )
    assert cli.main(["preview", str(snapshot_file), "--window", "main"]) == 1


def test_setup_logging_does_not_stack_handlers(tmp_path: Path) -> None:
    from faceplate.logging_config import setup_logging

    setup_logging(logging.INFO, str(tmp_path / "faceplate.log"))
    logger = setup_logging(logging.INFO, str(tmp_path / "faceplate.log"))
    assert len(logger.handlers) == 2
    logger.getChild("export").info("hello")
    for handler in logger.handlers:
        handler.flush()
    assert "hello" in (tmp_path / "faceplate.log").read_text(encoding="utf-8")
    for handler in logger.handlers:
        handler.close()


def test_preview_command_removes_its_file_before_exiting(snapshot_file: Path, tmp_path: Path) -> None:
    root = Path(__file__).resolve().parents[1]
    temp = tmp_path / "tmp"
    temp.mkdir()
    env = dict(os.environ, TMPDIR=str(temp), BROWSER="true", PYTHONPATH=str(root))
    proc = subprocess.run(
        [sys.executable, "-m", "faceplate.main", "preview", str(snapshot_file)],
        cwd=root,
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )
    assert proc.returncode in (0, 1), proc.stderr
    assert "Traceback" not in proc.stderr
    assert list(temp.iterdir()) == []


def test_preview_waits_for_revocation(snapshot_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    delays = []

    def fake_schedule(delay, callback):
        delays.append(delay)
        timer = threading.Timer(0, callback)
        timer.start()
        return timer

    def fake_preview(snapshot, options, *, launcher, scheduler):
        path = tmp_path / "preview.html"
        path.write_text("<html></html>", encoding="utf-8")
        scheduler(5.0, lambda: path.unlink())
        return PreviewResult(success=True, url=path.as_uri(), path=path)

    monkeypatch.setattr(cli, "schedule_later", fake_schedule)
    monkeypatch.setattr(cli, "preview_project", fake_preview)
    assert cli.main(["preview", str(snapshot_file)]) == 0
    assert delays == [5.0]
    assert not (tmp_path / "preview.html").exists()
