from __future__ import annotations

import io
import os
import sys
import zipfile
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.core.errors import BundleIOError
from faceplate.export import delivery
from faceplate.export.delivery import build_archive, save_archive, write_folder

FILES = {
    "main/index.html": "<!DOCTYPE html>",
    "main/style.css": "#gain { left: 1px; }",
    "fonts/Inter-Regular.woff2": b"\x00\x01binary",
    "INTEGRATION.md": "# Demo",
}


def test_archive_is_byte_identical_for_identical_input() -> None:
    assert build_archive(FILES) == build_archive(dict(FILES))


def test_archive_entries_keep_insertion_order_and_timestamp() -> None:
    with zipfile.ZipFile(io.BytesIO(build_archive(FILES))) as zf:
        infos = zf.infolist()
        assert [info.filename for info in infos] == list(FILES)
        assert all(info.date_time == (1980, 1, 1, 0, 0, 0) for info in infos)
        assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in infos)
        assert zf.read("fonts/Inter-Regular.woff2") == b"\x00\x01binary"


def test_archive_and_folder_hold_the_same_files(tmp_path: Path) -> None:
    root = write_folder(FILES, tmp_path / "out")
    on_disk = {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in root.rglob("*")
        if path.is_file()
    }
    with zipfile.ZipFile(io.BytesIO(build_archive(FILES))) as zf:
        in_zip = {name: zf.read(name) for name in zf.namelist()}
    assert on_disk == in_zip
    assert not any(p.name.startswith(".faceplate-staging-") for p in root.iterdir())


def test_write_folder_replaces_existing_files(tmp_path: Path) -> None:
    root = tmp_path / "out"
    (root / "main").mkdir(parents=True)
    (root / "main" / "index.html").write_text("old", encoding="utf-8")
    write_folder(FILES, root)
    assert (root / "main" / "index.html").read_text(encoding="utf-8") == "<!DOCTYPE html>"


def test_write_folder_rolls_back_on_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    root = tmp_path / "out"
    (root / "main").mkdir(parents=True)
    (root / "main" / "index.html").write_text("old", encoding="utf-8")

    real_replace = os.replace
    calls = {"count": 0}

    def flaky_replace(src, dst):
        if Path(dst).name == "INTEGRATION.md":
            calls["count"] += 1
            raise OSError("disk full")
        return real_replace(src, dst)

    monkeypatch.setattr(delivery.os, "replace", flaky_replace)
    with pytest.raises(BundleIOError):
        write_folder(FILES, root)

    assert calls["count"] == 1
    assert (root / "main" / "index.html").read_text(encoding="utf-8") == "old"
    assert not (root / "main" / "style.css").exists()
    assert not (root / "fonts" / "Inter-Regular.woff2").exists()
    assert not any(p.name.startswith(".faceplate-staging-") for p in root.iterdir())


def test_paths_outside_the_bundle_are_refused(tmp_path: Path) -> None:
    with pytest.raises(BundleIOError):
        build_archive({"../escape.txt": "x"})
    with pytest.raises(BundleIOError):
        write_folder({"/etc/passwd": "x"}, tmp_path)


def test_save_archive_appends_extension(tmp_path: Path) -> None:
    target = save_archive(b"PK", tmp_path / "bundle")
    assert target.name == "bundle.zip"
    assert target.read_bytes() == b"PK"
