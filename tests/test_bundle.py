from __future__ import annotations

import base64
import io
import sys
import zipfile
from pathlib import Path
from typing import Optional

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.core.models import ProjectSnapshot
from faceplate.export.bundle import export_bundle
from faceplate.export.delivery import FixedDirectoryAccess, UnsupportedDirectoryAccess
from faceplate.export.options import ExportOptions

ICON_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape" '
    'viewBox="0 0 24 24">\n  <!-- icon -->\n  <g inkscape:label="x">\n    '
    '<path id="icon-path" d="M 1.123456 2.987654 L 20.5 20.5" onclick="alert(1)"/>\n  </g>\n  <g/>\n</svg>'
)


class CancellingAccess:
    def supported(self) -> bool:
        return True

    def request_directory(self) -> Optional[Path]:
        return None


def _zip_names(data: bytes) -> list:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return zf.namelist()


def test_multi_window_archive_layout(snapshot: ProjectSnapshot) -> None:
    result = export_bundle(snapshot, ExportOptions())
    assert result.success, result.error
    assert result.windows == ["Main", "Settings"]
    assert result.archive_name == "demo-synth-bundle.zip"
    names = _zip_names(result.archive_bytes)
    for slug in ("main", "settings"):
        for filename in ("index.html", "style.css", "components.js", "bindings.js"):
            assert f"{slug}/{filename}" in names
    assert "INTEGRATION.md" in names
    assert not any(name.startswith("debug/") for name in names)
    assert result.file_count == len(names)


def test_developer_windows_can_be_included(snapshot: ProjectSnapshot) -> None:
    result = export_bundle(snapshot, ExportOptions(include_developer_windows=True))
    assert result.success, result.error
    assert result.windows == ["Main", "Settings", "Debug"]
    assert "debug/index.html" in result.files


def test_single_window_files_sit_at_the_root(snapshot: ProjectSnapshot) -> None:
    result = export_bundle(snapshot, ExportOptions(), window_id="settings")
    assert result.success, result.error
    assert result.files[:4] == ["index.html", "style.css", "components.js", "bindings.js"]
    assert result.files[-1] == "INTEGRATION.md"


def test_navigation_links_point_at_sibling_folders(snapshot: ProjectSnapshot) -> None:
    result = export_bundle(snapshot, ExportOptions())
    with zipfile.ZipFile(io.BytesIO(result.archive_bytes)) as zf:
        bindings = zf.read("main/bindings.js").decode("utf-8")
        integration = zf.read("INTEGRATION.md").decode("utf-8")
    assert '"href": "../settings/index.html"' in bindings
    assert "window.__relay__ = {" not in bindings
    assert "# Demo Synth - Host Integration" in integration
    assert "`#gain` | knob | `gain`" in integration
    assert "`#open-settings` opens `Settings`" in integration


def test_export_is_deterministic(snapshot_data: dict) -> None:
    first = export_bundle(ProjectSnapshot.from_dict(snapshot_data), ExportOptions())
    second = export_bundle(ProjectSnapshot.from_dict(snapshot_data), ExportOptions())
    assert first.archive_bytes == second.archive_bytes


def test_name_collision_blocks_every_artifact(snapshot_data: dict) -> None:
    snapshot_data["elements"][1]["name"] = "Gain"
    result = export_bundle(ProjectSnapshot.from_dict(snapshot_data), ExportOptions())
    assert not result.success
    assert "Duplicate element name 'Gain'" in result.error
    assert "gain" in result.error
    assert result.archive_bytes is None
    assert result.files == []


def test_snapshot_is_not_modified(snapshot: ProjectSnapshot) -> None:
    before = [el.to_dict() for el in snapshot.elements]
    export_bundle(snapshot, ExportOptions())
    assert [el.to_dict() for el in snapshot.elements] == before


def test_folder_delivery_writes_same_files_as_archive(snapshot: ProjectSnapshot, tmp_path: Path) -> None:
    archive = export_bundle(snapshot, ExportOptions())
    folder = export_bundle(
        snapshot,
        ExportOptions(delivery="folder"),
        directory_access=FixedDirectoryAccess(tmp_path / "bundle"),
    )
    assert folder.success, folder.error
    assert folder.output_dir == tmp_path / "bundle"
    with zipfile.ZipFile(io.BytesIO(archive.archive_bytes)) as zf:
        for name in zf.namelist():
            assert (tmp_path / "bundle" / name).read_bytes() == zf.read(name)


def test_folder_delivery_unavailable_is_reported(snapshot: ProjectSnapshot) -> None:
    for access in (None, UnsupportedDirectoryAccess()):
        result = export_bundle(snapshot, ExportOptions(delivery="folder"), directory_access=access)
        assert not result.success
        assert not result.cancelled
        assert "unavailable" in result.error
        assert result.archive_bytes is None


def test_cancelled_directory_choice_is_not_an_error(snapshot: ProjectSnapshot) -> None:
    result = export_bundle(snapshot, ExportOptions(delivery="folder"), directory_access=CancellingAccess())
    assert result.cancelled
    assert not result.success
    assert result.error is None


def test_standalone_target_prepends_mock_relay(snapshot: ProjectSnapshot) -> None:
    result = export_bundle(snapshot, ExportOptions(target="standalone"), window_id="main")
    with zipfile.ZipFile(io.BytesIO(result.archive_bytes)) as zf:
        bindings = zf.read("bindings.js").decode("utf-8")
    assert bindings.startswith("// Mock relay")


def test_archive_path_saves_zip(snapshot: ProjectSnapshot, tmp_path: Path) -> None:
    result = export_bundle(snapshot, ExportOptions(), archive_path=tmp_path / "exports" / "demo")
    assert result.success
    saved = tmp_path / "exports" / "demo.zip"
    assert saved.read_bytes() == result.archive_bytes


def test_svg_assets_are_optimized_and_sanitized(snapshot_data: dict) -> None:
    snapshot_data["elements"].append(
        {"id": "icon", "type": "iconbutton", "name": "Icon", "parameterId": "icon", "iconSvg": ICON_SVG}
    )
    snapshot_data["windows"][0]["elementIds"].append("icon")
    snapshot = ProjectSnapshot.from_dict(snapshot_data)

    result = export_bundle(snapshot, ExportOptions())
    assert result.size_savings is not None
    assert result.size_savings.savings_percent > 0
    with zipfile.ZipFile(io.BytesIO(result.archive_bytes)) as zf:
        html = zf.read("main/index.html").decode("utf-8")
    assert 'id="icon-path"' in html
    assert 'viewBox="0 0 24 24"' in html
    assert "onclick" not in html
    assert "M 1.123 2.988" in html

    plain = export_bundle(snapshot, ExportOptions(optimize_assets=False))
    assert plain.size_savings is None


def test_broken_svg_falls_back_to_original(snapshot_data: dict) -> None:
    snapshot_data["elements"].append(
        {"id": "art", "type": "svggraphic", "name": "Art", "svgContent": "<svg><g></svg>"}
    )
    snapshot_data["windows"][0]["elementIds"].append("art")
    result = export_bundle(ProjectSnapshot.from_dict(snapshot_data), ExportOptions())
    assert result.success, result.error
    assert result.size_savings is not None
    assert result.size_savings.savings_percent == 0


def test_fonts_are_bundled_and_warned(snapshot_data: dict) -> None:
    snapshot_data["elements"].append({"id": "title", "type": "label", "name": "Title", "fontFamily": "Roboto"})
    snapshot_data["elements"].append({"id": "sub", "type": "label", "name": "Subtitle", "fontFamily": "Inter"})
    snapshot_data["windows"][0]["elementIds"] += ["title", "sub"]
    snapshot_data["fonts"] = [
        {"family": "Roboto", "filename": "Roboto-Regular.woff2", "data_base64": base64.b64encode(b"font").decode()}
    ]
    result = export_bundle(ProjectSnapshot.from_dict(snapshot_data), ExportOptions())
    assert result.success, result.error
    assert "fonts/Roboto-Regular.woff2" in result.files
    assert any('"Inter"' in warning for warning in result.warnings)
    with zipfile.ZipFile(io.BytesIO(result.archive_bytes)) as zf:
        css = zf.read("main/style.css").decode("utf-8")
        assert zf.read("fonts/Roboto-Regular.woff2") == b"font"
    assert "url('../fonts/Roboto-Regular.woff2')" in css


def test_unknown_window_fails_cleanly(snapshot: ProjectSnapshot) -> None:
    result = export_bundle(snapshot, ExportOptions(), window_id="nope")
    assert not result.success
    assert "nope" in result.error


def test_unparsable_svg_is_reported(snapshot_data: dict) -> None:
    snapshot_data["elements"].append(
        {"id": "art", "type": "svggraphic", "name": "Art", "svgContent": "<svg><g></svg>"}
    )
    snapshot_data["windows"][0]["elementIds"].append("art")
    result = export_bundle(ProjectSnapshot.from_dict(snapshot_data), ExportOptions(optimize_assets=False))
    assert result.success, result.error
    assert any('"Art"' in warning and "could not be parsed" in warning for warning in result.warnings)


def test_fonts_sharing_a_file_name_are_kept_apart(snapshot_data: dict) -> None:
    snapshot_data["elements"].append({"id": "title", "type": "label", "name": "Title", "fontFamily": "Roboto"})
    snapshot_data["elements"].append({"id": "sub", "type": "label", "name": "Subtitle", "fontFamily": "Inter"})
    snapshot_data["windows"][0]["elementIds"] += ["title", "sub"]
    snapshot_data["fonts"] = [
        {"family": "Roboto", "filename": "Regular.woff2", "data_base64": base64.b64encode(b"roboto").decode()},
        {"family": "Inter", "filename": "Regular.woff2", "data_base64": base64.b64encode(b"inter").decode()},
    ]
    result = export_bundle(ProjectSnapshot.from_dict(snapshot_data), ExportOptions())
    assert result.success, result.error
    assert "fonts/Regular.woff2" in result.files
    assert "fonts/Regular-2.woff2" in result.files
    assert any("Regular-2.woff2" in warning for warning in result.warnings)
    with zipfile.ZipFile(io.BytesIO(result.archive_bytes)) as zf:
        css = zf.read("main/style.css").decode("utf-8")
        assert zf.read("fonts/Regular.woff2") == b"inter"
        assert zf.read("fonts/Regular-2.woff2") == b"roboto"
    assert "url('../fonts/Regular.woff2')" in css
    assert "url('../fonts/Regular-2.woff2')" in css
