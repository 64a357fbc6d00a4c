from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.core.elements import ELEMENT_TYPES, Knob, Meter, element_from_dict
from faceplate.core.errors import UnknownElementKind
from faceplate.core.models import DEFAULT_LAYER_ID, Layer, ProjectSnapshot, Window
from faceplate.core.names import normalize_name, unique_slugs
from faceplate.core.storage import load_snapshot, save_snapshot
from faceplate.core.tree import build_render_tree, render_order, resolve_window_elements, walk


def test_element_from_dict_accepts_camel_case() -> None:
    el = element_from_dict(
        {"id": "k1", "type": "knob", "name": "Drive", "parameterId": "drive", "startAngle": -120, "zIndex": 3}
    )
    assert isinstance(el, Knob)
    assert el.parameter_id == "drive"
    assert el.start_angle == -120
    assert el.z_index == 3
    assert el.bindable


def test_element_from_dict_rejects_unknown_kind() -> None:
    with pytest.raises(UnknownElementKind) as info:
        element_from_dict({"id": "x", "type": "theremin", "name": "X"})
    assert "theremin" in str(info.value)
    assert info.value.element_id == "x"


def test_meter_color_stops_are_coerced() -> None:
    el = element_from_dict(
        {"id": "m", "type": "meter", "name": "Level", "colorStops": [{"position": 0, "color": "#00ff00"}]}
    )
    assert isinstance(el, Meter)
    assert el.color_stops[0].color == "#00ff00"


def test_catalog_families_are_set() -> None:
    assert len(ELEMENT_TYPES) >= 60
    assert all(cls.family for cls in ELEMENT_TYPES.values())


def test_snapshot_without_windows_is_migrated() -> None:
    snapshot = ProjectSnapshot.from_dict(
        {
            "name": "Old",
            "canvas": {"width": 640, "height": 480, "backgroundColor": "#000000"},
            "elements": [
                {"id": "a", "type": "knob", "name": "A"},
                {"id": "p", "type": "panel", "name": "P"},
                {"id": "b", "type": "knob", "name": "B", "parentId": "p"},
            ],
        }
    )
    assert len(snapshot.windows) == 1
    window = snapshot.windows[0]
    assert window.kind == "release"
    assert (window.width, window.height) == (640, 480)
    assert window.element_ids == ["a", "p"]


def test_ordered_layers_always_contains_default() -> None:
    snapshot = ProjectSnapshot(name="x", layers=[Layer(id="top", name="Top", order=5)])
    ids = [layer.id for layer in snapshot.ordered_layers()]
    assert ids == [DEFAULT_LAYER_ID, "top"]


def test_resolve_window_elements_survives_parent_cycle() -> None:
    a = element_from_dict({"id": "a", "type": "panel", "name": "A", "parentId": "b"})
    b = element_from_dict({"id": "b", "type": "panel", "name": "B", "parentId": "a"})
    snapshot = ProjectSnapshot(name="cycle", elements=[a, b])
    window = Window(id="w", name="W", element_ids=["a"])
    resolved = resolve_window_elements(snapshot, window)
    assert [el.id for el in resolved] == ["a", "b"]

    roots = build_render_tree(resolved, snapshot.ordered_layers())
    assert sorted(el.id for el in walk(roots)) == ["a", "b"]


def test_resolve_window_elements_skips_missing_ids(snapshot: ProjectSnapshot) -> None:
    window = Window(id="w", name="W", element_ids=["gain", "nope"])
    assert [el.id for el in resolve_window_elements(snapshot, window)] == ["gain"]


def test_render_order_uses_layer_then_z_index() -> None:
    layers = [Layer(id="default", name="Default", order=0), Layer(id="top", name="Top", order=1)]
    high = element_from_dict({"id": "1", "type": "rectangle", "name": "High", "zIndex": 10})
    overlay = element_from_dict({"id": "2", "type": "rectangle", "name": "Overlay", "layerId": "top"})
    low = element_from_dict({"id": "3", "type": "rectangle", "name": "Low", "zIndex": 1})
    ordered = render_order([overlay, high, low], layers)
    assert [el.name for el in ordered] == ["Low", "High", "Overlay"]


def test_render_tree_nests_children_under_containers(snapshot: ProjectSnapshot) -> None:
    main = snapshot.window("main")
    elements = resolve_window_elements(snapshot, main)
    roots = build_render_tree(elements, snapshot.ordered_layers())
    panel = next(node for node in roots if node.element.id == "panel")
    assert [child.element.id for child in panel.children] == ["mix"]
    assert "mix" not in [node.element.id for node in roots]


def test_names() -> None:
    assert normalize_name("Gain Knob") == "gain-knob"
    assert normalize_name("masterVolume") == "master-volume"
    assert normalize_name("1st Band") == "el-1st-band"
    assert unique_slugs(["Main", "Main", "Settings!"]) == ["main", "main-2", "settings"]


def test_snapshot_round_trip_through_storage(tmp_path: Path, snapshot_data: dict) -> None:
    path = tmp_path / "project.json"
    save_snapshot(path, snapshot_data)
    loaded = load_snapshot(path)
    assert loaded.name == "Demo Synth"
    assert [w.id for w in loaded.windows] == ["main", "settings", "debug"]
    assert loaded.window("debug").kind == "developer"
