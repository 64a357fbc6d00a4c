from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.core.elements import element_from_dict
from faceplate.export.validator import Invalid, Valid, format_errors, validate_elements


def _knob(id_: str, name: str, **extra) -> object:
    return element_from_dict({"id": id_, "type": "knob", "name": name, **extra})


def test_duplicate_names_block_export() -> None:
    first = _knob("k1", "Gain", parameterId="gain")
    second = _knob("k2", "Gain", parameterId="gain2")
    result = validate_elements([first, second])
    assert isinstance(result, Invalid)
    assert not result.valid
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.element_id == "k2"
    assert "k1" in error.message
    assert "#gain" in error.message


def test_names_colliding_after_normalization_are_duplicates() -> None:
    result = validate_elements([_knob("a", "Master Volume"), _knob("b", "masterVolume")])
    assert isinstance(result, Invalid)


def test_empty_name_is_an_error() -> None:
    result = validate_elements([_knob("a", "   ")])
    assert isinstance(result, Invalid)
    assert result.errors[0].field == "name"


def test_missing_parent_is_an_error() -> None:
    result = validate_elements([_knob("a", "Orphan", parentId="ghost")])
    assert isinstance(result, Invalid)
    assert "ghost" in result.errors[0].message


def test_warnings_do_not_block() -> None:
    result = validate_elements([_knob("a", "Drive"), _knob("b", "Tiny", parameterId="tiny", width=0)])
    assert isinstance(result, Valid)
    assert result.valid
    assert result.errors == []
    fields = sorted(w.field for w in result.warnings)
    assert fields == ["parameter_id", "width"]


def test_navigation_to_unknown_window_warns() -> None:
    button = element_from_dict(
        {
            "id": "b",
            "type": "button",
            "name": "Go",
            "parameterId": "go",
            "action": "navigate-window",
            "targetWindowId": "elsewhere",
        }
    )
    assert validate_elements([button]).warnings == []
    result = validate_elements([button], known_window_ids={"main"})
    assert [w.field for w in result.warnings] == ["target_window_id"]


def test_format_errors_lists_every_error() -> None:
    result = validate_elements([_knob("a", ""), _knob("b", "X", parentId="nope")])
    text = format_errors(result.errors)
    assert text.startswith("Please fix these issues before exporting:")
    assert text.count("•") == 2
