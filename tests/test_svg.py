from __future__ import annotations

import sys
from pathlib import Path

import pytest
from lxml import etree

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.core.errors import InvalidSvg
from faceplate.export.svg_optimizer import (
    OptimizationResult,
    combine_results,
    optimize_multiple_svgs,
    optimize_svg,
    round_numbers,
)
from faceplate.export.svg_sanitizer import sanitize_svg

KNOB_SVG = """<?xml version="1.0" encoding="UTF-8"?>
<!-- exported from an editor -->
<svg xmlns="http://www.w3.org/2000/svg"
     xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape"
     xmlns:sodipodi="http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd"
     viewBox="0 0 100 100" width="100" height="100">
  <sodipodi:namedview id="namedview1" inkscape:zoom="2.5"/>
  <title>Knob</title>
  <g inkscape:label="Layer 1">
    <circle cx="50" cy="50" r="40" fill="#333"/>
    <path id="knob-indicator-1" d="M 50.123456 10.987654 L 50.5 50.25"
          transform="rotate(45.123456789 50 50)"/>
  </g>
  <g></g>
  <defs>   </defs>
</svg>
"""


def test_optimizer_keeps_ids_and_viewbox() -> None:
    result = optimize_svg(KNOB_SVG)
    root = etree.fromstring(result.optimized_svg.encode("utf-8"))
    assert root.get("viewBox") == "0 0 100 100"
    indicator = root.find(".//{http://www.w3.org/2000/svg}path")
    assert indicator.get("id") == "knob-indicator-1"
    assert root.find("{http://www.w3.org/2000/svg}title").text == "Knob"


def test_optimizer_strips_editor_data_and_comments() -> None:
    result = optimize_svg(KNOB_SVG)
    text = result.optimized_svg
    assert "inkscape" not in text
    assert "sodipodi" not in text
    assert "<!--" not in text
    assert "<defs" not in text
    assert result.optimized_bytes < result.original_bytes
    assert result.savings_percent > 0


def test_optimizer_rounds_coordinates_and_transforms() -> None:
    text = optimize_svg(KNOB_SVG).optimized_svg
    assert 'd="M 50.123 10.988 L 50.5 50.25"' in text
    assert "rotate(45.1234568 50 50)" in text


def test_round_numbers_keeps_numbers_apart() -> None:
    assert round_numbers("M10-0.0001", 3) == "M10 0"
    assert round_numbers("1.23456,7.5", 2) == "1.23,7.5"


def test_optimizer_rejects_invalid_svg() -> None:
    with pytest.raises(InvalidSvg):
        optimize_svg("<svg><g></svg>")
    with pytest.raises(InvalidSvg):
        optimize_svg("<html></html>")


def test_batch_savings_use_summed_bytes() -> None:
    batch = combine_results(
        [
            OptimizationResult("a", 1000, 500, 50.0),
            OptimizationResult("b", 1000, 1000, 0.0),
        ]
    )
    assert batch.total_original_bytes == 2000
    assert batch.total_optimized_bytes == 1500
    assert batch.savings_percent == pytest.approx(25.0)


def test_optimize_multiple_svgs_keeps_order() -> None:
    batch = optimize_multiple_svgs([KNOB_SVG, '<svg xmlns="http://www.w3.org/2000/svg"><rect id="r"/></svg>'])
    assert len(batch.optimized_svgs) == 2
    assert 'id="r"' in batch.optimized_svgs[1]


def test_sanitizer_removes_active_content() -> None:
    dirty = (
        '<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" onload="alert(1)">'
        "<script>alert(2)</script>"
        '<foreignObject><div xmlns="http://www.w3.org/1999/xhtml">x</div></foreignObject>'
        '<a xlink:href="javascript:alert(3)"><rect onclick="alert(4)" width="10" height="10"/></a>'
        '<a href="https://example.com"><circle r="2"/></a>'
        "</svg>"
    )
    clean = sanitize_svg(dirty)
    assert "alert" not in clean
    assert "script" not in clean
    assert "foreignObject" not in clean
    assert 'href="https://example.com"' in clean
    assert 'width="10"' in clean
