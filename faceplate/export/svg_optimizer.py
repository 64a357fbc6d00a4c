"""Conservative SVG optimization with size accounting.

Safe mode keeps everything other code may rely on: the viewBox, every
id, title/desc/metadata, and the original shape elements. What goes is
editor bookkeeping (comments, processing instructions, Inkscape,
Sodipodi, Sketch and Illustrator namespaces), insignificant whitespace,
empty groups and excess numeric precision.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from lxml import etree as ET

from ..core.names import fmt_number
from .svg_sanitizer import parse_svg, serialize

logger = logging.getLogger(__name__)

TRANSFORM_PRECISION = 7
COORDINATE_PRECISION = 3

EDITOR_NAMESPACES = {
    "http://www.inkscape.org/namespaces/inkscape",
    "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "http://www.bohemiancoding.com/sketch/ns",
    "http://ns.adobe.com/AdobeIllustrator/10.0/",
    "http://ns.adobe.com/AdobeSVGViewerExtensions/3.0/",
    "http://ns.adobe.com/Extensibility/1.0/",
    "http://ns.adobe.com/Flows/1.0/",
    "http://ns.adobe.com/GenericCustomNamespace/1.0/",
    "http://ns.adobe.com/Graphs/1.0/",
    "http://ns.adobe.com/ImageReplacement/1.0/",
    "http://ns.adobe.com/SaveForWeb/1.0/",
    "http://ns.adobe.com/Variables/1.0/",
    "http://ns.adobe.com/XPath/1.0/",
}

# Whitespace inside these is content.
TEXT_CONTENT = {"text", "tspan", "textPath", "title", "desc", "style", "metadata"}
REMOVABLE_WHEN_EMPTY = {"g", "defs"}
TRANSFORM_ATTRIBUTES = {"transform", "gradientTransform", "patternTransform"}
COORDINATE_ATTRIBUTES = {"d", "points"}

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


@dataclass
class OptimizationResult:
    optimized_svg: str
    original_bytes: int
    optimized_bytes: int
    savings_percent: float


@dataclass
class BatchOptimization:
    optimized_svgs: List[str]
    total_original_bytes: int
    total_optimized_bytes: int
    savings_percent: float


def byte_size(text: str) -> int:
    return len(text.encode("utf-8"))


def savings_percent(original: int, optimized: int) -> float:
    if original <= 0:
        return 0.0
    return (original - optimized) / original * 100


def round_numbers(value: str, places: int) -> str:
    """Round every number in an attribute value, keeping separators intact."""

    def replace(match: re.Match) -> str:
        text = match.group(0)
        rounded = fmt_number(float(text), places)
        start = match.start()
        # "10-0.0001" must not collapse to "100", nor "1.0.5" to "10.5"
        if start > 0 and value[start - 1] in "0123456789." and rounded[0].isdigit():
            rounded = " " + rounded
        return rounded

    return _NUMBER.sub(replace, value)


def _localname(node: ET._Element) -> str:
    return ET.QName(node).localname


def _namespace(name: str) -> str:
    return ET.QName(name).namespace or ""


def _drop_editor_data(root: ET._Element) -> None:
    doomed = [
        node
        for node in root.iter()
        if isinstance(node.tag, str) and _namespace(node.tag) in EDITOR_NAMESPACES
    ]
    for node in doomed:
        parent = node.getparent()
        if parent is not None:
            parent.remove(node)
    for node in root.iter():
        if not isinstance(node.tag, str):
            continue
        for attr in list(node.attrib):
            if _namespace(attr) in EDITOR_NAMESPACES:
                del node.attrib[attr]


def _collapse_whitespace(root: ET._Element) -> None:
    for node in root.iter():
        if not isinstance(node.tag, str):
            continue
        in_text = _localname(node) in TEXT_CONTENT
        if not in_text and node.text is not None and not node.text.strip():
            node.text = None
        parent = node.getparent()
        parent_is_text = parent is not None and _localname(parent) in TEXT_CONTENT
        if not parent_is_text and node.tail is not None and not node.tail.strip():
            node.tail = None


def _remove_empty_containers(root: ET._Element) -> None:
    changed = True
    while changed:
        changed = False
        for node in list(root.iter()):
            if node is root or not isinstance(node.tag, str):
                continue
            if (
                _localname(node) in REMOVABLE_WHEN_EMPTY
                and len(node) == 0
                and not (node.text or "").strip()
                and "id" not in node.attrib
            ):
                node.getparent().remove(node)
                changed = True


def _round_attributes(root: ET._Element) -> None:
    for node in root.iter():
        if not isinstance(node.tag, str):
            continue
        for attr, value in list(node.attrib.items()):
            name = ET.QName(attr).localname
            if name in TRANSFORM_ATTRIBUTES:
                node.attrib[attr] = round_numbers(value, TRANSFORM_PRECISION)
            elif name in COORDINATE_ATTRIBUTES:
                node.attrib[attr] = round_numbers(value, COORDINATE_PRECISION)


def optimize_svg(svg_content: str) -> OptimizationResult:
    """Optimize one SVG document. Raises ``InvalidSvg`` on unparsable input."""

    original = byte_size(svg_content)
    root = parse_svg(svg_content, remove_comments=True, remove_pis=True)
    _drop_editor_data(root)
    _collapse_whitespace(root)
    _remove_empty_containers(root)
    _round_attributes(root)
    ET.cleanup_namespaces(root)
    optimized_svg = serialize(root)
    optimized = byte_size(optimized_svg)
    return OptimizationResult(
        optimized_svg=optimized_svg,
        original_bytes=original,
        optimized_bytes=optimized,
        savings_percent=savings_percent(original, optimized),
    )


def combine_results(results: Iterable[OptimizationResult]) -> BatchOptimization:
    """Totals for a batch; the percentage comes from summed bytes."""

    results = list(results)
    total_original = sum(r.original_bytes for r in results)
    total_optimized = sum(r.optimized_bytes for r in results)
    return BatchOptimization(
        optimized_svgs=[r.optimized_svg for r in results],
        total_original_bytes=total_original,
        total_optimized_bytes=total_optimized,
        savings_percent=savings_percent(total_original, total_optimized),
    )


def optimize_multiple_svgs(svg_contents: Sequence[str]) -> BatchOptimization:
    return combine_results(optimize_svg(svg) for svg in svg_contents)
