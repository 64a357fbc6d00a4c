"""Parsing and sanitizing of user supplied SVG before it is inlined."""

from __future__ import annotations

import logging

from lxml import etree as ET

from ..core.errors import InvalidSvg

logger = logging.getLogger(__name__)

BLOCKED_TAGS = {"script", "foreignObject"}
LINK_ATTRIBUTES = {"href"}


def _parser(**kwargs) -> ET.XMLParser:
    return ET.XMLParser(resolve_entities=False, no_network=True, load_dtd=False, **kwargs)


def parse_svg(text: str, **parser_options) -> ET._Element:
    try:
        root = ET.fromstring(text.strip().encode("utf-8"), _parser(**parser_options))
    except ET.XMLSyntaxError as exc:
        raise InvalidSvg(f"Invalid SVG: {exc}") from exc
    if ET.QName(root).localname != "svg":
        raise InvalidSvg(f"Expected an <svg> root element, found <{ET.QName(root).localname}>")
    return root


def serialize(root: ET._Element) -> str:
    return ET.tostring(root, encoding="unicode")


def strip_active_content(root: ET._Element) -> int:
    """Remove scripts, foreign content, event handlers and javascript: links.

    Returns the number of removed nodes and attributes.
    """

    removed = 0
    doomed = [
        node
        for node in root.iter()
        if isinstance(node.tag, str) and ET.QName(node).localname in BLOCKED_TAGS
    ]
    for node in doomed:
        parent = node.getparent()
        if parent is not None:
            parent.remove(node)
            removed += 1

    for node in root.iter():
        if not isinstance(node.tag, str):
            continue
        for attr in list(node.attrib):
            name = ET.QName(attr).localname
            value = node.attrib[attr]
            if name.lower().startswith("on"):
                del node.attrib[attr]
                removed += 1
            elif name in LINK_ATTRIBUTES and value.strip().lower().startswith("javascript:"):
                del node.attrib[attr]
                removed += 1
    return removed


def sanitize_svg(text: str) -> str:
    root = parse_svg(text)
    removed = strip_active_content(root)
    if removed:
        logger.info("Removed %d active node(s) or attribute(s) from inline SVG", removed)
    return serialize(root)
