"""Resolving a window's elements and the order they render in."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .elements import Element
from .models import DEFAULT_LAYER_ID, Layer, ProjectSnapshot, Window


@dataclass(slots=True)
class RenderNode:
    element: Element
    children: List["RenderNode"] = field(default_factory=list)


def children_by_parent(elements: Iterable[Element]) -> Dict[str, List[Element]]:
    result: Dict[str, List[Element]] = {}
    for el in elements:
        if el.parent_id:
            result.setdefault(el.parent_id, []).append(el)
    return result


def resolve_window_elements(snapshot: ProjectSnapshot, window: Window) -> List[Element]:
    """Return the window's elements, each followed by its descendants.

    Each id is visited at most once, so a parent cycle in the snapshot
    cannot loop. Ids listed on the window but missing from the snapshot
    are skipped.
    """

    index = snapshot.element_index()
    children = children_by_parent(snapshot.elements)
    visited: set[str] = set()
    result: List[Element] = []
    stack = list(reversed(window.element_ids))
    while stack:
        element_id = stack.pop()
        if element_id in visited:
            continue
        visited.add(element_id)
        el = index.get(element_id)
        if el is None:
            continue
        result.append(el)
        stack.extend(child.id for child in reversed(children.get(el.id, [])) if child.id not in visited)
    return result


def sort_key_factory(layers: Sequence[Layer], elements: Sequence[Element]):
    """Key placing elements layer first, then by z-index, then list order."""

    rank = {layer.id: pos for pos, layer in enumerate(layers)}
    default_rank = rank.get(DEFAULT_LAYER_ID, -1)
    position = {id(el): pos for pos, el in enumerate(elements)}

    def key(el: Element):
        layer_rank = rank.get(el.layer_id or DEFAULT_LAYER_ID, default_rank)
        return (layer_rank, el.z_index, position.get(id(el), 0))

    return key


def render_order(elements: Sequence[Element], layers: Sequence[Layer]) -> List[Element]:
    return sorted(elements, key=sort_key_factory(layers, elements))


def build_render_tree(elements: Sequence[Element], layers: Sequence[Layer]) -> List[RenderNode]:
    """Nest children under their container, every level sorted by render order.

    Elements whose parent is not part of ``elements`` (or is not a
    container) are rendered at the top level.
    """

    key = sort_key_factory(layers, elements)
    by_id = {el.id: el for el in elements}
    nodes = {el.id: RenderNode(el) for el in elements}
    roots: List[RenderNode] = []
    for el in sorted(elements, key=key):
        parent = by_id.get(el.parent_id) if el.parent_id else None
        if parent is not None and parent.container and parent.id != el.id and not _is_ancestor(el, parent, by_id):
            nodes[parent.id].children.append(nodes[el.id])
        else:
            roots.append(nodes[el.id])
    return roots


def _is_ancestor(candidate: Element, el: Element, by_id: Dict[str, Element]) -> bool:
    """True when ``candidate`` appears in ``el``'s parent chain."""

    seen: set[str] = set()
    current = el
    while current.parent_id and current.parent_id not in seen:
        seen.add(current.parent_id)
        if current.parent_id == candidate.id:
            return True
        parent = by_id.get(current.parent_id)
        if parent is None:
            return False
        current = parent
    return False


def walk(nodes: Iterable[RenderNode]) -> List[Element]:
    """Flatten a render tree depth-first, parents before children."""

    result: List[Element] = []
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        result.append(node.element)
        stack.extend(reversed(node.children))
    return result
