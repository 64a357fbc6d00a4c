"""Per-kind dispatch tables shared by the generators."""

from __future__ import annotations

from typing import Callable, Dict, TypeVar

from ..core.elements import ELEMENT_TYPES, Element
from ..core.errors import GenerationFailure

T = TypeVar("T")


def ensure_exhaustive(table: Dict[str, T], generator: str) -> Dict[str, T]:
    """Fail at import time when ``table`` misses a catalog kind."""

    missing = sorted(set(ELEMENT_TYPES) - set(table))
    if missing:
        raise GenerationFailure(f"{generator} has no case for: {', '.join(missing)}")
    return table


def lookup(table: Dict[str, Callable[..., T]], element: Element, generator: str) -> Callable[..., T]:
    try:
        return table[element.kind]
    except KeyError:
        raise GenerationFailure(
            f"{generator} cannot render element '{element.name}' of kind '{element.kind or type(element).__name__}'"
        ) from None
