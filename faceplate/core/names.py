"""Identifier helpers shared by the generators."""

from __future__ import annotations

import re

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_IDENT = re.compile(r"[^A-Za-z0-9]+")


def normalize_name(name: str) -> str:
    """Turn a user-facing element name into a selector-safe DOM id.

    >>> normalize_name("Gain Knob")
    'gain-knob'
    >>> normalize_name("masterVolume")
    'master-volume'
    """

    text = _CAMEL_BOUNDARY.sub(r"\1-\2", (name or "").strip())
    text = _NON_IDENT.sub("-", text).strip("-").lower()
    if not text:
        return "element"
    if text[0].isdigit():
        text = f"el-{text}"
    return text


def slugify(text: str, default: str = "window") -> str:
    """Convert text to a URL-safe slug."""

    return re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-") or default


def unique_slugs(names: list[str], default: str = "window") -> list[str]:
    """Slugify every name, suffixing repeats with -2, -3, ..."""

    seen: dict[str, int] = {}
    slugs: list[str] = []
    for name in names:
        base = slugify(name, default)
        count = seen.get(base, 0) + 1
        seen[base] = count
        slugs.append(base if count == 1 else f"{base}-{count}")
    return slugs


def camel_to_snake(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def fmt_number(value: float, places: int = 4) -> str:
    """Format a number the same way on every run (no exponent, no -0)."""

    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return str(value)
    text = f"{value:.{places}f}".rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text
