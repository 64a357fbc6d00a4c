"""Prefix every selector of a stylesheet so it only applies inside one scope.

Used by the multi-window preview, where several windows share a document.
``html``/``body``/``:root`` selectors become the scope itself; ``@media``
and friends are scoped recursively; ``@font-face`` and ``@keyframes``
bodies are copied untouched.
"""

from __future__ import annotations

import re
from typing import List, Optional

NESTED_AT_RULES = {"media", "supports", "container", "layer", "document"}

_DOCUMENT_ROOT = re.compile(r"(html|body|:root)(?![\w-])")
_NESTED_ROOT = re.compile(r"\s+(?:html|body)(?![\w-])")


def _skip_comment(css: str, i: int) -> int:
    end = css.find("*/", i + 2)
    return len(css) if end < 0 else end + 2


def _scan(css: str, i: int, stops: str) -> Optional[int]:
    """Index of the next top-level character in ``stops``, outside strings and comments."""

    quote = None
    depth = 0
    while i < len(css):
        ch = css[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif css.startswith("/*", i):
            i = _skip_comment(css, i)
            continue
        elif ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(depth - 1, 0)
        elif depth == 0 and ch in stops:
            return i
        i += 1
    return None


def _block_end(css: str, start: int) -> int:
    """Index of the ``}`` matching the ``{`` at ``start``."""

    depth = 0
    i = start
    quote = None
    while i < len(css):
        ch = css[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif css.startswith("/*", i):
            i = _skip_comment(css, i)
            continue
        elif ch in "\"'":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise ValueError("Unbalanced braces in stylesheet")


def split_selectors(selectors: str) -> List[str]:
    parts = []
    start = 0
    while True:
        comma = _scan(selectors, start, ",")
        if comma is None:
            parts.append(selectors[start:])
            return [p.strip() for p in parts if p.strip()]
        parts.append(selectors[start:comma])
        start = comma + 1


def scope_selector(selector: str, scope: str) -> str:
    selector = selector.strip()
    if not selector or selector == scope or selector.startswith(scope + " "):
        return selector
    match = _DOCUMENT_ROOT.match(selector)
    if not match:
        return f"{scope} {selector}"
    rest = selector[match.end():]
    # "html body" collapses onto the scope as well
    nested = _NESTED_ROOT.match(rest)
    while nested:
        rest = rest[nested.end():]
        nested = _NESTED_ROOT.match(rest)
    if not rest:
        return scope
    if rest[0].isspace() or rest[0] in ">+~":
        return f"{scope} {rest.lstrip()}"
    return f"{scope}{rest}"


def scope_css(css: str, scope: str) -> str:
    out: List[str] = []
    i = 0
    n = len(css)
    while i < n:
        if css.startswith("/*", i):
            end = _skip_comment(css, i)
            out.append(css[i:end])
            i = end
            continue
        if css[i].isspace():
            out.append(css[i])
            i += 1
            continue
        stop = _scan(css, i, "{;")
        if stop is None:
            out.append(css[i:])
            break
        if css[stop] == ";":
            # @import, @charset and similar statements
            out.append(css[i : stop + 1])
            i = stop + 1
            continue
        end = _block_end(css, stop)
        head = css[i:stop]
        body = css[stop + 1 : end]
        prelude = head.strip()
        if prelude.startswith("@"):
            keyword = prelude[1:].split(None, 1)[0].lower() if len(prelude) > 1 else ""
            if keyword in NESTED_AT_RULES:
                out.append(f"{head}{{{scope_css(body, scope)}}}")
            else:
                out.append(css[i : end + 1])
        else:
            selectors = dict.fromkeys(scope_selector(s, scope) for s in split_selectors(prelude))
            scoped = ", ".join(selectors)
            out.append(f"{scoped} {{{body}}}")
        i = end + 1
    return "".join(out)
