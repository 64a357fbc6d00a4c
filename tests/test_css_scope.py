from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.export.css_scope import scope_css, scope_selector, split_selectors

SCOPE = "#fp-window-main"


def test_document_roots_become_the_scope() -> None:
    assert scope_selector("html", SCOPE) == SCOPE
    assert scope_selector(":root", SCOPE) == SCOPE
    assert scope_selector("html body", SCOPE) == SCOPE
    assert scope_selector("body.dark", SCOPE) == f"{SCOPE}.dark"
    assert scope_selector("body > .x", SCOPE) == f"{SCOPE} > .x"


def test_other_selectors_are_prefixed() -> None:
    assert scope_selector("#gain", SCOPE) == f"{SCOPE} #gain"
    assert scope_selector(".bodywork", SCOPE) == f"{SCOPE} .bodywork"
    assert scope_selector(f"{SCOPE} #gain", SCOPE) == f"{SCOPE} #gain"


def test_split_selectors_ignores_commas_in_functions() -> None:
    assert split_selectors("a, :is(b, c) , d") == ["a", ":is(b, c)", "d"]


def test_scope_css_rewrites_rules_and_keeps_at_rules() -> None:
    css = """/* Page */
html, body { height: 100%; }
@font-face { font-family: 'Inter'; src: url('data:font/woff2;base64,AAAA'); }
@media (max-width: 600px) {
  #gain, .knob-element { width: 10px; }
}
@keyframes pulse { from { opacity: 0; } to { opacity: 1; } }
#plugin-container { content: "a { b }"; }
"""
    scoped = scope_css(css, SCOPE)
    assert "/* Page */" in scoped
    assert f"{SCOPE} {{ height: 100%; }}" in scoped
    assert "@font-face { font-family: 'Inter';" in scoped
    assert f"{SCOPE} #gain, {SCOPE} .knob-element {{ width: 10px; }}" in scoped
    assert "@keyframes pulse { from { opacity: 0; } to { opacity: 1; } }" in scoped
    assert f'{SCOPE} #plugin-container {{ content: "a {{ b }}"; }}' in scoped


def test_two_windows_do_not_share_rules() -> None:
    main = scope_css("#gain { color: red; }", "#fp-window-main")
    settings = scope_css("#gain { color: blue; }", "#fp-window-settings")
    assert main.startswith("#fp-window-main #gain")
    assert settings.startswith("#fp-window-settings #gain")
    assert "#fp-window-settings" not in main
