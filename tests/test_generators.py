from __future__ import annotations

import json
import re
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from faceplate.core.elements import ELEMENT_TYPES, Element, element_from_dict
from faceplate.core.errors import GenerationFailure
from faceplate.core.models import ProjectSnapshot
from faceplate.core.tree import resolve_window_elements
from faceplate.export.css_generator import PROPERTY_BUILDERS, generate_css
from faceplate.export.dispatch import ensure_exhaustive, lookup
from faceplate.export.html_generator import RENDERERS, generate_html, render_element
from faceplate.export.js_generator import (
    CONFIG_BUILDERS,
    binding_entries,
    generate_bindings_js,
    generate_components_js,
    js_json,
)
from faceplate.export.options import GeneratorOptions, WindowLink
from faceplate.export.validator import validate_elements


def _main_window(snapshot: ProjectSnapshot):
    window = snapshot.window("main")
    elements = resolve_window_elements(snapshot, window)
    opts = GeneratorOptions(window=window, layers=snapshot.ordered_layers())
    return elements, opts


def _bindings_json(text: str) -> list:
    match = re.search(r"var BINDINGS = (.*?);\n  var NAVIGATION", text, re.S)
    assert match
    return json.loads(match.group(1))


def test_generators_are_deterministic(snapshot_data: dict) -> None:
    outputs = []
    for _ in range(2):
        snapshot = ProjectSnapshot.from_dict(snapshot_data)
        elements, opts = _main_window(snapshot)
        outputs.append(
            (
                generate_html(elements, opts),
                generate_css(elements, opts),
                generate_components_js(elements, opts),
                generate_bindings_js(elements, opts),
            )
        )
    assert outputs[0] == outputs[1]


def test_html_uses_normalized_names_and_nests_children(snapshot: ProjectSnapshot) -> None:
    elements, opts = _main_window(snapshot)
    html = generate_html(elements, opts)
    assert '<div id="plugin-container" data-window-id="main" data-window-name="Main">' in html
    assert 'id="gain"' in html
    assert 'id="open-settings"' in html
    assert 'data-navigate-window="settings"' in html
    assert '<link rel="stylesheet" href="style.css">' in html
    assert html.index('id="panel"') < html.index('id="mix"')
    assert 'data-parameter-id="gain"' in html


def test_hidden_elements_keep_their_node() -> None:
    el = element_from_dict({"id": "k", "type": "knob", "name": "Hidden Knob", "visible": False})
    window = ProjectSnapshot.from_dict({"name": "x", "elements": [el.to_dict()]}).windows[0]
    markup = render_element(el, GeneratorOptions(window=window))
    assert markup.startswith("<div")
    assert markup.split(">", 1)[0].endswith(" hidden")


def test_text_is_escaped() -> None:
    el = element_from_dict({"id": "l", "type": "label", "name": "Title", "text": "<b>Loud & Clear</b>"})
    window = ProjectSnapshot.from_dict({"name": "x", "elements": [el.to_dict()]}).windows[0]
    markup = render_element(el, GeneratorOptions(window=window))
    assert "&lt;b&gt;Loud &amp; Clear&lt;/b&gt;" in markup


def test_css_positions_children_relative_to_parent(snapshot: ProjectSnapshot) -> None:
    elements, opts = _main_window(snapshot)
    css = generate_css(elements, opts)
    assert "#mix {\n  left: 5px;\n  top: 5px;\n  width: 40px;\n  height: 40px;" in css
    assert "#plugin-container {" in css
    assert "width: 400px;" in css
    assert css.index("/* Reset */") < css.index("/* Element-specific styles */")


def test_css_embeds_fonts_first(snapshot: ProjectSnapshot) -> None:
    from faceplate.export.fonts import BundledFont

    elements, opts = _main_window(snapshot)
    opts.fonts = [BundledFont("Inter", "Inter-Regular.woff2", b"data")]
    css = generate_css(elements, opts)
    assert css.startswith("/* Embedded Fonts */\n@font-face {")
    assert "url('./fonts/Inter-Regular.woff2') format('woff2')" in css


def test_binding_entries_carry_parameter_ids(snapshot: ProjectSnapshot) -> None:
    elements, opts = _main_window(snapshot)
    entries = {entry["id"]: entry for entry in binding_entries(elements, opts.layers)}
    assert entries["gain"]["parameterId"] == "gain"
    assert entries["cutoff"]["parameterId"] == "cutoff"
    assert entries["open-settings"]["config"]["navigate"] is True
    assert "panel" not in entries
    assert entries["mix"]["parameterId"] == "mix"
    assert entries["gain"]["family"] == "rotary"


def test_bindings_js_lists_navigation_targets(snapshot: ProjectSnapshot) -> None:
    elements, opts = _main_window(snapshot)
    opts.links = {"settings": WindowLink("settings", "Settings", "settings", "../settings/index.html")}
    text = generate_bindings_js(elements, opts)
    assert "window.__relay__" in text
    assert '"href": "../settings/index.html"' in text
    assert [entry["id"] for entry in _bindings_json(text)][0] == "gain"


def test_responsive_scaling_is_appended_when_enabled(snapshot: ProjectSnapshot) -> None:
    elements, opts = _main_window(snapshot)
    assert "Responsive scaling" not in generate_bindings_js(elements, opts)
    opts.responsive_scaling = True
    opts.max_scale = 1.5
    text = generate_bindings_js(elements, opts)
    assert "var CANVAS_WIDTH = 400;" in text
    assert "var MAX_SCALE = 1.5;" in text
    assert 'var WRAPPER_SELECTOR = "#plugin-wrapper";' in text


def test_components_only_include_used_families(snapshot: ProjectSnapshot) -> None:
    elements, opts = _main_window(snapshot)
    text = generate_components_js(elements, opts)
    assert "window.Faceplate" in text
    assert "Custom scrollbars" not in text

    collapsible = element_from_dict(
        {"id": "c", "type": "collapsible", "name": "More", "scrollBehavior": "auto"}
    )
    with_scroll = generate_components_js(elements + [collapsible], opts)
    assert "Custom scrollbars" in with_scroll
    opts.custom_scrollbars = False
    assert "Custom scrollbars" not in generate_components_js(elements + [collapsible], opts)


def test_js_json_escapes_closing_tags() -> None:
    assert js_json({"b": "</script>", "a": 1}, indent=None) == '{"a": 1, "b": "<\\/script>"}'


def test_dispatch_tables_cover_the_catalog() -> None:
    for table in (RENDERERS, PROPERTY_BUILDERS, CONFIG_BUILDERS):
        assert set(table) >= set(ELEMENT_TYPES)


def test_ensure_exhaustive_rejects_missing_kinds() -> None:
    with pytest.raises(GenerationFailure):
        ensure_exhaustive({"knob": None}, "Test generator")


@dataclass
class _Stray(Element):
    kind = "stray"


def test_lookup_guards_unknown_kinds() -> None:
    stray = _Stray(id="s", name="Stray")
    with pytest.raises(GenerationFailure) as info:
        lookup(RENDERERS, stray, "HTML generator")
    assert "stray" in str(info.value)


@pytest.mark.parametrize("kind", sorted(ELEMENT_TYPES))
def test_every_kind_renders(kind: str) -> None:
    el = element_from_dict({"id": "e", "type": kind, "name": f"{kind} element", "width": 120, "height": 80})
    window = ProjectSnapshot.from_dict({"name": "x", "elements": [el.to_dict()]}).windows[0]
    opts = GeneratorOptions(window=window)
    assert generate_html([el], opts)
    assert generate_css([el], opts)
    assert generate_components_js([el], opts)
    assert generate_bindings_js([el], opts)


def test_inner_ids_cannot_clash_with_element_ids() -> None:
    elements = [
        element_from_dict({"id": "c", "type": "checkbox", "name": "Mute", "label": "Mute"}),
        element_from_dict({"id": "l", "type": "label", "name": "Mute Input", "text": "Muted"}),
        element_from_dict({"id": "p", "type": "combobox", "name": "Preset", "options": ["A", "B"]}),
        element_from_dict({"id": "r", "type": "radiogroup", "name": "Mode", "options": ["Stereo", "Mono"]}),
    ]
    assert validate_elements(elements).valid
    window = ProjectSnapshot.from_dict({"name": "x", "elements": [el.to_dict() for el in elements]}).windows[0]
    html = generate_html(elements, GeneratorOptions(window=window))
    assert html.count('id="mute-input"') == 1
    assert '<input type="checkbox" id="mute__input">' in html
    assert '<label for="mute__input">' in html
    assert 'list="preset__options"' in html
    assert '<datalist id="preset__options">' in html
    assert html.count('name="mode"') == 2


def test_dom_scope_prefixes_inner_ids() -> None:
    el = element_from_dict({"id": "p", "type": "combobox", "name": "Preset", "options": ["A"]})
    window = ProjectSnapshot.from_dict({"name": "x", "elements": [el.to_dict()]}).windows[0]
    markup = render_element(el, GeneratorOptions(window=window, dom_scope="settings__"))
    assert 'id="settings__preset__options"' in markup
    assert 'id="preset"' in markup
