"""HTML structure generator.

Every element becomes one node whose id is its normalized name. Geometry
and colours live in the stylesheet; the markup only carries structure,
initial state and accessibility attributes. Containers render their
children inside their own node.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from markupsafe import Markup, escape

from ..core import elements as E
from ..core.elements import Element
from ..core.errors import InvalidSvg
from ..core.names import fmt_number, normalize_name
from ..core.tree import RenderNode, build_render_tree
from .dispatch import ensure_exhaustive, lookup
from .options import GeneratorOptions
from .svg_sanitizer import sanitize_svg
from .templates import BINDINGS_TAG, COMPONENTS_TAG, STYLESHEET_TAG, get_template
from .values import describe_arc, format_db, format_frequency, format_value, normalized, polar_to_cartesian

logger = logging.getLogger(__name__)

VOID_TAGS = {"img", "input"}


@dataclass(slots=True)
class Fragment:
    tag: str = "div"
    attrs: Dict[str, object] = field(default_factory=dict)
    body: str = ""


def _attrs(attrs: Dict[str, object]) -> str:
    parts: List[str] = []
    for key, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {key}")
        elif isinstance(value, (int, float)):
            parts.append(f' {key}="{fmt_number(value)}"')
        else:
            parts.append(f' {key}="{escape(value)}"')
    return "".join(parts)


def _tag(tag: str, attrs: Optional[Dict[str, object]] = None, body: str = "") -> str:
    attr_text = _attrs(attrs or {})
    if tag in VOID_TAGS:
        return f"<{tag}{attr_text}>"
    return f"<{tag}{attr_text}>{body}</{tag}>"


def _text(value: object) -> str:
    return str(escape(value))


def inline_svg(el: Element, opts: GeneratorOptions) -> str:
    """Sanitized SVG markup for an element; prepared assets win."""

    if el.id in opts.svg_assets:
        return opts.svg_assets[el.id]
    source = getattr(el, el.svg_field or "", "") or ""
    if not source.strip():
        return ""
    try:
        return sanitize_svg(source)
    except InvalidSvg:
        logger.warning("Dropping unparsable SVG on element %s", el.name)
        return ""


def _caption(el: Element, prefix: str) -> str:
    """Label and value captions shared by rotary and linear controls."""

    parts = []
    if getattr(el, "show_label", False):
        parts.append(
            _tag("span", {"class": f"{prefix}-label {prefix}-label-{el.label_position}"}, _text(el.label_text or el.name))
        )
    if getattr(el, "show_value", False):
        text = format_value(el.value, el.min, el.max, el.value_format, el.value_decimal_places, el.value_suffix)
        parts.append(_tag("span", {"class": f"{prefix}-value {prefix}-value-{el.value_position}"}, _text(text)))
    return "".join(parts)


def _range_attrs(value: float, lo: float, hi: float) -> Dict[str, object]:
    return {"aria-valuemin": lo, "aria-valuemax": hi, "aria-valuenow": value, "tabindex": 0}


# ---------------------------------------------------------------------------
# Rotary and linear controls
# ---------------------------------------------------------------------------


def _rotary(el: E.RotaryControl, opts: GeneratorOptions, children: str) -> Fragment:
    size = min(el.width, el.height) or 1
    cx = cy = size / 2
    r = max((size - el.track_width) / 2, 1)
    norm = normalized(el.value, el.min, el.max)
    value_angle = el.start_angle + norm * (el.end_angle - el.start_angle)
    stroke = {"stroke-width": el.track_width, "fill": "none"}

    svg = [_tag("path", {"class": "rotary-track", "d": describe_arc(cx, cy, r, el.start_angle, el.end_angle), **stroke})]
    if el.style in ("arc", "filled") or isinstance(el, E.ArcSlider):
        if isinstance(el, E.CenterDetentKnob):
            mid = (el.start_angle + el.end_angle) / 2
            lo, hi = sorted((mid, value_angle))
            fill_path = describe_arc(cx, cy, r, lo, hi)
        else:
            fill_path = describe_arc(cx, cy, r, el.start_angle, value_angle) if norm > 0.001 else ""
        svg.append(_tag("path", {"class": "rotary-fill", "d": fill_path, **stroke}))
    if isinstance(el, E.SteppedKnob) and el.show_step_marks and el.step_count > 1:
        for i in range(el.step_count):
            angle = el.start_angle + i * (el.end_angle - el.start_angle) / (el.step_count - 1)
            x1, y1 = polar_to_cartesian(cx, cy, r + el.track_width / 2, angle)
            x2, y2 = polar_to_cartesian(cx, cy, r - el.track_width, angle)
            svg.append(_tag("line", {"class": "rotary-step-mark", "x1": x1, "y1": y1, "x2": x2, "y2": y2}))
    if isinstance(el, E.ArcSlider):
        tx, ty = polar_to_cartesian(cx, cy, r, value_angle)
        svg.append(_tag("circle", {"class": "rotary-thumb", "cx": tx, "cy": ty, "r": el.thumb_radius}))
    elif el.style == "dot" or isinstance(el, E.DotIndicatorKnob):
        dx, dy = polar_to_cartesian(cx, cy, r * 0.9, value_angle)
        radius = el.dot_radius if isinstance(el, E.DotIndicatorKnob) else 3
        svg.append(_tag("circle", {"class": "rotary-indicator", "cx": dx, "cy": dy, "r": radius}))
    else:
        x1, y1 = polar_to_cartesian(cx, cy, r * 0.4, value_angle)
        x2, y2 = polar_to_cartesian(cx, cy, r * 0.9, value_angle)
        svg.append(_tag("line", {"class": "rotary-indicator", "x1": x1, "y1": y1, "x2": x2, "y2": y2}))

    body = _tag(
        "svg",
        {"class": "rotary-svg", "viewBox": f"0 0 {fmt_number(size)} {fmt_number(size)}", "aria-hidden": "true"},
        "".join(svg),
    ) + _caption(el, "knob")
    return Fragment(attrs={"role": "slider", "data-style": el.style, **_range_attrs(el.value, el.min, el.max)}, body=body)


def _linear(el: E.LinearControl, opts: GeneratorOptions, children: str) -> Fragment:
    parts = [_tag("div", {"class": "slider-track"})]
    if isinstance(el, E.NotchedSlider):
        for i in range(el.notch_count):
            pos = i / (el.notch_count - 1) if el.notch_count > 1 else 0.5
            parts.append(_tag("span", {"class": "slider-notch", "style": f"--notch: {fmt_number(pos)}"}))
    if isinstance(el, E.BipolarSlider):
        parts.append(_tag("div", {"class": "slider-center"}))
    parts.append(_tag("div", {"class": "slider-fill"}))
    parts.append(_tag("div", {"class": "slider-thumb"}))
    if isinstance(el, E.CrossfadeSlider):
        parts.append(_tag("span", {"class": "crossfade-label crossfade-label-a"}, _text(el.label_a)))
        parts.append(_tag("span", {"class": "crossfade-label crossfade-label-b"}, _text(el.label_b)))
    return Fragment(
        attrs={
            "role": "slider",
            "data-orientation": el.orientation,
            "aria-orientation": el.orientation,
            **_range_attrs(el.value, el.min, el.max),
        },
        body="".join(parts) + _caption(el, "slider"),
    )


def _range(el: E.RangeSlider, opts: GeneratorOptions, children: str) -> Fragment:
    body = "".join(
        [
            _tag("div", {"class": "slider-track"}),
            _tag("div", {"class": "range-fill"}),
            _tag("div", {"class": "range-thumb range-thumb-min", "role": "slider", "aria-label": "Minimum", "tabindex": 0}),
            _tag("div", {"class": "range-thumb range-thumb-max", "role": "slider", "aria-label": "Maximum", "tabindex": 0}),
        ]
    )
    return Fragment(attrs={"data-orientation": el.orientation}, body=body + _caption(el, "slider"))


def _multislider(el: E.MultiSlider, opts: GeneratorOptions, children: str) -> Fragment:
    bands = []
    for i in range(max(el.band_count, 0)):
        value = el.band_values[i] if i < len(el.band_values) else 0.5
        bands.append(
            _tag(
                "div",
                {"class": "multislider-band", "data-index": i, "style": f"--value: {fmt_number(normalized(value, 0, 1))}"},
                _tag("div", {"class": "multislider-fill"}),
            )
        )
    return Fragment(attrs={"data-orientation": el.orientation}, body="".join(bands))


def _ascii_bar(el: E.AsciiSlider) -> str:
    filled = round(normalized(el.value, el.min, el.max) * el.bar_width)
    return "[" + el.fill_char * filled + el.empty_char * (el.bar_width - filled) + "]"


def _ascii(el: Element, opts: GeneratorOptions, children: str) -> Fragment:
    if isinstance(el, E.AsciiSlider):
        return Fragment(tag="pre", attrs={"role": "slider", **_range_attrs(el.value, el.min, el.max)}, body=_text(_ascii_bar(el)))
    if isinstance(el, E.AsciiButton):
        label = el.pressed_label if el.pressed else el.label
        return Fragment(
            tag="button",
            attrs={"type": "button", "data-mode": el.mode, "aria-pressed": "true" if el.pressed else "false"},
            body=_text(label),
        )
    assert isinstance(el, E.AsciiArt)
    return Fragment(tag="pre", attrs={"data-content-type": el.content_type}, body=_text(el.content))


# ---------------------------------------------------------------------------
# Switches, choices and inputs
# ---------------------------------------------------------------------------


def _switch(el: Element, opts: GeneratorOptions, children: str) -> Fragment:
    if isinstance(el, E.Button):
        attrs: Dict[str, object] = {"type": "button", "data-mode": el.mode, "aria-pressed": "true" if el.pressed else "false"}
        if el.action == "navigate-window" and el.target_window_id:
            attrs["data-navigate-window"] = el.target_window_id
        return Fragment(tag="button", attrs=attrs, body=_text(el.label))
    if isinstance(el, E.IconButton):
        icon = inline_svg(el, opts)
        return Fragment(
            tag="button",
            attrs={"type": "button", "data-mode": el.mode, "aria-pressed": "true" if el.pressed else "false", "aria-label": el.name},
            body=_tag("span", {"class": "icon"}, icon),
        )
    if isinstance(el, E.ToggleSwitch):
        return Fragment(
            tag="button",
            attrs={"type": "button", "role": "switch", "aria-checked": "true" if el.is_on else "false"},
            body=_tag("span", {"class": "toggle-thumb"}),
        )
    if isinstance(el, E.PowerButton):
        icon = (
            '<svg class="power-icon" viewBox="0 0 24 24" aria-hidden="true">'
            '<path d="M12 3 L12 12" fill="none" stroke-width="2" stroke-linecap="round"></path>'
            '<path d="M6.3 6.3 A8 8 0 1 0 17.7 6.3" fill="none" stroke-width="2" stroke-linecap="round"></path>'
            "</svg>"
        )
        return Fragment(
            tag="button",
            attrs={"type": "button", "aria-pressed": "true" if el.is_on else "false", "aria-label": el.name},
            body=_tag("span", {"class": "power-led"}) + icon,
        )
    if isinstance(el, E.RockerSwitch):
        parts = [_tag("div", {"class": "rocker-paddle"})]
        if el.show_labels:
            parts.insert(0, _tag("span", {"class": "rocker-label rocker-label-up"}, _text(el.up_label)))
            parts.append(_tag("span", {"class": "rocker-label rocker-label-down"}, _text(el.down_label)))
        return Fragment(attrs={"role": "switch", "data-position": el.position, "data-mode": el.mode, "tabindex": 0}, body="".join(parts))
    assert isinstance(el, E.Checkbox)
    input_id = opts.sub_id(normalize_name(el.name), "input")
    box = _tag("input", {"type": "checkbox", "id": input_id, "checked": el.checked})
    label = _tag("label", {"for": input_id}, _text(el.label))
    return Fragment(attrs={"data-label-position": el.label_position}, body=box + label)


def _choice(el: Element, opts: GeneratorOptions, children: str) -> Fragment:
    nid = normalize_name(el.name)
    if isinstance(el, E.RotarySwitch):
        count = len(el.positions)
        labels = []
        for i, text in enumerate(el.positions):
            angle = el.start_angle + (i * (el.end_angle - el.start_angle) / (count - 1) if count > 1 else 0)
            labels.append(
                _tag("span", {"class": "rotary-switch-label", "data-index": i, "style": f"--angle: {fmt_number(angle)}deg"}, _text(text))
            )
        body = _tag("div", {"class": "rotary-switch-body"}, _tag("div", {"class": "rotary-switch-pointer"})) + "".join(labels)
        return Fragment(attrs={"role": "slider", "aria-valuenow": el.position, "tabindex": 0}, body=body)
    if isinstance(el, E.SegmentButton):
        segments = [
            _tag(
                "button",
                {"type": "button", "class": "segment" + (" is-selected" if i == el.selected_index else ""), "data-index": i},
                _text(text),
            )
            for i, text in enumerate(el.segments)
        ]
        return Fragment(attrs={"role": "group", "data-orientation": el.orientation}, body="".join(segments))
    if isinstance(el, E.Dropdown):
        options = [
            _tag("option", {"value": i, "selected": i == el.selected_index}, _text(text)) for i, text in enumerate(el.options)
        ]
        return Fragment(tag="select", body="".join(options))
    if isinstance(el, E.ComboBox):
        value = el.options[el.selected_index] if 0 <= el.selected_index < len(el.options) else ""
        list_id = opts.sub_id(nid, "options")
        field_ = _tag("input", {"type": "text", "list": list_id, "value": value, "placeholder": el.placeholder})
        options = "".join(_tag("option", {"value": text}) for text in el.options)
        return Fragment(body=field_ + _tag("datalist", {"id": list_id}, options))
    if isinstance(el, E.RadioGroup):
        radios = [
            _tag(
                "label",
                {"class": "radio-option"},
                _tag("input", {"type": "radio", "name": f"{opts.dom_scope}{nid}", "value": i, "checked": i == el.selected_index}) + _tag("span", {}, _text(text)),
            )
            for i, text in enumerate(el.options)
        ]
        return Fragment(attrs={"role": "radiogroup", "data-orientation": el.orientation}, body="".join(radios))
    assert isinstance(el, E.TabBar)
    tabs = [
        _tag(
            "button",
            {"type": "button", "role": "tab", "class": "tab", "data-index": i, "aria-selected": "true" if i == el.active_index else "false"},
            _text(text),
        )
        for i, text in enumerate(el.tabs)
    ]
    return Fragment(attrs={"role": "tablist", "data-orientation": el.orientation}, body="".join(tabs))


def _multichoice(el: E.MultiSelectDropdown, opts: GeneratorOptions, children: str) -> Fragment:
    chosen = [el.options[i] for i in el.selected_indices if 0 <= i < len(el.options)]
    summary = ", ".join(chosen) if chosen else "Select..."
    items = [
        _tag(
            "li",
            {},
            _tag("label", {}, _tag("input", {"type": "checkbox", "value": i, "checked": i in el.selected_indices}) + _text(text)),
        )
        for i, text in enumerate(el.options)
    ]
    body = _tag("button", {"type": "button", "class": "multiselect-toggle", "aria-expanded": "false"}, _text(summary))
    body += _tag("ul", {"class": "multiselect-options", "hidden": True}, "".join(items))
    return Fragment(attrs={"data-max-selections": el.max_selections}, body=body)


def _menu(el: E.MenuButton, opts: GeneratorOptions, children: str) -> Fragment:
    items = "".join(_tag("li", {"role": "menuitem", "data-index": i, "tabindex": -1}, _text(text)) for i, text in enumerate(el.items))
    body = _tag("button", {"type": "button", "class": "menu-toggle", "aria-haspopup": "menu", "aria-expanded": "false"}, _text(el.label))
    body += _tag("ul", {"class": "menu-items", "role": "menu", "hidden": True}, items)
    return Fragment(body=body)


def _text_element(el: Element, opts: GeneratorOptions, children: str) -> Fragment:
    if isinstance(el, E.Label):
        return Fragment(tag="span", body=_text(el.text))
    assert isinstance(el, E.TextField)
    return Fragment(
        tag="input",
        attrs={
            "type": "text",
            "value": el.value,
            "placeholder": el.placeholder or None,
            "maxlength": el.max_length or None,
        },
    )


def _stepper(el: E.Stepper, opts: GeneratorOptions, children: str) -> Fragment:
    body = (
        _tag("button", {"type": "button", "class": "stepper-dec", "aria-label": "Decrease"}, "&minus;")
        + _tag("span", {"class": "stepper-value"}, _text(f"{el.value:.{el.decimal_places}f}"))
        + _tag("button", {"type": "button", "class": "stepper-inc", "aria-label": "Increase"}, "+")
    )
    return Fragment(attrs={"role": "spinbutton", **_range_attrs(el.value, el.min, el.max)}, body=body)


def _tree_markup(paths: Sequence[str], expanded: bool) -> str:
    """Nested list markup for "Folder/Item" style paths."""

    root: Dict[str, dict] = {}
    for path in paths:
        node = root
        for part in [p for p in path.split("/") if p]:
            node = node.setdefault(part, {})

    def render(level: Dict[str, dict], depth: int) -> str:
        items = []
        for name, sub in level.items():
            if sub:
                items.append(
                    _tag(
                        "li",
                        {"role": "treeitem", "class": "tree-folder", "aria-expanded": "true" if expanded else "false"},
                        _tag("span", {"class": "tree-label"}, _text(name)) + render(sub, depth + 1),
                    )
                )
            else:
                items.append(_tag("li", {"role": "treeitem", "class": "tree-leaf"}, _tag("span", {"class": "tree-label"}, _text(name))))
        return _tag("ul", {"role": "group" if depth else "tree", "hidden": depth > 0 and not expanded}, "".join(items))

    return render(root, 0)


def _list(el: Element, opts: GeneratorOptions, children: str) -> Fragment:
    if isinstance(el, E.Breadcrumb):
        items = []
        for i, text in enumerate(el.items):
            if i:
                items.append(_tag("li", {"class": "breadcrumb-separator", "aria-hidden": "true"}, _text(el.separator)))
            items.append(
                _tag("li", {"class": "breadcrumb-item", "data-index": i, "aria-current": "page" if i == len(el.items) - 1 else None}, _text(text))
            )
        return Fragment(tag="nav", attrs={"aria-label": el.name}, body=_tag("ol", {}, "".join(items)))
    if isinstance(el, E.TreeView):
        return Fragment(body=_tree_markup(el.items, el.expanded))
    assert isinstance(el, E.PresetBrowser)
    parts = []
    if el.show_search:
        parts.append(_tag("input", {"type": "search", "class": "preset-search", "placeholder": "Search presets"}))
    rows = []
    for i, preset in enumerate(el.presets):
        folder, _, name = preset.rpartition("/")
        attrs = {"class": "preset-item" + (" is-selected" if i == el.selected_index else ""), "data-index": i, "role": "option"}
        label = _text(name)
        if folder and el.show_folders:
            attrs["data-folder"] = folder
            label = _tag("span", {"class": "preset-folder"}, _text(folder)) + label
        rows.append(_tag("li", attrs, label))
    parts.append(_tag("ul", {"class": "preset-list", "role": "listbox"}, "".join(rows)))
    return Fragment(body="".join(parts))


# ---------------------------------------------------------------------------
# Displays
# ---------------------------------------------------------------------------


def _meter(el: Element, opts: GeneratorOptions, children: str) -> Fragment:
    if isinstance(el, E.Meter):
        parts = [_tag("div", {"class": "meter-fill"})]
        if el.show_peak_hold:
            parts.append(_tag("div", {"class": "meter-peak"}))
        return Fragment(attrs={"role": "meter", "data-orientation": el.orientation, **_range_attrs(el.value, el.min, el.max)}, body="".join(parts))
    assert isinstance(el, E.GainReductionMeter)
    parts = [_tag("div", {"class": "meter-fill"})]
    if el.show_value:
        parts.append(_tag("span", {"class": "meter-readout"}, _text(format_db(el.value))))
    return Fragment(attrs={"role": "meter", "data-orientation": el.orientation}, body="".join(parts))


def _readout(el: E.ReadoutDisplay, opts: GeneratorOptions, children: str) -> Fragment:
    if isinstance(el, E.FrequencyDisplay):
        text = format_frequency(el.value, el.decimal_places, el.auto_switch_khz, show_unit=False)
        unit = "kHz" if el.auto_switch_khz and abs(el.value) >= 1000 else "Hz"
    else:
        assert isinstance(el, E.DbDisplay)
        text = format_db(el.value, el.decimal_places, show_unit=False)
        unit = "dB"
    body = _tag("span", {"class": "readout-value"}, _text(text))
    if el.show_unit:
        body += _tag("span", {"class": "readout-unit"}, unit)
    return Fragment(attrs={"role": "status"}, body=body)


def _matrix(el: E.ModulationMatrix, opts: GeneratorOptions, children: str) -> Fragment:
    active = {(pair[0], pair[1]) for pair in el.preview_active_connections if len(pair) >= 2}
    head = _tag("tr", {}, _tag("th", {"class": "matrix-corner"}) + "".join(_tag("th", {"class": "matrix-header", "scope": "col"}, _text(d)) for d in el.destinations))
    rows = [head]
    for s, source in enumerate(el.sources):
        cells = "".join(
            _tag("td", {"class": "matrix-cell", "data-source": s, "data-destination": d, "data-active": "true" if (s, d) in active else "false"})
            for d in range(len(el.destinations))
        )
        rows.append(_tag("tr", {}, _tag("th", {"class": "matrix-row-header", "scope": "row"}, _text(source)) + cells))
    return Fragment(body=_tag("table", {"class": "modulation-matrix"}, "".join(rows)))


def _canvas(el: E.CanvasDisplay, opts: GeneratorOptions, children: str) -> Fragment:
    canvas = _tag("canvas", {"class": "viz-canvas", "width": int(el.width), "height": int(el.height)})
    return Fragment(attrs={"role": "img", "aria-label": el.name}, body=canvas)


# ---------------------------------------------------------------------------
# Specialized controls
# ---------------------------------------------------------------------------

_BLACK_KEYS = {1, 3, 6, 8, 10}


def _keyboard(el: E.PianoKeyboard, opts: GeneratorOptions, children: str) -> Fragment:
    keys = []
    white_index = 0
    for note in range(el.start_note, el.start_note + 12 * max(el.octave_count, 1)):
        if note % 12 in _BLACK_KEYS:
            keys.append(_tag("div", {"class": "key key-black", "data-note": note, "style": f"--white-index: {white_index}"}))
        else:
            keys.append(_tag("div", {"class": "key key-white", "data-note": note, "style": f"--white-index: {white_index}"}))
            white_index += 1
    return Fragment(attrs={"role": "group", "style": f"--white-keys: {white_index}"}, body="".join(keys))


def _pad(el: Element, opts: GeneratorOptions, children: str) -> Fragment:
    if isinstance(el, E.DrumPad):
        return Fragment(tag="button", attrs={"type": "button", "class": "pad"}, body=_text(el.label))
    assert isinstance(el, E.PadGrid)
    pads = "".join(
        _tag("button", {"type": "button", "class": "pad", "data-index": i}, str(i + 1)) for i in range(el.rows * el.columns)
    )
    return Fragment(attrs={"role": "grid"}, body=pads)


def _grid(el: E.StepSequencer, opts: GeneratorOptions, children: str) -> Fragment:
    active = set(el.active_steps)
    cells = "".join(
        _tag("button", {"type": "button", "class": "step" + (" is-active" if i in active else ""), "data-index": i, "aria-pressed": "true" if i in active else "false"})
        for i in range(el.steps * el.rows)
    )
    return Fragment(attrs={"role": "grid"}, body=cells)


def _xypad(el: E.XYPad, opts: GeneratorOptions, children: str) -> Fragment:
    body = _tag("div", {"class": "xy-surface"}, _tag("div", {"class": "xy-cursor"}))
    return Fragment(attrs={"role": "application", "aria-label": el.name}, body=body)


def _loop(el: E.LoopPoints, opts: GeneratorOptions, children: str) -> Fragment:
    body = (
        _tag("div", {"class": "loop-region"})
        + _tag("div", {"class": "loop-marker loop-start", "role": "slider", "aria-label": "Loop start", "tabindex": 0})
        + _tag("div", {"class": "loop-marker loop-end", "role": "slider", "aria-label": "Loop end", "tabindex": 0})
    )
    return Fragment(body=body)


def _harmonic(el: E.HarmonicEditor, opts: GeneratorOptions, children: str) -> Fragment:
    bars = []
    for i in range(el.harmonic_count):
        value = el.harmonic_values[i] if i < len(el.harmonic_values) else (1 / (i + 1))
        bars.append(_tag("div", {"class": "harmonic-bar", "data-index": i, "style": f"--value: {fmt_number(normalized(value, 0, 1))}"}))
    return Fragment(attrs={"role": "group"}, body="".join(bars))


# ---------------------------------------------------------------------------
# Containers and decoration
# ---------------------------------------------------------------------------


def _scrollbar_config(el: E.Collapsible) -> str:
    return json.dumps(
        {"width": el.scrollbar_width, "thumbColor": el.scrollbar_thumb_color, "trackColor": el.scrollbar_track_color},
        sort_keys=True,
    )


def _container(el: E.ContainerElement, opts: GeneratorOptions, children: str) -> Fragment:
    content_attrs: Dict[str, object] = {"class": "container-content"}
    parts = []
    if isinstance(el, (E.GroupBox, E.Collapsible)):
        if isinstance(el, E.Collapsible):
            parts.append(
                _tag(
                    "button",
                    {"type": "button", "class": "container-header collapsible-header", "aria-expanded": "false" if el.collapsed else "true"},
                    _tag("span", {"class": "collapsible-arrow", "aria-hidden": "true"}, "&#9662;") + _text(el.header_text),
                )
            )
            content_attrs["hidden"] = el.collapsed
            if opts.custom_scrollbars and el.scroll_behavior != "hidden":
                content_attrs["data-custom-scrollbar"] = _scrollbar_config(el)
        else:
            parts.append(_tag("div", {"class": "container-header"}, _text(el.header_text)))
    parts.append(_tag("div", content_attrs, children))
    return Fragment(body="".join(parts))


def _decor(el: Element, opts: GeneratorOptions, children: str) -> Fragment:
    if isinstance(el, E.Image):
        return Fragment(tag="img", attrs={"src": el.src, "alt": el.alt or el.name})
    if isinstance(el, E.SvgGraphic):
        return Fragment(attrs={"role": "img", "aria-label": el.name}, body=inline_svg(el, opts))
    if isinstance(el, E.Line):
        return Fragment(body=_tag("div", {"class": "line-stroke"}))
    assert isinstance(el, E.Rectangle)
    return Fragment()


Renderer = Callable[[Element, GeneratorOptions, str], Fragment]

RENDERERS: Dict[str, Renderer] = ensure_exhaustive(
    {
        "knob": _rotary,
        "steppedknob": _rotary,
        "centerdetentknob": _rotary,
        "dotindicatorknob": _rotary,
        "arcslider": _rotary,
        "slider": _linear,
        "bipolarslider": _linear,
        "notchedslider": _linear,
        "crossfadeslider": _linear,
        "rangeslider": _range,
        "multislider": _multislider,
        "asciislider": _ascii,
        "button": _switch,
        "iconbutton": _switch,
        "toggleswitch": _switch,
        "powerbutton": _switch,
        "rockerswitch": _switch,
        "rotaryswitch": _choice,
        "segmentbutton": _choice,
        "asciibutton": _ascii,
        "menubutton": _menu,
        "dropdown": _choice,
        "multiselectdropdown": _multichoice,
        "combobox": _choice,
        "checkbox": _switch,
        "radiogroup": _choice,
        "textfield": _text_element,
        "stepper": _stepper,
        "tabbar": _choice,
        "breadcrumb": _list,
        "treeview": _list,
        "label": _text_element,
        "meter": _meter,
        "dbdisplay": _readout,
        "frequencydisplay": _readout,
        "gainreductionmeter": _meter,
        "presetbrowser": _list,
        "modulationmatrix": _matrix,
        "waveform": _canvas,
        "oscilloscope": _canvas,
        "spectrumanalyzer": _canvas,
        "spectrogram": _canvas,
        "goniometer": _canvas,
        "vectorscope": _canvas,
        "scrollingwaveform": _canvas,
        "eqcurve": _canvas,
        "compressorcurve": _canvas,
        "envelopedisplay": _canvas,
        "lfodisplay": _canvas,
        "filterresponse": _canvas,
        "pianokeyboard": _keyboard,
        "drumpad": _pad,
        "padgrid": _pad,
        "stepsequencer": _grid,
        "xypad": _xypad,
        "looppoints": _loop,
        "harmoniceditor": _harmonic,
        "panel": _container,
        "frame": _container,
        "groupbox": _container,
        "collapsible": _container,
        "image": _decor,
        "svggraphic": _decor,
        "rectangle": _decor,
        "line": _decor,
        "asciiart": _ascii,
    },
    "HTML generator",
)


def parameter_id(el: Element) -> str:
    """Host parameter an element binds to; falls back to its DOM id."""

    return (el.parameter_id or "").strip() or normalize_name(el.name)


def render_element(el: Element, opts: GeneratorOptions, children: str = "") -> str:
    fragment = lookup(RENDERERS, el, "HTML generator")(el, opts, children)
    classes = f"element {el.family}-element {el.kind}-element"
    extra_class = fragment.attrs.pop("class", None)
    if extra_class:
        classes = f"{classes} {extra_class}"
    attrs: Dict[str, object] = {"id": normalize_name(el.name), "class": classes, "data-type": el.kind}
    if el.bindable:
        attrs["data-parameter-id"] = parameter_id(el)
    attrs.update(fragment.attrs)
    if not el.visible:
        attrs["hidden"] = True
    return _tag(fragment.tag, attrs, fragment.body)


def _render_nodes(nodes: Sequence[RenderNode], opts: GeneratorOptions, depth: int) -> str:
    indent = "  " * depth
    lines = []
    for node in nodes:
        inner = ""
        if node.children:
            inner = "\n" + _render_nodes(node.children, opts, depth + 1) + "\n" + indent
        lines.append(indent + render_element(node.element, opts, inner))
    return "\n".join(lines)


def render_elements(elements: Sequence[Element], opts: GeneratorOptions, depth: int = 3) -> str:
    """Markup for every element, nested and in render order."""

    return _render_nodes(build_render_tree(elements, opts.layers), opts, depth)


def generate_html(elements: Sequence[Element], opts: GeneratorOptions) -> str:
    window = opts.window
    template = get_template("index.html")
    return template.render(
        title=opts.title or window.name,
        window_id=window.id,
        window_name=window.name,
        content=Markup(render_elements(elements, opts)),
        stylesheet_tag=Markup(STYLESHEET_TAG),
        components_tag=Markup(COMPONENTS_TAG),
        bindings_tag=Markup(BINDINGS_TAG),
    )
