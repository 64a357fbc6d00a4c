"""Behaviour scripts: per-window bindings plus the shared component runtime.

``bindings.js`` lists the interactive elements of one window as JSON and
hands each to ``window.Faceplate.bind``. ``components.js`` defines that
runtime, holding only the family handlers the window actually uses.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..core import elements as E
from ..core.elements import Element
from ..core.names import fmt_number, normalize_name
from ..core.tree import render_order
from .dispatch import ensure_exhaustive, lookup
from .html_generator import parameter_id
from .js_snippets import (
    BINDINGS_TEMPLATE,
    CUSTOM_SCROLLBAR,
    FAMILY_ORDER,
    FAMILY_SCRIPTS,
    MOCK_RELAY,
    PREVIEW_NAVIGATION,
    RESPONSIVE_SCALE_TEMPLATE,
    RUNTIME_FOOTER,
    RUNTIME_HEADER,
)
from .options import GeneratorOptions
from .values import normalized

Config = Optional[Dict[str, Any]]


def js_json(value: Any, indent: Optional[int] = 2) -> str:
    """JSON for embedding in a script; key order fixed, ``</`` escaped."""

    return json.dumps(value, sort_keys=True, indent=indent, ensure_ascii=False).replace("</", "<\\/")


def _round(value: float) -> float:
    return round(float(value), 6)


def _static(el: Element) -> Config:
    return None


def _interactive(el: Element) -> Config:
    return {}


def _caption_config(el: Element) -> Dict[str, Any]:
    return {
        "min": el.min,
        "max": el.max,
        "format": el.value_format,
        "decimalPlaces": el.value_decimal_places,
        "suffix": el.value_suffix,
    }


def _rotary(el: E.RotaryControl) -> Config:
    value = _round(normalized(el.value, el.min, el.max))
    return {
        "value": value,
        "defaultValue": value,
        "startAngle": el.start_angle,
        "endAngle": el.end_angle,
        "size": min(el.width, el.height) or 1,
        "trackWidth": el.track_width,
        "steps": el.step_count if isinstance(el, E.SteppedKnob) else 0,
        "detent": isinstance(el, E.CenterDetentKnob),
        "detentWidth": el.detent_width if isinstance(el, E.CenterDetentKnob) else 0,
        **_caption_config(el),
    }


def _linear(el: E.LinearControl) -> Config:
    notched = isinstance(el, E.NotchedSlider)
    return {
        "value": _round(normalized(el.value, el.min, el.max)),
        "orientation": el.orientation,
        "notches": el.notch_count if notched else 0,
        "snap": el.snap_to_notches if notched else False,
        **_caption_config(el),
    }


def _range(el: E.RangeSlider) -> Config:
    return {
        "minValue": _round(normalized(el.min_value, el.min, el.max)),
        "maxValue": _round(normalized(el.max_value, el.min, el.max)),
        "orientation": el.orientation,
    }


def _multislider(el: E.MultiSlider) -> Config:
    return {"orientation": el.orientation}


def _ascii(el: Element) -> Config:
    if isinstance(el, E.AsciiSlider):
        return {
            "value": _round(normalized(el.value, el.min, el.max)),
            "min": el.min,
            "max": el.max,
            "barWidth": el.bar_width,
            "fillChar": el.fill_char or "#",
            "emptyChar": el.empty_char or "-",
        }
    if isinstance(el, E.AsciiButton):
        return {"mode": el.mode, "pressed": el.pressed, "label": el.label, "pressedLabel": el.pressed_label}
    assert isinstance(el, E.AsciiArt)
    if el.content_type != "noise":
        return None
    line_height = max(el.font_size * el.line_height, 1)
    return {
        "contentType": "noise",
        "rows": max(int(el.height // line_height), 1),
        "columns": max(int(el.width // max(el.font_size * 0.6, 1)), 1),
        "characters": el.noise_characters or " .:-=+*#%@",
        "interval": 100,
    }


def _switch(el: Element) -> Config:
    if isinstance(el, E.Button):
        return {
            "mode": el.mode,
            "on": el.pressed,
            "navigate": el.action == "navigate-window" and bool(el.target_window_id),
        }
    if isinstance(el, E.IconButton):
        return {"mode": el.mode, "on": el.pressed}
    if isinstance(el, (E.ToggleSwitch, E.PowerButton)):
        return {"mode": "toggle", "on": el.is_on}
    if isinstance(el, E.RockerSwitch):
        return {"mode": el.mode, "position": min(max(el.position, 0), 2)}
    assert isinstance(el, E.Checkbox)
    return {"on": el.checked}


def _choice(el: Element) -> Config:
    if isinstance(el, E.RotarySwitch):
        return {"count": len(el.positions), "index": el.position, "startAngle": el.start_angle, "endAngle": el.end_angle}
    if isinstance(el, E.SegmentButton):
        return {"count": len(el.segments), "index": el.selected_index}
    if isinstance(el, E.TabBar):
        return {"count": len(el.tabs), "index": el.active_index}
    if isinstance(el, E.ComboBox):
        return {"count": len(el.options), "index": el.selected_index, "options": list(el.options)}
    assert isinstance(el, (E.Dropdown, E.RadioGroup))
    return {"count": len(el.options), "index": el.selected_index}


def _multichoice(el: E.MultiSelectDropdown) -> Config:
    return {"options": list(el.options), "maxSelections": el.max_selections}


def _stepper(el: E.Stepper) -> Config:
    return {"value": el.value, "min": el.min, "max": el.max, "step": el.step, "decimalPlaces": el.decimal_places}


def _list(el: Element) -> Config:
    if isinstance(el, E.PresetBrowser):
        return {"presets": list(el.presets)}
    return {}


def _meter(el: Element) -> Config:
    if isinstance(el, E.Meter):
        return {"value": _round(normalized(el.value, el.min, el.max)), "peakHold": el.show_peak_hold}
    assert isinstance(el, E.GainReductionMeter)
    return {
        "value": _round(normalized(el.value, 0, el.max_reduction)),
        "peakHold": False,
        "maxReduction": el.max_reduction,
    }


def _readout(el: E.ReadoutDisplay) -> Config:
    if isinstance(el, E.FrequencyDisplay):
        value = math.log(max(el.value, 20) / 20) / math.log(1000)
        return {
            "value": _round(min(max(value, 0.0), 1.0)),
            "autoKhz": el.auto_switch_khz,
            "decimalPlaces": el.decimal_places,
        }
    assert isinstance(el, E.DbDisplay)
    return {
        "value": _round(normalized(el.value, el.min_db, el.max_db)),
        "minDb": el.min_db,
        "maxDb": el.max_db,
        "decimalPlaces": el.decimal_places,
    }


PAINTERS = {
    "waveform": "wave",
    "oscilloscope": "wave",
    "scrollingwaveform": "wave",
    "spectrumanalyzer": "spectrum",
    "spectrogram": "spectrogram",
    "goniometer": "scope",
    "vectorscope": "scope",
    "eqcurve": "eq",
    "compressorcurve": "compressor",
    "envelopedisplay": "envelope",
    "lfodisplay": "lfo",
    "filterresponse": "filter",
}


def _canvas(el: E.CanvasDisplay) -> Config:
    config: Dict[str, Any] = {
        "painter": PAINTERS[el.kind],
        "background": el.background_color,
        "trace": el.trace_color,
        "grid": el.grid_color,
        "showGrid": el.show_grid,
        "divisions": el.grid_divisions,
        "fill": getattr(el, "fill_color", None),
    }
    if isinstance(el, E.EqCurve):
        config.update(
            bands=[{"frequency": b.frequency, "gain": b.gain, "q": b.q} for b in el.bands],
            minGain=el.min_gain,
            maxGain=el.max_gain,
        )
    elif isinstance(el, E.CompressorCurve):
        config.update(threshold=el.threshold, ratio=el.ratio or 1, knee=el.knee)
    elif isinstance(el, E.EnvelopeDisplay):
        config.update(attack=el.attack, decay=el.decay, sustain=el.sustain, release=el.release)
    elif isinstance(el, E.LfoDisplay):
        config.update(shape=el.shape, cycles=el.cycles)
    elif isinstance(el, E.FilterResponse):
        config.update(filterType=el.filter_type, cutoff=el.cutoff, resonance=el.resonance)
    return config


def _xypad(el: E.XYPad) -> Config:
    pid = parameter_id(el)
    return {
        "x": _round(normalized(el.x_value, 0, 1)),
        "y": _round(normalized(el.y_value, 0, 1)),
        "xParameterId": el.x_parameter_id or f"{pid}_x",
        "yParameterId": el.y_parameter_id or f"{pid}_y",
    }


def _loop(el: E.LoopPoints) -> Config:
    return {"start": _round(normalized(el.loop_start, 0, 1)), "end": _round(normalized(el.loop_end, 0, 1))}


def _container(el: E.ContainerElement) -> Config:
    return {} if isinstance(el, E.Collapsible) else None


ConfigBuilder = Callable[[Element], Config]

CONFIG_BUILDERS: Dict[str, ConfigBuilder] = ensure_exhaustive(
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
        "menubutton": _interactive,
        "dropdown": _choice,
        "multiselectdropdown": _multichoice,
        "combobox": _choice,
        "checkbox": _switch,
        "radiogroup": _choice,
        "textfield": _static,
        "stepper": _stepper,
        "tabbar": _choice,
        "breadcrumb": _list,
        "treeview": _list,
        "label": _static,
        "meter": _meter,
        "dbdisplay": _readout,
        "frequencydisplay": _readout,
        "gainreductionmeter": _meter,
        "presetbrowser": _list,
        "modulationmatrix": _interactive,
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
        "pianokeyboard": _interactive,
        "drumpad": _interactive,
        "padgrid": _interactive,
        "stepsequencer": _interactive,
        "xypad": _xypad,
        "looppoints": _loop,
        "harmoniceditor": _interactive,
        "panel": _container,
        "frame": _container,
        "groupbox": _container,
        "collapsible": _container,
        "image": _static,
        "svggraphic": _static,
        "rectangle": _static,
        "line": _static,
        "asciiart": _ascii,
    },
    "JS generator",
)


def binding_entries(elements: Sequence[Element], layers: Sequence = ()) -> List[Dict[str, Any]]:
    """One entry per element with runtime behaviour, in render order."""

    entries = []
    for el in render_order(elements, layers):
        config = lookup(CONFIG_BUILDERS, el, "JS generator")(el)
        if config is None:
            continue
        if el.bindable:
            pid: Optional[str] = parameter_id(el)
        else:
            pid = (el.parameter_id or "").strip() or None
        entries.append(
            {
                "id": normalize_name(el.name),
                "kind": el.kind,
                "family": el.family,
                "parameterId": pid,
                "config": config,
            }
        )
    return entries


def _wrapper_selector(root_selector: str) -> str:
    suffix = "#plugin-container"
    if root_selector.endswith(suffix):
        return root_selector[: -len(suffix)] + "#plugin-wrapper"
    return "#plugin-wrapper"


_PLACEHOLDER = re.compile(r"__([A-Z][A-Z_]*)__")


def fill(template: str, values: Dict[str, str]) -> str:
    """Substitute ``__NAME__`` placeholders in one pass."""

    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def generate_responsive_scale_js(
    width: float,
    height: float,
    min_scale: float = 0.25,
    max_scale: float = 2.0,
    root_selector: str = "#plugin-container",
) -> str:
    return fill(
        RESPONSIVE_SCALE_TEMPLATE,
        {
            "WIDTH": fmt_number(width),
            "HEIGHT": fmt_number(height),
            "MIN_SCALE": fmt_number(min_scale),
            "MAX_SCALE": fmt_number(max_scale),
            "WRAPPER_SELECTOR": js_json(_wrapper_selector(root_selector)),
            "CONTAINER_SELECTOR": js_json(root_selector),
        },
    )


def generate_bindings_js(elements: Sequence[Element], opts: GeneratorOptions) -> str:
    navigation = {
        window_id: {"name": link.name, "slug": link.slug, "href": link.href}
        for window_id, link in opts.links.items()
    }
    text = fill(
        BINDINGS_TEMPLATE,
        {
            "WINDOW_NAME": " ".join(opts.window.name.split()).replace('"', "'"),
            "ROOT_SELECTOR": js_json(opts.root_selector),
            "BINDINGS": js_json(binding_entries(elements, opts.layers)).replace("\n", "\n  "),
            "NAVIGATION": js_json(navigation).replace("\n", "\n  "),
        },
    )
    if opts.responsive_scaling:
        text += "\n" + generate_responsive_scale_js(
            opts.window.width, opts.window.height, opts.min_scale, opts.max_scale, opts.root_selector
        )
    return text


def families_with_behaviour(elements: Sequence[Element]) -> List[str]:
    present = {entry["family"] for entry in binding_entries(elements)}
    return [family for family in FAMILY_ORDER if family in present]


def needs_custom_scrollbars(elements: Sequence[Element]) -> bool:
    return any(isinstance(el, E.Collapsible) and el.scroll_behavior != "hidden" for el in elements)


def generate_components_js(elements: Sequence[Element], opts: GeneratorOptions) -> str:
    parts = [RUNTIME_HEADER]
    parts.extend(FAMILY_SCRIPTS[family] for family in families_with_behaviour(elements))
    parts.append(RUNTIME_FOOTER)
    text = "".join(parts)
    if opts.custom_scrollbars and needs_custom_scrollbars(elements):
        text += "\n" + generate_custom_scrollbar_js()
    return text


def generate_mock_relay() -> str:
    return MOCK_RELAY


def generate_custom_scrollbar_js() -> str:
    return CUSTOM_SCROLLBAR


def generate_preview_navigation_js() -> str:
    return PREVIEW_NAVIGATION
