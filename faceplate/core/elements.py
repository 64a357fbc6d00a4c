"""Element catalog: one dataclass per element kind."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, List, Literal, Optional, Type

from .errors import UnknownElementKind
from .names import camel_to_snake

Orientation = Literal["vertical", "horizontal"]
LabelPosition = Literal["top", "bottom", "left", "right"]
ValueFormat = Literal["numeric", "percentage", "db", "hz", "custom"]
TextAlign = Literal["left", "center", "right"]

ELEMENT_TYPES: Dict[str, Type["Element"]] = {}


def register(kind: str, family: str):
    """Class decorator adding an element dataclass to the catalog."""

    def wrap(cls: Type["Element"]) -> Type["Element"]:
        if kind in ELEMENT_TYPES:
            raise ValueError(f"Element kind '{kind}' registered twice")
        cls.kind = kind
        cls.family = family
        ELEMENT_TYPES[kind] = cls
        return cls

    return wrap


@dataclass(slots=True)
class Element:
    id: str
    name: str
    x: float = 0
    y: float = 0
    width: float = 100
    height: float = 100
    rotation: float = 0
    z_index: int = 0
    locked: bool = False
    visible: bool = True
    parameter_id: Optional[str] = None
    parent_id: Optional[str] = None
    layer_id: Optional[str] = None

    kind: ClassVar[str] = ""
    family: ClassVar[str] = ""
    # Controls that talk to a host parameter through the relay.
    bindable: ClassVar[bool] = False
    # Containers render their children nested inside their own node.
    container: ClassVar[bool] = False
    # Text-bearing kinds whose font family is exported as @font-face.
    font_field: ClassVar[Optional[str]] = None
    # Kinds carrying inline SVG that goes through the asset optimizer.
    svg_field: ClassVar[Optional[str]] = None

    def to_dict(self) -> dict:
        data = {f.name: _plain(getattr(self, f.name)) for f in fields(self)}
        data["type"] = self.kind
        return data


def _plain(value: Any) -> Any:
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if hasattr(value, "__dataclass_fields__"):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    return value


@dataclass(slots=True)
class ColorStop:
    position: float
    color: str


@dataclass(slots=True)
class EqBand:
    frequency: float = 1000.0
    gain: float = 0.0
    q: float = 1.0


def _coerce_list(items: Any, cls: type) -> list:
    result = []
    for item in items or []:
        if isinstance(item, cls):
            result.append(item)
        elif isinstance(item, dict):
            result.append(cls(**{camel_to_snake(k): v for k, v in item.items()}))
    return result


# ---------------------------------------------------------------------------
# Rotary controls
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class RotaryControl(Element):
    value: float = 0.5
    min: float = 0.0
    max: float = 1.0
    start_angle: float = -135
    end_angle: float = 135
    style: Literal["arc", "filled", "dot", "line"] = "arc"
    track_color: str = "#374151"
    fill_color: str = "#3b82f6"
    indicator_color: str = "#ffffff"
    track_width: float = 4
    show_label: bool = False
    label_text: str = ""
    label_position: LabelPosition = "bottom"
    label_font_size: float = 12
    label_color: str = "#9ca3af"
    show_value: bool = False
    value_position: LabelPosition = "top"
    value_format: ValueFormat = "numeric"
    value_suffix: str = ""
    value_decimal_places: int = 1
    value_font_size: float = 12
    value_color: str = "#e5e7eb"

    bindable: ClassVar[bool] = True


@register("knob", "rotary")
@dataclass(slots=True)
class Knob(RotaryControl):
    pass


@register("steppedknob", "rotary")
@dataclass(slots=True)
class SteppedKnob(RotaryControl):
    step_count: int = 12
    show_step_marks: bool = True


@register("centerdetentknob", "rotary")
@dataclass(slots=True)
class CenterDetentKnob(RotaryControl):
    detent_width: float = 0.05
    style: Literal["arc", "filled", "dot", "line"] = "arc"


@register("dotindicatorknob", "rotary")
@dataclass(slots=True)
class DotIndicatorKnob(RotaryControl):
    dot_radius: float = 3
    style: Literal["arc", "filled", "dot", "line"] = "dot"


@register("arcslider", "rotary")
@dataclass(slots=True)
class ArcSlider(RotaryControl):
    start_angle: float = -120
    end_angle: float = 120
    thumb_radius: float = 6
    thumb_color: str = "#ffffff"


# ---------------------------------------------------------------------------
# Linear controls
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class LinearControl(Element):
    orientation: Orientation = "vertical"
    value: float = 0.5
    min: float = 0.0
    max: float = 1.0
    track_color: str = "#374151"
    fill_color: str = "#3b82f6"
    thumb_color: str = "#ffffff"
    thumb_width: float = 20
    thumb_height: float = 20
    show_label: bool = False
    label_text: str = ""
    label_position: LabelPosition = "bottom"
    label_font_size: float = 12
    label_color: str = "#9ca3af"
    show_value: bool = False
    value_position: LabelPosition = "top"
    value_format: ValueFormat = "numeric"
    value_suffix: str = ""
    value_decimal_places: int = 1
    value_font_size: float = 12
    value_color: str = "#e5e7eb"

    bindable: ClassVar[bool] = True


@register("slider", "linear")
@dataclass(slots=True)
class Slider(LinearControl):
    pass


@register("bipolarslider", "linear")
@dataclass(slots=True)
class BipolarSlider(LinearControl):
    center_value: float = 0.5
    center_color: str = "#6b7280"


@register("notchedslider", "linear")
@dataclass(slots=True)
class NotchedSlider(LinearControl):
    notch_count: int = 5
    notch_color: str = "#6b7280"
    snap_to_notches: bool = False


@register("crossfadeslider", "linear")
@dataclass(slots=True)
class CrossfadeSlider(LinearControl):
    orientation: Orientation = "horizontal"
    label_a: str = "A"
    label_b: str = "B"


@register("rangeslider", "range")
@dataclass(slots=True)
class RangeSlider(LinearControl):
    min_value: float = 0.25
    max_value: float = 0.75


@register("multislider", "multislider")
@dataclass(slots=True)
class MultiSlider(LinearControl):
    band_count: int = 8
    band_values: List[float] = field(default_factory=list)
    band_gap: float = 2


@register("asciislider", "ascii")
@dataclass(slots=True)
class AsciiSlider(LinearControl):
    orientation: Orientation = "horizontal"
    bar_width: int = 16
    fill_char: str = "#"
    empty_char: str = "-"
    font_family: str = "Roboto Mono"
    font_size: float = 12
    text_color: str = "#22c55e"

    font_field: ClassVar[Optional[str]] = "font_family"


# ---------------------------------------------------------------------------
# Switches and buttons
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class SwitchControl(Element):
    background_color: str = "#374151"
    text_color: str = "#ffffff"
    border_color: str = "#4b5563"
    border_radius: float = 4

    bindable: ClassVar[bool] = True


@register("button", "switch")
@dataclass(slots=True)
class Button(SwitchControl):
    mode: Literal["momentary", "toggle"] = "momentary"
    label: str = "Button"
    pressed: bool = False
    action: Literal["parameter", "navigate-window"] = "parameter"
    target_window_id: Optional[str] = None


@register("iconbutton", "switch")
@dataclass(slots=True)
class IconButton(SwitchControl):
    mode: Literal["momentary", "toggle"] = "momentary"
    icon_svg: str = ""
    pressed: bool = False
    icon_color: str = "#e5e7eb"

    svg_field: ClassVar[Optional[str]] = "icon_svg"


@register("toggleswitch", "switch")
@dataclass(slots=True)
class ToggleSwitch(SwitchControl):
    is_on: bool = False
    on_color: str = "#22c55e"
    off_color: str = "#4b5563"
    thumb_color: str = "#ffffff"


@register("powerbutton", "switch")
@dataclass(slots=True)
class PowerButton(SwitchControl):
    is_on: bool = True
    led_color: str = "#22c55e"
    led_off_color: str = "#1f2937"


@register("rockerswitch", "switch")
@dataclass(slots=True)
class RockerSwitch(SwitchControl):
    position: int = 1
    mode: Literal["latch", "spring-to-center"] = "latch"
    show_labels: bool = True
    up_label: str = "ON"
    down_label: str = "OFF"


@register("rotaryswitch", "choice")
@dataclass(slots=True)
class RotarySwitch(SwitchControl):
    positions: List[str] = field(default_factory=lambda: ["1", "2", "3"])
    position: int = 0
    start_angle: float = -120
    end_angle: float = 120
    pointer_color: str = "#ffffff"


@register("segmentbutton", "choice")
@dataclass(slots=True)
class SegmentButton(SwitchControl):
    segments: List[str] = field(default_factory=lambda: ["A", "B", "C"])
    selected_index: int = 0
    selected_color: str = "#3b82f6"
    orientation: Orientation = "horizontal"


@register("asciibutton", "ascii")
@dataclass(slots=True)
class AsciiButton(SwitchControl):
    mode: Literal["momentary", "toggle"] = "toggle"
    label: str = "[ ON ]"
    pressed_label: str = "[*ON*]"
    pressed: bool = False
    font_family: str = "Roboto Mono"
    font_size: float = 12
    background_color: str = "transparent"
    text_color: str = "#22c55e"

    font_field: ClassVar[Optional[str]] = "font_family"


@register("menubutton", "menu")
@dataclass(slots=True)
class MenuButton(SwitchControl):
    label: str = "Menu"
    items: List[str] = field(default_factory=lambda: ["Item 1", "Item 2"])

    bindable: ClassVar[bool] = False


# ---------------------------------------------------------------------------
# Selection and text input
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class SelectionControl(Element):
    background_color: str = "#1f2937"
    text_color: str = "#e5e7eb"
    border_color: str = "#4b5563"
    accent_color: str = "#3b82f6"
    border_radius: float = 4
    font_size: float = 13

    bindable: ClassVar[bool] = True


@register("dropdown", "choice")
@dataclass(slots=True)
class Dropdown(SelectionControl):
    options: List[str] = field(default_factory=lambda: ["Option 1", "Option 2"])
    selected_index: int = 0


@register("multiselectdropdown", "multichoice")
@dataclass(slots=True)
class MultiSelectDropdown(SelectionControl):
    options: List[str] = field(default_factory=lambda: ["Option 1", "Option 2"])
    selected_indices: List[int] = field(default_factory=list)
    max_selections: int = 0


@register("combobox", "choice")
@dataclass(slots=True)
class ComboBox(SelectionControl):
    options: List[str] = field(default_factory=lambda: ["Option 1", "Option 2"])
    selected_index: int = -1
    placeholder: str = "Type or select..."


@register("checkbox", "switch")
@dataclass(slots=True)
class Checkbox(SelectionControl):
    checked: bool = False
    label: str = "Checkbox"
    label_position: Literal["left", "right"] = "right"
    background_color: str = "transparent"


@register("radiogroup", "choice")
@dataclass(slots=True)
class RadioGroup(SelectionControl):
    options: List[str] = field(default_factory=lambda: ["Option 1", "Option 2"])
    selected_index: int = 0
    orientation: Orientation = "vertical"
    spacing: float = 8
    background_color: str = "transparent"


@register("textfield", "text")
@dataclass(slots=True)
class TextField(SelectionControl):
    value: str = ""
    placeholder: str = ""
    max_length: int = 0
    font_family: str = "Inter"
    text_align: TextAlign = "left"
    padding: float = 6
    border_width: float = 1

    bindable: ClassVar[bool] = False
    font_field: ClassVar[Optional[str]] = "font_family"


@register("stepper", "stepper")
@dataclass(slots=True)
class Stepper(SelectionControl):
    value: float = 0
    min: float = 0
    max: float = 10
    step: float = 1
    decimal_places: int = 0


@register("tabbar", "choice")
@dataclass(slots=True)
class TabBar(SelectionControl):
    tabs: List[str] = field(default_factory=lambda: ["Tab 1", "Tab 2"])
    active_index: int = 0
    orientation: Orientation = "horizontal"


@register("breadcrumb", "list")
@dataclass(slots=True)
class Breadcrumb(SelectionControl):
    items: List[str] = field(default_factory=lambda: ["Home", "Presets"])
    separator: str = "/"

    bindable: ClassVar[bool] = False


@register("treeview", "list")
@dataclass(slots=True)
class TreeView(SelectionControl):
    # "Folder/Item" paths, one per leaf.
    items: List[str] = field(default_factory=list)
    row_height: float = 20
    expanded: bool = True

    bindable: ClassVar[bool] = False


# ---------------------------------------------------------------------------
# Displays
# ---------------------------------------------------------------------------


@register("label", "text")
@dataclass(slots=True)
class Label(Element):
    text: str = "Label"
    font_size: float = 14
    font_family: str = "Inter"
    font_weight: int = 400
    color: str = "#ffffff"
    text_align: TextAlign = "center"

    font_field: ClassVar[Optional[str]] = "font_family"


@register("meter", "meter")
@dataclass(slots=True)
class Meter(Element):
    orientation: Orientation = "vertical"
    value: float = 0.0
    min: float = -60.0
    max: float = 0.0
    color_stops: List[ColorStop] = field(
        default_factory=lambda: [
            ColorStop(0.0, "#22c55e"),
            ColorStop(0.7, "#eab308"),
            ColorStop(0.9, "#ef4444"),
        ]
    )
    background_color: str = "#111827"
    show_peak_hold: bool = False

    def __post_init__(self) -> None:
        self.color_stops = _coerce_list(self.color_stops, ColorStop)


@dataclass(slots=True)
class ReadoutDisplay(Element):
    decimal_places: int = 1
    show_unit: bool = True
    font_size: float = 14
    font_family: str = "Roboto Mono"
    text_color: str = "#22c55e"
    background_color: str = "#111827"
    padding: float = 4

    font_field: ClassVar[Optional[str]] = "font_family"


@register("dbdisplay", "readout")
@dataclass(slots=True)
class DbDisplay(ReadoutDisplay):
    value: float = -12.0
    min_db: float = -60.0
    max_db: float = 0.0


@register("frequencydisplay", "readout")
@dataclass(slots=True)
class FrequencyDisplay(ReadoutDisplay):
    value: float = 1000.0
    auto_switch_khz: bool = True


@register("gainreductionmeter", "meter")
@dataclass(slots=True)
class GainReductionMeter(Element):
    orientation: Orientation = "vertical"
    value: float = 0.0
    max_reduction: float = -24.0
    meter_color: str = "#f97316"
    background_color: str = "#111827"
    show_value: bool = True
    font_size: float = 10
    text_color: str = "#e5e7eb"


@register("presetbrowser", "list")
@dataclass(slots=True)
class PresetBrowser(Element):
    presets: List[str] = field(default_factory=lambda: ["Init", "Bass/Sub", "Lead/Saw"])
    selected_index: int = 0
    show_folders: bool = True
    show_search: bool = True
    background_color: str = "#111827"
    item_color: str = "#1f2937"
    selected_color: str = "#3b82f6"
    text_color: str = "#e5e7eb"
    selected_text_color: str = "#ffffff"
    font_size: float = 12
    item_height: float = 24
    border_color: str = "#374151"
    border_radius: float = 4


@register("modulationmatrix", "matrix")
@dataclass(slots=True)
class ModulationMatrix(Element):
    sources: List[str] = field(default_factory=lambda: ["LFO 1", "ENV 1"])
    destinations: List[str] = field(default_factory=lambda: ["Pitch", "Cutoff"])
    cell_size: float = 24
    cell_color: str = "#1f2937"
    active_color: str = "#3b82f6"
    border_color: str = "#374151"
    header_background: str = "#111827"
    header_color: str = "#9ca3af"
    header_font_size: float = 10
    preview_active_connections: List[List[int]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Canvas visualizations and curves
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class CanvasDisplay(Element):
    background_color: str = "#0b0f17"
    trace_color: str = "#22c55e"
    border_color: str = "#374151"
    border_width: float = 1
    show_grid: bool = True
    grid_color: str = "#1f2937"
    grid_divisions: int = 4


@register("waveform", "canvas")
@dataclass(slots=True)
class Waveform(CanvasDisplay):
    zoom_level: float = 1


@register("oscilloscope", "canvas")
@dataclass(slots=True)
class Oscilloscope(CanvasDisplay):
    time_div: float = 10
    amplitude_scale: float = 1
    trigger_level: float = 0.5


@register("spectrumanalyzer", "canvas")
@dataclass(slots=True)
class SpectrumAnalyzer(CanvasDisplay):
    fft_size: int = 2048
    frequency_scale: Literal["linear", "log"] = "log"
    min_db: float = -90
    max_db: float = 0
    fill_color: str = "rgba(34, 197, 94, 0.25)"


@register("spectrogram", "canvas")
@dataclass(slots=True)
class Spectrogram(CanvasDisplay):
    fft_size: int = 1024
    color_map: Literal["heat", "gray", "viridis"] = "heat"


@register("goniometer", "canvas")
@dataclass(slots=True)
class Goniometer(CanvasDisplay):
    show_axes: bool = True


@register("vectorscope", "canvas")
@dataclass(slots=True)
class Vectorscope(CanvasDisplay):
    persistence: float = 0.6


@register("scrollingwaveform", "canvas")
@dataclass(slots=True)
class ScrollingWaveform(CanvasDisplay):
    scroll_speed: float = 1
    display_mode: Literal["line", "filled"] = "filled"


@register("eqcurve", "canvas")
@dataclass(slots=True)
class EqCurve(CanvasDisplay):
    bands: List[EqBand] = field(default_factory=lambda: [EqBand(100, 3, 0.7), EqBand(3000, -2, 1.2)])
    min_gain: float = -24
    max_gain: float = 24
    fill_color: str = "rgba(59, 130, 246, 0.2)"

    def __post_init__(self) -> None:
        self.bands = _coerce_list(self.bands, EqBand)


@register("compressorcurve", "canvas")
@dataclass(slots=True)
class CompressorCurve(CanvasDisplay):
    threshold: float = -18
    ratio: float = 4
    knee: float = 6


@register("envelopedisplay", "canvas")
@dataclass(slots=True)
class EnvelopeDisplay(CanvasDisplay):
    attack: float = 0.1
    decay: float = 0.2
    sustain: float = 0.7
    release: float = 0.3
    fill_color: str = "rgba(34, 197, 94, 0.2)"


@register("lfodisplay", "canvas")
@dataclass(slots=True)
class LfoDisplay(CanvasDisplay):
    shape: Literal["sine", "triangle", "saw", "square", "random"] = "sine"
    cycles: float = 2


@register("filterresponse", "canvas")
@dataclass(slots=True)
class FilterResponse(CanvasDisplay):
    filter_type: Literal["lowpass", "highpass", "bandpass", "notch"] = "lowpass"
    cutoff: float = 1000
    resonance: float = 0.7
    fill_color: str = "rgba(59, 130, 246, 0.2)"


# ---------------------------------------------------------------------------
# Specialized audio controls
# ---------------------------------------------------------------------------


@register("pianokeyboard", "keyboard")
@dataclass(slots=True)
class PianoKeyboard(Element):
    start_note: int = 48
    octave_count: int = 2
    white_key_color: str = "#f9fafb"
    black_key_color: str = "#111827"
    pressed_color: str = "#3b82f6"

    bindable: ClassVar[bool] = True


@register("drumpad", "pad")
@dataclass(slots=True)
class DrumPad(Element):
    label: str = "Pad"
    pad_color: str = "#374151"
    active_color: str = "#f97316"
    text_color: str = "#e5e7eb"
    border_radius: float = 6

    bindable: ClassVar[bool] = True


@register("padgrid", "pad")
@dataclass(slots=True)
class PadGrid(Element):
    rows: int = 4
    columns: int = 4
    gap: float = 4
    pad_color: str = "#374151"
    active_color: str = "#f97316"
    text_color: str = "#e5e7eb"
    border_radius: float = 4

    bindable: ClassVar[bool] = True


@register("stepsequencer", "grid")
@dataclass(slots=True)
class StepSequencer(Element):
    steps: int = 16
    rows: int = 1
    active_steps: List[int] = field(default_factory=list)
    step_color: str = "#1f2937"
    active_color: str = "#22c55e"
    gap: float = 2

    bindable: ClassVar[bool] = True


@register("xypad", "xypad")
@dataclass(slots=True)
class XYPad(Element):
    x_value: float = 0.5
    y_value: float = 0.5
    x_parameter_id: Optional[str] = None
    y_parameter_id: Optional[str] = None
    background_color: str = "#111827"
    cursor_color: str = "#3b82f6"
    grid_color: str = "#1f2937"
    cursor_size: float = 12

    bindable: ClassVar[bool] = True


@register("looppoints", "loop")
@dataclass(slots=True)
class LoopPoints(Element):
    loop_start: float = 0.25
    loop_end: float = 0.75
    background_color: str = "#111827"
    region_color: str = "rgba(59, 130, 246, 0.25)"
    marker_color: str = "#3b82f6"

    bindable: ClassVar[bool] = True


@register("harmoniceditor", "harmonic")
@dataclass(slots=True)
class HarmonicEditor(Element):
    harmonic_count: int = 16
    harmonic_values: List[float] = field(default_factory=list)
    bar_color: str = "#3b82f6"
    background_color: str = "#111827"

    bindable: ClassVar[bool] = True


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class ContainerElement(Element):
    background_color: str = "transparent"
    border_color: str = "#374151"
    border_width: float = 1
    border_radius: float = 4
    padding: float = 0

    container: ClassVar[bool] = True


@register("panel", "container")
@dataclass(slots=True)
class Panel(ContainerElement):
    background_color: str = "#1f2937"


@register("frame", "container")
@dataclass(slots=True)
class Frame(ContainerElement):
    border_style: Literal["solid", "dashed", "dotted", "double", "groove", "ridge"] = "solid"


@register("groupbox", "container")
@dataclass(slots=True)
class GroupBox(ContainerElement):
    header_text: str = "Group"
    header_font_size: float = 12
    header_color: str = "#e5e7eb"
    header_background: str = "#1f2937"


@register("collapsible", "container")
@dataclass(slots=True)
class Collapsible(ContainerElement):
    header_text: str = "Section"
    header_font_size: float = 12
    header_color: str = "#e5e7eb"
    header_background: str = "#1f2937"
    header_height: float = 28
    content_background: str = "#111827"
    max_content_height: float = 200
    scroll_behavior: Literal["auto", "hidden", "scroll"] = "auto"
    collapsed: bool = False
    scrollbar_width: float = 10
    scrollbar_thumb_color: str = "#4a4a4a"
    scrollbar_track_color: str = "#1a1a1a"


# ---------------------------------------------------------------------------
# Decorative
# ---------------------------------------------------------------------------


@register("image", "decor")
@dataclass(slots=True)
class Image(Element):
    src: str = ""
    fit: Literal["contain", "cover", "fill", "none", "scale-down"] = "contain"
    alt: str = ""


@register("svggraphic", "decor")
@dataclass(slots=True)
class SvgGraphic(Element):
    svg_content: str = ""
    opacity: float = 1

    svg_field: ClassVar[Optional[str]] = "svg_content"


@register("rectangle", "decor")
@dataclass(slots=True)
class Rectangle(Element):
    fill_color: str = "#374151"
    fill_opacity: float = 1
    border_color: str = "transparent"
    border_width: float = 0
    border_radius: float = 0


@register("line", "decor")
@dataclass(slots=True)
class Line(Element):
    stroke_color: str = "#4b5563"
    stroke_width: float = 1
    stroke_style: Literal["solid", "dashed", "dotted"] = "solid"


@register("asciiart", "ascii")
@dataclass(slots=True)
class AsciiArt(Element):
    content: str = ""
    content_type: Literal["static", "noise"] = "static"
    noise_characters: str = " .:-=+*#%@"
    font_family: str = "Roboto Mono"
    font_size: float = 10
    line_height: float = 1.0
    text_color: str = "#22c55e"
    background_color: str = "transparent"

    font_field: ClassVar[Optional[str]] = "font_family"


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def element_from_dict(data: dict) -> Element:
    """Build the element dataclass named by ``data["type"]``.

    Keys may be camelCase (editor JSON) or snake_case; unknown keys are
    ignored.
    """

    kind = str(data.get("type") or data.get("kind") or "")
    cls = ELEMENT_TYPES.get(kind)
    if cls is None:
        raise UnknownElementKind(kind, str(data.get("id", "")))
    known = {f.name for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        name = camel_to_snake(key)
        if name in known:
            kwargs[name] = value
    kwargs.setdefault("id", "")
    kwargs.setdefault("name", "")
    return cls(**kwargs)
