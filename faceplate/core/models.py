"""Project-level data models: windows, layers, fonts and the snapshot."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

from .elements import Element, element_from_dict

WindowKind = Literal["release", "developer"]

DEFAULT_LAYER_ID = "default"


@dataclass
class GradientStop:
    color: str
    position: float


@dataclass
class GradientConfig:
    type: Literal["linear", "radial"] = "linear"
    angle: float = 180
    stops: List[GradientStop] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "GradientConfig":
        stops = [
            GradientStop(color=s.get("color", "#000000"), position=float(s.get("position", 0)))
            for s in data.get("colorStops", data.get("stops", []))
            if isinstance(s, dict)
        ]
        return cls(
            type=data.get("type", "linear"),
            angle=data.get("angle", 180),
            stops=stops,
        )


@dataclass
class Window:
    id: str
    name: str
    kind: WindowKind = "release"
    width: int = 800
    height: int = 600
    background_color: str = "#1a1a1a"
    background_type: Literal["color", "gradient"] = "color"
    gradient: Optional[GradientConfig] = None
    element_ids: List[str] = field(default_factory=list)

    @property
    def exported_by_default(self) -> bool:
        return self.kind == "release"

    @classmethod
    def from_dict(cls, data: dict) -> "Window":
        gradient_data = data.get("gradientConfig") or data.get("gradient")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", "Window"),
            kind=data.get("type", data.get("kind", "release")),
            width=int(data.get("width", 800)),
            height=int(data.get("height", 600)),
            background_color=data.get("backgroundColor", data.get("background_color", "#1a1a1a")),
            background_type=data.get("backgroundType", data.get("background_type", "color")),
            gradient=GradientConfig.from_dict(gradient_data) if isinstance(gradient_data, dict) else None,
            element_ids=[str(i) for i in data.get("elementIds", data.get("element_ids", []))],
        )


@dataclass
class Layer:
    id: str
    name: str
    order: int = 0
    visible: bool = True
    locked: bool = False
    color: str = "#6b7280"

    @classmethod
    def from_dict(cls, data: dict) -> "Layer":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", "Layer"),
            order=int(data.get("order", 0)),
            visible=bool(data.get("visible", True)),
            locked=bool(data.get("locked", False)),
            color=data.get("color", "#6b7280"),
        )


DEFAULT_LAYER = Layer(id=DEFAULT_LAYER_ID, name="Default", order=0)


@dataclass
class FontAsset:
    """A font file bundled with the project."""

    family: str
    filename: str
    data_base64: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "FontAsset":
        return cls(
            family=data.get("family", ""),
            filename=data.get("filename", data.get("file", "")),
            data_base64=data.get("data_base64", data.get("dataBase64", "")),
        )


@dataclass
class ProjectSnapshot:
    name: str
    elements: List[Element] = field(default_factory=list)
    windows: List[Window] = field(default_factory=list)
    layers: List[Layer] = field(default_factory=list)
    fonts: List[FontAsset] = field(default_factory=list)

    def copy(self) -> "ProjectSnapshot":
        return copy.deepcopy(self)

    def window(self, window_id: str) -> Optional[Window]:
        for window in self.windows:
            if window.id == window_id:
                return window
        return None

    def element_index(self) -> Dict[str, Element]:
        return {el.id: el for el in self.elements}

    def ordered_layers(self) -> List[Layer]:
        """Layers bottom-first; the default layer is always present."""

        layers = sorted(self.layers, key=lambda layer: layer.order)
        if not any(layer.id == DEFAULT_LAYER_ID for layer in layers):
            layers.insert(0, copy.copy(DEFAULT_LAYER))
        return layers

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectSnapshot":
        elements = [element_from_dict(e) for e in data.get("elements", []) if isinstance(e, dict)]
        windows = [Window.from_dict(w) for w in data.get("windows", []) if isinstance(w, dict)]
        layers = [Layer.from_dict(layer) for layer in data.get("layers", []) if isinstance(layer, dict)]
        fonts = [FontAsset.from_dict(f) for f in data.get("fonts", []) if isinstance(f, dict)]
        snapshot = cls(
            name=data.get("name", data.get("projectName", "Untitled")),
            elements=elements,
            windows=windows,
            layers=layers,
            fonts=fonts,
        )
        if not snapshot.windows:
            migrate_single_canvas(snapshot, data)
        return snapshot


def migrate_single_canvas(snapshot: ProjectSnapshot, data: dict) -> ProjectSnapshot:
    """Wrap a pre-window snapshot's elements in one release window."""

    canvas = data.get("canvas", {}) if isinstance(data.get("canvas"), dict) else {}
    snapshot.windows = [
        Window(
            id="window-1",
            name="Main Window",
            kind="release",
            width=int(canvas.get("width", data.get("canvasWidth", 800))),
            height=int(canvas.get("height", data.get("canvasHeight", 600))),
            background_color=canvas.get("backgroundColor", data.get("backgroundColor", "#1a1a1a")),
            element_ids=[el.id for el in snapshot.elements if not el.parent_id],
        )
    ]
    return snapshot
