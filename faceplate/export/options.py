"""Export options and the result object returned by every entry point."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Literal, Optional, Sequence

if TYPE_CHECKING:
    from ..core.models import Layer, Window
    from .fonts import BundledFont

Delivery = Literal["archive", "folder"]
Target = Literal["host", "standalone"]


@dataclass
class ExportOptions:
    optimize_assets: bool = True
    responsive_scaling: bool = True
    include_developer_windows: bool = False
    delivery: Delivery = "archive"
    target: Target = "host"
    custom_scrollbars: bool = True
    min_scale: float = 0.25
    max_scale: float = 2.0


@dataclass
class SizeSavings:
    original_bytes: int
    optimized_bytes: int
    savings_percent: float


@dataclass
class ExportResult:
    success: bool
    error: Optional[str] = None
    cancelled: bool = False
    files: List[str] = field(default_factory=list)
    windows: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    size_savings: Optional[SizeSavings] = None
    archive_name: Optional[str] = None
    archive_bytes: Optional[bytes] = None
    output_dir: Optional[Path] = None

    @property
    def file_count(self) -> int:
        return len(self.files)

    @classmethod
    def failed(cls, message: str, warnings: Optional[List[str]] = None) -> "ExportResult":
        return cls(success=False, error=message, warnings=list(warnings or []))

    @classmethod
    def user_cancelled(cls) -> "ExportResult":
        return cls(success=False, cancelled=True)


@dataclass
class WindowLink:
    """Where a navigation trigger aimed at a window goes."""

    window_id: str
    name: str
    slug: str
    href: str


@dataclass
class GeneratorOptions:
    """Per-window input shared by the HTML, CSS and JS generators."""

    window: "Window"
    layers: Sequence["Layer"] = ()
    svg_assets: Dict[str, str] = field(default_factory=dict)
    fonts: Sequence["BundledFont"] = ()
    font_url_prefix: str = "./fonts/"
    custom_scrollbars: bool = True
    responsive_scaling: bool = False
    min_scale: float = 0.25
    max_scale: float = 2.0
    links: Dict[str, WindowLink] = field(default_factory=dict)
    root_selector: str = "#plugin-container"
    title: Optional[str] = None
    # Prefix for ids and radio names inside a control; empty in exported bundles.
    dom_scope: str = ""

    def sub_id(self, dom_id: str, part: str) -> str:
        """Id of an inner node. ``__`` never appears in a normalized name."""

        return f"{self.dom_scope}{dom_id}__{part}"
