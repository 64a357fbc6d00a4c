"""Font registry and the helpers that decide which font files ship."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Literal, Sequence, Set, Tuple

from ..core.elements import Element
from ..core.models import FontAsset

logger = logging.getLogger(__name__)

INDIVIDUAL_WARNING_SIZE = 500 * 1024
TOTAL_WARNING_SIZE = 2 * 1024 * 1024

FONT_MIME_TYPES = {
    "ttf": "font/ttf",
    "otf": "font/otf",
    "woff": "font/woff",
    "woff2": "font/woff2",
}

FONT_FORMATS = {
    "ttf": "truetype",
    "otf": "opentype",
    "woff": "woff",
    "woff2": "woff2",
}


@dataclass(frozen=True)
class FontDefinition:
    name: str
    family: str
    file: str
    category: Literal["sans-serif", "serif", "monospace", "display"]

    @property
    def is_system(self) -> bool:
        return not self.file


AVAILABLE_FONTS: Tuple[FontDefinition, ...] = (
    FontDefinition("Inter", "Inter", "Inter-Regular.woff2", "sans-serif"),
    FontDefinition("Roboto", "Roboto", "Roboto-Regular.woff2", "sans-serif"),
    FontDefinition("Roboto Mono", "Roboto Mono", "RobotoMono-Regular.woff2", "monospace"),
    FontDefinition("Arial", "Arial, sans-serif", "", "sans-serif"),
    FontDefinition("Helvetica", "Helvetica, Arial, sans-serif", "", "sans-serif"),
    FontDefinition("Verdana", "Verdana, sans-serif", "", "sans-serif"),
    FontDefinition("Tahoma", "Tahoma, sans-serif", "", "sans-serif"),
    FontDefinition("Georgia", "Georgia, serif", "", "serif"),
    FontDefinition("Times New Roman", "Times New Roman, serif", "", "serif"),
    FontDefinition("Courier New", "Courier New, monospace", "", "monospace"),
    FontDefinition("Monaco", "Monaco, monospace", "", "monospace"),
)


def get_font(family: str) -> FontDefinition | None:
    for font in AVAILABLE_FONTS:
        if font.family == family or font.name == family:
            return font
    return None


def font_stack(family: str) -> str:
    """CSS ``font-family`` value with a generic fallback."""

    font = get_font(family)
    if font is not None and font.is_system:
        return font.family
    category = font.category if font is not None else "sans-serif"
    return f"'{family}', {category}"


def collect_used_fonts(elements: Iterable[Element]) -> List[str]:
    """Font families referenced by text-bearing elements, sorted."""

    used = set()
    for el in elements:
        if el.font_field:
            family = getattr(el, el.font_field, "")
            if family:
                used.add(family)
    return sorted(used)


@dataclass(frozen=True)
class BundledFont:
    family: str
    filename: str
    data: bytes

    @property
    def extension(self) -> str:
        return PurePosixPath(self.filename).suffix.lstrip(".").lower() or "woff2"

    @property
    def format(self) -> str:
        return FONT_FORMATS.get(self.extension, "woff2")

    def data_url(self) -> str:
        mime = FONT_MIME_TYPES.get(self.extension, "font/ttf")
        return f"data:{mime};base64,{base64.b64encode(self.data).decode('ascii')}"


def resolve_bundled_fonts(
    families: Sequence[str],
    assets: Sequence[FontAsset],
) -> Tuple[List[BundledFont], List[str]]:
    """Match used families against the project's font files.

    Returns the fonts to ship (one per family, in ``families`` order) and
    warnings for families that have no usable file or are oversized.
    """

    by_family: Dict[str, FontAsset] = {}
    for asset in assets:
        if asset.family and asset.data_base64 and asset.family not in by_family:
            by_family[asset.family] = asset

    fonts: List[BundledFont] = []
    taken: Set[str] = set()
    warnings: List[str] = []
    total = 0
    for family in families:
        registry = get_font(family)
        if registry is not None and registry.is_system:
            continue
        asset = by_family.get(family)
        if asset is None:
            warnings.append(f'Font "{family}" has no bundled file; the host will fall back to a system font')
            continue
        try:
            data = base64.b64decode(asset.data_base64.encode("ascii"), validate=True)
        except (binascii.Error, ValueError):
            warnings.append(f'Font "{family}" could not be decoded and was skipped')
            logger.warning("Skipping font %s: invalid base64 data", family)
            continue
        filename = PurePosixPath(asset.filename).name if asset.filename else ""
        if not filename:
            filename = registry.file if registry is not None else f"{family.replace(' ', '')}.woff2"
        if filename in taken:
            stem, suffix = PurePosixPath(filename).stem, PurePosixPath(filename).suffix
            count = 2
            while f"{stem}-{count}{suffix}" in taken:
                count += 1
            renamed = f"{stem}-{count}{suffix}"
            warnings.append(f'Font "{family}" shares the file name {filename} with another font; shipped as {renamed}')
            filename = renamed
        taken.add(filename)
        size = len(data)
        total += size
        if size > INDIVIDUAL_WARNING_SIZE:
            warnings.append(
                f'Font "{family}" is large ({size / 1024:.1f}KB) - consider subsetting or using web fonts'
            )
        fonts.append(BundledFont(family=family, filename=filename, data=data))

    if total > TOTAL_WARNING_SIZE:
        warnings.append(f"Total bundled font size is {total / (1024 * 1024):.2f}MB - this may impact load time")
    return fonts, warnings


def font_face_rule(font: BundledFont, url_prefix: str = "./fonts/") -> str:
    return (
        "@font-face {\n"
        f"  font-family: '{font.family}';\n"
        f"  src: url('{url_prefix}{font.filename}') format('{font.format}');\n"
        "  font-weight: normal;\n"
        "  font-style: normal;\n"
        "  font-display: swap;\n"
        "}"
    )
