"""Bundle orchestrator: validate, generate and deliver one or more windows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from markupsafe import Markup

from ..core.elements import Button, Element
from ..core.errors import ExportBlocked, FaceplateError, InvalidSvg
from ..core.models import ProjectSnapshot, Window
from ..core.names import normalize_name, slugify, unique_slugs
from ..core.tree import render_order, resolve_window_elements
from .css_generator import generate_css
from .delivery import DirectoryAccess, build_archive, save_archive, write_folder
from .fonts import BundledFont, collect_used_fonts, resolve_bundled_fonts
from .html_generator import generate_html, parameter_id
from .js_generator import generate_bindings_js, generate_components_js, generate_mock_relay
from .known_issues import format_known_issues_markdown
from .options import ExportOptions, ExportResult, GeneratorOptions, SizeSavings, WindowLink
from .svg_optimizer import OptimizationResult, byte_size, combine_results, optimize_svg
from .svg_sanitizer import sanitize_svg
from .templates import get_template
from .validator import Invalid, format_errors, validate_elements

logger = logging.getLogger(__name__)

FileMap = Dict[str, Union[str, bytes]]


@dataclass
class PreparedWindow:
    window: Window
    slug: str
    elements: List[Element]
    svg_assets: Dict[str, str] = field(default_factory=dict)
    fonts: List[BundledFont] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class WindowArtifacts:
    prepared: PreparedWindow
    html: str
    css: str
    components_js: str
    bindings_js: str


def select_windows(
    snapshot: ProjectSnapshot,
    options: ExportOptions,
    window_id: Optional[str] = None,
) -> List[Window]:
    if window_id is not None:
        window = snapshot.window(window_id)
        if window is None:
            raise FaceplateError(f"Window '{window_id}' does not exist in this project")
        return [window]
    return [w for w in snapshot.windows if w.exported_by_default or options.include_developer_windows]


def prepare_windows(
    snapshot: ProjectSnapshot,
    windows: Sequence[Window],
) -> Tuple[List[PreparedWindow], List[str]]:
    """Resolve and validate every window; raises ``ExportBlocked`` on errors.

    Returns the prepared windows and the validator warnings, each prefixed
    with its window name when more than one window takes part.
    """

    known_ids = {w.id for w in windows}
    prefix = len(windows) > 1
    prepared: List[PreparedWindow] = []
    warnings: List[str] = []
    errors = []
    for window, slug in zip(windows, unique_slugs([w.name for w in windows])):
        elements = resolve_window_elements(snapshot, window)
        result = validate_elements(elements, known_window_ids=known_ids)
        for warning in result.warnings:
            text = warning.describe()
            warnings.append(f"{window.name}: {text}" if prefix else text)
        if isinstance(result, Invalid):
            errors.extend(result.errors)
        prepared.append(PreparedWindow(window=window, slug=slug, elements=elements))
    if errors:
        raise ExportBlocked(format_errors(errors))
    return prepared, warnings


def optimize_window_assets(prepared: PreparedWindow, optimize: bool) -> List[OptimizationResult]:
    """Sanitize (and optionally optimize) every inline SVG of one window."""

    results: List[OptimizationResult] = []
    for el in prepared.elements:
        source = getattr(el, el.svg_field or "", "") or ""
        if not source.strip():
            continue
        if optimize:
            try:
                result = optimize_svg(source)
            except Exception as exc:
                logger.warning("SVG optimization failed for %s, using original: %s", el.name, exc)
                size = byte_size(source)
                result = OptimizationResult(source, size, size, 0.0)
            results.append(result)
            source = result.optimized_svg
        try:
            prepared.svg_assets[el.id] = sanitize_svg(source)
        except InvalidSvg:
            logger.warning("Dropping unparsable SVG on element %s", el.name)
            prepared.svg_assets[el.id] = ""
            prepared.warnings.append(f'SVG on "{el.name}" could not be parsed and was left out')
    return results


def window_links(prepared: Sequence[PreparedWindow], multi_window: bool) -> Dict[str, WindowLink]:
    links = {}
    for item in prepared:
        href = f"../{item.slug}/index.html" if multi_window else "index.html"
        links[item.window.id] = WindowLink(item.window.id, item.window.name, item.slug, href)
    return links


def generate_window(
    prepared: PreparedWindow,
    snapshot: ProjectSnapshot,
    options: ExportOptions,
    *,
    links: Dict[str, WindowLink],
    font_url_prefix: str,
    root_selector: str = "#plugin-container",
    max_scale: Optional[float] = None,
    dom_scope: str = "",
) -> WindowArtifacts:
    opts = GeneratorOptions(
        window=prepared.window,
        layers=snapshot.ordered_layers(),
        svg_assets=prepared.svg_assets,
        fonts=prepared.fonts,
        font_url_prefix=font_url_prefix,
        custom_scrollbars=options.custom_scrollbars,
        responsive_scaling=options.responsive_scaling,
        min_scale=options.min_scale,
        max_scale=options.max_scale if max_scale is None else max_scale,
        links=links,
        root_selector=root_selector,
        dom_scope=dom_scope,
    )
    logger.debug("Generating window %s (%d elements)", prepared.window.name, len(prepared.elements))
    return WindowArtifacts(
        prepared=prepared,
        html=generate_html(prepared.elements, opts),
        css=generate_css(prepared.elements, opts),
        components_js=generate_components_js(prepared.elements, opts),
        bindings_js=generate_bindings_js(prepared.elements, opts),
    )


def _integration_window(prepared: PreparedWindow, snapshot: ProjectSnapshot, links: Dict[str, WindowLink]) -> dict:
    parameters = []
    navigation = []
    for el in render_order(prepared.elements, snapshot.ordered_layers()):
        if el.bindable:
            parameters.append({"dom_id": normalize_name(el.name), "kind": el.kind, "parameter_id": parameter_id(el)})
        if isinstance(el, Button) and el.action == "navigate-window" and el.target_window_id in links:
            navigation.append({"dom_id": normalize_name(el.name), "target": links[el.target_window_id].name})
    window = prepared.window
    return {
        "name": window.name,
        "slug": prepared.slug,
        "width": window.width,
        "height": window.height,
        "parameters": parameters,
        "navigation": navigation,
    }


def integration_markdown(
    snapshot: ProjectSnapshot,
    prepared: Sequence[PreparedWindow],
    links: Dict[str, WindowLink],
    files: Sequence[str],
    options: ExportOptions,
) -> str:
    return get_template("integration.md").render(
        project_name=snapshot.name,
        multi_window=len(prepared) > 1,
        files=list(files),
        target=options.target,
        windows=[_integration_window(item, snapshot, links) for item in prepared],
        known_issues=Markup(format_known_issues_markdown()),
    )


def assemble_files(
    snapshot: ProjectSnapshot,
    options: ExportOptions,
    window_id: Optional[str] = None,
) -> Tuple[FileMap, List[str], List[str], Optional[SizeSavings]]:
    """Produce every bundle file in memory.

    Returns the file map (bundle-relative path to content, insertion
    order is the write order), the exported window names, warnings and
    the aggregate SVG savings when optimization ran.
    """

    windows = select_windows(snapshot, options, window_id)
    if not windows:
        raise FaceplateError("No windows to export (developer windows are excluded)")
    prepared, warnings = prepare_windows(snapshot, windows)
    multi_window = len(prepared) > 1

    used = sorted({family for item in prepared for family in collect_used_fonts(item.elements)})
    fonts, font_warnings = resolve_bundled_fonts(used, snapshot.fonts)
    warnings.extend(font_warnings)
    by_family = {font.family: font for font in fonts}

    optimization: List[OptimizationResult] = []
    for item in prepared:
        item.fonts = [by_family[f] for f in collect_used_fonts(item.elements) if f in by_family]
        optimization.extend(optimize_window_assets(item, options.optimize_assets))
        warnings.extend(item.warnings)

    links = window_links(prepared, multi_window)
    files: FileMap = {}
    for item in prepared:
        artifacts = generate_window(
            item,
            snapshot,
            options,
            links=links,
            font_url_prefix="../fonts/" if multi_window else "./fonts/",
        )
        bindings = artifacts.bindings_js
        if options.target == "standalone":
            bindings = generate_mock_relay() + "\n" + bindings
        base = f"{item.slug}/" if multi_window else ""
        files[f"{base}index.html"] = artifacts.html
        files[f"{base}style.css"] = artifacts.css
        files[f"{base}components.js"] = artifacts.components_js
        files[f"{base}bindings.js"] = bindings

    for font in fonts:
        files[f"fonts/{font.filename}"] = font.data
    names = list(files) + ["INTEGRATION.md"]
    files["INTEGRATION.md"] = integration_markdown(snapshot, prepared, links, names, options)

    savings = None
    if options.optimize_assets and optimization:
        batch = combine_results(optimization)
        savings = SizeSavings(batch.total_original_bytes, batch.total_optimized_bytes, batch.savings_percent)
    return files, [item.window.name for item in prepared], warnings, savings


def archive_name(snapshot: ProjectSnapshot) -> str:
    return f"{slugify(snapshot.name, 'faceplate')}-bundle.zip"


def export_bundle(
    snapshot: ProjectSnapshot,
    options: Optional[ExportOptions] = None,
    *,
    window_id: Optional[str] = None,
    directory_access: Optional[DirectoryAccess] = None,
    archive_path: Optional[Union[str, Path]] = None,
) -> ExportResult:
    """Export one window (``window_id``) or every exported window.

    ``archive`` delivery returns the ZIP bytes and also saves them when
    ``archive_path`` is given. ``folder`` delivery asks
    ``directory_access`` for a directory.
    """

    options = options or ExportOptions()
    snapshot = snapshot.copy()
    warnings: List[str] = []
    try:
        files, window_names, warnings, savings = assemble_files(snapshot, options, window_id)
        result = ExportResult(
            success=True,
            files=list(files),
            windows=window_names,
            warnings=warnings,
            size_savings=savings,
        )
        if options.delivery == "folder":
            if directory_access is None or not directory_access.supported():
                return ExportResult.failed(
                    "Folder export is unavailable here: no directory access. Use archive delivery instead.",
                    warnings,
                )
            directory = directory_access.request_directory()
            if directory is None:
                logger.info("Folder export cancelled")
                return ExportResult.user_cancelled()
            result.output_dir = write_folder(files, directory)
        else:
            result.archive_bytes = build_archive(files)
            result.archive_name = archive_name(snapshot)
            if archive_path is not None:
                result.output_dir = save_archive(result.archive_bytes, archive_path).parent
    except FaceplateError as exc:
        logger.error("Export failed: %s", exc)
        return ExportResult.failed(str(exc), warnings)
    except Exception as exc:
        logger.exception("Unexpected error during export")
        return ExportResult.failed(f"Export failed: {exc}", warnings)

    logger.info("Exported %d file(s) for %s", result.file_count, ", ".join(result.windows))
    return result
