"""Open a project in the system browser as one self-contained document."""

from __future__ import annotations

import logging
import tempfile
import threading
import webbrowser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from markupsafe import Markup

from ..core.errors import FaceplateError, PreviewBlocked
from ..core.models import ProjectSnapshot
from .bundle import (
    PreparedWindow,
    WindowArtifacts,
    generate_window,
    optimize_window_assets,
    prepare_windows,
    select_windows,
    window_links,
)
from .css_scope import scope_css
from .fonts import BundledFont, collect_used_fonts, resolve_bundled_fonts
from .js_generator import generate_components_js, generate_mock_relay, generate_preview_navigation_js
from .options import ExportOptions, GeneratorOptions
from .templates import BINDINGS_TAG, COMPONENTS_TAG, STYLESHEET_TAG, get_template

logger = logging.getLogger(__name__)

BrowserLauncher = Callable[[str], bool]
Scheduler = Callable[[float, Callable[[], None]], object]

REVOKE_DELAY = 5.0
PREVIEW_MAX_SCALE = 1.0
BLOCKED_MESSAGE = "Popup blocked. Please allow popups for preview."

PREVIEW_SHELL_CSS = """html, body {
  margin: 0;
  width: 100%;
  height: 100%;
  overflow: hidden;
  background: #111;
  font-family: system-ui, sans-serif;
}
#fp-window-tabs {
  position: fixed;
  top: 0;
  left: 0;
  right: 0;
  height: 32px;
  display: flex;
  gap: 2px;
  padding: 0 8px;
  background: #1f1f1f;
  border-bottom: 1px solid #333;
  z-index: 1000;
}
.fp-window-tab {
  border: none;
  background: transparent;
  color: #aaa;
  padding: 0 12px;
  font-size: 12px;
  cursor: pointer;
}
.fp-window-tab.is-active {
  color: #fff;
  box-shadow: inset 0 -2px 0 #3b82f6;
}
.fp-window {
  position: fixed;
  top: 33px;
  left: 0;
  right: 0;
  bottom: 0;
}
.fp-window[hidden] {
  display: none;
}"""


@dataclass
class PreviewResult:
    success: bool
    blocked: bool = False
    error: Optional[str] = None
    url: Optional[str] = None
    path: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)


def open_in_browser(url: str) -> bool:
    try:
        return bool(webbrowser.open_new_tab(url))
    except webbrowser.Error as exc:
        logger.warning("Could not open browser: %s", exc)
        return False


def schedule_later(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


def _inline_script(js: str) -> str:
    return "<script>\n" + js.replace("</script", "<\\/script") + "\n</script>"


def _inline_style(css: str) -> str:
    return "<style>\n" + css.replace("</style", "<\\/style") + "\n</style>"


def inline_fonts(css: str, fonts: Sequence[BundledFont], url_prefix: str) -> str:
    for font in fonts:
        css = css.replace(f"url('{url_prefix}{font.filename}')", f"url('{font.data_url()}')")
    return css


def build_standalone_html(artifacts: WindowArtifacts, font_url_prefix: str = "./fonts/") -> str:
    """Inline the stylesheet and scripts into the window's ``index.html``."""

    css = inline_fonts(artifacts.css, artifacts.prepared.fonts, font_url_prefix)
    html = artifacts.html.replace(STYLESHEET_TAG, _inline_style(css), 1)
    html = html.replace(
        COMPONENTS_TAG,
        _inline_script(generate_mock_relay()) + "\n  " + _inline_script(artifacts.components_js),
        1,
    )
    return html.replace(BINDINGS_TAG, _inline_script(artifacts.bindings_js), 1)


def window_scope(slug: str) -> str:
    return f"#fp-window-{slug}"


def build_multi_window_document(
    title: str,
    artifacts: Sequence[WindowArtifacts],
    components_js: str,
    font_url_prefix: str = "./fonts/",
) -> str:
    """One document holding every window, each stylesheet scoped to its section."""

    windows = []
    for item in artifacts:
        prepared = item.prepared
        css = inline_fonts(item.css, prepared.fonts, font_url_prefix)
        windows.append(
            {
                "slug": prepared.slug,
                "id": prepared.window.id,
                "name": prepared.window.name,
                "css": Markup(scope_css(css, window_scope(prepared.slug)).replace("</style", "<\\/style")),
                "content": Markup(_window_content(item.html)),
                "bindings": Markup(item.bindings_js.replace("</script", "<\\/script")),
            }
        )
    return get_template("preview.html").render(
        title=title,
        shell_css=Markup(PREVIEW_SHELL_CSS),
        windows=windows,
        mock_relay=Markup(generate_mock_relay()),
        components=Markup(components_js.replace("</script", "<\\/script")),
        navigation=Markup(generate_preview_navigation_js()),
    )


def _window_content(html: str) -> str:
    """The element markup between the container's opening and closing tags."""

    start = html.find('<div id="plugin-container"')
    start = html.find(">", start) + 1
    end = html.rfind("</div>", start, html.rfind("</div>", start))
    return html[start:end].rstrip().strip("\n")


def _prepare(
    snapshot: ProjectSnapshot,
    options: ExportOptions,
    window_id: Optional[str],
) -> Tuple[List[PreparedWindow], List[str]]:
    windows = select_windows(snapshot, options, window_id)
    if not windows:
        raise FaceplateError("No windows to preview")
    prepared, warnings = prepare_windows(snapshot, windows)
    used = sorted({family for item in prepared for family in collect_used_fonts(item.elements)})
    fonts, font_warnings = resolve_bundled_fonts(used, snapshot.fonts)
    warnings.extend(font_warnings)
    by_family = {font.family: font for font in fonts}
    for item in prepared:
        item.fonts = [by_family[f] for f in collect_used_fonts(item.elements) if f in by_family]
        optimize_window_assets(item, options.optimize_assets)
        warnings.extend(item.warnings)
    return prepared, warnings


def render_preview(
    snapshot: ProjectSnapshot,
    options: Optional[ExportOptions] = None,
    window_id: Optional[str] = None,
) -> Tuple[str, List[str]]:
    """Build the preview document; raises ``FaceplateError`` subclasses."""

    options = options or ExportOptions()
    prepared, warnings = _prepare(snapshot, options, window_id)
    if len(prepared) == 1:
        artifacts = generate_window(
            prepared[0],
            snapshot,
            options,
            links={},
            font_url_prefix="./fonts/",
            max_scale=PREVIEW_MAX_SCALE,
        )
        return build_standalone_html(artifacts), warnings

    links = window_links(prepared, multi_window=True)
    artifacts = [
        generate_window(
            item,
            snapshot,
            options,
            links=links,
            font_url_prefix="./fonts/",
            root_selector=f"{window_scope(item.slug)} #plugin-container",
            max_scale=PREVIEW_MAX_SCALE,
            dom_scope=f"{item.slug}__",
        )
        for item in prepared
    ]
    all_elements = [el for item in prepared for el in item.elements]
    shared = GeneratorOptions(window=prepared[0].window, custom_scrollbars=options.custom_scrollbars)
    components = generate_components_js(all_elements, shared)
    return build_multi_window_document(snapshot.name, artifacts, components), warnings


def _write_document(html: str, directory: Optional[Path]) -> Path:
    with tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        suffix=".html",
        prefix="faceplate-preview-",
        dir=directory,
        delete=False,
    ) as handle:
        handle.write(html)
    return Path(handle.name)


def _revoke(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
        logger.debug("Revoked preview %s", path)
    except OSError as exc:
        logger.warning("Could not remove preview file %s: %s", path, exc)


def open_preview(
    html: str,
    *,
    launcher: Optional[BrowserLauncher] = None,
    scheduler: Optional[Scheduler] = None,
    temp_dir: Optional[Path] = None,
) -> Tuple[str, Path]:
    """Write ``html`` to a temporary file and hand its URL to the launcher.

    Raises ``PreviewBlocked`` if the launcher reports failure. The file
    is removed after a short grace period either way.
    """

    launcher = launcher or open_in_browser
    scheduler = scheduler or schedule_later
    path = _write_document(html, temp_dir)
    url = path.as_uri()
    opened = launcher(url)
    scheduler(REVOKE_DELAY, lambda: _revoke(path))
    if not opened:
        raise PreviewBlocked(BLOCKED_MESSAGE)
    logger.info("Preview opened at %s", url)
    return url, path


def _run_preview(
    snapshot: ProjectSnapshot,
    options: Optional[ExportOptions],
    window_id: Optional[str],
    launcher: Optional[BrowserLauncher],
    scheduler: Optional[Scheduler],
    temp_dir: Optional[Path],
) -> PreviewResult:
    snapshot = snapshot.copy()
    warnings: List[str] = []
    try:
        html, warnings = render_preview(snapshot, options, window_id)
        url, path = open_preview(html, launcher=launcher, scheduler=scheduler, temp_dir=temp_dir)
    except PreviewBlocked as exc:
        logger.warning("Preview blocked")
        return PreviewResult(success=False, blocked=True, error=str(exc), warnings=warnings)
    except FaceplateError as exc:
        logger.error("Preview failed: %s", exc)
        return PreviewResult(success=False, error=str(exc), warnings=warnings)
    except Exception as exc:
        logger.exception("Unexpected error during preview")
        return PreviewResult(success=False, error=f"Preview failed: {exc}", warnings=warnings)
    return PreviewResult(success=True, url=url, path=path, warnings=warnings)


def preview_window(
    snapshot: ProjectSnapshot,
    window_id: str,
    options: Optional[ExportOptions] = None,
    *,
    launcher: Optional[BrowserLauncher] = None,
    scheduler: Optional[Scheduler] = None,
    temp_dir: Optional[Path] = None,
) -> PreviewResult:
    return _run_preview(snapshot, options, window_id, launcher, scheduler, temp_dir)


def preview_project(
    snapshot: ProjectSnapshot,
    options: Optional[ExportOptions] = None,
    *,
    launcher: Optional[BrowserLauncher] = None,
    scheduler: Optional[Scheduler] = None,
    temp_dir: Optional[Path] = None,
) -> PreviewResult:
    """Preview every exported window; several windows share one tabbed document."""

    return _run_preview(snapshot, options, None, launcher, scheduler, temp_dir)
