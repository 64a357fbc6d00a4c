"""Command line entry point: ``faceplate validate|export|preview SNAPSHOT.json``."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from pathlib import Path
from typing import Callable, List, Optional

from .core.errors import FaceplateError
from .core.models import ProjectSnapshot
from .core.storage import load_snapshot
from .core.tree import resolve_window_elements
from .export.bundle import archive_name, export_bundle, select_windows
from .export.delivery import DirectoryAccess, FixedDirectoryAccess, UnsupportedDirectoryAccess
from .export.options import ExportOptions
from .export.preview import BrowserLauncher, preview_project, preview_window, schedule_later
from .export.validator import Invalid, validate_elements
from .logging_config import setup_logging
from .settings import SettingsManager

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="faceplate", description="Export plugin control surfaces as web bundles.")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    parser.add_argument("--log-file", help="also write the log to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("snapshot", type=Path, help="project snapshot (JSON)")
        p.add_argument("--window", dest="window_id", help="only this window id")
        p.add_argument(
            "--include-developer",
            action="store_true",
            default=None,
            help="also process developer windows",
        )

    p_validate = sub.add_parser("validate", help="check a project without generating anything")
    add_common(p_validate)

    p_export = sub.add_parser("export", help="write a bundle")
    add_common(p_export)
    p_export.add_argument("--delivery", choices=["archive", "folder"])
    p_export.add_argument("--target", choices=["host", "standalone"])
    p_export.add_argument("-o", "--output", type=Path, help="archive path or output directory")
    p_export.add_argument("--pick-folder", action="store_true", help="choose the destination with a dialog")
    p_export.add_argument("--no-optimize", dest="optimize", action="store_false", default=None)
    p_export.add_argument("--no-responsive", dest="responsive", action="store_false", default=None)
    p_export.add_argument("--no-custom-scrollbars", dest="custom_scrollbars", action="store_false", default=None)

    p_preview = sub.add_parser("preview", help="open the project in a browser")
    add_common(p_preview)
    p_preview.add_argument("--no-optimize", dest="optimize", action="store_false", default=None)
    p_preview.add_argument("--no-responsive", dest="responsive", action="store_false", default=None)
    p_preview.add_argument("--qt", action="store_true", help="open through the desktop services (needs the gui extra)")
    return parser


def options_from_args(args: argparse.Namespace, settings: SettingsManager) -> ExportOptions:
    options = settings.export_settings().to_options()
    if args.include_developer is not None:
        options.include_developer_windows = args.include_developer
    if getattr(args, "optimize", None) is not None:
        options.optimize_assets = args.optimize
    if getattr(args, "responsive", None) is not None:
        options.responsive_scaling = args.responsive
    if getattr(args, "custom_scrollbars", None) is not None:
        options.custom_scrollbars = args.custom_scrollbars
    if getattr(args, "delivery", None):
        options.delivery = args.delivery
    if getattr(args, "target", None):
        options.target = args.target
    return options


def cmd_validate(snapshot: ProjectSnapshot, args: argparse.Namespace, options: ExportOptions) -> int:
    windows = select_windows(snapshot, options, args.window_id)
    known_ids = {w.id for w in windows}
    failed = False
    for window in windows:
        result = validate_elements(resolve_window_elements(snapshot, window), known_window_ids=known_ids)
        status = "invalid" if isinstance(result, Invalid) else "ok"
        print(f"{window.name}: {status}")
        for error in result.errors:
            print(f"  error: {error.describe()}")
        for warning in result.warnings:
            print(f"  warning: {warning.describe()}")
        failed = failed or isinstance(result, Invalid)
    return EXIT_FAILED if failed else EXIT_OK


def _directory_access(args: argparse.Namespace, settings: SettingsManager) -> DirectoryAccess:
    if args.output is not None:
        return FixedDirectoryAccess(args.output)
    if args.pick_folder:
        from .ui.dialogs import QtDirectoryAccess

        return QtDirectoryAccess(start_dir=settings.get("last_export_dir"))
    return UnsupportedDirectoryAccess()


def cmd_export(snapshot: ProjectSnapshot, args: argparse.Namespace, options: ExportOptions, settings: SettingsManager) -> int:
    if options.delivery == "folder":
        result = export_bundle(
            snapshot,
            options,
            window_id=args.window_id,
            directory_access=_directory_access(args, settings),
        )
    else:
        target = args.output
        if target is None and args.pick_folder:
            from .ui.dialogs import ask_archive_path

            target = ask_archive_path(suggested_name=archive_name(snapshot))
            if target is None:
                print("Export cancelled.")
                return EXIT_FAILED
        if target is None:
            target = Path.cwd() / archive_name(snapshot)
        elif target.is_dir():
            target = target / archive_name(snapshot)
        result = export_bundle(snapshot, options, window_id=args.window_id, archive_path=target)

    for warning in result.warnings:
        print(f"warning: {warning}")
    if result.cancelled:
        print("Export cancelled.")
        return EXIT_FAILED
    if not result.success:
        print(f"Export failed: {result.error}", file=sys.stderr)
        return EXIT_FAILED
    if result.output_dir is not None:
        settings.set("last_export_dir", str(result.output_dir))
    print(f"Exported {result.file_count} file(s) for {', '.join(result.windows)} to {result.output_dir}")
    if result.size_savings is not None:
        print(f"SVG savings: {result.size_savings.savings_percent:.1f}%")
    return EXIT_OK


def cmd_preview(snapshot: ProjectSnapshot, args: argparse.Namespace, options: ExportOptions) -> int:
    launcher: Optional[BrowserLauncher] = None
    if args.qt:
        from .ui.dialogs import QtBrowserLauncher

        launcher = QtBrowserLauncher()

    # The preview file is removed by a timer; stay alive until it has run.
    timers: List[threading.Timer] = []

    def scheduler(delay: float, callback: Callable[[], None]) -> None:
        timers.append(schedule_later(delay, callback))

    if args.window_id:
        result = preview_window(snapshot, args.window_id, options, launcher=launcher, scheduler=scheduler)
    else:
        result = preview_project(snapshot, options, launcher=launcher, scheduler=scheduler)
    for warning in result.warnings:
        print(f"warning: {warning}")
    if result.success:
        print(f"Preview opened: {result.url}")
    else:
        print(f"Preview failed: {result.error}", file=sys.stderr)
    for timer in timers:
        timer.join()
    return EXIT_OK if result.success else EXIT_FAILED


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    try:
        snapshot = load_snapshot(args.snapshot)
    except (OSError, ValueError, FaceplateError) as exc:
        print(f"Cannot load {args.snapshot}: {exc}", file=sys.stderr)
        return EXIT_USAGE
    logger.debug("Loaded %s with %d window(s)", args.snapshot, len(snapshot.windows))

    settings = SettingsManager()
    options = options_from_args(args, settings)
    try:
        if args.command == "validate":
            return cmd_validate(snapshot, args, options)
        if args.command == "export":
            return cmd_export(snapshot, args, options, settings)
        return cmd_preview(snapshot, args, options)
    except FaceplateError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
