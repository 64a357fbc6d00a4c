"""Getting a finished bundle onto disk: ZIP archive or plain folder."""

from __future__ import annotations

import io
import logging
import os
import shutil
import tempfile
import zipfile
from pathlib import Path, PurePosixPath
from typing import Dict, Mapping, Optional, Protocol, Union

from ..core.errors import BundleIOError

logger = logging.getLogger(__name__)

FileData = Union[str, bytes]

# Fixed timestamp so identical bundles produce identical archives.
ARCHIVE_DATE_TIME = (1980, 1, 1, 0, 0, 0)


class DirectoryAccess(Protocol):
    """Source of a writable output directory, usually a folder chooser."""

    def supported(self) -> bool:
        ...

    def request_directory(self) -> Optional[Path]:
        """Return the chosen directory, or ``None`` when the user cancels."""
        ...


class UnsupportedDirectoryAccess:
    """Stand-in for environments that cannot hand out a directory."""

    def supported(self) -> bool:
        return False

    def request_directory(self) -> Optional[Path]:
        return None


class FixedDirectoryAccess:
    """Always answers with one directory, e.g. a ``--output`` argument."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def supported(self) -> bool:
        return True

    def request_directory(self) -> Optional[Path]:
        return self.path


def as_bytes(data: FileData) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def _safe_relative(name: str) -> PurePosixPath:
    path = PurePosixPath(name)
    if path.is_absolute() or ".." in path.parts or not path.parts:
        raise BundleIOError(f"Refusing to write outside the bundle: {name}")
    return path


def build_archive(files: Mapping[str, FileData]) -> bytes:
    """Deflated ZIP of ``files`` held in memory; byte-identical for identical input."""

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, data in files.items():
                info = zipfile.ZipInfo(str(_safe_relative(name)), date_time=ARCHIVE_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                zf.writestr(info, as_bytes(data))
    except (OSError, zipfile.BadZipFile, ValueError) as exc:
        raise BundleIOError(f"Could not build archive: {exc}") from exc
    return buffer.getvalue()


def save_archive(data: bytes, path: Union[str, Path]) -> Path:
    target = Path(path)
    if target.suffix.lower() != ".zip":
        target = target.with_name(target.name + ".zip")
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    except OSError as exc:
        raise BundleIOError(f"Could not save archive to {target}: {exc}") from exc
    logger.info("Archive saved to %s (%d bytes)", target, len(data))
    return target


def write_folder(files: Mapping[str, FileData], root: Union[str, Path]) -> Path:
    """Write ``files`` below ``root`` as one unit.

    Everything is staged in a temporary directory inside ``root`` first and
    then moved into place. If any step fails, files already moved are
    restored (or removed) and the staging directory is deleted.
    """

    root = Path(root)
    try:
        root.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=".faceplate-staging-", dir=root))
    except OSError as exc:
        raise BundleIOError(f"Cannot write to {root}: {exc}") from exc

    moved: Dict[Path, Optional[Path]] = {}
    backups = staging / ".backup"
    try:
        for name, data in files.items():
            staged = staging / _safe_relative(name)
            staged.parent.mkdir(parents=True, exist_ok=True)
            staged.write_bytes(as_bytes(data))
        for name in files:
            relative = _safe_relative(name)
            final = root / relative
            final.parent.mkdir(parents=True, exist_ok=True)
            backup = None
            if final.exists():
                backup = backups / relative
                backup.parent.mkdir(parents=True, exist_ok=True)
                os.replace(final, backup)
            moved[final] = backup
            os.replace(staging / relative, final)
    except (OSError, BundleIOError) as exc:
        _roll_back(moved)
        shutil.rmtree(staging, ignore_errors=True)
        if isinstance(exc, BundleIOError):
            raise
        raise BundleIOError(f"Writing bundle to {root} failed: {exc}") from exc
    shutil.rmtree(staging, ignore_errors=True)
    logger.info("Wrote %d file(s) to %s", len(files), root)
    return root


def _roll_back(moved: Dict[Path, Optional[Path]]) -> None:
    for final, backup in reversed(list(moved.items())):
        try:
            if final.exists():
                final.unlink()
            if backup is not None and backup.exists():
                os.replace(backup, final)
        except OSError as exc:
            logger.error("Rollback of %s failed: %s", final, exc)
