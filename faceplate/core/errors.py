"""Exceptions raised by the export pipeline."""

from __future__ import annotations


class FaceplateError(Exception):
    """Base class for every error raised by faceplate."""


class UnknownElementKind(FaceplateError):
    """A snapshot contains an element kind that is not in the catalog."""

    def __init__(self, kind: str, element_id: str = "") -> None:
        self.kind = kind
        self.element_id = element_id
        where = f" (element {element_id})" if element_id else ""
        super().__init__(f"Unknown element kind '{kind}'{where}")


class GenerationFailure(FaceplateError):
    """A generator met an element kind it has no case for.

    Unreachable while the dispatch tables cover the whole catalog.
    """


class BundleIOError(FaceplateError):
    """Archive assembly or a filesystem write failed."""


class PreviewBlocked(FaceplateError):
    """The browser refused to open the preview document."""


class InvalidSvg(FaceplateError):
    """SVG text could not be parsed."""


class ExportBlocked(FaceplateError):
    """Validation failed; the message lists every error."""
