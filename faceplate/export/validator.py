"""Static checks run over a window's elements before anything is generated."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Collection, Dict, List, Optional, Sequence, Union

from ..core.elements import Button, Element
from ..core.names import normalize_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationError:
    element_id: str
    element_name: str
    field: str
    message: str

    def describe(self) -> str:
        return f"• {self.element_name or '(unnamed)'}: {self.message}"


@dataclass(frozen=True)
class ValidationWarning:
    element_id: str
    element_name: str
    field: str
    message: str

    def describe(self) -> str:
        return f"{self.element_name or '(unnamed)'}: {self.message}"


@dataclass
class Valid:
    warnings: List[ValidationWarning] = field(default_factory=list)
    valid = True

    @property
    def errors(self) -> List[ValidationError]:
        return []


@dataclass
class Invalid:
    errors: List[ValidationError]
    warnings: List[ValidationWarning] = field(default_factory=list)
    valid = False


ValidationResult = Union[Valid, Invalid]


def validate_elements(
    elements: Sequence[Element],
    *,
    known_window_ids: Optional[Collection[str]] = None,
) -> ValidationResult:
    """Validate one window's resolved element list.

    Errors block the export, warnings are reported and never block.
    ``known_window_ids`` are the windows taking part in the export; a
    navigation button aimed anywhere else gets a warning. When it is None
    the navigation check is skipped.
    """

    errors: List[ValidationError] = []
    warnings: List[ValidationWarning] = []
    by_id = {el.id: el for el in elements}
    seen: Dict[str, Element] = {}

    for el in elements:
        if not el.name or not el.name.strip():
            errors.append(
                ValidationError(el.id, el.name or "(unnamed)", "name", "Element name is required for ID generation")
            )
        else:
            normalized = normalize_name(el.name)
            first = seen.get(normalized)
            if first is not None:
                errors.append(
                    ValidationError(
                        el.id,
                        el.name,
                        "name",
                        f"Duplicate element name '{el.name}' collides with '{first.name}' "
                        f"(id {first.id}) as '#{normalized}' - IDs must be unique",
                    )
                )
            else:
                seen[normalized] = el

        if el.parent_id and el.parent_id not in by_id:
            errors.append(
                ValidationError(
                    el.id,
                    el.name,
                    "parent_id",
                    f"Parent '{el.parent_id}' does not exist in this window",
                )
            )

        if el.bindable and not (el.parameter_id or "").strip():
            warnings.append(
                ValidationWarning(
                    el.id,
                    el.name,
                    "parameter_id",
                    "No parameter ID set; the element name will be used as the parameter ID",
                )
            )

        if el.width <= 0 or el.height <= 0:
            warnings.append(
                ValidationWarning(
                    el.id,
                    el.name,
                    "width" if el.width <= 0 else "height",
                    f"Element has a non-positive size ({el.width}x{el.height}) and will not be visible",
                )
            )

        if (
            known_window_ids is not None
            and isinstance(el, Button)
            and el.action == "navigate-window"
            and el.target_window_id not in known_window_ids
        ):
            warnings.append(
                ValidationWarning(
                    el.id,
                    el.name,
                    "target_window_id",
                    f"Navigation target '{el.target_window_id}' is not part of this export",
                )
            )

    if errors:
        logger.debug("Validation failed with %d error(s), %d warning(s)", len(errors), len(warnings))
        return Invalid(errors=errors, warnings=warnings)
    return Valid(warnings=warnings)


def format_errors(errors: Sequence[ValidationError]) -> str:
    lines = "\n".join(err.describe() for err in errors)
    return f"Please fix these issues before exporting:\n\n{lines}"
