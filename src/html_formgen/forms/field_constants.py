"""
Field constants for eliminating magic strings throughout the field classes.

Centralizes class names, attribute names and markup fragments shared by
primitive fields, composites and the form coordinator.
"""

from dataclasses import dataclass
from typing import FrozenSet, Tuple


@dataclass(frozen=True)
class FieldConstants:
    """
    Centralized constants for field implementations.

    Categories:
    - CSS classes the library adds on its own
    - Attribute names used by propagation and render copy-down
    - Markup fragments
    """

    # Classes added by the library
    INVALID_CLASS: str = "invalid"
    REQUIRED_CLASS: str = "required"
    BUTTON_CLASS: str = "btn"
    ADDRESS_CLASS: str = "address"
    INVALIDATIONS_CLASS: str = "invalidations"
    ERROR_CLASS: str = "error"

    # Rules the fields register themselves
    REQUIRED_RULE: str = "required"
    NAME_RULE: str = "alpha_dash"
    CLASS_RULE: str = "alpha_dash"
    NUMERIC_RULE: str = "required|numeric"
    BOOLEAN_RULE: str = "boolean"
    DISABLED_RULE: str = "in:disabled,readonly"

    # Identity
    ID_BRACKET_REPLACEMENT: str = "_"
    HTML_ID_REPLACEMENT: str = "-"
    HTML_ID_INVALID_CHARACTERS: str = " \\\r\n\t;,./&|[]{}+=`~!@#$%^*()'\""
    ARRAY_NAME_SUFFIX: str = "[]"
    DATA_ATTRIBUTE_PREFIX: str = "data-"

    # Style attributes
    WIDTH_ATTRIBUTE: str = "width"
    DISPLAY_ATTRIBUTE: str = "display"
    DISPLAY_NONE: str = "none"
    PIXEL_SUFFIX: str = "px"

    # Input types that accept a placeholder attribute
    PLACEHOLDER_TYPES: FrozenSet[str] = frozenset({
        "text", "search", "url", "tel", "email", "password"
    })

    # Attributes a composite never copies down to its children at render time
    COMPOSITE_EXCLUDED_ATTRIBUTES: FrozenSet[str] = frozenset({
        "type", "name", "id", "value", "values", "label", "labels",
        "selected", "posted", "required", "invalidations",
    })

    # Composite defaults
    DATE_RANGE_LABELS: Tuple[str, str] = ("Between", "and")

    # Markup
    LABEL_SUFFIX: str = " "
    INVALIDATION_SEPARATOR: str = "<br/>\n"


# Create a singleton instance for easy access throughout the codebase
CONSTANTS = FieldConstants()
