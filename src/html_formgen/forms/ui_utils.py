"""
UI utilities for html-formgen.

Simple formatting and markup helpers used across the forms layer.
"""

from html import escape
from typing import Any, Optional

from .field_constants import CONSTANTS


def to_valid_html_id(value: str, replace: str = CONSTANTS.HTML_ID_REPLACEMENT) -> str:
    """Replace characters not allowed in an id: 'a b[c]' -> 'a-b-c-'"""
    return "".join(replace if char in CONSTANTS.HTML_ID_INVALID_CHARACTERS else char for char in value)


def name_to_id(name: str) -> str:
    """Derive an id from a submission name: 'tags[]' -> 'tags__'"""
    return name.replace("[", CONSTANTS.ID_BRACKET_REPLACEMENT).replace("]", CONSTANTS.ID_BRACKET_REPLACEMENT)


def render_attribute(name: str, value: Any) -> str:
    """Render ' name="value"' with the value escaped, or '' for None/empty values."""
    if value is None or value == "":
        return ""
    return f' {name}="{escape(str(value), quote=True)}"'


def render_flag(name: str, enabled: bool) -> str:
    """Render a boolean attribute: ' required' or ''."""
    return f" {name}" if enabled else ""


def data_attribute_name(name: str) -> str:
    """Prefix a custom data attribute: 'answer' -> 'data-answer'"""
    return name if name.startswith(CONSTANTS.DATA_ATTRIBUTE_PREFIX) else f"{CONSTANTS.DATA_ATTRIBUTE_PREFIX}{name}"


def escape_text(value: Optional[Any]) -> str:
    return "" if value is None else escape(str(value), quote=True)
