"""
Field tree and form coordination.

FieldNode and CompositeField with attribute broadcasting, the field registry,
FieldFactory and the Form coordinator that runs validation passes.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .field_node import FieldNode, INPUT_OVERRULE_POST, INPUT_SELECTED_INITIALLY_ONLY
    from .composite import CompositeField
    from .broadcaster import AttributeBroadcaster
    from .field_factory import FieldFactory
    from .field_registry import (
        FieldMeta,
        FIELD_IMPLEMENTATIONS,
        get_field_class,
    )
    from .form import Form
    from .exceptions import InvalidAttributeValue, RenderPrecondition
    from .field_constants import CONSTANTS, FieldConstants

_EXPORTS = {
    "FieldNode": ("html_formgen.forms.field_node", "FieldNode"),
    "INPUT_OVERRULE_POST": ("html_formgen.forms.field_node", "INPUT_OVERRULE_POST"),
    "INPUT_SELECTED_INITIALLY_ONLY": ("html_formgen.forms.field_node", "INPUT_SELECTED_INITIALLY_ONLY"),
    "CompositeField": ("html_formgen.forms.composite", "CompositeField"),
    "AttributeBroadcaster": ("html_formgen.forms.broadcaster", "AttributeBroadcaster"),
    "FieldFactory": ("html_formgen.forms.field_factory", "FieldFactory"),
    "FieldMeta": ("html_formgen.forms.field_registry", "FieldMeta"),
    "FIELD_IMPLEMENTATIONS": ("html_formgen.forms.field_registry", "FIELD_IMPLEMENTATIONS"),
    "get_field_class": ("html_formgen.forms.field_registry", "get_field_class"),
    "Form": ("html_formgen.forms.form", "Form"),
    "InvalidAttributeValue": ("html_formgen.forms.exceptions", "InvalidAttributeValue"),
    "RenderPrecondition": ("html_formgen.forms.exceptions", "RenderPrecondition"),
    "CONSTANTS": ("html_formgen.forms.field_constants", "CONSTANTS"),
    "FieldConstants": ("html_formgen.forms.field_constants", "FieldConstants"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
