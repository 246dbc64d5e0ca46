"""
html-formgen: server-side form fields with attribute propagation and rule based validation.

Build a tree of form fields, cascade shared presentation attributes from
composite fields down to the fields they are made of, and validate a
submission against a declarative rule language.

Architecture:
- Tier 1 (Core): AttributeStore and value helpers
- Tier 2 (Protocols): Field ABCs, submission protocol and configuration
- Tier 3 (IO / Validation): SubmissionContext, rule table and ValidationEngine
- Tier 4 (Forms / Fields): FieldNode, CompositeField, concrete kinds, Form

Key Features:
- Submission snapshot passed explicitly into every field
- Additive attribute broadcasting from composites to their children
- Injectable rule table with YAML message catalogues per locale
- Fail-loud rule registration, errors as data for submissions
"""

from __future__ import annotations

import importlib

__version__ = "0.1.0"

_EXPORTS = {
    "FieldFactory": ("html_formgen.forms.field_factory", "FieldFactory"),
    "Form": ("html_formgen.forms.form", "Form"),
    "FieldNode": ("html_formgen.forms.field_node", "FieldNode"),
    "CompositeField": ("html_formgen.forms.composite", "CompositeField"),
    "SubmissionContext": ("html_formgen.io.submission", "SubmissionContext"),
    "UploadedFile": ("html_formgen.io.submission", "UploadedFile"),
    "ValidationEngine": ("html_formgen.validation.engine", "ValidationEngine"),
    "RuleTable": ("html_formgen.validation.rule_table", "RuleTable"),
    "UnknownRule": ("html_formgen.validation.exceptions", "UnknownRule"),
    "FormGenConfig": ("html_formgen.protocols.form_config", "FormGenConfig"),
    "set_form_config": ("html_formgen.protocols.form_config", "set_form_config"),
    "get_form_config": ("html_formgen.protocols.form_config", "get_form_config"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["__version__"] + list(_EXPORTS.keys())
