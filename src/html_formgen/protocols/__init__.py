"""
Field protocol definitions and configuration hooks.

ABC-based field contracts that replace duck typing with explicit,
fail-loud inheritance-based architecture.
"""

from .field_protocols import (
    AttributeSet,
    AttributePropagation,
    ValidationTarget,
    OptionsCapable,
)
from .form_config import FormGenConfig, set_form_config, get_form_config

__all__ = [
    "AttributeSet",
    "AttributePropagation",
    "ValidationTarget",
    "OptionsCapable",
    "FormGenConfig",
    "set_form_config",
    "get_form_config",
]
