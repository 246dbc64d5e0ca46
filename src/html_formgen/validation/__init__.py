"""
Rule-based validation.

ValidationEngine evaluates rule specs (``name:param1,param2``) through an
injectable RuleTable and produces an error index keyed by field name.
"""

from .exceptions import UnknownRule
from .rule_spec import RuleSpec, parse_rules, rule_name, split_rules
from .rules import DEFAULT_RULES, IMPLICIT_RULES
from .messages import MessageCatalog, format_attribute_label
from .rule_table import RuleTable, default_rule_table
from .engine import ValidationEngine, PendingValidation, RANGE_FROM_SUFFIX, RANGE_TO_SUFFIX

__all__ = [
    "UnknownRule",
    "RuleSpec",
    "parse_rules",
    "rule_name",
    "split_rules",
    "DEFAULT_RULES",
    "IMPLICIT_RULES",
    "MessageCatalog",
    "format_attribute_label",
    "RuleTable",
    "default_rule_table",
    "ValidationEngine",
    "PendingValidation",
    "RANGE_FROM_SUFFIX",
    "RANGE_TO_SUFFIX",
]
