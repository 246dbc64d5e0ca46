"""
Rule-based validation engine.

Accumulates rules and data per field name, evaluates them through an
injected RuleTable and exposes an error index keyed by field name.

Lifecycle:
    engine = ValidationEngine()
    engine.add_validation(field, "required|min:5")   # repeated calls merge
    engine.passes()                                   # idempotent
    engine.get_attribute_errors(field.name)
    engine.reset()                                    # ready for the next field
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import logging

from html_formgen.protocols import ValidationTarget
from .messages import MessageCatalog, format_attribute_label
from .rule_spec import RuleInput, RuleSpec, parse_rules
from .rule_table import RuleTable, default_rule_table

logger = logging.getLogger(__name__)

# Composite range fields carry their rule failures on children named <name>-from / <name>-to
RANGE_FROM_SUFFIX = "-from"
RANGE_TO_SUFFIX = "-to"


@dataclass
class PendingValidation:
    """Rules and data registered for one field name."""
    data: Any = None                                   # Value under test, None until supplied
    rules: List[RuleSpec] = field(default_factory=list)
    message: Optional[str] = None                      # Overrides the catalogue message
    label: str = ""                                    # Human label used in messages

    def merge(self, rules: List[RuleSpec], data: Any = None, message: Optional[str] = None) -> None:
        """Append rules not yet present by name; never replace captured data/message with None."""
        present = {rule.name for rule in self.rules}
        for rule in rules:
            if rule.name not in present:
                self.rules.append(rule)
                present.add(rule.name)
        if self.data is None and data is not None:
            self.data = data
        if self.message is None and message is not None:
            self.message = message

    def rule_texts(self) -> List[str]:
        return [str(rule) for rule in self.rules]


class ValidationEngine:
    """
    Validation session over an injected rule table.

    Example:
        engine = ValidationEngine()
        engine.add_validation("email", "required|email")
        engine.passes()                          # False, no data was captured for 'email'
        engine.get_attribute_errors("email")     # ['The email field is required.']

        engine.validate("age", "12", "min:18")   # one-shot check, False
    """

    def __init__(self, rule_table: Optional[RuleTable] = None):
        self._rule_table = rule_table
        self._pending: Dict[str, PendingValidation] = {}
        self._errors: Dict[str, List[str]] = {}
        self._failures: Dict[str, List[RuleSpec]] = {}
        self._immediate_errors: Dict[str, List[str]] = {}
        self._immediate_failures: Dict[str, List[RuleSpec]] = {}

    @property
    def rule_table(self) -> RuleTable:
        if self._rule_table is None:
            self._rule_table = default_rule_table()
        return self._rule_table

    def add_validation(self, target: Union[str, ValidationTarget], rules: RuleInput,
                       parameters: Optional[Any] = None, message: Optional[str] = None) -> "ValidationEngine":
        """
        Register rules for a field.

        Args:
            target: Field name, or a ValidationTarget whose name and submitted data are captured
            rules: ``'required|min:5'``, a list of rule texts or RuleSpecs
            parameters: Parameters for a single rule given by name; scalars are wrapped
            message: Custom message used for every failing rule of this field

        Returns:
            self

        Raises:
            UnknownRule: If any rule is not in the rule table (nothing is registered)
            TypeError: If target is neither a name nor a ValidationTarget
        """
        if isinstance(target, ValidationTarget):
            name, data = target.name, target.posted
        elif isinstance(target, str):
            name, data = target, None
        else:
            raise TypeError(
                f"Cannot add validation to {type(target).__name__}. "
                f"Pass a field name or a ValidationTarget."
            )

        specs = parse_rules(rules, parameters)
        self.rule_table.ensure_known(specs)

        entry = self._pending.get(name)
        if entry is None:
            self._pending[name] = PendingValidation(
                data=data, rules=[], message=message, label=format_attribute_label(name)
            )
            self._pending[name].merge(specs)
        else:
            entry.merge(specs, data, message)

        logger.debug(f"Validation for '{name}': {self._pending[name].rule_texts()}")
        return self

    def validate(self, name: str, value: Any, rules: RuleInput, message: Optional[str] = None) -> bool:
        """
        Evaluate rules against a value immediately.

        Meant for checking a field's own construction parameters. Failures
        accumulate under ``name`` until reset(); the return value only
        reflects this call.

        Raises:
            UnknownRule: If any rule is not in the rule table
        """
        specs = parse_rules(rules)
        self.rule_table.ensure_known(specs)

        failed = self._evaluate(name, value, specs, message, format_attribute_label(name))
        for spec, error in failed:
            self._immediate_failures.setdefault(name, []).append(spec)
            self._immediate_errors.setdefault(name, []).append(error)
        return not failed

    def passes(self) -> bool:
        """
        Evaluate every pending entry.

        Recomputes the error index from scratch, so repeated calls give the
        same result. Errors recorded by validate() are kept.

        Returns:
            True when no rule failed
        """
        self._errors = {}
        self._failures = {}
        for name, entry in self._pending.items():
            for spec, error in self._evaluate(name, entry.data, entry.rules, entry.message, entry.label):
                self._failures.setdefault(name, []).append(spec)
                self._errors.setdefault(name, []).append(error)

        errors = self.get_errors()
        if errors:
            logger.debug(f"Validation failed for {list(errors)}")
        return not errors

    def is_valid(self) -> bool:
        return self.passes()

    def fails(self) -> bool:
        return not self.passes()

    def _evaluate(self, name: str, value: Any, specs: List[RuleSpec], message: Optional[str], label: str):
        failed = []
        for spec in specs:
            if self.rule_table.check(spec, value):
                continue
            if message:
                error = MessageCatalog.render(message, spec.name, label, spec.parameters)
            else:
                error = self.rule_table.message(spec.name, label, spec.parameters)
            failed.append((spec, error))
        return failed

    def get_errors(self) -> Dict[str, List[str]]:
        """All errors keyed by field name: validate() errors first, then the last passes()."""
        merged: Dict[str, List[str]] = {name: list(errors) for name, errors in self._immediate_errors.items()}
        for name, errors in self._errors.items():
            merged.setdefault(name, []).extend(errors)
        return merged

    def get_attribute_errors(self, name: str) -> List[str]:
        """
        Errors of one field.

        Falls back to ``<name>-from`` and then ``<name>-to`` so a composite
        range answers for the children that carry the failures.
        """
        errors = self.get_errors()
        for key in (name, name + RANGE_FROM_SUFFIX, name + RANGE_TO_SUFFIX):
            if key in errors:
                return errors[key]
        return []

    def get_failed_rules(self, name: str) -> List[RuleSpec]:
        return self._immediate_failures.get(name, []) + self._failures.get(name, [])

    def get_validations(self) -> Dict[str, PendingValidation]:
        return dict(self._pending)

    def reset(self) -> "ValidationEngine":
        """Clear pending rules and all errors; the rule table is kept."""
        self._pending = {}
        self._errors = {}
        self._failures = {}
        self._immediate_errors = {}
        self._immediate_failures = {}
        return self
