"""
Injectable rule table.

The validation engine only depends on this interface: a mapping from rule
name to predicate plus a message resolver. The default table is built once
per (locale, messages_dir) from the statically declared DEFAULT_RULES.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, FrozenSet, List, Mapping, Optional, Sequence
import logging

from html_formgen.core.value_utils import is_blank
from html_formgen.protocols import get_form_config
from .exceptions import UnknownRule
from .messages import MessageCatalog
from .rule_spec import RuleSpec, rule_name
from .rules import DEFAULT_RULES, IMPLICIT_RULES, RulePredicate

logger = logging.getLogger(__name__)

MessageResolver = Callable[[str, str, Sequence[str]], str]


@dataclass(frozen=True)
class RuleTable:
    """
    Rule name -> predicate mapping plus a message template resolver.

    Attributes:
        rules: Predicates with the signature ``(value, parameters) -> bool``
        resolve_message: ``(rule_name, field_label, parameters) -> str``
        implicit_rules: Rules that run on blank values; others pass on blank input
    """
    rules: Mapping[str, RulePredicate]
    resolve_message: MessageResolver
    implicit_rules: FrozenSet[str] = field(default_factory=lambda: IMPLICIT_RULES)

    def __contains__(self, rule: object) -> bool:
        return isinstance(rule, (str, RuleSpec)) and rule_name(rule) in self.rules

    def names(self) -> List[str]:
        return sorted(self.rules)

    def ensure_known(self, specs: Sequence[RuleSpec]) -> None:
        """
        Fail loud on the first spec whose rule is not in the table.

        Raises:
            UnknownRule: Naming the offending rule
        """
        for spec in specs:
            if spec.name not in self.rules:
                raise UnknownRule(str(spec))

    def check(self, spec: RuleSpec, value: Any) -> bool:
        """
        Evaluate one rule spec against a value.

        Raises:
            UnknownRule: If the rule is not in the table
        """
        predicate = self.rules.get(spec.name)
        if predicate is None:
            raise UnknownRule(str(spec))
        if spec.name not in self.implicit_rules and is_blank(value):
            return True
        try:
            return bool(predicate(value, spec.parameters))
        except (IndexError, ValueError) as e:
            # malformed parameters (e.g. 'between:a') count as a failed rule
            logger.warning(f"Rule '{spec}' could not be evaluated: {e}")
            return False

    def message(self, rule: str, label: str, parameters: Sequence[str] = ()) -> str:
        return self.resolve_message(rule, label, parameters)


@lru_cache(maxsize=None)
def _build_default_rule_table(locale: str, messages_dir: Optional[str]) -> RuleTable:
    catalog = MessageCatalog.load(locale, messages_dir)
    logger.debug(f"Built default rule table with {len(DEFAULT_RULES)} rules (locale={catalog.locale})")
    return RuleTable(rules=dict(DEFAULT_RULES), resolve_message=catalog.resolve)


def default_rule_table() -> RuleTable:
    """Get the default rule table for the configured locale."""
    config = get_form_config()
    return _build_default_rule_table(config.locale, config.messages_dir)
