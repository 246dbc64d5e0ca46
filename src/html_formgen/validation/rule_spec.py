"""
Rule specs: a rule name plus an ordered parameter list.

Textual form is ``name:param1,param2``. Parameters are split as CSV so
quoted values may contain commas; the ``regex`` rule keeps its whole
parameter text because patterns routinely contain commas.
"""

import csv
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

RULE_SEPARATOR = "|"
PARAMETER_DELIMITER = ":"
RAW_PARAMETER_RULES = frozenset({"regex"})

RuleInput = Union[str, "RuleSpec", Sequence[Union[str, "RuleSpec"]]]


def rule_name(rule: Union[str, "RuleSpec"]) -> str:
    """Strip everything from the first parameter delimiter: 'between:4,8' -> 'between'."""
    if isinstance(rule, RuleSpec):
        return rule.name
    return rule.split(PARAMETER_DELIMITER, 1)[0].strip()


def _split_parameters(text: str) -> Tuple[str, ...]:
    if text == "":
        return ()
    row = next(csv.reader([text], skipinitialspace=True))
    return tuple(row)


@dataclass(frozen=True)
class RuleSpec:
    """A parsed rule: ``RuleSpec('between', ('4', '8'))``."""
    name: str
    parameters: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "RuleSpec":
        text = text.strip()
        if PARAMETER_DELIMITER not in text:
            return cls(text)
        name, raw = text.split(PARAMETER_DELIMITER, 1)
        name = name.strip()
        if name in RAW_PARAMETER_RULES:
            return cls(name, (raw,))
        return cls(name, _split_parameters(raw))

    def with_parameters(self, parameters: Iterable[Any]) -> "RuleSpec":
        return RuleSpec(self.name, tuple(str(p) for p in parameters))

    def __str__(self) -> str:
        if not self.parameters:
            return self.name
        return f"{self.name}{PARAMETER_DELIMITER}{','.join(self.parameters)}"


def split_rules(rules: RuleInput) -> List[Union[str, RuleSpec]]:
    """Split a pipe-delimited string into rule texts; sequences are copied as-is."""
    if isinstance(rules, RuleSpec):
        return [rules]
    if isinstance(rules, str):
        return [rule for rule in (part.strip() for part in rules.split(RULE_SEPARATOR)) if rule]
    return list(rules)


def parse_rules(rules: RuleInput, parameters: Optional[Any] = None) -> List[RuleSpec]:
    """
    Normalize any accepted rule input into RuleSpec objects.

    Args:
        rules: ``'required|min:5'``, a list of rule texts, RuleSpecs, or a mix
        parameters: Parameters for a single rule given by name only. A scalar is
            wrapped into a one-element list.

    Returns:
        List of RuleSpec in the given order

    Raises:
        ValueError: If parameters are given together with more than one rule
    """
    specs = [rule if isinstance(rule, RuleSpec) else RuleSpec.parse(rule) for rule in split_rules(rules)]
    if parameters is None:
        return specs

    if not isinstance(parameters, (list, tuple)):
        parameters = [parameters]
    if len(specs) != 1:
        raise ValueError(
            f"Parameters {list(parameters)!r} can only be given together with a single rule, "
            f"got {[str(spec) for spec in specs]}"
        )
    return [specs[0].with_parameters(parameters)]
