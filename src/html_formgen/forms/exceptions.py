"""Field exceptions."""

from typing import Iterable, Tuple


class InvalidAttributeValue(ValueError):
    """Raised by a setter's self-check; the setter catches it and keeps the old value."""

    def __init__(self, field_name: str, attribute: str, value, errors: Iterable[str] = ()):
        self.field_name = field_name
        self.attribute = attribute
        self.value = value
        self.errors = list(errors)
        detail = f": {'; '.join(self.errors)}" if self.errors else ""
        super().__init__(f"Invalid value {value!r} for {attribute} of field '{field_name}'{detail}")


class RenderPrecondition(RuntimeError):
    """Raised by render() when a field's own parameters failed self-validation."""

    def __init__(self, field_type: str, field_name: str, violations: Iterable[Tuple[str, str]]):
        self.field_type = field_type
        self.field_name = field_name
        self.violations = list(violations)
        details = "; ".join(f"[{rule}] {message}" for rule, message in self.violations)
        super().__init__(f"Error rendering {field_type} object with name {field_name}: {details}")
