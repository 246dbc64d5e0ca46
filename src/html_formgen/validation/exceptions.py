"""Validation exceptions."""


class UnknownRule(ValueError):
    """Raised when a rule name is not present in the rule table."""

    def __init__(self, rule: str):
        self.rule = rule
        super().__init__(f'Invalid rule "{rule}" specified.')
