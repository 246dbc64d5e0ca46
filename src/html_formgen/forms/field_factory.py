"""
Field factory with one creation method per field kind.

Every field it creates shares the factory's submission snapshot and rule
table, so a form builds all of its fields against the same post.
"""

from typing import Any, Optional, Sequence
import logging

from html_formgen.io import SubmissionContext, SubmissionSource
from html_formgen.validation import RuleTable

from .field_registry import get_field_class

logger = logging.getLogger(__name__)


class FieldFactory:
    """
    Creates fields bound to one submission.

    Example:
        factory = FieldFactory(SubmissionContext.from_pairs([("email", "a@b.nl")]))
        email = factory.email("email").set_required(True)
        period = factory.date_range("period", "01-01-2020", "31-01-2020")

        # by registry id
        notes = factory.create("textarea", "notes")
    """

    def __init__(self, submission: Optional[SubmissionSource] = None,
                 rule_table: Optional[RuleTable] = None):
        # Importing the kinds registers them
        import html_formgen.fields  # noqa: F401

        self.submission = submission if submission is not None else SubmissionContext.empty()
        self.rule_table = rule_table

    def create(self, field_type: str, name: str, *args: Any) -> Any:
        """
        Create a field by registry id.

        Raises:
            KeyError: If field_type not registered
        """
        field_class = get_field_class(field_type)
        field = field_class(name, *args, submission=self.submission, rule_table=self.rule_table)
        logger.debug(f"Created {field!r} as '{field_type}'")
        return field

    def text(self, name: str, value: Any = None):
        return self.create("text", name, value)

    def password(self, name: str, value: Any = None):
        return self.create("password", name, value)

    def email(self, name: str, value: Any = None):
        return self.create("email", name, value)

    def hidden(self, name: str, value: Any = None):
        return self.create("hidden", name, value)

    def textarea(self, name: str, value: Any = None):
        return self.create("textarea", name, value)

    def custom(self, input_type: str, name: str, value: Any = None):
        """Input with an author chosen type, e.g. ``custom('tel', 'phone')``."""
        return self.create("custom", name, value).set_type(input_type)

    def button(self, name: str, value: Any = None):
        return self.create("button", name, value)

    def submit(self, name: str, value: Any = None):
        return self.create("submit", name, value)

    def reset(self, name: str, value: Any = None):
        return self.create("reset", name, value)

    def dropdown(self, name: str, value: Any = None):
        return self.create("dropdown", name, value)

    def checkbox(self, name: str, value: Any = None):
        return self.create("checkbox", name, value)

    def radio(self, name: str, value: Any = None):
        return self.create("radio", name, value)

    def date(self, name: str, value: Optional[str] = None):
        return self.create("date", name, value)

    def date_range(self, name: str, date_from: Optional[str] = None, date_to: Optional[str] = None):
        """Dates in the configured format (``d-m-Y`` by default)."""
        return self.create("date_range", name, date_from, date_to)

    def address(self, name: str, value: Optional[Sequence[Any]] = None):
        return self.create("address", name, value)

    def file(self, name: str):
        return self.create("file", name)
