"""
Form coordinator.

Concrete forms subclass Form, create their fields as public instance
attributes (through ``self.factory``) and implement render() and is_posted().
validate() runs one validation pass over every field in declaration order.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union
import logging
import secrets
import string

from html_formgen.core import is_blank
from html_formgen.io import SubmissionContext, SubmissionSource
from html_formgen.protocols import OptionsCapable, get_form_config
from html_formgen.validation import RuleSpec, RuleTable, ValidationEngine, parse_rules
from html_formgen.validation.rule_spec import RuleInput

from .field_constants import CONSTANTS
from .field_factory import FieldFactory
from .field_node import FieldNode
from .ui_utils import escape_text, render_attribute

logger = logging.getLogger(__name__)

METHODS = ("post", "get")

ENCTYPE_DEFAULT = "application/x-www-form-urlencoded"
ENCTYPE_FILE = "multipart/form-data"
ENCTYPE_TEXT = "text/plain"
ENCTYPES = (ENCTYPE_DEFAULT, ENCTYPE_FILE, ENCTYPE_TEXT)

SALT_CHARACTERS = string.ascii_letters + string.digits


class Form(ABC):
    """
    Abstract form.

    Example:
        class SignupForm(Form):
            def __init__(self, submission):
                super().__init__(submission)
                self.email = self.factory.email("email").set_required(True)
                self.age = self.factory.text("age")
                self.add_validation("age", "between", (18, 99))

            def render(self):
                return self.render_form_head() + self.email.render() + self.render_form_foot()

            def is_posted(self):
                return self.submission.is_posted("email")

        form = SignupForm(submission)
        if not form.validate():
            form.email.get_invalidations()
    """

    ENCTYPE_DEFAULT = ENCTYPE_DEFAULT
    ENCTYPE_FILE = ENCTYPE_FILE

    def __init__(self, submission: Optional[SubmissionSource] = None,
                 rule_table: Optional[RuleTable] = None):
        self._submission = submission if submission is not None else SubmissionContext.empty()
        self._validator = ValidationEngine(rule_table)
        self._factory = FieldFactory(self._submission, rule_table)
        self._method = "post"
        self._action = ""
        self._enctype = ENCTYPE_DEFAULT
        self._name: Optional[str] = None
        self._is_valid = True
        # Custom rules per field name, added with add_validation()
        self._validations: Dict[str, List[RuleSpec]] = {}

    @abstractmethod
    def render(self) -> str:
        pass

    @abstractmethod
    def is_posted(self) -> bool:
        pass

    @property
    def submission(self) -> SubmissionSource:
        return self._submission

    @property
    def factory(self) -> FieldFactory:
        return self._factory

    @property
    def validator(self) -> ValidationEngine:
        return self._validator

    def fields(self) -> List[FieldNode]:
        """Public field attributes in declaration order."""
        return [
            value for attribute, value in vars(self).items()
            if not attribute.startswith("_") and isinstance(value, FieldNode)
        ]

    # ------------------------------------------------------------------
    # Validation pass
    # ------------------------------------------------------------------

    def validate(self) -> bool:
        """
        Validate every field and write the errors back onto the fields.

        Starts a new pass: the validity flag and the invalidations of the
        previous pass are cleared first.

        Returns:
            is_valid() after the pass
        """
        self._is_valid = True
        fields = self.fields()
        for field in fields:
            field.clear_invalidations()

        for field in fields:
            self.validate_field(field)

        logger.debug(f"Validated {len(fields)} field(s) of {type(self).__name__}: valid={self.is_valid()}")
        return self.is_valid()

    def validate_field(self, field: FieldNode) -> None:
        """
        Run the rules of one field through the engine.

        Order: the required rule when the field is flagged required, structural
        rules (date format, allow-list), rules declared on the field, rules this
        form declared for the field's name. The engine is reset afterwards so
        nothing leaks into the next field.
        """
        if not field.is_posted() and not field.is_required():
            return

        # Local imports: the field kinds import this package
        from html_formgen.fields.date import DateInput, DateRangeInput, date_format_rule

        try:
            if field.is_required():
                # the flag can arrive without the rule, e.g. through set_attributes()
                self._validator.add_validation(field, CONSTANTS.REQUIRED_RULE)

            date_rule = date_format_rule()
            if isinstance(field, DateInput):
                self._validator.add_validation(field, date_rule)
            elif isinstance(field, DateRangeInput):
                self._validator.add_validation(field.date_from, date_rule)
                self._validator.add_validation(field.date_to, date_rule)

            if isinstance(field, OptionsCapable):
                values = field.allowed_values()
                if values:
                    self._validator.add_validation(field, RuleSpec("all_in", tuple(values)))

            if field.has_validations():
                self._validator.add_validation(field, field.get_validation_specs())

            if field.name in self._validations:
                self._validator.add_validation(field, self._validations[field.name])

            if not self._validator.passes():
                errors = self._validator.get_attribute_errors(field.name)
                self.invalidate(field, get_form_config().error_separator.join(errors))
        finally:
            self._validator.reset()

    def invalidate(self, field: FieldNode, invalidation: str) -> None:
        """Attach an error to a field and mark the form invalid."""
        self._is_valid = False
        field.add_invalidation(invalidation)
        logger.debug(f"Invalidated {field!r}: {invalidation!r}")

    def is_valid(self) -> bool:
        return self._is_valid and all(field.is_valid() for field in self.fields())

    def add_validation(self, field: Union[FieldNode, str], rule: RuleInput, parameters: Any = ()) -> "Form":
        """
        Add a custom rule for a field of this form.

        Example:
            form.add_validation("arpu", "between", (20, 30))

        Args:
            field: The field or its name
            rule: Rule name (or rule text); parameters only go with a single rule
            parameters: Rule parameters; a scalar is wrapped into a tuple

        Raises:
            TypeError: If field is neither a FieldNode nor a name
            UnknownRule: If the rule is not in the rule table
        """
        if isinstance(field, FieldNode):
            name = field.name
        elif isinstance(field, str):
            name = field
        else:
            raise TypeError(f"Cannot add validation to {type(field).__name__}; pass a field or a field name")

        specs = parse_rules(rule, None if is_blank(parameters) else parameters)
        self._validator.rule_table.ensure_known(specs)

        self._validations.setdefault(name, []).extend(specs)
        return self

    def get_validations(self) -> Dict[str, List[str]]:
        return {name: [str(spec) for spec in specs] for name, specs in self._validations.items()}

    # ------------------------------------------------------------------
    # Form attributes and markup
    # ------------------------------------------------------------------

    @property
    def method(self) -> str:
        return self._method

    def set_method(self, method: str) -> "Form":
        """
        Raises:
            ValueError: For anything but 'post' or 'get'
        """
        if method not in METHODS:
            raise ValueError(f"Invalid method for Form: {method!r}. Use one of {list(METHODS)}")
        self._method = method
        return self

    @property
    def action(self) -> str:
        return self._action

    def set_action(self, action: str) -> "Form":
        self._action = action
        return self

    @property
    def enctype(self) -> str:
        return self._enctype

    def set_enctype(self, enctype: str) -> "Form":
        """
        Raises:
            ValueError: For an unsupported encoding type
        """
        if enctype not in ENCTYPES:
            raise ValueError(f"Invalid enctype for Form: {enctype!r}. Use one of {list(ENCTYPES)}")
        self._enctype = enctype
        return self

    @property
    def name(self) -> Optional[str]:
        return self._name

    def set_name(self, name: str) -> "Form":
        self._name = name
        return self

    def determine_enctype(self) -> str:
        """Switch to multipart encoding when the form holds a file input."""
        from html_formgen.fields import FileInput

        if any(isinstance(field, FileInput) for field in self.fields()):
            self.set_enctype(ENCTYPE_FILE)
        return self._enctype

    def render_form_head(self) -> str:
        self.determine_enctype()
        return (
            "<form"
            + render_attribute("name", self._name)
            + f' method="{self._method}"'
            + f' action="{escape_text(self._action)}"'
            + f' enctype="{self._enctype}"'
            + ">\n"
        )

    def render_form_foot(self) -> str:
        return "</form>\n"

    @staticmethod
    def generate_salt(length: int = 10) -> str:
        return "".join(secrets.choice(SALT_CHARACTERS) for _ in range(length))
