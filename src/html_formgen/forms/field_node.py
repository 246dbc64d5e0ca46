"""
Base field: identity, presentation attributes, value state and validation list.

Every field owns:
- a self-check ValidationEngine that vets setter arguments (never end-user data)
- an AttributeBroadcaster that pushes propagable attributes to dependents

Setters return self so calls chain. A setter whose argument fails its self-check
leaves the field unchanged, logs a warning and records the violation; render()
then refuses to produce markup (RenderPrecondition).
"""

from abc import abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
import logging

from html_formgen.core import AttributeStore, is_blank
from html_formgen.io import SubmissionContext, SubmissionSource
from html_formgen.protocols import AttributePropagation, AttributeSet, ValidationTarget, get_form_config
from html_formgen.validation import RuleSpec, RuleTable, ValidationEngine, parse_rules, rule_name
from html_formgen.validation.rule_spec import RuleInput

from .broadcaster import AttributeBroadcaster
from .exceptions import InvalidAttributeValue, RenderPrecondition
from .field_constants import CONSTANTS
from .field_registry import FieldMeta
from .ui_utils import (
    data_attribute_name, escape_text, name_to_id, render_attribute, render_flag, to_valid_html_id,
)

logger = logging.getLogger(__name__)

# Bitwise flags for set_selected()
INPUT_OVERRULE_POST = 1             # the selection wins over a real submission
INPUT_SELECTED_INITIALLY_ONLY = 4   # only select while the submission is entirely empty

# Scalar attributes set_attributes() assigns directly
SCALAR_ATTRIBUTES = frozenset({
    "disabled", "size", "required", "title", "placeholder", "auto_focus", "render_with_label",
})


def is_flag_set(flag: Optional[int], value: int) -> bool:
    if not flag or not value:
        return False
    return (flag & value) == value


class FieldNode(AttributePropagation, ValidationTarget, metaclass=FieldMeta):
    """
    Abstract form field.

    Subclasses set ``input_type`` (the markup type attribute) and
    ``_field_type`` (the registry id) and implement render().

    Example:
        submission = SubmissionContext.from_pairs([("email", "a@b.nl")])
        email = Email("email", submission=submission)
        email.set_label("E-mail").set_required(True).add_class("wide")
        email.is_posted()       # True
        email.effective_value   # 'a@b.nl'
    """

    input_type: str = "text"

    INPUT_OVERRULE_POST = INPUT_OVERRULE_POST
    INPUT_SELECTED_INITIALLY_ONLY = INPUT_SELECTED_INITIALLY_ONLY

    def __init__(self, name: str, value: Any = None,
                 submission: Optional[SubmissionSource] = None,
                 rule_table: Optional[RuleTable] = None):
        self._submission = submission if submission is not None else SubmissionContext.empty()
        self._rule_table = rule_table
        self._validator = ValidationEngine(rule_table)
        self._broadcaster = AttributeBroadcaster()

        self._name = ""
        self._id: Optional[str] = None
        self._label: Optional[str] = None
        self._value: Optional[str] = None
        self._values: List[str] = []
        self._labels: List[str] = []
        self._categories: List[str] = []
        self._classes: List[str] = []
        self._style = AttributeStore()
        self._title: Optional[str] = None
        self._selected: Any = None
        self._posted: Any = None
        self._disabled: Optional[str] = None
        self._size: Optional[Any] = None
        self._render_with_label = True
        self._required = False
        self._validations: List[RuleSpec] = []
        self._invalidations: List[str] = []
        self._data_attributes: Dict[str, str] = {}
        self._auto_focus = False
        self._placeholder: Optional[str] = None

        self._set_name(name)
        self.set_id(name)

        if not is_blank(value):
            if isinstance(value, (list, tuple)):
                self.set_values(value)
            else:
                self.set_value(value)

        self._capture_posted()

    @abstractmethod
    def render(self) -> str:
        """Render the field's markup."""
        pass

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self._name!r}>"

    # ------------------------------------------------------------------
    # Self-check
    # ------------------------------------------------------------------

    def _self_check(self, attribute: str, value: Any, rules: RuleInput) -> None:
        """
        Validate a setter argument against rules.

        Raises:
            InvalidAttributeValue: With the messages of the failed rules
        """
        key = self._name or attribute
        before = len(self._validator.get_errors().get(key, []))
        if not self._validator.validate(key, value, rules):
            errors = self._validator.get_errors().get(key, [])[before:]
            raise InvalidAttributeValue(self._name, attribute, value, errors)

    def _accepts(self, attribute: str, value: Any, rules: RuleInput) -> bool:
        try:
            self._self_check(attribute, value, rules)
        except InvalidAttributeValue as e:
            logger.warning(f"{e}; keeping the previous value")
            return False
        return True

    def has_parameter_errors(self) -> bool:
        return bool(self._validator.get_errors())

    def _check_validity(self) -> None:
        """
        Refuse to render when a setter or constructor argument failed its self-check.

        Raises:
            RenderPrecondition: Naming the field and every violated rule
        """
        errors = self._validator.get_errors()
        if not errors:
            return
        violations: List[Tuple[str, str]] = []
        for key, messages in errors.items():
            failed = self._validator.get_failed_rules(key)
            violations.extend((str(spec), message) for spec, message in zip(failed, messages))
        raise RenderPrecondition(type(self).__name__, self._name, violations)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def _capture_posted(self) -> None:
        """Snapshot the submitted value; also stored as selected so get_selected() always answers."""
        if not self._submission.is_posted(self._name):
            return
        posted = self._submission.get(self._name)
        self._posted = self._normalize_posted(posted)
        self._selected = self._posted

    def _normalize_posted(self, posted: Any) -> Any:
        return posted

    def is_posted(self) -> bool:
        return self._submission.is_posted(self._name)

    @property
    def submission(self) -> SubmissionSource:
        return self._submission

    @property
    def rule_table(self) -> RuleTable:
        return self._validator.rule_table

    @property
    def posted(self) -> Any:
        return self._posted

    @property
    def selected(self) -> Any:
        return self._selected

    @property
    def effective_value(self) -> Any:
        """Submitted value if present, else an explicit selection, else the default."""
        if not is_blank(self._selected):
            return self._selected
        if self._value is not None:
            return self._value
        return list(self._values) if self._values else None

    def set_selected(self, selected: Any, flag: int = 0) -> "FieldNode":
        """
        Select a value without overwriting a real submission.

        Args:
            selected: Value or values to select
            flag: INPUT_OVERRULE_POST to let the selection win over the submission
        """
        if is_blank(self._posted) or is_flag_set(flag, INPUT_OVERRULE_POST):
            self._selected = selected
        return self

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    def _set_name(self, name: str) -> None:
        # Stored even when invalid so diagnostics can name the field; render() refuses it
        self._name = name if isinstance(name, str) else str(name)
        self._accepts("name", name_to_id(self._name), CONSTANTS.NAME_RULE)

    @property
    def id(self) -> Optional[str]:
        return self._id

    def set_id(self, id: str) -> "FieldNode":
        """A name can contain ``[]`` markers, an id cannot: ``tags[]`` -> ``tags__``."""
        id = name_to_id(str(id))
        if self._accepts("id", id, CONSTANTS.NAME_RULE):
            self._id = id
        return self

    @staticmethod
    def to_valid_html_id(value: str, replace: str = CONSTANTS.HTML_ID_REPLACEMENT) -> str:
        return to_valid_html_id(value, replace)

    @property
    def type(self) -> str:
        return self.input_type

    # ------------------------------------------------------------------
    # Values and labels
    # ------------------------------------------------------------------

    @property
    def value(self) -> Any:
        """The selected value when there is one, else the default value."""
        return self._value if is_blank(self._selected) else self._selected

    @property
    def default_value(self) -> Optional[str]:
        return self._value

    def set_value(self, value: Any) -> "FieldNode":
        if self._accepts("value", value, "not_array"):
            self._value = None if value is None else str(value)
        return self

    @property
    def values(self) -> List[str]:
        return list(self._values)

    def set_values(self, values: Sequence[Any]) -> "FieldNode":
        if self._accepts("values", values, "array"):
            items = values.values() if isinstance(values, Mapping) else values
            self._values = [str(item) for item in items]
        return self

    @property
    def label(self) -> Optional[str]:
        return self._label

    def set_label(self, label: Optional[str]) -> "FieldNode":
        self._label = label
        return self

    def get_labels(self) -> List[str]:
        return list(self._labels)

    def set_labels(self, labels: Sequence[str]) -> "FieldNode":
        if self._accepts("labels", labels, "array"):
            items = labels.values() if isinstance(labels, Mapping) else labels
            self._labels = [str(label) for label in items]
        return self

    def set_categories(self, categories: Sequence[str]) -> "FieldNode":
        if self._accepts("categories", categories, "array"):
            self._categories = list(categories)
        return self

    @property
    def render_with_label(self) -> bool:
        return self._render_with_label

    def set_render_with_label(self, render_with_label: bool) -> "FieldNode":
        if self._accepts("render_with_label", render_with_label, CONSTANTS.BOOLEAN_RULE):
            self._render_with_label = _as_bool(render_with_label)
            self._notify()
        return self

    @property
    def title(self) -> Optional[str]:
        return self._title

    def set_title(self, title: Optional[str]) -> "FieldNode":
        self._title = title
        return self

    @property
    def placeholder(self) -> Optional[str]:
        return self._placeholder

    def set_placeholder(self, placeholder: str) -> "FieldNode":
        """Only text, search, url, tel, email and password inputs accept a placeholder."""
        allowed = "in:" + ",".join(sorted(CONSTANTS.PLACEHOLDER_TYPES))
        if self._accepts("placeholder", self.input_type, allowed):
            self._placeholder = placeholder
        return self

    @property
    def auto_focus(self) -> bool:
        return self._auto_focus

    def set_auto_focus(self, auto_focus: bool) -> "FieldNode":
        if self._accepts("auto_focus", auto_focus, CONSTANTS.BOOLEAN_RULE):
            self._auto_focus = _as_bool(auto_focus)
        return self

    # ------------------------------------------------------------------
    # Presentation attributes (broadcast to dependents)
    # ------------------------------------------------------------------

    def get_classes(self) -> List[str]:
        return list(self._classes)

    def has_class(self, class_name: str) -> bool:
        return class_name in self._classes

    def set_class(self, classes: Union[str, Iterable[str]]) -> "FieldNode":
        """Replace all classes."""
        self._classes = []
        return self.add_class(classes)

    def add_class(self, classes: Union[str, Iterable[str]]) -> "FieldNode":
        """Add a class or a space separated list of classes, just like in markup."""
        self._add_classes(classes)
        self._notify()
        return self

    def _add_classes(self, classes: Union[str, Iterable[str]]) -> None:
        if isinstance(classes, str):
            classes = classes.split()
        for class_name in classes:
            if not class_name:
                continue
            if self._accepts("class", class_name, CONSTANTS.CLASS_RULE) and class_name not in self._classes:
                self._classes.append(class_name)

    def remove_class(self, class_name: str) -> "FieldNode":
        self._classes = [existing for existing in self._classes if existing != class_name]
        self._notify()
        return self

    def get_styles(self) -> AttributeStore:
        return self._style

    def get_style(self, attribute: str) -> Optional[str]:
        return self._style.get(attribute)

    def set_style(self, style) -> "FieldNode":
        """Reset the inline style and add the new one."""
        self._style = AttributeStore()
        return self.add_style(style)

    def add_style(self, style) -> "FieldNode":
        """
        Add declarations to the inline style.

        Args:
            style: ``'color:red; padding: 8px'`` or ``{'color': 'red'}``
        """
        self._style.merge(style)
        self._notify()
        return self

    def remove_style(self, style) -> "FieldNode":
        """Remove the attributes named in ``style``; their values are ignored."""
        self._style.remove(style)
        self._notify()
        return self

    def get_width(self) -> Optional[str]:
        return self._style.get(CONSTANTS.WIDTH_ATTRIBUTE)

    def set_width(self, width: Any) -> "FieldNode":
        """Width in pixels; stored as ``width: <n>px``."""
        if self._accepts("width", width, CONSTANTS.NUMERIC_RULE):
            self.add_style({CONSTANTS.WIDTH_ATTRIBUTE: f"{width}{CONSTANTS.PIXEL_SUFFIX}"})
        return self

    def is_hidden(self) -> bool:
        return self._style.get(CONSTANTS.DISPLAY_ATTRIBUTE) == CONSTANTS.DISPLAY_NONE

    def set_hidden(self, hidden: bool) -> "FieldNode":
        if self._accepts("hidden", hidden, CONSTANTS.BOOLEAN_RULE):
            display = {CONSTANTS.DISPLAY_ATTRIBUTE: CONSTANTS.DISPLAY_NONE}
            if _as_bool(hidden):
                self.add_style(display)
            else:
                self.remove_style(display)
        return self

    @property
    def disabled(self) -> Optional[str]:
        return self._disabled

    def is_disabled(self) -> bool:
        return not is_blank(self._disabled)

    def set_disabled(self, disabled: str = "disabled") -> "FieldNode":
        """Either ``'disabled'`` or ``'readonly'``."""
        if self._accepts("disabled", disabled, CONSTANTS.DISABLED_RULE):
            self._disabled = disabled
            self._notify()
        return self

    def remove_disabled(self) -> "FieldNode":
        self._disabled = None
        self._notify()
        return self

    @property
    def size(self) -> Optional[Any]:
        return self._size

    def set_size(self, size: Any) -> "FieldNode":
        if self._accepts("size", size, CONSTANTS.NUMERIC_RULE):
            self._size = size
            self._notify()
        return self

    @property
    def required(self) -> bool:
        return self._required

    def is_required(self) -> bool:
        return self._required is True

    def set_required(self, required: bool = True) -> "FieldNode":
        """Also adds or removes the ``required`` class and validation rule."""
        if not self._accepts("required", required, CONSTANTS.BOOLEAN_RULE):
            return self

        self._required = _as_bool(required)
        if self._required:
            self.add_class(CONSTANTS.REQUIRED_CLASS)
            self.add_validation(CONSTANTS.REQUIRED_RULE)
        else:
            self.remove_class(CONSTANTS.REQUIRED_CLASS)
            self.remove_validation(CONSTANTS.REQUIRED_RULE)
        self._notify()
        return self

    def get_data_attributes(self) -> Dict[str, str]:
        return dict(self._data_attributes)

    def set_data_attributes(self, data_attributes: Mapping[str, Any]) -> "FieldNode":
        """Replace all custom data attributes."""
        if self._accepts("data_attributes", data_attributes, "array|assoc_array"):
            self._data_attributes = {str(key): str(value) for key, value in data_attributes.items()}
            self._notify()
        return self

    def add_data_attribute(self, name: str, value: Any) -> "FieldNode":
        """``add_data_attribute('answer', 42)`` renders ``data-answer="42"``."""
        self._data_attributes[name] = str(value)
        self._notify()
        return self

    def remove_data_attribute(self, name: str) -> "FieldNode":
        self._data_attributes.pop(name, None)
        self._notify()
        return self

    # ------------------------------------------------------------------
    # Attribute propagation
    # ------------------------------------------------------------------

    def register_dependent(self, dependent: AttributePropagation) -> "FieldNode":
        self._broadcaster.register_dependent(dependent)
        return self

    def _notify(self) -> None:
        self._broadcaster.notify(self)

    def get_attributes(self) -> AttributeSet:
        """The propagable subset; width stays layout-local to each field."""
        return {
            "classes": list(self._classes),
            "disabled": self._disabled,
            "size": self._size,
            "required": self._required,
            "data_attributes": dict(self._data_attributes),
            "style": self._style.without(CONSTANTS.WIDTH_ATTRIBUTE),
        }

    def get_shared_attributes(self) -> AttributeSet:
        """
        Every attribute a composite may copy down to its children before rendering.

        The auto_focus and render_with_label flags are only included when they
        differ from their defaults, so a child's own setting survives copy-down.
        """
        shared = {
            "classes": list(self._classes),
            "style": self._style.all(),
            "data_attributes": dict(self._data_attributes),
            "disabled": self._disabled,
            "size": self._size,
            "required": self._required,
            "title": self._title,
            "placeholder": self._placeholder,
        }
        if self._auto_focus:
            shared["auto_focus"] = True
        if not self._render_with_label:
            shared["render_with_label"] = False
        return shared

    def set_attributes(self, attributes: AttributeSet) -> "FieldNode":
        """
        Apply attributes received from a subject.

        Classes, style and data attributes are merged into the existing ones;
        scalar attributes are overwritten. Dependents are notified once at the end.

        Raises:
            KeyError: For an attribute this field does not know
        """
        for attribute, value in attributes.items():
            if attribute == "style":
                self._style.merge(value)
            elif attribute == "classes":
                self._add_classes(value or [])
            elif attribute == "data_attributes":
                for key, data_value in (value or {}).items():
                    self._data_attributes[key] = str(data_value)
            elif attribute in SCALAR_ATTRIBUTES:
                setattr(self, f"_{attribute}", value)
            else:
                raise KeyError(
                    f"Unknown attribute '{attribute}' for {type(self).__name__}. "
                    f"Known attributes: {sorted(SCALAR_ATTRIBUTES | {'style', 'classes', 'data_attributes'})}"
                )

        self._notify()
        return self

    # ------------------------------------------------------------------
    # Validation rules declared on the field
    # ------------------------------------------------------------------

    def add_validation(self, rules: RuleInput) -> "FieldNode":
        """
        Add rules executed by a form validation pass.

        Rules whose name is already present are ignored.

        Raises:
            UnknownRule: If a rule is not in the rule table (nothing is added)
        """
        specs = parse_rules(rules)
        self._validator.rule_table.ensure_known(specs)

        present = {spec.name for spec in self._validations}
        for spec in specs:
            if spec.name not in present:
                self._validations.append(spec)
                present.add(spec.name)
        return self

    def remove_validation(self, rules: RuleInput) -> "FieldNode":
        """Remove by rule name: ``remove_validation('between')`` drops ``between:4,8``."""
        names = {rule_name(rule) for rule in parse_rules(rules)}
        self._validations = [spec for spec in self._validations if spec.name not in names]
        return self

    def replace_validation(self, rules: RuleInput) -> "FieldNode":
        self.remove_validation(rules)
        return self.add_validation(rules)

    def get_validations(self) -> List[str]:
        return [str(spec) for spec in self._validations]

    def get_validation_specs(self) -> List[RuleSpec]:
        return list(self._validations)

    def has_validations(self) -> bool:
        return bool(self._validations)

    # ------------------------------------------------------------------
    # Invalidations (results of a form validation pass)
    # ------------------------------------------------------------------

    def get_invalidations(self) -> List[str]:
        return list(self._invalidations)

    def add_invalidation(self, invalidation: str) -> "FieldNode":
        if invalidation not in self._invalidations:
            self._invalidations.append(invalidation)
            self.add_class(CONSTANTS.INVALID_CLASS)
        return self

    def clear_invalidations(self) -> "FieldNode":
        if self._invalidations:
            self._invalidations = []
            self.remove_class(CONSTANTS.INVALID_CLASS)
        return self

    def is_valid(self) -> bool:
        return not self._invalidations

    # ------------------------------------------------------------------
    # Render helpers
    # ------------------------------------------------------------------

    def render_id(self) -> str:
        return render_attribute("id", self._id)

    def render_type(self) -> str:
        return render_attribute("type", self.input_type)

    def render_name(self, array: bool = False) -> str:
        name = self._name
        if array and CONSTANTS.ARRAY_NAME_SUFFIX not in name:
            name += CONSTANTS.ARRAY_NAME_SUFFIX
        return render_attribute("name", name)

    def render_value(self) -> str:
        value = self.value
        if isinstance(value, (list, tuple)):
            return ""
        return render_attribute("value", value)

    def render_label(self, attributes: Optional[Mapping[str, Any]] = None) -> str:
        if is_blank(self._label) or not self._render_with_label:
            return ""
        css = render_attribute("class", CONSTANTS.REQUIRED_CLASS) if self._required else ""
        extra = "".join(render_attribute(key, value) for key, value in (attributes or {}).items())
        return f'<label{render_attribute("for", self._id)}{css}{extra}>{escape_text(self._label)}</label>{CONSTANTS.LABEL_SUFFIX}'

    def render_class(self) -> str:
        return render_attribute("class", " ".join(self._classes))

    def render_style(self) -> str:
        return render_attribute("style", self._style.render())

    def render_disabled(self) -> str:
        return render_attribute(self._disabled, self._disabled) if self.is_disabled() else ""

    def render_size(self) -> str:
        return render_attribute("size", self._size)

    def render_title(self) -> str:
        return render_attribute("title", self._title)

    def render_data_attributes(self) -> str:
        return "".join(
            render_attribute(data_attribute_name(name), value) for name, value in self._data_attributes.items()
        )

    def render_required(self) -> str:
        return render_flag("required", self._required)

    def render_placeholder(self) -> str:
        return render_attribute("placeholder", self._placeholder)

    def render_auto_focus(self) -> str:
        return render_flag("autofocus", self._auto_focus)

    def render_invalidations(self) -> str:
        """Invalidation messages, HTML escaped except for the configured error separator."""
        if not self._invalidations:
            return ""
        # a form pass joins several errors into one invalidation with this separator
        error_separator = get_form_config().error_separator
        escaped_separator = escape_text(error_separator)
        messages = CONSTANTS.INVALIDATION_SEPARATOR.join(
            escape_text(invalidation).replace(escaped_separator, error_separator)
            for invalidation in self._invalidations
        )
        return f'<div class="{CONSTANTS.INVALIDATIONS_CLASS}">{messages}</div>\n'

    def render_validation_errors(self, message: Optional[str] = None, in_error_div: bool = True) -> str:
        """Self-check errors of this field, optionally prefixed and wrapped in an error div."""
        errors = self._validator.get_attribute_errors(self._name)
        if not errors:
            return ""
        error_string = CONSTANTS.INVALIDATION_SEPARATOR.join(escape_text(error) for error in errors)
        prefix = f"<p>{escape_text(message)}</p>\n" if message else ""
        if in_error_div:
            return f'<div class="{CONSTANTS.ERROR_CLASS}">{prefix}<p>{error_string}</p></div>\n'
        return prefix + error_string


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value == "1"
    return bool(value)
