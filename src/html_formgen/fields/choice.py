"""
Fields with a fixed set of options: dropdown, checkbox group and radio group.

Option values double as the allow-list a form validation pass checks
submissions against.
"""

from itertools import groupby
from typing import Any, List, Mapping, Optional, Tuple
import logging

from html_formgen.core import as_list, is_blank
from html_formgen.forms.field_node import FieldNode
from html_formgen.forms.ui_utils import escape_text, render_attribute, render_flag
from html_formgen.protocols import OptionsCapable

logger = logging.getLogger(__name__)


class ChoiceField(FieldNode, OptionsCapable):
    """
    Base for option based fields.

    Example:
        colors = factory.dropdown("color")
        colors.append_options({"r": "Red", "g": "Green"}).prepend_option("", "Pick one")
        colors.allowed_values()   # ['', 'r', 'g']
    """

    def append_option(self, value: Any, label: Any, category: Optional[str] = None) -> "ChoiceField":
        self._values.append(str(value))
        self._labels.append(str(label))
        if not is_blank(category):
            self._categories.append(category)
        return self

    def append_options(self, options: Mapping[Any, Any], category: Optional[str] = None) -> "ChoiceField":
        """Append ``{value: label}`` options; one optional category for all of them."""
        if self._accepts("options", options, "array|assoc_array"):
            for value, label in options.items():
                self.append_option(value, label, category)
        return self

    def prepend_option(self, value: Any, label: Any, category: Optional[str] = None) -> "ChoiceField":
        self._values.insert(0, str(value))
        self._labels.insert(0, str(label))
        if not is_blank(category):
            self._categories.insert(0, category)
        return self

    def prepend_options(self, options: Mapping[Any, Any], category: Optional[str] = None) -> "ChoiceField":
        """Prepend ``{value: label}`` options, keeping their order."""
        if self._accepts("options", options, "array|assoc_array"):
            for value, label in reversed(list(options.items())):
                self.prepend_option(value, label, category)
        return self

    def remove_option(self, value: Any) -> "ChoiceField":
        """Remove the first option with this value, together with its label."""
        value = str(value)
        if value in self._values:
            index = self._values.index(value)
            del self._values[index]
            if index < len(self._labels):
                del self._labels[index]
            if index < len(self._categories):
                del self._categories[index]
        return self

    def allowed_values(self) -> List[str]:
        return list(self._values)

    def get_categories(self) -> Optional[List[str]]:
        return list(self._categories) if self._categories else None

    def options(self) -> List[Tuple[str, str]]:
        """``(value, label)`` pairs; a missing label falls back to the value."""
        return [
            (value, self._labels[index] if index < len(self._labels) else value)
            for index, value in enumerate(self._values)
        ]

    def selected_values(self) -> List[str]:
        return [str(value) for value in as_list(self.value)]

    def _option_id(self, index: int) -> str:
        return f"{self._id}_{index}"


class Dropdown(ChoiceField):
    """``<select>``; set_multiple(True) turns it into a multi-select."""

    _field_type = "dropdown"
    input_type = "select"

    def __init__(self, name: str, value: Any = None, submission=None, rule_table=None):
        self._multiple = False
        super().__init__(name, value, submission, rule_table)

    @property
    def multiple(self) -> bool:
        return self._multiple

    def set_multiple(self, multiple: bool = True) -> "Dropdown":
        if self._accepts("multiple", multiple, "boolean"):
            self._multiple = bool(multiple)
        return self

    def _render_options(self) -> str:
        selected = set(self.selected_values())
        lines = []
        for value, label in self.options():
            # an empty value still needs the attribute, else the label is submitted
            value_attribute = f' value="{escape_text(value)}"'
            lines.append(
                f"<option{value_attribute}{render_flag('selected', value in selected)}>"
                f"{escape_text(label)}</option>"
            )

        categories = self._categories
        if len(categories) != len(lines):
            return "\n".join(lines)

        grouped = []
        for category, items in groupby(zip(categories, lines), key=lambda pair: pair[0]):
            options = "\n".join(line for _, line in items)
            grouped.append(f"<optgroup{render_attribute('label', category)}>\n{options}\n</optgroup>")
        return "\n".join(grouped)

    def render(self) -> str:
        self._check_validity()

        output = (
            self.render_label()
            + "<select"
            + self.render_id()
            + self.render_class()
            + self.render_name(array=self._multiple)
            + self.render_style()
            + self.render_disabled()
            + self.render_size()
            + self.render_title()
            + self.render_data_attributes()
            + self.render_required()
            + self.render_auto_focus()
            + render_flag("multiple", self._multiple)
            + ">\n"
            + self._render_options()
            + "\n</select>\n"
        )
        return output + self.render_invalidations()


class Checkbox(ChoiceField):
    """
    One checkbox per option.

    With more than one option the submission name gets a ``[]`` suffix. A
    checkbox without options renders one box for its own value.
    """

    _field_type = "checkbox"
    input_type = "checkbox"

    def _render_box(self, index: Optional[int], value: Any, label: Optional[str], checked: bool, array: bool) -> str:
        box_id = self._id if index is None else self._option_id(index)
        output = (
            "<input"
            + self.render_type()
            + render_attribute("id", box_id)
            + self.render_class()
            + self.render_name(array=array)
            + render_attribute("value", value)
            + render_flag("checked", checked)
            + self.render_style()
            + self.render_disabled()
            + self.render_title()
            + self.render_data_attributes()
            + " />"
        )
        if not is_blank(label):
            output += f'<label{render_attribute("for", box_id)}>{escape_text(label)}</label>'
        return output + "\n"

    def render(self) -> str:
        self._check_validity()

        selected = set(self.selected_values())
        options = self.options()
        output = self.render_label()
        if not options:
            value = self._value if self._value is not None else "1"
            output += self._render_box(None, value, None, value in selected, array=False)
        else:
            array = len(options) > 1
            for index, (value, label) in enumerate(options):
                output += self._render_box(index, value, label, value in selected, array)
        return output + self.render_invalidations()


class Radio(ChoiceField):
    """Radio group: one submitted value out of the options."""

    _field_type = "radio"
    input_type = "radio"

    def render(self) -> str:
        self._check_validity()

        selected = set(self.selected_values())
        output = self.render_label()
        for index, (value, label) in enumerate(self.options()):
            option_id = self._option_id(index)
            output += (
                "<input"
                + self.render_type()
                + render_attribute("id", option_id)
                + self.render_class()
                + self.render_name()
                + render_attribute("value", value)
                + render_flag("checked", value in selected)
                + self.render_style()
                + self.render_disabled()
                + self.render_title()
                + self.render_data_attributes()
                + self.render_required()
                + " />"
                + f'<label{render_attribute("for", option_id)}>{escape_text(label)}</label>\n'
            )
        return output + self.render_invalidations()
