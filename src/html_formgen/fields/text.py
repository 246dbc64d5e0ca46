"""Single-line and multi-line text fields."""

from typing import Any, Optional
import logging

from html_formgen.forms.field_node import FieldNode
from html_formgen.forms.ui_utils import escape_text, render_attribute

logger = logging.getLogger(__name__)


class Text(FieldNode):
    """``<input type="text">`` with an optional maxlength."""

    _field_type = "text"
    input_type = "text"

    def __init__(self, name: str, value: Any = None, submission=None, rule_table=None):
        self._max_length: Optional[Any] = None
        super().__init__(name, value, submission, rule_table)

    @property
    def max_length(self) -> Optional[Any]:
        return self._max_length

    def set_max_length(self, max_length: Any) -> "Text":
        if self._accepts("max_length", max_length, "required|numeric"):
            self._max_length = max_length
        return self

    def render_max_length(self) -> str:
        return render_attribute("maxlength", self._max_length)

    def render(self) -> str:
        self._check_validity()

        output = (
            self.render_label()
            + "<input"
            + self.render_type()
            + self.render_id()
            + self.render_class()
            + self.render_name()
            + self.render_value()
            + self.render_style()
            + self.render_disabled()
            + self.render_max_length()
            + self.render_title()
            + self.render_data_attributes()
            + self.render_required()
            + self.render_placeholder()
            + self.render_auto_focus()
            + " />\n"
        )
        return output + self.render_invalidations()


class Email(Text):
    _field_type = "email"
    input_type = "email"


class Password(Text):
    """Never renders its value back into the markup."""

    _field_type = "password"
    input_type = "password"

    def render_value(self) -> str:
        return ""


class Custom(Text):
    """
    Text-like input with an author chosen type (``search``, ``tel``, ``url``, ...).

    Example:
        factory.custom("tel", "phone").set_placeholder("+31 ...")
    """

    _field_type = "custom"

    def set_type(self, input_type: str) -> "Custom":
        if self._accepts("type", input_type, "required|alpha_dash"):
            # instance attribute shadows the class default
            self.input_type = input_type
        return self


class Hidden(FieldNode):
    _field_type = "hidden"
    input_type = "hidden"

    def render(self) -> str:
        self._check_validity()

        output = (
            "<input"
            + self.render_type()
            + self.render_id()
            + self.render_class()
            + self.render_name()
            + self.render_value()
            + self.render_style()
            + self.render_disabled()
            + self.render_title()
            + self.render_data_attributes()
            + self.render_required()
            + " />\n"
        )
        return output + self.render_invalidations()


class TextArea(FieldNode):
    """``<textarea>``; the effective value is the element content."""

    _field_type = "textarea"
    input_type = "textarea"

    def render(self) -> str:
        self._check_validity()

        value = self.value
        output = (
            self.render_label()
            + "<textarea"
            + self.render_id()
            + self.render_class()
            + self.render_name()
            + self.render_style()
            + self.render_disabled()
            + self.render_title()
            + self.render_data_attributes()
            + self.render_required()
            + self.render_auto_focus()
            + ">"
            + escape_text(value if not isinstance(value, (list, tuple)) else None)
            + "</textarea>\n"
        )
        return output + self.render_invalidations()
