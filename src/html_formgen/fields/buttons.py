"""Buttons. They always carry the ``btn`` class."""

from typing import Any

from html_formgen.forms.field_constants import CONSTANTS
from html_formgen.forms.field_node import FieldNode


class Button(FieldNode):
    _field_type = "button"
    input_type = "button"

    def __init__(self, name: str, value: Any = None, submission=None, rule_table=None):
        super().__init__(name, value, submission, rule_table)
        self.add_class(CONSTANTS.BUTTON_CLASS)

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
            + self.render_title()
            + self.render_data_attributes()
            + self.render_auto_focus()
            + " />\n"
        )
        return output + self.render_invalidations()


class Submit(Button):
    _field_type = "submit"
    input_type = "submit"


class Reset(Button):
    _field_type = "reset"
    input_type = "reset"
