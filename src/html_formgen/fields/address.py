"""
Dutch style address input: postcode, house number and extension.

The children start with their own name as value. That value acts as a
placeholder sentinel: it is shown in a grey italic style and a submission
still equal to it does not count as posted.
"""

from typing import Any, Optional, Sequence, Tuple
import logging

from html_formgen.core import is_blank
from html_formgen.forms.composite import CompositeField
from html_formgen.forms.field_constants import CONSTANTS
from html_formgen.forms.field_node import (
    INPUT_OVERRULE_POST, INPUT_SELECTED_INITIALLY_ONLY, is_flag_set,
)
from html_formgen.protocols import get_form_config

from .text import Text

logger = logging.getLogger(__name__)

POSTCODE = "postcode"
HOUSE_NUMBER = "house_number"
HOUSE_NUMBER_EXTENSION = "house_number_extension"


class AddressInput(CompositeField):
    """
    Address made of three text inputs with reserved names.

    Example:
        address = AddressInput("address", submission=submission)
        address.set_selected(("1234AB", "12", "a"))
        address.postcode.selected   # '1234AB' unless a real postcode was posted
    """

    _field_type = "address"
    input_type = "address"

    def __init__(self, name: str, value: Optional[Sequence[Any]] = None,
                 submission=None, rule_table=None):
        super().__init__(name, None, submission, rule_table)

        self._postcode = self._adopt(Text(POSTCODE, POSTCODE, self._submission, self._rule_table))
        self._house_number = self._adopt(Text(HOUSE_NUMBER, HOUSE_NUMBER, self._submission, self._rule_table))
        self._house_number_extension = self._adopt(
            Text(HOUSE_NUMBER_EXTENSION, HOUSE_NUMBER_EXTENSION, self._submission, self._rule_table)
        )

        config = get_form_config()
        self.set_width(config.address_width)
        self.add_style(config.address_placeholder_style)
        self.add_class(CONSTANTS.ADDRESS_CLASS)

        if not is_blank(value):
            self.set_selected(value)

    @property
    def postcode(self) -> Text:
        return self._postcode

    @property
    def house_number(self) -> Text:
        return self._house_number

    @property
    def house_number_extension(self) -> Text:
        return self._house_number_extension

    def is_posted(self) -> bool:
        """Postcode and house number posted, and neither still equals its placeholder."""
        return (
            self._postcode.is_posted()
            and self._house_number.is_posted()
            and self._postcode.posted != POSTCODE
            and self._house_number.posted != HOUSE_NUMBER
        )

    def set_selected(self, selected: Sequence[Any], flag: int = 0) -> "AddressInput":
        """
        Select ``(postcode, house_number, extension)`` and drop the placeholder style.

        Args:
            selected: The three parts, in order
            flag: INPUT_OVERRULE_POST and/or INPUT_SELECTED_INITIALLY_ONLY
        """
        if not is_blank(self.posted) and not is_flag_set(flag, INPUT_OVERRULE_POST):
            return self
        if is_flag_set(flag, INPUT_SELECTED_INITIALLY_ONLY) and not self._submission.is_empty():
            return self

        parts: Tuple[Any, ...] = tuple(selected)
        if len(parts) != 3:
            logger.warning(f"Address '{self._name}' expects 3 parts to select, got {len(parts)}; ignoring")
            return self

        placeholder_style = get_form_config().address_placeholder_style
        self.remove_style(placeholder_style)
        # broadcasting only adds, the children drop the placeholder style themselves
        for child in self._children:
            child.remove_style(placeholder_style)

        self._apply_selection(parts, flag)
        return self

    def _render_children(self) -> str:
        self._postcode.set_label(self._label)
        self._house_number.set_width(get_form_config().address_house_number_width)
        return self._postcode.render() + self._house_number.render() + self._house_number_extension.render()
