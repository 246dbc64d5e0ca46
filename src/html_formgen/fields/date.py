"""
Date fields.

Dates are typed as ``dd-mm-yyyy``. Manually typed dates without leading
zeroes are padded when the submission is captured, before any validation.
"""

from typing import Any, List, Optional, Sequence
import logging

from html_formgen.core import AttributeStore
from html_formgen.forms.composite import CompositeField
from html_formgen.forms.field_constants import CONSTANTS
from html_formgen.forms.field_node import FieldNode
from html_formgen.forms.ui_utils import render_attribute
from html_formgen.protocols import get_form_config
from html_formgen.validation import RANGE_FROM_SUFFIX, RANGE_TO_SUFFIX

logger = logging.getLogger(__name__)

DATE_SEPARATOR = "-"


def date_format_rule() -> str:
    return f"date_format:{get_form_config().date_format}"


def pad_date(posted: str) -> str:
    """'1-2-2020' -> '01-02-2020'; ten character dates are returned unchanged."""
    if len(posted) == 10:
        return posted
    return DATE_SEPARATOR.join(part.rjust(2, "0") for part in posted.split(DATE_SEPARATOR))


class DateInput(FieldNode):
    """
    Text input for one date, rendered inside a container div.

    Example:
        submission = SubmissionContext.from_pairs([("start", "1-1-2020")])
        DateInput("start", submission=submission).posted   # '01-01-2020'
    """

    _field_type = "date"
    # 'date' only accepts yyyy-mm-dd
    input_type = "text"

    def _normalize_posted(self, posted: Any) -> Any:
        if isinstance(posted, str):
            corrected = pad_date(posted)
            if corrected != posted:
                logger.debug(f"Padded submitted date for '{self._name}': {posted!r} -> {corrected!r}")
            return corrected
        return posted

    def render(self) -> str:
        self._check_validity()

        config = get_form_config()

        # the container is shown or hidden, never the input itself
        container_style = "float: left;"
        if self.is_hidden():
            container_style += " display:none;"

        style = AttributeStore(self._style.without(CONSTANTS.DISPLAY_ATTRIBUTE))
        if CONSTANTS.WIDTH_ATTRIBUTE not in style:
            style.put(CONSTANTS.WIDTH_ATTRIBUTE, f"{config.date_input_width}{CONSTANTS.PIXEL_SUFFIX}")

        output = (
            f'<div{render_attribute("id", f"{self._id}-container")}{render_attribute("style", container_style)}>'
            + self.render_label()
            + "<input"
            + self.render_type()
            + self.render_id()
            + self.render_class()
            + self.render_name()
            + self.render_value()
            + render_attribute("style", style.render())
            + self.render_disabled()
            + render_attribute("maxlength", config.date_input_max_length)
            + self.render_title()
            + self.render_data_attributes()
            + self.render_required()
            + self.render_auto_focus()
            + " />"
            + "</div>\n"
        )
        return output + self.render_invalidations()


class DateRangeInput(CompositeField):
    """
    Two date inputs named ``<name>-from`` and ``<name>-to``.

    The constructor dates are checked against the configured date format;
    a bad date makes render() raise RenderPrecondition.

    Example:
        period = DateRangeInput("period", "01-01-2020", "31-01-2020")
        period.date_from.name   # 'period-from'
        period.get_labels()     # ['Between', 'and']
    """

    _field_type = "date_range"
    input_type = "date_range"

    def __init__(self, name: str, date_from: Optional[str] = None, date_to: Optional[str] = None,
                 submission=None, rule_table=None):
        super().__init__(name, None, submission, rule_table)

        rule = date_format_rule()
        for attribute, value in (("from", date_from), ("to", date_to)):
            if value:
                self._accepts(attribute, value, rule)

        self._date_from = self._adopt(DateInput(name + RANGE_FROM_SUFFIX, date_from, self._submission, self._rule_table))
        self._date_to = self._adopt(DateInput(name + RANGE_TO_SUFFIX, date_to, self._submission, self._rule_table))

        self.set_labels(CONSTANTS.DATE_RANGE_LABELS)

    @property
    def date_from(self) -> DateInput:
        return self._date_from

    @property
    def date_to(self) -> DateInput:
        return self._date_to

    def set_labels(self, labels: Sequence[str]) -> "DateRangeInput":
        """Labels for the dates: ``(from, to)``."""
        if self._accepts("labels", labels, "array"):
            label_from, label_to = (list(labels) + [None, None])[:2]
            self._date_from.set_label(label_from)
            self._date_to.set_label(label_to)
        return self

    def get_labels(self) -> List[Optional[str]]:
        return [self._date_from.label, self._date_to.label]

    def _render_children(self) -> str:
        return self._date_from.render() + self._date_to.render()
