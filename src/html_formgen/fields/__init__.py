"""
Concrete field kinds.

Importing this package registers every kind in the field registry.
"""

from .text import Text, Email, Password, Custom, Hidden, TextArea
from .buttons import Button, Submit, Reset
from .choice import ChoiceField, Dropdown, Checkbox, Radio
from .date import DateInput, DateRangeInput, pad_date
from .address import AddressInput
from .file import FileInput

__all__ = [
    "Text",
    "Email",
    "Password",
    "Custom",
    "Hidden",
    "TextArea",
    "Button",
    "Submit",
    "Reset",
    "ChoiceField",
    "Dropdown",
    "Checkbox",
    "Radio",
    "DateInput",
    "DateRangeInput",
    "pad_date",
    "AddressInput",
    "FileInput",
]
