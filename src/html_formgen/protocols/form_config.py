"""Global configuration for field rendering and validation.

Widths, the date format, the message locale and markup separators are read
from here at the point of use, so changing the config affects later renders.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class FormGenConfig:
    """Base configuration for form generation behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        locale: Validation message catalogue to load
        messages_dir: Directory with ``<locale>.yaml`` files overriding the bundled ones
        date_format: Format date fields are validated against
        date_input_width: Width in pixels of date inputs rendered without one
        date_input_max_length: maxlength attribute of date inputs
        address_width: Initial width of address sub-fields
        address_house_number_width: Width of the house number sub-field
        address_placeholder_style: Style of address sub-fields until a value is selected
        file_input_size: size attribute of file inputs rendered without one
        error_separator: Separator used when joining errors into one invalidation
    """

    locale: str = "en"
    messages_dir: Optional[str] = None
    date_format: str = "d-m-Y"
    date_input_width: int = 80
    date_input_max_length: int = 10
    address_width: int = 150
    address_house_number_width: int = 50
    address_placeholder_style: str = "font-style:italic; color:#888;"
    file_input_size: int = 40
    error_separator: str = "<br/>\n"


# Global config instance (set by application)
_form_config: Optional[FormGenConfig] = None


def set_form_config(config: Optional[FormGenConfig]) -> None:
    """Set the global form generation configuration.

    Args:
        config: FormGenConfig instance, or None to restore the defaults
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormGenConfig:
    """Get the current form generation configuration.

    Returns:
        Current FormGenConfig or default if not set
    """
    if _form_config is None:
        return FormGenConfig()
    return _form_config
