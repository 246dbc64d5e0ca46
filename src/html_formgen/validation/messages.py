"""
Validation message catalogue.

Messages live in YAML files, one per locale (``lang/en.yaml``). A message
is a template with ``:attribute`` and rule parameter placeholders.
"""

from importlib import resources
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence
import logging

import yaml

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"
FALLBACK_MESSAGE = "The :attribute field is invalid."

# Placeholder names filled from a rule's parameters, in order
PARAMETER_PLACEHOLDERS: Dict[str, Sequence[str]] = {
    "after": ("date",),
    "before": ("date",),
    "between": ("min", "max"),
    "date_format": ("format",),
    "digits": ("digits",),
    "max": ("max",),
    "min": ("min",),
    "size": ("size",),
}

# Rules whose parameters are a value list, rendered as ":values"
VALUE_LIST_RULES = frozenset({"in", "not_in", "all_in"})


def format_attribute_label(name: str) -> str:
    """Human label for a field name: 'my_name' -> 'my name', 'range-from' -> 'range from'."""
    return name.replace("_", " ").replace("-", " ").strip()


def _load_yaml(path) -> Dict[str, str]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Message file {path} must contain a mapping, got {type(data).__name__}")
    return {str(key): str(value) for key, value in data.items()}


class MessageCatalog:
    """
    Resolves rule failures to human-readable messages.

    Example:
        catalog = MessageCatalog.load("en")
        catalog.resolve("between", "age", ("18", "65"))
        # 'The age must be between 18 and 65.'
    """

    def __init__(self, messages: Mapping[str, str], locale: str = "en"):
        self.locale = locale
        self._messages = dict(messages)

    @classmethod
    def load(cls, locale: str = "en", messages_dir: Optional[str] = None) -> "MessageCatalog":
        """
        Load the catalogue for a locale.

        Args:
            locale: Locale code, matches the YAML file name
            messages_dir: Directory searched before the bundled messages

        Returns:
            MessageCatalog; falls back to the bundled English messages when the
            locale is unknown
        """
        if messages_dir:
            custom = Path(messages_dir) / f"{locale}.yaml"
            if custom.is_file():
                logger.debug(f"Loading validation messages from {custom}")
                return cls(_load_yaml(custom), locale)
            logger.warning(f"No message file {custom}, falling back to bundled messages")

        lang_dir = resources.files("html_formgen.validation").joinpath("lang")
        bundled = lang_dir.joinpath(f"{locale}.yaml")
        if not bundled.is_file():
            logger.warning(f"No bundled messages for locale '{locale}', using 'en'")
            locale, bundled = "en", lang_dir.joinpath("en.yaml")
        return cls(_load_yaml(bundled), locale)

    def template(self, rule: str) -> str:
        return self._messages.get(rule) or self._messages.get(DEFAULT_KEY, FALLBACK_MESSAGE)

    def resolve(self, rule: str, label: str, parameters: Sequence[str] = ()) -> str:
        """
        Render the message for a failed rule.

        Args:
            rule: Rule name
            label: Human label of the field
            parameters: Parameters of the failed rule spec

        Returns:
            The rendered message
        """
        return self.render(self.template(rule), rule, label, parameters)

    @staticmethod
    def render(template: str, rule: str, label: str, parameters: Sequence[str] = ()) -> str:
        """Fill ``:attribute`` and the rule's parameter placeholders into a template."""
        replacements = {}
        for placeholder, value in zip(PARAMETER_PLACEHOLDERS.get(rule, ()), parameters):
            replacements[placeholder] = str(value)
        if rule in VALUE_LIST_RULES:
            replacements["values"] = ", ".join(str(value) for value in parameters)

        # longest placeholder first so ':attribute' is never hit by a shorter one
        message = template.replace(":attribute", label)
        for placeholder in sorted(replacements, key=len, reverse=True):
            message = message.replace(f":{placeholder}", replacements[placeholder])
        return message
