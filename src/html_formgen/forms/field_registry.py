"""
Field registry with metaclass auto-registration.

Field kinds register themselves under their ``_field_type`` id when their
classes are defined; FieldFactory.create() looks them up here.
Abstract classes and classes that only inherit an id are not registered.
"""

from abc import ABCMeta
from typing import Dict, Type
import logging

logger = logging.getLogger(__name__)

# Field type id -> field class
FIELD_IMPLEMENTATIONS: Dict[str, Type] = {}


class FieldMeta(ABCMeta):
    """
    Registers concrete field classes that declare their own ``_field_type``.

    Example:
        class Stars(Text):
            _field_type = "stars"

        get_field_class("stars")   # Stars
    """

    def __new__(cls, name, bases, attrs):
        new_class = super().__new__(cls, name, bases, attrs)

        if getattr(new_class, '__abstractmethods__', None):
            logger.debug(f"Not registering abstract field {name}")
            return new_class

        field_type = attrs.get('_field_type')
        if field_type is None:
            return new_class

        existing = FIELD_IMPLEMENTATIONS.get(field_type)
        if existing is not None:
            logger.warning(f"Field type '{field_type}' was registered to {existing.__name__}, now {name}")

        FIELD_IMPLEMENTATIONS[field_type] = new_class
        logger.debug(f"Registered field {name} as '{field_type}'")
        return new_class


def get_field_class(field_type: str) -> Type:
    """
    Look up a field class by type id.

    Raises:
        KeyError: If field_type not registered
    """
    try:
        return FIELD_IMPLEMENTATIONS[field_type]
    except KeyError:
        raise KeyError(
            f"No field registered with type '{field_type}'. "
            f"Available fields: {sorted(FIELD_IMPLEMENTATIONS)}"
        ) from None
