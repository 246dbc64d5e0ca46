"""
Core utilities.

Leaf components with no dependency on the field or validation layers.
"""

from .attribute_store import AttributeStore
from .value_utils import is_blank, as_list

__all__ = [
    "AttributeStore",
    "is_blank",
    "as_list",
]
