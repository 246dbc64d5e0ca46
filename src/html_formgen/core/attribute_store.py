"""
Ordered attribute container for inline style.

Keeps CSS declarations in insertion order so rendered markup is stable,
and understands the ``"color: red; padding: 8px"`` string form as well as
plain mappings.
"""

from typing import Dict, Iterator, Mapping, Optional, Union
import logging

logger = logging.getLogger(__name__)

StyleInput = Union[str, Mapping[str, str], "AttributeStore", None]


class AttributeStore:
    """
    Ordered key -> value store for one category of attribute.

    Example:
        store = AttributeStore()
        store.merge("color: red; width: 80px")
        store.get("width")   # '80px'
        store.render()       # 'color:red; width:80px;'
    """

    def __init__(self, initial: StyleInput = None):
        self._items: Dict[str, str] = {}
        if initial:
            self.merge(initial)

    @staticmethod
    def parse(style: StyleInput) -> Dict[str, str]:
        """
        Parse a style declaration into an ordered dict.

        Args:
            style: ``"a: b; c: d"`` string, mapping or another store

        Returns:
            Dict of attribute -> value with surrounding whitespace stripped
        """
        if not style:
            return {}
        if isinstance(style, AttributeStore):
            return style.all()
        if isinstance(style, Mapping):
            return {str(key).strip(): str(value).strip() for key, value in style.items()}

        parsed: Dict[str, str] = {}
        for element in style.split(';'):
            element = element.strip()
            if not element:
                continue
            if ':' not in element:
                logger.debug(f"Ignoring style declaration without a value: {element!r}")
                continue
            key, value = element.split(':', 1)
            parsed[key.strip()] = value.strip()
        return parsed

    def put(self, attribute: str, value: str) -> None:
        self._items[attribute] = str(value).strip()

    def get(self, attribute: str, default: Optional[str] = None) -> Optional[str]:
        return self._items.get(attribute, default)

    def forget(self, attribute: str) -> None:
        self._items.pop(attribute, None)

    def merge(self, style: StyleInput) -> None:
        """Add or overwrite the given declarations, leaving the rest untouched."""
        for attribute, value in self.parse(style).items():
            self.put(attribute, value)

    def remove(self, style: StyleInput) -> None:
        """Forget every attribute named in ``style`` (values are ignored)."""
        for attribute in self.parse(style):
            self.forget(attribute)

    def clear(self) -> None:
        self._items.clear()

    def all(self) -> Dict[str, str]:
        """Return a copy of the declarations."""
        return dict(self._items)

    def without(self, *attributes: str) -> Dict[str, str]:
        """Return a copy of the declarations minus the named attributes."""
        return {key: value for key, value in self._items.items() if key not in attributes}

    def is_empty(self) -> bool:
        return not self._items

    def render(self) -> str:
        """Render as an inline style value (``'a:b; c:d;'``), empty when no declarations."""
        if not self._items:
            return ""
        return "; ".join(f"{key}:{value}" for key, value in self._items.items()) + ";"

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeStore):
            return self._items == other._items
        if isinstance(other, Mapping):
            return self._items == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeStore({self._items!r})"
