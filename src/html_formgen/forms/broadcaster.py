"""
Attribute broadcasting from a subject field to its dependents.

Each field owns one AttributeBroadcaster. Dependents are notified in
registration order with a merge of the subject's propagable attributes.
There is no cycle detection; composites only register the children they own.
"""

from typing import List
import logging

from html_formgen.protocols import AttributePropagation

logger = logging.getLogger(__name__)


class AttributeBroadcaster:
    """Registry of dependents for one subject field."""

    def __init__(self):
        self._dependents: List[AttributePropagation] = []

    def register_dependent(self, dependent: AttributePropagation) -> None:
        """
        Register a dependent that receives the subject's attributes on every notify.

        Raises:
            TypeError: If dependent does not implement AttributePropagation
        """
        if not isinstance(dependent, AttributePropagation):
            raise TypeError(
                f"{type(dependent).__name__} does not implement AttributePropagation"
            )
        if any(existing is dependent for existing in self._dependents):
            return
        self._dependents.append(dependent)

    def unregister_dependent(self, dependent: AttributePropagation) -> None:
        self._dependents = [existing for existing in self._dependents if existing is not dependent]

    @property
    def dependents(self) -> List[AttributePropagation]:
        return list(self._dependents)

    def notify(self, subject: AttributePropagation) -> None:
        """Push subject.get_attributes() into every dependent via set_attributes()."""
        if not self._dependents:
            return
        attributes = subject.get_attributes()
        for dependent in self._dependents:
            logger.debug(f"Broadcasting {sorted(attributes)} to {dependent!r}")
            dependent.set_attributes(attributes)

    def __len__(self) -> int:
        return len(self._dependents)
