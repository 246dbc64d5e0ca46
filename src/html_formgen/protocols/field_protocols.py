"""
Field ABC contracts.

Defines explicit contracts that fields implement, so the broadcaster,
the validation engine and the form coordinator can dispatch with
isinstance checks instead of probing attributes.

Design Philosophy:
- Explicit inheritance over duck typing
- Fail-loud over fail-silent
- Multiple inheritance for composable capabilities
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


AttributeSet = Dict[str, Any]


class AttributePropagation(ABC):
    """
    ABC for fields that take part in attribute propagation.

    A subject hands ``get_attributes()`` to every dependent's
    ``set_attributes()``. Implementations must merge collection-valued
    attributes (classes, style, data attributes) rather than replace them.
    """

    @abstractmethod
    def get_attributes(self) -> AttributeSet:
        """
        Get the attribute subset that is pushed down to dependents.

        Returns:
            Mapping of attribute name to value
        """
        pass

    @abstractmethod
    def set_attributes(self, attributes: AttributeSet) -> Any:
        """
        Apply an attribute set received from a subject.

        Args:
            attributes: Partial attribute set, merged into the current state
        """
        pass


class ValidationTarget(ABC):
    """
    ABC for anything the validation engine can register rules for.

    The engine reads the submission key and the submitted data from the
    target at registration time.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The submission key."""
        pass

    @property
    @abstractmethod
    def posted(self) -> Any:
        """
        The submitted value.

        Returns:
            Scalar string, sequence of strings, or None when nothing was submitted
        """
        pass

    @abstractmethod
    def is_posted(self) -> bool:
        """True when the submission holds a non-blank entry for this target."""
        pass


class OptionsCapable(ABC):
    """
    ABC for fields with a fixed set of selectable values.

    Dropdowns, checkboxes and radio groups implement this; the form
    coordinator registers an implicit allow-list rule for them.
    """

    @abstractmethod
    def allowed_values(self) -> List[str]:
        """
        Get the values a submission may contain.

        Returns:
            Option values in display order (empty when no options were added)
        """
        pass

    @abstractmethod
    def get_categories(self) -> Optional[List[str]]:
        """Get the option categories, if any were set."""
        pass
