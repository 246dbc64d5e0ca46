"""
Shared Attribute Service.

One-time pre-render materialization of a composite's attributes onto the
children it owns. Unlike broadcasting this copies every shared attribute
(width included) and goes through the children's additive set_attributes(),
so per-child classes, style and data attributes survive.
"""

from typing import AbstractSet, Iterable, Optional
import logging

from html_formgen.core import is_blank
from html_formgen.protocols import AttributeSet

logger = logging.getLogger(__name__)


class SharedAttributeService:
    """
    Stateless service for copying composite attributes down to children.

    Examples:
        SharedAttributeService.copy_down(address, address.children, CONSTANTS.COMPOSITE_EXCLUDED_ATTRIBUTES)
    """

    @staticmethod
    def collect(source, excludes: Optional[AbstractSet[str]] = None) -> AttributeSet:
        """
        Shared attributes of ``source`` minus the excluded names.

        Blank values are left out so copying never clears what a child set itself.
        """
        excludes = excludes or frozenset()
        return {
            attribute: value
            for attribute, value in source.get_shared_attributes().items()
            if attribute not in excludes and not is_blank(value)
        }

    @staticmethod
    def copy_down(source, targets: Iterable, excludes: Optional[AbstractSet[str]] = None) -> AttributeSet:
        """
        Apply the shared attributes of ``source`` to every target.

        Returns:
            The attribute set that was applied
        """
        attributes = SharedAttributeService.collect(source, excludes)
        for target in targets:
            logger.debug(f"Copying {sorted(attributes)} from {source!r} to {target!r}")
            target.set_attributes(attributes)
        return attributes
