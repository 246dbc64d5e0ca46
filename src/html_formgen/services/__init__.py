"""Stateless services used by fields and forms."""

from .shared_attribute_service import SharedAttributeService

__all__ = [
    "SharedAttributeService",
]
