"""
Composite fields: one logical field expressed as several owned child fields.

The composite is the attribute subject of its children. Its submitted value,
posted state and validity are derived from the children on every access.
"""

from abc import abstractmethod
from typing import Any, AbstractSet, List, Optional, Sequence, Tuple
import logging

from html_formgen.core import is_blank
from html_formgen.io import SubmissionSource
from html_formgen.services import SharedAttributeService
from html_formgen.validation import RuleTable

from .field_constants import CONSTANTS
from .field_node import INPUT_OVERRULE_POST, FieldNode, is_flag_set

logger = logging.getLogger(__name__)


class CompositeField(FieldNode):
    """
    Abstract composite field.

    Subclasses create their children in __init__ through _adopt() and
    implement _render_children().
    """

    # Attributes that stay per child when copying down before render
    excluded_attributes: AbstractSet[str] = CONSTANTS.COMPOSITE_EXCLUDED_ATTRIBUTES

    def __init__(self, name: str, value: Any = None,
                 submission: Optional[SubmissionSource] = None,
                 rule_table: Optional[RuleTable] = None):
        self._children: List[FieldNode] = []
        super().__init__(name, value, submission, rule_table)

    def _adopt(self, child: FieldNode) -> FieldNode:
        """Take ownership of a child and become its attribute subject."""
        self._children.append(child)
        self.register_dependent(child)
        logger.debug(f"{self!r} adopted {child!r}")
        return child

    @property
    def children(self) -> List[FieldNode]:
        return list(self._children)

    def _capture_posted(self) -> None:
        # Posted state is derived from the children
        pass

    @property
    def posted(self) -> Optional[Tuple[Any, ...]]:
        """Tuple of the children's submitted values, or None when no child was submitted."""
        values = tuple(child.posted for child in self._children)
        if all(is_blank(value) for value in values):
            return None
        return values

    def is_posted(self) -> bool:
        return bool(self._children) and all(child.is_posted() for child in self._children)

    def is_valid(self) -> bool:
        return super().is_valid() and all(child.is_valid() for child in self._children)

    def clear_invalidations(self) -> "CompositeField":
        super().clear_invalidations()
        # the invalid class reached the children through broadcasting
        for child in self._children:
            if child.is_valid():
                child.remove_class(CONSTANTS.INVALID_CLASS)
        return self

    def has_parameter_errors(self) -> bool:
        return super().has_parameter_errors() or any(child.has_parameter_errors() for child in self._children)

    def set_selected(self, selected: Sequence[Any], flag: int = 0) -> "CompositeField":
        """
        Select values positionally on the children.

        Args:
            selected: One value per child, in child order
            flag: INPUT_OVERRULE_POST to let the selection win over the submission
        """
        if is_blank(self.posted) or is_flag_set(flag, INPUT_OVERRULE_POST):
            self._apply_selection(tuple(selected), flag)
        return self

    def _apply_selection(self, selected: Tuple[Any, ...], flag: int) -> None:
        self._selected = selected
        for child, value in zip(self._children, selected):
            child.set_selected(value, flag)

    def render(self) -> str:
        self._check_validity()
        SharedAttributeService.copy_down(self, self._children, self.excluded_attributes)
        return self._render_children() + self.render_invalidations()

    @abstractmethod
    def _render_children(self) -> str:
        """Render the children after the shared attributes were copied down."""
        pass
