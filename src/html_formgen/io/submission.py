"""
Immutable snapshot of submitted form data.

Fields read their submitted value from a SubmissionContext passed into
their constructor, so nothing depends on ambient request state and tests
can build submissions directly.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import logging

from html_formgen.core.value_utils import is_blank

logger = logging.getLogger(__name__)

SubmittedValue = Union[str, Tuple[str, ...]]

ARRAY_MARKER = "[]"


def _strip_array_marker(name: str) -> str:
    return name[:-len(ARRAY_MARKER)] if name.endswith(ARRAY_MARKER) else name


@dataclass(frozen=True)
class UploadedFile:
    """One entry of the file-upload registry."""
    filename: str
    tmp_path: Optional[Path]          # Temporary storage handle, None when the upload failed
    content_type: Optional[str] = None
    size: int = 0


@dataclass(frozen=True)
class SubmissionContext:
    """
    Read-only view of one form post.

    Values are either a single string or a tuple of strings (multi-value
    fields such as checkboxes). Keys posted with a trailing ``[]`` are
    stored without it, so a field named ``colors`` and one named
    ``colors[]`` read the same entry.

    Example:
        submission = SubmissionContext.from_pairs([("colors[]", "red"), ("colors[]", "blue")])
        submission.get("colors")   # ('red', 'blue')
    """
    values: Mapping[str, SubmittedValue] = field(default_factory=dict)
    files: Mapping[str, UploadedFile] = field(default_factory=dict)

    def __post_init__(self):
        normalized: Dict[str, SubmittedValue] = {}
        for name, value in self.values.items():
            if isinstance(value, (list, tuple)):
                value = tuple(str(item) for item in value)
            elif value is not None:
                value = str(value)
            normalized[_strip_array_marker(name)] = value
        object.__setattr__(self, "values", MappingProxyType(normalized))
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    @classmethod
    def empty(cls) -> "SubmissionContext":
        return cls()

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Any]],
                   files: Optional[Mapping[str, UploadedFile]] = None) -> "SubmissionContext":
        """
        Build a context from raw (key, value) pairs, e.g. a decoded form body.

        Repeated keys and keys ending in ``[]`` collect into tuples.

        Args:
            pairs: Iterable of (name, value)
            files: Optional file-upload registry keyed by field name

        Returns:
            New SubmissionContext
        """
        collected: Dict[str, List[str]] = {}
        multi: set = set()
        for name, value in pairs:
            key = _strip_array_marker(name)
            if key != name or key in collected:
                multi.add(key)
            collected.setdefault(key, []).append(str(value))

        values: Dict[str, SubmittedValue] = {
            key: tuple(items) if key in multi else items[0]
            for key, items in collected.items()
        }
        logger.debug(f"Built submission with {len(values)} value(s) and {len(files or {})} file(s)")
        return cls(values=values, files=files or {})

    def get(self, name: str) -> Optional[SubmittedValue]:
        return self.values.get(_strip_array_marker(name))

    def is_posted(self, name: str) -> bool:
        """True iff the submission holds a non-blank entry for ``name``."""
        return not is_blank(self.get(name))

    def get_file(self, name: str) -> Optional[UploadedFile]:
        return self.files.get(_strip_array_marker(name))

    def is_empty(self) -> bool:
        return not self.values and not self.files
