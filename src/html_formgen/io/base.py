"""Protocols for submission sources."""

from typing import Protocol, Any, Optional

from .submission import UploadedFile


class SubmissionSource(Protocol):
    """Protocol for the read-only data of one form post."""

    def get(self, name: str) -> Any:
        ...

    def is_posted(self, name: str) -> bool:
        ...

    def get_file(self, name: str) -> Optional[UploadedFile]:
        ...

    def is_empty(self) -> bool:
        ...
