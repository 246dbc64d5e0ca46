"""Submission input: the data of one form post."""

from .submission import SubmissionContext, UploadedFile, SubmittedValue
from .base import SubmissionSource

__all__ = [
    "SubmissionContext",
    "UploadedFile",
    "SubmittedValue",
    "SubmissionSource",
]
