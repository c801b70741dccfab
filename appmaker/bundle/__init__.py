"""Snippet bundle model and persistence."""

from .model import SnippetBundle, estimate_size
from .store import ProjectNotFoundError, ProjectStore, ProjectStoreError

__all__ = [
    "SnippetBundle",
    "estimate_size",
    "ProjectStore",
    "ProjectStoreError",
    "ProjectNotFoundError",
]
