"""Backend for the App Maker live HTML/CSS/JS editor."""

from .bundle import ProjectStore, SnippetBundle
from .render import PreviewDocument, PreviewFrame, compose_document, render

__all__ = [
    "ProjectStore",
    "SnippetBundle",
    "PreviewDocument",
    "PreviewFrame",
    "compose_document",
    "render",
]
