"""Preview composition and the isolated frame it is loaded into."""

from .document import PreviewDocument, compose_document
from .frame import PREVIEW_HEADERS, SANDBOX_POLICY, PreviewFrame, render

__all__ = [
    "PreviewDocument",
    "compose_document",
    "PreviewFrame",
    "PREVIEW_HEADERS",
    "SANDBOX_POLICY",
    "render",
]
