"""Isolated preview surface and the render entrypoint."""

from __future__ import annotations

import logging
import threading

from ..bundle import SnippetBundle
from .document import compose_document

logger = logging.getLogger("appmaker")

# Scripts may run, but the document gets an opaque origin and cannot reach
# the editor's cookies, storage or DOM.
SANDBOX_POLICY = "sandbox allow-scripts allow-modals allow-forms allow-popups"

PREVIEW_HEADERS = {
    "Content-Security-Policy": SANDBOX_POLICY,
    "X-Content-Type-Options": "nosniff",
    "Cache-Control": "no-store",
}


class PreviewFrame:
    """Disposable document holder standing in for the preview iframe.

    Each load replaces the whole document; nothing from a previous load
    survives.
    """

    def __init__(self) -> None:
        self._document = ""
        self._revision = 0
        self._lock = threading.Lock()

    @property
    def document(self) -> str:
        return self._document

    @property
    def revision(self) -> int:
        return self._revision

    def load(self, html: str) -> int:
        with self._lock:
            self._document = html
            self._revision += 1
            return self._revision

    def clear(self) -> int:
        """Blank the frame; like any load, this is a new revision."""
        return self.load("")


def render(bundle: SnippetBundle, frame: PreviewFrame) -> None:
    """Compose ``bundle`` and load the result into ``frame``."""
    revision = frame.load(compose_document(bundle).to_html())
    logger.debug("Rendered preview revision %d (%r)", revision, bundle.name)


__all__ = ["PREVIEW_HEADERS", "PreviewFrame", "SANDBOX_POLICY", "render"]
