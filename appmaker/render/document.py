"""Composition of a bundle into a single standalone preview document."""

from __future__ import annotations

from dataclasses import dataclass

from ..bundle import SnippetBundle

_HEAD = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "<head>\n"
    '<meta charset="utf-8">\n'
    '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
    "<style>"
)
_BODY_OPEN = "</style>\n</head>\n<body>\n"
_SCRIPT_OPEN = "\n<script>"
_TAIL = "</script>\n</body>\n</html>\n"


@dataclass(frozen=True, slots=True)
class PreviewDocument:
    """The three authored blobs in the fixed preview layout.

    Content is inserted as-is. Nothing is escaped, so a stray ``</style>`` or
    ``</script>`` in the input ends its block early exactly as it would in a
    hand written page.
    """

    markup: str
    style: str
    script: str

    def to_html(self) -> str:
        return "".join(
            (
                _HEAD,
                self.style,
                _BODY_OPEN,
                self.markup,
                _SCRIPT_OPEN,
                self.script,
                _TAIL,
            )
        )


def compose_document(bundle: SnippetBundle) -> PreviewDocument:
    return PreviewDocument(markup=bundle.markup, style=bundle.style, script=bundle.script)


__all__ = ["PreviewDocument", "compose_document"]
