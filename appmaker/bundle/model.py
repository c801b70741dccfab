from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def estimate_size(markup: str, style: str, script: str) -> str:
    """Human readable byte size of the three blobs combined."""
    total = sum(len(text.encode("utf-8")) for text in (markup, style, script))
    if total < 1024:
        return f"{total} B"
    return f"{total / 1024:.1f} KB"


class SnippetBundle(BaseModel):
    """A named markup/style/script triple as persisted in the project file.

    Records written by older clients used ``html``/``css``/``js`` and
    ``timestamp``/``size``; those keys are accepted on input, the canonical
    names are always written back.
    """

    id: str = Field(default_factory=_new_id)
    name: str
    description: str = ""
    markup: str = Field("", validation_alias=AliasChoices("markup", "html"))
    style: str = Field("", validation_alias=AliasChoices("style", "css"))
    script: str = Field("", validation_alias=AliasChoices("script", "js"))
    created_at: datetime = Field(
        default_factory=_utcnow,
        validation_alias=AliasChoices("createdAt", "created_at", "timestamp"),
        serialization_alias="createdAt",
    )
    size_estimate: str = Field(
        "",
        validation_alias=AliasChoices("sizeEstimate", "size_estimate", "size"),
        serialization_alias="sizeEstimate",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @classmethod
    def create(
        cls,
        *,
        name: str,
        description: str = "",
        markup: str = "",
        style: str = "",
        script: str = "",
    ) -> "SnippetBundle":
        """Build a fresh bundle with a new id, timestamp and size estimate."""
        return cls(
            name=name,
            description=description,
            markup=markup,
            style=style,
            script=script,
            size_estimate=estimate_size(markup, style, script),
        )

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


__all__ = ["SnippetBundle", "estimate_size"]
