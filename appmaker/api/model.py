"""Pydantic models for the public API surface."""

from __future__ import annotations

from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..bundle import SnippetBundle


class ProjectSaveRequest(BaseModel):
    name: str = Field(
        "",
        description="Project name; saving an existing name replaces it",
        validate_default=True,
    )
    description: str = Field("", description="Free text shown in the project list")
    markup: str = Field("", validation_alias=AliasChoices("markup", "html"))
    style: str = Field("", validation_alias=AliasChoices("style", "css"))
    script: str = Field("", validation_alias=AliasChoices("script", "js"))

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Project name is required")
        return cleaned

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: str) -> str:
        return value.strip()

    def to_bundle(self) -> SnippetBundle:
        return SnippetBundle.create(
            name=self.name,
            description=self.description,
            markup=self.markup,
            style=self.style,
            script=self.script,
        )


class PreviewRequest(BaseModel):
    name: str = Field("Untitled", description="Label used in logs only")
    markup: str = Field("", validation_alias=AliasChoices("markup", "html"))
    style: str = Field("", validation_alias=AliasChoices("style", "css"))
    script: str = Field("", validation_alias=AliasChoices("script", "js"))

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_bundle(self) -> SnippetBundle:
        return SnippetBundle(
            name=self.name,
            markup=self.markup,
            style=self.style,
            script=self.script,
        )


class ProjectListResponse(BaseModel):
    projects: List[SnippetBundle]


class ProjectResponse(BaseModel):
    project: SnippetBundle


class ProjectSaveResponse(BaseModel):
    success: bool = True
    project: SnippetBundle


class SuccessResponse(BaseModel):
    success: bool = True


class PreviewResponse(SuccessResponse):
    revision: int


__all__ = [
    "ProjectSaveRequest",
    "PreviewRequest",
    "ProjectListResponse",
    "ProjectResponse",
    "ProjectSaveResponse",
    "SuccessResponse",
    "PreviewResponse",
]
