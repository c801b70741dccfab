"""Service-layer helpers for project persistence and preview rendering."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from fastapi import HTTPException

from ..bundle import ProjectNotFoundError, ProjectStore, ProjectStoreError, SnippetBundle
from ..render import PreviewFrame, compose_document, render
from .model import (
    PreviewRequest,
    PreviewResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectSaveRequest,
    ProjectSaveResponse,
    SuccessResponse,
)

logger = logging.getLogger("appmaker")


@dataclass(slots=True)
class ApiSettings:
    """Runtime configuration for the API server."""

    projects_file: str
    static_dir: str | None
    host: str
    port: int
    log_level: str

    @classmethod
    def from_env(cls) -> "ApiSettings":
        def _int_env(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError:
                logger.warning("Invalid integer for %s: %s", name, raw)
                return default

        return cls(
            projects_file=os.getenv("PROJECTS_FILE", "projects.json"),
            static_dir=os.getenv("STATIC_DIR") or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", 3000),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def list_projects_service(store: ProjectStore) -> ProjectListResponse:
    try:
        projects = store.list_all()
    except ProjectStoreError as exc:
        logger.exception("Failed to load projects")
        raise HTTPException(status_code=500, detail="Failed to load projects") from exc
    return ProjectListResponse(projects=projects)


def get_project_service(project_id: str, store: ProjectStore) -> ProjectResponse:
    return ProjectResponse(project=_require_project(project_id, store))


def save_project_service(payload: ProjectSaveRequest, store: ProjectStore) -> ProjectSaveResponse:
    bundle = payload.to_bundle()
    try:
        saved = store.save(bundle)
    except ProjectStoreError as exc:
        logger.exception("Failed to save project %r", payload.name)
        raise HTTPException(status_code=500, detail="Failed to save project") from exc
    return ProjectSaveResponse(project=saved)


def delete_project_service(project_id: str, store: ProjectStore) -> SuccessResponse:
    try:
        store.delete_by_id(project_id)
    except ProjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Project not found") from exc
    except ProjectStoreError as exc:
        logger.exception("Failed to delete project %s", project_id)
        raise HTTPException(status_code=500, detail="Failed to delete project") from exc
    return SuccessResponse()


def preview_service(payload: PreviewRequest, frame: PreviewFrame) -> PreviewResponse:
    render(payload.to_bundle(), frame)
    return PreviewResponse(revision=frame.revision)


def clear_preview_service(frame: PreviewFrame) -> PreviewResponse:
    return PreviewResponse(revision=frame.clear())


def render_project_service(project_id: str, store: ProjectStore) -> str:
    bundle = _require_project(project_id, store)
    return compose_document(bundle).to_html()


def _require_project(project_id: str, store: ProjectStore) -> SnippetBundle:
    try:
        bundle = store.get_by_id(project_id)
    except ProjectStoreError as exc:
        logger.exception("Failed to load project %s", project_id)
        raise HTTPException(status_code=500, detail="Failed to load project") from exc
    if bundle is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return bundle


__all__ = [
    "ApiSettings",
    "list_projects_service",
    "get_project_service",
    "save_project_service",
    "delete_project_service",
    "preview_service",
    "clear_preview_service",
    "render_project_service",
]
