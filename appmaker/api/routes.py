"""FastAPI routes for project persistence and live preview."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ..bundle import ProjectStore
from ..render import PREVIEW_HEADERS, PreviewFrame
from .model import (
    PreviewRequest,
    PreviewResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectSaveRequest,
    ProjectSaveResponse,
    SuccessResponse,
)
from .service import (
    ApiSettings,
    clear_preview_service,
    delete_project_service,
    get_project_service,
    list_projects_service,
    preview_service,
    render_project_service,
    save_project_service,
)


def get_settings(request: Request) -> ApiSettings:
    settings = getattr(request.app.state, "settings", None)
    if not isinstance(settings, ApiSettings):
        raise RuntimeError("API settings have not been initialised")
    return settings


def get_store(
    request: Request,
    settings: ApiSettings = Depends(get_settings),
) -> ProjectStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        store = ProjectStore(settings.projects_file)
        request.app.state.store = store
    return store


def get_preview_frame(request: Request) -> PreviewFrame:
    frame = getattr(request.app.state, "preview_frame", None)
    if frame is None:
        frame = PreviewFrame()
        request.app.state.preview_frame = frame
    return frame


router = APIRouter()


# Store routes are plain functions so FastAPI runs their file I/O in its
# threadpool instead of on the event loop.
@router.get("/projects", response_model=ProjectListResponse)
def list_projects(store: ProjectStore = Depends(get_store)) -> ProjectListResponse:
    return list_projects_service(store)


@router.post("/projects", response_model=ProjectSaveResponse)
def save_project(
    payload: ProjectSaveRequest,
    store: ProjectStore = Depends(get_store),
) -> ProjectSaveResponse:
    """Create a project, replacing any stored project with the same name."""

    return save_project_service(payload, store)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
def get_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
) -> ProjectResponse:
    return get_project_service(project_id, store)


@router.delete("/projects/{project_id}", response_model=SuccessResponse)
def delete_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
) -> SuccessResponse:
    return delete_project_service(project_id, store)


@router.get("/projects/{project_id}/preview", response_class=HTMLResponse)
def preview_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
) -> HTMLResponse:
    html = render_project_service(project_id, store)
    return HTMLResponse(content=html, headers=PREVIEW_HEADERS)


@router.post("/preview", response_model=PreviewResponse)
async def update_preview(
    payload: PreviewRequest,
    frame: PreviewFrame = Depends(get_preview_frame),
) -> PreviewResponse:
    """Render unsaved editor content into the shared preview frame."""

    return preview_service(payload, frame)


@router.get("/preview", response_class=HTMLResponse)
async def show_preview(frame: PreviewFrame = Depends(get_preview_frame)) -> HTMLResponse:
    return HTMLResponse(content=frame.document, headers=PREVIEW_HEADERS)


@router.delete("/preview", response_model=PreviewResponse)
async def clear_preview(frame: PreviewFrame = Depends(get_preview_frame)) -> PreviewResponse:
    return clear_preview_service(frame)


__all__ = ["router", "get_settings", "get_store", "get_preview_frame"]
