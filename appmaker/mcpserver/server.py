"""FastMCP server exposing project storage and preview rendering as MCP tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import HTTPException
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import ValidationError

from ..api.model import PreviewRequest, ProjectSaveRequest
from ..api.service import (
    ApiSettings,
    delete_project_service,
    get_project_service,
    list_projects_service,
    save_project_service,
)
from ..bundle import ProjectStore
from ..render import PreviewFrame, compose_document

logger = logging.getLogger("appmaker")


class ServiceContext:
    """Lazy dependency container shared by the HTTP routes and MCP tools."""

    def __init__(self, settings: ApiSettings | None = None) -> None:
        self._settings = settings
        self._store: ProjectStore | None = None
        self._frame: PreviewFrame | None = None

    @property
    def settings(self) -> ApiSettings:
        if self._settings is None:
            self._settings = ApiSettings.from_env()
        return self._settings

    def store(self) -> ProjectStore:
        if self._store is None:
            self._store = ProjectStore(self.settings.projects_file)
        return self._store

    def frame(self) -> PreviewFrame:
        if self._frame is None:
            self._frame = PreviewFrame()
        return self._frame


def _handle_http_exception(exc: HTTPException, *, default_message: str) -> ToolError:
    detail = exc.detail if isinstance(exc.detail, str) else None
    message = detail or default_message
    return ToolError(message)


def _handle_validation_error(exc: ValidationError) -> ToolError:
    errors = exc.errors()
    if errors:
        ctx_error = (errors[0].get("ctx") or {}).get("error")
        return ToolError(str(ctx_error or errors[0].get("msg", "Invalid input")))
    return ToolError("Invalid input")


def list_projects_tool(services: ServiceContext) -> Dict[str, Any]:
    try:
        response = list_projects_service(services.store())
    except HTTPException as exc:
        raise _handle_http_exception(exc, default_message="Failed to load projects")
    return response.model_dump(mode="json", by_alias=True)


def get_project_tool(services: ServiceContext, project_id: str) -> Dict[str, Any]:
    try:
        response = get_project_service(project_id, services.store())
    except HTTPException as exc:
        raise _handle_http_exception(exc, default_message="Failed to load project")
    return response.model_dump(mode="json", by_alias=True)


def save_project_tool(
    services: ServiceContext,
    *,
    name: str,
    description: str = "",
    markup: str = "",
    style: str = "",
    script: str = "",
) -> Dict[str, Any]:
    try:
        payload = ProjectSaveRequest(
            name=name,
            description=description,
            markup=markup,
            style=style,
            script=script,
        )
    except ValidationError as exc:
        raise _handle_validation_error(exc)

    try:
        response = save_project_service(payload, services.store())
    except HTTPException as exc:
        raise _handle_http_exception(exc, default_message="Failed to save project")
    return response.model_dump(mode="json", by_alias=True)


def delete_project_tool(services: ServiceContext, project_id: str) -> Dict[str, Any]:
    try:
        response = delete_project_service(project_id, services.store())
    except HTTPException as exc:
        raise _handle_http_exception(exc, default_message="Failed to delete project")
    return response.model_dump()


def render_preview_tool(markup: str = "", style: str = "", script: str = "") -> str:
    bundle = PreviewRequest(markup=markup, style=style, script=script).to_bundle()
    return compose_document(bundle).to_html()


def create_server(services: ServiceContext | None = None) -> FastMCP:
    """Create a FastMCP server wired to the project services."""

    services = services or ServiceContext()
    server = FastMCP("App Maker MCP Server")

    @server.tool(
        name="list_projects",
        description="List saved projects, most recently saved first.",
        tags={"projects"},
    )
    def list_projects() -> Dict[str, Any]:
        return list_projects_tool(services)

    @server.tool(
        name="get_project",
        description="Fetch one saved project by its id.",
        tags={"projects"},
    )
    def get_project(project_id: str) -> Dict[str, Any]:
        return get_project_tool(services, project_id)

    @server.tool(
        name="save_project",
        description=(
            "Save an HTML/CSS/JS project. Saving under a name that already exists"
            " replaces the stored project of that name."
        ),
        tags={"projects"},
    )
    def save_project(
        name: str,
        description: str = "",
        markup: str = "",
        style: str = "",
        script: str = "",
    ) -> Dict[str, Any]:
        return save_project_tool(
            services,
            name=name,
            description=description,
            markup=markup,
            style=style,
            script=script,
        )

    @server.tool(
        name="delete_project",
        description="Delete a saved project by its id.",
        tags={"projects"},
    )
    def delete_project(project_id: str) -> Dict[str, Any]:
        return delete_project_tool(services, project_id)

    @server.tool(
        name="render_preview",
        description=(
            "Compose markup, style and script into the standalone HTML document"
            " the live preview would display."
        ),
        tags={"preview"},
    )
    def render_preview(markup: str = "", style: str = "", script: str = "") -> str:
        return render_preview_tool(markup, style, script)

    return server


__all__ = [
    "ServiceContext",
    "create_server",
    "list_projects_tool",
    "get_project_tool",
    "save_project_tool",
    "delete_project_tool",
    "render_preview_tool",
]
