import pytest
from fastmcp.exceptions import ToolError

from appmaker.api.service import ApiSettings
from appmaker.mcpserver.server import (
    ServiceContext,
    create_server,
    delete_project_tool,
    get_project_tool,
    list_projects_tool,
    render_preview_tool,
    save_project_tool,
)


@pytest.fixture
def services(tmp_path):
    settings = ApiSettings(
        projects_file=str(tmp_path / "projects.json"),
        static_dir=None,
        host="127.0.0.1",
        port=3000,
        log_level="INFO",
    )
    return ServiceContext(settings)


def test_save_list_get_delete(services):
    saved = save_project_tool(services, name="Demo", markup="<h1>Hi</h1>")
    project_id = saved["project"]["id"]

    listed = list_projects_tool(services)
    fetched = get_project_tool(services, project_id)
    deleted = delete_project_tool(services, project_id)

    assert [project["name"] for project in listed["projects"]] == ["Demo"]
    assert fetched["project"]["markup"] == "<h1>Hi</h1>"
    assert "createdAt" in fetched["project"]
    assert deleted == {"success": True}
    assert list_projects_tool(services) == {"projects": []}


def test_blank_name_raises_tool_error(services):
    with pytest.raises(ToolError, match="Project name is required"):
        save_project_tool(services, name="  ")


def test_unknown_project_raises_tool_error(services):
    with pytest.raises(ToolError, match="Project not found"):
        get_project_tool(services, "missing")
    with pytest.raises(ToolError, match="Project not found"):
        delete_project_tool(services, "missing")


def test_render_preview_tool_composes_document():
    html = render_preview_tool(markup="<p>x</p>", style="p{}", script="go()")

    assert "<style>p{}</style>" in html
    assert "<p>x</p>" in html
    assert "<script>go()</script>" in html


def test_service_context_reuses_store(services):
    assert services.store() is services.store()
    assert services.frame() is services.frame()


def test_create_server_builds_without_error(services):
    server = create_server(services)

    assert server.name == "App Maker MCP Server"
