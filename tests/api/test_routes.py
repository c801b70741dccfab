import inspect

import pytest
from fastapi import HTTPException

from appmaker.api.model import PreviewRequest, ProjectSaveRequest
from appmaker.api.routes import (
    clear_preview,
    delete_project,
    get_project,
    list_projects,
    preview_project,
    save_project,
    show_preview,
    update_preview,
)
from appmaker.bundle import ProjectStore, ProjectStoreError
from appmaker.render import PREVIEW_HEADERS, PreviewFrame


class _BrokenStore:
    def list_all(self):
        raise ProjectStoreError("disk on fire")

    def get_by_id(self, project_id):
        raise ProjectStoreError("disk on fire")

    def save(self, bundle):
        raise ProjectStoreError("disk on fire")

    def delete_by_id(self, project_id):
        raise ProjectStoreError("disk on fire")


@pytest.fixture
def store(tmp_path):
    return ProjectStore(tmp_path / "projects.json")


def test_list_projects_empty_store(store):
    response = list_projects(store=store)

    assert response.projects == []


def test_save_then_list_and_get(store):
    payload = ProjectSaveRequest(
        name="  Demo  ",
        markup="<h1>Hi</h1>",
        style="h1{color:red}",
        script="console.log(1)",
    )

    saved = save_project(payload=payload, store=store)
    listed = list_projects(store=store)
    fetched = get_project(project_id=saved.project.id, store=store)

    assert saved.success is True
    assert saved.project.name == "Demo"
    assert saved.project.size_estimate == "38 B"
    assert [project.id for project in listed.projects] == [saved.project.id]
    assert fetched.project.markup == "<h1>Hi</h1>"


def test_save_same_name_twice_keeps_latest(store):
    save_project(payload=ProjectSaveRequest(name="X", markup="<p>1</p>"), store=store)
    second = save_project(payload=ProjectSaveRequest(name="X", markup="<p>2</p>"), store=store)

    listed = list_projects(store=store)

    assert len(listed.projects) == 1
    assert listed.projects[0].markup == "<p>2</p>"
    assert listed.projects[0].id == second.project.id


def test_get_unknown_project_is_404(store):
    with pytest.raises(HTTPException) as excinfo:
        get_project(project_id="missing", store=store)

    assert excinfo.value.status_code == 404
    assert excinfo.value.detail == "Project not found"


def test_delete_project(store):
    keep = save_project(payload=ProjectSaveRequest(name="keep"), store=store)
    drop = save_project(payload=ProjectSaveRequest(name="drop"), store=store)

    response = delete_project(project_id=drop.project.id, store=store)
    listed = list_projects(store=store)

    assert response.success is True
    assert [project.id for project in listed.projects] == [keep.project.id]


def test_delete_unknown_project_is_404(store):
    with pytest.raises(HTTPException) as excinfo:
        delete_project(project_id="missing", store=store)

    assert excinfo.value.status_code == 404
    assert list_projects(store=store).projects == []


@pytest.mark.parametrize(
    ("call", "message"),
    [
        (lambda s: list_projects(store=s), "Failed to load projects"),
        (lambda s: get_project(project_id="x", store=s), "Failed to load project"),
        (lambda s: save_project(payload=ProjectSaveRequest(name="x"), store=s), "Failed to save project"),
        (lambda s: delete_project(project_id="x", store=s), "Failed to delete project"),
    ],
)
def test_store_failures_become_500(call, message):
    with pytest.raises(HTTPException) as excinfo:
        call(_BrokenStore())

    assert excinfo.value.status_code == 500
    assert excinfo.value.detail == message


@pytest.mark.asyncio
async def test_update_and_show_preview():
    frame = PreviewFrame()

    first = await update_preview(payload=PreviewRequest(markup="<p>a</p>"), frame=frame)
    second = await update_preview(
        payload=PreviewRequest(markup="<p>b</p>", style="p{}", script="go()"),
        frame=frame,
    )
    response = await show_preview(frame=frame)

    assert (first.revision, second.revision) == (1, 2)
    body = response.body.decode("utf-8")
    assert "<p>b</p>" in body
    assert "<p>a</p>" not in body
    assert "<script>go()</script>" in body
    assert response.headers["content-security-policy"] == PREVIEW_HEADERS["Content-Security-Policy"]


def test_preview_stored_project(store):
    saved = save_project(
        payload=ProjectSaveRequest(name="Demo", markup="<h1>Hi</h1>", style="h1{color:red}"),
        store=store,
    )

    response = preview_project(project_id=saved.project.id, store=store)

    body = response.body.decode("utf-8")
    assert "<style>h1{color:red}</style>" in body
    assert "<h1>Hi</h1>" in body
    assert "content-security-policy" in response.headers


def test_preview_unknown_project_is_404(store):
    with pytest.raises(HTTPException) as excinfo:
        preview_project(project_id="missing", store=store)

    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_clear_preview_blanks_frame_with_new_revision():
    frame = PreviewFrame()
    await update_preview(payload=PreviewRequest(markup="<p>a</p>"), frame=frame)

    cleared = await clear_preview(frame=frame)
    response = await show_preview(frame=frame)

    assert cleared.success is True
    assert cleared.revision == 2
    assert response.body == b""


@pytest.mark.parametrize(
    "route",
    [list_projects, save_project, get_project, delete_project, preview_project],
)
def test_store_routes_run_in_threadpool(route):
    assert not inspect.iscoroutinefunction(route)
