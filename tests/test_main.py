import json

import pytest

import main
from appmaker.bundle import ProjectStore, SnippetBundle


@pytest.fixture
def projects_file(tmp_path):
    path = tmp_path / "projects.json"
    store = ProjectStore(path)
    store.save(SnippetBundle.create(name="Demo", markup="<h1>Hi</h1>", style="h1{color:red}"))
    return path


def test_list_prints_projects(projects_file, capsys):
    main.main(["--projects-file", str(projects_file), "list"])

    printed = json.loads(capsys.readouterr().out)
    assert [project["name"] for project in printed] == ["Demo"]


def test_render_writes_document(projects_file, tmp_path):
    project_id = ProjectStore(projects_file).list_all()[0].id
    output = tmp_path / "preview.html"

    main.main(["--projects-file", str(projects_file), "render", project_id, "-o", str(output)])

    html = output.read_text(encoding="utf-8")
    assert "<h1>Hi</h1>" in html
    assert "<style>h1{color:red}</style>" in html


def test_render_unknown_project_exits_nonzero(projects_file):
    with pytest.raises(SystemExit) as excinfo:
        main.main(["--projects-file", str(projects_file), "render", "missing"])

    assert excinfo.value.code == 1
