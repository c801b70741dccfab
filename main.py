import argparse
import json
import logging
import sys

from appmaker.api.service import ApiSettings
from appmaker.bundle import ProjectStore, ProjectStoreError
from appmaker.exception_handler import configure_logging
from appmaker.render import compose_document


logger = logging.getLogger("appmaker")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Serve and inspect App Maker projects"
    )
    parser.add_argument(
        "--projects-file",
        type=str,
        help="Path to the JSON project file (default: $PROJECTS_FILE or projects.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the HTTP API (default command)")
    serve.add_argument("--host", type=str, help="Bind address (default: $HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Bind port (default: $PORT or 3000)")
    serve.add_argument(
        "--static-dir",
        type=str,
        help="Directory of editor assets to serve at / (default: $STATIC_DIR)",
    )

    subparsers.add_parser("list", help="Print saved projects as JSON")

    render = subparsers.add_parser("render", help="Write a project's preview document")
    render.add_argument("project_id", help="Id of the saved project")
    render.add_argument(
        "--output",
        "-o",
        type=str,
        help="Output file path (if not specified, prints to stdout)",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> ApiSettings:
    settings = ApiSettings.from_env()
    if args.projects_file:
        settings.projects_file = args.projects_file
    if args.log_level:
        settings.log_level = args.log_level
    if getattr(args, "host", None):
        settings.host = args.host
    if getattr(args, "port", None):
        settings.port = args.port
    if getattr(args, "static_dir", None):
        settings.static_dir = args.static_dir
    return settings


def _serve(settings: ApiSettings) -> None:
    import uvicorn

    from appmaker.api.server import create_app

    logger.info("App Maker running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def _list(store: ProjectStore) -> int:
    projects = store.list_all()
    print(json.dumps([project.to_record() for project in projects], indent=2, ensure_ascii=False))
    return 0


def _render(store: ProjectStore, project_id: str, output: str | None) -> int:
    project = store.get_by_id(project_id)
    if project is None:
        print(f"Error: Project not found: {project_id}", file=sys.stderr)
        return 1

    html = compose_document(project).to_html()
    if output:
        with open(output, "w", encoding="utf-8") as file_handle:
            file_handle.write(html)
        print(f"✅ Preview saved to: {output}", file=sys.stderr)
    else:
        sys.stdout.write(html)
    return 0


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    settings = _settings_from_args(args)
    configure_logging(settings.log_level)

    command = args.command or "serve"
    if command == "serve":
        _serve(settings)
        return

    store = ProjectStore(settings.projects_file)
    try:
        if command == "list":
            code = _list(store)
        else:
            code = _render(store, args.project_id, args.output)
    except ProjectStoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
