"""Entry-point for the Echo lecture recorder tools."""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
import uvicorn

from echo_recorder.bootstrap import BootstrapError, initialize_app
from echo_recorder.config import AppConfig, ConfigError, load_config
from echo_recorder.logging_utils import prepare_logging, resolve_log_level
from echo_recorder.services.calendar import dates_with_lectures, lectures_for_date
from echo_recorder.services.naming import LectureInfo
from echo_recorder.services.paths import get_documents_path
from echo_recorder.services.storage import LectureIndex, StorageIOError
from echo_recorder.ui.console import ConsoleUI
from echo_recorder.ui.modern import ModernUI
from echo_recorder.web import create_app


LOGGER = logging.getLogger("echo_recorder.cli")

LOG_LEVEL_ENV = "ECHO_LOG_LEVEL"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


cli = typer.Typer(add_completion=False, help="Echo lecture recorder storage commands")


def _prepare_logging(storage_root: Optional[Path]) -> None:
    level = resolve_log_level(os.environ.get(LOG_LEVEL_ENV), default=logging.WARNING)
    prepare_logging(storage_root, level=level)


def _load_index(*, bootstrap: bool = False) -> LectureIndex:
    """Return an index for the configured storage root.

    Read-only commands never create the root so that an empty install keeps
    reporting "nothing recorded yet".
    """

    try:
        config: AppConfig = initialize_app() if bootstrap else load_config()
    except (BootstrapError, ConfigError) as error:
        typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1) from error

    storage_root = get_documents_path(config)
    _prepare_logging(storage_root if storage_root.is_dir() else None)
    return LectureIndex(config)


def _fail(error: StorageIOError) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(code=1)


def _echo_lectures(lectures: List[LectureInfo], *, as_json: bool, empty_message: str) -> None:
    if as_json:
        typer.echo(json.dumps([lecture.to_dict() for lecture in lectures], indent=2))
        return
    if not lectures:
        typer.echo(empty_message)
        return
    for lecture in lectures:
        title = lecture.title or "(untitled)"
        typer.echo(f"{lecture.date}\t{title}\t{lecture.path}")


class UIStyle(str, Enum):
    MODERN = "modern"
    CONSOLE = "console"


style_option = typer.Option(
    UIStyle.MODERN,
    "--style",
    "-s",
    help="Select the overview presentation style.",
    show_default=True,
)

json_option = typer.Option(False, "--json", help="Print the result as JSON.")


@cli.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Show the course overview when no explicit command is provided."""

    if ctx.invoked_subcommand is None:
        ctx.invoke(overview, style=UIStyle.MODERN)


@cli.command("base-path")
def base_path() -> None:
    """Print the storage root, creating it when missing."""

    index = _load_index()
    try:
        typer.echo(index.get_base_path())
    except StorageIOError as error:
        raise _fail(error) from error


@cli.command("ensure-course")
def ensure_course(course_name: str = typer.Argument(..., help="Course name")) -> None:
    """Create the directory for COURSE_NAME if needed and print its path."""

    index = _load_index()
    try:
        typer.echo(index.ensure_course_dir(course_name))
    except StorageIOError as error:
        raise _fail(error) from error


@cli.command()
def courses(as_json: bool = json_option) -> None:
    """List course directories."""

    index = _load_index()
    try:
        names = index.list_courses()
    except StorageIOError as error:
        raise _fail(error) from error

    if as_json:
        typer.echo(json.dumps(names, indent=2))
        return
    if not names:
        typer.echo("No courses recorded yet.")
        return
    for name in names:
        typer.echo(name)


@cli.command()
def lectures(
    course_name: str = typer.Argument(..., help="Course name"),
    as_json: bool = json_option,
) -> None:
    """List the lectures of COURSE_NAME, newest first."""

    index = _load_index()
    try:
        found = index.list_lectures(course_name)
    except StorageIOError as error:
        raise _fail(error) from error
    _echo_lectures(found, as_json=as_json, empty_message=f"No lectures recorded for {course_name}.")


@cli.command("on-date")
def on_date(
    date: str = typer.Argument(..., help="Date token, e.g. 2024-01-15"),
    as_json: bool = json_option,
) -> None:
    """List lectures from every course recorded on DATE."""

    index = _load_index()
    try:
        found = lectures_for_date(index, date)
    except StorageIOError as error:
        raise _fail(error) from error
    _echo_lectures(found, as_json=as_json, empty_message=f"No lectures recorded on {date}.")


@cli.command()
def dates(as_json: bool = json_option) -> None:
    """List the dates that have at least one lecture."""

    index = _load_index()
    try:
        found = dates_with_lectures(index)
    except StorageIOError as error:
        raise _fail(error) from error

    if as_json:
        typer.echo(json.dumps(found, indent=2))
        return
    if not found:
        typer.echo("No lectures recorded yet.")
        return
    for value in found:
        typer.echo(value)


@cli.command()
def overview(style: UIStyle = style_option) -> None:
    """Render an overview of recorded lectures using the chosen UI style."""

    index = _load_index()
    if style is UIStyle.MODERN:
        ui = ModernUI(index)
    else:
        ui = ConsoleUI(index, write=typer.echo)
    try:
        ui.run()
    except StorageIOError as error:
        raise _fail(error) from error


@cli.command()
def serve(
    host: str = typer.Option(DEFAULT_HOST, help="Host interface for the web server"),
    port: int = typer.Option(DEFAULT_PORT, help="Port for the web server"),
) -> None:
    """Run the FastAPI bridge used by the recorder front-end."""

    index = _load_index(bootstrap=True)
    app = create_app(index, config=index.config)

    server_config = uvicorn.Config(app, host=host, port=port, log_config=None)
    server = uvicorn.Server(server_config)
    app.state.server = server
    LOGGER.info("Serving lecture index from %s on %s:%s", index.root, host, port)
    server.run()


if __name__ == "__main__":
    cli()
