"""Command line interface for project-manager (`pm`).

Each command is one load -> act -> save transaction over the registry
file. Registry errors are reported on the console and mapped to exit
codes by cli_utils.exit_code_for.

Example:
    $ pm add ~/projects/tool --name tool --description "Small CLI"
    $ pm list --verbose
    $ pm open tool
    $ cd "$(pm pwd tool)"
"""

import logging
import shutil
import sys
from pathlib import Path

import questionary
import typer
from rich.markup import escape

from project_manager import __version__
from project_manager.cli_utils import (
    EXIT_ERROR,
    _check_cancelled,
    _error,
    _fail,
    _info,
    _is_interactive,
    _setup_logging,
    _status,
    _success,
    _warning,
    console,
)
from project_manager.core.detect import detect_languages, find_unregistered
from project_manager.core.editor import launch_editor, resolve_editor
from project_manager.core.exceptions import (
    NotFoundError,
    ParseError,
    ProjectManagerError,
    ProjectPathMissingError,
    RegistryIOError,
)
from project_manager.core.formatter import ListColumns, build_table, format_plain
from project_manager.core.models import Project, Registry, Source, SourceType
from project_manager.core.paths import get_config_path
from project_manager.core.sources import detect_source, fetch_project, repo_name_from_url
from project_manager.core.store import RegistryStore, iter_projects

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="pm",
    help="Project Manager CLI",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pm {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Registry file (default: $PM_CONFIG or ~/.config/project-manager/projects.json)",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Keep track of local project directories."""
    _setup_logging(verbose=debug, quiet=quiet)
    config_path = get_config_path(config)
    logger.debug("Using registry file %s", config_path)
    ctx.obj = RegistryStore(config_path)


def _store(ctx: typer.Context) -> RegistryStore:
    store: RegistryStore = ctx.obj
    return store


def _prompt_project_name(registry: Registry, default: str = "") -> str:
    """Ask until the user gives a name that is not registered yet.

    Without a terminal the default is used as is; a clash then surfaces
    as DuplicateNameError from the store.
    """
    if not _is_interactive():
        if not default:
            _error("Project name required in non-interactive mode (use --name)")
            raise typer.Exit(code=EXIT_ERROR)
        return default

    while True:
        answer = _check_cancelled(questionary.text("Project name:", default=default).ask())
        name = answer.strip()
        if not name:
            continue
        if registry.find_project(name) is not None:
            _warning(f"Project name already exists: {name}")
            continue
        return name


def _prompt_description() -> str | None:
    if not _is_interactive():
        return None
    answer = _check_cancelled(questionary.text("Description (optional):").ask())
    return answer.strip() or None


def _ensure_local(registry: Registry, project: Project) -> Path:
    """Return the project directory, fetching it from its source if missing."""
    directory = registry.resolve_path(project)
    if directory.exists():
        return directory

    _status(f"Project {project.name} is not on the filesystem")
    if project.source is None:
        raise ProjectPathMissingError(
            f"Project directory {directory} does not exist and no source is recorded",
            key=project.name,
            path=directory,
        )
    _status(f"Fetching project from {project.source.url}...")
    return fetch_project(project.source, directory)


@app.command(name="open")
def open_command(
    ctx: typer.Context,
    project_name: str = typer.Argument(..., help="Registered project name"),
) -> None:
    """Open a project in the configured editor."""
    store = _store(ctx)
    try:
        registry = store.load()
        project = registry.get_project(project_name)
        directory = _ensure_local(registry, project)
        launch_editor(resolve_editor(registry.editor), directory)
    except ProjectManagerError as e:
        raise _fail(e) from None


@app.command(name="pwd")
def pwd_command(
    ctx: typer.Context,
    project_name: str = typer.Argument(..., help="Registered project name"),
) -> None:
    """Print a project's directory, fetching it first if needed."""
    store = _store(ctx)
    try:
        registry = store.load()
        directory = _ensure_local(registry, registry.get_project(project_name))
    except ProjectManagerError as e:
        raise _fail(e) from None
    typer.echo(str(directory))


@app.command(name="add")
def add_command(
    ctx: typer.Context,
    directory: Path = typer.Argument(..., help="Project directory to register"),
    name: str | None = typer.Option(
        None, "--name", "-n", help="Project name (prompted if omitted)"
    ),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Short description (prompted if omitted)"
    ),
    language: list[str] | None = typer.Option(
        None, "--language", "-l", help="Language tag, repeatable (detected if omitted)"
    ),
) -> None:
    """Register an existing directory as a project."""
    store = _store(ctx)
    project_dir = directory.expanduser().resolve()

    try:
        registry = store.load()
        if not project_dir.is_dir():
            _warning(f"Directory does not exist yet: {project_dir}")

        if name is None:
            name = _prompt_project_name(registry, default=project_dir.name)
        if description is None:
            description = _prompt_description()

        source = detect_source(project_dir) if project_dir.is_dir() else None
        if source is not None:
            _info(f"Git repository URL: {source.url}")
        languages = language or detect_languages(project_dir)

        project = store.add(
            name,
            str(project_dir),
            description=description,
            source=source,
            languages=languages,
        )
    except ProjectManagerError as e:
        raise _fail(e) from None

    _success(f"Added project {project.name}")


@app.command(name="remove")
def remove_command(
    ctx: typer.Context,
    directory: str = typer.Argument(..., help="Project directory or name"),
    purge: bool = typer.Option(
        False, "--purge", help="Also delete the project directory from disk"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Remove a project from the registry."""
    store = _store(ctx)
    try:
        registry = store.load()
        project = registry.match(directory)
        if project is None:
            raise NotFoundError(f"Project not found: {directory}", key=directory)

        if purge:
            _purge_directory(registry.resolve_path(project), project.name, yes)

        removed = store.remove(project.name)
    except ProjectManagerError as e:
        raise _fail(e) from None

    _success(f"Removed project {removed.name}")


def _purge_directory(project_dir: Path, name: str, yes: bool) -> None:
    """Delete a project's directory after confirmation."""
    if not project_dir.exists():
        _info(f"Directory already gone: {project_dir}")
        return

    if not yes:
        if not _is_interactive():
            _error("Refusing to delete files without confirmation (use --yes)")
            raise typer.Exit(code=EXIT_ERROR)
        console.print(f"About to delete [bold]{escape(str(project_dir))}[/bold]")
        confirmed = _check_cancelled(
            questionary.confirm(f"Delete the directory of {name}?", default=False).ask()
        )
        if not confirmed:
            _info("Project removal aborted")
            raise typer.Exit()

    try:
        shutil.rmtree(project_dir)
    except OSError as e:
        raise RegistryIOError(f"Failed to delete {project_dir}: {e}", path=project_dir) from e
    _info(f"Deleted {project_dir}")


@app.command(name="add-source")
def add_source_command(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Source URL (e.g. a git clone URL)"),
    source_type: SourceType = typer.Option(
        SourceType.GIT, "--type", "-t", help="Source kind; only git sources can be fetched"
    ),
    to: str | None = typer.Option(
        None, "--to", help="Attach the source to this existing project instead"
    ),
    name: str | None = typer.Option(None, "--name", "-n", help="Name for the new project"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="Description for the new project"
    ),
) -> None:
    """Register a project from a source URL, or tag an existing one with it."""
    store = _store(ctx)
    if not url.strip():
        _error("Source URL must not be empty")
        raise typer.Exit(code=EXIT_ERROR)
    source = Source(source_type=source_type, url=url.strip())

    try:
        if to is not None:
            project = store.set_source(to, source)
            _success(f"Source of {project.name} set to {source.url}")
            return

        try:
            repo_name = repo_name_from_url(url)
        except ValueError as e:
            _error(str(e))
            raise typer.Exit(code=EXIT_ERROR) from None

        registry = store.load()
        if name is None:
            name = _prompt_project_name(registry, default=repo_name)
        if description is None:
            description = _prompt_description()

        project = store.add(name, repo_name, description=description, source=source)
    except ProjectManagerError as e:
        raise _fail(e) from None

    _success(f"Added project {project.name} from {source.url}")
    _info(f"It will be fetched into {registry.resolve_path(project)} on first open")


@app.command(name="list")
def list_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every column"),
    path: bool = typer.Option(False, "--path", "-p", help="Show the path column"),
    description: bool = typer.Option(
        False, "--description", "-d", help="Show the description column"
    ),
    languages: bool = typer.Option(False, "--languages", "-l", help="Show the languages column"),
    source: bool = typer.Option(False, "--source", "-s", help="Show the source column"),
) -> None:
    """List registered projects in the order they were added."""
    store = _store(ctx)
    try:
        registry = store.load()
    except ProjectManagerError as e:
        raise _fail(e) from None

    if not registry.projects:
        _info("No projects registered")
        return

    columns = ListColumns.from_flags(
        verbose=verbose,
        path=path,
        description=description,
        languages=languages,
        source=source,
    )
    if sys.stdout.isatty():
        console.print(build_table(iter_projects(registry), registry, columns))
    else:
        for line in format_plain(iter_projects(registry), registry, columns):
            typer.echo(line)


@app.command(name="edit")
def edit_command(ctx: typer.Context) -> None:
    """Open the raw registry file in the editor."""
    store = _store(ctx)
    try:
        store.ensure_exists()
        try:
            configured = store.load().editor
        except ParseError as e:
            # Corrupt files still open so they can be repaired by hand
            _warning(str(e))
            configured = None
        launch_editor(resolve_editor(configured), store.path)
    except ProjectManagerError as e:
        raise _fail(e) from None


@app.command(name="inspect")
def inspect_command(ctx: typer.Context) -> None:
    """Show folders under the root directory that are not registered."""
    store = _store(ctx)
    try:
        registry = store.load()
    except ProjectManagerError as e:
        raise _fail(e) from None

    folders = find_unregistered(registry)
    if not folders:
        _info("No unregistered folders found")
        return

    console.print("Unregistered folders:")
    for folder in folders:
        typer.echo(f"  {folder}")
