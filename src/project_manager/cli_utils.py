"""Shared CLI helpers: console, exit codes, logging setup, prompts."""

import logging
import os
import sys
from typing import TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from project_manager.core.exceptions import (
    DuplicateNameError,
    NotFoundError,
    ParseError,
    ProjectManagerError,
)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_NOT_FOUND = 3
EXIT_DUPLICATE = 4
EXIT_CANCELLED = 130

CI_ENV_VARS = ("CI", "GITHUB_ACTIONS", "GITLAB_CI", "JENKINS_URL", "TRAVIS", "CIRCLECI")

T = TypeVar("T")

console = Console()

# Status and error output that must not pollute stdout (e.g. `cd "$(pm pwd foo)"`)
err_console = Console(stderr=True)


def _error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)


def _warning(message: str) -> None:
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)


def _info(message: str) -> None:
    console.print(f"[blue]{escape(message)}[/blue]", soft_wrap=True)


def _success(message: str) -> None:
    console.print(f"[green]{escape(message)}[/green]", soft_wrap=True)


def _setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging with a rich handler on stderr.

    Args:
        verbose: Show DEBUG messages.
        quiet: Show only ERROR messages. Ignored when verbose is set.

    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)


def exit_code_for(error: ProjectManagerError) -> int:
    """Map a registry error to a process exit code."""
    if isinstance(error, NotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(error, DuplicateNameError):
        return EXIT_DUPLICATE
    if isinstance(error, ParseError):
        return EXIT_CONFIG_ERROR
    return EXIT_ERROR


def _fail(error: ProjectManagerError) -> typer.Exit:
    """Report error on the console and build the matching typer.Exit."""
    _error(str(error))
    return typer.Exit(code=exit_code_for(error))


def _is_interactive() -> bool:
    """True when stdin is a TTY and no CI environment is detected."""
    if not sys.stdin.isatty():
        return False
    return not any(os.environ.get(var) for var in CI_ENV_VARS)


def _check_cancelled(value: T | None) -> T:
    """Return a questionary answer, exiting with 130 if the prompt was cancelled."""
    if value is None:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(code=EXIT_CANCELLED)
    return value


def _status(message: str) -> None:
    """Progress message on stderr, keeping stdout clean for scripting."""
    err_console.print(f"[dim]{escape(message)}[/dim]", soft_wrap=True)
