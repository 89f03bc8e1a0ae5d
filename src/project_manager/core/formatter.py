"""Rendering of project listings.

Interactive terminals get a borderless rich table; pipes get one
tab-separated line per project so the output stays scriptable.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from rich.markup import escape
from rich.table import Table

from project_manager.core.models import Project, Registry


@dataclass(frozen=True)
class ListColumns:
    """Optional columns shown next to the project name."""

    path: bool = True
    description: bool = False
    languages: bool = False
    source: bool = False

    @classmethod
    def from_flags(
        cls,
        verbose: bool = False,
        path: bool = False,
        description: bool = False,
        languages: bool = False,
        source: bool = False,
    ) -> "ListColumns":
        """Combine CLI flags: verbose shows everything, no flags shows the path."""
        if verbose:
            return cls(path=True, description=True, languages=True, source=True)
        if not (path or description or languages or source):
            return cls()
        return cls(path=path, description=description, languages=languages, source=source)

    def headers(self) -> list[str]:
        headers = ["Name"]
        if self.path:
            headers.append("Path")
        if self.description:
            headers.append("Description")
        if self.languages:
            headers.append("Languages")
        if self.source:
            headers.append("Source")
        return headers


def project_row(project: Project, registry: Registry, columns: ListColumns) -> list[str]:
    """Cell values for one project."""
    row = [project.name]
    if columns.path:
        row.append(str(registry.resolve_path(project)))
    if columns.description:
        row.append(project.description or "")
    if columns.languages:
        row.append(", ".join(project.languages))
    if columns.source:
        row.append(project.source.url if project.source else "")
    return row


def iter_rows(
    projects: Iterable[Project], registry: Registry, columns: ListColumns
) -> Iterator[list[str]]:
    """Lazily produce rows in the order projects are given."""
    for project in projects:
        yield project_row(project, registry, columns)


def build_table(
    projects: Iterable[Project], registry: Registry, columns: ListColumns
) -> Table:
    """Build a borderless rich table."""
    table = Table(box=None, pad_edge=False, header_style="bold")
    for header in columns.headers():
        table.add_column(header, style="cyan" if header == "Name" else None)
    for row in iter_rows(projects, registry, columns):
        table.add_row(*(escape(cell) for cell in row))
    return table


def format_plain(
    projects: Iterable[Project], registry: Registry, columns: ListColumns
) -> Iterator[str]:
    """Tab-separated lines, one per project."""
    for row in iter_rows(projects, registry, columns):
        yield "\t".join(row)
