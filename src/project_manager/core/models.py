"""Pydantic models for the projects.json registry document.

The file holds a single Registry object:

    {
      "version": "1.0",
      "root_dir": "projects",
      "editor": null,
      "projects": [
        {
          "name": "bsq",
          "path": "bsq",
          "description": "Find the biggest square in a map",
          "languages": ["C"],
          "source": {"type": "git", "url": "https://github.com/example/bsq.git"}
        }
      ]
    }

Relative record paths are resolved against root_dir, which itself is
relative to the user's home directory unless absolute.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from project_manager.core.exceptions import DuplicateNameError, NotFoundError

logger = logging.getLogger(__name__)

REGISTRY_VERSION = "1.0"
DEFAULT_ROOT_DIR = "projects"

_GIT_URL_PREFIXES = ("git@", "git://", "ssh://", "git+ssh://")


class SourceType(str, Enum):
    """Kind of origin a project can be fetched from."""

    GIT = "git"
    OTHER = "other"


def infer_source_type(url: str) -> SourceType:
    """Guess the source type from a URL or free-form origin tag.

    Examples:
        >>> infer_source_type("git@github.com:me/tool.git")
        <SourceType.GIT: 'git'>
        >>> infer_source_type("shared drive, folder 3")
        <SourceType.OTHER: 'other'>

    """
    candidate = url.strip()
    if candidate.startswith(_GIT_URL_PREFIXES) or candidate.rstrip("/").endswith(".git"):
        return SourceType.GIT
    return SourceType.OTHER


class Source(BaseModel):
    """Where a project comes from.

    A bare string in the file is accepted as a free-form tag and normalised
    into this object, with the type inferred from its shape.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_type: SourceType = Field(
        default=SourceType.GIT,
        alias="type",
        description="Source kind; only git sources can be fetched",
    )
    url: str = Field(min_length=1, description="Clone URL or free-form origin tag")

    @model_validator(mode="before")
    @classmethod
    def _coerce_plain_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"type": infer_source_type(data), "url": data}
        return data

    @classmethod
    def from_url(cls, url: str) -> Source:
        """Build a source, inferring its type from the URL."""
        return cls(source_type=infer_source_type(url), url=url)


class Project(BaseModel):
    """One registered project."""

    name: str = Field(min_length=1, description="Unique project name")
    path: str = Field(
        min_length=1,
        description="Absolute directory, or a path relative to the registry root_dir",
    )
    description: str | None = Field(default=None, description="Free text shown by list")
    languages: list[str] = Field(default_factory=list)
    source: Source | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("project name must not be blank")
        return stripped


class Registry(BaseModel):
    """The whole registry document, records kept in insertion order."""

    version: str = REGISTRY_VERSION
    root_dir: str = Field(
        default=DEFAULT_ROOT_DIR,
        description="Base directory for relative project paths (relative to home)",
    )
    editor: str | None = Field(
        default=None,
        description="Editor command; falls back to $VISUAL / $EDITOR when unset",
    )
    projects: list[Project] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_names(self) -> Registry:
        seen: set[str] = set()
        duplicates: list[str] = []
        for project in self.projects:
            if project.name in seen:
                duplicates.append(project.name)
            seen.add(project.name)
        if duplicates:
            raise ValueError(f"duplicate project name(s): {', '.join(sorted(set(duplicates)))}")
        return self

    @property
    def root_path(self) -> Path:
        """Absolute root directory."""
        root = Path(self.root_dir).expanduser()
        if not root.is_absolute():
            root = Path.home() / root
        return root

    def resolve_path(self, project: Project) -> Path:
        """Absolute directory of a project."""
        path = Path(project.path).expanduser()
        if path.is_absolute():
            return path
        return self.root_path / path

    def find_project(self, name: str) -> Project | None:
        """Return the project with this exact name, or None."""
        for project in self.projects:
            if project.name == name:
                return project
        return None

    def get_project(self, name: str) -> Project:
        """Return the project with this name.

        Raises:
            NotFoundError: If no project has that name.

        """
        project = self.find_project(name)
        if project is None:
            raise NotFoundError(f"Project not found: {name}", key=name)
        return project

    def add_project(self, project: Project) -> None:
        """Append a project.

        Raises:
            DuplicateNameError: If the name is already registered.

        """
        if self.find_project(project.name) is not None:
            raise DuplicateNameError(
                f"Project name already exists: {project.name}", name=project.name
            )
        self.projects.append(project)

    def match(self, path_or_name: str) -> Project | None:
        """Find a project by name, falling back to its resolved directory."""
        project = self.find_project(path_or_name)
        if project is not None:
            return project

        target = Path(path_or_name).expanduser().resolve()
        for candidate in self.projects:
            if self.resolve_path(candidate).resolve() == target:
                return candidate
        return None

    def remove_project(self, path_or_name: str) -> Project:
        """Remove and return the project matching a name or directory.

        Raises:
            NotFoundError: If nothing matches.

        """
        project = self.match(path_or_name)
        if project is None:
            raise NotFoundError(f"Project not found: {path_or_name}", key=path_or_name)
        self.projects.remove(project)
        logger.debug("Removed project %s from registry", project.name)
        return project

    def set_source(self, name: str, source: Source) -> Project:
        """Attach a source to an existing project and return the updated record."""
        project = self.get_project(name)
        updated = project.model_copy(update={"source": source})
        self.projects[self.projects.index(project)] = updated
        return updated

    def to_json(self) -> str:
        """Serialise to the on-disk JSON text."""
        return self.model_dump_json(indent=2, by_alias=True) + "\n"
