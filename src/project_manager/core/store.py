"""File-backed registry store.

Every mutating operation is one transaction: load the file, change the
in-memory Registry, write it back atomically. Nothing is cached between
calls, so the file stays the single source of truth.

Public API:
    RegistryStore: load/save plus add, remove, find, set_source
    iter_projects: lazy iteration in insertion order
"""

import json
import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from pydantic import ValidationError

from project_manager.core.exceptions import ParseError, RegistryIOError
from project_manager.core.models import Project, Registry, Source

logger = logging.getLogger(__name__)

__all__ = ["RegistryStore", "iter_projects"]


def iter_projects(registry: Registry) -> Iterator[Project]:
    """Yield registered projects in insertion order."""
    yield from registry.projects


def _atomic_write_text(path: Path, text: str) -> None:
    """Write a file atomically using temp file + rename.

    Raises:
        RegistryIOError: If the write fails. The previous file is left intact.

    """
    temp_path = path.with_suffix(path.suffix + ".tmp")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(temp_path, "w", encoding="utf-8") as f:
            f.write(text)

        os.replace(temp_path, path)

    except OSError as e:
        if temp_path.exists():
            temp_path.unlink()
        raise RegistryIOError(f"Failed to write {path}: {e}", path=path) from e


class RegistryStore:
    """Registry persisted as JSON at a fixed path."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Registry:
        """Read the registry from disk.

        Returns:
            The parsed registry, or an empty one if the file does not exist.

        Raises:
            ParseError: If the file is not UTF-8 JSON or fails validation.
            RegistryIOError: If the file exists but cannot be read.

        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Registry file %s not found, starting empty", self.path)
            return Registry()
        except UnicodeDecodeError as e:
            raise ParseError(f"Invalid encoding in {self.path}: {e}", path=self.path) from e
        except OSError as e:
            raise RegistryIOError(f"Failed to read {self.path}: {e}", path=self.path) from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in {self.path}: {e}", path=self.path) from e

        try:
            return Registry.model_validate(data)
        except ValidationError as e:
            raise ParseError(f"Invalid registry in {self.path}: {e}", path=self.path) from e

    def save(self, registry: Registry) -> None:
        """Overwrite the file with the full registry.

        Raises:
            RegistryIOError: On permission or disk errors.

        """
        _atomic_write_text(self.path, registry.to_json())
        logger.debug("Saved %d project(s) to %s", len(registry.projects), self.path)

    def ensure_exists(self) -> None:
        """Create an empty registry file if none exists yet."""
        if not self.path.exists():
            self.save(Registry())
            logger.info("Created empty registry at %s", self.path)

    def add(
        self,
        name: str,
        path: str,
        description: str | None = None,
        source: Source | None = None,
        languages: Sequence[str] = (),
    ) -> Project:
        """Register a new project and persist.

        Raises:
            DuplicateNameError: If the name is taken. The file is not touched.

        """
        registry = self.load()
        project = Project(
            name=name,
            path=path,
            description=description,
            languages=list(languages),
            source=source,
        )
        registry.add_project(project)
        self.save(registry)
        logger.info("Added project %s (%s)", project.name, project.path)
        return project

    def remove(self, path_or_name: str) -> Project:
        """Delete the record matching a name or directory and persist.

        Raises:
            NotFoundError: If nothing matches.

        """
        registry = self.load()
        project = registry.remove_project(path_or_name)
        self.save(registry)
        logger.info("Removed project %s", project.name)
        return project

    def find(self, name: str) -> Project:
        """Look up a project by name.

        Raises:
            NotFoundError: If no project has that name.

        """
        return self.load().get_project(name)

    def set_source(self, name: str, source: Source) -> Project:
        """Attach a source to an existing project and persist."""
        registry = self.load()
        project = registry.set_source(name, source)
        self.save(registry)
        logger.info("Set source of %s to %s", name, source.url)
        return project

    def list(self) -> Iterator[Project]:
        """Lazily iterate over the projects currently on disk."""
        return iter_projects(self.load())
