"""Exception hierarchy for project-manager.

All errors raised by the registry and its helpers derive from
ProjectManagerError so the CLI can report them uniformly.
"""

from pathlib import Path

__all__ = [
    "ProjectManagerError",
    "NotFoundError",
    "ProjectPathMissingError",
    "DuplicateNameError",
    "ParseError",
    "RegistryIOError",
    "FetchError",
    "EditorError",
]


class ProjectManagerError(Exception):
    """Base exception for all project-manager errors."""

    pass


class NotFoundError(ProjectManagerError):
    """No record matches the requested name or path.

    Attributes:
        key: The name or path that was looked up.

    """

    def __init__(self, message: str, key: str = "") -> None:
        super().__init__(message)
        self.key = key


class ProjectPathMissingError(NotFoundError):
    """Record exists but its directory is absent and it has no source to fetch."""

    def __init__(self, message: str, key: str = "", path: Path | None = None) -> None:
        super().__init__(message, key=key)
        self.path = path


class DuplicateNameError(ProjectManagerError):
    """A record with the same name is already registered."""

    def __init__(self, message: str, name: str = "") -> None:
        super().__init__(message)
        self.name = name


class ParseError(ProjectManagerError):
    """The registry file exists but is not valid JSON or violates the schema."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class RegistryIOError(ProjectManagerError):
    """Reading or writing a file, or spawning a process, failed.

    Attributes:
        path: File or directory involved, if any.

    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class FetchError(RegistryIOError):
    """Fetching a project from its source failed or is unsupported."""

    pass


class EditorError(RegistryIOError):
    """Editor could not be started or exited with a failure status.

    Attributes:
        returncode: Exit status of the editor, None if it never started.

    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        returncode: int | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.returncode = returncode
