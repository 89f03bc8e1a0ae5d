"""Filesystem inspection helpers: language markers and unregistered folders."""

import logging
from pathlib import Path

from project_manager.core.models import Registry

logger = logging.getLogger(__name__)

# Marker files that identify a project's language
LANGUAGE_MARKERS: dict[str, tuple[str, ...]] = {
    "Python": ("pyproject.toml", "setup.py", "setup.cfg", "requirements.txt"),
    "Rust": ("Cargo.toml",),
    "JavaScript": ("package.json",),
    "TypeScript": ("tsconfig.json",),
    "Go": ("go.mod",),
    "Java": ("pom.xml", "build.gradle", "build.gradle.kts"),
    "Ruby": ("Gemfile",),
    "C++": ("CMakeLists.txt",),
}

# Languages detected by source file extension in the top directory
EXTENSION_MARKERS: dict[str, str] = {
    ".c": "C",
    ".h": "C",
    ".cpp": "C++",
    ".hs": "Haskell",
}


def detect_languages(directory: Path) -> list[str]:
    """Infer project languages from marker files in directory.

    Returns:
        Sorted, de-duplicated language names. Empty if the directory is
        missing or nothing is recognised.

    """
    if not directory.is_dir():
        return []

    found: set[str] = set()
    for language, markers in LANGUAGE_MARKERS.items():
        if any((directory / marker).exists() for marker in markers):
            found.add(language)

    try:
        for entry in directory.iterdir():
            if entry.is_file() and entry.suffix in EXTENSION_MARKERS:
                found.add(EXTENSION_MARKERS[entry.suffix])
    except OSError as e:
        logger.debug("Cannot scan %s: %s", directory, e)

    return sorted(found)


def find_unregistered(registry: Registry, root: Path | None = None) -> list[Path]:
    """List subdirectories of the root that no project points to.

    Args:
        registry: Loaded registry.
        root: Directory to scan; defaults to the registry root.

    Returns:
        Unregistered, non-hidden directories sorted by name.

    """
    root = root if root is not None else registry.root_path
    if not root.is_dir():
        logger.debug("Root directory %s does not exist", root)
        return []

    registered = {registry.resolve_path(p).resolve() for p in registry.projects}
    return sorted(
        (
            entry
            for entry in root.iterdir()
            if entry.is_dir()
            and not entry.name.startswith(".")
            and entry.resolve() not in registered
        ),
        key=lambda p: p.name,
    )
