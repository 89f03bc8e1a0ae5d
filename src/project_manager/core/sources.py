"""Project sources: detecting a directory's origin and fetching it back.

Only git sources can be fetched. Cloning shells out to the git CLI, so
the user's own credentials (ssh-agent, credential helpers) apply.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Protocol

from project_manager.core.exceptions import FetchError
from project_manager.core.models import Source, SourceType

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 5
CLONE_TIMEOUT_SECONDS = 600


class SourceFetcher(Protocol):
    """Something that can materialise a project directory from a source."""

    def fetch(self, source: Source, target: Path) -> Path:
        """Fetch source into target and return the resulting directory."""
        ...


class GitFetcher:
    """Clone git sources with the git CLI."""

    def fetch(self, source: Source, target: Path) -> Path:
        """Clone source.url into target.

        Raises:
            FetchError: If git is missing, times out, or the clone fails.

        """
        target.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Cloning %s into %s", source.url, target)
        try:
            result = subprocess.run(
                ["git", "clone", source.url, str(target)],
                capture_output=True,
                text=True,
                timeout=CLONE_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise FetchError(f"Failed to run git clone for {source.url}: {e}", path=target) from e

        if result.returncode != 0:
            raise FetchError(
                f"git clone {source.url} failed: {result.stderr.strip()}",
                path=target,
            )
        return target


def get_fetcher(source: Source) -> SourceFetcher | None:
    """Return a fetcher for the source type, or None if unsupported."""
    if source.source_type == SourceType.GIT:
        return GitFetcher()
    return None


def fetch_project(source: Source, target: Path) -> Path:
    """Fetch a project from its source into target.

    Raises:
        FetchError: If the source type is unsupported or fetching fails.

    """
    fetcher = get_fetcher(source)
    if fetcher is None:
        raise FetchError(
            f"Unsupported source type {source.source_type.value!r}: {source.url}",
            path=target,
        )
    return fetcher.fetch(source, target)


def _read_origin_url(directory: Path) -> str | None:
    """Read remote.origin.url from a git working tree."""
    try:
        result = subprocess.run(
            ["git", "config", "--get", "remote.origin.url"],
            capture_output=True,
            text=True,
            cwd=directory,
            timeout=GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Could not query git origin in %s: %s", directory, e)
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def detect_source(directory: Path) -> Source | None:
    """Detect the git origin of a directory, if it has one."""
    if not (directory / ".git").exists():
        logger.debug("%s is not a git repository", directory)
        return None

    url = _read_origin_url(directory)
    if url is None:
        logger.debug("%s has no origin remote", directory)
        return None
    return Source(source_type=SourceType.GIT, url=url)


def repo_name_from_url(url: str) -> str:
    """Directory name a clone of url would get.

    Examples:
        >>> repo_name_from_url("https://github.com/example/BSQ.git")
        'BSQ'
        >>> repo_name_from_url("git@github.com:example/tool")
        'tool'

    Raises:
        ValueError: If no name can be derived.

    """
    tail = url.strip().rstrip("/").rsplit("/", 1)[-1]
    tail = tail.rsplit(":", 1)[-1]
    name = tail.removesuffix(".git")
    if not name:
        raise ValueError(f"Cannot derive a project directory from URL: {url!r}")
    return name
