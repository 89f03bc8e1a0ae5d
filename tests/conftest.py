"""Pytest configuration and fixtures for project-manager tests."""

from pathlib import Path

import pytest

from project_manager.core.store import RegistryStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temp directory and clear registry/editor variables.

    This ensures tests never read or write the real
    ~/.config/project-manager/projects.json.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for var in ("XDG_CONFIG_HOME", "PM_CONFIG", "VISUAL", "EDITOR"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Registry file location inside the test's temp directory (not created)."""
    return tmp_path / "config" / "project-manager" / "projects.json"


@pytest.fixture
def store(config_path: Path) -> RegistryStore:
    return RegistryStore(config_path)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An existing project directory with a Python marker file."""
    directory = tmp_path / "work" / "tool"
    directory.mkdir(parents=True)
    (directory / "pyproject.toml").write_text("[project]\nname = 'tool'\n")
    return directory
