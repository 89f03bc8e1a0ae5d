"""Location of the registry file.

Resolution order:
1. Explicit path (the --config CLI option)
2. $PM_CONFIG
3. $XDG_CONFIG_HOME/project-manager/projects.json
4. ~/.config/project-manager/projects.json
"""

import os
from pathlib import Path

CONFIG_ENV_VAR = "PM_CONFIG"
CONFIG_DIR_NAME = "project-manager"
CONFIG_FILE_NAME = "projects.json"


def get_config_dir() -> Path:
    """Base user configuration directory."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser()
    return Path.home() / ".config"


def get_config_path(explicit: Path | str | None = None) -> Path:
    """Return the registry file path.

    Args:
        explicit: Path given on the command line, takes precedence.

    Returns:
        Absolute path to projects.json (may not exist yet).

    """
    if explicit:
        return Path(explicit).expanduser().resolve()

    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser().resolve()

    return get_config_dir() / CONFIG_DIR_NAME / CONFIG_FILE_NAME
