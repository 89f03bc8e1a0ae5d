"""Editor resolution and launching.

The editor is taken from the registry's "editor" field, then $VISUAL,
then $EDITOR, then a platform default. The value may carry arguments
(e.g. "code --wait"), so it is split with POSIX shell rules on POSIX and
Windows rules on Windows.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
from pathlib import Path

from project_manager.core.exceptions import EditorError

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"

DEFAULT_EDITOR = "notepad" if IS_WINDOWS else "vi"
EDITOR_ENV_VARS = ("VISUAL", "EDITOR")


def resolve_editor(configured: str | None = None) -> str:
    """Pick the editor command.

    Args:
        configured: Value of the registry "editor" field, if any.

    Returns:
        Editor command string.

    """
    if configured and configured.strip():
        return configured.strip()
    for var in EDITOR_ENV_VARS:
        value = os.environ.get(var, "").strip()
        if value:
            return value
    return DEFAULT_EDITOR


def build_editor_command(editor: str, target: Path) -> list[str]:
    """Build the argv for opening target in editor.

    Examples:
        >>> build_editor_command("code --wait", Path("/tmp/x"))
        ['code', '--wait', '/tmp/x']

    """
    args = shlex.split(editor, posix=not IS_WINDOWS)
    if not args:
        raise EditorError("Editor command is empty", path=target)
    return [*args, str(target)]


def launch_editor(editor: str, target: Path) -> None:
    """Run the editor on target and wait for it to exit.

    Raises:
        EditorError: If the editor cannot be started or exits non-zero.

    """
    command = build_editor_command(editor, target)
    logger.debug("Launching editor: %s", command)
    try:
        completed = subprocess.run(command, check=False)
    except OSError as e:
        raise EditorError(f"Failed to start editor {command[0]!r}: {e}", path=target) from e

    if completed.returncode != 0:
        raise EditorError(
            f"Editor {command[0]!r} exited with status {completed.returncode}",
            path=target,
            returncode=completed.returncode,
        )
