"""Core registry logic for project-manager.

Usage:
    from project_manager.core import RegistryStore
    from project_manager.core.paths import get_config_path

    store = RegistryStore(get_config_path())
    project = store.find("my-project")
"""

from project_manager.core.models import Project, Registry, Source, SourceType
from project_manager.core.store import RegistryStore

__all__ = ["Project", "Registry", "RegistryStore", "Source", "SourceType"]
