"""Smoke tests for module imports.

Verifies that all public modules can be imported without errors, catching
broken imports, circular dependencies and missing dependencies early.
"""

import importlib

import pytest

PACKAGES = [
    "project_manager",
    "project_manager.core",
]

MODULES = [
    "project_manager.cli",
    "project_manager.cli_utils",
    "project_manager.core.detect",
    "project_manager.core.editor",
    "project_manager.core.exceptions",
    "project_manager.core.formatter",
    "project_manager.core.models",
    "project_manager.core.paths",
    "project_manager.core.sources",
    "project_manager.core.store",
]


class TestSmokeImports:
    """Smoke tests to verify all modules can be imported."""

    @pytest.mark.parametrize("package", PACKAGES)
    def test_package_imports(self, package: str) -> None:
        try:
            module = importlib.import_module(package)
            assert module is not None
        except ImportError as e:
            pytest.fail(f"Failed to import package {package}: {e}")

    @pytest.mark.parametrize("module", MODULES)
    def test_module_imports(self, module: str) -> None:
        try:
            mod = importlib.import_module(module)
            assert mod is not None
        except ImportError as e:
            pytest.fail(f"Failed to import module {module}: {e}")

    def test_cli_entry_point(self) -> None:
        from project_manager.cli import app

        assert app is not None

    def test_public_api_exports(self) -> None:
        import project_manager
        from project_manager.core import RegistryStore

        assert hasattr(project_manager, "__version__")
        assert RegistryStore is not None
