"""Tests for language detection and unregistered folder discovery."""

from pathlib import Path

from project_manager.core.detect import detect_languages, find_unregistered
from project_manager.core.models import Project, Registry


class TestDetectLanguages:
    def test_marker_file(self, project_dir: Path) -> None:
        assert detect_languages(project_dir) == ["Python"]

    def test_multiple_sorted(self, project_dir: Path) -> None:
        (project_dir / "Cargo.toml").write_text("")
        (project_dir / "main.c").write_text("")
        assert detect_languages(project_dir) == ["C", "Python", "Rust"]

    def test_nothing_recognised(self, tmp_path: Path) -> None:
        (tmp_path / "README").write_text("")
        assert detect_languages(tmp_path) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert detect_languages(tmp_path / "nope") == []


class TestFindUnregistered:
    def test_lists_unknown_directories(self, tmp_path: Path) -> None:
        root = tmp_path / "root"
        for name in ("b-known", "a-new", "c-new", ".hidden"):
            (root / name).mkdir(parents=True)
        (root / "file.txt").write_text("")

        registry = Registry(root_dir=str(root))
        registry.add_project(Project(name="known", path="b-known"))

        assert [p.name for p in find_unregistered(registry)] == ["a-new", "c-new"]

    def test_absolute_record_paths_count(self, tmp_path: Path) -> None:
        root = tmp_path / "root"
        (root / "tool").mkdir(parents=True)
        registry = Registry(root_dir=str(root))
        registry.add_project(Project(name="tool", path=str(root / "tool")))
        assert find_unregistered(registry) == []

    def test_missing_root(self, tmp_path: Path) -> None:
        assert find_unregistered(Registry(root_dir=str(tmp_path / "nope"))) == []

    def test_explicit_root(self, tmp_path: Path) -> None:
        (tmp_path / "other" / "x").mkdir(parents=True)
        assert find_unregistered(Registry(), tmp_path / "other") == [tmp_path / "other" / "x"]
