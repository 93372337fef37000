"""Tests for directory and package template sources."""

from __future__ import annotations

import uuid
from pathlib import Path

import pytest

from templex.infrastructure.filesystem import DirectorySource, PackageSource, TemplateSource
from tests.conftest import SITE_TREE, write_tree


@pytest.fixture
def package_source(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> PackageSource:
    """An importable package shipping SITE_TREE under ``templates/``."""
    name = f"tx_pkg_{uuid.uuid4().hex[:8]}"
    pkg = tmp_path / "pkgs" / name
    pkg.mkdir(parents=True)
    (pkg / "__init__.py").write_text("")
    write_tree(pkg / "templates", SITE_TREE)
    monkeypatch.syspath_prepend(str(tmp_path / "pkgs"))
    return PackageSource(name)


class TestDirectorySource:
    def test_is_template_source(self, site_root: Path) -> None:
        assert isinstance(DirectorySource(site_root), TemplateSource)

    def test_walk_yields_root_first_then_lexical(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"b.html": "", "a/x.html": "", "c/d/e.html": ""})
        entries = list(DirectorySource(tmp_path).walk("."))
        assert entries == [
            (".", True),
            ("a", True),
            ("a/x.html", False),
            ("b.html", False),
            ("c", True),
            ("c/d", True),
            ("c/d/e.html", False),
        ]

    def test_walk_subdirectory_keeps_prefix(self, site_root: Path) -> None:
        paths = [p for p, _ in DirectorySource(site_root.parent).walk("templates")]
        assert paths[0] == "templates"
        assert "templates/profile/view.html" in paths

    def test_walk_missing_raises_with_filename(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError) as exc_info:
            list(DirectorySource(tmp_path).walk("nope"))
        assert exc_info.value.filename == "nope"

    def test_walk_single_file(self, tmp_path: Path) -> None:
        write_tree(tmp_path, {"one.html": ""})
        assert list(DirectorySource(tmp_path).walk("one.html")) == [("one.html", False)]

    def test_list_files_only_direct_children(self, site_root: Path) -> None:
        source = DirectorySource(site_root)
        assert source.list_files("includes") == ["includes/footer.html", "includes/header.html"]
        assert source.list_files("profile") == [
            "profile/edit.html",
            "profile/layout.html",
            "profile/view.html",
        ]

    def test_list_files_pattern(self, site_root: Path) -> None:
        assert DirectorySource(site_root).list_files("includes", "h*") == ["includes/header.html"]

    def test_list_files_missing_dir(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError) as exc_info:
            DirectorySource(tmp_path).list_files("includes")
        assert exc_info.value.filename == "includes"

    def test_read_text(self, site_root: Path) -> None:
        assert DirectorySource(site_root).read_text("includes/header.html") == "header "


class TestPackageSource:
    def test_is_template_source(self, package_source: PackageSource) -> None:
        assert isinstance(package_source, TemplateSource)

    def test_walk_matches_directory_source(
        self, package_source: PackageSource, site_root: Path
    ) -> None:
        from_package = list(package_source.walk("templates"))
        from_directory = list(DirectorySource(site_root.parent).walk("templates"))
        assert from_package == from_directory

    def test_list_files(self, package_source: PackageSource) -> None:
        assert package_source.list_files("templates/includes") == [
            "templates/includes/footer.html",
            "templates/includes/header.html",
        ]

    def test_read_text(self, package_source: PackageSource) -> None:
        assert package_source.read_text("templates/includes/footer.html") == "footer "

    def test_missing_paths(self, package_source: PackageSource) -> None:
        with pytest.raises(FileNotFoundError):
            list(package_source.walk("nope"))
        with pytest.raises(FileNotFoundError):
            package_source.list_files("nope")
        with pytest.raises(FileNotFoundError):
            package_source.read_text("nope.html")
