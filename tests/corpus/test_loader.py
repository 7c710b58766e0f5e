"""Tests for corpus/loader.py."""

import pytest

from godoc_md.corpus.loader import (
    PackageNotFoundError,
    import_path_from_module,
    load_package,
    resolve_package_dir,
)


class TestResolvePackageDir:
    def test_directory(self, go_package):
        path, import_path = resolve_package_dir(str(go_package))
        assert path == go_package.resolve()
        assert import_path is None

    def test_import_path_under_gopath(self, tmp_path, monkeypatch):
        pkg = tmp_path / "gopath" / "src" / "github.com" / "acme" / "proj"
        pkg.mkdir(parents=True)
        monkeypatch.delenv("GOROOT", raising=False)
        monkeypatch.setenv("GOPATH", str(tmp_path / "gopath"))
        path, import_path = resolve_package_dir("github.com/acme/proj")
        assert path == pkg.resolve()
        assert import_path == "github.com/acme/proj"

    def test_goroot_searched_first(self, tmp_path, monkeypatch):
        std = tmp_path / "goroot" / "src" / "strings"
        std.mkdir(parents=True)
        monkeypatch.setenv("GOROOT", str(tmp_path / "goroot"))
        monkeypatch.setenv("GOPATH", str(tmp_path / "gopath"))
        path, import_path = resolve_package_dir("strings")
        assert path == std.resolve()
        assert import_path == "strings"

    def test_missing_raises(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GOROOT", raising=False)
        monkeypatch.setenv("GOPATH", str(tmp_path))
        with pytest.raises(PackageNotFoundError, match="cannot find package"):
            resolve_package_dir("example.com/nothing/here")


class TestImportPathFromModule:
    def test_subdirectory(self, go_package):
        assert import_path_from_module(go_package) == "example.com/acme/widget"

    def test_module_root(self, go_package):
        assert import_path_from_module(go_package.parent) == "example.com/acme"

    def test_go_mod_without_module_line(self, tmp_path):
        (tmp_path / "go.mod").write_text("go 1.21\n")
        assert import_path_from_module(tmp_path) is None


class TestLoadPackage:
    def test_basic_fields(self, go_package):
        pkg = load_package(str(go_package))
        assert pkg.name == "widget"
        assert pkg.import_path == "example.com/acme/widget"
        assert pkg.filenames == ["widget.go"]
        assert pkg.doc.startswith("Package widget builds and sizes widgets.")

    def test_explicit_import_path(self, go_package):
        pkg = load_package(str(go_package), "github.com/acme/widget")
        assert pkg.import_path == "github.com/acme/widget"

    def test_exported_only(self, go_package):
        pkg = load_package(str(go_package))
        assert [f.name for f in pkg.funcs] == ["Describe"]
        assert [t.name for t in pkg.types] == ["Kind", "Widget"]

    def test_unexported_included(self, go_package):
        pkg = load_package(str(go_package), include_unexported=True)
        assert {f.name for f in pkg.funcs} == {"Describe", "helper"}
        widget = {t.name: t for t in pkg.types}["Widget"]
        assert [m.name for m in widget.methods] == ["Resize", "grow"]

    def test_type_association(self, go_package):
        pkg = load_package(str(go_package))
        types = {t.name: t for t in pkg.types}
        assert [f.name for f in types["Widget"].funcs] == ["New"]
        assert [m.name for m in types["Widget"].methods] == ["Resize"]
        assert [c.names for c in types["Kind"].consts] == [["Small", "Large"]]
        assert [c.names for c in pkg.consts] == [["MaxSize"]]
        assert [v.names for v in pkg.vars] == [["ErrTooBig"]]

    def test_examples_sorted(self, go_package):
        pkg = load_package(str(go_package))
        assert [e.name for e in pkg.examples] == ["", "New", "New_second", "Widget_Resize"]

    def test_empty_directory_raises(self, tmp_path):
        with pytest.raises(PackageNotFoundError, match="no Go source files"):
            load_package(str(tmp_path))

    def test_foreign_package_file_skipped(self, go_package, caplog):
        (go_package / "zz_other.go").write_text("package other\n\nfunc Other() {}\n")
        pkg = load_package(str(go_package))
        assert pkg.filenames == ["widget.go"]
        assert "declares package other" in caplog.text

    def test_import_path_defaults_to_directory_name(self, tmp_path, monkeypatch):
        pkg_dir = tmp_path / "lonely"
        pkg_dir.mkdir()
        (pkg_dir / "a.go").write_text("package lonely\n")
        monkeypatch.setattr(
            "godoc_md.corpus.loader.import_path_from_module", lambda package_dir: None,
        )
        assert load_package(str(pkg_dir)).import_path == "lonely"
