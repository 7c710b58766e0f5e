"""Locate a Go package on disk and assemble its documentation model."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from godoc_md.constants import is_go_source, is_go_test
from godoc_md.corpus.go_parser import GoSourceParser, ParsedFile
from godoc_md.corpus.model import FuncDoc, PackageDoc, TypeDoc, ValueDoc

logger = logging.getLogger(__name__)

_MODULE_RE = re.compile(r"^module\s+\"?([^\s\"]+)\"?", re.MULTILINE)


class PackageNotFoundError(FileNotFoundError):
    """No Go package at the given directory or import path."""


def _source_roots() -> list[Path]:
    """$GOROOT/src and every $GOPATH/src, in lookup order."""
    roots: list[Path] = []
    goroot = os.environ.get("GOROOT")
    if goroot:
        roots.append(Path(goroot) / "src")
    gopath = os.environ.get("GOPATH") or str(Path.home() / "go")
    for entry in gopath.split(os.pathsep):
        if entry:
            roots.append(Path(entry) / "src")
    return roots


def resolve_package_dir(target: str) -> tuple[Path, str | None]:
    """Return (package_dir, import_path) for a directory or an import path.

    import_path is None when target was given as a directory.
    """
    path = Path(target)
    if path.is_dir():
        return path.resolve(), None
    for root in _source_roots():
        candidate = root / target
        if candidate.is_dir():
            logger.debug("resolve_package_dir: %s found under %s", target, root)
            return candidate.resolve(), target
    raise PackageNotFoundError(
        f"cannot find package {target!r} as a directory or under GOROOT/GOPATH"
    )


def import_path_from_module(package_dir: Path) -> str | None:
    """Derive the import path from the nearest enclosing go.mod."""
    for parent in (package_dir, *package_dir.parents):
        go_mod = parent / "go.mod"
        if not go_mod.is_file():
            continue
        m = _MODULE_RE.search(go_mod.read_text(encoding="utf-8", errors="replace"))
        if m is None:
            logger.debug("import_path_from_module: no module line in %s", go_mod)
            return None
        rel = package_dir.relative_to(parent).as_posix()
        return m.group(1) if rel == "." else f"{m.group(1)}/{rel}"
    return None


def is_exported(name: str) -> bool:
    return name[:1].isupper()


def _exported_values(values: list[ValueDoc]) -> list[ValueDoc]:
    return [v for v in values if any(is_exported(n) for n in v.names)]


def _read_files(package_dir: Path, parser: GoSourceParser) -> tuple[list[tuple[str, ParsedFile]], list[ParsedFile]]:
    sources: list[tuple[str, ParsedFile]] = []
    tests: list[ParsedFile] = []
    for entry in sorted(package_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_file():
            continue
        if is_go_test(entry.name):
            tests.append(parser.parse(entry.read_bytes(), entry.name))
        elif is_go_source(entry.name):
            sources.append((entry.name, parser.parse(entry.read_bytes(), entry.name)))
        else:
            logger.debug("_read_files: skipping %s", entry.name)
    return sources, tests


def load_package(
    target: str,
    import_path: str | None = None,
    *,
    include_unexported: bool = False,
) -> PackageDoc:
    """Build the PackageDoc for a package directory or import path."""
    package_dir, resolved_import = resolve_package_dir(target)
    import_path = (
        import_path
        or resolved_import
        or import_path_from_module(package_dir)
        or package_dir.name
    )

    parser = GoSourceParser()
    sources, tests = _read_files(package_dir, parser)
    if not sources:
        raise PackageNotFoundError(f"no Go source files in {package_dir}")

    package_name = sources[0][1].package_name
    pkg = PackageDoc(name=package_name, import_path=import_path)
    docs: list[str] = []
    funcs: list[FuncDoc] = []
    types: list[TypeDoc] = []
    for file_name, parsed in sources:
        if parsed.package_name != package_name:
            logger.warning(
                "load_package: %s declares package %s, expected %s; skipped",
                file_name, parsed.package_name, package_name,
            )
            continue
        pkg.filenames.append(file_name)
        if parsed.doc:
            docs.append(parsed.doc)
        pkg.consts.extend(parsed.consts)
        pkg.vars.extend(parsed.vars)
        funcs.extend(parsed.funcs)
        types.extend(parsed.types)
    pkg.doc = "\n\n".join(docs)

    for parsed in tests:
        if parsed.package_name in (package_name, f"{package_name}_test"):
            pkg.examples.extend(parsed.examples)
    pkg.examples.sort(key=lambda e: e.name)

    if not include_unexported:
        pkg.consts = _exported_values(pkg.consts)
        pkg.vars = _exported_values(pkg.vars)
        types = [t for t in types if is_exported(t.name)]
        funcs = [
            f for f in funcs
            if is_exported(f.name) and (f.recv is None or is_exported(f.recv))
        ]

    _associate(pkg, funcs, types)
    logger.debug(
        "load_package: %s has %d funcs, %d types, %d examples",
        import_path, len(pkg.funcs), len(pkg.types), len(pkg.examples),
    )
    return pkg


def _associate(pkg: PackageDoc, funcs: list[FuncDoc], types: list[TypeDoc]) -> None:
    """Attach methods, constructors and typed value groups to their types."""
    by_name = {t.name: t for t in types}

    consts: list[ValueDoc] = []
    for value in pkg.consts:
        if value.type_name in by_name:
            by_name[value.type_name].consts.append(value)
        else:
            consts.append(value)
    pkg.consts = consts

    variables: list[ValueDoc] = []
    for value in pkg.vars:
        if value.type_name in by_name:
            by_name[value.type_name].vars.append(value)
        else:
            variables.append(value)
    pkg.vars = variables

    for func in sorted(funcs, key=lambda f: f.name):
        if func.recv is not None:
            if func.recv in by_name:
                by_name[func.recv].methods.append(func)
            # methods on types that aren't documented are dropped
        elif func.result_type in by_name:
            by_name[func.result_type].funcs.append(func)
        else:
            pkg.funcs.append(func)

    pkg.types = sorted(types, key=lambda t: t.name)
