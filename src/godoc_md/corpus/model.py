"""Documentation model: the extracted facts a README is rendered from."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Position:
    filename: str  # mounted path, e.g. "/target/client.go"
    line: int  # 1-based
    low: int  # byte offset where the declaration starts
    high: int  # byte offset where the declaration ends


@dataclass
class ValueDoc:
    """A const or var declaration group."""
    names: list[str]
    doc: str
    decl: str
    pos: Position
    type_name: str | None = None  # explicit type of the first typed spec


@dataclass
class FuncDoc:
    name: str
    doc: str
    decl: str  # signature, without the body
    pos: Position
    recv: str | None = None  # receiver base type name for methods
    result_type: str | None = None  # base type name of the first result


@dataclass
class TypeDoc:
    name: str
    doc: str
    decl: str
    pos: Position
    consts: list[ValueDoc] = field(default_factory=list)
    vars: list[ValueDoc] = field(default_factory=list)
    funcs: list[FuncDoc] = field(default_factory=list)  # constructors
    methods: list[FuncDoc] = field(default_factory=list)


@dataclass
class Example:
    """A runnable example function from a _test.go file.

    ``name`` is the function name without the "Example" prefix; "" is the
    package example. ``code`` is the body block, braces included.
    """
    name: str
    code: str
    doc: str = ""
    comments: list[str] = field(default_factory=list)
    filename: str = ""


@dataclass
class PackageDoc:
    name: str
    import_path: str
    doc: str = ""
    filenames: list[str] = field(default_factory=list)
    consts: list[ValueDoc] = field(default_factory=list)
    vars: list[ValueDoc] = field(default_factory=list)
    funcs: list[FuncDoc] = field(default_factory=list)
    types: list[TypeDoc] = field(default_factory=list)
    examples: list[Example] = field(default_factory=list)
