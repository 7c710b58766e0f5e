"""Tree-sitter based extraction of Go declarations, doc comments and examples."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

import tree_sitter_go as tsgo
from tree_sitter import Language, Parser

from godoc_md.constants import EXAMPLE_PREFIX, SOURCE_MOUNT_PREFIX, is_go_test
from godoc_md.corpus.model import Example, FuncDoc, Position, TypeDoc, ValueDoc

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tsgo.language())

_DIRECTIVE_RE = re.compile(r"^//(go:|line |export |extern )")


@dataclass
class ParsedFile:
    package_name: str
    doc: str = ""
    consts: list[ValueDoc] = field(default_factory=list)
    vars: list[ValueDoc] = field(default_factory=list)
    funcs: list[FuncDoc] = field(default_factory=list)
    types: list[TypeDoc] = field(default_factory=list)
    examples: list[Example] = field(default_factory=list)


def source_text(source: bytes, start: int, end: int) -> str:
    """Decode source[start:end] with carriage returns dropped, as the Go scanner does."""
    return source[start:end].decode("utf-8", errors="replace").replace("\r", "")


def node_text(node, source: bytes) -> str:
    """Extract the text of a tree-sitter node from the source bytes."""
    return source_text(source, node.start_byte, node.end_byte)


def comment_group_text(comments: Iterable[str]) -> str:
    """Strip comment markers from a comment group and return its text.

    The first space of a line comment is dropped, trailing space is trimmed,
    runs of blank lines collapse to one and leading/trailing blank lines go.
    Tool directives such as "//go:generate" are not documentation.
    """
    lines: list[str] = []
    for c in comments:
        if c.startswith("//"):
            if _DIRECTIVE_RE.match(c):
                continue
            line = c[2:]
            if line.startswith(" "):
                line = line[1:]
            lines.append(line)
        elif c.startswith("/*"):
            lines.extend(c[2:-2].split("\n"))
        else:
            lines.append(c)

    out: list[str] = []
    for line in lines:
        line = line.rstrip()
        if not line and (not out or not out[-1]):
            continue
        out.append(line)
    while out and not out[-1]:
        out.pop()
    return "\n".join(out)


def _with_docs(nodes: Iterable, source: bytes) -> Iterator[tuple[object, str]]:
    """Yield (node, doc) for each non-comment node.

    doc is the comment group ending on the line right above the node.
    Comments on the same line as the previous node are trailing comments.
    """
    group: list = []
    last_end_row = -1
    for node in nodes:
        if node.type == "comment":
            if node.start_point[0] == last_end_row:
                continue
            if group and group[-1].end_point[0] + 1 == node.start_point[0]:
                group.append(node)
            else:
                group = [node]
            continue
        doc = ""
        if group and group[-1].end_point[0] + 1 == node.start_point[0]:
            doc = comment_group_text(node_text(c, source) for c in group)
        group = []
        last_end_row = node.end_point[0]
        yield node, doc


def _descendants(node, types: tuple[str, ...]) -> Iterator:
    for child in node.named_children:
        if child.type in types:
            yield child
        else:
            yield from _descendants(child, types)


def base_type_name(node, source: bytes) -> str | None:
    """Name of the package-local type behind *T, T[K], or the first of (T, error)."""
    if node is None:
        return None
    if node.type == "type_identifier":
        return node_text(node, source)
    if node.type == "pointer_type":
        return base_type_name(node.named_children[0] if node.named_children else None, source)
    if node.type == "generic_type":
        return base_type_name(node.child_by_field_name("type"), source)
    if node.type in ("parameter_list", "parameter_declaration"):
        for child in node.named_children:
            if child.type == "parameter_declaration":
                return base_type_name(child.child_by_field_name("type"), source)
        return base_type_name(node.child_by_field_name("type"), source)
    return None


class GoSourceParser:
    """Extracts the documentation model of a single Go source file."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)

    def parse(self, source: bytes, file_name: str) -> ParsedFile:
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            logger.debug("parse: %s has syntax errors, error nodes skipped", file_name)

        mounted = f"{SOURCE_MOUNT_PREFIX}/{file_name}"
        result = ParsedFile(package_name="")

        for node, doc in _with_docs(root.named_children, source):
            if node.type == "package_clause":
                for child in node.named_children:
                    if child.type == "package_identifier":
                        result.package_name = node_text(child, source)
                result.doc = doc
            elif node.type == "function_declaration":
                self._handle_function(node, doc, source, mounted, result)
            elif node.type == "method_declaration":
                result.funcs.append(self._make_func(node, doc, source, mounted))
            elif node.type == "type_declaration":
                self._handle_types(node, doc, source, mounted, result)
            elif node.type == "const_declaration":
                result.consts.append(
                    self._make_value(node, doc, source, mounted, "const_spec"))
            elif node.type == "var_declaration":
                result.vars.append(
                    self._make_value(node, doc, source, mounted, "var_spec"))
        return result

    def _position(self, node, mounted: str) -> Position:
        return Position(
            filename=mounted,
            line=node.start_point[0] + 1,
            low=node.start_byte,
            high=node.end_byte,
        )

    def _make_func(self, node, doc: str, source: bytes, mounted: str) -> FuncDoc:
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        if body is not None:
            decl = source_text(source, node.start_byte, body.start_byte).rstrip()
        else:
            decl = node_text(node, source)
        recv = None
        if node.type == "method_declaration":
            recv = base_type_name(node.child_by_field_name("receiver"), source)
        return FuncDoc(
            name=node_text(name_node, source) if name_node is not None else "",
            doc=doc,
            decl=decl,
            pos=self._position(node, mounted),
            recv=recv,
            result_type=base_type_name(node.child_by_field_name("result"), source),
        )

    def _handle_function(self, node, doc, source, mounted, result: ParsedFile) -> None:
        func = self._make_func(node, doc, source, mounted)
        example_name = None
        if is_go_test(mounted):
            example_name = self._example_name(node, func.name)
        if example_name is None:
            result.funcs.append(func)
            return
        body = node.child_by_field_name("body")
        if body is None:
            return
        result.examples.append(Example(
            name=example_name,
            code=node_text(body, source),
            doc=doc,
            comments=[node_text(c, source) for c in _descendants(body, ("comment",))],
            filename=mounted,
        ))

    def _example_name(self, node, name: str) -> str | None:
        """Example name without the prefix, or None if this isn't an example function."""
        if not name.startswith(EXAMPLE_PREFIX):
            return None
        rest = name[len(EXAMPLE_PREFIX):]
        if rest and not (rest[0] == "_" or rest[0].isupper()):
            return None
        params = node.child_by_field_name("parameters")
        if params is not None and params.named_child_count > 0:
            return None
        if node.child_by_field_name("result") is not None:
            return None
        return rest

    def _handle_types(self, node, doc, source, mounted, result: ParsedFile) -> None:
        specs = [
            (spec, spec_doc)
            for spec, spec_doc in _with_docs(node.named_children, source)
            if spec.type in ("type_spec", "type_alias")
        ]
        grouped = len(specs) > 1
        for spec, spec_doc in specs:
            name_node = spec.child_by_field_name("name")
            if name_node is None:
                continue
            if grouped:
                decl = "type " + node_text(spec, source)
                pos = self._position(spec, mounted)
            else:
                decl = node_text(node, source)
                pos = self._position(node, mounted)
            result.types.append(TypeDoc(
                name=node_text(name_node, source),
                doc=spec_doc or (doc if not grouped else ""),
                decl=decl,
                pos=pos,
            ))

    def _make_value(self, node, doc, source, mounted, spec_type: str) -> ValueDoc:
        names: list[str] = []
        type_name = None
        for spec in _descendants(node, (spec_type,)):
            for name_node in spec.children_by_field_name("name"):
                if name_node.type == "identifier":
                    names.append(node_text(name_node, source))
            if type_name is None:
                type_name = base_type_name(spec.child_by_field_name("type"), source)
        return ValueDoc(
            names=names,
            doc=doc,
            decl=node_text(node, source),
            pos=self._position(node, mounted),
            type_name=type_name,
        )
