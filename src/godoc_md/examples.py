"""Runnable example selection and Markdown formatting."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from godoc_md.config import RenderConfig

logger = logging.getLogger(__name__)


class ExampleRecord(Protocol):
    """The fields of a documentation-model example read by this module."""

    name: str
    code: str
    comments: list[str]


# print(example, tab_width) -> printed source of the example body
CodePrinter = Callable[[ExampleRecord, int], str]


def expand_tabs(text: str, tab_width: int) -> str:
    """Replace tabs with spaces, line by line, the way the Go printer's UseSpaces mode does."""
    return "\n".join(line.expandtabs(tab_width) for line in text.split("\n"))


def print_example_code(example: ExampleRecord, tab_width: int) -> str:
    """Default printer: the body block as written, comments included, tabs expanded."""
    return expand_tabs(example.code, tab_width)


def starts_with_uppercase(s: str) -> bool:
    return s[:1].isupper()


def split_example_suffix(name: str) -> tuple[str, str]:
    """Split "Foo_second" into ("Foo", "second").

    Only the last underscore-delimited segment is considered, and only when
    it does not start with an uppercase letter; "Foo_Bar" names the method
    Foo.Bar and is returned whole with an empty suffix.
    """
    i = name.rfind("_")
    if i != -1 and i < len(name) - 1 and not starts_with_uppercase(name[i + 1:]):
        return name[:i], name[i + 1:]
    return name, ""


def strip_example_suffix(name: str) -> str:
    return split_example_suffix(name)[0]


def matches_declaration(example_name: str, declaration_name: str) -> bool:
    """True if the example documents the declaration."""
    return strip_example_suffix(example_name) == declaration_name


def example_label(example_name: str) -> str:
    """Human readable example name: "Foo_Bar_second" -> "Foo.Bar (Second)"."""
    key, suffix = split_example_suffix(example_name)
    label = key.replace("_", ".") if key else "Package"
    if suffix:
        label += f" ({suffix[:1].upper()}{suffix[1:]})"
    return label


def _strip_braces(code: str) -> str:
    # Example bodies print as a function block. Statements can't be printed
    # one by one without losing comments on later statements.
    if len(code) >= 2 and code[0] == "{" and code[-1] == "}":
        return code[1:-1]
    return code


def format_examples(
    examples: Iterable[ExampleRecord],
    declaration_name: str,
    config: RenderConfig,
    printer: CodePrinter = print_example_code,
) -> str:
    """Render the examples documenting declaration_name as fenced Go blocks.

    Returns "" when examples are disabled or none match. The examples are
    not modified.
    """
    if not config.show_examples:
        return ""

    blocks: list[str] = []
    title = f"##### Example {declaration_name.replace('_', '.')}:\n"
    for example in examples:
        if not matches_declaration(example.name, declaration_name):
            continue
        code = _strip_braces(printer(example, config.tab_width)).strip("\n")
        if not code.strip():
            logger.warning("format_examples: example %r printed no code", example.name)
        blocks.append(f"{title}``` go\n{code}\n```\n\n")

    if not blocks:
        logger.debug("format_examples: no examples for %r", declaration_name)
    return "\n".join(blocks)
