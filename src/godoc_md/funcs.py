"""Template-callable functions installed into the rendering environment."""

from __future__ import annotations

import posixpath
from collections.abc import Callable

from godoc_md.comment import comment_to_markdown
from godoc_md.config import CustomLinkFormat, RenderConfig
from godoc_md.corpus.model import PackageDoc, Position
from godoc_md.examples import example_label, expand_tabs, format_examples
from godoc_md.srclink import build_position_link, clean_source_path, resolve_source_url


def md(text: str) -> str:
    """Escape Markdown emphasis characters."""
    return text.replace("*", "\\*").replace("_", "\\_")


def pre(text: str) -> str:
    return "``` go\n" + text + "\n```"


def kebab(text: str) -> str:
    """Anchor slug: lowercase, spaces and dots to dashes, escaped stars to 42."""
    s = text.lower().replace(" ", "-")
    s = s.replace(".", "-")
    return s.replace("\\*", "42")


def bitscape(text: str) -> str:
    """Escape brackets, which Bitbucket reads as link syntax."""
    return text.replace("[", "\\[").replace("]", "\\]")


def trim_prefix(text: str, prefix: str) -> str:
    if prefix and text.startswith(prefix):
        return text[len(prefix):]
    return text


def clean_link(text: str) -> str:
    return text.lower().replace("_", "")


# Callbacks that don't depend on the package or the configuration; also
# installed as template filters.
STRING_FILTERS: dict[str, Callable] = {
    "comment_md": comment_to_markdown,
    "base": posixpath.basename,
    "md": md,
    "pre": pre,
    "kebab": kebab,
    "bitscape": bitscape,
    "trim_prefix": trim_prefix,
    "clean_link": clean_link,
    "example_name": example_label,
}


def build_callbacks(config: RenderConfig, package: PackageDoc) -> dict[str, Callable]:
    """Callbacks bound to one configuration and one package.

    Every callback is pure; the mapping can be rebuilt per render.
    """
    package_url = resolve_source_url(package.import_path)

    def example_md(name: str) -> str:
        return format_examples(package.examples, name, config)

    def src_url() -> str:
        return package_url

    def src_link(filename: str) -> str:
        return package_url + clean_source_path(filename)

    def pos_link(pos: Position) -> str:
        link = build_position_link(
            pos.filename, pos.line, pos.low, pos.high, config.link_format,
        )
        # a custom link format produces the whole link
        if isinstance(config.link_format, CustomLinkFormat):
            return link
        return package_url + link

    def node(text: str) -> str:
        return expand_tabs(text, config.tab_width)

    return {
        **STRING_FILTERS,
        "example_md": example_md,
        "src_url": src_url,
        "src_link": src_link,
        "pos_link": pos_link,
        "node": node,
    }
