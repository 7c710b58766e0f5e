"""Template-driven README assembly."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateSyntaxError

from godoc_md.config import ConfigError, RenderConfig
from godoc_md.corpus.model import PackageDoc
from godoc_md.funcs import STRING_FILTERS, build_callbacks

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "package.md.j2"
TEMPLATES_DIR = Path(__file__).with_name("templates")

_BLANK_RUN_RE = re.compile(r"\n{3,}")


class Renderer:
    """Renders PackageDocs with one template and one configuration.

    The template is loaded and compiled up front, so a missing or broken
    alternate template fails before anything is rendered.
    """

    def __init__(self, config: RenderConfig):
        self._config = config
        self._env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._env.filters.update(STRING_FILTERS)
        self._template = self._load_template()

    def _load_template(self) -> Template:
        path = self._config.template_path
        if path is None:
            return self._env.get_template(DEFAULT_TEMPLATE)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read template {path}: {e}") from e
        try:
            template = self._env.from_string(source)
        except TemplateSyntaxError as e:
            raise ConfigError(f"Invalid template {path}: {e}") from e
        logger.debug("Renderer: using alternate template %s", path)
        return template

    def render(self, package: PackageDoc) -> str:
        callbacks = build_callbacks(self._config, package)
        text = self._template.render(pkg=package, **callbacks)
        return _BLANK_RUN_RE.sub("\n\n", text)
