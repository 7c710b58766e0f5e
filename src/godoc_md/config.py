"""TOML config loader and immutable render configuration."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from godoc_md.constants import CONFIG_FILE_NAME, DEFAULT_HASH_FORMAT, DEFAULT_TAB_WIDTH


class ConfigError(ValueError):
    """Malformed configuration. Raised before any rendering starts."""


@dataclass(frozen=True)
class BuiltinLinkFormat:
    """Compose position links from a cleaned path, selection query and hash."""

    hash_format: str = DEFAULT_HASH_FORMAT

    def __post_init__(self):
        try:
            self.hash_format % 1
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"hash format {self.hash_format!r} must take exactly one integer: {e}"
            ) from e


@dataclass(frozen=True)
class CustomLinkFormat:
    """Full override: a str.format template.

    The fields are {path}, {line}, {low} and {high}, or {0} to {3} in that
    order. Any subset may be used.
    """

    template: str

    def __post_init__(self):
        try:
            self.format("/file.go", 1, 0, 0)
        except (KeyError, IndexError, AttributeError, TypeError, ValueError) as e:
            raise ConfigError(
                f"link format {self.template!r} may only use the fields "
                f"{{path}}, {{line}}, {{low}} and {{high}}: {e!r}"
            ) from e

    def format(self, path: str, line: int, low: int, high: int) -> str:
        return self.template.format(
            path, line, low, high, path=path, line=line, low=low, high=high,
        )


LinkFormat = BuiltinLinkFormat | CustomLinkFormat


@dataclass(frozen=True)
class RenderConfig:
    """Process-wide settings, built once and passed into every render call."""

    tab_width: int = DEFAULT_TAB_WIDTH
    link_format: LinkFormat = BuiltinLinkFormat()
    show_examples: bool = False
    template_path: Path | None = None

    def __post_init__(self):
        if self.tab_width <= 0:
            raise ConfigError(f"tab_width must be > 0, got {self.tab_width}")


def make_link_format(hash_format: str | None, link_format: str | None) -> LinkFormat:
    """Resolve the link-format variant once. A custom format wins when set."""
    if link_format:
        return CustomLinkFormat(link_format)
    return BuiltinLinkFormat(hash_format or DEFAULT_HASH_FORMAT)


def load_config(package_dir: Path) -> dict | None:
    """Load .godoc2md.toml. Returns None if the file doesn't exist."""
    config_file = package_dir / CONFIG_FILE_NAME
    if not config_file.exists():
        return None
    with open(config_file, "rb") as f:
        return tomllib.load(f)


def require_render_section(config: dict | None) -> dict:
    """Extract the optional [render] table. Returns {} if absent."""
    if config is None:
        return {}
    value = config.get("render")
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(
            f"[render] in {CONFIG_FILE_NAME} must be a table, got {type(value).__name__}"
        )
    return value


def build_render_config(
    config: dict | None,
    *,
    tab_width: int | None = None,
    hash_format: str | None = None,
    link_format: str | None = None,
    show_examples: bool | None = None,
    template: str | None = None,
) -> RenderConfig:
    """Merge CLI values over the [render] table over built-in defaults."""
    section = require_render_section(config)

    if tab_width is None:
        tab_width = section.get("tab_width", DEFAULT_TAB_WIDTH)
    if not isinstance(tab_width, int) or isinstance(tab_width, bool):
        raise ConfigError(f"tab_width must be an integer, got {tab_width!r}")
    if hash_format is None:
        hash_format = section.get("hash_format")
    if link_format is None:
        link_format = section.get("link_format")
    if show_examples is None:
        show_examples = bool(section.get("show_examples", False))
    if template is None:
        template = section.get("template")

    return RenderConfig(
        tab_width=tab_width,
        link_format=make_link_format(hash_format, link_format),
        show_examples=show_examples,
        template_path=Path(template) if template else None,
    )


def create_default_config(package_dir: Path) -> Path:
    """Create a default .godoc2md.toml. Returns the path."""
    config_path = package_dir / CONFIG_FILE_NAME
    if config_path.exists():
        raise FileExistsError(f"Config already exists: {config_path}")
    config_path.write_text(
        '[render]\n'
        'tab_width = 4\n'
        'show_examples = false\n'
        '\n'
        '# Line anchor appended to source links. Github uses "#L%d",\n'
        '# Bitbucket Enterprise uses "#%d".\n'
        'hash_format = "#L%d"\n'
        '\n'
        '# Full override for declaration links, formatted with\n'
        '# {path}, {line}, {low} and {high}. Replaces hash_format when set.\n'
        '# link_format = "https://git.example.com/repo/blob/main{path}#L{line}"\n'
        '\n'
        '# Alternate Jinja2 template for the README.\n'
        '# template = "README.md.j2"\n',
        encoding="utf-8",
    )
    return config_path
