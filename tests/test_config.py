"""Tests for config.py."""

import tomllib
from pathlib import Path

import pytest

from godoc_md.config import (
    BuiltinLinkFormat,
    ConfigError,
    CustomLinkFormat,
    RenderConfig,
    build_render_config,
    create_default_config,
    load_config,
    make_link_format,
    require_render_section,
)


class TestLinkFormat:
    def test_default_hash_format(self):
        assert BuiltinLinkFormat().hash_format == "#L%d"

    def test_hash_format_without_placeholder_raises(self):
        with pytest.raises(ConfigError, match="hash format"):
            BuiltinLinkFormat("#L")

    def test_hash_format_with_two_placeholders_raises(self):
        with pytest.raises(ConfigError):
            BuiltinLinkFormat("#L%d-%d")

    def test_custom_format_any_subset_of_fields(self):
        fmt = CustomLinkFormat("https://gitlab.example.com/p/-/blob/main{path}#L{line}")
        assert fmt.format("/a.go", 7, 1, 2) == "https://gitlab.example.com/p/-/blob/main/a.go#L7"

    def test_custom_format_positional_fields(self):
        assert CustomLinkFormat("{0}#{3}-{2}").format("/a.go", 7, 1, 2) == "/a.go#2-1"

    @pytest.mark.parametrize("template", ["{file}#L{line}", "{path}{4}", "{path", "{line.real.x}"])
    def test_custom_format_bad_template_raises(self, template):
        with pytest.raises(ConfigError, match="link format"):
            CustomLinkFormat(template)

    def test_custom_format_wins(self):
        assert isinstance(make_link_format("#%d", "{path}#{line}"), CustomLinkFormat)

    def test_builtin_when_no_custom(self):
        fmt = make_link_format("#%d", None)
        assert fmt == BuiltinLinkFormat("#%d")
        assert make_link_format(None, "") == BuiltinLinkFormat()


class TestRenderConfig:
    def test_defaults(self):
        config = RenderConfig()
        assert config.tab_width == 4
        assert config.show_examples is False
        assert config.template_path is None

    def test_frozen(self):
        with pytest.raises(AttributeError):
            RenderConfig().tab_width = 8

    def test_invalid_tab_width(self):
        with pytest.raises(ConfigError, match="tab_width"):
            RenderConfig(tab_width=0)


class TestLoadConfig:
    def test_returns_none_when_no_config(self, tmp_path):
        assert load_config(tmp_path) is None

    def test_malformed_toml_raises(self, tmp_path):
        (tmp_path / ".godoc2md.toml").write_text("invalid [[ toml ===")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_config(tmp_path)

    def test_loads_valid_toml(self, tmp_path):
        (tmp_path / ".godoc2md.toml").write_text('[render]\ntab_width = 2\n')
        assert load_config(tmp_path)["render"]["tab_width"] == 2


class TestRequireRenderSection:
    def test_missing_is_empty(self):
        assert require_render_section(None) == {}
        assert require_render_section({"other": {}}) == {}

    def test_not_a_table_raises(self):
        with pytest.raises(ConfigError, match="must be a table"):
            require_render_section({"render": "yes"})


class TestBuildRenderConfig:
    def test_defaults_without_config(self):
        assert build_render_config(None) == RenderConfig()

    def test_config_values(self):
        config = {"render": {
            "tab_width": 8, "hash_format": "#%d", "show_examples": True, "template": "t.j2",
        }}
        result = build_render_config(config)
        assert result.tab_width == 8
        assert result.link_format == BuiltinLinkFormat("#%d")
        assert result.show_examples is True
        assert result.template_path == Path("t.j2")

    def test_cli_values_override_config(self):
        config = {"render": {"tab_width": 8, "show_examples": True}}
        result = build_render_config(config, tab_width=2, show_examples=False)
        assert result.tab_width == 2
        assert result.show_examples is False

    def test_link_format_from_config(self):
        config = {"render": {"link_format": "{path}:{line}:{low}:{high}"}}
        assert build_render_config(config).link_format == CustomLinkFormat("{path}:{line}:{low}:{high}")

    def test_bad_tab_width_type(self):
        with pytest.raises(ConfigError, match="integer"):
            build_render_config({"render": {"tab_width": "4"}})

    def test_bad_hash_format_fails_fast(self):
        with pytest.raises(ConfigError):
            build_render_config(None, hash_format="#L")


class TestCreateDefaultConfig:
    def test_creates_file(self, tmp_path):
        path = create_default_config(tmp_path)
        assert path.exists()
        assert "[render]" in path.read_text()

    def test_raises_if_exists(self, tmp_path):
        create_default_config(tmp_path)
        with pytest.raises(FileExistsError, match="already exists"):
            create_default_config(tmp_path)

    def test_roundtrip_with_load(self, tmp_path):
        create_default_config(tmp_path)
        assert build_render_config(load_config(tmp_path)) == RenderConfig()
