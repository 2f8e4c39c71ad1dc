"""Unit tests for target resolution and per-target rendering."""

import pytest

from llmkit.contexts.rendering.targets import TARGET_RENDERERS, render_targets, resolve_targets
from llmkit.utils.exceptions import ConfigurationError, PipelineStage
from llmkit.utils.settings import ALL_TARGETS, ConversionSettings


@pytest.mark.unit
class TestResolveTargets:
    """Tests for resolve_targets function."""

    def test_default_is_every_enabled_target(self, all_targets_settings):
        assert resolve_targets(None, all_targets_settings) == list(ALL_TARGETS)

    def test_default_respects_disabled_targets(self):
        settings = ConversionSettings(enabled_targets=("json", "csv"))
        assert resolve_targets(None, settings) == ["json", "csv"]

    def test_names_normalized_and_deduplicated(self, all_targets_settings):
        requested = [" YAML", "toml", "yaml ", "", "Toml"]
        assert resolve_targets(requested, all_targets_settings) == ["yaml", "toml"]

    def test_comma_separated_string(self, all_targets_settings):
        assert resolve_targets("csv, json", all_targets_settings) == ["csv", "json"]

    def test_empty_request_renders_nothing(self, all_targets_settings):
        assert resolve_targets([], all_targets_settings) == []

    def test_unknown_target(self, all_targets_settings):
        with pytest.raises(ConfigurationError, match="Unknown target 'xml'") as exc_info:
            resolve_targets(["xml"], all_targets_settings)
        assert exc_info.value.stage is PipelineStage.RECEIVED

    @pytest.mark.parametrize("name", ["markdown_table", "md", "ndjson"])
    def test_parse_only_formats_rejected(self, name, all_targets_settings):
        with pytest.raises(ConfigurationError, match="parsed but not generated"):
            resolve_targets([name], all_targets_settings)

    def test_disabled_target(self):
        settings = ConversionSettings(enabled_targets=("json", "yaml"))
        with pytest.raises(ConfigurationError, match="disabled"):
            resolve_targets(["toml"], settings)

    def test_configuration_error_is_value_error(self, all_targets_settings):
        with pytest.raises(ValueError):
            resolve_targets(["xml"], all_targets_settings)


@pytest.mark.unit
class TestRenderTargets:
    """Tests for render_targets function."""

    def test_registry_covers_all_targets(self):
        assert set(TARGET_RENDERERS) == set(ALL_TARGETS)

    def test_all_targets_for_mapping(self):
        renderings, skipped = render_targets({"a": 1, "b": "x"}, ["yaml", "toml"])
        assert renderings == {"yaml": "a: 1\nb: x\n", "toml": 'a = 1\nb = "x"\n'}
        assert skipped == {}

    def test_json_target_is_pretty(self):
        renderings, _ = render_targets({"a": 1}, ["json"])
        assert renderings["json"] == '{\n  "a": 1\n}'

    def test_failure_isolated_to_one_target(self):
        """A sequence cannot be TOML, but YAML and CSV still render."""
        value = [{"name": "Alice", "age": 30}]
        renderings, skipped = render_targets(value, ["toml", "yaml", "csv"])

        assert list(renderings) == ["yaml", "csv"]
        assert renderings["csv"] == "name,age\nAlice,30\n"
        assert list(skipped) == ["toml"]
        assert "must be tables" in skipped["toml"]

    def test_every_target_skipped(self):
        renderings, skipped = render_targets("scalar", ["toml", "csv"])
        assert renderings == {}
        assert set(skipped) == {"toml", "csv"}
