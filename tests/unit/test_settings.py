"""
Unit tests for settings resolution.

Tests defaults, OmegaConf settings files and environment overrides in
llmkit.utils.settings.
"""

import pytest

from llmkit.utils.settings import ConversionSettings, get_settings, load_settings


@pytest.fixture
def settings_file(tmp_path):
    """Write a YAML settings file and return its path."""

    def _write(content: str):
        path = tmp_path / "llmkit.yaml"
        path.write_text(content)
        return path

    return _write


@pytest.mark.unit
class TestDefaults:
    """Settings with no file and no environment."""

    def test_defaults(self, clean_env):
        assert load_settings() == ConversionSettings()

    def test_every_target_enabled(self, clean_env):
        settings = load_settings()
        assert settings.enabled_targets == ("json", "yaml", "toml", "csv")
        assert settings.max_bytes is None
        assert settings.permissive is False

    def test_get_settings_is_cached(self, clean_env):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


@pytest.mark.unit
class TestSettingsFile:
    """Settings loaded from a YAML file."""

    def test_disable_target_and_budget(self, clean_env, settings_file):
        path = settings_file("targets:\n  toml: false\nmax_bytes: 100\n")
        settings = load_settings(path)

        assert settings.enabled_targets == ("json", "yaml", "csv")
        assert not settings.is_enabled("toml")
        assert settings.max_bytes == 100

    def test_path_from_environment(self, clean_env, settings_file):
        path = settings_file("targets:\n  csv: false\n")
        clean_env.setenv("LLMKIT_CONFIG_PATH", str(path))
        assert load_settings().enabled_targets == ("json", "yaml", "toml")

    def test_permissive_flag(self, clean_env, settings_file):
        assert load_settings(settings_file("permissive: true\n")).permissive is True

    def test_unknown_target_rejected(self, clean_env, settings_file):
        with pytest.raises(ValueError, match="xml"):
            load_settings(settings_file("targets:\n  xml: true\n"))

    def test_json_cannot_be_toggled(self, clean_env, settings_file):
        with pytest.raises(ValueError, match="json"):
            load_settings(settings_file("targets:\n  json: false\n"))


@pytest.mark.unit
class TestEnvironmentOverrides:
    """Environment variables win over the settings file."""

    def test_disabled_targets(self, clean_env):
        clean_env.setenv("LLMKIT_DISABLED_TARGETS", "yaml, CSV")
        assert load_settings().enabled_targets == ("json", "toml")

    def test_disabled_targets_add_to_file(self, clean_env, settings_file):
        clean_env.setenv("LLMKIT_DISABLED_TARGETS", "yaml")
        settings = load_settings(settings_file("targets:\n  toml: false\n"))
        assert settings.enabled_targets == ("json", "csv")

    def test_json_cannot_be_disabled(self, clean_env):
        clean_env.setenv("LLMKIT_DISABLED_TARGETS", "json")
        with pytest.raises(ValueError, match="LLMKIT_DISABLED_TARGETS"):
            load_settings()

    def test_max_bytes_overrides_file(self, clean_env, settings_file):
        clean_env.setenv("LLMKIT_MAX_BYTES", "2048")
        assert load_settings(settings_file("max_bytes: 100\n")).max_bytes == 2048

    @pytest.mark.parametrize("value", ["-1", "lots"])
    def test_invalid_max_bytes(self, clean_env, value):
        clean_env.setenv("LLMKIT_MAX_BYTES", value)
        with pytest.raises(ValueError):
            load_settings()
