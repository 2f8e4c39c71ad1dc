"""
Integration tests for the llmkit command-line interface.

Invokes the typer app with CliRunner, feeding input through stdin or --file.
"""

import json

import pytest
from typer.testing import CliRunner

from llmkit.cli import app

runner = CliRunner()


def _bundle(result) -> dict:
    """Parse the bundle JSON from stdout (log lines on stderr may be mixed in)."""
    text = result.stdout
    return json.loads(text[text.index("{") : text.rindex("}") + 1])


@pytest.mark.integration
class TestCliSuccess:
    """Successful conversions print the bundle as JSON."""

    def test_stdin_default_targets(self, clean_env):
        result = runner.invoke(app, [], input='{"a":1,"b":"x"}')

        assert result.exit_code == 0
        bundle = _bundle(result)
        assert bundle["Format"] == "json"
        assert bundle["normal"] == '{"a":1,"b":"x"}'
        assert bundle["yaml"] == "a: 1\nb: x\n"
        assert bundle["toml"] == 'a = 1\nb = "x"\n'

    def test_targets_option(self, clean_env):
        result = runner.invoke(app, ["--targets", "yaml"], input="a = 1\n")

        assert result.exit_code == 0
        bundle = _bundle(result)
        assert bundle["Format"] == "toml"
        assert set(bundle) == {"Format", "Original", "Beautified", "normal", "yaml"}

    def test_format_overrides_targets(self, clean_env):
        result = runner.invoke(
            app, ["--targets", "yaml,toml", "--format", "csv"], input="name,age\nAlice,30\n"
        )

        assert result.exit_code == 0
        bundle = _bundle(result)
        assert bundle["csv"] == "name,age\nAlice,30\n"
        assert "yaml" not in bundle
        assert "toml" not in bundle

    def test_file_option(self, clean_env, tmp_path):
        path = tmp_path / "reply.md"
        path.write_text("Here you go:\n\n```yaml\nname: Ada\n```\n")

        result = runner.invoke(app, ["--file", str(path), "--targets", "json"])

        assert result.exit_code == 0
        bundle = _bundle(result)
        assert bundle["Format"] == "yaml"
        assert bundle["Original"] == "name: Ada"
        assert bundle["json"] == '{\n  "name": "Ada"\n}'

    def test_max_bytes_option(self, clean_env):
        raw = '{"a":1}\n{"b":2}\n{"c":'
        result = runner.invoke(app, ["--max-bytes", "15", "--targets", ""], input=raw)

        assert result.exit_code == 0
        assert _bundle(result)["Format"] == "ndjson"

    def test_skipped_target_reported(self, clean_env):
        result = runner.invoke(app, ["--format", "toml"], input="[1, 2]")

        assert result.exit_code == 0
        assert "toml" not in _bundle(result)
        assert "Skipped toml" in result.output

    def test_log_dir_writes_log_file(self, clean_env, tmp_path):
        log_dir = tmp_path / "logs"
        result = runner.invoke(app, ["--log-dir", str(log_dir)], input='{"a":1}')

        assert result.exit_code == 0
        assert (log_dir / "convert.log").exists()


@pytest.mark.integration
class TestCliFailures:
    """Failures map to exit codes."""

    def test_unknown_format_exits_1(self, clean_env):
        result = runner.invoke(app, [], input="just some prose")
        assert result.exit_code == 1

    def test_parse_failure_exits_1(self, clean_env):
        result = runner.invoke(app, [], input="a = 1\na = 2\n")
        assert result.exit_code == 1

    def test_unknown_target_exits_2(self, clean_env):
        result = runner.invoke(app, ["--targets", "xml"], input='{"a":1}')
        assert result.exit_code == 2
        assert "Configuration error" in result.output

    def test_parse_only_target_exits_2(self, clean_env):
        result = runner.invoke(app, ["--format", "markdown_table"], input='{"a":1}')
        assert result.exit_code == 2

    def test_bad_environment_exits_2(self, clean_env):
        clean_env.setenv("LLMKIT_MAX_BYTES", "lots")
        result = runner.invoke(app, [], input='{"a":1}')
        assert result.exit_code == 2

    def test_missing_file_is_usage_error(self, clean_env, tmp_path):
        result = runner.invoke(app, ["--file", str(tmp_path / "missing.json")])
        assert result.exit_code == 2

    def test_missing_settings_file_exits_2(self, clean_env, tmp_path):
        clean_env.setenv("LLMKIT_CONFIG_PATH", str(tmp_path / "missing.yaml"))
        result = runner.invoke(app, [], input='{"a":1}')
        assert result.exit_code == 2
        assert "Configuration error" in result.output
