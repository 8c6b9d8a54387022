"""Tests for the command line interface."""

from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from smartrelease import __version__
from smartrelease.cli import main
from smartrelease.core.errors import NoMatchingAsset
from smartrelease.models.release import ReleaseSource


class TestResolveCommand:
    """Tests for `smartrelease resolve`."""

    def test_prints_url(self):
        mock = AsyncMock(return_value="https://dl.example/tool.tar.gz")
        with patch("smartrelease.commands.resolve.Resolver.resolve_remote", mock):
            result = CliRunner().invoke(
                main, ["resolve", "github", "o/r", "tool-{major}", "--reverse", "--major", "4"]
            )

        assert result.exit_code == 0
        assert "https://dl.example/tool.tar.gz" in result.output
        source, pattern, query = mock.await_args.args
        assert source == ReleaseSource.github("o", "r")
        assert pattern == "tool-{major}"
        assert query.reverse is True
        assert query.clear_unknown is True
        assert query.major == "4"

    def test_gitea_custom_host(self):
        mock = AsyncMock(return_value="https://dl.example/tool.zip")
        with patch("smartrelease.commands.resolve.Resolver.resolve_remote", mock):
            result = CliRunner().invoke(
                main, ["resolve", "gitea", "o/r", "tool", "--host", "git.example.org", "--keep-unknown"]
            )

        assert result.exit_code == 0
        source, _, query = mock.await_args.args
        assert source == ReleaseSource.gitea("o", "r", host="git.example.org")
        assert query.clear_unknown is False

    def test_error_exits_nonzero(self):
        mock = AsyncMock(side_effect=NoMatchingAsset("No matching asset was found"))
        with patch("smartrelease.commands.resolve.Resolver.resolve_remote", mock):
            result = CliRunner().invoke(main, ["resolve", "github", "o/r", "nothing"])

        assert result.exit_code == 1
        assert "No matching asset was found" in result.output

    def test_malformed_config_file(self, tmp_path):
        """Test that a broken YAML config is reported without a traceback."""
        path = tmp_path / "smartrelease.yaml"
        path.write_text("max_pattern_len: [70\n")

        result = CliRunner().invoke(main, ["resolve", "github", "o/r", "x", "--config", str(path)])

        assert result.exit_code == 1
        assert "Invalid config file" in result.output

    def test_invalid_repo_spec(self):
        result = CliRunner().invoke(main, ["resolve", "github", "just-a-name", "x"])
        assert result.exit_code == 2

    def test_host_rejected_for_github(self):
        result = CliRunner().invoke(main, ["resolve", "github", "o/r", "x", "--host", "example.org"])
        assert result.exit_code == 2


class TestServeCommand:
    def test_malformed_config_file(self, tmp_path):
        path = tmp_path / "smartrelease.yaml"
        path.write_text("port: \"8080\n")

        with patch("smartrelease.commands.serve.SmartReleaseServer") as server:
            result = CliRunner().invoke(main, ["serve", "--config", str(path)])

        assert result.exit_code == 1
        assert "Invalid config file" in result.output
        server.assert_not_called()


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
