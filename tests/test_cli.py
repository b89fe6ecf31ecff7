"""Tests for CLI commands."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from sohodemo.cli import cli
from sohodemo.config import Config


@pytest.fixture
def config_file(tmp_path: Path, views_dir: Path) -> Path:
    """Create a config file pointing at the sample views tree."""
    path = tmp_path / "sohodemo.toml"
    path.write_text(
        f'[views]\nviews_dir = "{views_dir.name}"\nsort_listings = true\n'
        "[live_reload]\nenabled = false\n",
    )
    return path


class TestResolveCommand:
    """Tests for the resolve command."""

    def test__document__prints_layout_and_subtitle(self, config_file: Path) -> None:
        """Rendered page shows the selected layout."""
        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "/controls/dropdown", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Render: controls/dropdown" in result.output
        assert "Layout: controls/layout" in result.output
        assert "Subtitle: Dropdown" in result.output

    def test__nofrills_query__selects_minimal_layout(self, config_file: Path) -> None:
        """Query parameters in PATH are applied like in a request."""
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["resolve", "/tests/button?nofrills=1", "-c", str(config_file)],
        )

        assert result.exit_code == 0
        assert "Render: tests/button" in result.output
        assert "Layout: tests/layout-noheader" in result.output

    def test__partial__prints_no_layout(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "/partials/snippet", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Layout: (none)" in result.output

    def test__directory__prints_listing(self, config_file: Path) -> None:
        """Directory without index prints its entries."""
        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "/tests/", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Listing: tests/" in result.output
        assert "  d datagrid -> /tests/datagrid/" in result.output
        assert "  - button.html -> /tests/button.html" in result.output
        assert "footer.html" not in result.output

    def test__missing__prints_fallback_and_fails(self, config_file: Path) -> None:
        """Missing page exits non-zero and shows the parent listing."""
        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "/tests/datagrid/nope", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Not found: tests/datagrid/nope" in result.output
        assert "Listing: tests/datagrid/" in result.output

    def test__views_dir_option__overrides_config(self, tmp_path: Path, config_file: Path) -> None:
        other = tmp_path / "other"
        other.mkdir()
        (other / "index.html").write_text("")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["resolve", "/", "-c", str(config_file), "--views-dir", str(other)],
        )

        assert result.exit_code == 0
        assert "Render: index" in result.output

    def test__invalid_config__prints_error(self, tmp_path: Path) -> None:
        """Invalid config exits with a readable error."""
        config_file = tmp_path / "sohodemo.toml"
        config_file.write_text("[server]\nport = \"x\"")

        runner = CliRunner()
        result = runner.invoke(cli, ["resolve", "/", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Error: server.port must be an integer" in result.output


class TestServeCommand:
    """Tests for the serve command."""

    def test__options__override_config(self, config_file: Path, tmp_path: Path) -> None:
        """Command line options are passed to the server config."""
        data_dir = tmp_path / "fixtures"

        runner = CliRunner()
        with patch("sohodemo.server.run_server") as run_server:
            result = runner.invoke(
                cli,
                [
                    "serve",
                    "-c",
                    str(config_file),
                    "--port",
                    "4100",
                    "--basepath",
                    "/demo/",
                    "--data-dir",
                    str(data_dir),
                    "--live-reload",
                ],
            )

        assert result.exit_code == 0
        assert "Starting server on 127.0.0.1:4100" in result.output
        assert "Base path: /demo/" in result.output
        assert "Live reload: enabled" in result.output

        config: Config = run_server.call_args.args[0]
        assert config.server.port == 4100
        assert config.server.basepath == "/demo/"
        assert config.api.data_dir == data_dir
        assert config.live_reload.enabled is True
        assert run_server.call_args.kwargs == {"verbose": False}

    def test__basepath_env__is_used(self, config_file: Path) -> None:
        """BASEPATH environment variable sets the base path."""
        runner = CliRunner()
        with patch("sohodemo.server.run_server") as run_server:
            result = runner.invoke(
                cli,
                ["serve", "-c", str(config_file)],
                env={"BASEPATH": "/soho/"},
            )

        assert result.exit_code == 0
        assert run_server.call_args.args[0].server.basepath == "/soho/"

    def test__missing_config__fails(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["serve", "-c", str(tmp_path / "missing.toml")])

        assert result.exit_code != 0
