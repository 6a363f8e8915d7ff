"""Tests for the mapframe.cli module."""

from unittest.mock import patch

import numpy as np
from PIL import Image
from typer.testing import CliRunner

from mapframe.cli import app
from mapframe.layers.sources import TileSource


runner = CliRunner()

CLUSTER_BBOX = "8.8496785,42.467529,8.9096785,42.507529"


class TestFitCommand:
    """Tests for the fit CLI command."""

    def test_prints_center_and_zoom(self):
        result = runner.invoke(app, ["fit", CLUSTER_BBOX, "--width", "1000", "--height", "1000"])

        assert result.exit_code == 0
        assert "Center: 42.487529,8.87967" in result.output
        assert "Zoom: 14" in result.output

    def test_padding_lowers_zoom(self):
        result = runner.invoke(app, ["fit", CLUSTER_BBOX, "--width", "1000",
                                     "--height", "1000", "--padding", "200"])

        assert result.exit_code == 0
        assert "Zoom: 13" in result.output

    def test_invalid_bbox_fails(self):
        result = runner.invoke(app, ["fit", "1,2,3"])

        assert result.exit_code != 0

    @patch('mapframe.config.change_env')
    def test_changes_env_when_not_default(self, mock_change_env):
        """fit should change environment when env is not DEFAULT."""
        result = runner.invoke(app, ["fit", CLUSTER_BBOX, "--env", "production"])

        mock_change_env.assert_called_once_with("production")
        assert result.exit_code == 0

    @patch('mapframe.config.change_env')
    def test_skips_env_change_for_default(self, mock_change_env):
        """fit should not change environment for DEFAULT."""
        result = runner.invoke(app, ["fit", CLUSTER_BBOX, "--env", "DEFAULT"])

        mock_change_env.assert_not_called()
        assert result.exit_code == 0

    @patch('mapframe.config.change_env')
    def test_prints_environment_name(self, mock_change_env):
        result = runner.invoke(app, ["fit", CLUSTER_BBOX, "--env", "test_env"])

        assert "test_env" in result.output


class TestRenderCommand:
    """Tests for the render CLI command."""

    @patch.object(TileSource, 'get_tile', return_value=None)
    def test_renders_bbox(self, mock_get_tile, temp_dir):
        """render should write a white image when no tile is available."""
        output = temp_dir / "map.png"

        result = runner.invoke(app, ["render", str(output), "--bbox", CLUSTER_BBOX,
                                     "--width", "1000", "--height", "1000"])

        assert result.exit_code == 0
        assert "zoom 14" in result.output
        assert mock_get_tile.called
        with Image.open(output) as image:
            assert image.size == (1000, 1000)
            assert (np.asarray(image.convert("RGBA")) == 255).all()

    @patch.object(TileSource, 'get_tile')
    def test_renders_center_and_zoom(self, mock_get_tile, temp_dir):
        mock_get_tile.return_value = Image.new("RGBA", (256, 256), (0, 128, 0, 255))
        output = temp_dir / "map.png"

        result = runner.invoke(app, ["render", str(output), "--center", "48.8566,2.3522",
                                     "--zoom", "10", "--width", "300", "--height", "200"])

        assert result.exit_code == 0
        assert "zoom 10" in result.output
        with Image.open(output) as image:
            assert image.convert("RGBA").getpixel((150, 100)) == (0, 128, 0, 255)

    @patch.object(TileSource, 'get_tile', return_value=None)
    def test_custom_url(self, mock_get_tile, temp_dir):
        output = temp_dir / "map.png"

        result = runner.invoke(app, ["render", str(output), "--center", "0,0", "--zoom", "2",
                                     "--url", "https://{s}.example.com/{z}/{x}/{y}.png",
                                     "--seed", "1"])

        assert result.exit_code == 0
        assert output.exists()

    def test_requires_view(self, temp_dir):
        """render needs either --bbox or --center with --zoom."""
        result = runner.invoke(app, ["render", str(temp_dir / "map.png"), "--center", "0,0"])

        assert result.exit_code != 0

    def test_unknown_source_fails(self, temp_dir):
        result = runner.invoke(app, ["render", str(temp_dir / "map.png"),
                                     "--center", "0,0", "--zoom", "2", "--source", "nope"])

        assert result.exit_code != 0

    def test_invalid_center_fails(self, temp_dir):
        result = runner.invoke(app, ["render", str(temp_dir / "map.png"),
                                     "--center", "north", "--zoom", "2"])

        assert result.exit_code != 0


class TestCallback:
    """Tests for the CLI callback (help text)."""

    def test_help_shows_description(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "static map" in result.output.lower()

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "fit" in result.output
        assert "render" in result.output

    def test_invalid_command_shows_error(self):
        result = runner.invoke(app, ["nonexistent_command"])

        assert result.exit_code != 0
