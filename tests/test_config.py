"""Tests for the mapframe.config and mapframe.utils modules."""

from unittest.mock import patch, MagicMock

from mapframe import config
from mapframe.utils import vprint


class TestGet:
    """Tests for config.get."""

    @patch.object(config, 'settings')
    def test_falls_back_to_defaults(self, mock_settings):
        """Unset keys should return the packaged default."""
        mock_settings.get = MagicMock(side_effect=lambda key, default=None: default)

        assert config.get("tile_size") == 256
        assert config.get("min_zoom") == 3
        assert config.get("max_zoom") == 20
        assert config.get("default_source") == "osm"

    @patch.object(config, 'settings')
    def test_configured_value_wins(self, mock_settings):
        mock_settings.get = MagicMock(return_value=4)

        assert config.get("parallel_downloads") == 4
        mock_settings.get.assert_called_once_with("parallel_downloads", 8)

    @patch.object(config, 'settings')
    def test_unknown_key_defaults_to_none(self, mock_settings):
        mock_settings.get = MagicMock(side_effect=lambda key, default=None: default)

        assert config.get("no_such_key") is None


class TestChangeEnv:
    """Tests for config.change_env."""

    @patch.object(config, 'settings')
    def test_switches_and_reloads(self, mock_settings):
        config.change_env("production")

        mock_settings.setenv.assert_called_once_with("production")
        mock_settings.reload.assert_called_once()


class TestVprint:
    """Tests for the verbose print helper."""

    @patch.object(config, 'get', return_value=True)
    def test_prints_when_verbose(self, mock_get, capsys):
        vprint("hello", level=2)

        assert capsys.readouterr().out == "    hello\n"

    @patch.object(config, 'get', return_value=False)
    def test_silent_otherwise(self, mock_get, capsys):
        vprint("hello")

        assert capsys.readouterr().out == ""
