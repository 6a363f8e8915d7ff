"""Configuration management for mapframe.

Settings are loaded with Dynaconf from multiple locations in order of
increasing priority:

1. Global settings (/etc/mapframe/)
2. User settings (~/.config/mapframe/)
3. Current directory settings (./)
4. Environment variable specified file (MAPFRAME_SETTINGS_FILE_FOR_DYNACONF)

Individual keys can be overridden with ``MAPFRAME_<KEY>`` environment
variables, e.g. ``MAPFRAME_PARALLEL_DOWNLOADS=4``.

Attributes
----------
USER_DIR : pathlib.Path
    Path to user configuration directory.
GLOB_DIR : pathlib.Path
    Path to global configuration directory.
CURR_DIR : pathlib.Path
    Path to current working directory.
DEFAULTS : dict
    Fallback values used when a key is not set in any settings file.
settings : Dynaconf
    The Dynaconf settings object with loaded configuration.
"""
import os
import pathlib

from dynaconf import Dynaconf

USER_DIR = pathlib.Path("~/.config/mapframe").expanduser()
GLOB_DIR = pathlib.Path("/etc/mapframe/")
CURR_DIR = pathlib.Path("./").absolute()
settings_files = [
    GLOB_DIR / "settings.toml",
    GLOB_DIR / ".secrets.toml",
    USER_DIR / "settings.toml",
    USER_DIR / ".secrets.toml",
    CURR_DIR / "settings.toml",
    CURR_DIR / ".secrets.toml"
    ]
extra_file = os.getenv("MAPFRAME_SETTINGS_FILE_FOR_DYNACONF")
if extra_file:
    settings_files.append(pathlib.Path(extra_file).absolute())

DEFAULTS = {
    "tile_size": 256,
    "min_zoom": 3,
    "max_zoom": 20,
    "parallel_downloads": 8,
    "timeout": 10,
    "user_agent": "mapframe/0.1",
    "default_source": "osm",
    "verbose": False,
}

settings = Dynaconf(
    merge_enabled = True,
    envvar_prefix="MAPFRAME",
    settings_files=settings_files,
    environments=True,
    load_dotenv=True,
)


def get(key):
    """Return a setting, falling back to the packaged default.

    Parameters
    ----------
    key : str
        Setting name (case-insensitive, as in Dynaconf).

    Returns
    -------
    object
        Configured value or the entry in `DEFAULTS`.
    """
    return settings.get(key, DEFAULTS.get(key.lower()))


def change_env(new_env):
    """Change the active Dynaconf environment.

    Parameters
    ----------
    new_env : str
        The environment name to switch to (e.g., 'development', 'production').
    """
    settings.setenv(new_env)
    settings.reload()
