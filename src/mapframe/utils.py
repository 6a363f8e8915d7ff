"""Small helpers shared across mapframe."""
from . import config


def vprint(text, level=0):
    """Print text if verbose mode is enabled.

    Parameters
    ----------
    text : str
        Text to print.
    level : int, optional
        Indentation level, by default 0.
    """
    if config.get("verbose"):
        print("  " * level + str(text))
