"""Discovery of data files bundled with the package.

Locates the JSON fixtures shipped inside the sohodemo package.
"""

from importlib.resources import files
from pathlib import Path


def get_bundled_data_dir() -> Path:
    """Return path to bundled JSON fixtures.

    Returns:
        Path to the data directory containing bundled fixtures.

    Raises:
        FileNotFoundError: If the bundled data directory is missing.
    """
    data = files("sohodemo").joinpath("data")
    if not data.is_dir():
        msg = "Bundled fixtures not found. Reinstall the sohodemo package."
        raise FileNotFoundError(msg)
    return Path(str(data))
