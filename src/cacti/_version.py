"""Version lookup for the ``cacti`` command and ``cacti.__version__``."""

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_DISTRIBUTION = "cacti-script"


def get_version() -> str:
    """Return the Cacti version.

    A source checkout wins: the ``version`` line of the repository's
    pyproject.toml is used when that file sits three levels above this
    module. Otherwise the installed ``cacti-script`` distribution metadata
    is read, and "0.0.0" is returned when the package is not installed.
    """
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproject.is_file():
        content = pyproject.read_text(encoding="utf-8")
        if match := re.search(r'^version\s*=\s*"([^"]+)"', content, re.MULTILINE):
            return match.group(1)
    try:
        return _metadata_version(_DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"
