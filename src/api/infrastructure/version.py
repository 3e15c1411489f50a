"""Application version reported in the OpenAPI document."""

import tomllib
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "users-api"

# Repository root when running from a source checkout (src/api/infrastructure)
_PYPROJECT = Path(__file__).resolve().parents[3] / "pyproject.toml"

UNKNOWN_VERSION = "0+unknown"


def _source_version() -> str:
    if not _PYPROJECT.is_file():
        return UNKNOWN_VERSION
    with _PYPROJECT.open("rb") as f:
        return tomllib.load(f)["project"]["version"]


@lru_cache
def get_version() -> str:
    """Return the installed distribution's version.

    Falls back to pyproject.toml in a source checkout, and to
    ``0+unknown`` when neither is available (for example a copied tree
    inside a container image).
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return _source_version()
