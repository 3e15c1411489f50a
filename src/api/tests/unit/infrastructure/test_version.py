"""Unit tests for version lookup."""

from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

from infrastructure import version as version_module


def test_installed_version_wins():
    version_module.get_version.cache_clear()
    with patch.object(version_module, "version", return_value="1.2.3"):
        assert version_module.get_version() == "1.2.3"
    version_module.get_version.cache_clear()


def test_falls_back_to_unknown_without_metadata_or_pyproject(tmp_path):
    version_module.get_version.cache_clear()
    with (
        patch.object(
            version_module, "version", side_effect=PackageNotFoundError("users-api")
        ),
        patch.object(version_module, "_PYPROJECT", tmp_path / "pyproject.toml"),
    ):
        assert version_module.get_version() == version_module.UNKNOWN_VERSION
    version_module.get_version.cache_clear()
