"""Tests for version module."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from k8s_query_client import __version__
from k8s_query_client.__version__ import __version__ as version_string


class TestVersion:
    """Test version information."""

    @pytest.mark.unit
    def test_version_format(self) -> None:
        """Test version follows semantic versioning."""
        parts = __version__.split(".")
        assert len(parts) >= 2, "Version should have at least major.minor"
        assert all(part.isdigit() for part in parts[:2]), "Major and minor should be numeric"

    @pytest.mark.unit
    def test_version_importable(self) -> None:
        """Test version can be imported from the package and the module."""
        assert __version__ == version_string

    @pytest.mark.unit
    def test_project_metadata(self) -> None:
        """Test pyproject metadata matches the package and carries no internal docs."""
        pyproject = Path(__file__).parents[2] / "pyproject.toml"
        project = tomllib.loads(pyproject.read_text())["project"]

        assert project["version"] == __version__
        assert project.get("readme") != "DESIGN.md"
