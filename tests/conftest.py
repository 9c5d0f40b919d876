"""
Pytest configuration and shared fixtures for vermatch tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from vermatch.logging import get_global_logger, set_global_logger


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture(autouse=True)
def reset_global_logger():
    """Restore the silent global logger after every test."""
    previous = get_global_logger()
    yield
    set_global_logger(previous)


@pytest.fixture
def sample_manifest_data() -> dict[str, Any]:
    """
    Provide sample manifest configuration data.

    Returns a manifest with one pattern tool and one pinned tool.
    """
    return {
        "apiVersion": "vermatch/v1",
        "tools": {
            "java": {
                "version": "17*",
                "catalog": {
                    "versions": ["11.0.20", "17.0.1", "17.0.2", "21.0.1"],
                },
            },
            "maven": {
                "version": "3.9.6",
            },
        },
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yaml", {"key": "value"})
    """

    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create
