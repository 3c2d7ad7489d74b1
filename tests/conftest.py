"""Shared pytest fixtures for eclipse-resource-encoding tests."""

from pathlib import Path

import pytest

from eclipse_encoding.model.registry import EncodingRegistry


@pytest.fixture
def registry() -> EncodingRegistry:
    """Empty registry with a fresh file merger."""
    return EncodingRegistry()


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    """Preference file location inside a temporary project."""
    return tmp_path / ".settings" / "org.eclipse.core.resources.prefs"
