"""Shared fixtures for npm-deps tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from npm_deps.models import DependencyFile

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(*parts: str) -> str:
    return FIXTURES.joinpath(*parts).read_text(encoding="utf-8")


@pytest.fixture
def fixture_text():
    """Return a loader for files under tests/fixtures."""
    return read_fixture


@pytest.fixture
def dependency_file():
    """Build a DependencyFile named ``name`` from a fixture path."""

    def _make(name: str, *parts: str) -> DependencyFile:
        return DependencyFile(name=name, content=read_fixture(*parts))

    return _make
