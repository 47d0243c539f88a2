"""
Pytest configuration and shared fixtures for gitup tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest
import yaml

from gitup.confirm import Console
from gitup.exceptions import GitError
from gitup.logging import SilentLogger, set_global_logger


class FakeVersionControl:
    """In-memory stand-in for a git working tree.

    Set local/remote to a tag string, or to an exception instance to make
    the corresponding query fail.
    """

    def __init__(
        self,
        local: str | Exception = "v1.0.0",
        remote: str | Exception = "v1.0.0",
        checkout_error: Exception | None = None,
    ) -> None:
        self.local = local
        self.remote = remote
        self.checkout_error = checkout_error
        self.checkouts: list[str] = []
        self.local_calls = 0
        self.remote_calls = 0

    def local_tag(self) -> str:
        self.local_calls += 1
        if isinstance(self.local, Exception):
            raise self.local
        return self.local

    def last_tag(self) -> str:
        self.remote_calls += 1
        if isinstance(self.remote, Exception):
            raise self.remote
        return self.remote

    def checkout_tag(self, tag: str) -> None:
        if self.checkout_error is not None:
            raise self.checkout_error
        if not tag.strip():
            raise GitError("tag name is undefined")
        self.checkouts.append(tag)


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Reset the global logger so tests never inherit CLI verbosity."""
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def fake_vcs():
    """
    Factory fixture for FakeVersionControl instances.

    Usage:
        vcs = fake_vcs("v1.0.0", "v1.1.0")
    """

    def _create(
        local: str | Exception = "v1.0.0",
        remote: str | Exception = "v1.0.0",
        checkout_error: Exception | None = None,
    ) -> FakeVersionControl:
        return FakeVersionControl(local, remote, checkout_error)

    return _create


@pytest.fixture
def make_console():
    """
    Factory fixture for consoles backed by string buffers.

    Usage:
        console, output = make_console("n\\n")
    """

    def _create(text: str = "") -> tuple[Console, io.StringIO]:
        output = io.StringIO()
        return Console(stdin=io.StringIO(text), stdout=output), output

    return _create


@pytest.fixture
def create_yaml_file(tmp_path: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yaml", {"key": "value"})
    """

    def _create(filename: str, data: dict[str, Any]) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path: Path, monkeypatch):
    """Point the user defaults layer at a (missing) file under tmp_path."""
    path = tmp_path / "user" / "config.yaml"
    monkeypatch.setenv("GITUP_CONFIG", str(path))
    return path
