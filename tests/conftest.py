"""Shared test fixtures for rover_images.

Provides reusable fixtures for isolating the home directory and
environment, building settings, managing output state, and running CLI
commands. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from rover_images.config import KNOWN_KEYS
from rover_images.models import Settings
from rover_images.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``$HOME`` and ``$XDG_DATA_HOME`` into *tmp_path*.

    Clears every environment variable that would override a config key so
    that tests never read the developer's real config, cache, or API key.

    Returns:
        The temporary home directory.
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for name in KNOWN_KEYS:
        monkeypatch.delenv(name.upper(), raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.chdir(tmp_path)
    return home


# ---------------------------------------------------------------------------
# Settings and output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary cache file and a fake API host."""
    return Settings(
        cache_file=tmp_path / "rover-images.cache",
        api_key="TEST_KEY",
        base_url="https://api.example.com/mars-photos/api/v1",
        timeout=5,
    )


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless output manager for the duration of a test."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
