"""Unit tests for environment loader behavior."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from parasite.utils import env_loader


def test_load_project_env_dotenv(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """python-dotenv is invoked without overriding existing variables.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture for patching modules.
        tmp_path (pathlib.Path): Temporary directory for the test.
    """
    env_file = tmp_path / ".env"
    env_file.write_text("PARASITE_INPUT_DIR=samples\n")
    calls: list[dict[str, object]] = []

    def fake_load_dotenv(**kwargs: object) -> None:
        calls.append(kwargs)
        os.environ.setdefault("PARASITE_INPUT_DIR", "samples")

    monkeypatch.delenv("PARASITE_INPUT_DIR", raising=False)
    monkeypatch.setattr(env_loader, "_ENV_FILE", env_file)
    monkeypatch.setattr(env_loader, "LOAD_DOTENV", fake_load_dotenv)
    env_loader.load_project_env.cache_clear()

    env_loader.load_project_env(force=True)

    assert calls == [{"dotenv_path": env_file, "override": False}]
    assert os.getenv("PARASITE_INPUT_DIR") == "samples"


def test_load_project_env_missing_file(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """A missing .env is silently ignored.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture for patching modules.
        tmp_path (pathlib.Path): Temporary directory for the test.
    """

    def fail_load_dotenv(**_kwargs: object) -> None:  # pragma: no cover
        raise AssertionError("dotenv must not be called without a file")

    monkeypatch.setattr(env_loader, "_ENV_FILE", tmp_path / "absent.env")
    monkeypatch.setattr(env_loader, "LOAD_DOTENV", fail_load_dotenv)
    env_loader.load_project_env.cache_clear()

    env_loader.load_project_env(force=True)


def test_shell_variables_win_over_env_file(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Values already exported by the shell are not replaced by .env entries."""
    env_file = tmp_path / ".env"
    env_file.write_text("PARASITE_OUTPUT_DIR=from_file\nFFPLAY_BINARY=/opt/ffplay\n")
    monkeypatch.setenv("PARASITE_OUTPUT_DIR", "from_shell")
    # Registered first so the variable is removed again after the test.
    monkeypatch.setenv("FFPLAY_BINARY", "unset")
    monkeypatch.delenv("FFPLAY_BINARY")
    monkeypatch.setattr(env_loader, "_ENV_FILE", env_file)
    monkeypatch.setattr(env_loader, "LOAD_DOTENV", load_dotenv)
    env_loader.load_project_env.cache_clear()

    env_loader.load_project_env(force=True)

    assert os.environ["PARASITE_OUTPUT_DIR"] == "from_shell"
    assert os.environ["FFPLAY_BINARY"] == "/opt/ffplay"
