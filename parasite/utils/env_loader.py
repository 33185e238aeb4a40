"""Loading of the optional ``.env`` file at the Parasite repository root.

:mod:`parasite.utils.constant` calls :func:`load_project_env` on import, so
overrides such as ``PARASITE_INPUT_DIR``, ``PARASITE_OUTPUT_DIR`` or
``FFMPEG_BINARY`` are in ``os.environ`` before the constants read them.
Variables exported by the shell always take precedence over the file.
"""

from __future__ import annotations

import functools
import pathlib
from collections.abc import Callable
from typing import Any, Final

from dotenv import load_dotenv

_ENV_FILE: Final[pathlib.Path] = pathlib.Path(__file__).resolve().parents[2] / ".env"

# Indirection so tests can observe the call without touching os.environ.
LOAD_DOTENV: Final[Callable[..., Any]] = load_dotenv


@functools.lru_cache(maxsize=1)
def load_project_env(force: bool = False) -> None:
    """Read ``.env`` into the process environment, once per process.

    A missing file is not an error: every setting has a default.

    Args:
        force: Drop the cached result and read the file again.
    """
    if force:
        load_project_env.cache_clear()  # type: ignore[attr-defined]

    if _ENV_FILE.is_file():
        LOAD_DOTENV(dotenv_path=_ENV_FILE, override=False)


__all__ = ["load_project_env"]
