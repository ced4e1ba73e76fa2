"""Environment helper utilities.

Loads a `.env` file from the project root so that settings such as
``OPENAI_API_KEY`` or ``RETAIL_LOG_LEVEL`` become available via ``os.getenv``.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

__all__ = ["load_project_dotenv"]

MAX_PARENT_LEVELS = 10


def _find_project_root(start: Path | None = None) -> Path:
    """Walk upwards until a directory containing `pyproject.toml` is found."""
    current = start or Path(__file__).resolve().parent
    for _ in range(MAX_PARENT_LEVELS):
        if (current / "pyproject.toml").exists():
            return current
        if current.parent == current:
            break
        current = current.parent
    return Path(__file__).resolve().parent


def load_project_dotenv(start: Path | None = None) -> bool:
    """Load the project-level `.env` without overriding existing variables.

    Returns True when a `.env` file was found and loaded.
    """
    dotenv_path = _find_project_root(start) / ".env"
    if not dotenv_path.exists():
        return False
    load_dotenv(dotenv_path=dotenv_path, override=False)
    return True
