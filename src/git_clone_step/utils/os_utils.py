"""Utility functions for working with the operating system."""

from __future__ import annotations

from pathlib import Path


def path_exists(path: Path) -> bool:
    """Return whether ``path`` exists, following the same rules as ``os.stat``.

    Parameters
    ----------
    path : Path
        The path to check.

    Returns
    -------
    bool
        ``True`` if the path exists, ``False`` if it does not.

    Raises
    ------
    OSError
        If the existence cannot be determined (e.g. permission denied on a parent directory).

    """
    try:
        path.stat()
    except FileNotFoundError:
        return False
    return True


def ensure_directory_exists_or_create(path: Path, *, parents: bool = False) -> None:
    """Ensure the directory exists, creating it with default permissions if necessary.

    Parameters
    ----------
    path : Path
        The path to ensure exists.
    parents : bool
        Whether missing parent directories are created too (default: ``False``).

    Raises
    ------
    OSError
        If the directory cannot be created.

    """
    try:
        path.mkdir(parents=parents, exist_ok=True)
    except OSError as exc:
        msg = f"Failed to create directory {path}: {exc}"
        raise OSError(msg) from exc


def write_text_file(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` with default permissions, creating its parent directory."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to write {path}: {exc}"
        raise OSError(msg) from exc
