"""Utility functions for invoking Git and other external commands."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import git

from git_clone_step.utils.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

# Initialize logger for this module
logger = get_logger(__name__)


async def run_command(*args: str, input_data: str | None = None) -> tuple[bytes, bytes]:
    """Execute a command asynchronously and return (stdout, stderr) bytes.

    Git operations go through :func:`run_git`; this is used for the other tools the step talks to.

    Parameters
    ----------
    *args : str
        The command and its arguments to execute.
    input_data : str | None
        Text written to the command's ``stdin``. When ``None``, ``stdin`` is left closed.

    Returns
    -------
    tuple[bytes, bytes]
        A tuple containing the stdout and stderr of the command.

    Raises
    ------
    RuntimeError
        If the command cannot be started or exits with a non-zero status.

    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.PIPE if input_data is not None else asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        msg = f"Command failed to start: {' '.join(args)}\nError: {exc}"
        raise RuntimeError(msg) from exc

    stdout, stderr = await proc.communicate(input_data.encode() if input_data is not None else None)
    if proc.returncode != 0:
        msg = f"Command failed: {' '.join(args)}\nError: {stderr.decode().strip()}"
        raise RuntimeError(msg)

    return stdout, stderr


async def ensure_git_installed() -> None:
    """Ensure Git is installed and accessible on the system.

    Raises
    ------
    RuntimeError
        If Git is not installed or not accessible.

    """
    try:
        version = git.Git().version()
    except (git.CommandError, OSError) as exc:
        msg = "Git is not installed or not accessible. Please install Git first."
        raise RuntimeError(msg) from exc

    logger.debug("Git is available", extra={"version": version})


def run_git(git_cmd: git.Git, *args: str, env: Mapping[str, str] | None = None) -> str:
    """Run ``git <args>`` and return its standard output.

    The argument vector is passed as-is. ``env`` is overlaid on the inherited environment for this
    invocation only; the process environment is never modified. The command's output is relayed to the
    log, at ``WARNING`` when the command fails, and its exit status is the only failure signal.

    Parameters
    ----------
    git_cmd : git.Git
        GitPython command object bound to the working directory.
    *args : str
        Arguments following ``git``.
    env : Mapping[str, str] | None
        Environment variables added for this invocation.

    Returns
    -------
    str
        The command's standard output, trailing newline stripped.

    Raises
    ------
    git.GitCommandError
        If the command exits with a non-zero status.

    """
    command = ["git", *args]
    logger.debug("Running git command", extra={"command": command, "working_dir": git_cmd.working_dir})
    try:
        _, stdout, stderr = git_cmd.execute(command, with_extended_output=True, env=dict(env) if env else None)
    except git.CommandError as exc:
        logger.warning(
            "Git command failed",
            extra={
                "command": command,
                "status": exc.status,
                "stdout": exc.stdout.strip(),
                "stderr": exc.stderr.strip(),
            },
        )
        raise

    for stream in (stdout, stderr):
        if stream:
            logger.info(stream)

    return stdout


def create_git_command(local_path: str | Path) -> git.Git:
    """Return a GitPython command object that runs in ``local_path``."""
    return git.Git(str(local_path))
