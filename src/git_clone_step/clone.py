"""Module containing functions for cloning a Git repository into the build's destination directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import git

from git_clone_step.config import GIT_DIR_NAME, REMOTE_NAME
from git_clone_step.utils.exceptions import CloneStepError, RepositoryExistsError
from git_clone_step.utils.git_utils import create_git_command, ensure_git_installed, run_git
from git_clone_step.utils.logging_config import get_logger
from git_clone_step.utils.os_utils import ensure_directory_exists_or_create, path_exists

if TYPE_CHECKING:
    from git_clone_step.schemas import CloneConfig

# Initialize logger for this module
logger = get_logger(__name__)


async def clone_repo(config: CloneConfig) -> bool:
    """Clone a repository into ``config.local_path`` and check out the resolved target.

    The repository is initialized in place, ``origin`` is registered and fetched, and, when a checkout
    target was resolved, the working tree is switched to it and submodules are updated. Checking out a tag
    or a commit leaves the working tree detached.

    Parameters
    ----------
    config : CloneConfig
        The configuration for cloning the repository.

    Returns
    -------
    bool
        ``True`` if a checkout was performed, ``False`` if no checkout target was resolved.

    Raises
    ------
    RepositoryExistsError
        If the destination already contains a ``.git`` entry. Nothing is created or run in that case.
    CloneStepError
        If the destination cannot be created or any git step fails. ``step`` names the failing step and
        the remaining steps are not run.

    """
    local_path = config.local_path
    git_path = local_path / GIT_DIR_NAME

    logger.info(
        "Starting git clone operation",
        extra={
            "url": config.url,
            "local_path": str(local_path),
            "checkout": config.checkout.ref if config.checkout else None,
            "pull_request_id": config.pull_request_id or None,
        },
    )

    try:
        exists = path_exists(git_path)
    except OSError as exc:
        msg = f"Failed to check file path ({git_path}): {exc}"
        raise CloneStepError("check-destination", msg) from exc
    if exists:
        logger.error("Destination is already a git repository", extra={"git_path": str(git_path)})
        raise RepositoryExistsError(str(git_path))

    logger.debug("Ensuring git is installed")
    await ensure_git_installed()

    logger.debug("Creating local directory", extra={"local_path": str(local_path), "parents": config.create_parents})
    try:
        ensure_directory_exists_or_create(local_path, parents=config.create_parents)
    except OSError as exc:
        raise CloneStepError("create-directory", str(exc)) from exc

    git_cmd = create_git_command(local_path)

    _run_step(git_cmd, config, "init", "init")
    _run_step(git_cmd, config, "add-remote", "remote", "add", REMOTE_NAME, config.url)
    _run_step(git_cmd, config, "fetch", *_fetch_args(config))

    if config.checkout is None:
        logger.info("No checkout parameter (branch, tag, commit hash or pull-request ID) provided, skipping checkout")
        return False

    logger.info("Checking out", extra={"ref": config.checkout.ref, "kind": config.checkout.kind.value})
    _run_step(git_cmd, config, "checkout", "checkout", config.checkout.ref)

    logger.info("Updating submodules")
    _run_step(git_cmd, config, "submodule-update", "submodule", "update", "--init", "--recursive")

    logger.info("Git clone operation completed successfully", extra={"local_path": str(local_path)})
    return True


def _fetch_args(config: CloneConfig) -> list[str]:
    """Return the ``git fetch`` arguments.

    With a pull-request id, the server-side merge ref is fetched into the local ref the checkout target
    names; otherwise a plain fetch is performed.
    """
    checkout = config.checkout
    if config.pull_request_id and checkout is not None and checkout.fetch_refspec:
        return ["fetch", REMOTE_NAME, checkout.fetch_refspec]
    return ["fetch"]


def _run_step(git_cmd: git.Git, config: CloneConfig, step: str, *args: str) -> str:
    """Run one git step, wrapping a failure in ``CloneStepError``."""
    logger.debug("Running clone step", extra={"step": step})
    try:
        return run_git(git_cmd, *args, env=config.env)
    except git.CommandError as exc:
        logger.error("Clone step failed", extra={"step": step, "status": exc.status})
        raise CloneStepError(step, str(exc)) from exc
