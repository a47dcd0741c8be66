"""Utilities for handling SSH transport authentication."""

from __future__ import annotations

from pathlib import Path

from git_clone_step.config import (
    GIT_ASKPASS_OVERRIDE,
    SSH_HELPER_DIR,
    SSH_HELPER_SCRIPT,
    SSH_HELPER_SCRIPT_WITH_KEY,
    SSH_KEY_PATH,
)
from git_clone_step.utils.exceptions import CredentialSetupError
from git_clone_step.utils.logging_config import get_logger
from git_clone_step.utils.os_utils import write_text_file

# Initialize logger for this module
logger = get_logger(__name__)


def select_ssh_helper(*, has_key: bool) -> str:
    """Return the name of the SSH wrapper script git should use for transport."""
    return SSH_HELPER_SCRIPT_WITH_KEY if has_key else SSH_HELPER_SCRIPT


def prepare_ssh_credentials(private_key: str, *, home: Path | None = None) -> dict[str, str]:
    """Persist the SSH private key and return the git environment overlay that uses it.

    The key is written to a fixed path under the home directory with default permissions. Nothing is
    encrypted or removed afterwards.

    Parameters
    ----------
    private_key : str
        The private key contents. An empty string means no key was provided.
    home : Path | None
        Home directory to write the key under. Defaults to the invoking user's home directory.

    Returns
    -------
    dict[str, str]
        ``GIT_ASKPASS`` and ``GIT_SSH`` values to pass to every git invocation.

    Raises
    ------
    CredentialSetupError
        If the home directory cannot be determined or the key cannot be written.

    """
    has_key = bool(private_key)

    if has_key:
        if home is None:
            try:
                home = Path.home()
            except (RuntimeError, KeyError) as exc:
                msg = f"Failed to get home directory: {exc}"
                raise CredentialSetupError(msg) from exc

        key_path = home / SSH_KEY_PATH
        try:
            write_text_file(key_path, private_key)
        except OSError as exc:
            raise CredentialSetupError(str(exc)) from exc
        logger.info("SSH private key written", extra={"path": str(key_path)})

    helper = select_ssh_helper(has_key=has_key)
    logger.debug("Selected SSH helper script", extra={"script": helper})
    return {
        "GIT_ASKPASS": GIT_ASKPASS_OVERRIDE,
        "GIT_SSH": str(SSH_HELPER_DIR / helper),
    }
