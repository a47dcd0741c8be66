"""Module containing functions to read, validate and resolve the step inputs."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse, urlunparse

from git_clone_step.config import (
    BRANCH_INPUT,
    CLONE_INTO_DIR_INPUT,
    COMMIT_INPUT,
    PULL_REQUEST_ID_INPUT,
    REPOSITORY_URL_INPUT,
    SSH_PRIVATE_KEY_INPUT,
    TAG_INPUT,
)
from git_clone_step.schemas import CheckoutKind, CheckoutTarget, CloneConfig, StepInputs
from git_clone_step.utils.exceptions import InputResolutionError, InvalidRepositoryURLError, MissingInputError
from git_clone_step.utils.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

# Initialize logger for this module
logger = get_logger(__name__)


def read_inputs(environ: Mapping[str, str] | None = None, *, authenticated: bool = False) -> StepInputs:
    """Read the step inputs from the environment.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        The environment to read from. Defaults to ``os.environ``.
    authenticated : bool
        Whether the step runs in its authenticated variant (default: ``False``).

    Returns
    -------
    StepInputs
        The inputs, with absent optional values as empty strings.

    """
    environ = os.environ if environ is None else environ
    return build_inputs(
        repository_url=environ.get(REPOSITORY_URL_INPUT),
        clone_into_dir=environ.get(CLONE_INTO_DIR_INPUT),
        commit=environ.get(COMMIT_INPUT),
        tag=environ.get(TAG_INPUT),
        branch=environ.get(BRANCH_INPUT),
        pull_request_id=environ.get(PULL_REQUEST_ID_INPUT),
        ssh_private_key=environ.get(SSH_PRIVATE_KEY_INPUT),
        authenticated=authenticated,
    )


def build_inputs(  # noqa: PLR0913
    *,
    repository_url: str | None,
    clone_into_dir: str | None,
    commit: str | None = None,
    tag: str | None = None,
    branch: str | None = None,
    pull_request_id: str | None = None,
    ssh_private_key: str | None = None,
    authenticated: bool = False,
) -> StepInputs:
    """Validate the raw input values and return them as ``StepInputs``.

    ``None`` and the empty string both mean "not provided". The SSH private key is only kept in the
    authenticated variant.

    Raises
    ------
    MissingInputError
        If ``repository_url`` or ``clone_into_dir`` is absent or empty.

    """
    for name, value in ((REPOSITORY_URL_INPUT, repository_url), (CLONE_INTO_DIR_INPUT, clone_into_dir)):
        if not value:
            raise MissingInputError(name)

    return StepInputs(
        repository_url=repository_url,
        clone_into_dir=clone_into_dir,
        commit=commit,
        tag=tag,
        branch=branch,
        pull_request_id=pull_request_id,
        ssh_private_key=ssh_private_key if authenticated else "",
        authenticated=authenticated,
    )


def resolve_checkout_target(inputs: StepInputs) -> CheckoutTarget | None:
    """Pick the checkout target from the checkout hints.

    The hints are checked in priority order and the first non-empty one wins:
    pull-request id, commit, tag, branch.

    Parameters
    ----------
    inputs : StepInputs
        The step inputs holding the hints.

    Returns
    -------
    CheckoutTarget | None
        The resolved target, or ``None`` if no hint was provided.

    """
    hints = [
        (inputs.pull_request_id, CheckoutKind.PULL_REQUEST),
        (inputs.commit, CheckoutKind.COMMIT),
        (inputs.tag, CheckoutKind.TAG),
        (inputs.branch, CheckoutKind.BRANCH),
    ]
    for value, kind in hints:
        if value:
            return CheckoutTarget(kind=kind, value=value)

    logger.warning("No checkout parameter found (branch, tag, commit hash or pull-request ID)")
    return None


def normalize_clone_dir(clone_into_dir: str) -> Path:
    """Return ``clone_into_dir`` as an absolute path.

    Raises
    ------
    InputResolutionError
        If the path cannot be made absolute (e.g. the working directory no longer exists).

    """
    try:
        return Path(os.path.abspath(clone_into_dir))  # noqa: PTH100
    except (OSError, ValueError) as exc:
        msg = f"Failed to expand path ({clone_into_dir}): {exc}"
        raise InputResolutionError(msg) from exc


def normalize_repository_url(url: str) -> str:
    """Parse the repository URL and serialize it back.

    Parameters
    ----------
    url : str
        The repository URL as provided to the step.

    Returns
    -------
    str
        The re-serialized URL.

    Raises
    ------
    InvalidRepositoryURLError
        If the URL is empty, contains whitespace or control characters, or cannot be parsed.

    """
    if not url:
        raise InvalidRepositoryURLError(url, "empty URL")
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):  # noqa: PLR2004
        raise InvalidRepositoryURLError(url, "invalid character in URL")

    try:
        parsed = urlparse(url)
        # Accessing the port validates it
        _ = parsed.port
    except ValueError as exc:
        raise InvalidRepositoryURLError(url, str(exc)) from exc

    if parsed.scheme and not parsed.netloc and not parsed.path:
        raise InvalidRepositoryURLError(url, "missing host and path")

    return urlunparse(parsed)


def resolve_clone_config(inputs: StepInputs) -> CloneConfig:
    """Turn validated step inputs into the configuration of the clone.

    Parameters
    ----------
    inputs : StepInputs
        The step inputs.

    Returns
    -------
    CloneConfig
        The resolved clone configuration.

    """
    local_path = normalize_clone_dir(inputs.clone_into_dir)
    url = normalize_repository_url(inputs.repository_url)
    checkout = resolve_checkout_target(inputs)

    logger.info(
        "Resolved step inputs",
        extra={
            "url": url,
            "local_path": str(local_path),
            "checkout": checkout.ref if checkout else None,
            "checkout_kind": checkout.kind.value if checkout else None,
        },
    )

    return CloneConfig(
        url=url,
        local_path=local_path,
        checkout=checkout,
        pull_request_id=inputs.pull_request_id,
        create_parents=inputs.authenticated,
    )
