"""Main entry point for running the clone step."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from git_clone_step.clone import clone_repo
from git_clone_step.config import EXPORT_KEY_PREFIX
from git_clone_step.inputs import resolve_clone_config
from git_clone_step.metadata import collect_and_export
from git_clone_step.schemas import StepResult
from git_clone_step.sinks import EnvmanSink
from git_clone_step.utils.auth import prepare_ssh_credentials
from git_clone_step.utils.logging_config import get_logger

if TYPE_CHECKING:
    from git_clone_step.schemas import StepInputs
    from git_clone_step.sinks import MetadataSink

# Initialize logger for this module
logger = get_logger(__name__)


async def run_step_async(
    inputs: StepInputs,
    *,
    sink: MetadataSink | None = None,
    export_prefix: str = EXPORT_KEY_PREFIX,
) -> StepResult:
    """Clone the repository described by ``inputs`` and export the checked-out commit's metadata.

    The credentials are prepared first when the step runs in its authenticated variant. Metadata is only
    collected when a checkout was performed.

    Parameters
    ----------
    inputs : StepInputs
        The validated step inputs.
    sink : MetadataSink | None
        Where the commit metadata is published (default: ``envman``).
    export_prefix : str
        Prefix prepended to every exported key (default: ``GIT_CLONE_``).

    Returns
    -------
    StepResult
        The resolved configuration, whether a checkout happened, and the metadata export report.

    Raises
    ------
    ValueError
        If the inputs cannot be resolved (malformed URL, unresolvable path).
    RuntimeError
        If credentials cannot be prepared or any clone step fails.

    """
    logger.info("Starting git clone step", extra={"authenticated": inputs.authenticated})

    config = resolve_clone_config(inputs)
    if inputs.authenticated:
        config = config.model_copy(update={"env": prepare_ssh_credentials(inputs.ssh_private_key)})

    checked_out = await clone_repo(config)

    report = None
    if checked_out:
        report = await collect_and_export(
            config.local_path,
            sink if sink is not None else EnvmanSink(),
            env=config.env,
            prefix=export_prefix,
        )

    return StepResult(config=config, checked_out=checked_out, report=report)


def run_step(
    inputs: StepInputs,
    *,
    sink: MetadataSink | None = None,
    export_prefix: str = EXPORT_KEY_PREFIX,
) -> StepResult:
    """Run :func:`run_step_async` synchronously.

    See ``run_step_async`` for a description of the arguments.
    """
    return asyncio.run(run_step_async(inputs, sink=sink, export_prefix=export_prefix))
