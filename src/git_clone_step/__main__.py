"""Command-line interface (CLI) for the git clone step."""

# pylint: disable=no-value-for-parameter
from __future__ import annotations

import asyncio
from typing import TypedDict

import click
from typing_extensions import Unpack

from git_clone_step.config import (
    BRANCH_INPUT,
    CLONE_INTO_DIR_INPUT,
    COMMIT_INPUT,
    EXPORT_KEY_PREFIX,
    PULL_REQUEST_ID_INPUT,
    REPOSITORY_URL_INPUT,
    SSH_PRIVATE_KEY_INPUT,
    TAG_INPUT,
)
from git_clone_step.entrypoint import run_step_async
from git_clone_step.inputs import build_inputs
from git_clone_step.sinks import EnvmanSink, StdoutSink

# Import logging configuration first to intercept all logging
from git_clone_step.utils.logging_config import get_logger

# Initialize logger for this module
logger = get_logger(__name__)


class _CLIArgs(TypedDict):
    repository_url: str | None
    clone_into_dir: str | None
    commit: str | None
    tag: str | None
    branch: str | None
    pull_request_id: str | None
    ssh_private_key: str | None
    authenticated: bool
    export_prefix: str
    no_envman: bool


@click.command()
@click.option("--repository-url", "-u", envvar=REPOSITORY_URL_INPUT, default=None, help="Repository URL to clone.")
@click.option(
    "--clone-into-dir",
    "-d",
    envvar=CLONE_INTO_DIR_INPUT,
    default=None,
    help="Destination directory; relative paths are resolved against the working directory.",
)
@click.option("--commit", "-c", envvar=COMMIT_INPUT, default=None, help="Commit hash to check out.")
@click.option("--tag", envvar=TAG_INPUT, default=None, help="Tag to check out (leaves a detached HEAD).")
@click.option("--branch", "-b", envvar=BRANCH_INPUT, default=None, help="Branch to check out.")
@click.option(
    "--pull-request-id",
    "-p",
    envvar=PULL_REQUEST_ID_INPUT,
    default=None,
    help="Pull request whose merge ref is fetched and checked out. Takes priority over the other refs.",
)
@click.option(
    "--ssh-private-key",
    envvar=SSH_PRIVATE_KEY_INPUT,
    default=None,
    help="SSH private key used for the transport (only with --authenticated).",
)
@click.option(
    "--authenticated",
    is_flag=True,
    envvar="GIT_CLONE_AUTHENTICATED",
    default=False,
    help="Prepare SSH credentials before cloning and create missing parent directories.",
)
@click.option(
    "--export-prefix",
    default=EXPORT_KEY_PREFIX,
    show_default=True,
    help="Prefix of the exported commit metadata keys.",
)
@click.option(
    "--no-envman",
    is_flag=True,
    default=False,
    help="Print the commit metadata as shell-quoted KEY=value assignments instead of exporting it with envman.",
)
def main(**cli_kwargs: Unpack[_CLIArgs]) -> None:
    """Clone a repository into a directory, check out a ref and export the commit metadata.

    Every option falls back to the step input of the same name in the environment
    (e.g. ``repository_url``, ``clone_into_dir``, ``pull_request_id``).

    Parameters
    ----------
    **cli_kwargs : Unpack[_CLIArgs]
        A dictionary of keyword arguments forwarded to ``run_step_async``.

    Examples
    --------
    Clone a branch:
        $ git-clone-step -u https://github.com/user/repo.git -d ./src -b main

    Clone the merge result of a pull request:
        $ repository_url=https://github.com/user/repo.git clone_into_dir=./src pull_request_id=7 git-clone-step

    """
    asyncio.run(_async_main(**cli_kwargs))


async def _async_main(  # noqa: PLR0913
    repository_url: str | None,
    clone_into_dir: str | None,
    *,
    commit: str | None = None,
    tag: str | None = None,
    branch: str | None = None,
    pull_request_id: str | None = None,
    ssh_private_key: str | None = None,
    authenticated: bool = False,
    export_prefix: str = EXPORT_KEY_PREFIX,
    no_envman: bool = False,
) -> None:
    """Validate the inputs and run the clone step.

    Raises
    ------
    click.Abort
        Raised if an error occurs during execution and the command must be aborted.

    """
    try:
        inputs = build_inputs(
            repository_url=repository_url,
            clone_into_dir=clone_into_dir,
            commit=commit,
            tag=tag,
            branch=branch,
            pull_request_id=pull_request_id,
            ssh_private_key=ssh_private_key,
            authenticated=authenticated,
        )
        sink = StdoutSink() if no_envman else EnvmanSink()
        result = await run_step_async(inputs, sink=sink, export_prefix=export_prefix)
    except Exception as exc:
        # Convert any exception into Click.Abort so that exit status is non-zero
        click.echo(f"Error: {exc}", err=True)
        raise click.Abort from exc

    if result.checked_out:
        click.echo(f"Checked out {result.config.checkout.ref} into {result.config.local_path}", err=True)
    else:
        click.echo(f"Fetched {result.config.url} into {result.config.local_path} (no checkout)", err=True)


if __name__ == "__main__":
    main()
