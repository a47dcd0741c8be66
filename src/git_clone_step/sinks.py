"""Key/value sinks the commit metadata is exported to."""

from __future__ import annotations

import shlex
from typing import Protocol

import click

from git_clone_step.config import ENVMAN_EXECUTABLE
from git_clone_step.utils.git_utils import run_command


class MetadataSink(Protocol):
    """A destination for exported ``key=value`` pairs."""

    async def publish(self, key: str, value: str) -> None:
        """Publish ``value`` under ``key``; raise on failure."""


class EnvmanSink:
    """Export values through ``envman add --key <key>``, passing the value on ``stdin``."""

    def __init__(self, executable: str = ENVMAN_EXECUTABLE) -> None:
        self.executable = executable

    async def publish(self, key: str, value: str) -> None:
        await run_command(self.executable, "add", "--key", key, input_data=value)


class StdoutSink:
    """Print ``KEY=value`` shell assignments, for running the step outside a CI host.

    Values are shell-quoted, so a multi-line commit body stays a single assignment and the output can be
    ``eval``-ed or split with ``shlex``.
    """

    async def publish(self, key: str, value: str) -> None:
        click.echo(f"{key}={shlex.quote(value)}")
