"""Fixtures for tests.

This file provides a stand-in for GitPython's ``git.Git`` that records every executed argument vector, and a
recording metadata sink, so the clone sequence can be exercised without a network or a Git binary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import git
import pytest
from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from unittest.mock import MagicMock

    from loguru import Record
    from pytest_mock import MockerFixture

DEMO_URL = "https://example.com/r.git"
DEMO_COMMIT = "deadbeefdeadbeefdeadbeefdeadbeefdeadbeef"

LOG_VALUES = {
    "%H": DEMO_COMMIT,
    "%s": "Fix the flux capacitor",
    "%b": "It now handles 1.21 gigawatts.",
    "%an": "Emmett Brown",
    "%ae": "doc@example.com",
    "%cn": "Marty McFly",
    "%ce": "marty@example.com",
}


class FakeGitCommand:
    """Stand-in for ``git.Git`` recording every command passed to ``execute``.

    ``fail_on`` holds step keys that exit with status 128: the git subcommand (``"init"``, ``"remote"``,
    ``"fetch"``, ``"checkout"``, ``"submodule"``) or ``"log <format>"`` for a single metadata query. Like git,
    ``log`` only accepts its format as a single ``--format=<placeholder>`` argument.
    """

    def __init__(self) -> None:
        self.working_dir: str | None = None
        self.calls: list[list[str]] = []
        self.envs: list[dict[str, str] | None] = []
        self.fail_on: set[str] = set()
        self.log_values = dict(LOG_VALUES)
        self.version_calls = 0

    def version(self) -> str:
        self.version_calls += 1
        return "git version 2.43.0"

    def execute(self, command: Sequence[str], **kwargs: Any) -> tuple[int, str, str]:  # noqa: ANN401
        args = list(command[1:])
        self.calls.append(list(command))
        self.envs.append(kwargs.get("env"))

        if args[0] != "log":
            if args[0] in self.fail_on:
                raise git.GitCommandError(list(command), 128, stderr="fatal: simulated failure")
            return 0, "", ""

        log_format = args[-1].removeprefix("--format=")
        if args != ["log", "-1", f"--format={log_format}"] or log_format not in self.log_values:
            msg = f"fatal: ambiguous argument '{args[-1]}': unknown revision or path not in the working tree."
            raise git.GitCommandError(list(command), 128, stderr=msg)
        if f"log {log_format}" in self.fail_on:
            raise git.GitCommandError(list(command), 128, stderr="fatal: simulated failure")
        return 0, self.log_values[log_format], ""

    @property
    def subcommands(self) -> list[list[str]]:
        """Executed commands without the leading ``git``."""
        return [call[1:] for call in self.calls]


class RecordingSink:
    """Metadata sink remembering what was published; keys in ``fail_keys`` raise."""

    def __init__(self, fail_keys: set[str] | None = None) -> None:
        self.published: dict[str, str] = {}
        self.attempted: list[str] = []
        self.fail_keys = fail_keys or set()

    async def publish(self, key: str, value: str) -> None:
        self.attempted.append(key)
        if key in self.fail_keys:
            msg = f"envman rejected {key}"
            raise RuntimeError(msg)
        self.published[key] = value


@pytest.fixture
def fake_git(mocker: MockerFixture) -> FakeGitCommand:
    """Patch ``git.Git`` so every command object created by the step is a shared ``FakeGitCommand``."""
    fake = FakeGitCommand()

    def _factory(working_dir: str | None = None) -> FakeGitCommand:
        fake.working_dir = working_dir
        return fake

    mocker.patch("git_clone_step.utils.git_utils.git.Git", side_effect=_factory)
    return fake


@pytest.fixture
def git_class(fake_git: FakeGitCommand) -> MagicMock:
    """Return the patched ``git.Git`` class, to assert on how command objects were created."""
    return git.Git  # type: ignore[return-value]


@pytest.fixture
def recording_sink() -> RecordingSink:
    """Provide a sink that records every published key."""
    return RecordingSink()


@pytest.fixture
def log_records() -> Iterator[list[Record]]:
    """Collect the loguru records emitted during the test."""
    records: list[Record] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
