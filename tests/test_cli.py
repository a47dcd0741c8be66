"""Tests for the git clone step CLI."""

from __future__ import annotations

from inspect import signature
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner, Result

from git_clone_step.__main__ import main
from tests.conftest import DEMO_COMMIT, DEMO_URL

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import FakeGitCommand

STEP_INPUTS = (
    "repository_url",
    "clone_into_dir",
    "commit",
    "tag",
    "branch",
    "pull_request_id",
    "auth_ssh_private_key",
    "GIT_CLONE_AUTHENTICATED",
)


@pytest.fixture(autouse=True)
def _clear_step_inputs(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in STEP_INPUTS:
        monkeypatch.delenv(name, raising=False)


def test_cli_branch_from_options(tmp_path: Path, fake_git: FakeGitCommand) -> None:
    """Options drive the clone and ``--no-envman`` prints the metadata to STDOUT."""
    result = _invoke_isolated_cli_runner(
        ["--repository-url", DEMO_URL, "--clone-into-dir", str(tmp_path / "out"), "--branch", "main", "--no-envman"],
    )

    assert result.exit_code == 0, result.stderr
    assert f"GIT_CLONE_COMMIT_HASH={DEMO_COMMIT}" in result.stdout.splitlines()
    assert "Checked out main" in result.stderr
    assert ["checkout", "main"] in fake_git.subcommands


def test_cli_reads_step_inputs_from_environment(tmp_path: Path, fake_git: FakeGitCommand) -> None:
    """Every option falls back to the step input of the same name."""
    env = {
        "repository_url": DEMO_URL,
        "clone_into_dir": str(tmp_path / "out"),
        "pull_request_id": "7",
        "branch": "main",
    }

    result = _invoke_isolated_cli_runner(["--no-envman"], env=env)

    assert result.exit_code == 0, result.stderr
    assert ["fetch", "origin", "pull/7/merge:pull/7"] in fake_git.subcommands
    assert ["checkout", "pull/7"] in fake_git.subcommands


def test_cli_custom_export_prefix(tmp_path: Path, fake_git: FakeGitCommand) -> None:
    """``--export-prefix`` changes the exported key names."""
    result = _invoke_isolated_cli_runner(
        ["-u", DEMO_URL, "-d", str(tmp_path / "out"), "-c", "a" * 40, "--no-envman", "--export-prefix", "X_"],
    )

    assert result.exit_code == 0, result.stderr
    assert f"X_COMMIT_HASH={DEMO_COMMIT}" in result.stdout.splitlines()


@pytest.mark.parametrize(
    ("args", "missing"),
    [
        pytest.param(["--clone-into-dir", "/tmp/out"], "repository_url", id="no-url"),
        pytest.param(["--repository-url", DEMO_URL], "clone_into_dir", id="no-dir"),
    ],
)
def test_cli_missing_required_input(args: list[str], missing: str, fake_git: FakeGitCommand) -> None:
    """A missing required input aborts with a non-zero exit status and a descriptive message."""
    result = _invoke_isolated_cli_runner(args)

    assert result.exit_code != 0
    assert f"Error: Missing required input: {missing}" in result.stderr
    assert fake_git.calls == []


def test_cli_existing_repository(tmp_path: Path, fake_git: FakeGitCommand) -> None:
    """Cloning into an existing repository aborts."""
    (tmp_path / ".git").mkdir()

    result = _invoke_isolated_cli_runner(["-u", DEMO_URL, "-d", str(tmp_path), "-b", "main"])

    assert result.exit_code != 0
    assert ".git folder already exists" in result.stderr
    assert fake_git.calls == []


def test_cli_step_failure(tmp_path: Path, fake_git: FakeGitCommand) -> None:
    """A failing git step aborts the run naming the step."""
    fake_git.fail_on = {"fetch"}

    result = _invoke_isolated_cli_runner(["-u", DEMO_URL, "-d", str(tmp_path / "out"), "-b", "main"])

    assert result.exit_code != 0
    assert "Error: fetch failed" in result.stderr


def _invoke_isolated_cli_runner(args: list[str], env: dict[str, str] | None = None) -> Result:
    """Return a ``CliRunner`` that keeps ``stderr`` separate on Click 8.0-8.1."""
    kwargs = {}
    if "mix_stderr" in signature(CliRunner.__init__).parameters:
        kwargs["mix_stderr"] = False  # Click 8.0-8.1
    runner = CliRunner(**kwargs)
    return runner.invoke(main, args, env=env)
