"""Module containing functions to read the checked-out commit's metadata and export it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import git

from git_clone_step.config import EXPORT_KEY_PREFIX
from git_clone_step.schemas import CommitMetadata, ExportOutcome, ExportReport
from git_clone_step.utils.git_utils import create_git_command, run_git
from git_clone_step.utils.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from git_clone_step.sinks import MetadataSink

# Initialize logger for this module
logger = get_logger(__name__)

# ``git log --format`` placeholder for each metadata field
LOG_FORMATS: dict[str, str] = {
    "commit_hash": "%H",
    "commit_message_subject": "%s",
    "commit_message_body": "%b",
    "commit_author_name": "%an",
    "commit_author_email": "%ae",
    "commit_committer_name": "%cn",
    "commit_committer_email": "%ce",
}


def read_commit_metadata(
    local_path: str | Path,
    *,
    env: Mapping[str, str] | None = None,
) -> tuple[CommitMetadata, dict[str, str]]:
    """Query the ``HEAD`` commit's attributes with one ``git log -1 --format=<placeholder>`` call per field.

    A failing query is logged and leaves its field empty; the other queries still run.

    Parameters
    ----------
    local_path : str | Path
        Path of the checked-out repository.
    env : Mapping[str, str] | None
        Environment overlay for the git invocations.

    Returns
    -------
    tuple[CommitMetadata, dict[str, str]]
        The metadata and the error message of each failed query, keyed by field name.

    """
    git_cmd = create_git_command(local_path)
    values: dict[str, str] = {}
    errors: dict[str, str] = {}

    for field, log_format in LOG_FORMATS.items():
        try:
            values[field] = run_git(git_cmd, "log", "-1", f"--format={log_format}", env=env)
        except git.CommandError as exc:
            logger.error("git log failed", extra={"field": field, "format": log_format, "error": str(exc)})
            errors[field] = str(exc)
            values[field] = ""

    return CommitMetadata(**values), errors


async def export_commit_metadata(
    metadata: CommitMetadata,
    sink: MetadataSink,
    *,
    prefix: str = EXPORT_KEY_PREFIX,
) -> list[ExportOutcome]:
    """Publish all seven metadata keys to ``sink``, including empty ones.

    A failed publish is logged and recorded in the returned outcomes; it never stops the remaining keys.
    """
    outcomes: list[ExportOutcome] = []
    for key, value in metadata.export_items(prefix):
        try:
            await sink.publish(key, value)
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to export output", extra={"key": key, "error": str(exc)})
            outcomes.append(ExportOutcome(key=key, value=value, error=str(exc)))
        else:
            logger.debug("Exported output", extra={"key": key})
            outcomes.append(ExportOutcome(key=key, value=value))
    return outcomes


async def collect_and_export(
    local_path: str | Path,
    sink: MetadataSink,
    *,
    env: Mapping[str, str] | None = None,
    prefix: str = EXPORT_KEY_PREFIX,
) -> ExportReport:
    """Read the commit metadata and export it, tolerating every individual failure.

    Parameters
    ----------
    local_path : str | Path
        Path of the checked-out repository.
    sink : MetadataSink
        Where the metadata is published.
    env : Mapping[str, str] | None
        Environment overlay for the git invocations.
    prefix : str
        Prefix prepended to every exported key (default: ``GIT_CLONE_``).

    Returns
    -------
    ExportReport
        The metadata together with the per-key query errors and publish outcomes.

    """
    metadata, errors = read_commit_metadata(local_path, env=env)
    outcomes = await export_commit_metadata(metadata, sink, prefix=prefix)
    report = ExportReport(metadata=metadata, query_errors=errors, outcomes=outcomes)

    logger.info(
        "Commit metadata exported",
        extra={
            "commit_hash": metadata.commit_hash,
            "query_failures": sorted(errors),
            "export_failures": report.failed_keys,
        },
    )
    return report
