"""Schemas for the commit metadata exported after a checkout."""

from __future__ import annotations

from pydantic import BaseModel, Field

from git_clone_step.schemas.cloning import CloneConfig


class CommitMetadata(BaseModel):
    """Attributes of the checked-out ``HEAD`` commit.

    Every field defaults to the empty string, which is also the value exported when the
    corresponding ``git log`` query fails. The exported key of a field is its upper-cased name.
    """

    commit_hash: str = ""
    commit_message_subject: str = ""
    commit_message_body: str = ""
    commit_author_name: str = ""
    commit_author_email: str = ""
    commit_committer_name: str = ""
    commit_committer_email: str = ""

    def export_items(self, prefix: str = "") -> list[tuple[str, str]]:
        """Return ``(key, value)`` pairs for all seven fields, with ``prefix`` prepended to each key."""
        return [(f"{prefix}{name.upper()}", value) for name, value in self.model_dump().items()]


class ExportOutcome(BaseModel):
    """Result of publishing a single metadata key."""

    key: str
    value: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the key was published."""
        return self.error is None


class ExportReport(BaseModel):
    """Outcome of the metadata extraction and export.

    The report always stands for an overall success: individual query and publish failures are
    recorded here instead of being raised.

    Attributes
    ----------
    metadata : CommitMetadata
        The collected metadata, with failed queries left empty.
    query_errors : dict[str, str]
        Error message per metadata field whose ``git log`` query failed.
    outcomes : list[ExportOutcome]
        One entry per published key.

    """

    metadata: CommitMetadata = Field(default_factory=CommitMetadata)
    query_errors: dict[str, str] = Field(default_factory=dict)
    outcomes: list[ExportOutcome] = Field(default_factory=list)

    @property
    def failed_keys(self) -> list[str]:
        """Keys whose publish failed."""
        return [outcome.key for outcome in self.outcomes if not outcome.ok]


class StepResult(BaseModel):
    """Result of a complete step run."""

    config: CloneConfig
    checked_out: bool
    report: ExportReport | None = None
