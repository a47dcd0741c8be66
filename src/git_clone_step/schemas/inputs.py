"""Schema for the raw step inputs."""

from __future__ import annotations

from pydantic import BaseModel, ValidationInfo, field_validator


class StepInputs(BaseModel):  # pylint: disable=too-many-instance-attributes
    """Inputs of the clone step as read from the calling environment.

    Optional inputs use the empty string for "not provided".

    Attributes
    ----------
    repository_url : str
        The URL of the repository to clone.
    clone_into_dir : str
        The destination directory, relative or absolute.
    commit : str
        Commit hash to check out.
    tag : str
        Tag to check out.
    branch : str
        Branch to check out.
    pull_request_id : str
        Pull-request id whose merge ref is fetched and checked out.
    ssh_private_key : str
        Private key used for SSH transport (authenticated variant only).
    authenticated : bool
        Whether the credential preparer runs before cloning (default: ``False``).

    """

    repository_url: str
    clone_into_dir: str
    commit: str = ""
    tag: str = ""
    branch: str = ""
    pull_request_id: str = ""
    ssh_private_key: str = ""
    authenticated: bool = False

    @field_validator("repository_url", "clone_into_dir", mode="before")
    @classmethod
    def _require_value(cls, value: str | None, info: ValidationInfo) -> str:
        if not value:
            msg = f"Missing required input: {info.field_name}"
            raise ValueError(msg)
        return value

    @field_validator("commit", "tag", "branch", "pull_request_id", "ssh_private_key", mode="before")
    @classmethod
    def _none_as_empty(cls, value: str | None) -> str:
        return value or ""
