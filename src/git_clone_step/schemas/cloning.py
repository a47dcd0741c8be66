"""Schema for the cloning process."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 (typing-only-standard-library-import) needed for type checking (pydantic)

from pydantic import BaseModel, ConfigDict, Field

from git_clone_step.utils.compat_typing import StrEnum


class CheckoutKind(StrEnum):
    """Kinds of checkout hint, in no particular order."""

    PULL_REQUEST = "pull_request"
    COMMIT = "commit"
    TAG = "tag"
    BRANCH = "branch"


class CheckoutTarget(BaseModel):
    """The single ref the working tree is switched to after fetching.

    Attributes
    ----------
    kind : CheckoutKind
        Which checkout hint the target was resolved from.
    value : str
        The raw hint value (pull-request id, commit hash, tag or branch name).

    """

    model_config = ConfigDict(frozen=True)

    kind: CheckoutKind
    value: str = Field(min_length=1)

    @property
    def ref(self) -> str:
        """Return the ref passed to ``git checkout``.

        Pull requests are checked out from the local ``pull/<id>`` ref the merge ref is fetched into.
        Tags and commits leave the working tree detached.
        """
        if self.kind == CheckoutKind.PULL_REQUEST:
            return f"pull/{self.value}"
        return self.value

    @property
    def fetch_refspec(self) -> str | None:
        """Return the refspec mapping the server-side merge ref to :attr:`ref`, or ``None``."""
        if self.kind != CheckoutKind.PULL_REQUEST:
            return None
        return f"pull/{self.value}/merge:{self.ref}"


class CloneConfig(BaseModel):
    """Configuration for cloning a Git repository.

    Attributes
    ----------
    url : str
        The re-serialized URL of the repository, registered as the ``origin`` remote.
    local_path : Path
        Absolute path of the clone destination.
    checkout : CheckoutTarget | None
        The resolved checkout target; ``None`` means fetch only.
    pull_request_id : str
        The pull-request id the fetch is parameterized with (empty when not provided).
    create_parents : bool
        Whether missing parent directories of ``local_path`` are created (default: ``False``).
    env : dict[str, str]
        Environment overlay applied to every git invocation (default: empty).

    """

    url: str
    local_path: Path
    checkout: CheckoutTarget | None = None
    pull_request_id: str = ""
    create_parents: bool = False
    env: dict[str, str] = Field(default_factory=dict)
