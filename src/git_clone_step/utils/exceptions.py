"""Custom exceptions for the git clone step."""

from __future__ import annotations


class MissingInputError(ValueError):
    """Exception raised when a required step input is absent or empty."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing required input: {name}")


class InputResolutionError(ValueError):
    """Exception raised when an input cannot be normalized (e.g. the clone directory path)."""


class InvalidRepositoryURLError(ValueError):
    """Exception raised when the repository URL cannot be parsed."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Failed to parse repo url ({url}): {reason}")


class RepositoryExistsError(RuntimeError):
    """Exception raised when the clone destination already holds a ``.git`` entry."""

    def __init__(self, git_path: str) -> None:
        self.git_path = git_path
        super().__init__(f".git folder already exists in the destination dir ({git_path})")


class CloneStepError(RuntimeError):
    """Exception raised when one step of the clone sequence fails.

    The failing step name is kept on ``step`` so callers can tell which part of
    the ``init`` / ``add-remote`` / ``fetch`` / ``checkout`` / ``submodule-update``
    sequence aborted the run.
    """

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(f"{step} failed: {message}")


class CredentialSetupError(RuntimeError):
    """Exception raised when the SSH credentials cannot be prepared."""
