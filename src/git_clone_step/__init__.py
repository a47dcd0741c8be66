"""git-clone-step: A CI build step that clones a Git repository and exports commit metadata."""

from git_clone_step.entrypoint import run_step, run_step_async

__all__ = ["run_step", "run_step_async"]
