"""Configuration for the git clone step."""

from __future__ import annotations

from pathlib import Path

REMOTE_NAME = "origin"
GIT_DIR_NAME = ".git"

# Step inputs, read from the environment of the CI host
REPOSITORY_URL_INPUT = "repository_url"
CLONE_INTO_DIR_INPUT = "clone_into_dir"
COMMIT_INPUT = "commit"
TAG_INPUT = "tag"
BRANCH_INPUT = "branch"
PULL_REQUEST_ID_INPUT = "pull_request_id"
SSH_PRIVATE_KEY_INPUT = "auth_ssh_private_key"

# Commit metadata export
EXPORT_KEY_PREFIX = "GIT_CLONE_"
ENVMAN_EXECUTABLE = "envman"

# Transport authentication (authenticated variant)
SSH_KEY_PATH = Path(".ssh") / "git_clone_step_id_rsa"  # relative to the home directory
SSH_HELPER_SCRIPT = "ssh_no_prompt.sh"
SSH_HELPER_SCRIPT_WITH_KEY = "ssh_no_prompt_with_key.sh"
SSH_HELPER_DIR = Path(__file__).parent / "scripts"
GIT_ASKPASS_OVERRIDE = "echo"
