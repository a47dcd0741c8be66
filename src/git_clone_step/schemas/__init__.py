"""Module containing the schemas for the git clone step."""

from git_clone_step.schemas.cloning import CheckoutKind, CheckoutTarget, CloneConfig
from git_clone_step.schemas.inputs import StepInputs
from git_clone_step.schemas.metadata import CommitMetadata, ExportOutcome, ExportReport, StepResult

__all__ = [
    "CheckoutKind",
    "CheckoutTarget",
    "CloneConfig",
    "CommitMetadata",
    "ExportOutcome",
    "ExportReport",
    "StepInputs",
    "StepResult",
]
