"""Pipeline orchestration for argocd-diff."""

from argocd_diff.orchestrator.exceptions import PipelineError, SetupError
from argocd_diff.orchestrator.pipeline import run_pipeline

__all__ = [
    "PipelineError",
    "SetupError",
    "run_pipeline",
]
