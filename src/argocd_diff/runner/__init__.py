"""Running the argocd CLI."""

from argocd_diff.runner.diff_runner import (
    DEFAULT_DIFF_TIMEOUT,
    DiffRunner,
    classify_outcome,
)
from argocd_diff.runner.installer import DEFAULT_CLI_PATH, install_cli, release_url

__all__ = [
    "DEFAULT_CLI_PATH",
    "DEFAULT_DIFF_TIMEOUT",
    "DiffRunner",
    "classify_outcome",
    "install_cli",
    "release_url",
]
