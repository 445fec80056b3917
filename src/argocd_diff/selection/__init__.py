"""Application selection: which apps does a pull request touch."""

from argocd_diff.selection.exceptions import InvalidMatcherError, SelectionError
from argocd_diff.selection.name_filter import compile_matcher, filter_by_name
from argocd_diff.selection.path_affinity import affects, affinity_prefix
from argocd_diff.selection.selector import (
    PRIMARY_REVISIONS,
    is_primary_revision,
    is_repo_application,
    select_applications,
)

__all__ = [
    "PRIMARY_REVISIONS",
    "InvalidMatcherError",
    "SelectionError",
    "affects",
    "affinity_prefix",
    "compile_matcher",
    "filter_by_name",
    "is_primary_revision",
    "is_repo_application",
    "select_applications",
]
