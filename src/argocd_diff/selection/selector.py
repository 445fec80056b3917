"""Narrow the Argo CD inventory to the applications touched by a pull request."""

import logging
from collections.abc import Sequence

from argocd_diff.models import Application
from argocd_diff.selection.name_filter import filter_by_name
from argocd_diff.selection.path_affinity import affects

logger = logging.getLogger(__name__)

PRIMARY_REVISIONS = frozenset({"master", "main", ""})


def is_primary_revision(target_revision: str | None) -> bool:
    """master, main, or unset all count as following the default branch."""
    return (target_revision or "") in PRIMARY_REVISIONS


def is_repo_application(app: Application, repo_owner: str, repo_name: str) -> bool:
    return f"{repo_owner}/{repo_name}" in app.source_repo_url


def select_applications(
    all_apps: Sequence[Application],
    repo_owner: str,
    repo_name: str,
    changed_files: Sequence[str],
    name_matcher: str = "",
) -> list[Application]:
    """Apply the ownership, primary-branch, path-affinity and name filters in order.

    Args:
        all_apps: Full application inventory of the Argo CD instance.
        repo_owner: Owner of the repository the pull request belongs to.
        repo_name: Name of that repository.
        changed_files: Repo-relative paths changed by the pull request.
        name_matcher: Optional app-name expression (see ``filter_by_name``).

    Returns:
        The surviving applications, in inventory order.
    """
    repo_apps = [
        app for app in all_apps
        if is_repo_application(app, repo_owner, repo_name)
        and is_primary_revision(app.target_revision)
    ]
    logger.debug(
        "%d of %d apps track %s/%s on a primary branch",
        len(repo_apps), len(all_apps), repo_owner, repo_name,
    )

    affected = [app for app in repo_apps if affects(changed_files, app.source_path)]
    logger.debug("%d apps affected by %d changed files", len(affected), len(changed_files))

    return filter_by_name(affected, name_matcher)
