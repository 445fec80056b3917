"""One run of the action: select, diff, compose, reconcile."""

import logging

from argocd_diff.clients.argocd import ArgoCDClient
from argocd_diff.clients.exceptions import ChangedFilesFetchError, InventoryFetchError
from argocd_diff.clients.github import GitHubClient
from argocd_diff.config import ActionConfig
from argocd_diff.models import RunSummary
from argocd_diff.orchestrator.exceptions import SetupError
from argocd_diff.report.composer import ReportComposer
from argocd_diff.report.reconciler import ReportReconciler
from argocd_diff.runner.diff_runner import DiffRunner
from argocd_diff.selection.name_filter import compile_matcher
from argocd_diff.selection.selector import select_applications

logger = logging.getLogger(__name__)


def run_pipeline(
    config: ActionConfig,
    argocd_client: ArgoCDClient,
    github_client: GitHubClient,
    diff_runner: DiffRunner,
    composer: ReportComposer,
    reconciler: ReportReconciler,
    max_workers: int = 1,
) -> RunSummary:
    """Run the whole pipeline once for the configured pull request.

    Per-application tool failures are collected in the summary rather than
    raised; callers decide the final status from ``RunSummary.failed``.

    Raises:
        InvalidMatcherError: If the app name matcher is not a valid pattern.
        SetupError: If the inventory or the changed files cannot be fetched.
        ReportPublishError: If the report cannot be reconciled.
    """
    compile_matcher(config.app_name_matcher)

    try:
        all_apps = argocd_client.list_applications()
    except InventoryFetchError as exc:
        raise SetupError(f"Cannot list Argo CD applications: {exc}") from exc

    try:
        changed_files = github_client.list_changed_files()
    except ChangedFilesFetchError as exc:
        raise SetupError(f"Cannot list changed files: {exc}") from exc
    logger.info("Changed files: %s", ", ".join(changed_files))

    selected = select_applications(
        all_apps,
        config.repo_owner,
        config.repo_name,
        changed_files,
        config.app_name_matcher,
    )
    logger.info("Found apps: %s", ", ".join(app.name for app in selected))

    results = diff_runner.diff_all(selected, max_workers=max_workers)
    report = composer.compose(results)
    outcome = reconciler.reconcile(report)

    return RunSummary(
        selected=[app.name for app in selected],
        results=results,
        report_posted=outcome.posted,
        deleted_comment_ids=outcome.deleted_comment_ids,
    )
