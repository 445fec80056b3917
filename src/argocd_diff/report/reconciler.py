"""Keep exactly one live report per pull request and environment."""

import logging

from argocd_diff.clients.exceptions import CommentOperationError
from argocd_diff.clients.github import GitHubClient
from argocd_diff.models import ReconcileOutcome, Report
from argocd_diff.report.exceptions import ReportPublishError

logger = logging.getLogger(__name__)


class ReportReconciler:
    """Deletes earlier reports carrying the marker, then posts the new one if it has content.

    Deletions happen before posting and are not undone if posting fails; the
    next run repeats the whole sequence.
    """

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    def reconcile(self, report: Report) -> ReconcileOutcome:
        outcome = ReconcileOutcome()
        try:
            comments = self.client.list_comments()
            for comment in comments:
                if report.matches(comment.body):
                    logger.info("deleting comment %s", comment.id)
                    self.client.delete_comment(comment.id)
                    outcome.deleted_comment_ids.append(comment.id)

            if report.has_content:
                posted = self.client.create_comment(report.body)
                outcome.posted_comment_id = posted.id
                logger.info("posted comment %s", posted.id)
            else:
                logger.info("No reportable diffs; no comment posted")
        except CommentOperationError as exc:
            raise ReportPublishError(str(exc)) from exc
        return outcome
