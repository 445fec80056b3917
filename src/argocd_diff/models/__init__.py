"""Data models for argocd-diff."""

from argocd_diff.models.app_models import Application, SyncStatus
from argocd_diff.models.diff_models import DiffOutcome, DiffResult, ToolFailure
from argocd_diff.models.report_models import (
    REPORT_TITLE,
    IssueComment,
    ReconcileOutcome,
    Report,
    RunSummary,
    is_report_for,
    report_marker,
)

__all__ = [
    "REPORT_TITLE",
    "Application",
    "DiffOutcome",
    "DiffResult",
    "IssueComment",
    "ReconcileOutcome",
    "Report",
    "RunSummary",
    "SyncStatus",
    "ToolFailure",
    "is_report_for",
    "report_marker",
]
