"""Report composition and reconciliation."""

from argocd_diff.report.composer import LEGEND, ReportComposer, format_timestamp
from argocd_diff.report.exceptions import ReportError, ReportPublishError
from argocd_diff.report.reconciler import ReportReconciler

__all__ = [
    "LEGEND",
    "ReportComposer",
    "ReportError",
    "ReportPublishError",
    "ReportReconciler",
    "format_timestamp",
]
