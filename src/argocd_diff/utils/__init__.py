"""Text utilities for argocd-diff."""

from argocd_diff.utils.diff_filter import (
    is_phantom_section,
    normalize,
    split_sections,
    strip_label_churn,
)
from argocd_diff.utils.scrubber import REDACTION_MARKER, scrub_secrets

__all__ = [
    "REDACTION_MARKER",
    "is_phantom_section",
    "normalize",
    "scrub_secrets",
    "split_sections",
    "strip_label_churn",
]
