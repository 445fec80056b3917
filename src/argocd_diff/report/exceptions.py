"""Exceptions for report composition and publishing."""


class ReportError(Exception):
    """Base exception for report operations."""


class ReportPublishError(ReportError):
    """Raised when stale reports cannot be removed or the new one cannot be posted."""
