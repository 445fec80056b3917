"""Exceptions for pipeline orchestration."""


class PipelineError(Exception):
    """Base exception for pipeline runs."""


class SetupError(PipelineError):
    """Raised when shared inputs (inventory, changed files) cannot be gathered.

    The run stops before any application is diffed.
    """
