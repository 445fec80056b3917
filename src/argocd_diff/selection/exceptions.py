"""Exceptions for application selection."""


class SelectionError(Exception):
    """Base exception for application selection."""


class InvalidMatcherError(SelectionError):
    """Raised when an app-name matcher cannot be compiled as a regular expression."""
