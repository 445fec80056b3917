"""Exceptions for calls to Argo CD and GitHub."""


class ClientError(Exception):
    """Base exception for external service calls."""


class InventoryFetchError(ClientError):
    """Raised when the Argo CD application list cannot be retrieved."""


class ChangedFilesFetchError(ClientError):
    """Raised when the pull request's changed files cannot be listed."""


class CommentOperationError(ClientError):
    """Raised when listing, creating or deleting a pull request comment fails."""


class CliDownloadError(ClientError):
    """Raised when the argocd CLI binary cannot be downloaded."""
