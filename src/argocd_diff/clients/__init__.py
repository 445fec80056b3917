"""Clients for the Argo CD and GitHub APIs."""

from argocd_diff.clients.argocd import ArgoCDClient
from argocd_diff.clients.exceptions import (
    ChangedFilesFetchError,
    ClientError,
    CliDownloadError,
    CommentOperationError,
    InventoryFetchError,
)
from argocd_diff.clients.github import GitHubClient

__all__ = [
    "ArgoCDClient",
    "ChangedFilesFetchError",
    "ClientError",
    "CliDownloadError",
    "CommentOperationError",
    "GitHubClient",
    "InventoryFetchError",
]
