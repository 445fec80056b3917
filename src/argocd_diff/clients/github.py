"""GitHub REST calls used by the action: changed files and issue comments."""

import logging
from typing import Any

import requests

from argocd_diff.clients.exceptions import ChangedFilesFetchError, CommentOperationError
from argocd_diff.config import ActionConfig
from argocd_diff.models import IssueComment

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 30
PER_PAGE = 100


class GitHubClient:
    """Pull request scoped GitHub client."""

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        pr_number: int,
        api_url: str = "https://api.github.com",
        session: requests.Session | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.pr_number = pr_number
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })

    @classmethod
    def from_config(cls, config: ActionConfig, **kwargs) -> "GitHubClient":
        return cls(
            token=config.github_token,
            owner=config.repo_owner,
            repo=config.repo_name,
            pr_number=config.pr_number,
            api_url=config.github_api_url,
            **kwargs,
        )

    @property
    def _repo_url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}"

    def _get_paginated(self, url: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            response = self._session.get(
                url,
                params={"per_page": PER_PAGE, "page": page},
                timeout=self.timeout,
            )
            response.raise_for_status()
            batch = response.json()
            items.extend(batch)
            if len(batch) < PER_PAGE:
                return items
            page += 1

    def list_changed_files(self) -> list[str]:
        """Return the repo-relative paths changed by the pull request, in API order."""
        url = f"{self._repo_url}/pulls/{self.pr_number}/files"
        try:
            files = self._get_paginated(url)
        except (requests.RequestException, ValueError) as exc:
            raise ChangedFilesFetchError(
                f"Failed to list files of pull request #{self.pr_number}: {exc}"
            ) from exc
        return [item["filename"] for item in files]

    def list_comments(self) -> list[IssueComment]:
        url = f"{self._repo_url}/issues/{self.pr_number}/comments"
        try:
            comments = self._get_paginated(url)
        except (requests.RequestException, ValueError) as exc:
            raise CommentOperationError(
                f"Failed to list comments of pull request #{self.pr_number}: {exc}"
            ) from exc
        return [IssueComment(id=item["id"], body=item.get("body") or "") for item in comments]

    def create_comment(self, body: str) -> IssueComment:
        url = f"{self._repo_url}/issues/{self.pr_number}/comments"
        try:
            response = self._session.post(url, json={"body": body}, timeout=self.timeout)
            response.raise_for_status()
            item = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise CommentOperationError(
                f"Failed to comment on pull request #{self.pr_number}: {exc}"
            ) from exc
        return IssueComment(id=item["id"], body=item.get("body") or "")

    def delete_comment(self, comment_id: int) -> None:
        url = f"{self._repo_url}/issues/comments/{comment_id}"
        try:
            response = self._session.delete(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise CommentOperationError(f"Failed to delete comment {comment_id}: {exc}") from exc
