from unittest.mock import MagicMock

import pytest

from argocd_diff.config import ActionConfig
from argocd_diff.models import Application, IssueComment, SyncStatus


def make_app(
    name: str = "web",
    source_path: str = "apps/web",
    target_revision: str = "main",
    repo_url: str = "https://github.com/acme/deploy.git",
    sync_status: SyncStatus = SyncStatus.SYNCED,
) -> Application:
    return Application(
        name=name,
        source_repo_url=repo_url,
        source_path=source_path,
        target_revision=target_revision,
        sync_status=sync_status,
    )


@pytest.fixture
def config():
    return ActionConfig(
        github_token="gh-token",
        argocd_server_url="argocd.example.com",
        argocd_token="XYZ123",
        argocd_version="v2.9.3",
        environment="staging",
        repo_owner="acme",
        repo_name="deploy",
        pr_number=42,
        head_sha="0123456789abcdef",
    )


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient's comment and file calls."""

    def __init__(self, comments=None, changed_files=None, fail_on_create=False):
        self.comments: list[IssueComment] = list(comments or [])
        self.changed_files = list(changed_files or [])
        self.fail_on_create = fail_on_create
        self._next_id = 1000

    def list_changed_files(self):
        return list(self.changed_files)

    def list_comments(self):
        return list(self.comments)

    def delete_comment(self, comment_id):
        self.comments = [c for c in self.comments if c.id != comment_id]

    def create_comment(self, body):
        from argocd_diff.clients.exceptions import CommentOperationError

        if self.fail_on_create:
            raise CommentOperationError("GitHub unavailable")
        self._next_id += 1
        comment = IssueComment(id=self._next_id, body=body)
        self.comments.append(comment)
        return comment


@pytest.fixture
def fake_github():
    return FakeGitHubClient()


def mock_response(json_data=None, status_error=None):
    response = MagicMock()
    response.json.return_value = json_data
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response
