"""Models for the pull request report and its reconciliation."""

import re

from pydantic import BaseModel, ConfigDict, Field

from argocd_diff.models.diff_models import DiffResult

REPORT_TITLE = "ArgoCD Diff"


def report_marker(environment: str) -> str:
    """Header line that identifies this tool's comments for one environment."""
    return f"## {REPORT_TITLE} on {environment}"


def is_report_for(body: str, environment: str) -> bool:
    """True if a line of ``body`` starts with the marker for exactly ``environment``.

    The marker must end at whitespace or end of line, so "prod" does not
    claim the "production" report.
    """
    pattern = re.compile(rf"^{re.escape(report_marker(environment))}(?=\s|$)", re.MULTILINE)
    return pattern.search(body) is not None


class Report(BaseModel):
    model_config = ConfigDict(frozen=True)

    environment: str
    body: str
    has_content: bool                      # True if any app has a diff or failure
    applications: list[str] = Field(default_factory=list)

    @property
    def marker(self) -> str:
        return report_marker(self.environment)

    def matches(self, comment_body: str) -> bool:
        return is_report_for(comment_body, self.environment)


class IssueComment(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    body: str = ""


class ReconcileOutcome(BaseModel):
    model_config = ConfigDict(frozen=False)

    deleted_comment_ids: list[int] = Field(default_factory=list)
    posted_comment_id: int | None = None

    @property
    def posted(self) -> bool:
        return self.posted_comment_id is not None


class RunSummary(BaseModel):
    model_config = ConfigDict(frozen=False)

    selected: list[str] = Field(default_factory=list)
    results: list[DiffResult] = Field(default_factory=list)
    report_posted: bool = False
    deleted_comment_ids: list[int] = Field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return sum(1 for result in self.results if result.has_failure)

    @property
    def failed(self) -> bool:
        return self.failure_count > 0
