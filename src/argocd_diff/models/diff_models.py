"""Models for per-application diff results."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from argocd_diff.models.app_models import Application


class DiffOutcome(str, Enum):
    CLEAN = "clean"
    CHANGED = "changed"
    FAILED = "failed"


class ToolFailure(BaseModel):
    """What the argocd CLI left behind when it failed without printing a diff."""

    model_config = ConfigDict(frozen=True)

    command: str
    stderr: str = ""
    raw_error: dict[str, Any] = Field(default_factory=dict)


class DiffResult(BaseModel):
    """Outcome of diffing one application: clean, changed, or failed."""

    model_config = ConfigDict(frozen=True)

    application: Application
    outcome: DiffOutcome
    diff_text: str = ""
    failure: ToolFailure | None = None

    @classmethod
    def clean(cls, application: Application) -> "DiffResult":
        return cls(application=application, outcome=DiffOutcome.CLEAN)

    @classmethod
    def changed(cls, application: Application, diff_text: str) -> "DiffResult":
        return cls(application=application, outcome=DiffOutcome.CHANGED, diff_text=diff_text)

    @classmethod
    def failed(cls, application: Application, failure: ToolFailure) -> "DiffResult":
        return cls(application=application, outcome=DiffOutcome.FAILED, failure=failure)

    @property
    def has_failure(self) -> bool:
        return self.outcome == DiffOutcome.FAILED
