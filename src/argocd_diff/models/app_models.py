"""Models for Argo CD applications."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class SyncStatus(str, Enum):
    SYNCED = "Synced"
    OUT_OF_SYNC = "OutOfSync"
    UNKNOWN = "Unknown"


class Application(BaseModel):
    """Snapshot of one Argo CD application, as fetched at the start of a run."""

    model_config = ConfigDict(frozen=True)

    name: str
    source_repo_url: str = ""
    source_path: str = ""        # Repo-relative path the app is rendered from
    target_revision: str = ""    # Empty means "tracks the default branch"
    sync_status: SyncStatus = SyncStatus.UNKNOWN

    @property
    def is_synced(self) -> bool:
        return self.sync_status == SyncStatus.SYNCED

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "Application":
        """Build an Application from one item of GET /api/v1/applications.

        Missing keys fall back to empty values; apps without a single
        ``spec.source`` (multi-source apps) end up with an empty source path
        and are never matched by path affinity.
        """
        metadata = item.get("metadata") or {}
        source = (item.get("spec") or {}).get("source") or {}
        sync = (item.get("status") or {}).get("sync") or {}

        raw_status = sync.get("status") or SyncStatus.UNKNOWN.value
        try:
            sync_status = SyncStatus(raw_status)
        except ValueError:
            sync_status = SyncStatus.UNKNOWN

        return cls(
            name=metadata.get("name", ""),
            source_repo_url=source.get("repoURL") or "",
            source_path=source.get("path") or "",
            target_revision=source.get("targetRevision") or "",
            sync_status=sync_status,
        )
