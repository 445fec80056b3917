"""Coarse matching of changed files to an application's source directory."""

import posixpath
from collections.abc import Sequence

AFFINITY_DEPTH = 2


def _normalize(path: str) -> str:
    normalized = posixpath.normpath(path.replace("\\", "/")) if path else ""
    return "" if normalized == "." else normalized


def affinity_prefix(source_path: str, depth: int = AFFINITY_DEPTH) -> str:
    """Return the first ``depth`` segments of a source path.

    ``apps/foo/bar`` -> ``apps/foo``. Paths with fewer segments are returned
    whole (normalized).
    """
    parts = [part for part in _normalize(source_path).split("/") if part]
    return "/".join(parts[:depth])


def affects(
    changed_files: Sequence[str],
    source_path: str,
    depth: int = AFFINITY_DEPTH,
) -> bool:
    """True if any changed file lives under the source path's affinity prefix."""
    prefix = affinity_prefix(source_path, depth)
    if not prefix:
        return False
    return any(_normalize(path).startswith(prefix) for path in changed_files)
