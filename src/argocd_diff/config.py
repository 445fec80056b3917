"""Run configuration, read once from the GitHub Actions environment.

Action inputs arrive as ``INPUT_<NAME>`` variables (upper-cased, hyphens
kept), repository context as ``GITHUB_*`` variables, and the pull request
itself through the event payload at ``GITHUB_EVENT_PATH``.
"""

import json
import os
import shlex
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

DEFAULT_ARCH = "linux"
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_GITHUB_SERVER_URL = "https://github.com"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class ConfigurationError(Exception):
    """Raised when required inputs are missing or malformed."""


class ActionConfig(BaseModel):
    """Immutable settings passed explicitly into every component."""

    model_config = ConfigDict(frozen=True)

    github_token: str
    argocd_server_url: str       # host[:port], no scheme
    argocd_token: str
    argocd_version: str = ""     # Release tag used to download the CLI
    environment: str
    plaintext: bool = False
    extra_cli_args: str = ""
    app_name_matcher: str = ""
    revision: str = ""           # Diff against this revision instead of the local tree
    server_side_generate: bool = False
    insecure: bool = False       # Skip TLS verification for the REST API
    arch: str = DEFAULT_ARCH
    repo_owner: str
    repo_name: str
    pr_number: int
    head_sha: str = ""
    github_api_url: str = DEFAULT_GITHUB_API_URL
    github_server_url: str = DEFAULT_GITHUB_SERVER_URL

    @property
    def protocol(self) -> str:
        return "http" if self.plaintext else "https"

    @property
    def argocd_base_url(self) -> str:
        return f"{self.protocol}://{self.argocd_server_url}"

    @property
    def repo_slug(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

    @property
    def cli_flags(self) -> list[str]:
        """Connection flags appended to every argocd CLI invocation."""
        flags = [f"--auth-token={self.argocd_token}", f"--server={self.argocd_server_url}"]
        if self.plaintext:
            flags.append("--plaintext")
        flags.extend(shlex.split(self.extra_cli_args))
        return flags


def action_input(env: Mapping[str, str], name: str, default: str = "") -> str:
    """Read a GitHub Actions input the way the runner exposes it."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, default).strip()


def parse_bool(value: str | bool | None) -> bool:
    if isinstance(value, bool):
        return value
    return (value or "").strip().lower() in _TRUTHY


def read_event_payload(event_path: str | None) -> dict[str, Any]:
    """Load the webhook payload that triggered the workflow, or {} if absent."""
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.is_file():
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigurationError(f"Cannot read event payload {event_path}: {exc}") from exc


def _pull_request_context(payload: dict[str, Any], env: Mapping[str, str]) -> tuple[str, str]:
    pull_request = payload.get("pull_request") or {}
    number = pull_request.get("number") or payload.get("number") or ""
    if not number:
        # refs/pull/<n>/merge
        ref_parts = env.get("GITHUB_REF", "").split("/")
        if len(ref_parts) >= 3 and ref_parts[1] == "pull":
            number = ref_parts[2]
    head_sha = (pull_request.get("head") or {}).get("sha") or ""
    return str(number), head_sha


def load_config(env: Mapping[str, str] | None = None, **overrides: Any) -> ActionConfig:
    """Build the run configuration from the environment.

    Args:
        env: Environment mapping (defaults to ``os.environ``).
        **overrides: Values that take precedence over the environment, for
            example from CLI flags. ``None`` values are ignored.

    Raises:
        ConfigurationError: If a required value is missing or invalid.
    """
    env = os.environ if env is None else env
    payload = read_event_payload(env.get("GITHUB_EVENT_PATH"))
    pr_number, head_sha = _pull_request_context(payload, env)

    repository = env.get("GITHUB_REPOSITORY", "")
    repo_owner, _, repo_name = repository.partition("/")

    values: dict[str, Any] = {
        "github_token": action_input(env, "github-token") or env.get("GITHUB_TOKEN", ""),
        "argocd_server_url": action_input(env, "argocd-server-url"),
        "argocd_token": action_input(env, "argocd-token"),
        "argocd_version": action_input(env, "argocd-version"),
        "environment": action_input(env, "environment"),
        "plaintext": action_input(env, "plaintext"),
        "extra_cli_args": action_input(env, "argocd-extra-cli-args"),
        "app_name_matcher": action_input(env, "app-name-matcher"),
        "revision": action_input(env, "revision"),
        "server_side_generate": action_input(env, "server-side-generate"),
        "insecure": action_input(env, "insecure"),
        "arch": env.get("ARCH") or DEFAULT_ARCH,
        "repo_owner": repo_owner,
        "repo_name": repo_name,
        "pr_number": pr_number,
        "head_sha": head_sha,
        "github_api_url": env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL,
        "github_server_url": env.get("GITHUB_SERVER_URL") or DEFAULT_GITHUB_SERVER_URL,
    }
    if "repository" in overrides:
        slug = overrides.pop("repository")
        if slug:
            values["repo_owner"], _, values["repo_name"] = slug.partition("/")
    values.update({key: value for key, value in overrides.items() if value is not None})
    for flag in ("plaintext", "server_side_generate", "insecure"):
        values[flag] = parse_bool(values[flag])

    required = (
        "github_token", "argocd_server_url", "argocd_token",
        "environment", "repo_owner", "repo_name", "pr_number",
    )
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

    try:
        return ActionConfig(**values)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
