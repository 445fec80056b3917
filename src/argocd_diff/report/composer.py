"""Render per-application diff results as one Markdown pull request comment."""

import json
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from argocd_diff.config import ActionConfig
from argocd_diff.models import DiffResult, Report, report_marker
from argocd_diff.utils.diff_filter import normalize
from argocd_diff.utils.scrubber import scrub_secrets

REPORT_TIMEZONE = ZoneInfo("America/Los_Angeles")
REPORT_TIMEZONE_LABEL = "PT"

LEGEND = """| Legend | Status |
| :---:  | :---   |
| ✅     | The app is synced in ArgoCD, and diffs you see are solely from this PR. |
| ⚠️      | The app is out-of-sync in ArgoCD, and the diffs you see include those changes plus any from this PR. |
| 🛑     | There was an error generating the ArgoCD diffs due to changes in this PR. |
"""


def format_timestamp(moment: datetime) -> str:
    """Format like en-US ``toLocaleString``: ``10/18/2026, 3:04:05 PM``."""
    local = moment.astimezone(REPORT_TIMEZONE)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local:%M:%S} {meridiem}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportComposer:
    """Builds the report for one environment and one pull request head."""

    def __init__(
        self,
        config: ActionConfig,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.config = config
        self.clock = clock

    @property
    def marker(self) -> str:
        return report_marker(self.config.environment)

    def app_url(self, name: str) -> str:
        return f"{self.config.argocd_base_url}/applications/{name}"

    def commit_link(self) -> str:
        cfg = self.config
        return (
            f"{cfg.github_server_url}/{cfg.repo_owner}/{cfg.repo_name}"
            f"/pull/{cfg.pr_number}/commits/{cfg.head_sha}"
        )

    def render_block(self, result: DiffResult, diff_text: str) -> str:
        app = result.application
        failure = result.failure
        lines = [
            f"App: [`{app.name}`]({self.app_url(app.name)})",
            f"YAML generation: {'Error 🛑' if failure else 'Success 🟢'}",
            f"App sync status: {'Synced ✅' if app.is_synced else 'Out of Sync ⚠️'}",
        ]
        if failure:
            lines += [
                "",
                "**`stderr:`**",
                "```",
                failure.stderr.rstrip(),
                "```",
                "",
                "**`command:`**",
                "```json",
                json.dumps(failure.raw_error or {"cmd": failure.command}),
                "```",
            ]
        if diff_text:
            lines += [
                "",
                "<details>",
                "",
                "```diff",
                diff_text,
                "```",
                "",
                "</details>",
            ]
        lines += ["", "---", ""]
        return "\n".join(lines)

    def compose(self, results: Sequence[DiffResult]) -> Report:
        """Render every result with a cleaned diff or a failure, in input order.

        Results whose diff is empty after ``normalize`` and that did not fail
        are left out entirely.
        """
        blocks: list[str] = []
        included: list[str] = []
        for result in results:
            diff_text = normalize(result.diff_text)
            if not diff_text and not result.has_failure:
                continue
            blocks.append(self.render_block(result, diff_text))
            included.append(result.application.name)

        short_sha = self.config.head_sha[:7] or "HEAD"
        header = (
            f"{self.marker} for commit [`{short_sha}`]({self.commit_link()})\n"
            f"_Updated at {format_timestamp(self.clock())} {REPORT_TIMEZONE_LABEL}_\n"
        )
        body = "\n".join([header, *blocks, LEGEND])

        return Report(
            environment=self.config.environment,
            body=scrub_secrets(body),
            has_content=bool(included),
            applications=included,
        )
