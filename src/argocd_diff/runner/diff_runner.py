"""Run ``argocd app diff`` per application and classify what came back.

``argocd app diff`` exits non-zero both when it fails and when it finds
differences (argoproj/argo-cd#3588), so the exit code alone cannot be trusted:
anything on stdout is a diff, and only an empty stdout with an error is a
failure.
"""

import logging
import shlex
import subprocess
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from argocd_diff.config import ActionConfig
from argocd_diff.models import Application, DiffResult, ToolFailure

logger = logging.getLogger(__name__)

DEFAULT_DIFF_TIMEOUT = 300
NO_EXIT_CODE = -1


def classify_outcome(
    application: Application,
    command: str,
    returncode: int,
    stdout: str,
    stderr: str,
    error: str | None = None,
) -> DiffResult:
    """Map one CLI invocation to a clean, changed or failed DiffResult."""
    if stdout:
        return DiffResult.changed(application, stdout)
    if returncode != 0 or error:
        raw_error = {"cmd": command, "code": returncode}
        if error:
            raw_error["message"] = error
        return DiffResult.failed(
            application,
            ToolFailure(command=command, stderr=stderr, raw_error=raw_error),
        )
    return DiffResult.clean(application)


class DiffRunner:
    """Invokes the argocd CLI once per application."""

    def __init__(
        self,
        cli_path: str,
        config: ActionConfig,
        timeout_seconds: int = DEFAULT_DIFF_TIMEOUT,
    ) -> None:
        self.cli_path = cli_path
        self.config = config
        self.timeout_seconds = timeout_seconds

    def build_command(self, application: Application) -> list[str]:
        """argv for one app: ``--revision`` when configured, else ``--local``."""
        if self.config.revision:
            target = f"--revision={self.config.revision}"
        else:
            target = f"--local={application.source_path}"
        argv = [self.cli_path, "app", "diff", application.name, target]
        if self.config.server_side_generate:
            argv.append("--server-side-generate")
        argv.extend(self.config.cli_flags)
        return argv

    def diff(self, application: Application) -> DiffResult:
        """Diff one application against its live state. Never raises for tool errors."""
        argv = self.build_command(application)
        command = shlex.join(argv)
        logger.info("Running: argocd app diff %s %s", application.name, argv[4])

        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired as exc:
            # Output of a killed process is truncated, never a usable diff
            partial = _as_text(exc.stdout)
            if partial:
                logger.warning(
                    "%s: dropping %d chars of partial output after timeout",
                    application.name, len(partial),
                )
            return classify_outcome(
                application,
                command,
                NO_EXIT_CODE,
                "",
                _as_text(exc.stderr),
                error=f"Diff timed out after {self.timeout_seconds}s",
            )
        except OSError as exc:
            return classify_outcome(application, command, NO_EXIT_CODE, "", "", error=str(exc))

        logger.debug("stdout: %s", completed.stdout)
        logger.debug("stderr: %s", completed.stderr)
        result = classify_outcome(
            application, command, completed.returncode, completed.stdout, completed.stderr,
        )
        logger.info("%s: %s", application.name, result.outcome.value)
        return result

    def diff_all(
        self,
        applications: Sequence[Application],
        max_workers: int = 1,
    ) -> list[DiffResult]:
        """Diff every application, returning results in input order."""
        if max_workers <= 1 or len(applications) <= 1:
            return [self.diff(app) for app in applications]
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(self.diff, applications))


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
