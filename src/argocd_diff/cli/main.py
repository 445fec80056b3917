"""CLI entry point for argocd-diff."""
import argparse
from dotenv import load_dotenv
import json
import logging
import sys
import traceback

from argocd_diff.clients.exceptions import CliDownloadError
from argocd_diff.config import ActionConfig, ConfigurationError, load_config
from argocd_diff.logging_config import setup_logging
from argocd_diff.models import RunSummary
from argocd_diff.orchestrator.exceptions import SetupError
from argocd_diff.report.exceptions import ReportPublishError
from argocd_diff.runner.diff_runner import DEFAULT_DIFF_TIMEOUT
from argocd_diff.runner.installer import DEFAULT_CLI_PATH
from argocd_diff.selection.exceptions import InvalidMatcherError

load_dotenv()

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_INPUT = 1
EXIT_SETUP_ERROR = 2
EXIT_DIFF_FAILURES = 3
EXIT_REPORT_ERROR = 4
EXIT_UNEXPECTED = 5
EXIT_KEYBOARD_INTERRUPT = 130

# Defaults
DEFAULT_MAX_WORKERS = 1
DEFAULT_LOG_LEVEL = "INFO"

# Safe keys allowed in config output (no secrets)
_SAFE_CONFIG_KEYS = frozenset({
    "argocd_server_url", "argocd_version", "environment", "plaintext",
    "app_name_matcher", "revision", "server_side_generate", "insecure",
    "arch", "repo_owner", "repo_name", "pr_number",
    "head_sha", "github_api_url", "github_server_url",
    "argocd_cli", "max_workers", "diff_timeout",
})


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="argocd-diff",
        description=(
            "Diff the Argo CD applications touched by a pull request and "
            "post the result as a single PR comment"
        ),
    )
    parser.add_argument("--server", type=str, default=None, help="Argo CD server host[:port]")
    parser.add_argument(
        "--environment", type=str, default=None, help="Environment label shown in the report"
    )
    parser.add_argument("--repo", type=str, default=None, help="Repository as owner/name")
    parser.add_argument("--pr-number", type=int, default=None, help="Pull request number")
    parser.add_argument("--head-sha", type=str, default=None, help="Pull request head commit")
    parser.add_argument(
        "--app-name-matcher",
        type=str,
        default=None,
        help="Comma-separated app names, or /regex/ to match app names",
    )
    parser.add_argument(
        "--plaintext",
        action="store_const",
        const=True,
        default=None,
        help="Talk to Argo CD over plain HTTP",
    )
    parser.add_argument(
        "--revision",
        type=str,
        default=None,
        help="Diff against this revision instead of the checked-out manifests",
    )
    parser.add_argument(
        "--server-side-generate",
        action="store_const",
        const=True,
        default=None,
        help="Let the Argo CD server render the manifests",
    )
    parser.add_argument(
        "--insecure",
        action="store_const",
        const=True,
        default=None,
        help="Skip TLS certificate verification for the Argo CD API",
    )
    parser.add_argument(
        "--argocd-version",
        type=str,
        default=None,
        help="argocd CLI release to download (for example: v2.9.3)",
    )
    parser.add_argument(
        "--argocd-cli",
        type=str,
        default="",
        help="Use an existing argocd binary instead of downloading one",
    )
    parser.add_argument(
        "--cli-dest",
        type=str,
        default=DEFAULT_CLI_PATH,
        help=f"Where to put the downloaded CLI (default: {DEFAULT_CLI_PATH})",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help=f"Applications diffed in parallel (default: {DEFAULT_MAX_WORKERS})",
    )
    parser.add_argument(
        "--diff-timeout",
        type=int,
        default=DEFAULT_DIFF_TIMEOUT,
        help=f"Timeout per app diff in seconds (default: {DEFAULT_DIFF_TIMEOUT})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help=f"Log level (default: LOG_LEVEL or {DEFAULT_LOG_LEVEL})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--dry-run", action="store_true", help="Print config and exit without running"
    )
    parser.add_argument(
        "--output-json", action="store_true", help="Output results as JSON"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> ActionConfig:
    """Load configuration from the environment, with CLI flags taking precedence."""
    return load_config(
        argocd_server_url=args.server,
        environment=args.environment,
        repository=args.repo,
        pr_number=args.pr_number,
        head_sha=args.head_sha,
        app_name_matcher=args.app_name_matcher,
        plaintext=args.plaintext,
        revision=args.revision,
        server_side_generate=args.server_side_generate,
        insecure=args.insecure,
        argocd_version=args.argocd_version,
    )


def create_components(config: ActionConfig, args: argparse.Namespace) -> dict:
    """Create clients, runner, composer and reconciler for one run.

    The CLI download is done here so that a failure stops the run before any
    API call is made.
    """
    from argocd_diff.clients.argocd import ArgoCDClient
    from argocd_diff.clients.github import GitHubClient
    from argocd_diff.report.composer import ReportComposer
    from argocd_diff.report.reconciler import ReportReconciler
    from argocd_diff.runner.diff_runner import DiffRunner
    from argocd_diff.runner.installer import install_cli

    cli_path = args.argocd_cli or install_cli(
        config.argocd_version, arch=config.arch, dest=args.cli_dest,
    )
    github_client = GitHubClient.from_config(config)
    return {
        "argocd_client": ArgoCDClient.from_config(config),
        "github_client": github_client,
        "diff_runner": DiffRunner(cli_path, config, timeout_seconds=args.diff_timeout),
        "composer": ReportComposer(config),
        "reconciler": ReportReconciler(github_client),
    }


def safe_config(config: ActionConfig, args: argparse.Namespace) -> dict:
    """Configuration with secrets left out, for --dry-run output."""
    values = config.model_dump()
    values.update({
        "argocd_cli": args.argocd_cli or args.cli_dest,
        "max_workers": args.max_workers,
        "diff_timeout": args.diff_timeout,
    })
    return {key: value for key, value in values.items() if key in _SAFE_CONFIG_KEYS}


def print_config_human(config: dict) -> None:
    print("\nConfiguration:")
    print(f"{'='*40}")
    for key, value in config.items():
        print(f"  {key}: {value}")
    print(f"{'='*40}")


def format_summary_json(summary: RunSummary) -> str:
    payload = summary.model_dump(mode="json", exclude={"results"})
    payload["failure_count"] = summary.failure_count
    payload["outcomes"] = {
        result.application.name: result.outcome.value for result in summary.results
    }
    return json.dumps(payload, indent=2)


def print_summary_human(summary: RunSummary) -> None:
    print(f"\n{'='*60}")
    print("ArgoCD Diff Results")
    print(f"{'='*60}")
    print(f"\nApps selected: {len(summary.selected)}")
    for result in summary.results:
        print(f"  {result.application.name}: {result.outcome.value}")
    print(f"\nStale reports deleted: {len(summary.deleted_comment_ids)}")
    print(f"Report posted: {'yes' if summary.report_posted else 'no'}")
    if summary.failed:
        print(f"\nDiff failures: {summary.failure_count}")
    print(f"\n{'='*60}")


def annotate_failure(message: str) -> None:
    """Emit a GitHub Actions error annotation so the step shows as failed."""
    print(f"::error::{message}")


def determine_exit_code(summary: RunSummary) -> int:
    if summary.failed:
        return EXIT_DIFF_FAILURES
    return EXIT_SUCCESS


def _handle_error(label: str, exc: BaseException, verbose: bool, exit_code: int) -> int:
    """Report the error on stderr and as an annotation, and return the exit code."""
    print(f"{label}: {exc}", file=sys.stderr)
    annotate_failure(f"{label}: {exc}")
    if verbose:
        traceback.print_exc(file=sys.stderr)
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code integer.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else args.log_level)

    try:
        config = config_from_args(args)
    except ConfigurationError as exc:
        return _handle_error("Configuration error", exc, args.verbose, EXIT_INVALID_INPUT)

    if args.dry_run:
        shown = safe_config(config, args)
        if args.output_json:
            print(json.dumps(shown, indent=2))
        else:
            print_config_human(shown)
        return EXIT_SUCCESS

    logger.info(
        "Diffing %s pull request #%d against %s (%s)",
        config.repo_slug, config.pr_number, config.argocd_server_url, config.environment,
    )
    try:
        components = create_components(config, args)

        from argocd_diff.orchestrator.pipeline import run_pipeline

        summary = run_pipeline(config, max_workers=args.max_workers, **components)

        if args.output_json:
            print(format_summary_json(summary))
        else:
            print_summary_human(summary)

        if summary.failed:
            annotate_failure(
                f"ArgoCD diff failed: Encountered {summary.failure_count} errors"
            )
        return determine_exit_code(summary)

    except InvalidMatcherError as exc:
        return _handle_error("Configuration error", exc, args.verbose, EXIT_INVALID_INPUT)

    except (SetupError, CliDownloadError) as exc:
        return _handle_error("Setup error", exc, args.verbose, EXIT_SETUP_ERROR)

    except ReportPublishError as exc:
        return _handle_error("Report error", exc, args.verbose, EXIT_REPORT_ERROR)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_KEYBOARD_INTERRUPT

    except Exception as exc:
        return _handle_error("Unexpected error", exc, args.verbose, EXIT_UNEXPECTED)
