"""Tests for report composition."""

from datetime import datetime, timezone

import pytest

from argocd_diff.models import DiffResult, SyncStatus, ToolFailure
from argocd_diff.report.composer import LEGEND, ReportComposer, format_timestamp

from conftest import make_app

FIXED_NOW = datetime(2026, 10, 18, 22, 4, 5, tzinfo=timezone.utc)

HEADER = "===== apps/Deployment default/web ======"
REAL_DIFF = f"{HEADER}\n21c21\n<   image: web:1.0\n---\n>   image: web:1.1\n"
NOISE_DIFF = (
    f"{HEADER}\n5c5\n"
    "<     argocd.argoproj.io/instance: web\n---\n"
    ">     argocd.argoproj.io/instance: web-prod\n"
)


@pytest.fixture
def composer(config):
    return ReportComposer(config, clock=lambda: FIXED_NOW)


def test_format_timestamp_pacific():
    assert format_timestamp(FIXED_NOW) == "10/18/2026, 3:04:05 PM"


def test_format_timestamp_midnight_and_standard_time():
    moment = datetime(2026, 1, 5, 8, 0, 9, tzinfo=timezone.utc)
    assert format_timestamp(moment) == "1/5/2026, 12:00:09 AM"


def test_header_and_legend(composer):
    report = composer.compose([DiffResult.changed(make_app("web"), REAL_DIFF)])
    assert report.body.startswith(
        "## ArgoCD Diff on staging for commit [`0123456`]"
        "(https://github.com/acme/deploy/pull/42/commits/0123456789abcdef)"
    )
    assert "_Updated at 10/18/2026, 3:04:05 PM PT_" in report.body
    assert report.body.rstrip().endswith(LEGEND.rstrip())


def test_changed_app_block(composer):
    report = composer.compose([DiffResult.changed(make_app("web"), REAL_DIFF)])
    assert report.has_content is True
    assert report.applications == ["web"]
    assert "App: [`web`](https://argocd.example.com/applications/web)" in report.body
    assert "YAML generation: Success 🟢" in report.body
    assert "App sync status: Synced ✅" in report.body
    assert "```diff\n" + REAL_DIFF.strip() + "\n```" in report.body
    assert "<details>" in report.body


def test_out_of_sync_glyph(composer):
    app = make_app("web", sync_status=SyncStatus.OUT_OF_SYNC)
    report = composer.compose([DiffResult.changed(app, REAL_DIFF)])
    assert "App sync status: Out of Sync ⚠️" in report.body


def test_clean_and_noise_only_apps_are_omitted(composer):
    results = [
        DiffResult.clean(make_app("clean")),
        DiffResult.changed(make_app("noisy"), NOISE_DIFF),
        DiffResult.changed(make_app("real"), REAL_DIFF),
    ]
    report = composer.compose(results)
    assert report.applications == ["real"]
    assert "`clean`" not in report.body
    assert "`noisy`" not in report.body


def test_nothing_reportable(composer):
    report = composer.compose([DiffResult.clean(make_app("a")), DiffResult.changed(make_app("b"), NOISE_DIFF)])
    assert report.has_content is False
    assert report.applications == []


def test_failure_block_is_rendered_and_scrubbed(composer):
    command = "bin/argo app diff web --local=apps/web --auth-token=XYZ123 --server=argocd.example.com"
    failure = ToolFailure(
        command=command,
        stderr="rpc error: token XYZ123 rejected",
        raw_error={"cmd": command, "code": 20},
    )
    report = composer.compose([DiffResult.failed(make_app("web"), failure)])
    assert report.has_content is True
    assert "YAML generation: Error 🛑" in report.body
    assert "**`stderr:`**" in report.body
    assert "**`command:`**" in report.body
    assert "```json" in report.body
    assert "XYZ123" not in report.body
    assert "--auth-token=***" in report.body
    assert "token *** rejected" in report.body
    assert "```diff" not in report.body


def test_report_order_follows_results(composer):
    results = [DiffResult.changed(make_app(name), REAL_DIFF) for name in ("zeta", "alpha", "mid")]
    report = composer.compose(results)
    positions = [report.body.index(f"`{name}`") for name in ("zeta", "alpha", "mid")]
    assert positions == sorted(positions)


def test_plaintext_app_links(config):
    composer = ReportComposer(config.model_copy(update={"plaintext": True}), clock=lambda: FIXED_NOW)
    assert composer.app_url("web") == "http://argocd.example.com/applications/web"
