"""Tests for configuration loading."""

import json

import pytest

from argocd_diff.config import (
    ConfigurationError,
    action_input,
    load_config,
    parse_bool,
)


@pytest.fixture
def env(tmp_path):
    event = tmp_path / "event.json"
    event.write_text(json.dumps({"pull_request": {"number": 7, "head": {"sha": "abcdef1234"}}}))
    return {
        "INPUT_GITHUB-TOKEN": "gh",
        "INPUT_ARGOCD-SERVER-URL": "argocd.example.com",
        "INPUT_ARGOCD-TOKEN": "tok",
        "INPUT_ARGOCD-VERSION": "v2.9.3",
        "INPUT_ENVIRONMENT": "prod",
        "INPUT_PLAINTEXT": "False",
        "GITHUB_REPOSITORY": "acme/deploy",
        "GITHUB_EVENT_PATH": str(event),
    }


def test_load_config_from_action_env(env):
    config = load_config(env)
    assert config.github_token == "gh"
    assert config.argocd_server_url == "argocd.example.com"
    assert config.environment == "prod"
    assert config.plaintext is False
    assert config.repo_owner == "acme"
    assert config.repo_name == "deploy"
    assert config.pr_number == 7
    assert config.head_sha == "abcdef1234"
    assert config.arch == "linux"
    assert config.protocol == "https"
    assert config.repo_slug == "acme/deploy"


def test_plaintext_switches_protocol_and_flags(env):
    env["INPUT_PLAINTEXT"] = "true"
    env["INPUT_ARGOCD-EXTRA-CLI-ARGS"] = "--grpc-web"
    config = load_config(env)
    assert config.protocol == "http"
    assert config.argocd_base_url == "http://argocd.example.com"
    assert config.cli_flags == [
        "--auth-token=tok",
        "--server=argocd.example.com",
        "--plaintext",
        "--grpc-web",
    ]


def test_diff_mode_inputs(env):
    config = load_config(env)
    assert config.revision == ""
    assert config.server_side_generate is False
    assert config.insecure is False

    env["INPUT_REVISION"] = " feature-x "
    env["INPUT_SERVER-SIDE-GENERATE"] = "true"
    env["INPUT_INSECURE"] = "yes"
    config = load_config(env)
    assert config.revision == "feature-x"
    assert config.server_side_generate is True
    assert config.insecure is True


def test_overrides_take_precedence(env):
    config = load_config(env, environment="staging", repository="other/repo", pr_number=None)
    assert config.environment == "staging"
    assert config.repo_slug == "other/repo"
    assert config.pr_number == 7


def test_github_token_env_fallback(env):
    del env["INPUT_GITHUB-TOKEN"]
    env["GITHUB_TOKEN"] = "fallback"
    assert load_config(env).github_token == "fallback"


def test_pr_number_from_ref(env):
    del env["GITHUB_EVENT_PATH"]
    env["GITHUB_REF"] = "refs/pull/99/merge"
    assert load_config(env).pr_number == 99


def test_missing_required_values(env):
    del env["INPUT_ARGOCD-TOKEN"]
    del env["INPUT_ENVIRONMENT"]
    with pytest.raises(ConfigurationError) as exc_info:
        load_config(env)
    assert "argocd_token" in str(exc_info.value)
    assert "environment" in str(exc_info.value)


def test_invalid_pr_number(env):
    with pytest.raises(ConfigurationError):
        load_config(env, pr_number="not-a-number")


def test_malformed_event_payload(env, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    env["GITHUB_EVENT_PATH"] = str(bad)
    with pytest.raises(ConfigurationError):
        load_config(env)


def test_action_input_name_mangling():
    assert action_input({"INPUT_APP-NAME-MATCHER": " web "}, "app-name-matcher") == "web"
    assert action_input({}, "missing", "dflt") == "dflt"


@pytest.mark.parametrize("value, expected", [("true", True), ("TRUE", True), ("1", True),
                                             ("false", False), ("", False), (None, False)])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected
