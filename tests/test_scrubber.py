"""Tests for secret scrubbing."""

from argocd_diff.utils.scrubber import REDACTION_MARKER, scrub_secrets


def test_scrubs_every_occurrence_of_token():
    text = 'argocd app diff web --auth-token=XYZ123 --server=x\n{"cmd": "XYZ123"}'
    result = scrub_secrets(text)
    assert "XYZ123" not in result
    assert result.count(REDACTION_MARKER) == 2


def test_text_without_flag_is_unchanged():
    text = "nothing secret here XYZ123"
    assert scrub_secrets(text) == text


def test_token_with_regex_metacharacters():
    text = "--auth-token=a.b+c* and later a.b+c*"
    assert scrub_secrets(text) == "--auth-token=*** and later ***"


def test_token_inside_json_string_stops_at_quote():
    text = '{"cmd": "argo app diff --auth-token=tok.en"} tok.en'
    assert scrub_secrets(text) == '{"cmd": "argo app diff --auth-token=***"} ***'


def test_custom_marker():
    assert scrub_secrets("--auth-token=abc", marker="[redacted]") == "--auth-token=[redacted]"
