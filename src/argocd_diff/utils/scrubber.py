"""Redact credentials that leak into rendered command lines."""

import re

REDACTION_MARKER = "***"
AUTH_TOKEN_RE = re.compile(r"--auth-token=([^\s\"']+)")


def scrub_secrets(text: str, marker: str = REDACTION_MARKER) -> str:
    """Replace every occurrence of any ``--auth-token=`` value in ``text``.

    The token is replaced wherever it appears, not only next to the flag,
    since the same value also shows up inside serialized error payloads.
    """
    tokens = {match.group(1) for match in AUTH_TOKEN_RE.finditer(text)}
    for token in sorted(tokens, key=len, reverse=True):
        text = text.replace(token, marker)
    return text
