"""Filter applications by a user supplied name expression."""

import re
from collections.abc import Sequence

from argocd_diff.models import Application
from argocd_diff.selection.exceptions import InvalidMatcherError


def compile_matcher(matcher: str) -> re.Pattern[str] | frozenset[str] | None:
    """Turn a matcher string into a regex, a set of names, or None (no filter).

    ``/expr/`` is a regular expression; anything else is a comma separated
    list of exact names.
    """
    matcher = matcher.strip()
    if not matcher:
        return None
    if len(matcher) >= 2 and matcher.startswith("/") and matcher.endswith("/"):
        try:
            return re.compile(matcher[1:-1])
        except re.error as exc:
            raise InvalidMatcherError(
                f"Invalid app name pattern {matcher!r}: {exc}"
            ) from exc
    return frozenset(name.strip() for name in matcher.split(",") if name.strip())


def filter_by_name(apps: Sequence[Application], matcher: str) -> list[Application]:
    compiled = compile_matcher(matcher)
    if compiled is None:
        return list(apps)
    if isinstance(compiled, re.Pattern):
        return [app for app in apps if compiled.search(app.name)]
    return [app for app in apps if app.name in compiled]
