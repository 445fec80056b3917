"""Strip Argo CD bookkeeping noise from ``argocd app diff`` output.

The diff is split into sections, one per resource, each starting with a
header such as ``===== apps/Deployment default/web ======`` followed by
normal-format diff hunks (``5c5``, ``< old``, ``---``, ``> new``).
"""

import re

SECTION_SPLIT_RE = re.compile(r"(?=^={5} )", re.MULTILINE)

# Tracking label rewritten on every sync: "< label" / "---" / "> label"
INSTANCE_LABEL_RE = re.compile(
    r"<\s+argocd\.argoproj\.io/instance:.*\n---\n>\s+argocd\.argoproj\.io/instance:.*\n?"
)
PART_OF_LABEL_RE = re.compile(r"<\s+app\.kubernetes\.io/part-of:.*\n?")

# A header with nothing left under it except, at most, a bare change marker.
PHANTOM_SECTION_RE = re.compile(
    r"={5} .+ ={6}(?:\n\d+(?:,\d+)?[acd]\d+(?:,\d+)?)?"
)


def split_sections(diff_text: str) -> list[str]:
    """Split diff text at every section header line, keeping the headers."""
    return [section for section in SECTION_SPLIT_RE.split(diff_text) if section]


def strip_label_churn(section: str) -> str:
    """Remove label churn from one section until nothing more matches."""
    previous = None
    current = section
    while current != previous:
        previous = current
        current = PART_OF_LABEL_RE.sub("", current)
        current = INSTANCE_LABEL_RE.sub("", current)
        current = current.strip()
    return current


def is_phantom_section(section: str) -> bool:
    return PHANTOM_SECTION_RE.fullmatch(section) is not None


def normalize(diff_text: str) -> str:
    """Return the diff with label churn and empty sections removed.

    Returns:
        The cleaned diff, sections separated by a blank line. Empty string if
        nothing meaningful is left.
    """
    if not diff_text:
        return ""

    cleaned = (strip_label_churn(section) for section in split_sections(diff_text))
    kept = [
        section for section in cleaned
        if section and not is_phantom_section(section)
    ]
    return "\n\n".join(kept).strip()
