"""Split a free-text model reply into a bullet summary and a detailed summary."""

import re

from meeting_digest.core import prompts
from meeting_digest.core.models import AnalysisResult

MAX_SUMMARY_LINES = 3

# Leading "-", "*", "•", "1." style prefixes and the whitespace after them.
# A number only counts as a marker when its dot ends the token, so "1.5배" stays.
_LIST_MARKER_RE = re.compile(r"^(?:(?:[-*•]+|\d+\.(?=\s|$))\s*)+")

_NONE = "none"
_THREE_LINE = "three_line"
_DETAILED = "detailed"


def strip_list_marker(line: str) -> str:
    """Remove every leading list-marker prefix from a line.

    Stacked prefixes ("- 1. item") are removed together, so a second pass
    over the result is a no-op.
    """
    return _LIST_MARKER_RE.sub("", line.strip(), count=1).strip()


def parse_response(
    raw_text: str,
    three_line_marker: str = prompts.THREE_LINE_MARKER,
    detailed_marker: str = prompts.DETAILED_MARKER,
) -> AnalysisResult:
    """
    Parse a summarization reply into an AnalysisResult.

    Markers are matched by substring so decorated headers still switch the
    capture mode. When nothing is captured, the whole reply is kept as the
    detailed summary so no text is dropped.

    Args:
        raw_text: Text returned by the summarization call
        three_line_marker: Marker introducing the bullet section
        detailed_marker: Marker introducing the narrative section

    Returns:
        AnalysisResult with at most three bullets and a trimmed detailed summary
    """
    bullets: list[str] = []
    detailed_lines: list[str] = []
    mode = _NONE

    for raw_line in raw_text.split("\n"):
        line = raw_line.strip()

        if three_line_marker in line:
            mode = _THREE_LINE
            continue
        if detailed_marker in line:
            mode = _DETAILED
            continue

        if mode == _THREE_LINE:
            if line:
                cleaned = strip_list_marker(line)
                if cleaned:
                    bullets.append(cleaned)
        elif mode == _DETAILED:
            detailed_lines.append(raw_line.rstrip("\r"))

    detailed = "\n".join(detailed_lines).strip()

    if not bullets and not detailed:
        return AnalysisResult(summary_3_lines=[], detailed_summary=raw_text.strip())

    return AnalysisResult(
        summary_3_lines=bullets[:MAX_SUMMARY_LINES],
        detailed_summary=detailed,
    )
