"""Export helpers for the detailed summary."""

from datetime import date

from meeting_digest.core.models import AnalysisResult


def export_filename(day: date | None = None) -> str:
    """Return the download name, e.g. meeting_summary_2024-05-01.md."""
    day = day or date.today()
    return f"meeting_summary_{day.isoformat()}.md"


def render_export(result: AnalysisResult) -> str:
    """Return the text written to the exported file."""
    return result.detailed_summary
