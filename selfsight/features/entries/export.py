"""Plain-text and standalone HTML renderings of a single entry for download."""

from html import escape

from selfsight.features.entries.dates import format_date, format_time
from selfsight.features.entries.models import DiaryEntry

EXPORT_FORMATS = {
    "text": ("txt", "text/plain; charset=utf-8"),
    "html": ("html", "text/html; charset=utf-8"),
}

_HTML_STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; max-width: 800px; margin: 0 auto; padding: 20px; }
    h1 { margin-bottom: 5px; }
    .date { color: #666; margin-bottom: 20px; font-size: 0.9em; }
    .content { white-space: pre-wrap; margin-bottom: 20px; }
    .analysis { margin-top: 20px; border-top: 1px solid #eaeaea; padding-top: 20px; }
"""


def _analysis_rows(entry: DiaryEntry) -> list[tuple[str, str]]:
    return [
        ("Mood", entry.mood or ""),
        ("Emotions", ", ".join(entry.emotions or []) or "None"),
        ("Strength", entry.strength or "None detected"),
        ("Area for Growth", entry.weakness or "None detected"),
        ("Key Insight", entry.insight or "None provided"),
    ]


def _stamp(entry: DiaryEntry) -> str:
    return f"{format_date(entry.created_at)} • {format_time(entry.created_at)}"


def export_entry_text(entry: DiaryEntry) -> str:
    lines = [entry.title, _stamp(entry), "", entry.content, ""]

    if entry.mood:
        lines += ["AI ANALYSIS", "-----------"]
        lines += [f"{label}: {value}" for label, value in _analysis_rows(entry)]

    return "\n".join(lines) + "\n"


def export_entry_html(entry: DiaryEntry) -> str:
    analysis_html = ""
    if entry.mood:
        rows = "\n".join(
            f"      <p><strong>{label}:</strong> {escape(value)}</p>"
            for label, value in _analysis_rows(entry)
        )
        analysis_html = f'    <div class="analysis">\n      <h2>AI Analysis</h2>\n{rows}\n    </div>\n'

    content_html = escape(entry.content).replace("\n", "<br>")

    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '  <meta charset="utf-8">\n'
        f"  <title>{escape(entry.title)}</title>\n"
        f"  <style>{_HTML_STYLE}  </style>\n"
        "</head>\n"
        "<body>\n"
        f"    <h1>{escape(entry.title)}</h1>\n"
        f'    <div class="date">{escape(_stamp(entry))}</div>\n'
        f'    <div class="content">{content_html}</div>\n'
        f"{analysis_html}"
        "</body>\n"
        "</html>\n"
    )


def export_filename(entry: DiaryEntry, fmt: str) -> str:
    extension, _ = EXPORT_FORMATS[fmt]
    return f"journal-{format_date(entry.created_at).replace('/', '-')}.{extension}"


def render_export(entry: DiaryEntry, fmt: str) -> tuple[str, str, str]:
    """Return (body, media type, filename) for ``text`` or ``html``."""
    _, media_type = EXPORT_FORMATS[fmt]
    body = export_entry_html(entry) if fmt == "html" else export_entry_text(entry)
    return body, media_type, export_filename(entry, fmt)
