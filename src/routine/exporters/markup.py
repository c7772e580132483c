"""Markup exporters: Word-compatible HTML, standalone HTML and a print view.

All three share one table layout: a header row of "Class / Date" plus every
date, then one row per class with the name cell marked by a CSS class.
Every piece of user text is HTML-escaped.
"""

from datetime import datetime
from html import escape

from src.routine.exporters.common import (
    HEADER_LABEL,
    display_subject,
    export_filename,
    format_date,
    format_time,
    resolve_time,
)
from src.routine.models import Payload, ScheduleData

DOC_MIME_TYPE = "application/msword;charset=utf-8"
HTML_MIME_TYPE = "text/html"

_WORD_STYLE = """
        @page {
            size: A4;
            margin: 2cm;
            mso-page-orientation: portrait;
        }
        body {
            font-family: "Arial", sans-serif;
            margin: 0;
            padding: 0;
            line-height: 1.6;
            color: #000000;
        }
        .header {
            text-align: center;
            margin-bottom: 30px;
            border-bottom: 2px solid #333;
            padding-bottom: 15px;
        }
        h1 {
            font-size: 24pt;
            color: #2c3e50;
            margin: 0;
        }
        table {
            width: 100%;
            border-collapse: collapse;
            margin: 20px 0;
            border: 1px solid #000000;
            mso-border-alt: solid windowtext .5pt;
        }
        th, td {
            border: 1px solid #000000;
            padding: 12px;
            text-align: center;
            mso-border-alt: solid windowtext .5pt;
        }
        th {
            background-color: #f5f5f5;
            font-weight: bold;
            font-size: 12pt;
            mso-pattern: solid #F5F5F5;
        }
        .class-name {
            background-color: #e8f4f8;
            font-weight: bold;
            mso-pattern: solid #E8F4F8;
        }
        .footer {
            margin-top: 40px;
            text-align: center;
            color: #666;
            font-size: 10pt;
            border-top: 1px solid #ccc;
            padding-top: 10px;
        }
        .document-info {
            font-size: 9pt;
            color: #888;
            margin-top: 20px;
        }"""

_HTML_STYLE = """
        body {
            font-family: Arial, sans-serif;
            margin: 40px;
            line-height: 1.6;
        }
        .header {
            text-align: center;
            margin-bottom: 30px;
            border-bottom: 2px solid #333;
            padding-bottom: 10px;
        }
        table {
            width: 100%;
            border-collapse: collapse;
            margin: 20px 0;
        }
        th, td {
            border: 1px solid #ddd;
            padding: 12px;
            text-align: center;
        }
        th {
            background-color: #f5f5f5;
            font-weight: bold;
        }
        .class-name {
            background-color: #f9f9f9;
            font-weight: bold;
        }
        .footer {
            margin-top: 30px;
            text-align: center;
            color: #666;
            font-size: 14px;
        }"""

_PRINT_STYLE = """
        body { font-family: Arial, sans-serif; margin: 20px; }
        h1 { text-align: center; }
        table { width: 100%; border-collapse: collapse; margin: 20px 0; }
        th, td { border: 1px solid #000; padding: 10px; text-align: center; }
        th { background-color: #f0f0f0; }
        .class-cell { background-color: #f9f9f9; font-weight: bold; }
        @media print {
            body { margin: 0; }
            table { font-size: 12px; }
        }"""

# Tells Word to open the file in print layout rather than web layout
_WORD_SETTINGS = """
    <xml>
        <w:WordDocument>
            <w:View>Print</w:View>
            <w:Zoom>100</w:Zoom>
            <w:DoNotOptimizeForBrowser/>
        </w:WordDocument>
    </xml>"""


def _header_row(snapshot: ScheduleData) -> str:
    cells = [f"<th>{escape(HEADER_LABEL)}</th>"]
    cells.extend(f"<th>{escape(date)}</th>" for date in snapshot.dates)
    return f"<tr>{''.join(cells)}</tr>"


def _body_rows(snapshot: ScheduleData, name_class: str) -> str:
    rows = []
    for row in snapshot.classes:
        cells = [f'<td class="{name_class}">{escape(row.name)}</td>']
        cells.extend(
            f"<td>{escape(display_subject(subject))}</td>" for subject in row.subjects
        )
        rows.append(f"            <tr>{''.join(cells)}</tr>")
    return "\n".join(rows)


def _table(snapshot: ScheduleData, name_class: str) -> str:
    return f"""    <table>
        <thead>
            {_header_row(snapshot)}
        </thead>
        <tbody>
{_body_rows(snapshot, name_class)}
        </tbody>
    </table>"""


def render_doc(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> str:
    moment = resolve_time(generated_at)
    safe_title = escape(title)
    return f"""<html xmlns:o='urn:schemas-microsoft-com:office:office'
      xmlns:w='urn:schemas-microsoft-com:office:word'
      xmlns='http://www.w3.org/TR/REC-html40'>
<head>
    <meta charset="utf-8">
    <title>{safe_title}</title>{_WORD_SETTINGS}
    <style>{_WORD_STYLE}
    </style>
</head>
<body>
    <div class="header">
        <h1>{safe_title}</h1>
    </div>

{_table(snapshot, "class-name")}

    <div class="footer">
        <p>Generated on {format_date(moment)} at {format_time(moment)}</p>
        <div class="document-info">
            Document: {safe_title} | Total Classes: {len(snapshot.classes)} | Total Dates: {len(snapshot.dates)}
        </div>
    </div>
</body>
</html>
"""


def render_html(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> str:
    moment = resolve_time(generated_at)
    safe_title = escape(title)
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{safe_title}</title>
    <style>{_HTML_STYLE}
    </style>
</head>
<body>
    <div class="header">
        <h1>{safe_title}</h1>
    </div>

{_table(snapshot, "class-name")}

    <div class="footer">
        Generated on {format_date(moment)} at {format_time(moment)}
    </div>
</body>
</html>
"""


def render_print(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> str:
    moment = resolve_time(generated_at)
    safe_title = escape(title)
    return f"""<!DOCTYPE html>
<html>
<head>
    <title>{safe_title}</title>
    <style>{_PRINT_STYLE}
    </style>
</head>
<body>
    <h1>{safe_title}</h1>
{_table(snapshot, "class-cell")}
    <p style="text-align: center; margin-top: 20px;">
        Generated on {format_date(moment)}
    </p>
</body>
</html>
"""


def export_doc(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> Payload:
    """Word-compatible document: HTML carrying Office namespaces and settings.

    Word opens the .doc file directly in print layout with A4 margins and
    solid table borders.
    """
    return Payload(
        mime_type=DOC_MIME_TYPE,
        filename=export_filename(title, ".doc"),
        content=render_doc(snapshot, title, generated_at=generated_at),
    )


def export_html(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> Payload:
    """Standalone HTML page with the routine table."""
    return Payload(
        mime_type=HTML_MIME_TYPE,
        filename=export_filename(title, ".html"),
        content=render_html(snapshot, title, generated_at=generated_at),
    )


def export_print(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> Payload:
    """Compact page meant to be sent straight to a printer."""
    return Payload(
        mime_type=HTML_MIME_TYPE,
        filename=export_filename(title, "_print.html"),
        content=render_print(snapshot, title, generated_at=generated_at),
    )
