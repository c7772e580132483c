"""Native Word (.docx) exporter built with python-docx."""

import io
from datetime import datetime

import docx

from src.routine.exporters.common import (
    HEADER_LABEL,
    display_subject,
    export_filename,
    format_date,
    format_time,
    resolve_time,
)
from src.routine.models import Payload, ScheduleData

DOCX_MIME_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)


def build_document(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> "docx.document.Document":
    """Build the routine as a python-docx Document.

    Args:
        snapshot: Routine to render.
        title: Document heading.
        generated_at: Timestamp printed under the table (defaults to now).

    Returns:
        A Document with a title heading, one grid table and a footer line.
    """
    moment = resolve_time(generated_at)
    document = docx.Document()
    document.add_heading(title, level=0)

    table = document.add_table(rows=1, cols=len(snapshot.dates) + 1)
    table.style = "Table Grid"

    header = table.rows[0].cells
    header[0].text = HEADER_LABEL
    for index, date in enumerate(snapshot.dates, start=1):
        header[index].text = date
    for cell in header:
        for run in cell.paragraphs[0].runs:
            run.bold = True

    for row in snapshot.classes:
        cells = table.add_row().cells
        cells[0].paragraphs[0].add_run(row.name).bold = True
        for index, subject in enumerate(row.subjects, start=1):
            cells[index].text = display_subject(subject)

    document.add_paragraph(
        f"Generated on {format_date(moment)} at {format_time(moment)}"
    )
    return document


def export_docx(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> Payload:
    buffer = io.BytesIO()
    build_document(snapshot, title, generated_at=generated_at).save(buffer)
    return Payload(
        mime_type=DOCX_MIME_TYPE,
        filename=export_filename(title, ".docx"),
        content=buffer.getvalue(),
    )
