"""CSV exporter.

Every field is quoted and embedded quotes are doubled. Unlike the
human-readable formats an empty subject stays an empty field, so the file
loads back into a spreadsheet without placeholder dashes.
"""

import csv
import io
from datetime import datetime

from src.routine.exporters.common import (
    HEADER_LABEL,
    export_filename,
    format_date,
    resolve_time,
)
from src.routine.models import Payload, ScheduleData

CSV_MIME_TYPE = "text/csv;charset=utf-8"
TITLE_MARKER = "Class Schedule"


def render_csv(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

    writer.writerow([TITLE_MARKER])
    buffer.write("\n")
    writer.writerow([HEADER_LABEL, *snapshot.dates])
    for row in snapshot.classes:
        writer.writerow([row.name, *row.subjects])
    buffer.write("\n")
    writer.writerow([f"Exported on: {format_date(resolve_time(generated_at))}"])

    return buffer.getvalue()


def export_csv(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> Payload:
    return Payload(
        mime_type=CSV_MIME_TYPE,
        filename=export_filename(title, ".csv"),
        content=render_csv(snapshot, title, generated_at=generated_at),
    )
