"""Routine exporters and the format registry.

Each exporter is a pure function ``(snapshot, title, *, generated_at=None)
-> Payload`` that reads nothing but the snapshot it is given.
"""

from collections.abc import Callable
from datetime import datetime
from enum import Enum

from src.routine.errors import UnknownFormatError
from src.routine.exporters.delimited import export_csv
from src.routine.exporters.markup import export_doc, export_html, export_print
from src.routine.exporters.text import export_clipboard, export_text
from src.routine.exporters.word import export_docx
from src.routine.logging import get_logger
from src.routine.models import Payload, ScheduleData

log = get_logger(__name__)

Exporter = Callable[..., Payload]


class ExportFormat(str, Enum):
    DOC = "doc"
    HTML = "html"
    PRINT = "print"
    TEXT = "text"
    CSV = "csv"
    CLIPBOARD = "clipboard"
    DOCX = "docx"


EXPORTERS: dict[ExportFormat, Exporter] = {
    ExportFormat.DOC: export_doc,
    ExportFormat.HTML: export_html,
    ExportFormat.PRINT: export_print,
    ExportFormat.TEXT: export_text,
    ExportFormat.CSV: export_csv,
    ExportFormat.CLIPBOARD: export_clipboard,
    ExportFormat.DOCX: export_docx,
}


def export(
    snapshot: ScheduleData,
    fmt: ExportFormat | str,
    title: str,
    *,
    generated_at: datetime | None = None,
) -> Payload:
    """Build the payload for one format.

    Args:
        snapshot: Routine to export.
        fmt: An ExportFormat or its value (e.g. "csv").
        title: Document title; also the base of the suggested filename.
        generated_at: Timestamp for footers (defaults to now).

    Returns:
        The finished payload.

    Raises:
        UnknownFormatError: If no exporter handles ``fmt``.
    """
    try:
        export_format = ExportFormat(fmt)
    except ValueError:
        raise UnknownFormatError(
            f"Unknown export format {fmt!r}. Valid: {[f.value for f in ExportFormat]}"
        ) from None

    payload = EXPORTERS[export_format](snapshot, title, generated_at=generated_at)
    log.info(
        "export_built",
        format=export_format.value,
        filename=payload.filename,
        classes=len(snapshot.classes),
        dates=len(snapshot.dates),
    )
    return payload


__all__ = [
    "EXPORTERS",
    "ExportFormat",
    "export",
    "export_clipboard",
    "export_csv",
    "export_doc",
    "export_docx",
    "export_html",
    "export_print",
    "export_text",
]
