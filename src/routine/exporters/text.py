"""Fixed-width text exporters.

export_text lays out a pipe-separated table whose widths follow the data.
export_clipboard draws a box table with fixed widths, for pasting into chat
or mail where a monospace font is not guaranteed to follow the data.
"""

from datetime import datetime

from src.routine.exporters.common import (
    HEADER_LABEL,
    display_subject,
    export_filename,
    format_date,
    resolve_time,
)
from src.routine.models import Payload, ScheduleData

TEXT_MIME_TYPE = "text/plain"

MIN_LABEL_WIDTH = 12
MIN_SUBJECT_WIDTH = 8

BOX_LABEL_WIDTH = 10
BOX_SUBJECT_WIDTH = 14
BOX_HEADER_LABEL = "Class/Date"


def column_widths(snapshot: ScheduleData) -> tuple[int, int]:
    """Width of the label column and of every data column.

    The label column fits the longest class name, the data columns fit the
    longest subject anywhere in the grid. Date labels do not widen columns.
    """
    label_width = max([MIN_LABEL_WIDTH] + [len(row.name) for row in snapshot.classes])
    subject_width = max(
        [MIN_SUBJECT_WIDTH]
        + [len(subject) for row in snapshot.classes for subject in row.subjects]
    )
    return label_width, subject_width


def render_text(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> str:
    label_width, subject_width = column_widths(snapshot)
    lines = [title, "=" * len(title), ""]

    lines.append(
        " | ".join(
            [HEADER_LABEL.ljust(label_width)]
            + [date.ljust(subject_width) for date in snapshot.dates]
        )
    )
    lines.append(
        "-+-".join(["-" * label_width] + ["-" * subject_width for _ in snapshot.dates])
    )
    for row in snapshot.classes:
        lines.append(
            " | ".join(
                [row.name.ljust(label_width)]
                + [display_subject(s).ljust(subject_width) for s in row.subjects]
            )
        )

    lines.append("")
    lines.append(f"Exported on: {format_date(resolve_time(generated_at))}")
    return "\n".join(lines)


def _box_rule(left: str, middle: str, right: str, columns: int) -> str:
    segments = ["─" * (BOX_LABEL_WIDTH + 2)]
    segments.extend("─" * (BOX_SUBJECT_WIDTH + 2) for _ in range(columns))
    return left + middle.join(segments) + right


def _box_row(label: str, values: list[str]) -> str:
    cells = [f" {label.ljust(BOX_LABEL_WIDTH)} "]
    cells.extend(f" {value.ljust(BOX_SUBJECT_WIDTH)} " for value in values)
    return "│" + "│".join(cells) + "│"


def render_clipboard(snapshot: ScheduleData, title: str) -> str:
    """Box-drawn table; values longer than a cell are kept whole, not cut."""
    columns = len(snapshot.dates)
    lines = [f"📚 {title}", ""]
    lines.append(_box_rule("┌", "┬", "┐", columns))
    lines.append(_box_row(BOX_HEADER_LABEL, list(snapshot.dates)))
    lines.append(_box_rule("├", "┼", "┤", columns))
    for row in snapshot.classes:
        lines.append(_box_row(row.name, [display_subject(s) for s in row.subjects]))
    lines.append(_box_rule("└", "┴", "┘", columns))
    return "\n".join(lines) + "\n"


def export_text(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> Payload:
    """Plain-text table with " | " separated, data-sized columns."""
    return Payload(
        mime_type=TEXT_MIME_TYPE,
        filename=export_filename(title, ".txt"),
        content=render_text(snapshot, title, generated_at=generated_at),
    )


def export_clipboard(
    snapshot: ScheduleData, title: str, *, generated_at: datetime | None = None
) -> Payload:
    # The box table carries no timestamp; generated_at is accepted so every
    # exporter shares one signature.
    return Payload(
        mime_type=TEXT_MIME_TYPE,
        filename=export_filename(title, ".txt"),
        content=render_clipboard(snapshot, title),
    )
