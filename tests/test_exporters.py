"""Tests for the export formats."""

import io
from datetime import datetime

import docx
import pytest

from src.routine.errors import UnknownFormatError
from src.routine.exporters import EXPORTERS, ExportFormat, export
from src.routine.exporters.common import export_filename
from src.routine.exporters.delimited import export_csv
from src.routine.exporters.markup import export_doc, export_html, export_print
from src.routine.exporters.text import column_widths, export_clipboard, export_text
from src.routine.exporters.word import export_docx
from src.routine.models import ClassRow, ScheduleData


@pytest.fixture
def with_blank() -> ScheduleData:
    return ScheduleData(
        dates=("D1", "D2"),
        classes=(ClassRow(name="A", subjects=("m", "")),),
    )


def test_filename_collapses_whitespace() -> None:
    assert export_filename("First terminal  exam\troutine", ".doc") == (
        "First_terminal_exam_routine.doc"
    )


def test_csv_header_and_rows_in_order(small: ScheduleData, fixed_time: datetime) -> None:
    payload = export_csv(small, "Routine", generated_at=fixed_time)
    assert payload.content.splitlines() == [
        '"Class Schedule"',
        "",
        '"Class / Date","D1","D2"',
        '"A","m","s"',
        "",
        '"Exported on: 2026-10-18"',
    ]
    assert payload.filename == "Routine.csv"
    assert payload.mime_type == "text/csv;charset=utf-8"


def test_csv_doubles_embedded_quotes(fixed_time: datetime) -> None:
    snapshot = ScheduleData(
        dates=('Mon "A"',),
        classes=(ClassRow(name='Grade "1"', subjects=('Say "hi", all',)),),
    )
    lines = export_csv(snapshot, "R", generated_at=fixed_time).content.splitlines()
    assert lines[2] == '"Class / Date","Mon ""A"""'
    assert lines[3] == '"Grade ""1""","Say ""hi"", all"'


def test_empty_subject_rendering_differs_by_format(
    with_blank: ScheduleData, fixed_time: datetime
) -> None:
    """Human-readable formats show "-", CSV keeps an empty field."""
    csv_lines = export_csv(with_blank, "R", generated_at=fixed_time).content.splitlines()
    assert csv_lines[3] == '"A","m",""'

    html = export_html(with_blank, "R", generated_at=fixed_time).content
    assert "<td>m</td><td>-</td>" in html

    text = export_text(with_blank, "R", generated_at=fixed_time).content
    assert text.splitlines()[5].split(" | ")[2].strip() == "-"

    assert "│ -" in export_clipboard(with_blank, "R").content


def test_text_layout(with_blank: ScheduleData, fixed_time: datetime) -> None:
    lines = export_text(with_blank, "Exams", generated_at=fixed_time).content.splitlines()
    assert lines[0] == "Exams"
    assert lines[1] == "====="
    assert lines[2] == ""
    assert lines[3] == "Class / Date | D1" + " " * 6 + " | D2" + " " * 6
    assert lines[4] == "-" * 12 + "-+-" + "-" * 8 + "-+-" + "-" * 8
    assert lines[5] == "A" + " " * 11 + " | m" + " " * 7 + " | -" + " " * 7
    assert lines[-1] == "Exported on: 2026-10-18"


def test_text_widths_follow_longest_values() -> None:
    snapshot = ScheduleData(
        dates=("D1",),
        classes=(
            ClassRow(name="Grade 10 Science", subjects=("Computer Science",)),
            ClassRow(name="B", subjects=("",)),
        ),
    )
    assert column_widths(snapshot) == (16, 16)

    lines = export_text(snapshot, "T").content.splitlines()
    assert len(lines[3]) == len(lines[4]) == len(lines[5]) == len(lines[6])


def test_text_widths_have_minimums(small: ScheduleData) -> None:
    assert column_widths(small) == (12, 8)


def test_clipboard_box_is_aligned(two_by_two: ScheduleData) -> None:
    content = export_clipboard(two_by_two, "Exams").content
    lines = content.splitlines()
    assert lines[0] == "📚 Exams"
    assert lines[1] == ""

    box = lines[2:]
    assert box[0] == "┌" + "─" * 12 + "┬" + "─" * 16 + "┬" + "─" * 16 + "┐"
    assert box[1].startswith("│ Class/Date │ 2026-03-02")
    assert box[2].startswith("├") and box[2].endswith("┤")
    assert box[-1].startswith("└") and box[-1].endswith("┘")
    assert len(box) == 2 + 1 + len(two_by_two.classes) + 1
    assert len({len(line) for line in box}) == 1
    assert content.endswith("\n")


def test_clipboard_keeps_long_values_whole() -> None:
    snapshot = ScheduleData(
        dates=("D1",),
        classes=(ClassRow(name="Very long class name", subjects=("Advanced Mathematics",)),),
    )
    content = export_clipboard(snapshot, "T").content
    assert "Very long class name" in content
    assert "Advanced Mathematics" in content


def test_html_table_structure(two_by_two: ScheduleData, fixed_time: datetime) -> None:
    payload = export_html(two_by_two, "Mid term", generated_at=fixed_time)
    html = payload.content

    assert payload.filename == "Mid_term.html"
    assert payload.mime_type == "text/html"
    assert html.startswith("<!DOCTYPE html>")
    assert "<tr><th>Class / Date</th><th>2026-03-02</th><th>2026-03-04</th></tr>" in html
    assert (
        '<tr><td class="class-name">Grade 1</td><td>Math</td><td>Science</td></tr>'
        in html
    )
    assert html.index("Grade 1") < html.index("Grade 2")
    assert "Generated on 2026-10-18 at 09:30:00" in html
    assert "urn:schemas-microsoft-com" not in html


def test_markup_escapes_user_text(fixed_time: datetime) -> None:
    snapshot = ScheduleData(
        dates=("<D1>",),
        classes=(ClassRow(name="A & B", subjects=("<script>x</script>",)),),
    )
    for exporter in (export_doc, export_html, export_print):
        content = exporter(snapshot, "R&D", generated_at=fixed_time).content
        assert "<script>" not in content
        assert "&lt;script&gt;x&lt;/script&gt;" in content
        assert "A &amp; B" in content
        assert "&lt;D1&gt;" in content
        assert "<title>R&amp;D</title>" in content


def test_doc_carries_word_metadata(two_by_two: ScheduleData, fixed_time: datetime) -> None:
    payload = export_doc(two_by_two, "First terminal exam routine", generated_at=fixed_time)
    doc = payload.content

    assert payload.filename == "First_terminal_exam_routine.doc"
    assert payload.mime_type == "application/msword;charset=utf-8"
    assert "xmlns:w='urn:schemas-microsoft-com:office:word'" in doc
    assert "<w:View>Print</w:View>" in doc
    assert "mso-page-orientation: portrait" in doc
    assert '<td class="class-name">Grade 2</td><td>English</td><td>-</td>' in doc
    assert "Total Classes: 2 | Total Dates: 2" in doc
    assert "Generated on 2026-10-18 at 09:30:00" in doc


def test_print_view(two_by_two: ScheduleData, fixed_time: datetime) -> None:
    payload = export_print(two_by_two, "Exams", generated_at=fixed_time)
    assert payload.filename == "Exams_print.html"
    assert "@media print" in payload.content
    assert '<td class="class-cell">Grade 1</td>' in payload.content
    assert "Generated on 2026-10-18" in payload.content


def test_docx_table_content(two_by_two: ScheduleData, fixed_time: datetime) -> None:
    payload = export_docx(two_by_two, "Exams", generated_at=fixed_time)
    assert payload.filename == "Exams.docx"
    assert isinstance(payload.content, bytes)

    document = docx.Document(io.BytesIO(payload.content))
    table = document.tables[0]
    rows = [[cell.text for cell in row.cells] for row in table.rows]
    assert rows == [
        ["Class / Date", "2026-03-02", "2026-03-04"],
        ["Grade 1", "Math", "Science"],
        ["Grade 2", "English", "-"],
    ]
    assert table.rows[1].cells[0].paragraphs[0].runs[0].bold
    assert "Exams" in [p.text for p in document.paragraphs]
    assert "Generated on 2026-10-18 at 09:30:00" in [p.text for p in document.paragraphs]


def test_exporters_handle_a_snapshot_without_classes(fixed_time: datetime) -> None:
    """An empty grid still yields a complete document in every format."""
    snapshot = ScheduleData(dates=("D1",), classes=())
    for fmt in ExportFormat:
        payload = export(snapshot, fmt, "Empty", generated_at=fixed_time)
        assert payload.content
    html = export(snapshot, "html", "Empty", generated_at=fixed_time).content
    assert "<tbody>" in html and "</html>" in html


def test_registry_covers_every_format() -> None:
    assert set(EXPORTERS) == set(ExportFormat)


def test_export_accepts_format_names(small: ScheduleData, fixed_time: datetime) -> None:
    assert export(small, "csv", "R", generated_at=fixed_time) == export_csv(
        small, "R", generated_at=fixed_time
    )


def test_export_rejects_unknown_format(small: ScheduleData) -> None:
    with pytest.raises(UnknownFormatError):
        export(small, "pdf", "R")


def test_exports_read_the_snapshot_they_are_given(fixed_time: datetime) -> None:
    """Nothing is cached between calls."""
    first = ScheduleData(dates=("D1",), classes=(ClassRow(name="A", subjects=("x",)),))
    second = ScheduleData(dates=("D9",), classes=(ClassRow(name="Z", subjects=("y",)),))
    export_text(first, "R", generated_at=fixed_time)
    content = export_text(second, "R", generated_at=fixed_time).content
    assert "D9" in content and "D1" not in content
