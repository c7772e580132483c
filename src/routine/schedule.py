"""Structural operations on a routine snapshot.

Every function takes a ScheduleData and returns the next one. Nothing is
mutated in place: an operation that changes something builds a new
snapshot, and an operation that is refused (stale index, deleting the last
date or class) returns the very same object it was given, so callers can
detect a no-op with ``new is old``.

Changes to the number of date columns all go through _reshape(), which
rebuilds every row against the new column list.
"""

from src.routine.logging import get_logger
from src.routine.models import CellKind, ClassRow, EditingCell, ScheduleData

log = get_logger(__name__)


def _in_range(index: int | None, length: int) -> bool:
    return index is not None and 0 <= index < length


def _reshape(
    snapshot: ScheduleData,
    dates: tuple[str, ...],
    *,
    drop: int | None = None,
) -> ScheduleData:
    """Rebuild every row so its subject count matches ``dates``.

    Args:
        snapshot: Snapshot whose rows are rebuilt.
        dates: The new date columns.
        drop: Column removed from every row before padding, if any.

    Returns:
        A new snapshot; new trailing columns are filled with empty subjects.
    """
    width = len(dates)
    classes = []
    for row in snapshot.classes:
        subjects = list(row.subjects)
        if drop is not None:
            del subjects[drop]
        subjects.extend([""] * (width - len(subjects)))
        classes.append(ClassRow(name=row.name, subjects=tuple(subjects[:width])))
    return ScheduleData(dates=dates, classes=tuple(classes))


def can_delete_date(snapshot: ScheduleData) -> bool:
    """A date column may only be deleted while at least two exist."""
    return len(snapshot.dates) > 1


def can_delete_class(snapshot: ScheduleData) -> bool:
    """A class row may only be deleted while at least two exist."""
    return len(snapshot.classes) > 1


def set_date_label(snapshot: ScheduleData, col_index: int, value: str) -> ScheduleData:
    """Replace the label of one date column."""
    if not _in_range(col_index, len(snapshot.dates)):
        log.debug("stale_index_ignored", op="set_date_label", col_index=col_index)
        return snapshot
    dates = list(snapshot.dates)
    dates[col_index] = value
    return snapshot.model_copy(update={"dates": tuple(dates)})


def set_class_name(snapshot: ScheduleData, row_index: int, value: str) -> ScheduleData:
    """Replace the name of one class row."""
    if not _in_range(row_index, len(snapshot.classes)):
        log.debug("stale_index_ignored", op="set_class_name", row_index=row_index)
        return snapshot
    classes = list(snapshot.classes)
    classes[row_index] = classes[row_index].model_copy(update={"name": value})
    return snapshot.model_copy(update={"classes": tuple(classes)})


def set_subject(
    snapshot: ScheduleData, row_index: int, col_index: int, value: str
) -> ScheduleData:
    """Replace the subject of one class under one date."""
    if not _in_range(row_index, len(snapshot.classes)) or not _in_range(
        col_index, len(snapshot.dates)
    ):
        log.debug(
            "stale_index_ignored",
            op="set_subject",
            row_index=row_index,
            col_index=col_index,
        )
        return snapshot
    classes = list(snapshot.classes)
    row = classes[row_index]
    subjects = list(row.subjects)
    subjects[col_index] = value
    classes[row_index] = row.model_copy(update={"subjects": tuple(subjects)})
    return snapshot.model_copy(update={"classes": tuple(classes)})


def add_class(snapshot: ScheduleData) -> ScheduleData:
    """Append a class row named "Class N" with an empty subject per date."""
    row = ClassRow(
        name=f"Class {len(snapshot.classes) + 1}",
        subjects=("",) * len(snapshot.dates),
    )
    return ScheduleData(dates=snapshot.dates, classes=snapshot.classes + (row,))


def add_date(snapshot: ScheduleData) -> ScheduleData:
    """Append a date column labelled "Date N" and an empty subject to every row."""
    dates = snapshot.dates + (f"Date {len(snapshot.dates) + 1}",)
    return _reshape(snapshot, dates)


def delete_date(snapshot: ScheduleData, col_index: int) -> ScheduleData:
    """Remove one date column from the header and from every row.

    Refused when it is the only column left or the index is stale.
    """
    if not can_delete_date(snapshot):
        log.debug("delete_refused", op="delete_date", dates=len(snapshot.dates))
        return snapshot
    if not _in_range(col_index, len(snapshot.dates)):
        log.debug("stale_index_ignored", op="delete_date", col_index=col_index)
        return snapshot
    dates = snapshot.dates[:col_index] + snapshot.dates[col_index + 1 :]
    return _reshape(snapshot, dates, drop=col_index)


def delete_class(snapshot: ScheduleData, row_index: int) -> ScheduleData:
    """Remove one class row.

    Refused when it is the only row left or the index is stale.
    """
    if not can_delete_class(snapshot):
        log.debug("delete_refused", op="delete_class", classes=len(snapshot.classes))
        return snapshot
    if not _in_range(row_index, len(snapshot.classes)):
        log.debug("stale_index_ignored", op="delete_class", row_index=row_index)
        return snapshot
    classes = snapshot.classes[:row_index] + snapshot.classes[row_index + 1 :]
    return ScheduleData(dates=snapshot.dates, classes=classes)


def apply_edit(snapshot: ScheduleData, cell: EditingCell) -> ScheduleData:
    """Write a committed edit into the snapshot through the matching setter."""
    if cell.kind is CellKind.DATE:
        return set_date_label(snapshot, cell.col_index, cell.value)
    if cell.kind is CellKind.CLASS_NAME:
        return set_class_name(snapshot, cell.row_index, cell.value)
    return set_subject(snapshot, cell.row_index, cell.col_index, cell.value)
