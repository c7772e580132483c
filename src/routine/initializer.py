"""Seed a routine from the class list when the caller brings no data.

The initializer settles exactly once. After that, whether because caller
data was supplied, because a class list was applied, or because the user
already edited the routine, later deliveries are ignored so a late or
repeated class list never overwrites work in progress.
"""

from collections.abc import Iterable

from src.routine.logging import get_logger
from src.routine.models import ClassRecord, ClassRow, ScheduleData

log = get_logger(__name__)

PLACEHOLDER_DATE = "Select Date"


def build_from_records(records: Iterable[ClassRecord | str]) -> ScheduleData:
    """One "Select Date" column and one blank row per class, in order.

    Raises:
        ValueError: If there are no classes; a routine keeps at least one row.
    """
    names = [r if isinstance(r, str) else r.name for r in records]
    if not names:
        raise ValueError("cannot build a routine from an empty class list")
    return ScheduleData(
        dates=(PLACEHOLDER_DATE,),
        classes=tuple(ClassRow(name=name, subjects=("",)) for name in names),
    )


class ScheduleInitializer:
    """Decides the starting snapshot of a routine table."""

    def __init__(self, data: ScheduleData | None = None) -> None:
        self._caller_data = data
        self._settled = data is not None

    @property
    def settled(self) -> bool:
        return self._settled

    @property
    def initial_snapshot(self) -> ScheduleData:
        """Caller data if any, otherwise the blank default."""
        if self._caller_data is not None:
            return self._caller_data
        return ScheduleData.default()

    def mark_edited(self) -> None:
        """The routine was changed by the user; never seed it afterwards."""
        if not self._settled:
            log.debug("initializer_settled", reason="user_edit")
        self._settled = True

    def deliver(self, records: list[ClassRecord]) -> ScheduleData | None:
        """Offer a fetched class list.

        Returns:
            The seeded snapshot the first time a non-empty list arrives
            before anything else settled the routine, otherwise None.
        """
        if self._settled:
            log.debug("class_list_ignored", reason="already_settled", classes=len(records))
            return None
        if not records:
            log.info("class_list_ignored", reason="empty")
            return None

        snapshot = build_from_records(records)
        self._settled = True
        log.info("schedule_initialized", classes=len(snapshot.classes))
        return snapshot
