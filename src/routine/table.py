"""RoutineTable - the editable routine component.

Owns the current snapshot and wires together the schedule operations, the
cell edit controller, the initializer and the exporters. Every change that
actually alters the snapshot is pushed to the ``on_change`` callback.

Mutations are only reachable when the table is editable and no class list
fetch is in flight.
"""

from collections.abc import Callable
from datetime import datetime
from functools import partial

from pydantic import BaseModel

from src.routine import schedule
from src.routine.clipboard import copy_to_clipboard
from src.routine.config import get_config
from src.routine.editing import CellEditController
from src.routine.errors import RoutineError
from src.routine.exporters import ExportFormat, export
from src.routine.exporters.common import EMPTY_SUBJECT, HEADER_LABEL
from src.routine.initializer import ScheduleInitializer
from src.routine.logging import get_logger
from src.routine.models import CellKind, ClassRecord, Payload, ScheduleData
from src.routine.sources import fetch_class_records

log = get_logger(__name__)

EDIT_PROMPT = "Click to edit"

USAGE_HINTS = (
    "Click on any cell to edit. Press Enter to save or Escape to cancel.",
    "Click the × button to delete dates or classes (minimum 1 required).",
    "Use export buttons to download in universal formats that work everywhere.",
    "DOC export creates Microsoft Word compatible documents.",
)


class RenderedCell(BaseModel):
    """What one cell of the table shows and which affordances it offers."""

    kind: CellKind | None  # None for the "Class / Date" corner
    text: str
    row_index: int | None = None
    col_index: int | None = None
    editing: bool = False
    deletable: bool = False


class RoutineTable:
    """Editable class routine with export and clipboard support."""

    def __init__(
        self,
        data: ScheduleData | None = None,
        *,
        title: str | None = None,
        compact: bool = False,
        editable: bool = True,
        on_change: Callable[[ScheduleData], None] | None = None,
    ) -> None:
        """Initialize RoutineTable.

        Args:
            data: Starting routine. When given, a fetched class list never
                replaces it.
            title: Display and export title (defaults to the configured one).
            compact: Dense layout; affects hints only, never the data.
            editable: Whether edits and structural changes are allowed.
            on_change: Called with every new snapshot.
        """
        self.title = title if title is not None else get_config().routine_title
        self.compact = compact
        self.editable = editable
        self._on_change = on_change
        self._initializer = ScheduleInitializer(data)
        self._snapshot = self._initializer.initial_snapshot
        self._editor = CellEditController()
        self._loading = False

    @property
    def snapshot(self) -> ScheduleData:
        return self._snapshot

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def editing(self) -> bool:
        return self._editor.editing

    # --- state plumbing ---

    def _can_mutate(self, op: str) -> bool:
        if not self.editable:
            log.debug("mutation_blocked", op=op, reason="read_only")
            return False
        if self._loading:
            log.debug("mutation_blocked", op=op, reason="loading")
            return False
        return True

    def _publish(self, snapshot: ScheduleData, *, user_edit: bool = True) -> bool:
        if snapshot is self._snapshot:
            return False
        self._snapshot = snapshot
        if user_edit:
            self._initializer.mark_edited()
        if self._on_change is not None:
            self._on_change(snapshot)
        return True

    def load_classes(self, fetch: Callable[[], list[ClassRecord]] | None = None) -> bool:
        """Fetch the class list and seed the routine with it.

        A failed fetch is logged and leaves the current routine as it was.
        An edit already open on a cell counts as user work, so the class
        list is not applied over it.

        Args:
            fetch: Returns the class records. Defaults to the configured
                class-sections endpoint.

        Returns:
            True if the routine was seeded from the class list.
        """
        if fetch is None:
            config = get_config()
            fetch = partial(
                fetch_class_records,
                config.class_sections_url,
                timeout=config.request_timeout_seconds,
            )

        self._loading = True
        try:
            records = fetch()
        except RoutineError as e:
            log.error("class_fetch_failed", error=str(e), type=type(e).__name__)
            return False
        finally:
            self._loading = False

        if self._editor.editing:
            self._initializer.mark_edited()
        seeded = self._initializer.deliver(records)
        if seeded is None:
            return False
        return self._publish(seeded, user_edit=False)

    # --- cell editing ---

    def value_at(
        self,
        kind: CellKind,
        row_index: int | None = None,
        col_index: int | None = None,
    ) -> str:
        """Current committed value of a cell ("" for a stale address)."""
        snapshot = self._snapshot
        kind = CellKind(kind)
        try:
            if kind is CellKind.DATE:
                return snapshot.dates[col_index] if col_index >= 0 else ""
            if kind is CellKind.CLASS_NAME:
                return snapshot.classes[row_index].name if row_index >= 0 else ""
            if row_index < 0 or col_index < 0:
                return ""
            return snapshot.classes[row_index].subjects[col_index]
        except (IndexError, TypeError):
            return ""

    def begin_edit(
        self,
        kind: CellKind,
        row_index: int | None = None,
        col_index: int | None = None,
        current_value: str | None = None,
    ) -> None:
        if not self._can_mutate("begin_edit"):
            return
        if current_value is None:
            current_value = self.value_at(kind, row_index, col_index)
        self._editor.begin(kind, row_index, col_index, current_value)

    def update_pending(self, value: str) -> None:
        self._editor.update_pending(value)

    def commit_edit(self) -> bool:
        if not self._can_mutate("commit_edit"):
            return False
        edited = self._editor.commit(self._snapshot)
        return edited is not None and self._publish(edited)

    def cancel_edit(self) -> None:
        self._editor.cancel()

    def press_key(self, key: str) -> bool:
        """Forward a key from the edit input (Enter commits, Escape cancels)."""
        if not self._can_mutate("press_key"):
            return False
        edited = self._editor.handle_key(key, self._snapshot)
        return edited is not None and self._publish(edited)

    def blur(self) -> bool:
        return self.commit_edit()

    # --- structure ---

    def add_class(self) -> bool:
        if not self._can_mutate("add_class"):
            return False
        changed = self._publish(schedule.add_class(self._snapshot))
        log.info("class_added", classes=len(self._snapshot.classes))
        return changed

    def add_date(self) -> bool:
        if not self._can_mutate("add_date"):
            return False
        changed = self._publish(schedule.add_date(self._snapshot))
        log.info("date_added", dates=len(self._snapshot.dates))
        return changed

    def delete_date(self, col_index: int) -> bool:
        if not self._can_mutate("delete_date"):
            return False
        changed = self._publish(schedule.delete_date(self._snapshot, col_index))
        if changed:
            log.info(
                "date_deleted", col_index=col_index, dates=len(self._snapshot.dates)
            )
        return changed

    def delete_class(self, row_index: int) -> bool:
        if not self._can_mutate("delete_class"):
            return False
        changed = self._publish(schedule.delete_class(self._snapshot, row_index))
        if changed:
            log.info(
                "class_deleted", row_index=row_index, classes=len(self._snapshot.classes)
            )
        return changed

    # --- presentation ---

    def _cell(
        self,
        kind: CellKind,
        value: str,
        row_index: int | None = None,
        col_index: int | None = None,
        deletable: bool = False,
    ) -> RenderedCell:
        editing = self._editor.is_editing(kind, row_index, col_index)
        if editing:
            text = self._editor.pending
        else:
            text = value or (EDIT_PROMPT if self.editable else EMPTY_SUBJECT)
        return RenderedCell(
            kind=kind,
            text=text,
            row_index=row_index,
            col_index=col_index,
            editing=editing,
            deletable=self.editable and deletable,
        )

    def render(self) -> list[list[RenderedCell]]:
        """The table as rows of cells, header row first."""
        snapshot = self._snapshot
        date_deletable = schedule.can_delete_date(snapshot)
        class_deletable = schedule.can_delete_class(snapshot)

        header = [RenderedCell(kind=None, text=HEADER_LABEL)]
        header.extend(
            self._cell(CellKind.DATE, date, col_index=i, deletable=date_deletable)
            for i, date in enumerate(snapshot.dates)
        )
        rows = [header]
        for r, row in enumerate(snapshot.classes):
            cells = [
                self._cell(
                    CellKind.CLASS_NAME, row.name, row_index=r, deletable=class_deletable
                )
            ]
            cells.extend(
                self._cell(CellKind.SUBJECT, subject, row_index=r, col_index=c)
                for c, subject in enumerate(row.subjects)
            )
            rows.append(cells)
        return rows

    def actions(self) -> list[str]:
        """Toolbar actions offered in the current mode."""
        names = ["add_class", "add_date"] if self.editable else []
        names.extend(
            [
                "copy",
                "export_doc",
                "export_docx",
                "export_html",
                "print",
                "export_csv",
                "export_text",
            ]
        )
        return names

    def hints(self) -> list[str]:
        if not self.editable or self.compact:
            return []
        return list(USAGE_HINTS)

    # --- output ---

    def export(
        self, fmt: ExportFormat | str, *, generated_at: datetime | None = None
    ) -> Payload:
        return export(self._snapshot, fmt, self.title, generated_at=generated_at)

    def copy(
        self,
        *,
        write: Callable[[str], None],
        fallback: Callable[[str], None],
        notify: Callable[[str], None],
    ) -> bool:
        return copy_to_clipboard(
            self._snapshot, self.title, write=write, fallback=fallback, notify=notify
        )
