"""In-place cell editing.

CellEditController is a two-state machine (idle / editing) around at most
one EditingCell. It knows nothing about who owns the snapshot: commit()
takes the current snapshot and returns the edited one, and the owner decides
what to do with it.
"""

from src.routine.logging import get_logger
from src.routine.models import CellKind, EditingCell, ScheduleData
from src.routine.schedule import apply_edit

log = get_logger(__name__)

CONFIRM_KEY = "Enter"
ABORT_KEY = "Escape"


class CellEditController:
    """Tracks the single cell being edited and its pending value."""

    def __init__(self) -> None:
        self._cell: EditingCell | None = None

    @property
    def editing(self) -> bool:
        return self._cell is not None

    @property
    def pending(self) -> str | None:
        """Pending value of the edit in flight, None while idle."""
        return self._cell.value if self._cell is not None else None

    def is_editing(
        self,
        kind: CellKind,
        row_index: int | None = None,
        col_index: int | None = None,
    ) -> bool:
        """Whether the given cell is the one being edited."""
        cell = self._cell
        return (
            cell is not None
            and cell.kind is CellKind(kind)
            and cell.row_index == row_index
            and cell.col_index == col_index
        )

    def begin(
        self,
        kind: CellKind,
        row_index: int | None = None,
        col_index: int | None = None,
        current_value: str = "",
    ) -> None:
        """Start editing a cell, seeding the pending value.

        An edit already in flight is dropped without being applied.
        """
        if self._cell is not None:
            log.debug("edit_abandoned", kind=self._cell.kind.value)
        self._cell = EditingCell(
            kind=kind,
            row_index=row_index,
            col_index=col_index,
            value=current_value,
        )

    def update_pending(self, value: str) -> None:
        if self._cell is None:
            return
        self._cell = self._cell.model_copy(update={"value": value})

    def commit(self, snapshot: ScheduleData) -> ScheduleData | None:
        """Apply the pending value and go back to idle.

        Args:
            snapshot: The snapshot the edit applies to.

        Returns:
            The edited snapshot, or None if nothing was being edited.
        """
        cell = self._cell
        if cell is None:
            return None
        self._cell = None
        log.debug(
            "edit_committed",
            kind=cell.kind.value,
            row_index=cell.row_index,
            col_index=cell.col_index,
        )
        return apply_edit(snapshot, cell)

    def cancel(self) -> None:
        """Drop the pending value without touching any snapshot."""
        self._cell = None

    def handle_key(self, key: str, snapshot: ScheduleData) -> ScheduleData | None:
        """Route a key press from the edit surface.

        Enter commits and returns the edited snapshot, Escape cancels. Any
        other key is left to the input and returns None.
        """
        if key == CONFIRM_KEY:
            return self.commit(snapshot)
        if key == ABORT_KEY:
            self.cancel()
        return None

    def blur(self, snapshot: ScheduleData) -> ScheduleData | None:
        """The edit surface lost focus: commit."""
        return self.commit(snapshot)
