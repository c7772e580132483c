"""Pydantic models for routine data.

ScheduleData and ClassRow are frozen: every edit produces a new snapshot and
an old snapshot can be handed to an exporter or a change listener without
being mutated underneath it.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ClassRow(BaseModel):
    """One row of the routine: a class and its subject under each date."""

    name: str = ""
    subjects: tuple[str, ...] = ()  # subjects[i] sits under dates[i]

    model_config = {"frozen": True}


class ScheduleData(BaseModel):
    """A complete routine snapshot.

    Every row carries exactly one subject per date column. Constructing a
    snapshot that breaks this raises a ValidationError.
    """

    dates: tuple[str, ...]
    classes: tuple[ClassRow, ...]

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_rectangular(self) -> "ScheduleData":
        width = len(self.dates)
        for index, row in enumerate(self.classes):
            if len(row.subjects) != width:
                raise ValueError(
                    f"class {index} ({row.name!r}) has {len(row.subjects)} "
                    f"subjects for {width} dates"
                )
        return self

    @classmethod
    def default(cls) -> "ScheduleData":
        """One blank date column and one blank class row."""
        return cls(dates=("",), classes=(ClassRow(name="", subjects=("",)),))


class CellKind(str, Enum):
    """Which part of the grid an edit targets."""

    DATE = "date"
    CLASS_NAME = "className"
    SUBJECT = "subject"


class EditingCell(BaseModel):
    """The single cell currently being edited, with its pending value.

    Date cells use col_index only, class-name cells row_index only, subject
    cells both.
    """

    kind: CellKind
    row_index: int | None = None
    col_index: int | None = None
    value: str = ""

    model_config = {"frozen": True}


class ClassRecord(BaseModel):
    """A class identity as delivered by the class-sections endpoint."""

    id: str | None = Field(default=None, alias="_id")
    name: str
    sections: list[str] = Field(default_factory=list)

    model_config = {"extra": "ignore", "populate_by_name": True}


class ClassSectionsResponse(BaseModel):
    """Envelope of the class-sections endpoint."""

    success: bool
    count: int = 0
    data: list[ClassRecord] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class Payload(BaseModel):
    """A finished export, ready for a save or clipboard sink."""

    mime_type: str
    filename: str
    content: str | bytes

    model_config = {"frozen": True}
