"""Class routine editor for the Scheduling project.

An editable classes x dates grid (RoutineTable over immutable ScheduleData
snapshots) with exporters for Word, HTML, print, text, CSV, DOCX and a
box-drawn clipboard table.
"""

from src.routine.exporters import ExportFormat, export
from src.routine.models import ClassRow, Payload, ScheduleData
from src.routine.table import RoutineTable

__all__ = [
    "RoutineTable",
    "ScheduleData",
    "ClassRow",
    "Payload",
    "ExportFormat",
    "export",
]
