"""Shared fixtures for routine tests."""

from datetime import datetime

import pytest

from src.routine.models import ClassRow, ScheduleData


@pytest.fixture
def two_by_two() -> ScheduleData:
    """Two dates, two classes, one empty subject."""
    return ScheduleData(
        dates=("2026-03-02", "2026-03-04"),
        classes=(
            ClassRow(name="Grade 1", subjects=("Math", "Science")),
            ClassRow(name="Grade 2", subjects=("English", "")),
        ),
    )


@pytest.fixture
def small() -> ScheduleData:
    return ScheduleData(
        dates=("D1", "D2"),
        classes=(ClassRow(name="A", subjects=("m", "s")),),
    )


@pytest.fixture
def fixed_time() -> datetime:
    return datetime(2026, 10, 18, 9, 30, 0)
