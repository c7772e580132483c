"""Helpers shared by the exporters."""

import re
from datetime import datetime

HEADER_LABEL = "Class / Date"
EMPTY_SUBJECT = "-"  # human-readable formats only; CSV leaves the field empty

_WHITESPACE_RE = re.compile(r"\s+")


def export_filename(title: str, suffix: str) -> str:
    """Suggested filename: the title with whitespace runs turned into "_"."""
    return f"{_WHITESPACE_RE.sub('_', title)}{suffix}"


def display_subject(subject: str) -> str:
    return subject or EMPTY_SUBJECT


def resolve_time(generated_at: datetime | None) -> datetime:
    return generated_at if generated_at is not None else datetime.now()


def format_date(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d")


def format_time(moment: datetime) -> str:
    return moment.strftime("%H:%M:%S")
