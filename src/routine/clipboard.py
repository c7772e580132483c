"""Copy the routine to the clipboard as a box-drawn text table.

The clipboard itself belongs to the caller: ``write`` is the primary
clipboard writer, ``fallback`` a manual copy path (e.g. selecting a hidden
text area), and ``notify`` shows the user an acknowledgement.
"""

from collections.abc import Callable

from src.routine.exporters.text import export_clipboard
from src.routine.logging import get_logger
from src.routine.models import ScheduleData

log = get_logger(__name__)

COPIED_MESSAGE = "Schedule copied to clipboard! You can paste it anywhere."
COPIED_FALLBACK_MESSAGE = "Schedule copied to clipboard!"
COPY_FAILED_MESSAGE = "Could not copy schedule to clipboard."


def copy_to_clipboard(
    snapshot: ScheduleData,
    title: str,
    *,
    write: Callable[[str], None],
    fallback: Callable[[str], None],
    notify: Callable[[str], None],
) -> bool:
    """Write the box table through ``write``, falling back to ``fallback``.

    The user is told the copy succeeded on either path. Only when both
    writers raise is a failure message shown.

    Args:
        snapshot: Routine to copy.
        title: Title line of the table.
        write: Primary clipboard writer.
        fallback: Manual copy path tried when ``write`` raises.
        notify: Shows a message to the user.

    Returns:
        True if one of the writers succeeded.
    """
    text = export_clipboard(snapshot, title).content

    try:
        write(text)
    except Exception as e:
        log.warning("clipboard_write_failed", error=str(e), type=type(e).__name__)
    else:
        log.info("clipboard_copied", path="primary", chars=len(text))
        notify(COPIED_MESSAGE)
        return True

    try:
        fallback(text)
    except Exception as e:
        log.error("clipboard_fallback_failed", error=str(e), type=type(e).__name__)
        notify(COPY_FAILED_MESSAGE)
        return False

    log.info("clipboard_copied", path="fallback", chars=len(text))
    notify(COPIED_FALLBACK_MESSAGE)
    return True
