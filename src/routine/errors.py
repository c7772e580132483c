"""Error hierarchy for the routine editor.

Transient failures (should retry) are kept apart from permanent ones so the
class source client can hand TransientError to a tenacity retry decorator:

    @retry(retry=retry_if_exception_type(TransientError), stop=stop_after_attempt(2))
    def fetch_class_records(url: str):
        ...

Out-of-range indices and refused deletions are not errors; the schedule
operations treat them as no-ops.
"""


class RoutineError(Exception):
    """Base exception for all routine editor errors."""

    pass


class TransientError(RoutineError):
    """Temporary failure that may succeed on retry.

    Examples: connection refused, read timeout, 503 Service Unavailable.
    """

    pass


class FetchError(TransientError):
    """The class list could not be retrieved from the class source."""

    pass


class PermanentError(RoutineError):
    """Failure that won't succeed on retry."""

    pass


class InvalidResponseError(PermanentError):
    """The class source answered, but not with a usable class list.

    Raised for 4xx responses, bodies that are not JSON, bodies that don't
    match the expected shape, and responses carrying ``success: false``.
    """

    pass


class UnknownFormatError(PermanentError):
    """An export was requested in a format no exporter handles."""

    pass
