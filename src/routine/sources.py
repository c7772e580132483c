"""Class source client.

Fetches the list of classes that seeds a new routine from the
class-sections endpoint, which answers:

    {"success": true, "count": 2,
     "data": [{"_id": "...", "name": "Grade 1", "sections": ["A", "B"]}, ...]}

Network trouble is a TransientError and is retried once; a response that
arrives but is unusable is an InvalidResponseError and is not.
"""

import requests
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from src.routine.errors import FetchError, InvalidResponseError, TransientError
from src.routine.logging import get_logger
from src.routine.models import ClassRecord, ClassSectionsResponse

logger = get_logger(__name__)


@retry(
    stop=stop_after_attempt(2),
    wait=wait_fixed(2),
    retry=retry_if_exception_type(TransientError),
    reraise=True,
)
def fetch_class_records(
    url: str,
    *,
    timeout: float = 10.0,
    session: requests.Session | None = None,
) -> list[ClassRecord]:
    """Fetch the class list from the class-sections endpoint.

    Args:
        url: Full URL of the endpoint.
        timeout: Per-request timeout in seconds.
        session: Optional requests session (shares connection pooling and
            headers with the caller).

    Returns:
        Class records in the order the endpoint listed them.

    Raises:
        FetchError: Transport failure, timeout or 5xx (after retry).
        InvalidResponseError: 4xx, non-JSON body, unexpected shape, or
            ``success: false``.
    """
    http = session or requests
    logger.info("class_fetch_started", url=url)

    try:
        resp = http.get(url, timeout=timeout)
    except requests.RequestException as e:
        logger.warning("class_fetch_transport_error", url=url, error=str(e))
        raise FetchError(f"Failed to fetch classes: {e}") from e

    if resp.status_code >= 500:
        logger.warning("class_fetch_server_error", url=url, status=resp.status_code)
        raise FetchError(f"Class source returned {resp.status_code}")
    if resp.status_code != 200:
        raise InvalidResponseError(f"Class source returned {resp.status_code}")

    try:
        body = resp.json()
    except ValueError as e:
        raise InvalidResponseError("Class source did not return JSON") from e

    try:
        result = ClassSectionsResponse.model_validate(body)
    except ValidationError as e:
        raise InvalidResponseError(f"Invalid API response format: {e}") from e

    if not result.success:
        raise InvalidResponseError("Class source reported success=false")

    logger.info("class_fetch_succeeded", url=url, classes=len(result.data))
    return result.data


def fetch_class_names(
    url: str,
    *,
    timeout: float = 10.0,
    session: requests.Session | None = None,
) -> list[str]:
    """Same as fetch_class_records, keeping only the class names."""
    records = fetch_class_records(url, timeout=timeout, session=session)
    return [record.name for record in records]
