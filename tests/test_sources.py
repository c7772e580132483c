"""Tests for the class source client (requests mocked)."""

from unittest.mock import MagicMock

import pytest
import requests
from tenacity import wait_none

from src.routine.errors import FetchError, InvalidResponseError
from src.routine.sources import fetch_class_names, fetch_class_records

URL = "http://localhost:8000/api/class-sections"

# Same retry policy without the pause between attempts
fetch = fetch_class_records.retry_with(wait=wait_none())


def _response(status: int = 200, body: object = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


def _session(*responses: object) -> MagicMock:
    session = MagicMock()
    session.get.side_effect = list(responses)
    return session


GOOD_BODY = {
    "success": True,
    "count": 2,
    "data": [
        {
            "_id": "64f0",
            "name": "Grade 1",
            "sections": ["A", "B"],
            "createdAt": "2025-01-01T00:00:00Z",
            "updatedAt": "2025-01-01T00:00:00Z",
        },
        {"_id": "64f1", "name": "Grade 2", "sections": []},
    ],
}


def test_fetch_parses_records() -> None:
    session = _session(_response(body=GOOD_BODY))
    records = fetch(URL, timeout=3, session=session)

    assert [r.name for r in records] == ["Grade 1", "Grade 2"]
    assert records[0].id == "64f0"
    assert records[0].sections == ["A", "B"]
    session.get.assert_called_once_with(URL, timeout=3)


def test_fetch_class_names() -> None:
    session = _session(_response(body=GOOD_BODY))
    assert fetch_class_names(URL, session=session) == ["Grade 1", "Grade 2"]


def test_transport_error_is_retried_then_raised() -> None:
    session = _session(
        requests.ConnectionError("refused"), requests.ConnectionError("refused")
    )
    with pytest.raises(FetchError):
        fetch(URL, session=session)
    assert session.get.call_count == 2


def test_transient_error_recovers_on_second_attempt() -> None:
    session = _session(requests.Timeout("slow"), _response(body=GOOD_BODY))
    assert len(fetch(URL, session=session)) == 2
    assert session.get.call_count == 2


def test_server_error_is_transient() -> None:
    session = _session(_response(status=503), _response(status=503))
    with pytest.raises(FetchError):
        fetch(URL, session=session)
    assert session.get.call_count == 2


@pytest.mark.parametrize(
    "response",
    [
        _response(status=404),
        _response(body=ValueError("not json")),
        _response(body={"success": False, "data": []}),
        _response(body={"data": [{"name": "Grade 1"}]}),
        _response(body={"success": True, "data": [{"sections": []}]}),
    ],
    ids=["http_404", "not_json", "success_false", "missing_success", "missing_name"],
)
def test_unusable_response_is_permanent(response: MagicMock) -> None:
    session = _session(response, response)
    with pytest.raises(InvalidResponseError):
        fetch(URL, session=session)
    assert session.get.call_count == 1
