from __future__ import annotations

import asyncio
import random
from datetime import date
from decimal import Decimal
from typing import Any, Mapping

import pytest
import requests

from constants.keys import FieldKey
from wizard.submission import (
    CallbackSubmitter,
    HttpSubmitter,
    SubmissionError,
    SubmissionPipeline,
    build_payload,
    default_submitter,
    generate_reference_number,
)


class _FakeResponse:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code


class _FakeSession:
    def __init__(self, status_code: int = 201, exc: Exception | None = None) -> None:
        self.status_code = status_code
        self.exc = exc
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        return _FakeResponse(self.status_code)


def test_reference_number_format() -> None:
    reference = generate_reference_number("APP", clock=lambda: 1_700_000_000.5, rng=random.Random(1))

    assert reference.startswith("APP1700000000500")
    assert len(reference) == len("APP") + 13 + 4
    assert reference[3:].isdigit()


def test_reference_suffix_is_zero_padded() -> None:
    class _Seven(random.Random):
        def randint(self, a: int, b: int) -> int:
            return 7

    assert generate_reference_number("CMP", clock=lambda: 1.0, rng=_Seven()) == "CMP10000007"


def test_build_payload_adds_reference_and_form_type() -> None:
    record = {
        FieldKey.FULL_NAME: "Ahmed Ali",
        FieldKey.DATE_OF_BIRTH: date(1990, 5, 17),
        FieldKey.MONTHLY_INCOME: Decimal("8500.50"),
    }

    payload = build_payload(record, "APP123", "application")

    assert payload == {
        "fullName": "Ahmed Ali",
        "dateOfBirth": "1990-05-17",
        "monthlyIncome": 8500.5,
        "referenceNumber": "APP123",
        "formType": "application",
    }


def test_http_submitter_posts_json() -> None:
    session = _FakeSession(status_code=201)
    submitter = HttpSubmitter(
        "https://leads.test/api", timeout=3.0, session=session, headers={"Authorization": "Bearer t"}
    )

    asyncio.run(submitter({"fullName": "Ahmed", "referenceNumber": "INQ1"}))

    (call,) = session.calls
    assert call["url"] == "https://leads.test/api"
    assert call["json"] == {"fullName": "Ahmed", "referenceNumber": "INQ1"}
    assert call["timeout"] == 3.0
    assert call["headers"] == {"Content-Type": "application/json", "Authorization": "Bearer t"}


def test_http_submitter_rejects_non_success_status() -> None:
    submitter = HttpSubmitter("https://leads.test/api", session=_FakeSession(status_code=503))

    with pytest.raises(SubmissionError) as excinfo:
        asyncio.run(submitter({"referenceNumber": "INQ1"}))

    assert excinfo.value.status_code == 503


def test_http_submitter_wraps_transport_errors() -> None:
    session = _FakeSession(exc=requests.ConnectionError("connection refused"))
    submitter = HttpSubmitter("https://leads.test/api", session=session)

    with pytest.raises(SubmissionError, match="connection refused") as excinfo:
        asyncio.run(submitter({"referenceNumber": "INQ1"}))

    assert excinfo.value.status_code is None


def test_callback_submitter_accepts_sync_and_async_handlers() -> None:
    seen: list[tuple[Mapping[str, Any], str]] = []

    def sync_handler(record: Mapping[str, Any], reference: str) -> None:
        seen.append((record, reference))

    async def async_handler(record: Mapping[str, Any], reference: str) -> None:
        seen.append((record, reference))

    payload = {"fullName": "Ahmed", "referenceNumber": "INQ9", "formType": "contact"}
    asyncio.run(CallbackSubmitter(sync_handler)(payload))
    asyncio.run(CallbackSubmitter(async_handler)(payload))

    assert seen == [({"fullName": "Ahmed"}, "INQ9"), ({"fullName": "Ahmed"}, "INQ9")]


def test_pipeline_reports_success(submitter) -> None:
    outcome = asyncio.run(SubmissionPipeline(submitter).run({FieldKey.FULL_NAME: "Ahmed"}, "INQ1", "contact"))

    assert outcome.ok is True
    assert outcome.reference_number == "INQ1"
    assert outcome.error is None
    assert submitter.payloads == [{"fullName": "Ahmed", "referenceNumber": "INQ1", "formType": "contact"}]


def test_pipeline_turns_exceptions_into_failures(caplog: pytest.LogCaptureFixture) -> None:
    async def exploding(payload: dict[str, Any]) -> None:
        raise ValueError("unexpected response body")

    outcome = asyncio.run(SubmissionPipeline(exploding).run({}, "CMP1", "complaint"))

    assert outcome.ok is False
    assert outcome.reference_number == "CMP1"
    assert outcome.error == "unexpected response body"
    assert "Lead submission CMP1 failed" in caplog.text


def test_default_submitter_requires_endpoint() -> None:
    with pytest.raises(RuntimeError, match="LEADS_API_URL"):
        default_submitter(None, timeout=5.0)


def test_default_submitter_sets_bearer_token() -> None:
    submitter = default_submitter("https://leads.test/api", timeout=5.0, token="secret")

    assert isinstance(submitter, HttpSubmitter)
    assert submitter.timeout == 5.0
    assert submitter._headers["Authorization"] == "Bearer secret"
