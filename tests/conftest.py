from pathlib import Path
import sys
from dataclasses import dataclass
import itertools
from typing import Any, Callable

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import config
from wizard.events import TrackingEvent
from wizard.submission import LeadPayload, SubmissionError, SubmissionPipeline


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin settings that validators and the controller read at call time."""

    monkeypatch.setattr(config, "MIN_MONTHLY_INCOME", 4000.0, raising=False)
    monkeypatch.setattr(config, "STRICT_NATIONAL_ID", False, raising=False)
    monkeypatch.setattr(config, "REUSE_REFERENCE_ON_RETRY", False, raising=False)
    monkeypatch.setattr(config, "DEFAULT_LANGUAGE", "en", raising=False)
    yield


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


class RecordingSink:
    """Event sink that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: list[TrackingEvent] = []

    def __call__(self, event: TrackingEvent) -> None:
        self.events.append(event)

    @property
    def actions(self) -> list[str]:
        return [event.action for event in self.events]


class FakeSubmitter:
    """Async submitter that records payloads and fails on demand."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.payloads: list[LeadPayload] = []

    async def __call__(self, payload: LeadPayload) -> None:
        self.payloads.append(payload)
        if self.fail:
            raise SubmissionError("Lead submission rejected with HTTP 503", status_code=503)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def submitter() -> FakeSubmitter:
    return FakeSubmitter()


@pytest.fixture
def pipeline(submitter: FakeSubmitter) -> SubmissionPipeline:
    return SubmissionPipeline(submitter)


@pytest.fixture
def contact_values() -> dict[str, Any]:
    return {
        "fullName": "Ahmed Ali",
        "phone": "0512345678",
        "email": "a@b.com",
        "subject": "Hi",
        "message": "I need help with financing",
        "consentPDPL": True,
    }


@pytest.fixture
def reference_factory() -> Callable[[str], str]:
    """Deterministic reference numbers: ``<prefix>1``, ``<prefix>2`` ..."""

    counter = itertools.count(1)

    def _factory(prefix: str) -> str:
        return f"{prefix}{next(counter)}"

    return _factory
