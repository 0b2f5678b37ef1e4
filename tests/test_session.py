from __future__ import annotations

import asyncio
from typing import Any

import pytest
import streamlit as st

import config
from constants.keys import FieldKey, FormType, StateKeys, SubmissionStatus
from state import session
from wizard.events import NullEventSink, form_started


def test_prefill_from_query_maps_calculator_params() -> None:
    prefill = session.prefill_from_query({"amount": "50000", "tenure": "36", "financing": "auto", "lang": "en"})

    assert prefill == {"requestedAmount": 50000, "tenure": 36, "financingType": "auto"}


def test_prefill_from_query_ignores_bad_numbers(caplog: pytest.LogCaptureFixture) -> None:
    prefill = session.prefill_from_query({"amount": "lots", "tenure": ""})

    assert prefill == {}
    assert "Ignoring non-numeric pre-fill amount" in caplog.text


@pytest.mark.parametrize("raw", ["inf", "-inf", "1e999", "nan"])
def test_prefill_from_query_ignores_non_finite_numbers(raw: str, caplog: pytest.LogCaptureFixture) -> None:
    prefill = session.prefill_from_query({"amount": raw, "tenure": raw, "financing": "personal"})

    assert prefill == {"financingType": "personal"}
    assert "Ignoring non-numeric pre-fill tenure" in caplog.text


def test_load_wizard_starts_and_stores(pipeline, sink) -> None:
    wizard = session.load_wizard(
        FormType.APPLICATION, locale="en", pipeline=pipeline, sink=sink, prefill={"requestedAmount": 20000}
    )

    assert wizard.state.record[FieldKey.REQUESTED_AMOUNT] == 20000
    assert st.session_state[StateKeys.WIZARD]["form_type"] == "application"
    assert sink.actions == ["form_started"]


def test_load_wizard_restores_same_form_type(pipeline, sink, contact_values: dict[str, Any]) -> None:
    first = session.load_wizard(FormType.CONTACT, locale="en", pipeline=pipeline, sink=sink)
    for key, value in contact_values.items():
        first.edit(key, value)
    session.store_wizard(first)

    again = session.load_wizard(FormType.CONTACT, locale="ar", pipeline=pipeline, sink=sink)

    assert again.state == first.state
    assert again.state.locale == "en"
    assert sink.actions == ["form_started"]


def test_load_wizard_restarts_for_other_form_type(pipeline, sink) -> None:
    session.load_wizard(FormType.CONTACT, locale="en", pipeline=pipeline, sink=sink)

    wizard = session.load_wizard(FormType.COMPLAINT, locale="en", pipeline=pipeline, sink=sink)

    assert wizard.state.form_type is FormType.COMPLAINT
    assert sink.actions == ["form_started", "form_started"]


def test_load_wizard_discards_unreadable_state(pipeline, sink) -> None:
    st.session_state[StateKeys.WIZARD] = {"form_type": "contact", "locale": "en", "step_index": 5}

    wizard = session.load_wizard(FormType.CONTACT, locale="en", pipeline=pipeline, sink=sink)

    assert wizard.state.step_index == 0
    assert st.session_state[StateKeys.WIZARD]["step_index"] == 0


def test_stored_submission_survives_rerun(pipeline, contact_values: dict[str, Any]) -> None:
    wizard = session.load_wizard(FormType.CONTACT, locale="en", pipeline=pipeline, sink=NullEventSink())
    for key, value in contact_values.items():
        wizard.edit(key, value)
    asyncio.run(wizard.submit())
    session.store_wizard(wizard)

    restored = session.load_wizard(FormType.CONTACT, locale="en", pipeline=pipeline, sink=NullEventSink())

    assert restored.state.status is SubmissionStatus.SUCCEEDED
    assert restored.state.reference_number == wizard.state.reference_number


def test_event_sink_honours_analytics_consent(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setattr(config, "ANALYTICS_ENABLED", True)
    caplog.set_level("INFO", logger="lead_wizard.analytics")
    event_sink = session.build_event_sink()

    event_sink(form_started("contact"))
    assert "[Analytics]" not in caplog.text

    st.session_state[StateKeys.ANALYTICS_CONSENT] = True
    event_sink(form_started("contact"))
    assert "[Analytics]" in caplog.text


def test_event_sink_disabled_by_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "ANALYTICS_ENABLED", False)

    assert isinstance(session.build_event_sink(), NullEventSink)


def test_ensure_session_id_is_stable_across_reruns() -> None:
    first = session.ensure_session_id()

    assert first
    assert st.session_state[StateKeys.SESSION_ID] == first
    assert session.ensure_session_id() == first


def test_build_pipeline_is_reused_across_reruns(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "LEADS_API_URL", "https://crm.test/leads")
    session._shared_pipeline.clear()

    first = session.build_pipeline()

    assert session.build_pipeline() is first
    monkeypatch.setattr(config, "LEADS_API_URL", "https://other.test/leads")
    assert session.build_pipeline() is not first
    session._shared_pipeline.clear()


def test_build_pipeline_requires_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "LEADS_API_URL", None)

    with pytest.raises(RuntimeError, match="LEADS_API_URL"):
        session.build_pipeline()
