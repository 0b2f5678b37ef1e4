"""Keep the wizard snapshot in ``st.session_state`` across Streamlit reruns."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

import streamlit as st
from pydantic import ValidationError

import config as app_config
from constants.keys import FieldKey, FormType, StateKeys
from wizard.controller import LeadWizard
from wizard.events import (
    CompositeEventSink,
    ConsentAwareSink,
    EventSink,
    LoggingEventSink,
    NullEventSink,
    TracingEventSink,
)
from wizard.submission import SubmissionPipeline, default_submitter

logger = logging.getLogger(__name__)

_NUMERIC_PREFILL: Mapping[str, FieldKey] = {
    "amount": FieldKey.REQUESTED_AMOUNT,
    "tenure": FieldKey.TENURE,
}


def ensure_session_id() -> str:
    """Return the browser session identifier, creating one on first use."""

    session_id = st.session_state.get(StateKeys.SESSION_ID)
    if not session_id:
        session_id = uuid.uuid4().hex
        st.session_state[StateKeys.SESSION_ID] = session_id
    return session_id


def has_analytics_consent() -> bool:
    return bool(st.session_state.get(StateKeys.ANALYTICS_CONSENT, False))


def build_event_sink() -> EventSink:
    if not app_config.ANALYTICS_ENABLED:
        return NullEventSink()
    return ConsentAwareSink(CompositeEventSink([LoggingEventSink(), TracingEventSink()]), has_analytics_consent)


def build_pipeline() -> SubmissionPipeline:
    """Return the HTTP submission pipeline shared by all reruns.

    Raises:
        RuntimeError: If ``LEADS_API_URL`` is not configured.
    """

    return _shared_pipeline(
        app_config.LEADS_API_URL,
        app_config.SUBMIT_TIMEOUT_SECONDS,
        app_config.LEADS_API_TOKEN,
    )


@st.cache_resource(show_spinner=False)
def _shared_pipeline(endpoint: str | None, timeout: float, token: str | None) -> SubmissionPipeline:
    # One pooled requests.Session per endpoint settings, not one per rerun.
    return SubmissionPipeline(default_submitter(endpoint, timeout=timeout, token=token))


def prefill_from_query(params: Mapping[str, Any]) -> dict[str, Any]:
    """Translate calculator query parameters (``amount``, ``tenure``, ``financing``) into pre-fill values."""

    prefill: dict[str, Any] = {}
    for param, key in _NUMERIC_PREFILL.items():
        raw = params.get(param)
        if raw in (None, ""):
            continue
        try:
            prefill[key.value] = int(float(str(raw)))
        except (ValueError, OverflowError):
            logger.warning("Ignoring non-numeric pre-fill %s=%r", param, raw)
    financing = params.get("financing")
    if financing:
        prefill[FieldKey.FINANCING_TYPE.value] = str(financing)
    return prefill


def load_wizard(
    form_type: FormType,
    *,
    locale: str,
    pipeline: SubmissionPipeline,
    sink: EventSink,
    prefill: Mapping[str, Any] | None = None,
) -> LeadWizard:
    """Restore the stored wizard for ``form_type`` or start a new one."""

    stored = st.session_state.get(StateKeys.WIZARD)
    if isinstance(stored, Mapping) and stored.get("form_type") == form_type.value:
        try:
            return LeadWizard.restore(stored, pipeline=pipeline, sink=sink)
        except ValidationError:
            logger.warning("Discarding unreadable wizard state", exc_info=True)
    wizard = LeadWizard(form_type, pipeline=pipeline, sink=sink, locale=locale, prefill=prefill)
    store_wizard(wizard)
    return wizard


def store_wizard(wizard: LeadWizard) -> None:
    st.session_state[StateKeys.WIZARD] = wizard.state.to_payload()


__all__ = [
    "build_event_sink",
    "build_pipeline",
    "ensure_session_id",
    "has_analytics_consent",
    "load_wizard",
    "prefill_from_query",
    "store_wizard",
]
