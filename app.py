# app.py: lead-capture wizard entrypoint
from __future__ import annotations

import logging
import sys
from pathlib import Path

import streamlit as st

APP_ROOT = Path(__file__).resolve().parent
if str(APP_ROOT) not in sys.path:
    sys.path.insert(0, str(APP_ROOT))

import config  # noqa: E402
from components.lead_form import render_lead_form  # noqa: E402
from constants.keys import FormType, StateKeys, UIKeys  # noqa: E402
from i18n import SUPPORTED_LANGUAGES, normalize_lang, t  # noqa: E402
from state.session import (  # noqa: E402
    build_event_sink,
    build_pipeline,
    ensure_session_id,
    load_wizard,
    prefill_from_query,
    store_wizard,
)
from utils.logging_context import configure_logging, set_session_id  # noqa: E402
from utils.telemetry import setup_tracing  # noqa: E402

configure_logging(level=config.LOG_LEVEL)
setup_tracing()
set_session_id(ensure_session_id())

logger = logging.getLogger(__name__)

st.set_page_config(page_title="AJIL Finance", page_icon="💳", layout="centered")

params = st.query_params
lang = normalize_lang(st.session_state.get(StateKeys.LANG) or params.get("lang"), config.DEFAULT_LANGUAGE)

try:
    form_type = FormType.parse(params.get("type", FormType.APPLICATION.value))
except ValueError:
    logger.warning("Unknown form type %r in query; using application", params.get("type"))
    form_type = FormType.APPLICATION

with st.sidebar:
    selected_lang = st.selectbox(
        t("language_label", lang),
        SUPPORTED_LANGUAGES,
        index=SUPPORTED_LANGUAGES.index(lang),
        format_func=lambda code: "العربية" if code == "ar" else "English",
        key=UIKeys.LANG_SELECT,
    )
    st.session_state[StateKeys.ANALYTICS_CONSENT] = st.checkbox(
        t("analytics_consent_label", lang),
        value=bool(st.session_state.get(StateKeys.ANALYTICS_CONSENT, False)),
        key=UIKeys.ANALYTICS_CONSENT,
    )

try:
    pipeline = build_pipeline()
except RuntimeError as exc:
    st.error(str(exc))
    st.stop()

wizard = load_wizard(
    form_type,
    locale=lang,
    pipeline=pipeline,
    sink=build_event_sink(),
    prefill=prefill_from_query(params),
)

if selected_lang != wizard.state.locale:
    st.session_state[StateKeys.LANG] = selected_lang
    wizard.set_locale(selected_lang)
    store_wizard(wizard)
    st.rerun()


def _persist_and_rerun() -> None:
    store_wizard(wizard)
    st.rerun()


render_lead_form(wizard, on_change=_persist_and_rerun)
store_wizard(wizard)
