"""Streamlit rendering for the lead-capture wizard.

The component only reads :class:`~wizard.view.StepView` snapshots and forwards
user intents to :class:`~wizard.controller.LeadWizard`; it holds no wizard
logic of its own.
"""

from __future__ import annotations

import asyncio
import html
from typing import Any, Callable

import streamlit as st

from constants.keys import SubmissionStatus, UIKeys
from i18n import t
from wizard.controller import LeadWizard
from wizard.fields import FieldKind
from wizard.view import FieldView, StepView

OnChange = Callable[[], None]


def _render_rtl_style(view: StepView) -> None:
    if view.direction != "rtl":
        return
    st.markdown(
        "<style>.main .block-container { direction: rtl; text-align: right; }</style>",
        unsafe_allow_html=True,
    )


def _render_progress(view: StepView) -> None:
    if view.step_count <= 1:
        return
    st.progress(view.step_number / view.step_count, text=view.progress)
    segments = []
    for index, title in enumerate(view.step_titles, start=1):
        marker = "✔︎" if index < view.step_number else ("➤" if index == view.step_number else "•")
        segments.append(f"{marker} {html.escape(title)}")
    st.caption(" → ".join(segments) if view.direction == "ltr" else " ← ".join(segments))


def _option_index(item: FieldView) -> int:
    for index, option in enumerate(item.options, start=1):
        if option.value == item.value:
            return index
    return 0


def _render_field(item: FieldView, lang: str) -> Any:
    key = UIKeys.field(item.key.value)
    if item.kind is FieldKind.CONSENT:
        return st.checkbox(item.label, value=bool(item.value), key=key)
    if item.kind is FieldKind.CHOICE:
        choices: list[Any] = [None, *(option.value for option in item.options)]
        labels = {option.value: option.label for option in item.options}
        return st.selectbox(
            item.label,
            choices,
            index=_option_index(item),
            format_func=lambda value: t("option_select", lang) if value is None else labels[value],
            key=key,
        )
    if item.kind is FieldKind.NUMBER:
        return st.number_input(
            item.label,
            min_value=0,
            step=500,
            value=int(item.value) if isinstance(item.value, (int, float)) else None,
            placeholder=item.placeholder,
            key=key,
        )
    if item.kind is FieldKind.LONG_TEXT:
        return st.text_area(item.label, value=item.value or "", placeholder=item.placeholder, key=key)
    return st.text_input(item.label, value=item.value or "", placeholder=item.placeholder, key=key)


def _render_fields(wizard: LeadWizard, view: StepView) -> None:
    for item in view.fields:
        value = _render_field(item, view.locale)
        if value != item.value:
            wizard.edit(item.key, value)
        if item.error:
            st.error(item.error)
    if view.show_pdpl_notice:
        with st.expander(t("pdpl_notice_title", view.locale)):
            st.write(t("pdpl_notice_body", view.locale))


def _render_success(wizard: LeadWizard, view: StepView, on_change: OnChange) -> None:
    lang = view.locale
    st.success(t("success_title", lang))
    st.write(t("success_body", lang))
    st.caption(t("success_reference_label", lang))
    st.code(view.reference_number or "", language=None)
    st.caption(t("success_reference_hint", lang))
    if st.button(t("nav_restart", lang), key=UIKeys.RESTART_BUTTON):
        wizard.acknowledge()
        on_change()


def _render_navigation(wizard: LeadWizard, view: StepView, on_change: OnChange) -> None:
    lang = view.locale
    previous_col, next_col = st.columns(2)
    with previous_col:
        if not view.is_first and st.button(t("nav_previous", lang), key=UIKeys.PREVIOUS_BUTTON):
            wizard.previous()
            on_change()
    with next_col:
        if not view.is_last:
            if st.button(t("nav_next", lang), type="primary", key=UIKeys.NEXT_BUTTON):
                wizard.next()
                on_change()
            return
        if st.button(t("nav_submit", lang), type="primary", key=UIKeys.SUBMIT_BUTTON):
            with st.spinner(t("nav_submitting", lang)):
                asyncio.run(wizard.submit())
            on_change()


def render_lead_form(wizard: LeadWizard, *, on_change: OnChange) -> None:
    """Render the current wizard step; ``on_change`` runs after every handled intent."""

    view = wizard.view()
    _render_rtl_style(view)
    if view.status is SubmissionStatus.SUCCEEDED:
        _render_success(wizard, view, on_change)
        return

    _render_progress(view)
    st.subheader(view.title)
    if view.description:
        st.caption(view.description)

    if view.submission_error:
        st.error(view.submission_error)
        if st.button(t("nav_dismiss", view.locale), key=UIKeys.DISMISS_BUTTON):
            wizard.dismiss_error()
            on_change()

    _render_fields(wizard, view)
    _render_navigation(wizard, view, on_change)


__all__ = ["render_lead_form"]
