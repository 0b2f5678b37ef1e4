"""Read-only, localized snapshots of the wizard for the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from constants.keys import FieldKey, SubmissionStatus
from i18n import STR, normalize_lang, t, text_direction
from wizard.fields import FieldKind, field_spec
from wizard.state import WizardState


@dataclass(frozen=True)
class OptionView:
    value: str | int
    label: str


@dataclass(frozen=True)
class FieldView:
    key: FieldKey
    kind: FieldKind
    label: str
    placeholder: str | None
    value: Any
    error: str | None
    options: tuple[OptionView, ...] = ()


@dataclass(frozen=True)
class StepView:
    """Everything a renderer needs for the current step, already localized."""

    locale: str
    direction: str
    step_id: str
    title: str
    description: str | None
    progress: str
    step_number: int
    step_count: int
    step_titles: tuple[str, ...]
    fields: tuple[FieldView, ...]
    is_first: bool
    is_last: bool
    status: SubmissionStatus
    reference_number: str | None
    submission_error: str | None
    show_pdpl_notice: bool

    @property
    def has_errors(self) -> bool:
        return any(item.error for item in self.fields)


def _placeholder(key: str, lang: str) -> str | None:
    if key not in STR.get(normalize_lang(lang), {}):
        return None
    return t(key, lang)


def build_step_view(state: WizardState) -> StepView:
    lang = state.locale
    form = state.form
    step = state.current_step
    fields: list[FieldView] = []
    for key in step.fields:
        spec = field_spec(key)
        options = tuple(
            OptionView(option.value, t(option.label_key, lang, **dict(option.label_params)))
            for option in spec.options
        )
        fields.append(
            FieldView(
                key=key,
                kind=spec.kind,
                label=t(spec.label_key, lang),
                placeholder=_placeholder(spec.placeholder_key, lang),
                value=state.record.get(key),
                error=state.errors.get(key),
                options=options,
            )
        )
    show_reference = state.status is SubmissionStatus.SUCCEEDED
    return StepView(
        locale=lang,
        direction=text_direction(lang),
        step_id=step.id,
        title=t(step.title, lang),
        description=t(step.description, lang) if step.description else None,
        progress=t("step_progress", lang, current=state.step_index + 1, total=form.step_count),
        step_number=state.step_index + 1,
        step_count=form.step_count,
        step_titles=tuple(t(item.title, lang) for item in form.steps),
        fields=tuple(fields),
        is_first=state.is_first_step,
        is_last=state.is_last_step,
        status=state.status,
        reference_number=state.reference_number if show_reference else None,
        submission_error=state.submission_error,
        show_pdpl_notice=FieldKey.CONSENT_PDPL in step.fields,
    )


__all__ = ["FieldView", "OptionView", "StepView", "build_step_view"]
