"""Pure state transitions for the lead-capture wizard.

Each transition takes a :class:`~wizard.state.WizardState` and returns a
:class:`Transition` carrying the next state plus the analytics events the
caller should dispatch. Nothing here performs I/O.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, NamedTuple

from constants.keys import FieldKey, FormType, SubmissionStatus
from i18n import normalize_lang, t
from wizard import events
from wizard.fields import empty_value
from wizard.state import ErrorMap, FormRecord, WizardState
from wizard.step_catalog import get_form
from wizard.submission import SubmissionOutcome
from wizard.validators import validate_field

logger = logging.getLogger(__name__)

ReferenceFactory = Callable[[str], str]


class Transition(NamedTuple):
    state: WizardState
    events: tuple[events.TrackingEvent, ...] = ()


def initial_record(form_type: FormType | str, prefill: Mapping[str, Any] | None = None) -> FormRecord:
    """Return a fresh record for ``form_type`` seeded with ``prefill``.

    Raises:
        ValueError: If ``prefill`` names a field outside the vocabulary.
    """

    definition = get_form(form_type)
    record: FormRecord = {key: empty_value(key) for key in definition.fields()}
    for raw_key, value in (prefill or {}).items():
        try:
            key = FieldKey(raw_key)
        except ValueError:
            raise ValueError(f"Unknown pre-fill field: {raw_key!r}") from None
        if value is None:
            continue
        record[key] = value
    return record


def start(form_type: FormType | str, *, locale: str, prefill: Mapping[str, Any] | None = None) -> Transition:
    definition = get_form(form_type)
    state = WizardState(
        form_type=definition.form_type,
        locale=normalize_lang(locale),
        record=initial_record(definition.form_type, prefill),
    )
    return Transition(state, (events.form_started(definition.form_type.value),))


def edit_field(state: WizardState, key: FieldKey | str, value: Any) -> Transition:
    """Store ``value`` for ``key`` and drop any error recorded for it."""

    if not state.is_editable:
        logger.debug("Ignoring edit of '%s' while %s", key, state.status)
        return Transition(state)
    field_key = FieldKey(key)
    record = dict(state.record)
    record[field_key] = value
    errors = {name: message for name, message in state.errors.items() if name != field_key}
    return Transition(state.evolve(record=record, errors=errors))


def validate_step(state: WizardState, index: int) -> ErrorMap:
    """Return errors for the fields owned by step ``index`` (empty when valid)."""

    steps = state.form.steps
    if not 0 <= index < len(steps):
        raise IndexError(f"Step index {index} out of range for '{state.form_type}'")
    errors: ErrorMap = {}
    for key in steps[index].fields:
        result = validate_field(key, state.record.get(key), state.locale)
        if not result.ok and result.message is not None:
            errors[key] = result.message
    return errors


def next_step(state: WizardState) -> Transition:
    if not state.is_editable:
        logger.debug("Ignoring next while %s", state.status)
        return Transition(state)
    errors = validate_step(state, state.step_index)
    if errors:
        logger.debug("Step '%s' has %d invalid field(s)", state.current_step.id, len(errors))
        return Transition(state.evolve(errors=errors))
    step = state.current_step
    target = min(state.step_index + 1, state.form.last_index)
    completed = events.form_step_completed(state.form_type.value, state.step_index + 1, step.id)
    return Transition(state.evolve(step_index=target, errors={}), (completed,))


def previous_step(state: WizardState) -> Transition:
    if not state.is_editable:
        logger.debug("Ignoring previous while %s", state.status)
        return Transition(state)
    return Transition(state.evolve(step_index=max(state.step_index - 1, 0), errors={}))


def begin_submit(
    state: WizardState,
    *,
    reference_factory: ReferenceFactory,
    reuse_reference: bool = False,
) -> Transition:
    """Validate the last step and move to ``submitting`` when it passes.

    Only acts on the last step while editing or after a failed attempt. The
    reference number is minted here; with ``reuse_reference`` a retry after a
    failure keeps the number of the failed attempt.
    """

    if state.status is SubmissionStatus.SUBMITTING:
        logger.debug("Submission already in flight; ignoring submit")
        return Transition(state)
    if not state.is_editable:
        logger.debug("Ignoring submit while %s", state.status)
        return Transition(state)
    if not state.is_last_step:
        logger.debug("Ignoring submit on step %d of %d", state.step_index + 1, state.form.step_count)
        return Transition(state)

    errors = validate_step(state, state.step_index)
    if errors:
        return Transition(state.evolve(errors=errors, status=SubmissionStatus.IDLE, submission_error=None))

    if reuse_reference and state.status is SubmissionStatus.FAILED and state.reference_number:
        reference = state.reference_number
    else:
        reference = reference_factory(state.form.reference_prefix)
    return Transition(
        state.evolve(
            status=SubmissionStatus.SUBMITTING,
            reference_number=reference,
            errors={},
            submission_error=None,
            attempts=state.attempts + 1,
        )
    )


def complete_submission(state: WizardState, outcome: SubmissionOutcome) -> Transition:
    """Settle an in-flight submission with ``outcome``."""

    if state.status is not SubmissionStatus.SUBMITTING:
        raise RuntimeError(f"No submission in flight (status={state.status})")
    if not outcome.ok:
        return Transition(
            state.evolve(
                status=SubmissionStatus.FAILED,
                submission_error=t("error_submit_failed", state.locale),
            )
        )
    product = state.record.get(FieldKey.FINANCING_TYPE) or state.form_type.value
    emitted = (
        events.form_submitted(state.form_type.value, state.reference_number),
        events.lead_generated(str(product)),
    )
    return Transition(state.evolve(status=SubmissionStatus.SUCCEEDED), emitted)


def dismiss_submission_error(state: WizardState) -> Transition:
    if state.status is not SubmissionStatus.FAILED:
        return Transition(state)
    return Transition(state.evolve(status=SubmissionStatus.IDLE, submission_error=None))


def reset(state: WizardState, *, prefill: Mapping[str, Any] | None = None) -> Transition:
    """Start over with the same form type and language."""

    return start(state.form_type, locale=state.locale, prefill=prefill)


def change_locale(state: WizardState, locale: str) -> Transition:
    """Switch language; field errors are dropped so no stale text is shown."""

    lang = normalize_lang(locale)
    submission_error = t("error_submit_failed", lang) if state.submission_error else None
    return Transition(state.evolve(locale=lang, errors={}, submission_error=submission_error))


__all__ = [
    "ReferenceFactory",
    "Transition",
    "begin_submit",
    "change_locale",
    "complete_submission",
    "dismiss_submission_error",
    "edit_field",
    "initial_record",
    "next_step",
    "previous_step",
    "reset",
    "start",
    "validate_step",
]
