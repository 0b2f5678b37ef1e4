"""Stateful owner of a wizard session."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import config
from constants.keys import FieldKey, FormType, SubmissionStatus
from utils.logging_context import log_context
from wizard import machine
from wizard.events import EventSink, NullEventSink, dispatch_events
from wizard.state import ErrorMap, WizardState
from wizard.submission import SubmissionPipeline, generate_reference_number
from wizard.view import StepView, build_step_view

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[str], None]


class LeadWizard:
    """Apply transitions to a single :class:`WizardState` and dispatch their events.

    The presentation layer reads :attr:`state` (an immutable snapshot) or
    :meth:`view` after each call and forwards user intents through
    :meth:`edit`, :meth:`next`, :meth:`previous` and :meth:`submit`.
    """

    def __init__(
        self,
        form_type: FormType | str,
        *,
        pipeline: SubmissionPipeline,
        locale: str | None = None,
        prefill: Mapping[str, Any] | None = None,
        sink: EventSink | None = None,
        reuse_reference: bool | None = None,
        reference_factory: machine.ReferenceFactory = generate_reference_number,
        on_success: SuccessCallback | None = None,
        _state: WizardState | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._sink: EventSink = sink or NullEventSink()
        self._reuse_reference = config.REUSE_REFERENCE_ON_RETRY if reuse_reference is None else reuse_reference
        self._reference_factory = reference_factory
        self._on_success = on_success
        if _state is not None:
            self._state = _state
        else:
            self._apply(machine.start(form_type, locale=locale or config.DEFAULT_LANGUAGE, prefill=prefill))

    @classmethod
    def restore(cls, state: WizardState | Mapping[str, Any], **kwargs: Any) -> "LeadWizard":
        """Rebuild a controller around a stored snapshot without emitting ``form_started``."""

        snapshot = state if isinstance(state, WizardState) else WizardState.from_payload(state)
        return cls(snapshot.form_type, _state=snapshot, **kwargs)

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def errors(self) -> ErrorMap:
        return dict(self._state.errors)

    def _apply(self, transition: machine.Transition) -> WizardState:
        self._state = transition.state
        if transition.events:
            dispatch_events(self._sink, transition.events)
        return self._state

    def _context(self):
        return log_context(form_type=self._state.form_type.value, wizard_step=self._state.current_step.id)

    def edit(self, key: FieldKey | str, value: Any) -> WizardState:
        return self._apply(machine.edit_field(self._state, key, value))

    def validate_step(self, index: int | None = None) -> ErrorMap:
        return machine.validate_step(self._state, self._state.step_index if index is None else index)

    def next(self) -> WizardState:
        with self._context():
            return self._apply(machine.next_step(self._state))

    def previous(self) -> WizardState:
        return self._apply(machine.previous_step(self._state))

    async def submit(self) -> WizardState:
        """Validate the last step and, when it passes, submit the lead once."""

        if self._state.status is SubmissionStatus.SUBMITTING:
            logger.debug("Submission %s still in flight; ignoring submit", self._state.reference_number)
            return self._state
        with self._context():
            state = self._apply(
                machine.begin_submit(
                    self._state,
                    reference_factory=self._reference_factory,
                    reuse_reference=self._reuse_reference,
                )
            )
            if state.status is not SubmissionStatus.SUBMITTING or state.reference_number is None:
                return state
            outcome = await self._pipeline.run(state.record, state.reference_number, state.form_type.value)
            settled = self._apply(machine.complete_submission(self._state, outcome))
        if settled.status is SubmissionStatus.SUCCEEDED and self._on_success is not None:
            try:
                self._on_success(outcome.reference_number)
            except Exception:
                logger.warning("on_success callback failed for %s", outcome.reference_number, exc_info=True)
        return settled

    def dismiss_error(self) -> WizardState:
        return self._apply(machine.dismiss_submission_error(self._state))

    def acknowledge(self, *, prefill: Mapping[str, Any] | None = None) -> WizardState:
        """Discard a finished session and start a fresh one for the same form type."""

        return self._apply(machine.reset(self._state, prefill=prefill))

    def set_locale(self, locale: str) -> WizardState:
        return self._apply(machine.change_locale(self._state, locale))

    def view(self) -> StepView:
        return build_step_view(self._state)


__all__ = ["LeadWizard", "SuccessCallback"]
