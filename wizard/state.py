"""Serializable wizard state."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator

from constants.keys import FieldKey, FormType, SubmissionStatus
from wizard.step_catalog import FormDefinition, StepDefinition, get_form

FormRecord = dict[FieldKey, Any]
ErrorMap = dict[FieldKey, str]


class WizardState(BaseModel):
    """Snapshot of one wizard session.

    Instances are immutable; transitions in :mod:`wizard.machine` return new
    snapshots. ``status == idle`` means the applicant is editing the step at
    ``step_index``.
    """

    model_config = ConfigDict(frozen=True)

    form_type: FormType
    locale: str
    step_index: int = Field(default=0, ge=0)
    record: FormRecord = Field(default_factory=dict)
    errors: ErrorMap = Field(default_factory=dict)
    status: SubmissionStatus = SubmissionStatus.IDLE
    reference_number: str | None = None
    submission_error: str | None = None
    attempts: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_step_index(self) -> "WizardState":
        if self.step_index >= get_form(self.form_type).step_count:
            raise ValueError(f"step_index {self.step_index} is out of range for '{self.form_type}'")
        return self

    @property
    def form(self) -> FormDefinition:
        return get_form(self.form_type)

    @property
    def current_step(self) -> StepDefinition:
        return self.form.steps[self.step_index]

    @property
    def is_first_step(self) -> bool:
        return self.step_index == 0

    @property
    def is_last_step(self) -> bool:
        return self.step_index == self.form.last_index

    @property
    def is_editable(self) -> bool:
        return self.status in (SubmissionStatus.IDLE, SubmissionStatus.FAILED)

    def value(self, key: FieldKey) -> Any:
        return self.record.get(key)

    def evolve(self, **changes: Any) -> "WizardState":
        """Return a copy with ``changes`` applied; mappings are copied."""

        for name in ("record", "errors"):
            if name in changes:
                changes[name] = dict(changes[name])
        return self.model_copy(update=changes)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "WizardState":
        return cls.model_validate(payload)


__all__ = ["ErrorMap", "FormRecord", "WizardState"]
