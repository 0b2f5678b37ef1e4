"""Lead-capture wizard: step catalog, validators, state machine and submission pipeline."""

from __future__ import annotations

from .step_catalog import CatalogError, FormDefinition, StepDefinition, get_form, get_steps
from .validators import ValidationResult, validate_field, validator_for
from .state import ErrorMap, FormRecord, WizardState
from .events import EventSink, TrackingEvent, dispatch_events
from .submission import (
    CallbackSubmitter,
    HttpSubmitter,
    SubmissionError,
    SubmissionOutcome,
    SubmissionPipeline,
    generate_reference_number,
)
from . import machine
from .view import StepView, build_step_view
from .controller import LeadWizard

__all__ = [
    "CallbackSubmitter",
    "CatalogError",
    "ErrorMap",
    "EventSink",
    "FormDefinition",
    "FormRecord",
    "HttpSubmitter",
    "LeadWizard",
    "StepDefinition",
    "StepView",
    "SubmissionError",
    "SubmissionOutcome",
    "SubmissionPipeline",
    "TrackingEvent",
    "ValidationResult",
    "WizardState",
    "build_step_view",
    "dispatch_events",
    "generate_reference_number",
    "get_form",
    "get_steps",
    "machine",
    "validate_field",
    "validator_for",
]
