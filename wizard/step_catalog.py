"""Static catalog of wizard steps per form type."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Mapping

from constants.keys import FieldKey, FormType

_PREFIX_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Z]{3}$")


class CatalogError(RuntimeError):
    """Raised when the step catalog is misconfigured."""


@dataclass(frozen=True)
class StepDefinition:
    """Metadata for a single wizard step; ``title``/``description`` are localization keys."""

    id: str
    title: str
    fields: tuple[FieldKey, ...]
    description: str | None = None

    def owns(self, key: FieldKey) -> bool:
        return key in self.fields


@dataclass(frozen=True)
class FormDefinition:
    """Ordered steps plus the reference-number prefix of one form type."""

    form_type: FormType
    reference_prefix: str
    steps: tuple[StepDefinition, ...]

    @property
    def step_count(self) -> int:
        return len(self.steps)

    @property
    def last_index(self) -> int:
        return len(self.steps) - 1

    def fields(self) -> tuple[FieldKey, ...]:
        """Return every field used by the form, in first-seen order."""

        return tuple(dict.fromkeys(key for step in self.steps for key in step.fields))


FORM_CATALOG: Final[Mapping[FormType, FormDefinition]] = {
    FormType.APPLICATION: FormDefinition(
        form_type=FormType.APPLICATION,
        reference_prefix="APP",
        steps=(
            StepDefinition(
                id="personal",
                title="step_personal_title",
                description="step_personal_description",
                fields=(FieldKey.FULL_NAME, FieldKey.NATIONAL_ID, FieldKey.PHONE, FieldKey.EMAIL),
            ),
            StepDefinition(
                id="employment",
                title="step_employment_title",
                description="step_employment_description",
                fields=(FieldKey.EMPLOYMENT_TYPE, FieldKey.EMPLOYER, FieldKey.MONTHLY_INCOME),
            ),
            StepDefinition(
                id="financing",
                title="step_financing_title",
                description="step_financing_description",
                fields=(FieldKey.FINANCING_TYPE, FieldKey.REQUESTED_AMOUNT, FieldKey.TENURE),
            ),
            StepDefinition(
                id="consent",
                title="step_consent_title",
                fields=(FieldKey.CONSENT_TERMS, FieldKey.CONSENT_PDPL, FieldKey.CONSENT_MARKETING),
            ),
        ),
    ),
    FormType.CONTACT: FormDefinition(
        form_type=FormType.CONTACT,
        reference_prefix="INQ",
        steps=(
            StepDefinition(
                id="contact",
                title="step_contact_title",
                fields=(
                    FieldKey.FULL_NAME,
                    FieldKey.PHONE,
                    FieldKey.EMAIL,
                    FieldKey.SUBJECT,
                    FieldKey.MESSAGE,
                    FieldKey.CONSENT_PDPL,
                ),
            ),
        ),
    ),
    FormType.COMPLAINT: FormDefinition(
        form_type=FormType.COMPLAINT,
        reference_prefix="CMP",
        steps=(
            StepDefinition(
                id="complaint",
                title="step_complaint_title",
                description="step_complaint_description",
                fields=(
                    FieldKey.FULL_NAME,
                    FieldKey.NATIONAL_ID,
                    FieldKey.PHONE,
                    FieldKey.EMAIL,
                    FieldKey.SUBJECT,
                    FieldKey.MESSAGE,
                    FieldKey.CONSENT_PDPL,
                ),
            ),
        ),
    ),
    FormType.INQUIRY: FormDefinition(
        form_type=FormType.INQUIRY,
        reference_prefix="INQ",
        steps=(
            StepDefinition(
                id="inquiry",
                title="step_inquiry_title",
                fields=(
                    FieldKey.FULL_NAME,
                    FieldKey.PHONE,
                    FieldKey.EMAIL,
                    FieldKey.FINANCING_TYPE,
                    FieldKey.MESSAGE,
                    FieldKey.CONSENT_PDPL,
                ),
            ),
        ),
    ),
}


def verify_catalog(catalog: Mapping[FormType, FormDefinition] = FORM_CATALOG) -> None:
    """Fail fast when ``catalog`` cannot drive the wizard.

    Raises:
        CatalogError: If a form type is missing, has no steps, reuses a step
            id, declares an invalid prefix or references unknown fields.
    """

    for form_type in FormType:
        definition = catalog.get(form_type)
        if definition is None:
            raise CatalogError(f"No catalog entry for form type '{form_type}'")
        if definition.form_type is not form_type:
            raise CatalogError(f"Catalog entry for '{form_type}' declares '{definition.form_type}'")
        if not definition.steps:
            raise CatalogError(f"Form type '{form_type}' has no steps")
        if not _PREFIX_PATTERN.fullmatch(definition.reference_prefix):
            raise CatalogError(f"Invalid reference prefix '{definition.reference_prefix}' for '{form_type}'")
        step_ids = [step.id for step in definition.steps]
        if len(step_ids) != len(set(step_ids)):
            raise CatalogError(f"Duplicate step ids for '{form_type}': {', '.join(step_ids)}")
        for step in definition.steps:
            if not step.fields:
                raise CatalogError(f"Step '{step.id}' of '{form_type}' owns no fields")
            unknown = [key for key in step.fields if not isinstance(key, FieldKey)]
            if unknown:
                raise CatalogError(f"Step '{step.id}' of '{form_type}' references unknown fields: {unknown!r}")


def get_form(form_type: FormType | str) -> FormDefinition:
    """Return the :class:`FormDefinition` for ``form_type``."""

    try:
        resolved = FormType.parse(form_type)
    except ValueError as exc:
        raise CatalogError(str(exc)) from exc
    definition = FORM_CATALOG.get(resolved)
    if definition is None:
        raise CatalogError(f"No catalog entry for form type '{resolved}'")
    return definition


def get_steps(form_type: FormType | str) -> tuple[StepDefinition, ...]:
    """Return the ordered steps for ``form_type``."""

    return get_form(form_type).steps


verify_catalog()


__all__ = [
    "CatalogError",
    "FORM_CATALOG",
    "FormDefinition",
    "StepDefinition",
    "get_form",
    "get_steps",
    "verify_catalog",
]
