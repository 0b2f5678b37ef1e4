"""Field vocabulary for the lead-capture wizard."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Mapping

from constants.keys import FieldKey


class FieldKind(StrEnum):
    TEXT = "text"
    LONG_TEXT = "long_text"
    NUMBER = "number"
    CHOICE = "choice"
    DATE = "date"
    CONSENT = "consent"


@dataclass(frozen=True)
class ChoiceOption:
    value: str | int
    label_key: str
    label_params: tuple[tuple[str, object], ...] = ()


@dataclass(frozen=True)
class FieldSpec:
    """Rendering metadata for a single field; labels are localization keys."""

    key: FieldKey
    kind: FieldKind
    options: tuple[ChoiceOption, ...] = ()

    @property
    def label_key(self) -> str:
        return f"label_{self.key.value}"

    @property
    def placeholder_key(self) -> str:
        return f"placeholder_{self.key.value}"


FINANCING_TYPES: Final[tuple[ChoiceOption, ...]] = (
    ChoiceOption("personal", "financing_personal"),
    ChoiceOption("auto", "financing_auto"),
    ChoiceOption("sme", "financing_sme"),
    ChoiceOption("equipment", "financing_equipment"),
)

EMPLOYMENT_TYPES: Final[tuple[ChoiceOption, ...]] = (
    ChoiceOption("government", "employment_government"),
    ChoiceOption("private", "employment_private"),
    ChoiceOption("self_employed", "employment_self_employed"),
    ChoiceOption("retired", "employment_retired"),
)

TENURE_MONTHS: Final[tuple[int, ...]] = (12, 24, 36, 48, 60)

TENURE_OPTIONS: Final[tuple[ChoiceOption, ...]] = tuple(
    ChoiceOption(months, "tenure_months", (("months", months),)) for months in TENURE_MONTHS
)

FIELD_SPECS: Final[Mapping[FieldKey, FieldSpec]] = {
    spec.key: spec
    for spec in (
        FieldSpec(FieldKey.FULL_NAME, FieldKind.TEXT),
        FieldSpec(FieldKey.NATIONAL_ID, FieldKind.TEXT),
        FieldSpec(FieldKey.DATE_OF_BIRTH, FieldKind.DATE),
        FieldSpec(FieldKey.NATIONALITY, FieldKind.TEXT),
        FieldSpec(FieldKey.PHONE, FieldKind.TEXT),
        FieldSpec(FieldKey.EMAIL, FieldKind.TEXT),
        FieldSpec(FieldKey.EMPLOYMENT_TYPE, FieldKind.CHOICE, EMPLOYMENT_TYPES),
        FieldSpec(FieldKey.EMPLOYER, FieldKind.TEXT),
        FieldSpec(FieldKey.MONTHLY_INCOME, FieldKind.NUMBER),
        FieldSpec(FieldKey.FINANCING_TYPE, FieldKind.CHOICE, FINANCING_TYPES),
        FieldSpec(FieldKey.REQUESTED_AMOUNT, FieldKind.NUMBER),
        FieldSpec(FieldKey.TENURE, FieldKind.CHOICE, TENURE_OPTIONS),
        FieldSpec(FieldKey.MESSAGE, FieldKind.LONG_TEXT),
        FieldSpec(FieldKey.SUBJECT, FieldKind.TEXT),
        FieldSpec(FieldKey.CONSENT_MARKETING, FieldKind.CONSENT),
        FieldSpec(FieldKey.CONSENT_TERMS, FieldKind.CONSENT),
        FieldSpec(FieldKey.CONSENT_PDPL, FieldKind.CONSENT),
    )
}


def field_spec(key: FieldKey | str) -> FieldSpec:
    """Return the :class:`FieldSpec` for ``key``.

    Raises:
        ValueError: If ``key`` is not part of the field vocabulary.
    """

    return FIELD_SPECS[FieldKey(key)]


def empty_value(key: FieldKey) -> object | None:
    """Return the initial value for ``key`` in a fresh record."""

    kind = FIELD_SPECS[key].kind
    if kind is FieldKind.CONSENT:
        return False
    if kind in (FieldKind.TEXT, FieldKind.LONG_TEXT):
        return ""
    return None


__all__ = [
    "ChoiceOption",
    "EMPLOYMENT_TYPES",
    "FIELD_SPECS",
    "FINANCING_TYPES",
    "FieldKind",
    "FieldSpec",
    "TENURE_MONTHS",
    "TENURE_OPTIONS",
    "empty_value",
    "field_spec",
]
