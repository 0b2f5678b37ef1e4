"""Field validators for the lead-capture wizard.

Every validator maps a raw field value and a language code to a
:class:`ValidationResult`. Validators never raise and never look at other
fields of the record.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Final, Mapping

import email_validator

import config
from constants.keys import FieldKey
from i18n import t

_NATIONAL_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9]{10}$")
_PHONE_SEPARATORS: Final[re.Pattern[str]] = re.compile(r"[\s-]")
_PHONE_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"^05[0-9]{8}$"),
    re.compile(r"^\+9665[0-9]{8}$"),
    re.compile(r"^009665[0-9]{8}$"),
    re.compile(r"^9665[0-9]{8}$"),
)

MIN_FULL_NAME_LENGTH: Final[int] = 3
MIN_MESSAGE_LENGTH: Final[int] = 10


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one field value."""

    ok: bool
    message_key: str | None = None
    message: str | None = None

    @classmethod
    def valid(cls) -> ValidationResult:
        return cls(ok=True)

    @classmethod
    def invalid(cls, message_key: str, lang: str, **params: object) -> ValidationResult:
        return cls(ok=False, message_key=message_key, message=t(message_key, lang, **params))


Validator = Callable[[object, str], ValidationResult]


def _as_text(value: object) -> str:
    if value is None or isinstance(value, bool):
        return ""
    return str(value).strip()


def _as_number(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def is_valid_national_id(value: str, *, strict: bool = False) -> bool:
    """Return ``True`` for a 10-digit national ID.

    With ``strict`` the ID must also start with ``1`` (citizen) or ``2``
    (resident) and pass the Luhn checksum.
    """

    if not _NATIONAL_ID_PATTERN.fullmatch(value):
        return False
    if not strict:
        return True
    if value[0] not in {"1", "2"}:
        return False
    total = 0
    for index, char in enumerate(value):
        digit = int(char)
        if index % 2 == 0:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def is_valid_phone(value: str) -> bool:
    """Return ``True`` for local (``05XXXXXXXX``) or international mobile numbers."""

    cleaned = _PHONE_SEPARATORS.sub("", value)
    return any(pattern.fullmatch(cleaned) for pattern in _PHONE_PATTERNS)


def is_valid_email(value: str) -> bool:
    """Return ``True`` for a bare ``local@domain`` address (no display name)."""

    try:
        email_validator.validate_email(value, check_deliverability=False)
    except (email_validator.EmailNotValidError, TypeError):
        return False
    return True


def validate_full_name(value: object, lang: str) -> ValidationResult:
    if len(_as_text(value)) < MIN_FULL_NAME_LENGTH:
        return ValidationResult.invalid("error_full_name", lang)
    return ValidationResult.valid()


def validate_national_id(value: object, lang: str) -> ValidationResult:
    if not is_valid_national_id(_as_text(value), strict=config.STRICT_NATIONAL_ID):
        return ValidationResult.invalid("error_national_id", lang)
    return ValidationResult.valid()


def validate_phone(value: object, lang: str) -> ValidationResult:
    if not is_valid_phone(_as_text(value)):
        return ValidationResult.invalid("error_phone", lang)
    return ValidationResult.valid()


def validate_email(value: object, lang: str) -> ValidationResult:
    candidate = _as_text(value)
    if not candidate or not is_valid_email(candidate):
        return ValidationResult.invalid("error_email", lang)
    return ValidationResult.valid()


def validate_monthly_income(value: object, lang: str) -> ValidationResult:
    minimum = config.MIN_MONTHLY_INCOME
    income = _as_number(value)
    if income is None or income < minimum:
        return ValidationResult.invalid("error_monthly_income", lang, amount=f"{minimum:,.0f}")
    return ValidationResult.valid()


def validate_message(value: object, lang: str) -> ValidationResult:
    if len(_as_text(value)) < MIN_MESSAGE_LENGTH:
        return ValidationResult.invalid("error_message", lang)
    return ValidationResult.valid()


def validate_consent(value: object, lang: str) -> ValidationResult:
    if value is not True:
        return ValidationResult.invalid("error_consent_required", lang)
    return ValidationResult.valid()


FIELD_VALIDATORS: Final[Mapping[FieldKey, Validator]] = {
    FieldKey.FULL_NAME: validate_full_name,
    FieldKey.NATIONAL_ID: validate_national_id,
    FieldKey.PHONE: validate_phone,
    FieldKey.EMAIL: validate_email,
    FieldKey.MONTHLY_INCOME: validate_monthly_income,
    FieldKey.MESSAGE: validate_message,
    FieldKey.CONSENT_TERMS: validate_consent,
    FieldKey.CONSENT_PDPL: validate_consent,
}


def validator_for(key: FieldKey) -> Validator | None:
    """Return the validator registered for ``key`` (``None`` for optional fields)."""

    return FIELD_VALIDATORS.get(key)


def validate_field(key: FieldKey, value: object, lang: str) -> ValidationResult:
    validator = validator_for(key)
    if validator is None:
        return ValidationResult.valid()
    return validator(value, lang)


__all__ = [
    "FIELD_VALIDATORS",
    "MIN_FULL_NAME_LENGTH",
    "MIN_MESSAGE_LENGTH",
    "ValidationResult",
    "Validator",
    "is_valid_email",
    "is_valid_national_id",
    "is_valid_phone",
    "validate_consent",
    "validate_email",
    "validate_field",
    "validate_full_name",
    "validate_message",
    "validate_monthly_income",
    "validate_national_id",
    "validate_phone",
    "validator_for",
]
