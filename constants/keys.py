from __future__ import annotations

from enum import StrEnum


class FormType(StrEnum):
    """Lead-capture flows offered on the website."""

    APPLICATION = "application"
    CONTACT = "contact"
    COMPLAINT = "complaint"
    INQUIRY = "inquiry"

    @classmethod
    def parse(cls, value: FormType | str) -> FormType:
        """Return the ``FormType`` for ``value`` (``"apply"`` is accepted as an alias)."""

        if isinstance(value, FormType):
            return value
        lowered = str(value).strip().lower()
        if lowered == "apply":
            return cls.APPLICATION
        try:
            return cls(lowered)
        except ValueError:
            raise ValueError(f"Unsupported form type: {value!r}") from None


class FieldKey(StrEnum):
    """Field vocabulary; values double as payload keys."""

    FULL_NAME = "fullName"
    NATIONAL_ID = "nationalId"
    DATE_OF_BIRTH = "dateOfBirth"
    NATIONALITY = "nationality"
    PHONE = "phone"
    EMAIL = "email"
    EMPLOYMENT_TYPE = "employmentType"
    EMPLOYER = "employer"
    MONTHLY_INCOME = "monthlyIncome"
    FINANCING_TYPE = "financingType"
    REQUESTED_AMOUNT = "requestedAmount"
    TENURE = "tenure"
    MESSAGE = "message"
    SUBJECT = "subject"
    CONSENT_MARKETING = "consentMarketing"
    CONSENT_TERMS = "consentTerms"
    CONSENT_PDPL = "consentPDPL"


class SubmissionStatus(StrEnum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    WIZARD = "lead_wizard.state"
    LANG = "lang"
    ANALYTICS_CONSENT = "analytics_consent"
    SESSION_ID = "session_id"


class UIKeys:
    """Keys for UI widgets in ``st.session_state``."""

    LANG_SELECT = "ui.lang_select"
    ANALYTICS_CONSENT = "ui.analytics_consent"
    NEXT_BUTTON = "ui.lead_wizard.next"
    PREVIOUS_BUTTON = "ui.lead_wizard.previous"
    SUBMIT_BUTTON = "ui.lead_wizard.submit"
    DISMISS_BUTTON = "ui.lead_wizard.dismiss"
    RESTART_BUTTON = "ui.lead_wizard.restart"

    @staticmethod
    def field(key: str) -> str:
        return f"ui.lead_wizard.field.{key}"
