"""Core translation utilities for the lead-capture wizard."""

from __future__ import annotations

from typing import Any

SUPPORTED_LANGUAGES: tuple[str, ...] = ("ar", "en")
FALLBACK_LANGUAGE = "ar"
RTL_LANGUAGES: frozenset[str] = frozenset({"ar"})

STR = {
    "ar": {
        # Steps
        "step_personal_title": "المعلومات الشخصية",
        "step_personal_description": "أدخل معلوماتك الأساسية",
        "step_employment_title": "معلومات العمل",
        "step_employment_description": "أخبرنا عن عملك",
        "step_financing_title": "طلب التمويل",
        "step_financing_description": "حدد احتياجاتك التمويلية",
        "step_consent_title": "الشروط والموافقة",
        "step_contact_title": "تواصل معنا",
        "step_complaint_title": "تقديم شكوى",
        "step_complaint_description": "نحن نأخذ مخاوفك على محمل الجد",
        "step_inquiry_title": "استفسار عام",
        "step_progress": "الخطوة {current} من {total}",
        # Field labels
        "label_fullName": "الاسم الكامل",
        "label_nationalId": "رقم الهوية",
        "label_dateOfBirth": "تاريخ الميلاد",
        "label_nationality": "الجنسية",
        "label_phone": "رقم الجوال",
        "label_email": "البريد الإلكتروني",
        "label_employmentType": "نوع العمل",
        "label_employer": "جهة العمل",
        "label_monthlyIncome": "الدخل الشهري (ريال)",
        "label_financingType": "نوع التمويل",
        "label_requestedAmount": "المبلغ المطلوب (ريال)",
        "label_tenure": "مدة التمويل (أشهر)",
        "label_subject": "الموضوع",
        "label_message": "الرسالة",
        "label_consentTerms": "أوافق على الشروط والأحكام",
        "label_consentPDPL": "أوافق على معالجة بياناتي الشخصية وفقاً لنظام حماية البيانات الشخصية",
        "label_consentMarketing": "أرغب في تلقي العروض والأخبار من أجل للتمويل",
        # Placeholders
        "placeholder_fullName": "أدخل اسمك الكامل",
        "placeholder_nationalId": "أدخل رقم الهوية",
        "placeholder_phone": "05XXXXXXXX",
        "placeholder_email": "email@example.com",
        "placeholder_employer": "أدخل اسم جهة العمل",
        "placeholder_monthlyIncome": "أدخل الدخل الشهري",
        "placeholder_requestedAmount": "أدخل المبلغ المطلوب",
        "placeholder_subject": "أدخل الموضوع",
        "placeholder_message": "اكتب رسالتك هنا",
        "option_select": "اختر",
        # Choices
        "financing_personal": "تمويل شخصي",
        "financing_auto": "تمويل سيارات",
        "financing_sme": "تمويل منشآت",
        "financing_equipment": "تمويل معدات",
        "employment_government": "قطاع حكومي",
        "employment_private": "قطاع خاص",
        "employment_self_employed": "أعمال حرة",
        "employment_retired": "متقاعد",
        "tenure_months": "{months} شهر",
        # Validation
        "error_full_name": "يرجى إدخال الاسم الكامل",
        "error_national_id": "رقم الهوية غير صحيح",
        "error_phone": "رقم الجوال غير صحيح",
        "error_email": "البريد الإلكتروني غير صحيح",
        "error_monthly_income": "الحد الأدنى للدخل {amount} ريال",
        "error_message": "يرجى كتابة رسالتك (10 أحرف على الأقل)",
        "error_consent_required": "يجب الموافقة للمتابعة",
        "error_submit_failed": "حدث خطأ، يرجى المحاولة مرة أخرى",
        # Navigation & outcome
        "nav_previous": "السابق",
        "nav_next": "التالي",
        "nav_submit": "إرسال الطلب",
        "nav_submitting": "جاري الإرسال...",
        "nav_dismiss": "إغلاق",
        "nav_restart": "طلب جديد",
        "success_title": "تم الإرسال بنجاح!",
        "success_body": "شكراً لتواصلك معنا. سيتم التواصل معك قريباً.",
        "success_reference_label": "رقم المرجع:",
        "success_reference_hint": "يرجى الاحتفاظ برقم المرجع للمتابعة",
        "pdpl_notice_title": "إشعار حماية البيانات",
        "pdpl_notice_body": (
            "بياناتك الشخصية محمية وفقاً لنظام حماية البيانات الشخصية في المملكة العربية السعودية. "
            "سنستخدم بياناتك فقط لمعالجة طلبك والتواصل معك. لمزيد من المعلومات، يرجى مراجعة سياسة الخصوصية."
        ),
        "language_label": "اللغة",
        "analytics_consent_label": "السماح بملفات تعريف الارتباط التحليلية",
    },
    "en": {
        "step_personal_title": "Personal Information",
        "step_personal_description": "Enter your basic information",
        "step_employment_title": "Employment Details",
        "step_employment_description": "Tell us about your employment",
        "step_financing_title": "Financing Request",
        "step_financing_description": "Specify your financing needs",
        "step_consent_title": "Terms & Consent",
        "step_contact_title": "Contact Us",
        "step_complaint_title": "Submit Complaint",
        "step_complaint_description": "We take your concerns seriously",
        "step_inquiry_title": "General Inquiry",
        "step_progress": "Step {current} of {total}",
        "label_fullName": "Full Name",
        "label_nationalId": "National ID",
        "label_dateOfBirth": "Date of Birth",
        "label_nationality": "Nationality",
        "label_phone": "Mobile Number",
        "label_email": "Email",
        "label_employmentType": "Employment Type",
        "label_employer": "Employer",
        "label_monthlyIncome": "Monthly Income (SAR)",
        "label_financingType": "Financing Type",
        "label_requestedAmount": "Requested Amount (SAR)",
        "label_tenure": "Tenure (months)",
        "label_subject": "Subject",
        "label_message": "Message",
        "label_consentTerms": "I agree to the Terms and Conditions",
        "label_consentPDPL": "I consent to the processing of my personal data in accordance with PDPL",
        "label_consentMarketing": "I would like to receive offers and news from AJIL Finance",
        "placeholder_fullName": "Enter your full name",
        "placeholder_nationalId": "Enter your National ID",
        "placeholder_phone": "05XXXXXXXX",
        "placeholder_email": "email@example.com",
        "placeholder_employer": "Enter employer name",
        "placeholder_monthlyIncome": "Enter monthly income",
        "placeholder_requestedAmount": "Enter requested amount",
        "placeholder_subject": "Enter subject",
        "placeholder_message": "Write your message here",
        "option_select": "Select",
        "financing_personal": "Personal Financing",
        "financing_auto": "Auto Financing",
        "financing_sme": "SME Financing",
        "financing_equipment": "Equipment Financing",
        "employment_government": "Government",
        "employment_private": "Private Sector",
        "employment_self_employed": "Self Employed",
        "employment_retired": "Retired",
        "tenure_months": "{months} months",
        "error_full_name": "Please enter your full name",
        "error_national_id": "Invalid National ID",
        "error_phone": "Invalid phone number",
        "error_email": "Invalid email address",
        "error_monthly_income": "Minimum income is {amount} SAR",
        "error_message": "Please write your message (min 10 characters)",
        "error_consent_required": "You must agree to continue",
        "error_submit_failed": "An error occurred. Please try again.",
        "nav_previous": "Previous",
        "nav_next": "Next",
        "nav_submit": "Submit Application",
        "nav_submitting": "Submitting...",
        "nav_dismiss": "Dismiss",
        "nav_restart": "Start a new request",
        "success_title": "Submitted Successfully!",
        "success_body": "Thank you for contacting us. We will get back to you soon.",
        "success_reference_label": "Reference Number:",
        "success_reference_hint": "Please save this reference number for tracking",
        "pdpl_notice_title": "Data Protection Notice",
        "pdpl_notice_body": (
            "Your personal data is protected under Saudi Arabia's Personal Data Protection Law (PDPL). "
            "We will only use your data to process your request and contact you. For more information, "
            "please review our Privacy Policy."
        ),
        "language_label": "Language",
        "analytics_consent_label": "Allow analytics cookies",
    },
}


def normalize_lang(lang: str | None, default: str = FALLBACK_LANGUAGE) -> str:
    """Return a supported language code for ``lang`` (``"ar-SA"`` -> ``"ar"``)."""

    if not lang:
        return default
    code = lang.strip().lower().replace("_", "-").split("-", 1)[0]
    return code if code in SUPPORTED_LANGUAGES else default


def t(key: str, lang: str, **params: Any) -> str:
    """Translate ``key`` into the requested ``lang``.

    Args:
        key: Lookup key in the translation dictionary.
        lang: Language code (``"ar"`` or ``"en"``).
        **params: Optional ``str.format`` arguments for templated entries.

    Returns:
        The localized string if present, otherwise ``key`` itself.
    """

    text = STR.get(normalize_lang(lang), {}).get(key, key)
    if params:
        return text.format(**params)
    return text


def text_direction(lang: str) -> str:
    """Return ``"rtl"`` for right-to-left languages, otherwise ``"ltr"``."""

    return "rtl" if normalize_lang(lang) in RTL_LANGUAGES else "ltr"
