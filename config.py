"""Central configuration for the lead-capture wizard.

Values are read from Streamlit secrets first and the process environment
second (a local ``.env`` file is loaded when ``python-dotenv`` is installed).

Set ``LEADS_API_URL`` to the endpoint receiving submitted leads and
``DEFAULT_LANGUAGE`` (``ar`` | ``en``) to pick the initial UI language.
``STRICT_NATIONAL_ID`` enables the checksum test on national IDs and
``REUSE_REFERENCE_ON_RETRY`` keeps the reference number of a failed
submission when the applicant retries.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

import streamlit as st

try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    pass

from i18n import normalize_lang


logger = logging.getLogger(__name__)

_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")


def _secrets() -> Mapping[str, object]:
    try:
        return dict(st.secrets)
    except Exception:  # pragma: no cover - no secrets.toml outside Streamlit
        return {}


def get_secret(key: str, default: str | None = None) -> str | None:
    """Try ``st.secrets`` first, then ``os.getenv``."""

    value = _secrets().get(key)
    if value is not None:
        return str(value)
    return os.getenv(key, default)


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _as_float(name: str, raw: str | None, default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be numeric, got {raw!r}") from None


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime configuration values.

    Attributes:
        leads_api_url: Endpoint receiving submitted leads (``None`` disables HTTP submission).
        leads_api_token: Optional bearer token sent with lead submissions.
        submit_timeout_seconds: Timeout for a single submission request.
        default_language: Initial UI language.
        min_monthly_income: Minimum accepted monthly income.
        strict_national_id: Validate the national ID checksum as well as the format.
        reuse_reference_on_retry: Keep the reference number across retried submissions.
        analytics_enabled: Forward funnel events to the configured sinks.
        log_level: Name of the root log level.
    """

    leads_api_url: str | None
    leads_api_token: str | None
    submit_timeout_seconds: float
    default_language: str
    min_monthly_income: float
    strict_national_id: bool
    reuse_reference_on_retry: bool
    analytics_enabled: bool
    log_level: str


def load_settings() -> Settings:
    """Load settings from Streamlit secrets or environment variables.

    Raises:
        ValueError: If a numeric setting cannot be parsed.
    """

    analytics_raw = get_secret("ANALYTICS_ENABLED")
    return Settings(
        leads_api_url=(get_secret("LEADS_API_URL") or "").strip() or None,
        leads_api_token=(get_secret("LEADS_API_TOKEN") or "").strip() or None,
        submit_timeout_seconds=_as_float("SUBMIT_TIMEOUT_SECONDS", get_secret("SUBMIT_TIMEOUT_SECONDS"), 10.0),
        default_language=normalize_lang(get_secret("DEFAULT_LANGUAGE")),
        min_monthly_income=_as_float("MIN_MONTHLY_INCOME", get_secret("MIN_MONTHLY_INCOME"), 4000.0),
        strict_national_id=_is_truthy_flag(get_secret("STRICT_NATIONAL_ID")),
        reuse_reference_on_retry=_is_truthy_flag(get_secret("REUSE_REFERENCE_ON_RETRY")),
        analytics_enabled=True if analytics_raw is None else _is_truthy_flag(analytics_raw),
        log_level=(get_secret("LOG_LEVEL") or "INFO").strip().upper(),
    )


SETTINGS = load_settings()

LEADS_API_URL = SETTINGS.leads_api_url
LEADS_API_TOKEN = SETTINGS.leads_api_token
SUBMIT_TIMEOUT_SECONDS = SETTINGS.submit_timeout_seconds
DEFAULT_LANGUAGE = SETTINGS.default_language
MIN_MONTHLY_INCOME = SETTINGS.min_monthly_income
STRICT_NATIONAL_ID = SETTINGS.strict_national_id
REUSE_REFERENCE_ON_RETRY = SETTINGS.reuse_reference_on_retry
ANALYTICS_ENABLED = SETTINGS.analytics_enabled
LOG_LEVEL = SETTINGS.log_level

if LEADS_API_URL is None:
    logger.info("LEADS_API_URL not configured; submissions require a custom handler")


__all__ = [
    "ANALYTICS_ENABLED",
    "DEFAULT_LANGUAGE",
    "LEADS_API_TOKEN",
    "LEADS_API_URL",
    "LOG_LEVEL",
    "MIN_MONTHLY_INCOME",
    "REUSE_REFERENCE_ON_RETRY",
    "SETTINGS",
    "STRICT_NATIONAL_ID",
    "SUBMIT_TIMEOUT_SECONDS",
    "Settings",
    "get_secret",
    "load_settings",
]
