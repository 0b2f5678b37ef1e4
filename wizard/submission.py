"""Submission pipeline: reference numbers, payloads and submitters."""

from __future__ import annotations

import asyncio
import inspect
import logging
import random
import time
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Awaitable, Callable, Mapping, Protocol

import requests
from opentelemetry import trace

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

LeadPayload = dict[str, Any]
SubmitHandler = Callable[[Mapping[str, Any], str], Awaitable[None] | None]


class SubmissionError(RuntimeError):
    """Raised by submitters when a lead was not accepted."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class SubmissionOutcome:
    ok: bool
    reference_number: str
    error: str | None = None

    @classmethod
    def success(cls, reference_number: str) -> SubmissionOutcome:
        return cls(ok=True, reference_number=reference_number)

    @classmethod
    def failure(cls, reference_number: str, error: str) -> SubmissionOutcome:
        return cls(ok=False, reference_number=reference_number, error=error)


def generate_reference_number(
    prefix: str,
    *,
    clock: Callable[[], float] = time.time,
    rng: random.Random | None = None,
) -> str:
    """Return ``<prefix><epoch milliseconds><4 random digits>``, e.g. ``INQ17290000000001234``."""

    millis = int(clock() * 1000)
    suffix = (rng or random).randint(0, 9999)
    return f"{prefix}{millis}{suffix:04d}"


def _json_safe(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value


def build_payload(record: Mapping[str, Any], reference_number: str, form_type: str) -> LeadPayload:
    """Return the wire payload ``{...record, referenceNumber, formType}``."""

    payload: LeadPayload = {str(key): _json_safe(value) for key, value in record.items()}
    payload["referenceNumber"] = reference_number
    payload["formType"] = str(form_type)
    return payload


class Submitter(Protocol):
    async def __call__(self, payload: LeadPayload) -> None: ...


class HttpSubmitter:
    """POST leads as JSON to ``endpoint``.

    ``requests`` is blocking, so each call runs in a worker thread.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = 10.0,
        session: requests.Session | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session or requests.Session()
        self._headers = {"Content-Type": "application/json", **(headers or {})}

    def _post(self, payload: LeadPayload) -> None:
        try:
            response = self._session.post(
                self.endpoint,
                json=payload,
                headers=self._headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise SubmissionError(f"Lead submission request failed: {exc}") from exc
        if not 200 <= response.status_code < 300:
            raise SubmissionError(
                f"Lead submission rejected with HTTP {response.status_code}",
                status_code=response.status_code,
            )

    async def __call__(self, payload: LeadPayload) -> None:
        await asyncio.to_thread(self._post, payload)


class CallbackSubmitter:
    """Adapt a ``handler(record, reference_number)`` callable (sync or async)."""

    def __init__(self, handler: SubmitHandler) -> None:
        self._handler = handler

    async def __call__(self, payload: LeadPayload) -> None:
        record = {key: value for key, value in payload.items() if key not in {"referenceNumber", "formType"}}
        result = self._handler(record, payload["referenceNumber"])
        if inspect.isawaitable(result):
            await result


class SubmissionPipeline:
    """Run exactly one submission attempt and report the outcome."""

    def __init__(self, submitter: Submitter) -> None:
        self._submitter = submitter

    async def run(self, record: Mapping[str, Any], reference_number: str, form_type: str) -> SubmissionOutcome:
        payload = build_payload(record, reference_number, form_type)
        with tracer.start_as_current_span("lead.submit") as span:
            span.set_attribute("lead.form_type", str(form_type))
            span.set_attribute("lead.reference_number", reference_number)
            try:
                await self._submitter(payload)
            except Exception as exc:
                logger.exception("Lead submission %s failed", reference_number)
                span.record_exception(exc)
                span.set_status(trace.Status(trace.StatusCode.ERROR, str(exc)))
                return SubmissionOutcome.failure(reference_number, str(exc))
        logger.info("Lead submission %s accepted", reference_number)
        return SubmissionOutcome.success(reference_number)


def default_submitter(
    endpoint: str | None,
    *,
    timeout: float,
    token: str | None = None,
) -> Submitter:
    """Return an :class:`HttpSubmitter` for ``endpoint``.

    Raises:
        RuntimeError: If no endpoint is configured.
    """

    if not endpoint:
        raise RuntimeError("LEADS_API_URL is missing. Set the variable or pass a submit handler.")
    headers = {"Authorization": f"Bearer {token}"} if token else None
    return HttpSubmitter(endpoint, timeout=timeout, headers=headers)


__all__ = [
    "CallbackSubmitter",
    "HttpSubmitter",
    "LeadPayload",
    "SubmissionError",
    "SubmissionOutcome",
    "SubmissionPipeline",
    "SubmitHandler",
    "Submitter",
    "build_payload",
    "default_submitter",
    "generate_reference_number",
]
