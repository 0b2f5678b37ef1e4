"""Funnel and conversion events emitted by the wizard.

Events are plain data produced by the transitions in :mod:`wizard.machine`.
Sinks deliver them elsewhere; delivery is fire-and-forget and a failing sink
never changes the wizard state.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Protocol, Sequence

from opentelemetry import trace

logger = logging.getLogger(__name__)

LEAD_SOURCE = "website"


@dataclass(frozen=True)
class TrackingEvent:
    """A single analytics event (category/action/label plus custom dimensions)."""

    category: str
    action: str
    label: str | None = None
    dimensions: Mapping[str, str | int | bool] = field(default_factory=dict)

    def as_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "event": self.action,
            "event_category": self.category,
            "event_label": self.label,
        }
        payload.update(self.dimensions)
        return payload


def form_started(form_type: str) -> TrackingEvent:
    return TrackingEvent(category="form", action="form_started", label=form_type)


def form_step_completed(form_type: str, step_number: int, step_id: str) -> TrackingEvent:
    return TrackingEvent(
        category="form",
        action="form_step_completed",
        label=form_type,
        dimensions={"form_step": step_number, "form_step_name": step_id},
    )


def form_submitted(form_type: str, reference_number: str | None) -> TrackingEvent:
    return TrackingEvent(
        category="conversion",
        action="form_submitted",
        label=form_type,
        dimensions={"reference_number": reference_number or "N/A"},
    )


def lead_generated(product_type: str, lead_source: str = LEAD_SOURCE) -> TrackingEvent:
    return TrackingEvent(
        category="conversion",
        action="lead_generated",
        label=product_type,
        dimensions={"lead_source": lead_source},
    )


class EventSink(Protocol):
    def __call__(self, event: TrackingEvent) -> None: ...


class NullEventSink:
    def __call__(self, event: TrackingEvent) -> None:
        return None


class LoggingEventSink:
    """Write each event as a JSON log line."""

    def __init__(self, log: logging.Logger | None = None, *, level: int = logging.INFO) -> None:
        self._log = log or logging.getLogger("lead_wizard.analytics")
        self._level = level

    def __call__(self, event: TrackingEvent) -> None:
        self._log.log(self._level, "[Analytics] %s", json.dumps(event.as_dict(), ensure_ascii=False, default=str))


class TracingEventSink:
    """Attach events to the active OpenTelemetry span."""

    def __call__(self, event: TrackingEvent) -> None:
        span = trace.get_current_span()
        if not span.is_recording():
            return
        attributes: dict[str, str | int | bool] = {"event.category": event.category}
        if event.label is not None:
            attributes["event.label"] = event.label
        for key, value in event.dimensions.items():
            attributes[f"event.{key}"] = value
        span.add_event(event.action, attributes=attributes)


class ConsentAwareSink:
    """Forward events only while the visitor has granted analytics consent."""

    def __init__(self, inner: EventSink, has_consent: Callable[[], bool]) -> None:
        self._inner = inner
        self._has_consent = has_consent

    def __call__(self, event: TrackingEvent) -> None:
        if not self._has_consent():
            logger.debug("[Analytics] Event blocked - no consent: %s", event.action)
            return
        self._inner(event)


class CompositeEventSink:
    """Fan out to several sinks; one failing sink does not starve the others."""

    def __init__(self, sinks: Sequence[EventSink]) -> None:
        self._sinks = tuple(sinks)

    def __call__(self, event: TrackingEvent) -> None:
        dispatch_events(self._sinks, (event,))


def dispatch_events(sinks: EventSink | Iterable[EventSink], events: Iterable[TrackingEvent]) -> None:
    """Deliver ``events`` to ``sinks``, logging and discarding sink failures."""

    targets: tuple[EventSink, ...] = tuple(sinks) if isinstance(sinks, Iterable) else (sinks,)
    for event in events:
        for sink in targets:
            try:
                sink(event)
            except Exception:
                logger.warning("Event sink %r failed for '%s'", sink, event.action, exc_info=True)


__all__ = [
    "CompositeEventSink",
    "ConsentAwareSink",
    "EventSink",
    "LEAD_SOURCE",
    "LoggingEventSink",
    "NullEventSink",
    "TracingEventSink",
    "TrackingEvent",
    "dispatch_events",
    "form_started",
    "form_step_completed",
    "form_submitted",
    "lead_generated",
]
