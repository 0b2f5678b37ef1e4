"""Session state utilities."""

from .session import (
    build_event_sink,
    build_pipeline,
    ensure_session_id,
    load_wizard,
    prefill_from_query,
    store_wizard,
)

__all__ = [
    "build_event_sink",
    "build_pipeline",
    "ensure_session_id",
    "load_wizard",
    "prefill_from_query",
    "store_wizard",
]
