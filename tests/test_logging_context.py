from __future__ import annotations

import asyncio
import logging
from typing import Any

from constants.keys import FormType
from state.session import ensure_session_id
from utils.logging_context import configure_logging, log_context, set_session_id
from wizard.controller import LeadWizard


def test_wizard_logging_includes_context(caplog: Any, pipeline, contact_values: dict[str, Any]) -> None:
    configure_logging()
    set_session_id("session-123")
    caplog.set_level(logging.INFO, logger="wizard.submission")
    wizard = LeadWizard(FormType.CONTACT, pipeline=pipeline, locale="en")
    for key, value in contact_values.items():
        wizard.edit(key, value)

    asyncio.run(wizard.submit())

    records = [record for record in caplog.records if "accepted" in record.message]
    assert records, "Expected a submission log entry"
    record = records[0]
    assert record.session_id == "session-123"
    assert record.form_type == "contact"
    assert record.wizard_step == "contact"


def test_log_context_restores_previous_values(caplog: Any) -> None:
    configure_logging()
    logger = logging.getLogger("test.logging.context")
    caplog.set_level(logging.INFO, logger=logger.name)

    with log_context(form_type="complaint", wizard_step="complaint"):
        logger.info("inside")
    logger.info("outside")

    inside, outside = caplog.records[-2:]
    assert inside.form_type == "complaint"
    assert inside.wizard_step == "complaint"
    assert outside.form_type == "-"
    assert outside.wizard_step == "-"


def test_records_carry_the_browser_session_id(caplog: Any) -> None:
    configure_logging()
    session_id = ensure_session_id()
    set_session_id(session_id)
    logger = logging.getLogger("test.logging.session")
    caplog.set_level(logging.INFO, logger=logger.name)

    logger.info("rerun")

    assert caplog.records[-1].session_id == session_id
    assert session_id != "-"
