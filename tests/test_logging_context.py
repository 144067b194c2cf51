from __future__ import annotations

import logging
from typing import Any

from utils.logging_context import (
    configure_logging,
    current_context,
    log_context,
    set_session_id,
    set_sub_step,
    set_wizard_step,
)


def test_log_records_carry_wizard_context(caplog: Any) -> None:
    configure_logging()
    set_session_id("session-123")
    logger = logging.getLogger("test.logging.wizard")
    caplog.set_level(logging.INFO, logger=logger.name)

    with log_context(wizard_step="identity", sub_step=2):
        logger.info("Answer stored")

    record = next(record for record in caplog.records if record.message == "Answer stored")
    assert record.session_id == "session-123"
    assert record.wizard_step == "identity"
    assert record.sub_step == "2"


def test_log_context_restores_previous_values(caplog: Any) -> None:
    configure_logging()
    set_wizard_step("language")
    set_sub_step("intro")
    logger = logging.getLogger("test.logging.restore")
    caplog.set_level(logging.INFO, logger=logger.name)

    with log_context(wizard_step="preview", sub_step=0):
        assert current_context()["wizard_step"] == "preview"
        assert current_context()["sub_step"] == "0"
    logger.info("After context")

    record = next(record for record in caplog.records if record.message == "After context")
    assert record.wizard_step == "language"
    assert record.sub_step == "intro"


def test_blank_values_fall_back_to_placeholder(caplog: Any) -> None:
    configure_logging()
    logger = logging.getLogger("test.logging.blank")
    caplog.set_level(logging.INFO, logger=logger.name)

    with log_context(session_id="  ", wizard_step=""):
        logger.info("Blank context")

    record = next(record for record in caplog.records if record.message == "Blank context")
    assert record.session_id == "-"
    assert record.wizard_step == "-"
