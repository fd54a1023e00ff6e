from __future__ import annotations

import json
import logging

import pytest

from qa_service.logging_utils import log_event

_LOGGER_NAME = "qa_service.tests.logging_utils"


class _Unprintable:
    def __str__(self) -> str:
        raise RuntimeError("must not be serialized")


def test_log_event_writes_sorted_json(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger=_LOGGER_NAME)

    log_event(
        logging.getLogger(_LOGGER_NAME),
        logging.INFO,
        "qa_ingestion_completed",
        shape="qa_detail",
        records_emitted=2,
        filename=None,
        error_desc="용어 오류",
    )

    assert len(caplog.records) == 1
    message = caplog.records[0].getMessage()
    assert json.loads(message) == {
        "event": "qa_ingestion_completed",
        "shape": "qa_detail",
        "records_emitted": 2,
        "error_desc": "용어 오류",
    }
    assert "용어 오류" in message
    assert message.index('"error_desc"') < message.index('"event"')


def test_log_event_skips_disabled_levels(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger=_LOGGER_NAME)

    log_event(logging.getLogger(_LOGGER_NAME), logging.DEBUG, "qa_row_debug", value=_Unprintable())

    assert caplog.records == []
