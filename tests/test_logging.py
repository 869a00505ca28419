from __future__ import annotations

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from chainhash import log
from chainhash.config import LoggingPolicy
from chainhash.core.chained import ChainedHashMap


def test_json_formatter_with_exc_and_stack() -> None:
    formatter = log.JsonFormatter()
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.getLogger("test").makeRecord(
            "test", logging.ERROR, __file__, 0, "failure", (), sys.exc_info(), func="func"
        )
    record.stack_info = "trace info"
    payload = json.loads(formatter.format(record))
    assert payload["level"] == "ERROR"
    assert payload["msg"] == "failure"
    assert "exc_info" in payload
    assert payload["stack"]


@pytest.mark.usefixtures("restore_chainhash_logger")
def test_configure_logging_json_and_file(tmp_path: Path) -> None:
    log_file = tmp_path / "chainhash.log"
    logger = log.configure_logging(use_json=True, log_file=str(log_file))
    assert logger is logging.getLogger("chainhash")
    logger.error("error message")
    assert any(isinstance(handler, RotatingFileHandler) for handler in logger.handlers)
    assert log_file.exists()
    line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
    assert json.loads(line)["msg"] == "error message"


@pytest.mark.usefixtures("restore_chainhash_logger")
def test_configure_logging_replaces_handlers() -> None:
    log.configure_logging()
    log.configure_logging()
    logger = logging.getLogger("chainhash")
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO


@pytest.mark.usefixtures("restore_chainhash_logger")
def test_resize_lands_in_configured_file(tmp_path: Path) -> None:
    log_file = tmp_path / "resize.log"
    log.configure_logging_from(LoggingPolicy(level="debug", file=str(log_file)))
    m = ChainedHashMap()
    for i in range(6):
        m.put(i, i)
    text = log_file.read_text(encoding="utf-8")
    assert "Allocated chain for bucket 0" in text
    assert "Resized chained table 5 -> 11 buckets (entries=6)" in text
