"""Tests for logging setup."""

import io
import json
import logging

import pytest

from translit.models import Language
from translit.utils.log import PACKAGE_LOGGER, log_with_context, setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate

    yield logger

    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_json_lines_keep_script_text(package_logger):
    stream = io.StringIO()
    logger = setup_logging(level="DEBUG", format_type="json", stream=stream)

    log_with_context(logger, "info", "Loaded කුමාරසිරි", rules={Language.SINHALA: 3})

    record = json.loads(stream.getvalue())
    assert record["message"] == "Loaded කුමාරසිරි"
    assert record["level"] == "INFO"
    assert record["context"] == {"rules": {"si": 3}}
    assert record["timestamp"].endswith("Z")


def test_module_loggers_use_package_handlers(package_logger):
    stream = io.StringIO()
    setup_logging(level="WARNING", stream=stream)

    logging.getLogger("translit.translator").info("hidden")
    logging.getLogger("translit.ingest.loader").warning("shown")

    output = stream.getvalue()
    assert "hidden" not in output
    assert "[ WARNING] translit.ingest.loader: shown" in output


def test_pretty_appends_context(package_logger):
    stream = io.StringIO()
    logger = setup_logging(level="INFO", stream=stream)

    log_with_context(logger, "info", "Loaded tables", rejected=0)

    assert stream.getvalue().rstrip().endswith("Loaded tables rejected=0")


def test_log_file_is_json(package_logger, temp_dir):
    log_file = temp_dir / "logs" / "translit.log"
    logger = setup_logging(level="INFO", stream=io.StringIO(), log_file=log_file)

    logger.info("to file")
    for handler in logger.handlers:
        handler.flush()

    assert json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])["message"] == "to file"
