"""Tests for the loguru logging setup."""

import json
import logging

import pytest
from loguru import logger

from pay_api.logging import InterceptHandler, route_stdlib_logging, setup_logging, setup_sqlalchemy_logging


@pytest.fixture(autouse=True)
def restore_loguru():
    yield
    logger.remove()


def test_text_output(capsys):
    setup_logging("debug")

    logger.debug("Service: hello")

    err = capsys.readouterr().err
    assert "Log level set to: DEBUG (text output)" in err
    assert "Service: hello" in err


def test_json_output(capsys):
    setup_logging("INFO", json_logs=True)

    logger.info("Repository: stored")

    lines = [json.loads(line) for line in capsys.readouterr().err.splitlines()]
    assert lines[-1]["record"]["message"] == "Repository: stored"
    assert lines[-1]["record"]["level"]["name"] == "INFO"


def test_level_filters_lower_records(capsys):
    setup_logging("WARNING")

    logger.info("dropped")
    logger.warning("kept")

    err = capsys.readouterr().err
    assert "dropped" not in err
    assert "kept" in err


def test_stdlib_records_reach_loguru(capsys):
    setup_logging("INFO")

    logging.getLogger("uvicorn.error").info("Application startup complete.")

    assert "Application startup complete." in capsys.readouterr().err


def test_library_loggers_follow_application_level():
    setup_logging("ERROR")

    assert logging.getLogger("uvicorn.access").level == logging.ERROR
    assert logging.getLogger("mangum").level == logging.ERROR


def test_route_named_loggers_only():
    route_stdlib_logging(["pay_api.test.routed"])

    routed = logging.getLogger("pay_api.test.routed")
    assert [type(h) for h in routed.handlers] == [InterceptHandler]
    assert routed.propagate is False


def test_sqlalchemy_loggers_are_routed():
    setup_sqlalchemy_logging()

    engine_logger = logging.getLogger("sqlalchemy.engine")
    assert [type(h) for h in engine_logger.handlers] == [InterceptHandler]
    assert engine_logger.propagate is False
