from __future__ import annotations

import logging
from io import StringIO

from surfcast.logging.init import (
    LabeledFormatter,
    SUMMARY_LEVEL,
    SourceLogAdapter,
    get_logger,
    log_summary,
    reset_logging,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    reset_logging()
    logger = setup_logging()

    assert logger.name == "surfcast"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)
    assert logger.propagate is False


def test_logging_labeled_prefixes():
    captured_output = StringIO()
    logger = logging.getLogger("test_surfcast_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_get_logger_returns_configured_logger():
    reset_logging()
    setup_logger = setup_logging()
    assert get_logger() is setup_logger
    assert setup_logging() is setup_logger  # idempotent


def test_get_logger_sets_up_on_first_use():
    reset_logging()
    logger = get_logger()
    assert logger.name == "surfcast"
    assert len(logger.handlers) == 1


def test_child_module_loggers_reach_labeled_handler(capsys):
    reset_logging()
    setup_logging()
    logging.getLogger("surfcast.services.pipeline").warning("child message")
    assert "WARN child message" in capsys.readouterr().out


def test_log_summary(capsys):
    reset_logging()
    setup_logging()
    log_summary("sources=0/0")
    assert "SUMMARY sources=0/0" in capsys.readouterr().out


def test_reset_logging_restores_propagation():
    setup_logging()
    reset_logging()
    logger = logging.getLogger("surfcast")
    assert logger.handlers == []
    assert logger.propagate is True


def test_source_tag_from_adapter():
    captured_output = StringIO()
    logger = logging.getLogger("test_surfcast_source_tag")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    SourceLogAdapter(logger, "data/kitaizumi.csv").warning("no records")
    logger.info("run-level line")

    assert captured_output.getvalue().splitlines() == [
        "WARN [data/kitaizumi.csv] no records",
        "INFO run-level line",
    ]


def test_setup_logging_custom_stream():
    reset_logging()
    stream = StringIO()
    setup_logging(stream=stream)
    logging.getLogger("surfcast.services.pipeline").warning("to stream")
    assert stream.getvalue() == "WARN to stream\n"
    reset_logging()


def test_pipeline_warning_carries_source(capsys):
    from surfcast.services.pipeline import load_forecast

    reset_logging()
    setup_logging()
    load_forecast("a,b\n1,2\n", source="bad.csv")
    assert "WARN [bad.csv] no timestamp column" in capsys.readouterr().out
    reset_logging()
