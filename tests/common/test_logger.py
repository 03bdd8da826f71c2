from __future__ import annotations

# Standard Library Imports
import logging
import os

# Third Party Imports
import pytest

# CHRONOSCALE Imports
from chronoscale.common.logger import (
    LOGGER_NAME,
    Logger,
    chronoscaleLogCritical,
    chronoscaleLogDebug,
    chronoscaleLogError,
    chronoscaleLogInfo,
    chronoscaleLogWarning,
    chronoscaleLogWarningOnce,
)

# Local Imports
from .. import FIXTURE_DATA_DIR

CORRECT_OUTPUT: list[list[str | int]] = [
    ["test", logging.DEBUG, "This is a debug message."],
    ["test", logging.INFO, "This is an info message."],
    ["test", logging.WARNING, "This is a warning message."],
    ["test", logging.ERROR, "This is an error message."],
    ["test", logging.CRITICAL, "This is a critical message."],
]

CORRECT_FILE_OUTPUT: list[list[str]] = [
    ["test_logger", "DEBUG", "This is a debug message.\n"],
    ["test_logger", "INFO", "This is an info message.\n"],
    ["test_logger", "WARNING", "This is a warning message.\n"],
    ["test_logger", "ERROR", "This is an error message.\n"],
    ["test_logger", "CRITICAL", "This is a critical message.\n"],
]


def testStdout(caplog: pytest.LogCaptureFixture):
    """Test the logger's output to `sys.stdout`."""
    logger = Logger("test")
    assert logger.filename in ("stdout", None)
    logger.debug("This is a debug message.")
    logger.info("This is an info message.")
    logger.warning("This is a warning message.")
    logger.error("This is an error message.")
    logger.critical("This is a critical message.")

    assert [list(record) for record in caplog.record_tuples] == CORRECT_OUTPUT


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testLogfile(datafiles: str):
    """Test the logger's output to a logfile."""
    saved_cwd = os.getcwd()
    os.chdir(datafiles)
    try:
        file_logger = Logger("logfile-test", path="logs/")

        file_logger.debug("This is a debug message.")
        file_logger.info("This is an info message.")
        file_logger.warning("This is a warning message.")
        file_logger.error("This is an error message.")
        file_logger.critical("This is a critical message.")

        with open(file_logger.filename, encoding="utf-8") as logfile:
            lines = [line.split(" - ")[1:] for line in logfile]
        assert lines == CORRECT_FILE_OUTPUT
    finally:
        os.chdir(saved_cwd)


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testLogfileCreatesDirectory(datafiles: str):
    """Test that a missing log directory is created."""
    path = os.path.join(datafiles, "new_logs")
    file_logger = Logger("logfile-dir-test", path=path)
    assert os.path.isdir(path)
    assert os.path.dirname(file_logger.filename) == path


def testOneLiners(caplog: pytest.LogCaptureFixture):
    """Test the one-liner helpers log to the library logger at the right levels."""
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    chronoscaleLogDebug("debug")
    chronoscaleLogInfo("info")
    chronoscaleLogWarning("warning")
    chronoscaleLogError("error")
    chronoscaleLogCritical("critical")

    assert caplog.record_tuples == [
        (LOGGER_NAME, logging.DEBUG, "debug"),
        (LOGGER_NAME, logging.INFO, "info"),
        (LOGGER_NAME, logging.WARNING, "warning"),
        (LOGGER_NAME, logging.ERROR, "error"),
        (LOGGER_NAME, logging.CRITICAL, "critical"),
    ]


def testWarningOnce(caplog: pytest.LogCaptureFixture):
    """Test that a keyed warning is only emitted the first time."""
    assert chronoscaleLogWarningOnce("stale-data", "data is stale")
    assert not chronoscaleLogWarningOnce("stale-data", "data is stale")
    assert chronoscaleLogWarningOnce("other", "other warning")

    messages = [record.getMessage() for record in caplog.records if record.name == LOGGER_NAME]
    assert messages == ["data is stale", "other warning"]
