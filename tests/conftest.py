from __future__ import annotations

# Standard Library Imports
import logging
import sys

# Third Party Imports
import pytest

# CHRONOSCALE Imports
from chronoscale.common import logger as chronoscale_logger
from chronoscale.common.behavioral_config import CONFIG_ENV_VARIABLE, BehavioralConfig
from chronoscale.time.leap_seconds import resetLeapSecondTable


@pytest.fixture(autouse=True)
def _patchMissingEnvVariables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Automatically delete each environment variable, if set.

    Args:
        monkeypatch (:class:`pytest.MonkeyPatch`): monkeypatch obj to track changes

    Note:
        This is used so tests can assume a "blank" configuration, and it won't
        overwrite a user's custom-set environment variables.
    """
    with monkeypatch.context() as m_patch:
        m_patch.delenv(CONFIG_ENV_VARIABLE, raising=False)
        yield
        # Make sure we reset the config after each test function
        BehavioralConfig()


@pytest.fixture(autouse=True)
def _resetLeapSecondTable() -> None:
    """Make sure every test starts from the default leap second table & a clean warning record."""
    resetLeapSecondTable()
    chronoscale_logger._ONCE_KEYS.clear()  # noqa: SLF001
    yield
    resetLeapSecondTable()


@pytest.fixture(scope="session", name="test_logger")
def getTestLoggerObject() -> logging.Logger:
    """Create a custom :class:`logging.Logger` object."""
    logger = logging.getLogger("Unit Test Logger")
    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger
