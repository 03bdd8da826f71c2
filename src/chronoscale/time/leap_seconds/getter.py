"""Module defining how to retrieve the active :class:`.LeapSecondTable`."""

from __future__ import annotations

# Standard Library Imports
from collections import namedtuple
from typing import TYPE_CHECKING

# Local Imports
from ...common.behavioral_config import BehavioralConfig
from ...common.logger import chronoscaleLogInfo
from .loaders import (
    BuiltinLeapSecondLoader,
    LocalLeapSecondLoader,
    ModuleLeapSecondLoader,
    RemoteLeapSecondLoader,
)

if TYPE_CHECKING:
    # Local Imports
    from .loaders import LeapSecondLoader
    from .table import LeapSecondTable


LoaderTag = namedtuple("LoaderTag", ("loader_name", "loader_location"))
"""NamedTuple: Tag used to identify different :class:`.LeapSecondLoader`'s."""

_LOADER_MAP: dict[str, type[LeapSecondLoader]] = {
    "BuiltinLeapSecondLoader": BuiltinLeapSecondLoader,
    "ModuleLeapSecondLoader": ModuleLeapSecondLoader,
    "LocalLeapSecondLoader": LocalLeapSecondLoader,
    "RemoteLeapSecondLoader": RemoteLeapSecondLoader,
}
"""dict[str, type[LeapSecondLoader]]: Maps loader class names to loader class references."""

_LEAP_SECOND_LOADERS: dict[LoaderTag, LeapSecondLoader] = {}
"""dict[LoaderTag, LeapSecondLoader]: Stores configured loaders based on tag."""

_ACTIVE_TABLE: LeapSecondTable | None = None
"""LeapSecondTable | None: table installed by :func:`.setLeapSecondTable`, if any."""


def _loadLoader(loader_name: str | None = None, loader_location: str | None = None) -> LeapSecondLoader:
    """Return leap second loader specified by `loader_name` and `loader_location`.

    Args:
        loader_name (str, optional): Name of the concrete :class:`.LeapSecondLoader` to use.
        loader_location (str, optional): Location that the specified :class:`.LeapSecondLoader`
            will load data from.

    Returns:
        LeapSecondLoader: loader specified by `loader_name` and `loader_location`.

    Raises:
        ValueError: if `loader_name` isn't a known loader.
    """
    behave_config = BehavioralConfig.getConfig()
    if loader_name is None:
        loader_name = behave_config.leap_seconds.LoaderName

    if loader_location is None:
        loader_location = behave_config.leap_seconds.LoaderLocation

    tag = LoaderTag(loader_name, loader_location)
    loader = _LEAP_SECOND_LOADERS.get(tag)
    if not loader:
        try:
            loader = _LOADER_MAP[loader_name](loader_location)
        except KeyError:
            err = f"Specified loader '{loader_name}' is undefined"
            raise ValueError(err)  # noqa: B904
        _LEAP_SECOND_LOADERS[tag] = loader
    return loader


def getLeapSecondTable(
    loader_name: str | None = None,
    loader_location: str | None = None,
) -> LeapSecondTable:
    """Return the leap second table conversions should use.

    When no loader is named, a table installed with :func:`.setLeapSecondTable` wins over the
    configured loader.

    Args:
        loader_name (str, optional): Name of the concrete :class:`.LeapSecondLoader` to use.
        loader_location (str, optional): Location that the specified :class:`.LeapSecondLoader`
            will load data from.

    Returns:
        :class:`.LeapSecondTable`: the requested table.
    """
    if _ACTIVE_TABLE is not None and loader_name is None and loader_location is None:
        return _ACTIVE_TABLE
    return _loadLoader(loader_name, loader_location).getTable()


def setLeapSecondTable(table: LeapSecondTable):
    """Install `table` as the default returned by :func:`.getLeapSecondTable`.

    Readers that already hold the previous table keep using it unchanged.
    """
    global _ACTIVE_TABLE  # noqa: PLW0603
    _ACTIVE_TABLE = table
    chronoscaleLogInfo(f"Installed {table!r} as the active leap second table")


def resetLeapSecondTable():
    """Forget the installed table and every cached loader."""
    global _ACTIVE_TABLE  # noqa: PLW0603
    _ACTIVE_TABLE = None
    _LEAP_SECOND_LOADERS.clear()
