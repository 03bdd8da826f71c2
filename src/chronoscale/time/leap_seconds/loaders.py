"""Module defining the infrastructure used to retrieve leap second tables from various sources."""

from __future__ import annotations

# Standard Library Imports
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse
from urllib.request import urlopen

# Local Imports
from ...common.exceptions import LeapSecondTableError
from ...common.logger import chronoscaleLogError, chronoscaleLogInfo
from .table import LeapSecondTable

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable


def parseLeapSecondsList(lines: Iterable[str]) -> LeapSecondTable:
    """Parse the contents of an IETF/IERS ``leap-seconds.list`` file.

    Data lines hold an NTP timestamp and the TAI - UTC offset that applies from it onward,
    followed by an optional ``#`` comment. The ``#@`` line holds the NTP expiration time of the
    file. Every other line starting with ``#`` is ignored.

    Args:
        lines (``Iterable``): text lines of the file

    Returns:
        :class:`.LeapSecondTable`: table built from the data lines

    Raises:
        LeapSecondTableError: if a data line or the expiration line is malformed, or the file
            has no data lines.
    """
    rows = []
    expires_ntp = None
    for number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line:
            continue
        if line.startswith("#@"):
            try:
                expires_ntp = int(line[2:].split()[0])
            except (IndexError, ValueError) as error:
                msg = f"Malformed expiration on line {number}: {raw_line!r}"
                chronoscaleLogError(msg)
                raise LeapSecondTableError(msg) from error
            continue
        if line.startswith("#"):
            continue

        fields = line.split("#", 1)[0].split()
        try:
            rows.append((int(fields[0]), int(fields[1])))
        except (IndexError, ValueError) as error:
            msg = f"Malformed leap second entry on line {number}: {raw_line!r}"
            chronoscaleLogError(msg)
            raise LeapSecondTableError(msg) from error

    if not rows:
        msg = "No leap second entries found"
        chronoscaleLogError(msg)
        raise LeapSecondTableError(msg)

    return LeapSecondTable.fromNtpSeconds(rows, expires_ntp=expires_ntp)


class LeapSecondLoader(ABC):
    """Abstract class defining how a :class:`.LeapSecondTable` should be loaded."""

    def __init__(self, location: str):
        """Initializes the loader.

        Args:
            location (str): Specifies where the leap second content to load is located.
        """
        self._location: str = location
        self._table: LeapSecondTable | None = None

    @property
    def location(self) -> str:
        """str: where this loader reads its leap second content from."""
        return self._location

    def getTable(self) -> LeapSecondTable:
        """Return the loaded :class:`.LeapSecondTable`, loading it on first use."""
        if self._table is None:
            self._table = self.load()
            chronoscaleLogInfo(f"Loaded {self._table!r} using {type(self).__name__}")
        return self._table

    @abstractmethod
    def load(self) -> LeapSecondTable:
        """Read the leap second content and build a table from it."""
        raise NotImplementedError


class BuiltinLeapSecondLoader(LeapSecondLoader):
    """Concrete class returning the table compiled into :mod:`.leap_seconds.table`.

    The location is ignored, so this loader never touches the filesystem or network.
    """

    def load(self) -> LeapSecondTable:
        """Return the built-in table."""
        return LeapSecondTable.builtin()


class ModuleLeapSecondLoader(LeapSecondLoader):
    """Concrete class defining how a ``leap-seconds.list`` should be loaded as a Python module resource."""

    DATA_MODULE: str = "chronoscale.data"
    """``str``: defines leap second data module location."""

    def load(self) -> LeapSecondTable:
        """Loads the leap second resource."""
        res = resources.files(self.DATA_MODULE).joinpath(self._location)
        with resources.as_file(res) as file_resource, open(file_resource, encoding="utf-8") as lsf:
            return parseLeapSecondsList(lsf)


class LocalLeapSecondLoader(LeapSecondLoader):
    """Concrete class defining how a local ``leap-seconds.list`` file should be loaded."""

    def __init__(self, location: str) -> None:
        """Initializes the loader.

        Args:
            location (str): path to the leap second file.
        """
        super().__init__(location)
        self._path = Path(self._location)

    def load(self) -> LeapSecondTable:
        """Load the leap second file."""
        with open(self._path, encoding="utf-8") as lsf:
            return parseLeapSecondsList(lsf)


class RemoteLeapSecondLoader(LeapSecondLoader):
    """Concrete class defining how a remote ``leap-seconds.list`` file should be loaded.

    The file is downloaded once and cached under :attr:`.CACHE_LOCATION`.
    """

    CACHE_LOCATION = Path("~/.chronoscale/leap-seconds-cache/").expanduser()
    """Path: Path to directory that remote files are cached in."""

    def __init__(self, location: str, clear_cache: bool = False) -> None:
        """Initializes the Loader.

        Args:
            location (str): URL to remote leap second file.
            clear_cache (bool,optional): Flag indicating whether to clear the cached file to force
                pulling data from the URL.
        """
        super().__init__(location)
        self._parsed_url = urlparse(self._location)
        if not self._parsed_url.netloc:
            err = f"Unable to parse URL: {self._location}"
            raise ValueError(err)

        fs_safe_netloc = self._parsed_url.netloc.replace(".", "_")
        fs_safe_url_path = self._parsed_url.path.lstrip("/")
        self._cache_path = self.CACHE_LOCATION / fs_safe_netloc / fs_safe_url_path
        if clear_cache:
            self._cache_path.unlink(missing_ok=True)

    @property
    def cache_path(self) -> Path:
        """Path: file the remote content is cached in."""
        return self._cache_path

    def load(self) -> LeapSecondTable:
        """Load the cached copy, downloading the leap second file first if it isn't cached.

        Downloaded content is only written to the cache once it parses, so a failed or garbled
        download leaves no cache file behind and the next load downloads again.

        Raises:
            LeapSecondTableError: if the downloaded content isn't a valid ``leap-seconds.list``.
        """
        if self._cache_path.exists():
            with open(self._cache_path, encoding="utf-8") as lsf:
                return parseLeapSecondsList(lsf)

        chronoscaleLogInfo(f"Downloading leap second data from {self._location}")
        with urlopen(self._location) as remote_data:  # noqa: S310
            content = remote_data.read()
        table = parseLeapSecondsList(content.decode("utf-8", errors="replace").splitlines())

        self._cache_path.parent.mkdir(parents=True, exist_ok=True)
        partial_path = self._cache_path.with_name(self._cache_path.name + ".part")
        partial_path.write_bytes(content)
        partial_path.replace(self._cache_path)
        return table
