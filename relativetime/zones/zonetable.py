"""Zone Offset Tables
-------------------

An offset table is a pre-built, per-zone list of UTC offsets, each valid until
a UTC instant. Rows are sorted by increasing `until_ms`; the last row has no
until and covers every later instant:

    until_ms        offset_minutes
    1457863200000   480             # PST until 2016-03-13T10:00Z
    1478422800000   420             # PDT until 2016-11-06T09:00Z
    <NA>            480             # PST afterwards

`offset_minutes` counts minutes *behind* UTC (positive west of Greenwich), so
local time is `instant - offset_minutes * 60000`.

Tables are consumed read-only. Building them from zone databases is done
elsewhere; this module only validates, looks up and loads them.
"""

from __future__ import annotations
import logging
import math
import os
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from relativetime.errors import ConfigurationError
from relativetime.utils.dataloader import (
    find_data_file,
    format_not_found_error,
    load_parquet_or_csv,
)

logger = logging.getLogger(__name__)

ZONE_TABLES_ENV = "RELATIVETIME_ZONE_TABLES"

COLUMNS = ["until_ms", "offset_minutes"]


def _is_open_ended(until) -> bool:
    if until is None or until is pd.NA:
        return True
    try:
        return math.isnan(until) or math.isinf(until)
    except TypeError:
        return False


class OffsetTable:
    """Validated (until_ms, offset_minutes) table for one zone.

    Args:
        frame: DataFrame with `until_ms` and `offset_minutes` columns
        name: Optional zone label (e.g., "America/Los_Angeles")

    Raises:
        ConfigurationError: If the table is empty, unsorted, or not open-ended

    Examples:
        >>> table = OffsetTable.from_entries([(1457863200000, 480), (None, 420)])
        >>> table.offset_at(0)
        480
        >>> table.offset_at(1457863200000)
        420
    """

    def __init__(self, frame: pd.DataFrame, name: Optional[str] = None):
        missing = [col for col in COLUMNS if col not in frame.columns]
        if missing:
            raise ConfigurationError(f"Offset table missing required columns: {missing}")
        if frame.empty:
            raise ConfigurationError("Offset table has no rows")

        untils = list(frame["until_ms"])
        if not _is_open_ended(untils[-1]):
            raise ConfigurationError(
                f"Offset table last row must be open-ended, got until_ms={untils[-1]}"
            )
        bounded = untils[:-1]
        if any(_is_open_ended(u) for u in bounded):
            raise ConfigurationError("Only the last offset table row may be open-ended")

        try:
            bounded = pd.Series([int(u) for u in bounded], dtype="int64")
            offsets = [int(o) for o in frame["offset_minutes"]]
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Offset table contains non-integer values: {e}") from e

        if not (bounded.is_monotonic_increasing and bounded.is_unique):
            raise ConfigurationError("Offset table until_ms must be strictly increasing")

        self.name = name
        self._untils = bounded
        self._offsets = offsets

    # ---- Constructors ----

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Tuple[Optional[int], int]],
        name: Optional[str] = None,
    ) -> "OffsetTable":
        """Build from (until_ms | None, offset_minutes) pairs."""
        rows = list(entries)
        frame = pd.DataFrame(
            {
                "until_ms": pd.array([None if _is_open_ended(u) else int(u) for u, _ in rows], dtype="Int64"),
                "offset_minutes": [o for _, o in rows],
            },
            columns=COLUMNS,
        )
        return cls(frame, name=name)

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, name: Optional[str] = None) -> "OffsetTable":
        """Build from a DataFrame with `until_ms` and `offset_minutes` columns."""
        return cls(frame.reset_index(drop=True), name=name)

    @classmethod
    def from_zone_data(cls, data: Mapping, name: Optional[str] = None) -> "OffsetTable":
        """Build from unpacked zone data: {"untils": [...], "offsets": [...]}.

        This is the layout shipped by JavaScript zone-data packages, where the
        final until is null or Infinity.

        Examples:
            >>> data = {"name": "Etc/UTC", "untils": [None], "offsets": [0]}
            >>> OffsetTable.from_zone_data(data).offset_at(0)
            0
        """
        try:
            untils = list(data["untils"])
            offsets = list(data["offsets"])
        except KeyError as e:
            raise ConfigurationError(f"Zone data missing key: {e}") from e
        if len(untils) != len(offsets):
            raise ConfigurationError(
                f"Zone data has {len(untils)} untils but {len(offsets)} offsets"
            )
        return cls.from_entries(zip(untils, offsets), name=name or data.get("name"))

    # ---- Lookup ----

    def offset_at(self, epoch_ms: int) -> int:
        """Offset in minutes behind UTC at the given instant.

        Picks the first row whose until exceeds the instant, else the last row.
        """
        idx = int(self._untils.searchsorted(epoch_ms, side="right"))
        return self._offsets[idx]

    # ---- Introspection ----

    @property
    def entries(self) -> Sequence[Tuple[Optional[int], int]]:
        untils = [int(u) for u in self._untils] + [None]
        return list(zip(untils, self._offsets))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "until_ms": pd.array([u for u, _ in self.entries], dtype="Int64"),
                "offset_minutes": list(self._offsets),
            },
            columns=COLUMNS,
        )

    def to_file(self, path: Union[str, Path]) -> Path:
        """Write the table to .parquet (pyarrow) or .csv."""
        path = Path(path)
        frame = self.to_frame()
        if path.suffix == ".parquet":
            frame.to_parquet(path, index=False, engine="pyarrow")
        elif path.suffix == ".csv":
            frame.to_csv(path, index=False)
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}. Use .parquet or .csv")
        return path

    def __len__(self) -> int:
        return len(self._offsets)

    def __iter__(self) -> Iterator[Tuple[Optional[int], int]]:
        return iter(self.entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, OffsetTable):
            return NotImplemented
        return list(self.entries) == list(other.entries)

    def __hash__(self) -> int:
        return hash(tuple(self.entries))

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return f"OffsetTable({label}{len(self)} rows)"


# ---- File loading ----

def zone_table_filenames(zone_name: str) -> list[str]:
    """Candidate filenames for a zone's table.

    Examples:
        >>> zone_table_filenames("America/Los_Angeles")
        ['America_Los_Angeles.parquet', 'America_Los_Angeles.csv']
    """
    stem = zone_name.strip().replace("/", "_")
    return [f"{stem}.parquet", f"{stem}.csv"]


def load_offset_table(path: Union[str, Path], name: Optional[str] = None) -> OffsetTable:
    """Load an offset table from a .parquet or .csv file."""
    path = Path(path)
    frame = load_parquet_or_csv(path)
    table = OffsetTable.from_frame(frame, name=name or path.stem)
    logger.info(f"Loaded {len(table)} offset rows from {path}")
    return table


@lru_cache(maxsize=64)
def load_zone_table(zone_name: str, path: Optional[Union[str, Path]] = None) -> OffsetTable:
    """Load the offset table for a named zone.

    Loading priority:
    1. Explicit path if provided
    2. RELATIVETIME_ZONE_TABLES environment variable (directory)
    3. Package data (relativetime/zones/data/)

    Args:
        zone_name: Zone identifier (e.g., "Europe/Berlin")
        path: Optional explicit path to a table file

    Returns:
        OffsetTable labelled with zone_name

    Raises:
        FileNotFoundError: If no table file is available
    """
    if path is not None:
        return load_offset_table(path, name=zone_name)

    found_path = find_data_file(
        module_file=__file__,
        filenames=zone_table_filenames(zone_name),
        env_var=ZONE_TABLES_ENV,
        module_local_data=True,
    )
    if found_path is None:
        error_msg = format_not_found_error(
            subject=f"offset table for {zone_name}",
            searched_locations=[
                ("Explicit path", "Not provided"),
                ("Environment variable", os.environ.get(ZONE_TABLES_ENV, "Not set")),
                ("Package data", Path(__file__).parent / "data"),
            ],
            fix_instructions=[
                f"Set {ZONE_TABLES_ENV} to a directory containing {zone_table_filenames(zone_name)[0]}",
                "Or pass path= explicitly",
                "Or use the zone identifier directly and let python-dateutil resolve it",
            ],
        )
        raise FileNotFoundError(error_msg)

    return load_offset_table(found_path, name=zone_name)


__all__ = [
    "OffsetTable",
    "load_offset_table",
    "load_zone_table",
    "zone_table_filenames",
    "ZONE_TABLES_ENV",
]
