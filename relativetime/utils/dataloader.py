"""Shared data loading utilities for zone offset tables.

This module provides the data loading pattern used by the zones package:
search an explicit location, an environment-configured directory and the
package data directory, then read parquet or CSV into a DataFrame.
"""

import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import pandas as pd


def find_data_file(
    module_file: str,
    filenames: Sequence[str],
    env_var: Optional[str] = None,
    module_local_data: bool = True,
) -> Optional[Path]:
    """Find data file by searching standard locations.

    Search priority:
    1. Directory named by environment variable env_var (if set)
    2. Module-local data: {module_dir}/data/ (if module_local_data=True)

    Args:
        module_file: __file__ from the calling module
        filenames: Candidate filenames to search for (e.g., ['UTC.parquet', 'UTC.csv'])
        env_var: Name of an environment variable pointing at a data directory
        module_local_data: If True, search module_dir/data/

    Returns:
        Path to found file, or None if not found

    Examples:
        >>> # From zones/zonetable.py
        >>> path = find_data_file(__file__, ['Europe_Berlin.parquet', 'Europe_Berlin.csv'],
        ...                       env_var='RELATIVETIME_ZONE_TABLES')
    """
    search_dirs: List[Path] = []

    if env_var:
        env_dir = os.environ.get(env_var)
        if env_dir:
            search_dirs.append(Path(env_dir))

    if module_local_data:
        search_dirs.append(Path(module_file).parent / "data")

    for data_dir in search_dirs:
        for filename in filenames:
            p = data_dir / filename
            if p.exists():
                return p

    return None


def load_parquet_or_csv(file_path: Union[str, Path]) -> pd.DataFrame:
    """Load DataFrame from parquet or CSV file based on extension.

    Args:
        file_path: Path to parquet or CSV file

    Returns:
        Loaded DataFrame

    Raises:
        ValueError: If file extension is not .parquet or .csv
    """
    file_path = Path(file_path)
    if file_path.suffix == ".parquet":
        return pd.read_parquet(file_path)
    elif file_path.suffix == ".csv":
        return pd.read_csv(file_path)
    else:
        raise ValueError(f"Unsupported file format: {file_path.suffix}. Use .parquet or .csv")


def format_not_found_error(
    subject: str,
    searched_locations: List[Tuple[str, object]],
    fix_instructions: List[str],
) -> str:
    """Format a helpful FileNotFoundError message.

    Args:
        subject: What was being looked for (e.g., 'offset table for Europe/Berlin')
        searched_locations: List of (description, path) tuples for locations searched
        fix_instructions: List of commands/instructions to fix the issue

    Returns:
        Formatted error message string
    """
    lines = [f"No {subject} found in standard locations.\n"]

    lines.append("Searched:")
    for i, (desc, path) in enumerate(searched_locations, 1):
        lines.append(f"  {i}. {desc}: {path}")

    lines.append("\nTo fix:")
    for instruction in fix_instructions:
        lines.append(f"  • {instruction}")

    return "\n".join(lines)
