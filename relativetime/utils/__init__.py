"""Shared utilities for relativetime modules."""

from relativetime.utils.dataloader import (
    find_data_file,
    load_parquet_or_csv,
    format_not_found_error,
)
from relativetime.utils.resolver import (
    normalize_identifier,
    suggest_closest,
)

__all__ = [
    "find_data_file",
    "load_parquet_or_csv",
    "format_not_found_error",
    "normalize_identifier",
    "suggest_closest",
]
