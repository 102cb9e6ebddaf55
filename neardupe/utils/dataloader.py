"""Shared data loading utilities.

This module provides common data loading patterns: locating the bundled
linguistic resource files, parsing YAML, and reading record tables for the
batch dedupe helpers.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd
import yaml


def find_data_file(
    module_file: str,
    subdirectory: str,
    filenames: List[str],
    module_local_data: bool = True,
    data_dir: Optional[Path] = None,
) -> Optional[Path]:
    """Find data file by searching standard locations.

    Search priority:
    1. Explicit directory (if data_dir is given)
    2. Module-local data: {module_dir}/data/ (if module_local_data=True)
    3. Package data: neardupe/data/{subdirectory}/

    Args:
        module_file: __file__ from the calling module
        subdirectory: Subdirectory name (e.g., 'resources')
        filenames: Candidate filenames, first match wins (e.g., ['en.yaml'])
        module_local_data: If True, search module_dir/data/ first
        data_dir: Optional override directory searched before anything else

    Returns:
        Path to found file, or None if not found

    Examples:
        >>> path = find_data_file(__file__, 'resources', ['countries.yaml'])
    """
    if data_dir is not None:
        for filename in filenames:
            p = Path(data_dir) / filename
            if p.exists():
                return p
        return None

    if module_local_data:
        local_dir = Path(module_file).parent / "data"
        for filename in filenames:
            p = local_dir / filename
            if p.exists():
                return p

    pkg_dir = Path(module_file).parent.parent
    shared_dir = pkg_dir / "data" / subdirectory
    for filename in filenames:
        p = shared_dir / filename
        if p.exists():
            return p

    return None


def load_yaml_file(path: Path) -> dict:
    """Load and parse a YAML mapping.

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If the document is not a mapping
        yaml.YAMLError: If the file is not valid YAML
    """
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def load_parquet_or_csv(file_path: Path) -> pd.DataFrame:
    """Load DataFrame from parquet or CSV file based on extension.

    CSV columns are read as strings so postcodes keep their leading zeros.

    Raises:
        ValueError: If file extension is not .parquet or .csv
    """
    if file_path.suffix == ".parquet":
        return pd.read_parquet(file_path)
    elif file_path.suffix == ".csv":
        return pd.read_csv(file_path, dtype=str, keep_default_na=False)
    else:
        raise ValueError(f"Unsupported file format: {file_path.suffix}. Use .parquet or .csv")


def format_not_found_error(
    subdirectory: str,
    searched_locations: List[Tuple[str, Path]],
    fix_instructions: List[str],
) -> str:
    """Format a helpful error message for missing data files.

    Args:
        subdirectory: Data subdirectory name (e.g., 'resources')
        searched_locations: List of (description, path) tuples for locations searched
        fix_instructions: List of commands/instructions to fix the issue

    Returns:
        Formatted error message string
    """
    lines = [f"No {subdirectory} data found in standard locations.\n"]

    lines.append("Searched:")
    for i, (desc, path) in enumerate(searched_locations, 1):
        lines.append(f"  {i}. {desc}: {path}")

    lines.append("\nTo fix:")
    for instruction in fix_instructions:
        lines.append(f"  • {instruction}")

    return "\n".join(lines)


__all__ = [
    "find_data_file",
    "load_yaml_file",
    "load_parquet_or_csv",
    "format_not_found_error",
]
