"""
File-based dataset source.

Reads a CSV or Parquet file with pandas and keeps only the enabled input
fields plus the target field, in that order.
"""

import logging
from pathlib import Path
from typing import List, Sequence, Union

import pandas as pd

from ..exceptions import SchemaError
from .dataset import Dataset

logger = logging.getLogger(__name__)


def load_dataset(
    path: Union[str, Path],
    enabled_fields: Sequence[str],
    target_field: str
) -> Dataset:
    """
    Load a dataset restricted to the enabled fields and the target.

    Args:
        path: CSV (.csv) or Parquet (.parquet/.pq) file
        enabled_fields: Input columns to keep
        target_field: Target column (always kept)

    Returns:
        Dataset with the requested columns
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    logger.info(f"Loading data from {path}")
    if path.suffix.lower() in ('.parquet', '.pq'):
        frame = pd.read_parquet(path)
    else:
        frame = pd.read_csv(path)

    columns: List[str] = list(dict.fromkeys(list(enabled_fields) + [target_field]))
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise SchemaError(f"Columns missing from {path.name}: {missing}", column=missing[0])

    logger.info(f"Loaded {len(frame)} rows, keeping {len(columns)} of {len(frame.columns)} columns")
    return Dataset.from_pandas(frame[columns])
