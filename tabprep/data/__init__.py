"""
Dataset handle and file-based dataset source.
"""

from .dataset import FEATURES_COLUMN, ColumnKind, Dataset, infer_column_kind
from .loader import load_dataset

__all__ = [
    'FEATURES_COLUMN',
    'ColumnKind',
    'Dataset',
    'infer_column_kind',
    'load_dataset'
]
