"""
Immutable tabular dataset handle.

Wraps a pandas DataFrame with a typed column schema (numeric, boolean,
vector-of-numeric). Every transformation returns a new Dataset; the wrapped
frame is never mutated after construction and row order is always preserved.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from ..exceptions import SchemaError, TransformError, UnsupportedColumnTypeError

logger = logging.getLogger(__name__)

FEATURES_COLUMN = "Features"


class ColumnKind(Enum):
    """Logical column types understood by the processing stages."""
    NUMERIC = "numeric"
    BOOLEAN = "boolean"
    VECTOR = "vector"
    OTHER = "other"


def infer_column_kind(series: pd.Series) -> ColumnKind:
    """Infer the logical kind of a pandas column."""
    dtype = series.dtype
    if pd.api.types.is_bool_dtype(dtype):
        return ColumnKind.BOOLEAN
    if pd.api.types.is_numeric_dtype(dtype) and not pd.api.types.is_complex_dtype(dtype):
        return ColumnKind.NUMERIC
    if pd.api.types.is_object_dtype(dtype):
        non_null = series.dropna()
        if len(non_null) > 0 and isinstance(non_null.iloc[0], (np.ndarray, list, tuple)):
            return ColumnKind.VECTOR
    return ColumnKind.OTHER


class Dataset:
    """
    Immutable, row-oriented table with a named, typed column schema.

    Vector columns store one numeric array per row (e.g. the concatenated
    feature vector). Scalar columns may be any integer/float width or bool.
    """

    def __init__(self, frame: pd.DataFrame):
        self._frame = frame.copy()
        self._schema: Dict[str, ColumnKind] = {
            str(name): infer_column_kind(self._frame[name]) for name in self._frame.columns
        }

    @classmethod
    def from_pandas(cls, frame: pd.DataFrame) -> 'Dataset':
        """Create a dataset from a DataFrame (the frame is copied)."""
        if frame.columns.duplicated().any():
            duplicated = frame.columns[frame.columns.duplicated()].tolist()
            raise SchemaError(f"Duplicate column names: {duplicated}")
        return cls(frame)

    def to_pandas(self) -> pd.DataFrame:
        """Return a copy of the underlying DataFrame."""
        return self._frame.copy()

    @property
    def row_count(self) -> int:
        return len(self._frame)

    @property
    def column_names(self) -> List[str]:
        return list(self._schema.keys())

    @property
    def schema(self) -> Dict[str, ColumnKind]:
        return dict(self._schema)

    def has_column(self, name: str) -> bool:
        return name in self._schema

    def column_kind(self, name: str) -> ColumnKind:
        self.require_columns([name])
        return self._schema[name]

    def require_columns(self, names: Sequence[str]) -> None:
        """Raise SchemaError if any of the given columns is missing."""
        missing = [name for name in names if name not in self._schema]
        if missing:
            raise SchemaError(
                f"Column(s) not found in schema: {missing}",
                column=missing[0]
            )

    def column_values(self, name: str) -> np.ndarray:
        """
        Extract a scalar column as a float64 array.

        Integer and floating widths are widened to float64; booleans map
        true -> 1.0 and false -> 0.0; missing values become NaN.
        """
        kind = self.column_kind(name)
        if kind not in (ColumnKind.NUMERIC, ColumnKind.BOOLEAN):
            raise UnsupportedColumnTypeError(name, kind.value)
        return self._frame[name].to_numpy(dtype=np.float64, na_value=np.nan)

    def feature_matrix(self, names: Sequence[str]) -> np.ndarray:
        """
        Concatenate columns into a (rows x dims) float64 matrix.

        Scalar columns contribute one dimension; vector columns contribute
        their full length.
        """
        self.require_columns(names)
        blocks = []
        for name in names:
            kind = self._schema[name]
            if kind in (ColumnKind.NUMERIC, ColumnKind.BOOLEAN):
                blocks.append(self.column_values(name).reshape(-1, 1))
            elif kind == ColumnKind.VECTOR:
                blocks.append(self._vector_block(name))
            else:
                raise UnsupportedColumnTypeError(name, kind.value)

        if not blocks:
            return np.empty((self.row_count, 0), dtype=np.float64)
        return np.hstack(blocks)

    def _vector_block(self, name: str) -> np.ndarray:
        values = self._frame[name].tolist()
        if not values:
            return np.empty((0, 0), dtype=np.float64)
        try:
            return np.vstack([np.asarray(v, dtype=np.float64).ravel() for v in values])
        except (TypeError, ValueError) as e:
            raise TransformError(
                f"Vector column '{name}' has ragged or non-numeric rows: {e}"
            ) from e

    def with_vector_column(self, name: str, columns: Sequence[str]) -> 'Dataset':
        """Return a new dataset with `columns` concatenated into vector column `name`."""
        return self.with_vector_values(name, self.feature_matrix(columns))

    def with_vector_values(self, name: str, matrix: np.ndarray) -> 'Dataset':
        """Return a new dataset with a vector column built from matrix rows."""
        matrix = np.array(matrix, dtype=np.float64, copy=True)
        if matrix.ndim != 2 or matrix.shape[0] != self.row_count:
            raise TransformError(
                f"Cannot attach matrix of shape {matrix.shape} as column '{name}' "
                f"to dataset with {self.row_count} rows"
            )

        frame = self._frame.copy()
        frame[name] = pd.Series(list(matrix), index=frame.index, dtype=object)
        return Dataset(frame)

    def drop_columns(self, names: Sequence[str]) -> 'Dataset':
        """Return a new dataset without the given columns."""
        self.require_columns(names)
        return Dataset(self._frame.drop(columns=list(names)))

    def __len__(self) -> int:
        return self.row_count

    def __repr__(self) -> str:
        columns = ', '.join(f"{k}:{v.value}" for k, v in self._schema.items())
        return f"Dataset(rows={self.row_count}, columns=[{columns}])"


def validate_scalar_columns(dataset: Dataset, names: Sequence[str],
                            target_field: Optional[str] = None) -> None:
    """
    Check that every named column (and the target) exists and is scalar numeric/boolean.

    Raises:
        SchemaError: a column is missing
        UnsupportedColumnTypeError: a column is not numeric or boolean
    """
    required = list(names) + ([target_field] if target_field is not None else [])
    dataset.require_columns(required)
    for name in required:
        kind = dataset.column_kind(name)
        if kind not in (ColumnKind.NUMERIC, ColumnKind.BOOLEAN):
            raise UnsupportedColumnTypeError(name, kind.value)
