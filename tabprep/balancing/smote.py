"""
SMOTE balancing adapter.

Oversampling itself is delegated to imbalanced-learn; this adapter only maps
a Dataset to the (X, y) arrays SMOTE expects and back.

The samples are taken from the feature vector column when present, else
from the scalar feature columns. Synthetic rows only exist for the feature
vector, the target and (when the vector is exactly the concatenation of the
scalar feature columns) those scalar columns; any other column is dropped
from the balanced dataset.
"""

import logging
from typing import List

import numpy as np
import pandas as pd
from imblearn.over_sampling import SMOTE

from ..config import DataBalanceMethod, DataBalancingConfig
from ..data.dataset import FEATURES_COLUMN, ColumnKind, Dataset
from ..exceptions import TransformError
from .base import DataBalancer

logger = logging.getLogger(__name__)


class SmoteDataBalancer(DataBalancer):
    """Synthetic minority oversampling via imbalanced-learn."""

    method = DataBalanceMethod.SMOTE

    def _balance(
        self,
        dataset: Dataset,
        feature_names: List[str],
        config: DataBalancingConfig,
        target_field: str
    ) -> Dataset:
        dataset.require_columns([target_field])
        source = dataset.to_pandas()

        if dataset.has_column(FEATURES_COLUMN):
            X = dataset.feature_matrix([FEATURES_COLUMN])
        else:
            X = dataset.feature_matrix(feature_names)
        y = source[target_field].to_numpy()

        class_counts = pd.Series(y).value_counts().to_dict()
        logger.info(f"Applying SMOTE to {dataset.row_count} rows, class counts: {class_counts}")

        smote = SMOTE(
            sampling_strategy=config.sampling_strategy,
            k_neighbors=config.k_neighbors,
            random_state=self.context.seed
        )
        try:
            X_res, y_res = smote.fit_resample(X, y)
        except ValueError as e:
            raise TransformError(f"SMOTE oversampling failed: {e}") from e

        frame = pd.DataFrame(index=pd.RangeIndex(len(y_res)))
        if self._vector_matches_columns(dataset, X, feature_names):
            for i, name in enumerate(feature_names):
                if dataset.column_kind(name) == ColumnKind.BOOLEAN:
                    frame[name] = X_res[:, i] >= 0.5
                else:
                    frame[name] = X_res[:, i]

        frame[target_field] = pd.Series(y_res).astype(source[target_field].dtype)
        frame[FEATURES_COLUMN] = pd.Series(list(np.asarray(X_res, dtype=np.float64)), dtype=object)

        dropped = [c for c in dataset.column_names if c not in frame.columns]
        if dropped:
            logger.info(f"Columns without synthetic values dropped after SMOTE: {dropped}")

        balanced_counts = pd.Series(y_res).value_counts().to_dict()
        logger.info(f"SMOTE produced {len(y_res)} rows, class counts: {balanced_counts}")
        return Dataset.from_pandas(frame)

    @staticmethod
    def _vector_matches_columns(dataset: Dataset, X: np.ndarray, feature_names: List[str]) -> bool:
        """True when the sampled matrix is exactly the scalar feature columns, in order."""
        scalar_kinds = (ColumnKind.NUMERIC, ColumnKind.BOOLEAN)
        if X.shape[1] != len(feature_names):
            return False
        if not all(dataset.has_column(n) and dataset.column_kind(n) in scalar_kinds
                   for n in feature_names):
            return False
        if not np.array_equal(X, dataset.feature_matrix(feature_names), equal_nan=True):
            logger.warning(f"{FEATURES_COLUMN} vector differs from columns {feature_names}; "
                           f"the scalar columns are dropped instead of overwritten")
            return False
        return True
