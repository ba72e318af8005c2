"""
Correlation Matrix Engine

Computes the absolute Pearson correlation of each candidate feature against
the target, and the full candidate x candidate Pearson correlation matrix.

Key behaviour:
- Columns are extracted directly from the dataset and coerced to float64
  (integer/float widths widened, booleans mapped to 1.0/0.0)
- Correlations use the full, row-aligned columns (no sampling)
- A coefficient that cannot be computed (zero variance, NaN values, fewer
  than two rows) degrades to 0.0 and is flagged instead of aborting the run
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from ...data.dataset import Dataset, validate_scalar_columns
from ..report import CorrelationValue

logger = logging.getLogger(__name__)


@dataclass
class CorrelationAnalysis:
    """Target correlations and pairwise matrix for a candidate set."""

    target_correlations: Dict[str, CorrelationValue]
    matrix: pd.DataFrame
    degenerate_features: List[str]

    def pairwise(self, feature_a: str, feature_b: str) -> float:
        """Absolute pairwise correlation between two candidates."""
        return abs(float(self.matrix.at[feature_a, feature_b]))

    def high_correlation_pairs(self, threshold: float) -> List[Tuple[str, str, float]]:
        """Pairs with |corr| >= threshold, strongest first."""
        names = self.matrix.columns.tolist()
        values = self.matrix.abs().values
        pairs = []
        for i in range(len(names)):
            for j in range(i + 1, len(names)):
                if values[i, j] >= threshold:
                    pairs.append((names[i], names[j], float(values[i, j])))
        pairs.sort(key=lambda x: x[2], reverse=True)
        return pairs


class CorrelationMatrixEngine:
    """Pearson correlation engine over dataset columns."""

    def compute(
        self,
        dataset: Dataset,
        candidate_features: Sequence[str],
        target_field: str
    ) -> CorrelationAnalysis:
        """
        Compute target correlations and the pairwise correlation matrix.

        Args:
            dataset: Source dataset
            candidate_features: Scalar numeric/boolean columns to analyse
            target_field: Numeric/boolean target column

        Returns:
            CorrelationAnalysis with |corr| against the target per feature and
            the signed candidate x candidate matrix

        Raises:
            SchemaError: a candidate or the target is missing
            UnsupportedColumnTypeError: a column is not numeric or boolean
        """
        candidate_features = list(candidate_features)
        validate_scalar_columns(dataset, candidate_features, target_field)

        logger.info(f"Calculating correlations for {len(candidate_features)} features "
                    f"over {dataset.row_count} rows")

        y = dataset.column_values(target_field)
        X = dataset.feature_matrix(candidate_features)

        target_correlations = {}
        for i, feature in enumerate(candidate_features):
            target_correlations[feature] = self.target_correlation(feature, X[:, i], y)

        matrix, degenerate = self._pairwise_matrix(candidate_features, X)

        degraded = [f for f, v in target_correlations.items() if v.degraded]
        if degraded:
            logger.warning(f"{len(degraded)} target correlations degraded to 0.0: {degraded}")

        return CorrelationAnalysis(
            target_correlations=target_correlations,
            matrix=matrix,
            degenerate_features=degenerate
        )

    def target_correlation(self, feature: str, x: np.ndarray, y: np.ndarray) -> CorrelationValue:
        """Absolute Pearson correlation of one feature against the target."""
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore")
                r, _ = stats.pearsonr(x, y)
        except (ValueError, FloatingPointError) as e:
            logger.warning(f"Error calculating correlation for {feature}: {e}")
            return CorrelationValue.degraded_to_zero(str(e))

        r = float(r)
        if not np.isfinite(r):
            logger.warning(f"Correlation for {feature} is undefined (constant or missing values)")
            return CorrelationValue.degraded_to_zero("undefined coefficient")

        return CorrelationValue(value=abs(r))

    def _pairwise_matrix(
        self,
        names: List[str],
        X: np.ndarray
    ) -> Tuple[pd.DataFrame, List[str]]:
        """Signed Pearson matrix; undefined entries degrade to 0.0."""
        n_features = len(names)
        if n_features == 0:
            return pd.DataFrame(np.empty((0, 0)), index=names, columns=names), []

        if X.shape[0] < 2:
            raw = np.full((n_features, n_features), np.nan)
        else:
            with np.errstate(divide='ignore', invalid='ignore'), warnings.catch_warnings():
                warnings.simplefilter("ignore", RuntimeWarning)
                raw = np.atleast_2d(np.corrcoef(X, rowvar=False))

        degenerate_mask = ~np.isfinite(np.diag(raw))
        matrix = np.where(np.isfinite(raw), raw, 0.0)
        matrix = np.clip((matrix + matrix.T) / 2.0, -1.0, 1.0)
        np.fill_diagonal(matrix, np.where(degenerate_mask, 0.0, 1.0))

        degenerate = [name for name, flag in zip(names, degenerate_mask) if flag]
        if degenerate:
            logger.warning(f"Degenerate features (zero variance or missing values), "
                           f"pairwise correlations set to 0.0: {degenerate}")

        return pd.DataFrame(matrix, index=names, columns=names), degenerate
