"""
PCA Feature Selection

Replaces the candidate features with their top principal components:
1. Concatenate candidate columns into a temporary matrix
2. Min-max normalize each dimension independently to [0, 1]
3. Project onto the top-k principal components
4. Store the projection in the feature vector column

Output feature names are synthetic (PCA_Component_1..k) and cannot be traced
back to the original columns.
"""

import logging
from typing import List

import numpy as np
from sklearn.decomposition import PCA
from sklearn.preprocessing import MinMaxScaler

from ...config import FeatureEngineeringConfig, FeatureSelectionMethod, ModelType
from ...data.dataset import FEATURES_COLUMN, Dataset, validate_scalar_columns
from ...exceptions import SchemaError, TransformError
from ..base import FeatureSelector, SelectionResult
from ..report import SelectionReport

logger = logging.getLogger(__name__)

DEFAULT_MAX_COMPONENTS = 3
COMPONENT_PREFIX = "PCA_Component_"


def resolve_component_count(requested: int, n_candidates: int) -> int:
    """Clamp an invalid component count to min(n_candidates, 3)."""
    if requested <= 0 or requested > n_candidates:
        return min(n_candidates, DEFAULT_MAX_COMPONENTS)
    return requested


class PCAFeatureSelector(FeatureSelector):
    """Principal component projection of min-max normalized candidates."""

    method = FeatureSelectionMethod.PCA

    def _select(
        self,
        dataset: Dataset,
        candidate_features: List[str],
        model_type: ModelType,
        target_field: str,
        config: FeatureEngineeringConfig
    ) -> SelectionResult:
        if not candidate_features:
            raise SchemaError("No candidate features provided for PCA")
        # The target is carried through untouched, so it may be any type
        dataset.require_columns([target_field])
        validate_scalar_columns(dataset, candidate_features)

        report_warnings = []
        n_components = resolve_component_count(config.number_of_components, len(candidate_features))
        if n_components != config.number_of_components:
            message = (f"Invalid number of components ({config.number_of_components}). "
                       f"Using {n_components} instead.")
            logger.warning(message)
            report_warnings.append(message)

        logger.info(f"Applying PCA with {n_components} components to "
                    f"{len(candidate_features)} features ({dataset.row_count} rows)")

        X = dataset.feature_matrix(candidate_features)
        projected, explained = self._project(X, n_components)

        transformed = dataset.with_vector_values(FEATURES_COLUMN, projected)
        component_names = tuple(f"{COMPONENT_PREFIX}{i}" for i in range(1, n_components + 1))

        summary = SelectionReport(
            method=self.method,
            model_type=model_type,
            original_feature_count=len(candidate_features),
            selected=component_names,
            explained_variance_ratio=tuple(float(v) for v in explained),
            warnings=tuple(report_warnings)
        )

        logger.info(f"PCA completed: explained variance "
                    f"{float(np.sum(explained)):.1%} with {n_components} components")

        return SelectionResult(
            transformed_dataset=transformed,
            selected_feature_names=component_names,
            summary=summary
        )

    def _project(self, X: np.ndarray, n_components: int):
        """Normalize and project; numerical failures raise TransformError."""
        try:
            with np.errstate(divide='raise', invalid='raise', over='raise'):
                normalized = MinMaxScaler(feature_range=(0, 1)).fit_transform(X)
                pca = PCA(
                    n_components=n_components,
                    svd_solver='full',
                    random_state=self.context.seed
                )
                projected = pca.fit_transform(normalized)
        except (ValueError, FloatingPointError, np.linalg.LinAlgError) as e:
            raise TransformError(f"PCA projection failed: {e}") from e

        if not np.all(np.isfinite(projected)):
            raise TransformError("PCA projection produced non-finite values")

        return projected, pca.explained_variance_ratio_
