"""
Selector factory keyed on FeatureSelectionMethod.
"""

from typing import Optional

from ..config import FeatureSelectionMethod, ProcessingContext
from ..exceptions import ConfigurationError
from .base import FeatureSelector, IdentityFeatureSelector
from .projection.pca_selector import PCAFeatureSelector
from .statistical.correlation_selector import CorrelationFeatureSelector


def create_feature_selector(
    method: FeatureSelectionMethod,
    context: Optional[ProcessingContext] = None
) -> FeatureSelector:
    """Build the selector variant for a method tag."""
    if method == FeatureSelectionMethod.CORRELATION:
        return CorrelationFeatureSelector(context)
    if method == FeatureSelectionMethod.PCA:
        return PCAFeatureSelector(context)
    if method == FeatureSelectionMethod.NONE:
        return IdentityFeatureSelector(context)
    raise ConfigurationError(f"Unsupported feature selection method: {method}")
