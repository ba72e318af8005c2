"""
Projection-based feature extraction (principal components).
"""

from .pca_selector import PCAFeatureSelector, resolve_component_count

__all__ = [
    'PCAFeatureSelector',
    'resolve_component_count'
]
