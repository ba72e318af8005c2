"""
Feature Selection Module

Two interchangeable strategies behind one capability:
- CorrelationFeatureSelector: ranked, multicollinearity-pruned subset of the
  original features
- PCAFeatureSelector: synthetic orthogonal components of the normalized features
- IdentityFeatureSelector: no selection (features passed through)
"""

from .base import FeatureSelector, IdentityFeatureSelector, SelectionResult
from .factory import create_feature_selector
from .projection import PCAFeatureSelector
from .report import CorrelationValue, SelectionReport, SkippedFeature
from .statistical import CorrelationFeatureSelector, CorrelationMatrixEngine

__all__ = [
    'FeatureSelector',
    'IdentityFeatureSelector',
    'SelectionResult',
    'create_feature_selector',
    'PCAFeatureSelector',
    'CorrelationValue',
    'SelectionReport',
    'SkippedFeature',
    'CorrelationFeatureSelector',
    'CorrelationMatrixEngine'
]
