"""
Statistical Feature Selection Module

Correlation-based selection of a minimal, low-redundancy feature subset.

Key Components:
- Pearson correlation engine (target correlations and pairwise matrix)
- Ranking by absolute target correlation
- Greedy selection under a multicollinearity threshold
"""

from .correlation_matrix import CorrelationAnalysis, CorrelationMatrixEngine
from .correlation_selector import (
    CorrelationFeatureSelector,
    GreedySelection,
    rank_features,
    select_greedy
)

__all__ = [
    'CorrelationAnalysis',
    'CorrelationMatrixEngine',
    'CorrelationFeatureSelector',
    'GreedySelection',
    'rank_features',
    'select_greedy'
]
