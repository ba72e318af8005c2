"""
Processing orchestration: data balancing and feature selection in a
configurable order.
"""

from .processor import BALANCING_STAGE, SELECTION_STAGE, DataProcessor, is_balancing_first
from .results import ProcessedData

__all__ = [
    'BALANCING_STAGE',
    'SELECTION_STAGE',
    'DataProcessor',
    'is_balancing_first',
    'ProcessedData'
]
