"""
Data balancing capability and the SMOTE adapter.
"""

from .base import DataBalancer
from .factory import create_data_balancer
from .smote import SmoteDataBalancer

__all__ = [
    'DataBalancer',
    'create_data_balancer',
    'SmoteDataBalancer'
]
