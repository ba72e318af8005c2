"""
Balancer factory keyed on DataBalanceMethod.
"""

from typing import Optional

from ..config import DataBalanceMethod, ProcessingContext
from ..exceptions import ConfigurationError
from .base import DataBalancer
from .smote import SmoteDataBalancer


def create_data_balancer(
    method: DataBalanceMethod,
    context: Optional[ProcessingContext] = None
) -> DataBalancer:
    """Build the balancer for a method tag (NONE has no balancer)."""
    if method == DataBalanceMethod.SMOTE:
        return SmoteDataBalancer(context)
    raise ConfigurationError(f"No balancer available for method: {method}")
