"""
Data balancing capability.

A balancer takes a dataset, the current feature names, its configuration
and the target field, and returns a new dataset with an adjusted class
distribution (and usually a different row count). The input dataset is
never mutated.
"""

import asyncio
import functools
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..config import DataBalanceMethod, DataBalancingConfig, ProcessingContext
from ..data.dataset import Dataset

logger = logging.getLogger(__name__)


class DataBalancer(ABC):
    """Base class for class-balancing strategies."""

    method: DataBalanceMethod = DataBalanceMethod.NONE

    def __init__(self, context: Optional[ProcessingContext] = None):
        self.context = context or ProcessingContext()

    async def balance_dataset(
        self,
        dataset: Dataset,
        feature_names: Sequence[str],
        config: DataBalancingConfig,
        target_field: str
    ) -> Dataset:
        """
        Balance the class distribution of the dataset.

        Args:
            dataset: Input dataset (never mutated)
            feature_names: Current feature names
            config: Data balancing configuration
            target_field: Class label column

        Returns:
            New dataset with adjusted class distribution
        """
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            self.context.executor,
            functools.partial(self._balance, dataset, list(feature_names), config, target_field)
        )

    @abstractmethod
    def _balance(
        self,
        dataset: Dataset,
        feature_names: List[str],
        config: DataBalancingConfig,
        target_field: str
    ) -> Dataset:
        """Synchronous balancing body."""
