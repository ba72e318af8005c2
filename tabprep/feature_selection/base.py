"""
Feature selection capability shared by all selectors.

Every selector exposes the same asynchronous operation:

    select_features(dataset, candidate_features, model_type, target_field, config)
        -> SelectionResult

The CPU-bound work runs in the executor held by the caller's
ProcessingContext so the calling event loop is never blocked.
"""

import asyncio
import functools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..config import FeatureEngineeringConfig, FeatureSelectionMethod, ModelType, ProcessingContext
from ..data.dataset import Dataset
from .report import SelectionReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionResult:
    """Output of a feature selection run."""

    transformed_dataset: Dataset
    selected_feature_names: Tuple[str, ...]
    summary: Optional[SelectionReport] = None

    @property
    def report(self) -> str:
        """Rendered report text (empty when no selection ran)."""
        return self.summary.render() if self.summary is not None else ""


class FeatureSelector(ABC):
    """Base class for feature selection strategies."""

    method: FeatureSelectionMethod = FeatureSelectionMethod.NONE

    def __init__(self, context: Optional[ProcessingContext] = None):
        self.context = context or ProcessingContext()

    async def select_features(
        self,
        dataset: Dataset,
        candidate_features: Sequence[str],
        model_type: ModelType,
        target_field: str,
        config: FeatureEngineeringConfig
    ) -> SelectionResult:
        """
        Select features from the candidate list.

        Args:
            dataset: Input dataset (never mutated)
            candidate_features: Ordered candidate column names
            model_type: Model type the data is prepared for
            target_field: Target column name
            config: Feature engineering configuration

        Returns:
            SelectionResult with the transformed dataset, selected names and report
        """
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            self.context.executor,
            functools.partial(
                self._select,
                dataset,
                list(candidate_features),
                model_type,
                target_field,
                config
            )
        )

    @abstractmethod
    def _select(
        self,
        dataset: Dataset,
        candidate_features: List[str],
        model_type: ModelType,
        target_field: str,
        config: FeatureEngineeringConfig
    ) -> SelectionResult:
        """Synchronous selection body."""


class IdentityFeatureSelector(FeatureSelector):
    """No-op selector: returns the dataset and candidates unchanged."""

    method = FeatureSelectionMethod.NONE

    def _select(self, dataset, candidate_features, model_type, target_field, config):
        return SelectionResult(
            transformed_dataset=dataset,
            selected_feature_names=tuple(candidate_features)
        )
