"""
Data Processor - balancing and feature selection orchestration

Builds the baseline feature vector, decides whether data balancing or
feature selection runs first, runs each enabled stage on the previous
stage's output and assembles the ProcessedData handed to training.

Processing Pipeline:
1. Current features = enabled fields minus the target (order preserved)
2. Baseline feature vector column when the dataset has none
3. Execution order: balancing first when its order <= the selection order
4. Enabled stages, strictly sequential
5. ProcessedData with counts, report and method/order audit fields

Any stage failure is logged with its stage and propagated unchanged; the
caller gets either a complete ProcessedData or the error.
"""

import logging
import time
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

import psutil

from ..balancing.base import DataBalancer
from ..balancing.factory import create_data_balancer
from ..config import (
    DataBalanceMethod,
    DataBalancingConfig,
    FeatureEngineeringConfig,
    FeatureSelectionMethod,
    ModelConfig,
    ProcessingContext
)
from ..data.dataset import FEATURES_COLUMN, Dataset
from ..exceptions import ConfigurationError
from ..feature_selection.base import FeatureSelector
from ..feature_selection.factory import create_feature_selector
from .results import ProcessedData

logger = logging.getLogger(__name__)

BALANCING_STAGE = "data_balancing"
SELECTION_STAGE = "feature_selection"


def is_balancing_first(
    balancing: DataBalancingConfig,
    selection: FeatureEngineeringConfig
) -> bool:
    """Balancing runs first when its execution order is <= the selection order."""
    return balancing.execution_order <= selection.execution_order


class DataProcessor:
    """
    Sequences data balancing and feature selection for one dataset.

    Each process_data() call is independent: stages never overlap and every
    stage binds a new dataset handle instead of mutating its input.
    """

    def __init__(
        self,
        context: Optional[ProcessingContext] = None,
        balancer: Optional[DataBalancer] = None,
        selector_factory: Callable[..., FeatureSelector] = create_feature_selector
    ):
        """
        Initialize data processor.

        Args:
            context: Numeric context (seed, executor) passed into every stage
            balancer: Balancer to use when balancing is enabled; built from the
                configured method when omitted
            selector_factory: Builds a selector from (method, context)
        """
        self.context = context or ProcessingContext()
        self.balancer = balancer
        self.selector_factory = selector_factory

    def _monitor_memory(self, stage: str) -> float:
        """Process memory usage in GB."""
        memory_gb = psutil.Process().memory_info().rss / 1024 / 1024 / 1024
        logger.debug(f"Memory usage at {stage}: {memory_gb:.2f}GB")
        return memory_gb

    def _resolve_balancer(self, method: DataBalanceMethod) -> DataBalancer:
        if self.balancer is not None:
            return self.balancer
        return create_data_balancer(method, self.context)

    async def process_data(
        self,
        dataset: Dataset,
        enabled_fields: Sequence[str],
        config: ModelConfig
    ) -> ProcessedData:
        """
        Run the configured balancing and feature selection stages.

        Args:
            dataset: Raw dataset with the enabled fields and the target
            enabled_fields: Enabled field names (may include the target)
            config: Model configuration

        Returns:
            ProcessedData for the training stage
        """
        logger.info("=============== Processing Data ===============")

        target_field = config.target_field
        balancing = config.data_balancing
        selection = config.feature_engineering

        current_features: List[str] = list(dict.fromkeys(
            f for f in enabled_fields if f != target_field
        ))
        if not current_features:
            raise ConfigurationError(
                f"No feature fields remain after excluding target '{target_field}'"
            )

        original_count = dataset.row_count
        balanced_count = original_count
        selection_report = ""
        selection_summary = None
        stages_run: List[str] = []
        stats: Dict[str, Dict[str, float]] = {}

        logger.info(f"Input: {original_count} rows, {len(current_features)} features, "
                    f"target={target_field}")

        balancing_first = is_balancing_first(balancing, selection)
        if (balancing.method != DataBalanceMethod.NONE
                and selection.method != FeatureSelectionMethod.NONE):
            logger.info(f"Processing order: "
                        f"{'Data Balancing then Feature Selection' if balancing_first else 'Feature Selection then Data Balancing'}")

        order = [BALANCING_STAGE, SELECTION_STAGE] if balancing_first else [SELECTION_STAGE, BALANCING_STAGE]
        current_stage = "feature_vector"

        try:
            processed = dataset
            if not processed.has_column(FEATURES_COLUMN):
                processed = processed.with_vector_column(FEATURES_COLUMN, current_features)

            for stage in order:
                current_stage = stage
                start_time = time.time()

                if stage == BALANCING_STAGE:
                    if balancing.method == DataBalanceMethod.NONE:
                        continue
                    balancer = self._resolve_balancer(balancing.method)
                    processed = await balancer.balance_dataset(
                        processed,
                        current_features,
                        balancing,
                        target_field
                    )
                    balanced_count = processed.row_count
                    logger.info(f"Data balanced. New count: {balanced_count}")

                else:
                    if selection.method == FeatureSelectionMethod.NONE:
                        continue
                    selector = self.selector_factory(selection.method, self.context)
                    result = await selector.select_features(
                        processed,
                        current_features,
                        config.model_type,
                        target_field,
                        selection
                    )
                    processed = result.transformed_dataset
                    current_features = list(result.selected_feature_names)
                    selection_report = result.report
                    selection_summary = result.summary
                    logger.info(selection_report)

                stages_run.append(stage)
                stats[stage] = {
                    'elapsed_seconds': time.time() - start_time,
                    'memory_gb': self._monitor_memory(stage),
                    'rows': processed.row_count,
                    'features': len(current_features)
                }

        except Exception as e:
            logger.error(f"Error during data processing (stage={current_stage}, "
                         f"target={target_field}, rows={original_count}): {e}")
            raise

        logger.info(f"Processing completed at {datetime.now().isoformat()}: "
                    f"{original_count} → {balanced_count} rows, "
                    f"{len(current_features)} features, stages={stages_run}")

        return ProcessedData(
            data=processed,
            feature_names=tuple(current_features),
            original_sample_count=original_count,
            balanced_sample_count=balanced_count,
            selection_report=selection_report,
            selection_method=selection.method,
            balancing_method=balancing.method,
            balancing_order=balancing.execution_order,
            selection_order=selection.execution_order,
            model_type=config.model_type,
            target_field=target_field,
            stages_run=tuple(stages_run),
            selection_summary=selection_summary,
            processing_stats=stats
        )
