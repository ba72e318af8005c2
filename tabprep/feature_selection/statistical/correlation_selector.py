"""
Correlation-based Feature Selection with Multicollinearity Pruning

Ranks candidate features by absolute Pearson correlation with the target and
greedily keeps the strongest ones, skipping any candidate whose absolute
correlation with an already selected feature exceeds the multicollinearity
threshold.

Selection Pipeline:
1. Target correlations and pairwise matrix (CorrelationMatrixEngine)
2. Ranking by descending |corr| with the target (stable: ties keep candidate order)
3. Greedy selection under the redundancy threshold, up to max_features
4. Fallback to the top-ranked feature when nothing was selected
5. Rebuild the feature vector column from the selected features, in selection order
"""

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Sequence

import pandas as pd

from ...config import FeatureEngineeringConfig, FeatureSelectionMethod, ModelType
from ...data.dataset import FEATURES_COLUMN, Dataset
from ...exceptions import SchemaError
from ..base import FeatureSelector, SelectionResult
from ..report import SelectionReport, SkippedFeature
from .correlation_matrix import CorrelationMatrixEngine

logger = logging.getLogger(__name__)


@dataclass
class GreedySelection:
    """Outcome of the greedy redundancy-constrained selection."""
    selected: List[str] = field(default_factory=list)
    skipped: List[SkippedFeature] = field(default_factory=list)
    fallback_used: bool = False


def rank_features(
    candidate_features: Sequence[str],
    target_correlations: Mapping[str, float]
) -> List[str]:
    """
    Rank candidates by descending absolute target correlation.

    The sort is stable, so features with equal correlation keep their
    original candidate order.
    """
    return sorted(candidate_features, key=lambda f: -abs(target_correlations[f]))


def select_greedy(
    ranked_features: Sequence[str],
    correlation_matrix: pd.DataFrame,
    threshold: float,
    max_features: int
) -> GreedySelection:
    """
    Greedily select features subject to a pairwise redundancy threshold.

    A candidate is skipped when max(|corr(candidate, s)|) over the already
    selected features s exceeds the threshold. Iteration stops once
    max_features features are selected. If nothing was selected (only
    possible when max_features == 0) the top-ranked feature is kept.

    Args:
        ranked_features: Candidates in ranking order
        correlation_matrix: Pairwise correlations indexed by feature name
        threshold: Multicollinearity threshold
        max_features: Maximum number of features to keep

    Returns:
        GreedySelection with selected features in selection order
    """
    result = GreedySelection()

    for candidate in ranked_features:
        if len(result.selected) >= max_features:
            break

        max_corr = 0.0
        conflicts_with = None
        for selected in result.selected:
            corr = abs(float(correlation_matrix.at[candidate, selected]))
            if corr > max_corr:
                max_corr = corr
                conflicts_with = selected

        if max_corr > threshold:
            result.skipped.append(SkippedFeature(
                name=candidate,
                conflicts_with=conflicts_with,
                correlation=max_corr
            ))
            continue

        result.selected.append(candidate)

    if not result.selected and ranked_features:
        result.selected.append(ranked_features[0])
        result.fallback_used = True

    return result


class CorrelationFeatureSelector(FeatureSelector):
    """
    Correlation ranking with greedy multicollinearity pruning.

    Columns are extracted directly from the dataset by name, so the result
    does not depend on any pre-existing feature vector column; that column
    is rebuilt from the selected features.
    """

    method = FeatureSelectionMethod.CORRELATION

    def __init__(self, context=None, engine: CorrelationMatrixEngine = None):
        super().__init__(context)
        self.engine = engine or CorrelationMatrixEngine()

    def _select(
        self,
        dataset: Dataset,
        candidate_features: List[str],
        model_type: ModelType,
        target_field: str,
        config: FeatureEngineeringConfig
    ) -> SelectionResult:
        config.validate()
        if not candidate_features:
            raise SchemaError("No candidate features provided for correlation selection")

        unique_candidates = list(dict.fromkeys(candidate_features))
        if len(unique_candidates) < len(candidate_features):
            logger.warning(f"Dropped {len(candidate_features) - len(unique_candidates)} "
                           f"duplicate candidate features")

        logger.info(f"Starting correlation selection for {len(unique_candidates)} features "
                    f"(target={target_field}, model_type={model_type.value}, "
                    f"max_features={config.max_features}, "
                    f"threshold={config.multicollinearity_threshold})")

        # Step 1: Correlations
        analysis = self.engine.compute(dataset, unique_candidates, target_field)

        # Step 2: Ranking
        ranked = rank_features(
            unique_candidates,
            {f: v.value for f, v in analysis.target_correlations.items()}
        )

        # Step 3-4: Greedy selection with fallback
        greedy = select_greedy(
            ranked,
            analysis.matrix,
            config.multicollinearity_threshold,
            config.max_features
        )
        if greedy.fallback_used:
            logger.warning(f"No feature selected with max_features={config.max_features}; "
                           f"keeping top-ranked feature {greedy.selected[0]}")

        # Step 5: Rebuild the feature vector
        transformed = dataset.with_vector_column(FEATURES_COLUMN, greedy.selected)

        summary = SelectionReport(
            method=self.method,
            model_type=model_type,
            original_feature_count=len(unique_candidates),
            selected=tuple(greedy.selected),
            ranked=tuple((f, analysis.target_correlations[f]) for f in ranked),
            skipped=tuple(greedy.skipped),
            multicollinearity_threshold=config.multicollinearity_threshold,
            max_features=config.max_features,
            fallback_used=greedy.fallback_used,
            warnings=tuple(
                f"correlation for '{f}' degraded to 0.0 ({analysis.target_correlations[f].reason})"
                for f in ranked if analysis.target_correlations[f].degraded
            )
        )

        logger.info(f"Feature reduction: {len(unique_candidates)} → {len(greedy.selected)} "
                    f"({len(greedy.skipped)} skipped for multicollinearity)")

        return SelectionResult(
            transformed_dataset=transformed,
            selected_feature_names=tuple(greedy.selected),
            summary=summary
        )
