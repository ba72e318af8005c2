"""
Processed data handed from the orchestrator to the training stage.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..config import DataBalanceMethod, FeatureSelectionMethod, ModelType
from ..data.dataset import Dataset
from ..feature_selection.report import SelectionReport


@dataclass(frozen=True)
class ProcessedData:
    """Final artifact of one processing run; never mutated after creation."""

    data: Dataset
    feature_names: Tuple[str, ...]
    original_sample_count: int
    balanced_sample_count: int
    selection_report: str
    selection_method: FeatureSelectionMethod
    balancing_method: DataBalanceMethod
    balancing_order: int
    selection_order: int

    # Audit trail
    model_type: Optional[ModelType] = None
    target_field: str = ""
    stages_run: Tuple[str, ...] = ()
    selection_summary: Optional[SelectionReport] = None
    processing_stats: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Summary without the dataset itself, for logging and persistence."""
        return {
            'feature_names': list(self.feature_names),
            'original_sample_count': self.original_sample_count,
            'balanced_sample_count': self.balanced_sample_count,
            'selection_method': self.selection_method.value,
            'balancing_method': self.balancing_method.value,
            'balancing_order': self.balancing_order,
            'selection_order': self.selection_order,
            'model_type': self.model_type.value if self.model_type else None,
            'target_field': self.target_field,
            'stages_run': list(self.stages_run),
            'selection': self.selection_summary.to_dict() if self.selection_summary else None,
            'processing_stats': self.processing_stats,
        }
