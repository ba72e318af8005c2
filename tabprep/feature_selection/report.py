"""
Structured feature selection reports.

Selectors return a SelectionReport value describing what they did (ranked
correlations, selected features, threshold, warnings, components); the
human-readable text is rendered separately from that value so the
algorithm and its narration can be tested independently.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..config import FeatureSelectionMethod, ModelType

SEPARATOR = "-" * 46


@dataclass(frozen=True)
class CorrelationValue:
    """A correlation coefficient, or an explicit degradation to zero."""
    value: float
    degraded: bool = False
    reason: str = ""

    @classmethod
    def degraded_to_zero(cls, reason: str) -> 'CorrelationValue':
        return cls(value=0.0, degraded=True, reason=reason)


@dataclass(frozen=True)
class SkippedFeature:
    """A candidate rejected for redundancy with an already selected feature."""
    name: str
    conflicts_with: str
    correlation: float


@dataclass(frozen=True)
class SelectionReport:
    """Structured outcome of one feature selection run."""

    method: FeatureSelectionMethod
    original_feature_count: int
    selected: Tuple[str, ...] = ()
    model_type: Optional[ModelType] = None

    # Correlation selection
    ranked: Tuple[Tuple[str, CorrelationValue], ...] = ()
    skipped: Tuple[SkippedFeature, ...] = ()
    multicollinearity_threshold: Optional[float] = None
    max_features: Optional[int] = None
    fallback_used: bool = False

    # PCA
    explained_variance_ratio: Tuple[float, ...] = ()

    warnings: Tuple[str, ...] = ()

    @property
    def degraded_features(self) -> List[str]:
        return [name for name, value in self.ranked if value.degraded]

    def target_correlation(self, name: str) -> float:
        for ranked_name, value in self.ranked:
            if ranked_name == name:
                return value.value
        raise KeyError(name)

    def render(self) -> str:
        """Render the report as display text."""
        if self.method == FeatureSelectionMethod.CORRELATION:
            return _render_correlation(self)
        if self.method == FeatureSelectionMethod.PCA:
            return _render_pca(self)
        return ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary."""
        return {
            'method': self.method.value,
            'model_type': self.model_type.value if self.model_type else None,
            'original_feature_count': self.original_feature_count,
            'selected': list(self.selected),
            'ranked': [
                {'feature': name, 'correlation': value.value, 'degraded': value.degraded}
                for name, value in self.ranked
            ],
            'skipped': [
                {'feature': s.name, 'conflicts_with': s.conflicts_with, 'correlation': s.correlation}
                for s in self.skipped
            ],
            'multicollinearity_threshold': self.multicollinearity_threshold,
            'max_features': self.max_features,
            'fallback_used': self.fallback_used,
            'explained_variance_ratio': list(self.explained_variance_ratio),
            'warnings': list(self.warnings),
        }


def _render_warnings(report: SelectionReport, lines: List[str]) -> None:
    for warning in report.warnings:
        lines.append(f"Warning: {warning}")


def _render_correlation(report: SelectionReport) -> str:
    lines = [
        "Correlation-based Feature Selection Results:",
        SEPARATOR,
    ]
    _render_warnings(report, lines)

    lines.append("")
    lines.append("Features Ranked by Target Correlation:")
    for name, value in report.ranked:
        marker = "  (degraded to 0)" if value.degraded else ""
        lines.append(f"{name:<40} | {value.value:.4f}{marker}")

    if report.skipped:
        lines.append("")
        lines.append("Skipped for Multicollinearity:")
        for skipped in report.skipped:
            lines.append(
                f"- {skipped.name} (|corr| with {skipped.conflicts_with}: {skipped.correlation:.4f})"
            )

    lines.append("")
    lines.append("Selection Summary:")
    lines.append(f"Original features: {report.original_feature_count}")
    lines.append(f"Selected features: {len(report.selected)}")
    lines.append(f"Multicollinearity threshold: {report.multicollinearity_threshold}")
    if report.fallback_used:
        lines.append("No feature passed selection; kept the top-ranked feature")

    lines.append("")
    lines.append("Selected Features:")
    for name in report.selected:
        lines.append(f"- {name} (correlation with target: {report.target_correlation(name):.4f})")

    return "\n".join(lines) + "\n"


def _render_pca(report: SelectionReport) -> str:
    lines = [
        "PCA Feature Selection Results:",
        SEPARATOR,
    ]
    _render_warnings(report, lines)
    lines.append(f"Applying PCA with {len(report.selected)} components")
    lines.append(f"Original feature count: {report.original_feature_count}")

    lines.append("")
    lines.append("PCA Components:")
    for i, name in enumerate(report.selected):
        if i < len(report.explained_variance_ratio):
            lines.append(f"  - {name} (explained variance: {report.explained_variance_ratio[i]:.4f})")
        else:
            lines.append(f"  - {name}")

    return "\n".join(lines) + "\n"
