"""
Configuration for feature selection and data processing.

Holds the model, feature-engineering and data-balancing settings consumed by
the processing orchestrator, plus the caller-owned ProcessingContext that is
threaded through every stage instead of a process-wide numeric context.

Configurations can be built directly or loaded from a JSON file with
load_model_config().
"""

import json
import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

E = TypeVar('E', bound=Enum)


class ModelType(Enum):
    """Kind of model the processed data is prepared for."""
    BINARY_CLASSIFICATION = "binary_classification"
    MULTICLASS_CLASSIFICATION = "multiclass_classification"
    REGRESSION = "regression"


class FeatureSelectionMethod(Enum):
    """Feature selection strategies."""
    NONE = "none"
    CORRELATION = "correlation"
    PCA = "pca"


class DataBalanceMethod(Enum):
    """Class balancing strategies."""
    NONE = "none"
    SMOTE = "smote"


@dataclass
class FeatureEngineeringConfig:
    """Configuration for the feature selection stage."""

    method: FeatureSelectionMethod = FeatureSelectionMethod.NONE
    max_features: int = 10
    multicollinearity_threshold: float = 0.9  # Max |corr| with an already selected feature
    number_of_components: int = 3  # PCA only
    execution_order: int = 2

    def validate(self) -> None:
        """Raise ConfigurationError for values that cannot be clamped."""
        if self.max_features < 0:
            raise ConfigurationError(
                f"max_features must be >= 0, got {self.max_features}"
            )
        if not 0.0 <= self.multicollinearity_threshold <= 1.0:
            raise ConfigurationError(
                f"multicollinearity_threshold must be in [0, 1], "
                f"got {self.multicollinearity_threshold}"
            )


@dataclass
class DataBalancingConfig:
    """Configuration for the data balancing stage."""

    method: DataBalanceMethod = DataBalanceMethod.NONE
    execution_order: int = 1

    # SMOTE adapter settings
    k_neighbors: int = 5
    sampling_strategy: Union[str, float] = "auto"


@dataclass
class InputField:
    """A source column and whether it takes part in training."""
    name: str
    is_enabled: bool = True


@dataclass
class ModelConfig:
    """Top-level configuration for a processing run."""

    target_field: str
    model_type: ModelType = ModelType.BINARY_CLASSIFICATION
    input_fields: List[InputField] = field(default_factory=list)
    feature_engineering: FeatureEngineeringConfig = field(default_factory=FeatureEngineeringConfig)
    data_balancing: DataBalancingConfig = field(default_factory=DataBalancingConfig)

    def enabled_fields(self) -> List[str]:
        """Names of enabled input fields, in declaration order."""
        return [f.name for f in self.input_fields if f.is_enabled]

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-serializable dictionary."""
        return {
            'model_type': self.model_type.value,
            'target_field': self.target_field,
            'input_fields': [
                {'name': f.name, 'is_enabled': f.is_enabled} for f in self.input_fields
            ],
            'feature_engineering': {
                'method': self.feature_engineering.method.value,
                'max_features': self.feature_engineering.max_features,
                'multicollinearity_threshold': self.feature_engineering.multicollinearity_threshold,
                'number_of_components': self.feature_engineering.number_of_components,
                'execution_order': self.feature_engineering.execution_order,
            },
            'data_balancing': {
                'method': self.data_balancing.method.value,
                'execution_order': self.data_balancing.execution_order,
                'k_neighbors': self.data_balancing.k_neighbors,
                'sampling_strategy': self.data_balancing.sampling_strategy,
            },
        }


@dataclass
class ProcessingContext:
    """
    Caller-owned numeric context passed by reference into each stage.

    Attributes:
        seed: Random seed for any stochastic step (PCA solver, SMOTE)
        executor: Executor used to run CPU-bound stages off the event loop
            thread; None uses the loop's default executor
    """
    seed: int = 42
    executor: Optional[Executor] = None


def _parse_enum(enum_cls: Type[E], value: Any, key: str) -> E:
    """Parse an enum member from its value or name, case-insensitively."""
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip().lower()
    for member in enum_cls:
        if text in (member.value, member.name.lower()):
            return member
    valid = ', '.join(m.value for m in enum_cls)
    raise ConfigurationError(f"Invalid {key} '{value}' (expected one of: {valid})")


def _parse_int(section: Dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e


def _parse_float(section: Dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be a number, got {value!r}") from e


def model_config_from_dict(data: Dict[str, Any]) -> ModelConfig:
    """
    Build a ModelConfig from a dictionary.

    Args:
        data: Parsed configuration (see load_model_config for the layout)

    Returns:
        ModelConfig instance
    """
    if 'target_field' not in data:
        raise ConfigurationError("Configuration is missing 'target_field'")

    fe_data = data.get('feature_engineering', {}) or {}
    fe_defaults = FeatureEngineeringConfig()
    feature_engineering = FeatureEngineeringConfig(
        method=_parse_enum(FeatureSelectionMethod, fe_data.get('method', 'none'), 'feature selection method'),
        max_features=_parse_int(fe_data, 'max_features', fe_defaults.max_features),
        multicollinearity_threshold=_parse_float(
            fe_data, 'multicollinearity_threshold', fe_defaults.multicollinearity_threshold
        ),
        number_of_components=_parse_int(fe_data, 'number_of_components', fe_defaults.number_of_components),
        execution_order=_parse_int(fe_data, 'execution_order', fe_defaults.execution_order),
    )

    db_data = data.get('data_balancing', {}) or {}
    db_defaults = DataBalancingConfig()
    data_balancing = DataBalancingConfig(
        method=_parse_enum(DataBalanceMethod, db_data.get('method', 'none'), 'data balancing method'),
        execution_order=_parse_int(db_data, 'execution_order', db_defaults.execution_order),
        k_neighbors=_parse_int(db_data, 'k_neighbors', db_defaults.k_neighbors),
        sampling_strategy=db_data.get('sampling_strategy', db_defaults.sampling_strategy),
    )

    input_fields = []
    for entry in data.get('input_fields', []) or []:
        if isinstance(entry, str):
            input_fields.append(InputField(name=entry))
        elif isinstance(entry, dict) and 'name' in entry:
            input_fields.append(InputField(
                name=str(entry['name']),
                is_enabled=bool(entry.get('is_enabled', True))
            ))
        else:
            raise ConfigurationError(f"Invalid input field entry: {entry!r}")

    return ModelConfig(
        target_field=str(data['target_field']),
        model_type=_parse_enum(ModelType, data.get('model_type', 'binary_classification'), 'model type'),
        input_fields=input_fields,
        feature_engineering=feature_engineering,
        data_balancing=data_balancing,
    )


def load_model_config(path: Union[str, Path]) -> ModelConfig:
    """
    Load a ModelConfig from a JSON file.

    Expected layout:
        {
          "model_type": "binary_classification",
          "target_field": "label",
          "input_fields": [{"name": "f1", "is_enabled": true}, ...],
          "feature_engineering": {"method": "correlation", "max_features": 10,
                                  "multicollinearity_threshold": 0.9,
                                  "number_of_components": 3, "execution_order": 2},
          "data_balancing": {"method": "smote", "execution_order": 1}
        }

    Args:
        path: Path to the JSON configuration file

    Returns:
        ModelConfig instance
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    config = model_config_from_dict(data)
    logger.info(f"Loaded configuration from {path}: target={config.target_field}, "
                f"model_type={config.model_type.value}, "
                f"{len(config.enabled_fields())} enabled fields")
    return config
