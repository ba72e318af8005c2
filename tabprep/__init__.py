"""
tabprep - feature selection and processing orchestration for tabular training data.

Selects a minimal, low-redundancy feature subset (correlation ranking with
multicollinearity pruning, or PCA projection) and sequences it against an
optional class-balancing step before handing the processed dataset to
model training.
"""

from .config import (
    DataBalanceMethod,
    DataBalancingConfig,
    FeatureEngineeringConfig,
    FeatureSelectionMethod,
    InputField,
    ModelConfig,
    ModelType,
    ProcessingContext,
    load_model_config
)
from .data import FEATURES_COLUMN, ColumnKind, Dataset, load_dataset
from .exceptions import (
    ConfigurationError,
    ProcessingError,
    SchemaError,
    TransformError,
    UnsupportedColumnTypeError
)
from .processing import DataProcessor, ProcessedData

__all__ = [
    'DataBalanceMethod',
    'DataBalancingConfig',
    'FeatureEngineeringConfig',
    'FeatureSelectionMethod',
    'InputField',
    'ModelConfig',
    'ModelType',
    'ProcessingContext',
    'load_model_config',
    'FEATURES_COLUMN',
    'ColumnKind',
    'Dataset',
    'load_dataset',
    'ConfigurationError',
    'ProcessingError',
    'SchemaError',
    'TransformError',
    'UnsupportedColumnTypeError',
    'DataProcessor',
    'ProcessedData'
]

__version__ = '1.0.0'
