"""
Pytest configuration and shared fixtures for tabprep tests.
"""

import logging

import numpy as np
import pandas as pd
import pytest

from tabprep.config import (
    DataBalanceMethod,
    DataBalancingConfig,
    FeatureEngineeringConfig,
    FeatureSelectionMethod,
    InputField,
    ModelConfig,
    ModelType
)
from tabprep.data.dataset import Dataset

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

FEATURE_NAMES = ['f1', 'f2', 'f3', 'f4', 'f5']


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def make_correlated_frame(n_samples: int = 500, seed: int = 42) -> pd.DataFrame:
    """
    Features with a known correlation structure against `target`.

    Approximate |corr| with target: f1 0.995, f2 0.95, f3 0.62, f4 0.37, f5 ~0.
    corr(f1, f2) is about 0.96; every other pair stays well below 0.9.
    """
    np.random.seed(seed)
    target = np.random.randn(n_samples)
    f1 = target + 0.1 * np.random.randn(n_samples)
    f2 = f1 + 0.3 * np.random.randn(n_samples)
    f3 = 0.8 * target + np.random.randn(n_samples)
    f4 = 0.4 * target + np.random.randn(n_samples)
    f5 = np.random.randn(n_samples)

    return pd.DataFrame({
        'f1': f1,
        'f2': f2,
        'f3': f3,
        'f4': f4,
        'f5': f5,
        'target': target,
        'row_id': np.arange(n_samples, dtype=np.int64)
    })


@pytest.fixture
def correlated_frame():
    return make_correlated_frame()


@pytest.fixture
def correlated_dataset(correlated_frame):
    return Dataset.from_pandas(correlated_frame)


@pytest.fixture
def classification_dataset():
    """Imbalanced binary classification data (1000 rows, 10% positives)."""
    np.random.seed(42)
    n_samples = 1000
    label = (np.arange(n_samples) % 10 == 0).astype(np.int64)

    frame = pd.DataFrame({
        'income': np.random.randn(n_samples) + 1.5 * label,
        'debt_ratio': np.random.rand(n_samples) + 0.3 * label,
        'age': np.random.randint(18, 80, n_samples).astype(np.int32),
        'has_history': np.random.rand(n_samples) > 0.5,
        'noise': np.random.randn(n_samples),
        'label': label
    })
    return Dataset.from_pandas(frame)


@pytest.fixture
def correlation_config():
    return FeatureEngineeringConfig(
        method=FeatureSelectionMethod.CORRELATION,
        max_features=3,
        multicollinearity_threshold=0.9,
        execution_order=2
    )


@pytest.fixture
def model_config(correlation_config):
    return ModelConfig(
        target_field='target',
        model_type=ModelType.REGRESSION,
        input_fields=[InputField(name) for name in FEATURE_NAMES + ['target']],
        feature_engineering=correlation_config,
        data_balancing=DataBalancingConfig(method=DataBalanceMethod.NONE, execution_order=1)
    )


@pytest.fixture
def large_correlated_dataset():
    return Dataset.from_pandas(make_correlated_frame(n_samples=1000))
