"""
Tests for configuration dataclasses and JSON loading.
"""

import json

import pytest

from tabprep.config import (
    DataBalanceMethod,
    DataBalancingConfig,
    FeatureEngineeringConfig,
    FeatureSelectionMethod,
    InputField,
    ModelConfig,
    ModelType,
    ProcessingContext,
    load_model_config,
    model_config_from_dict
)
from tabprep.exceptions import ConfigurationError, ProcessingError


@pytest.fixture
def config_dict():
    return {
        "model_type": "binary_classification",
        "target_field": "label",
        "input_fields": [
            {"name": "income", "is_enabled": True},
            {"name": "notes", "is_enabled": False},
            "age",
            {"name": "label"}
        ],
        "feature_engineering": {
            "method": "correlation",
            "max_features": 4,
            "multicollinearity_threshold": 0.75,
            "number_of_components": 2,
            "execution_order": 1
        },
        "data_balancing": {
            "method": "smote",
            "execution_order": 2,
            "k_neighbors": 3
        }
    }


class TestDefaults:
    """Test default configuration values."""

    def test_feature_engineering_defaults(self):
        config = FeatureEngineeringConfig()

        assert config.method == FeatureSelectionMethod.NONE
        assert config.max_features == 10
        assert config.multicollinearity_threshold == 0.9
        assert config.number_of_components == 3

    def test_balancing_runs_first_by_default(self):
        assert DataBalancingConfig().execution_order < FeatureEngineeringConfig().execution_order

    def test_processing_context_defaults(self):
        context = ProcessingContext()

        assert context.seed == 42
        assert context.executor is None

    def test_enabled_fields(self):
        config = ModelConfig(
            target_field='y',
            input_fields=[InputField('a'), InputField('b', is_enabled=False), InputField('y')]
        )

        assert config.enabled_fields() == ['a', 'y']


class TestValidation:
    """Test FeatureEngineeringConfig.validate."""

    @pytest.mark.parametrize("max_features,threshold", [(0, 0.0), (10, 1.0), (1, 0.5)])
    def test_valid_values(self, max_features, threshold):
        FeatureEngineeringConfig(
            max_features=max_features,
            multicollinearity_threshold=threshold
        ).validate()

    @pytest.mark.parametrize("max_features,threshold", [(-1, 0.5), (5, 1.01), (5, -0.5)])
    def test_invalid_values(self, max_features, threshold):
        config = FeatureEngineeringConfig(max_features=max_features, multicollinearity_threshold=threshold)

        with pytest.raises(ConfigurationError):
            config.validate()

    def test_configuration_error_is_processing_error(self):
        assert issubclass(ConfigurationError, ProcessingError)


class TestConfigParsing:
    """Test building configurations from dictionaries and JSON files."""

    def test_from_dict(self, config_dict):
        config = model_config_from_dict(config_dict)

        assert config.model_type == ModelType.BINARY_CLASSIFICATION
        assert config.target_field == 'label'
        assert config.enabled_fields() == ['income', 'age', 'label']
        assert config.feature_engineering.method == FeatureSelectionMethod.CORRELATION
        assert config.feature_engineering.max_features == 4
        assert config.feature_engineering.multicollinearity_threshold == 0.75
        assert config.data_balancing.method == DataBalanceMethod.SMOTE
        assert config.data_balancing.k_neighbors == 3
        assert config.data_balancing.sampling_strategy == "auto"

    def test_missing_sections_use_defaults(self):
        config = model_config_from_dict({"target_field": "y"})

        assert config.feature_engineering == FeatureEngineeringConfig()
        assert config.data_balancing == DataBalancingConfig()
        assert config.input_fields == []

    @pytest.mark.parametrize("value,expected", [
        ("PCA", FeatureSelectionMethod.PCA),
        ("Correlation", FeatureSelectionMethod.CORRELATION),
        (" none ", FeatureSelectionMethod.NONE),
    ])
    def test_enum_parsing_case_insensitive(self, value, expected):
        config = model_config_from_dict({
            "target_field": "y",
            "feature_engineering": {"method": value}
        })

        assert config.feature_engineering.method == expected

    def test_model_type_by_name(self):
        config = model_config_from_dict({"target_field": "y", "model_type": "REGRESSION"})

        assert config.model_type == ModelType.REGRESSION

    @pytest.mark.parametrize("data", [
        {"input_fields": ["a"]},
        {"target_field": "y", "feature_engineering": {"method": "lasso"}},
        {"target_field": "y", "data_balancing": {"method": "undersample"}},
        {"target_field": "y", "feature_engineering": {"max_features": "many"}},
        {"target_field": "y", "input_fields": [42]},
    ])
    def test_invalid_configuration(self, data):
        with pytest.raises(ConfigurationError):
            model_config_from_dict(data)

    def test_json_round_trip(self, config_dict, tmp_path):
        original = model_config_from_dict(config_dict)
        path = tmp_path / "modelconfig.json"
        path.write_text(json.dumps(original.to_dict()))

        assert load_model_config(path) == original

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_model_config(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            load_model_config(path)
