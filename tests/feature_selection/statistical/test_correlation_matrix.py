"""
Tests for the Pearson correlation engine.
"""

import numpy as np
import pandas as pd
import pytest

from tabprep.data.dataset import Dataset
from tabprep.exceptions import SchemaError, UnsupportedColumnTypeError
from tabprep.feature_selection.statistical.correlation_matrix import CorrelationMatrixEngine

FEATURE_NAMES = ['f1', 'f2', 'f3', 'f4', 'f5']


class TestCorrelationMatrixEngine:
    """Test target correlations and pairwise matrix."""

    def test_target_correlations_match_numpy(self, correlated_dataset, correlated_frame):
        analysis = CorrelationMatrixEngine().compute(correlated_dataset, FEATURE_NAMES, 'target')

        for feature in FEATURE_NAMES:
            expected = abs(np.corrcoef(correlated_frame[feature], correlated_frame['target'])[0, 1])
            value = analysis.target_correlations[feature]
            assert not value.degraded
            assert value.value == pytest.approx(expected, abs=1e-10)

    def test_matrix_square_symmetric_unit_diagonal(self, correlated_dataset):
        analysis = CorrelationMatrixEngine().compute(correlated_dataset, FEATURE_NAMES, 'target')
        matrix = analysis.matrix

        assert matrix.shape == (5, 5)
        assert matrix.index.tolist() == FEATURE_NAMES
        assert matrix.columns.tolist() == FEATURE_NAMES
        np.testing.assert_array_equal(matrix.values, matrix.values.T)
        np.testing.assert_array_equal(np.diag(matrix.values), np.ones(5))

    def test_matrix_is_signed(self):
        x = np.arange(10, dtype=float)
        dataset = Dataset.from_pandas(pd.DataFrame({'a': x, 'b': -x, 'y': x}))

        analysis = CorrelationMatrixEngine().compute(dataset, ['a', 'b'], 'y')

        assert analysis.matrix.at['a', 'b'] == pytest.approx(-1.0)
        assert analysis.pairwise('a', 'b') == pytest.approx(1.0)
        assert analysis.target_correlations['b'].value == pytest.approx(1.0)

    def test_high_correlation_pairs(self, correlated_dataset):
        analysis = CorrelationMatrixEngine().compute(correlated_dataset, FEATURE_NAMES, 'target')

        pairs = analysis.high_correlation_pairs(0.9)

        assert [(a, b) for a, b, _ in pairs] == [('f1', 'f2')]

    def test_boolean_columns_coerced(self):
        frame = pd.DataFrame({
            'flag': [True, False, True, False, True, False],
            'y': [1.0, 0.0, 1.0, 0.0, 1.0, 0.0]
        })
        analysis = CorrelationMatrixEngine().compute(Dataset.from_pandas(frame), ['flag'], 'y')

        assert analysis.target_correlations['flag'].value == pytest.approx(1.0)


class TestDegenerateCorrelations:
    """Degenerate coefficients degrade to 0.0 instead of aborting."""

    def test_constant_feature_degrades_to_zero(self, correlated_frame):
        frame = correlated_frame.copy()
        frame['constant'] = 3.0
        dataset = Dataset.from_pandas(frame)

        analysis = CorrelationMatrixEngine().compute(dataset, ['f1', 'constant', 'f3'], 'target')

        value = analysis.target_correlations['constant']
        assert value.degraded
        assert value.value == 0.0
        assert analysis.degenerate_features == ['constant']
        assert analysis.matrix.at['constant', 'f1'] == 0.0
        assert analysis.matrix.at['constant', 'constant'] == 0.0
        # Other features are unaffected
        assert not analysis.target_correlations['f1'].degraded
        assert analysis.matrix.at['f1', 'f1'] == 1.0

    def test_constant_target_degrades_all(self):
        frame = pd.DataFrame({'a': [1.0, 2.0, 3.0], 'b': [3.0, 1.0, 2.0], 'y': [5.0, 5.0, 5.0]})

        analysis = CorrelationMatrixEngine().compute(Dataset.from_pandas(frame), ['a', 'b'], 'y')

        assert all(v.degraded for v in analysis.target_correlations.values())

    def test_single_row_degrades(self):
        frame = pd.DataFrame({'a': [1.0], 'y': [2.0]})

        analysis = CorrelationMatrixEngine().compute(Dataset.from_pandas(frame), ['a'], 'y')

        assert analysis.target_correlations['a'].degraded
        assert analysis.matrix.at['a', 'a'] == 0.0


class TestSchemaErrors:
    """Missing or unsupported columns abort the computation."""

    def test_missing_target(self, correlated_dataset):
        with pytest.raises(SchemaError):
            CorrelationMatrixEngine().compute(correlated_dataset, FEATURE_NAMES, 'missing')

    def test_missing_candidate(self, correlated_dataset):
        with pytest.raises(SchemaError):
            CorrelationMatrixEngine().compute(correlated_dataset, ['f1', 'missing'], 'target')

    def test_text_column_unsupported(self, correlated_frame):
        frame = correlated_frame.copy()
        frame['category'] = 'a'
        with pytest.raises(UnsupportedColumnTypeError):
            CorrelationMatrixEngine().compute(Dataset.from_pandas(frame), ['f1', 'category'], 'target')
