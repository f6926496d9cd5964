"""
Test the OLS solver.

Both strategies must agree on well-conditioned problems, recover exact
coefficients from noiseless data, and reject unsolvable shapes before
any factorization runs.
"""

import numpy as np
import pytest

from pyols import (
    ols,
    OLS,
    Strategy,
    InvalidShapeError,
    NumericalFailureError,
    ValidationError,
)
from pyols._core import fit_ols, qr_decomposition_with_pivoting

STRATEGIES = ['normal', 'qr']


class TestConcreteScenario:
    """X = [[1,0],[0,1],[1,1]], y = [1,2,3] is an exact fit."""

    X = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    y = np.array([1.0, 2.0, 3.0])

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_recovers_one_two(self, strategy):
        model = ols(self.X, self.y, strategy=strategy)
        np.testing.assert_allclose(model.coef, [1.0, 2.0], atol=1e-12)

    def test_default_is_normal_equations(self):
        model = ols(self.X, self.y)
        assert model.strategy is Strategy.NORMAL

    def test_dimensions_reported(self):
        model = ols(self.X, self.y, strategy='qr')
        assert model.n_obs == 3
        assert model.n_coef == 2
        assert model.rank == 2
        assert "n=3" in repr(model) and "m=2" in repr(model)


class TestAccuracy:
    """Recovery of known coefficients."""

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_exact_recovery_noiseless(self, gaussian_problem, strategy):
        X, beta_true = gaussian_problem
        y = X @ beta_true
        model = ols(X, y, strategy=strategy)
        np.testing.assert_allclose(model.coef, beta_true, rtol=1e-9, atol=1e-9)

    def test_strategy_equivalence(self, gaussian_problem):
        X, beta_true = gaussian_problem
        np.random.seed(7)
        y = X @ beta_true + 1e-9 * np.random.randn(X.shape[0])

        beta_normal = ols(X, y, strategy='normal').coef
        beta_qr = ols(X, y, strategy='qr').coef

        np.testing.assert_allclose(beta_normal, beta_qr, rtol=1e-6)
        np.testing.assert_allclose(beta_normal, beta_true, rtol=1e-6)
        np.testing.assert_allclose(beta_qr, beta_true, rtol=1e-6)

    def test_matches_numpy_lstsq(self):
        np.random.seed(42)
        X = np.random.randn(200, 4)
        y = np.random.randn(200)
        expected = np.linalg.lstsq(X, y, rcond=None)[0]
        for strategy in STRATEGIES:
            np.testing.assert_allclose(ols(X, y, strategy=strategy).coef, expected, rtol=1e-8, atol=1e-12)

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_idempotent(self, gaussian_problem, strategy):
        X, beta_true = gaussian_problem
        y = X @ beta_true + 0.1
        first = ols(X, y, strategy=strategy).coef
        second = ols(X, y, strategy=strategy).coef
        np.testing.assert_array_equal(first, second)

    def test_first_column_policy(self, gaussian_problem):
        """A multi-column response solves like its first column alone."""
        X, beta_true = gaussian_problem
        Y = np.column_stack([X @ beta_true, np.ones(X.shape[0])])
        np.testing.assert_allclose(ols(X, Y[:, 0]).coef, ols(X, X @ beta_true).coef, rtol=1e-12)


class TestShapeValidation:
    """Unsolvable shapes are InvalidShapeError before any solve."""

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_square_system_rejected(self, strategy):
        with pytest.raises(InvalidShapeError, match="n > m") as exc:
            ols(np.eye(3), np.ones(3), strategy=strategy)
        assert exc.value.n_obs == 3
        assert exc.value.n_coef == 3

    def test_underdetermined_rejected(self):
        with pytest.raises(InvalidShapeError):
            ols(np.ones((2, 5)), np.ones(2))

    def test_zero_columns_rejected(self):
        with pytest.raises(InvalidShapeError, match="m > 0"):
            ols(np.empty((4, 0)), np.ones(4))

    def test_length_mismatch_rejected(self):
        with pytest.raises(InvalidShapeError, match="rows") as exc:
            ols(np.ones((5, 2)), np.ones(4))
        assert exc.value.n_response == 4

    def test_matrix_must_be_2d(self):
        with pytest.raises(InvalidShapeError):
            ols(np.ones(5), np.ones(5))

    def test_response_must_be_1d(self):
        with pytest.raises(InvalidShapeError):
            ols(np.ones((5, 2)), np.ones((5, 2)))

    def test_non_finite_rejected(self):
        X = np.ones((5, 2))
        X[0, 0] = np.nan
        with pytest.raises(ValidationError, match="NaN"):
            ols(X, np.ones(5))

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            ols(np.random.randn(5, 2), np.ones(5), strategy='svd')


class TestDegenerateDesigns:
    """Collinear X: normal equations fail loudly, QR falls back."""

    def _collinear(self):
        a = np.tile([1.0, -1.0, 1.0, 1.0], 4)
        X = np.column_stack([a, 2.0 * a])
        y = X @ np.array([1.0, 1.0])
        return X, y

    def test_normal_equations_singular(self):
        X, y = self._collinear()
        with pytest.raises(NumericalFailureError, match="QR") as exc:
            ols(X, y, strategy='normal')
        assert exc.value.strategy == 'normal'

    def test_qr_basic_solution(self):
        X, y = self._collinear()
        model = ols(X, y, strategy='qr')
        assert np.all(np.isfinite(model.coef))
        assert model.rank == 1
        np.testing.assert_allclose(X @ model.coef, y, rtol=1e-10)
        assert np.sum(model.coef == 0.0) == 1
        assert any("rank-deficient" in w for w in model.warnings)


class TestResultImmutability:
    """Coefficients are read-only and inputs are untouched."""

    def test_coef_read_only(self, gaussian_problem):
        X, beta_true = gaussian_problem
        model = ols(X, X @ beta_true)
        with pytest.raises(ValueError):
            model.coef[0] = 99.0

    def test_inputs_not_modified(self, gaussian_problem):
        X, beta_true = gaussian_problem
        y = X @ beta_true
        X_copy, y_copy = X.copy(), y.copy()
        ols(X, y, strategy='qr')
        np.testing.assert_array_equal(X, X_copy)
        np.testing.assert_array_equal(y, y_copy)
        assert X.flags.writeable

    def test_timing_recorded(self, gaussian_problem):
        X, beta_true = gaussian_problem
        model = ols(X, X @ beta_true, strategy='qr')
        assert model.timing['total_seconds'] >= 0.0
        assert 'qr' in model.timing


class TestCoreWrappers:
    """Thin backend-delegating wrappers in pyols._core."""

    def test_fit_ols_default_backend(self, gaussian_problem):
        X, beta_true = gaussian_problem
        result = fit_ols(X, X @ beta_true, strategy='qr')
        assert result.backend_name == 'cpu_fp64'
        assert result.strategy is Strategy.QR
        np.testing.assert_allclose(result.coef, beta_true, rtol=1e-9)

    def test_qr_with_pivoting_reconstructs(self):
        np.random.seed(42)
        X = np.random.randn(30, 4)
        qr = qr_decomposition_with_pivoting(X)
        assert qr.rank == 4
        assert sorted(qr.pivot.tolist()) == [0, 1, 2, 3]
        np.testing.assert_allclose(qr.Q @ qr.R, X[:, qr.pivot], atol=1e-12)
        np.testing.assert_allclose(np.triu(qr.R), qr.R)

    def test_ols_accepts_backend_instance(self, gaussian_problem):
        from pyols import get_backend
        X, beta_true = gaussian_problem
        backend = get_backend('cpu')
        model = OLS(X, X @ beta_true, backend=backend)
        assert model.backend is backend
