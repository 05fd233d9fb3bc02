"""Integration tests: distances() from raw points to a finished metric."""

import math

import numpy as np
import pandas as pd
import pytest
from scipy.spatial.distance import cdist, mahalanobis, pdist, squareform

import distances as ds


def pairwise(metric):
    """Full Euclidean distance matrix between the transformed points."""
    return squareform(pdist(metric.data))


class TestEuclidean:
    def test_matches_plain_euclidean(self, points_df):
        metric = ds.distances(points_df)
        np.testing.assert_allclose(pairwise(metric), squareform(pdist(points_df.values)))

    def test_first_pair(self, points_array):
        d = pairwise(ds.distances(points_array))
        assert d[0, 1] == pytest.approx(math.sqrt(2))

    def test_data_unchanged(self, points_array):
        metric = ds.distances(points_array)
        np.testing.assert_array_equal(metric.data, points_array)

    @pytest.mark.parametrize("normalize", [None, "none", "n", np.ones(2), np.eye(2)])
    def test_identity_equivalents(self, points_array, normalize):
        metric = ds.distances(points_array, normalize=normalize, weights=[1.0, 1.0])
        np.testing.assert_allclose(metric.data, points_array, rtol=0, atol=1e-12)

    def test_one_dimension(self, points_df):
        metric = ds.distances(points_df, dist_variables="x")
        np.testing.assert_allclose(pairwise(metric), squareform(pdist(points_df[["x"]])))

    def test_single_point(self):
        metric = ds.distances([[1.0, 2.0]])
        assert metric.shape == (1, 2)


class TestWeights:
    def test_first_pair(self, points_array):
        d = pairwise(ds.distances(points_array, weights=[2, 1]))
        assert d[0, 1] == pytest.approx(math.sqrt(3))

    def test_matches_weighted_euclidean(self, correlated_points):
        w = np.array([2.0, 0.5, 3.0])
        metric = ds.distances(correlated_points, weights=w)
        expected = cdist(correlated_points, correlated_points, "sqeuclidean", w=w)
        np.testing.assert_allclose(pairwise(metric) ** 2, expected, rtol=1e-10, atol=1e-10)

    def test_matches_scaled_columns(self, points_array):
        scaled = points_array.copy()
        scaled[:, 0] *= math.sqrt(2)
        metric = ds.distances(points_array, weights=[2, 1])
        np.testing.assert_allclose(pairwise(metric), squareform(pdist(scaled)))

    def test_weight_matrix(self, correlated_points):
        w = np.array([[2.0, 0.3, 0.0], [0.3, 1.0, 0.1], [0.0, 0.1, 0.5]])
        metric = ds.distances(correlated_points, weights=w)
        diff = correlated_points[3] - correlated_points[7]
        assert pairwise(metric)[3, 7] == pytest.approx(math.sqrt(diff @ w @ diff))


class TestMahalanobis:
    def test_matches_classical_mahalanobis(self, correlated_points):
        metric = ds.distances(correlated_points, normalize="mahalanobize")
        inv_cov = np.linalg.inv(np.cov(correlated_points, rowvar=False))
        expected = [
            mahalanobis(correlated_points[0], row, inv_cov) ** 2
            for row in correlated_points
        ]
        sq = np.sum((metric.data - metric.data[0]) ** 2, axis=1)
        np.testing.assert_allclose(sq, expected, rtol=1e-8, atol=1e-10)

    def test_alias(self, correlated_points):
        a = ds.distances(correlated_points, normalize="mahalanobize")
        b = ds.distances(correlated_points, normalize="mahalanobis")
        np.testing.assert_array_equal(a.data, b.data)

    def test_normalization_matrix_is_covariance(self, points_df):
        metric = ds.distances(points_df, normalize="mahalanobize")
        np.testing.assert_allclose(metric.normalization, np.cov(points_df.values, rowvar=False))
        np.testing.assert_array_equal(metric.weights, np.eye(2))

    def test_with_weights_on_uncorrelated_points(self, points_array):
        metric = ds.distances(points_array, normalize="mahalanobize", weights=[2, 1])
        scaled = points_array.copy()
        scaled[:, 0] *= math.sqrt(2)
        inv_cov = np.linalg.inv(np.cov(points_array, rowvar=False))
        expected = [mahalanobis(scaled[0], row, inv_cov) for row in scaled]
        np.testing.assert_allclose(pairwise(metric)[0], expected, rtol=1e-10)

    def test_custom_normalization_matrix(self, points_df):
        norm = np.array([[3.0, 1.0], [1.0, 3.0]])
        metric = ds.distances(points_df, normalize=norm)
        expected = cdist(points_df.values, points_df.values, "mahalanobis", VI=np.linalg.inv(norm))
        np.testing.assert_allclose(pairwise(metric), expected, rtol=1e-10, atol=1e-12)


class TestSpecArguments:
    def test_explicit_spec_weights(self, points_array):
        metric = ds.distances(points_array, weights=ds.ExplicitSpec([[2, 0], [0, 1]]))
        assert pairwise(metric)[0, 1] == pytest.approx(math.sqrt(3))

    def test_diagonal_spec_normalize(self, points_array):
        a = ds.distances(points_array, normalize=ds.DiagonalSpec([4.0, 1.0]))
        b = ds.distances(points_array, normalize=[4.0, 1.0])
        np.testing.assert_array_equal(a.data, b.data)

    def test_badly_scaled_normalization_vector(self, points_array):
        metric = ds.distances(points_array, normalize=[1e-8, 1e7])
        scaled = points_array / np.sqrt([1e-8, 1e7])
        np.testing.assert_allclose(pairwise(metric), squareform(pdist(scaled)), rtol=1e-10)


class TestStudentize:
    def test_matches_standardized_euclidean(self, correlated_points):
        metric = ds.distances(correlated_points, normalize="studentize")
        variances = np.var(correlated_points, axis=0, ddof=1)
        expected = cdist(correlated_points, correlated_points, "seuclidean", V=variances)
        np.testing.assert_allclose(pairwise(metric), expected, rtol=1e-10, atol=1e-12)

    def test_normalization_vector(self, correlated_points):
        variances = np.var(correlated_points, axis=0, ddof=1)
        a = ds.distances(correlated_points, normalize="studentize")
        b = ds.distances(correlated_points, normalize=variances)
        np.testing.assert_allclose(a.data, b.data)

    def test_constant_column_is_singular(self):
        data = [[1.0, 5.0], [2.0, 5.0], [3.0, 5.0]]
        with pytest.raises(ds.SingularMatrixError):
            ds.distances(data, normalize="studentize")


class TestIds:
    def test_id_column(self, points_with_ids_df):
        metric = ds.distances(points_with_ids_df, id_variable="my_ids")
        assert metric.ids.to_list() == list("abcdefghij")
        assert metric.columns == ("x", "y")
        np.testing.assert_allclose(
            pairwise(metric), squareform(pdist(points_with_ids_df[["x", "y"]]))
        )

    def test_id_sequence(self, points_array):
        metric = ds.distances(points_array, id_variable=range(10))
        assert metric.ids.to_list() == [str(i) for i in range(10)]

    def test_no_ids_by_default(self, points_array):
        assert ds.distances(points_array).ids is None

    def test_duplicate_ids_allowed(self, points_array):
        metric = ds.distances(points_array, id_variable=["a", "b"] * 5)
        assert metric.ids.has_duplicates
        assert metric.ids.positions_of("a") == [0, 2, 4, 6, 8]

    def test_id_column_kept_when_listed(self):
        df = pd.DataFrame({"id": [1, 2, 3], "x": [0.0, 1.0, 3.0]})
        metric = ds.distances(df, id_variable="id", dist_variables=["id", "x"])
        assert metric.columns == ("id", "x")
        assert metric.ids.to_list() == ["1", "2", "3"]

    def test_wrong_id_count(self, points_array):
        with pytest.raises(ds.InvalidDataError, match="identifiers"):
            ds.distances(points_array, id_variable=["a", "b"])

    def test_unknown_id_column(self, points_df):
        with pytest.raises(KeyError):
            ds.distances(points_df, id_variable="nope")

    def test_id_column_name_needs_dataframe(self, points_array):
        with pytest.raises(ds.InvalidTypeError, match="DataFrame"):
            ds.distances(points_array, id_variable="my_ids")


class TestColumnSelection:
    def test_dist_variables_needs_dataframe(self, points_array):
        with pytest.raises(ds.InvalidTypeError, match="dist_variables"):
            ds.distances(points_array, dist_variables=["x"])

    def test_non_numeric_columns_rejected(self, points_with_ids_df):
        with pytest.raises(ds.InvalidTypeError, match="my_ids"):
            ds.distances(points_with_ids_df)

    def test_accepts_data_matrix(self, points_df):
        metric = ds.distances(ds.DataMatrix(points_df), weights=[2, 1])
        assert metric.columns == ("x", "y")


class TestErrors:
    def test_normalization_vector_wrong_length(self, points_array):
        with pytest.raises(ds.DimensionMismatchError) as exc_info:
            ds.distances(points_array, normalize=[1.0, 2.0, 3.0])
        assert exc_info.value.argument == "normalize"

    def test_weights_vector_wrong_length(self, points_array):
        with pytest.raises(ds.DimensionMismatchError) as exc_info:
            ds.distances(points_array, weights=[1.0])
        assert exc_info.value.argument == "weights"

    def test_asymmetric_matrix(self, points_array):
        with pytest.raises(ds.NotSymmetricError):
            ds.distances(points_array, weights=[[1.0, 0.5], [0.0, 1.0]])

    def test_negative_definite_normalization(self, points_array):
        with pytest.raises(ds.NotPositiveSemidefiniteError):
            ds.distances(points_array, normalize=-np.eye(2))

    def test_negative_definite_weights(self, points_array):
        with pytest.raises(ds.NotPositiveSemidefiniteError):
            ds.distances(points_array, weights=[[-2.0, 0.0], [0.0, -1.0]])

    def test_unknown_option(self, points_array):
        with pytest.raises(ds.InvalidOptionError, match="zscore"):
            ds.distances(points_array, normalize="zscore")

    def test_weights_reject_presets(self, points_array):
        with pytest.raises(ds.InvalidOptionError):
            ds.distances(points_array, weights="studentize")

    def test_invalid_type(self, points_array):
        with pytest.raises(ds.InvalidTypeError):
            ds.distances(points_array, normalize={"x": 1})

    def test_all_errors_share_base(self, points_array):
        with pytest.raises(ds.DistancesError):
            ds.distances(points_array, normalize=[[1.0, 2.0], [2.0, 4.0]])

    def test_covariance_needs_two_points(self):
        with pytest.raises(ds.InvalidDataError, match="two data points"):
            ds.distances([[1.0, 2.0]], normalize="mahalanobize")

    def test_custom_tolerances(self, points_array):
        slightly_asymmetric = [[2.0, 0.5], [0.5001, 1.0]]
        with pytest.raises(ds.NotSymmetricError):
            ds.distances(points_array, normalize=slightly_asymmetric)
        metric = ds.distances(
            points_array,
            normalize=slightly_asymmetric,
            tolerances=ds.NumericalTolerances(symmetry=1e-3),
        )
        assert metric.shape == (10, 2)


class TestTolerancesConfig:
    def test_defaults(self):
        assert ds.DEFAULT_TOLERANCES == ds.NumericalTolerances()

    def test_negative_tolerance_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            ds.NumericalTolerances(psd=-1.0)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ds.DEFAULT_TOLERANCES.psd = 1.0
