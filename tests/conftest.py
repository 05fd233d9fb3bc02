"""Shared test fixtures for distances."""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def points_array():
    """10x2 points: x rises 1..10, y falls then rises (zero sample covariance)."""
    return np.array([
        [1.0, 10.0],
        [2.0, 9.0],
        [3.0, 8.0],
        [4.0, 7.0],
        [5.0, 6.0],
        [6.0, 6.0],
        [7.0, 7.0],
        [8.0, 8.0],
        [9.0, 9.0],
        [10.0, 10.0],
    ])


@pytest.fixture
def points_df(points_array):
    """The 10x2 points as a DataFrame with columns x, y."""
    return pd.DataFrame(points_array, columns=["x", "y"])


@pytest.fixture
def points_with_ids_df(points_df):
    """The 10x2 points plus an id column of letters a..j."""
    df = points_df.copy()
    df["my_ids"] = list("abcdefghij")
    return df


@pytest.fixture
def correlated_points():
    """50x3 points with correlated columns (non-diagonal covariance)."""
    rng = np.random.default_rng(42)
    base = rng.standard_normal((50, 3))
    mixing = np.array([
        [2.0, 0.0, 0.0],
        [0.8, 1.0, 0.0],
        [-0.5, 0.3, 0.5],
    ])
    return base @ mixing.T + np.array([1.0, -2.0, 5.0])


@pytest.fixture
def spd_matrix():
    """3x3 symmetric positive-definite matrix."""
    return np.array([
        [4.0, 1.0, 0.5],
        [1.0, 3.0, 0.2],
        [0.5, 0.2, 2.0],
    ])
