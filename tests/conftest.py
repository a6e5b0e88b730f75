"""Pytest fixtures for the progressive sampling tests."""

import matplotlib

matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest

from wine import add_taste


@pytest.fixture
def raw_wine() -> pd.DataFrame:
    """A small table shaped like the white wine quality data."""
    rs = np.random.RandomState(2834)
    n = 300
    return pd.DataFrame({
        'fixed acidity': rs.normal(6.8, 0.8, n),
        'residual sugar': rs.gamma(2.0, 3.0, n),
        'alcohol': rs.normal(10.5, 1.2, n),
        'quality': rs.choice([3, 4, 5, 6, 7, 8, 9], size=n, p=[0.01, 0.04, 0.3, 0.45, 0.17, 0.025, 0.005]),
    })


@pytest.fixture
def wine_data(raw_wine: pd.DataFrame) -> pd.DataFrame:
    """The small wine table with the taste label."""
    return add_taste(raw_wine)


@pytest.fixture
def stub_fit():
    """A deterministic trainer that scores a data set by its share of positive labels."""
    calls = []

    def fit(data, label, params, resampling, random_state):
        calls.append((len(data), label, dict(params), resampling, random_state))
        return float(data[label].astype(str).eq('1').mean() * 100)

    fit.calls = calls
    return fit
