"""Tests for the simulated data generator."""

import numpy as np
import pandas as pd
import pytest

from simulation import generate, simulation_sampler, x2_probabilities


def subgroup_rates(data: pd.DataFrame) -> dict:
    x2 = data['x2'].astype(int)
    y = data['y'].astype(int)
    negative = data['x1'] < 0
    return {
        (1, True): x2[(y == 1) & negative].mean(),
        (1, False): x2[(y == 1) & ~negative].mean(),
        (0, True): x2[(y == 0) & negative].mean(),
        (0, False): x2[(y == 0) & ~negative].mean(),
    }


class TestGenerate:
    """Tests for generate."""

    @pytest.mark.parametrize('n', [1, 20, 100, 500])
    def test_shape(self, n: int) -> None:
        """The data set has the requested rows, the label and five features."""
        data = generate(n, 0.1, random_state=1)
        assert data.shape == (n, 6)
        assert list(data.columns) == ['y', 'x1', 'x2', 'x3', 'x4', 'x5']

    def test_label_is_binary_categorical(self) -> None:
        data = generate(200, 0.1, random_state=2)
        assert isinstance(data['y'].dtype, pd.CategoricalDtype)
        assert set(data['y'].unique()) <= {0, 1}
        assert list(data['y'].cat.categories) == [0, 1]

    def test_noise_feature_ranges(self) -> None:
        data = generate(2000, 0.1, random_state=3)
        assert data['x3'].astype(int).between(1, 4).all()
        assert data['x4'].astype(int).between(1, 10).all()
        assert data['x5'].astype(int).between(1, 20).all()
        assert set(data['x2'].astype(int)) <= {0, 1}

    def test_same_seed_same_data(self) -> None:
        pd.testing.assert_frame_equal(generate(100, 0.2, 0.05, random_state=7),
                                      generate(100, 0.2, 0.05, random_state=7))

    def test_different_seed_different_data(self) -> None:
        first = generate(100, 0.2, random_state=7)
        second = generate(100, 0.2, random_state=8)
        assert not first['x1'].equals(second['x1'])

    def test_no_signal_without_relevance(self) -> None:
        """Without relevance or interaction x2 is a fair coin in every subpopulation."""
        data = generate(200000, 0, random_state=11)
        for rate in subgroup_rates(data).values():
            assert rate == pytest.approx(0.5, abs=0.01)

    def test_relevance_shifts_subpopulations(self) -> None:
        data = generate(200000, 0.1, random_state=12)
        rates = subgroup_rates(data)
        assert rates[(1, True)] == pytest.approx(0.4, abs=0.01)
        assert rates[(1, False)] == pytest.approx(0.4, abs=0.01)
        assert rates[(0, True)] == pytest.approx(0.6, abs=0.01)
        assert rates[(0, False)] == pytest.approx(0.6, abs=0.01)

    def test_interaction_shifts_by_sign_of_x1(self) -> None:
        data = generate(200000, 0.1, interaction=0.05, random_state=13)
        rates = subgroup_rates(data)
        assert rates[(1, True)] == pytest.approx(0.35, abs=0.01)
        assert rates[(1, False)] == pytest.approx(0.45, abs=0.01)
        assert rates[(0, True)] == pytest.approx(0.55, abs=0.01)
        assert rates[(0, False)] == pytest.approx(0.65, abs=0.01)

    @pytest.mark.parametrize('n', [0, -5])
    def test_rejects_empty_sample(self, n: int) -> None:
        with pytest.raises(ValueError):
            generate(n, 0.1)

    @pytest.mark.parametrize('relevance', [-0.1, 0.5, 0.7])
    def test_rejects_relevance_out_of_range(self, relevance: float) -> None:
        with pytest.raises(ValueError):
            generate(10, relevance)

    def test_rejects_probability_outside_unit_interval(self) -> None:
        """Relevance and interaction together must not push a probability past 0 or 1."""
        with pytest.raises(ValueError):
            generate(10, 0.4, interaction=0.2)
        with pytest.raises(ValueError):
            generate(10, 0.4, interaction=-0.2)

    def test_extreme_but_valid_probabilities(self) -> None:
        data = generate(50, 0.3, interaction=0.2, random_state=5)
        assert len(data) == 50


class TestX2Probabilities:
    """Tests for the success probabilities of the signal feature."""

    def test_relevance_only(self) -> None:
        y = np.array([1, 1, 0, 0])
        x1 = np.array([-1.0, 1.0, -1.0, 1.0])
        np.testing.assert_allclose(x2_probabilities(y, x1, 0.1), [0.4, 0.4, 0.6, 0.6])

    def test_relevance_and_interaction(self) -> None:
        y = np.array([1, 1, 0, 0])
        x1 = np.array([-0.5, 0.0, -0.5, 0.0])
        np.testing.assert_allclose(x2_probabilities(y, x1, 0.1, 0.05), [0.35, 0.45, 0.55, 0.65])

    def test_zero_counts_as_nonnegative(self) -> None:
        assert x2_probabilities([0], [0.0], 0.1, 0.05)[0] == pytest.approx(0.65)


def test_simulation_sampler() -> None:
    sampler = simulation_sampler(0.1)
    data = sampler(30, 1, 4)
    pd.testing.assert_frame_equal(data, generate(30, 0.1, random_state=4))
