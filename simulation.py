import numpy as np
import pandas as pd
from sklearn.utils import check_random_state

FEATURE_LEVELS = {'x3': 4, 'x4': 10, 'x5': 20}


def x2_probabilities(y, x1, relevance, interaction=0):
    """Success probability of the signal feature x2 for every row.

    The four subpopulations given by the label and the sign of x1 are shifted away from 0.5:

    ======  ======  =========================
    y       x1      P(x2 = 1)
    ======  ======  =========================
    1       < 0     0.5 - relevance - interaction
    1       >= 0    0.5 - relevance + interaction
    0       < 0     0.5 + relevance - interaction
    0       >= 0    0.5 + relevance + interaction
    ======  ======  =========================
    """
    y = np.asarray(y)
    x1 = np.asarray(x1)
    label_shift = np.where(y == 1, -relevance, relevance)
    sign_shift = np.where(x1 < 0, -interaction, interaction)
    return 0.5 + label_shift + sign_shift


def check_parameters(n, relevance, interaction=0):
    if n <= 0:
        raise ValueError("Sample size must be positive, got %r" % n)
    if not 0 <= relevance < 0.5:
        raise ValueError("Relevance must be in [0, 0.5), got %r" % relevance)
    # The extreme subpopulations sit at 0.5 -/+ (relevance + |interaction|)
    spread = relevance + abs(interaction)
    if spread > 0.5:
        raise ValueError("relevance=%r and interaction=%r give probabilities outside [0, 1]"
                         % (relevance, interaction))


def generate(n, relevance, interaction=0, random_state=None):
    """Simulate a binary classification data set with a weak signal.

    :param n: Number of rows
    :param relevance: How strongly x2 depends on the label, in [0, 0.5)
    :param interaction: Offset of the x2 probability by the sign of x1
    :param random_state: int, RandomState instance or None
    :return: DataFrame with the categorical label ``y`` and the features ``x1`` .. ``x5``
    """
    check_parameters(n, relevance, interaction)
    rs = check_random_state(random_state)

    y = rs.binomial(1, 0.5, size=n)
    x1 = rs.standard_normal(n)
    x2 = rs.binomial(1, x2_probabilities(y, x1, relevance, interaction))
    data = pd.DataFrame({
        'y': pd.Categorical(y, categories=[0, 1]),
        'x1': x1,
        'x2': pd.Categorical(x2, categories=[0, 1]),
    })
    # Pure noise, unrelated to the label
    for col, n_levels in FEATURE_LEVELS.items():
        data[col] = pd.Categorical(rs.randint(1, n_levels + 1, size=n), categories=range(1, n_levels + 1))
    return data


def simulation_sampler(relevance, interaction=0):
    """Wrap ``generate`` into the sampler signature expected by the evaluation driver."""

    def sampler(size, repeat, random_state):
        return generate(size, relevance, interaction, random_state=random_state)

    return sampler
