import os

import numpy as np
import pandas as pd
from sklearn.utils import check_random_state

WINE_URL = 'https://archive.ics.uci.edu/ml/machine-learning-databases/wine-quality/winequality-white.csv'
WINE_CACHE = 'data/winequality_white.pkl'
LABEL = 'taste'
TASTE_LEVELS = ['bad', 'normal', 'good']


def add_taste(raw):
    """Collapse the quality score into three taste classes and drop the score."""
    data = raw.copy()
    taste = np.where(data['quality'] < 6, 'bad', np.where(data['quality'] == 6, 'normal', 'good'))
    data[LABEL] = pd.Categorical(taste, categories=TASTE_LEVELS, ordered=True)
    return data.drop(columns=['quality'])


def load_wine(cache_path=WINE_CACHE, url=WINE_URL, refresh=False):
    """Load the white wine data set, downloading and caching it on first use."""
    if os.path.exists(cache_path) and not refresh:
        return pd.read_pickle(cache_path)
    print('Reading wine data from', url)
    data = add_taste(pd.read_csv(url, sep=';'))
    cache_dir = os.path.dirname(cache_path)
    if cache_dir:
        os.makedirs(cache_dir, exist_ok=True)
    data.to_pickle(cache_path)
    return data


def prune_unused_levels(frame):
    """Remove the categories that no row of the frame uses."""
    frame = frame.copy()
    for col in frame.select_dtypes(include='category').columns:
        frame[col] = frame[col].cat.remove_unused_categories()
    return frame


def missing_levels(frame, label=LABEL):
    present = set(frame[label].unique())
    return [level for level in frame[label].cat.categories if level not in present]


def check_budget(data, sizes, n_partitions):
    """Raise if the partitions of the largest sample size do not fit into the data."""
    size = max(sizes)
    if size * n_partitions > len(data):
        raise ValueError("Cannot draw %d partitions of %d rows from %d rows" % (n_partitions, size, len(data)))


def partition(data, size, n_partitions, random_state=None, label=LABEL):
    """Split a random subset of the data into disjoint partitions.

    ``size * n_partitions`` rows are drawn without replacement and every row is assigned to one
    of the partitions at random, so the partitions have ``size`` rows on average but not exactly.

    :return: list of ``n_partitions`` DataFrames with unused categories removed
    """
    check_budget(data, [size], n_partitions)
    budget = size * n_partitions
    rs = check_random_state(random_state)
    rows = rs.choice(len(data), size=budget, replace=False)
    groups = rs.randint(0, n_partitions, size=budget)

    partitions = []
    for j in range(n_partitions):
        part = data.iloc[np.sort(rows[groups == j])]
        lacking = missing_levels(part, label)
        if lacking:
            print('Partition %d of size %d has no rows for %s' % (j + 1, len(part), lacking))
        partitions.append(prune_unused_levels(part))
    return partitions


class PartitionSampler:
    """Hands out disjoint partitions of a finite data set to the evaluation driver.

    The partitions of a sample size are drawn once, the first time the size is requested,
    and repeat ``j`` receives the ``j``-th partition. Only the partitions of the latest size are kept.
    When the planned sizes are given, the largest one is checked against the data up front.
    """

    def __init__(self, data, n_partitions, seed=None, label=LABEL, sizes=None):
        if sizes is not None:
            check_budget(data, sizes, n_partitions)
        self.data = data
        self.n_partitions = n_partitions
        self.seed = seed
        self.label = label
        self._partitions = {}

    def partitions_for(self, size):
        if size not in self._partitions:
            # Seeded by size so that the partitions do not depend on the order of requests
            seed = None if self.seed is None else [self.seed, size]
            random_state = np.random.RandomState(seed)
            self._partitions = {size: partition(self.data, size, self.n_partitions, random_state, self.label)}
        return self._partitions[size]

    def __call__(self, size, repeat, random_state=None):
        if not 1 <= repeat <= self.n_partitions:
            raise ValueError("Repeat %d outside 1..%d" % (repeat, self.n_partitions))
        return self.partitions_for(size)[repeat - 1]
