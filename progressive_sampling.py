from collections import namedtuple

import numpy as np
import pandas as pd
from category_encoders.ordinal import OrdinalEncoder
from sklearn.ensemble import RandomForestClassifier
from sklearn.model_selection import GridSearchCV, RepeatedStratifiedKFold
from sklearn.pipeline import Pipeline

from utils import RESULT_COLUMNS

Resampling = namedtuple('Resampling', ['n_splits', 'n_repeats'])
ResultRow = namedtuple('ResultRow', RESULT_COLUMNS)

# Repeated 5-fold cross-validation
SIMULATION_RESAMPLING = Resampling(n_splits=5, n_repeats=6)
WINE_RESAMPLING = Resampling(n_splits=5, n_repeats=2)

# A single point of the random forest hyperparameter space, it is not tuned
RF_PARAMS = {'max_features': 3, 'criterion': 'gini', 'min_samples_leaf': 1}
N_TREES = 500


def check_training_folds(cv, X, y):
    """Raise if a training fold lacks one of the labels of the data set."""
    labels = np.unique(y)
    for i, (train, _) in enumerate(cv.split(X, y)):
        lacking = np.setdiff1d(labels, y[train])
        if len(lacking):
            raise ValueError("Training fold %d has no rows labelled %s" % (i + 1, lacking.tolist()))


def cv_accuracy(data, label, params, resampling, random_state, n_estimators=N_TREES):
    """Mean cross-validated accuracy (in percent) of a random forest trained on the data.

    The hyperparameters are passed to the grid search as a grid with exactly one candidate, so
    ``best_score_`` is the mean accuracy over all folds of all repeats.
    """
    y = np.asarray(data[label])
    X = data.drop(columns=[label])

    rf = RandomForestClassifier(n_estimators=n_estimators, random_state=random_state, n_jobs=-1)
    steps = [('rf', rf)]
    cat_cols = X.select_dtypes(include='category').columns.tolist()
    if cat_cols:
        steps.insert(0, ('encoder', OrdinalEncoder(cols=cat_cols)))
    pipe = Pipeline(steps=steps)

    cv = RepeatedStratifiedKFold(n_splits=resampling.n_splits, n_repeats=resampling.n_repeats,
                                 random_state=random_state)
    grid_search = GridSearchCV(estimator=pipe,
                               param_grid={f'rf__{key}': [value] for key, value in params.items()},
                               cv=cv, scoring='accuracy', error_score='raise')
    check_training_folds(cv, X, y)
    grid_search.fit(X, y)
    return grid_search.best_score_ * 100


def check_plan(sizes, repeats):
    sizes = list(sizes)
    if not sizes:
        raise ValueError("At least one sample size is required")
    if any(size <= 0 for size in sizes):
        raise ValueError("Sample sizes must be positive: %r" % sizes)
    if any(later <= earlier for earlier, later in zip(sizes, sizes[1:])):
        raise ValueError("Sample sizes must be strictly increasing: %r" % sizes)
    if repeats <= 0:
        raise ValueError("Number of repeats must be positive, got %r" % repeats)
    return sizes


def unit_seeds(sizes, repeats, seed=None):
    """One integer seed per (size, repeat) pair, drawn in the nested order of the evaluation."""
    rs = np.random.RandomState(seed)
    draws = rs.randint(0, np.iinfo(np.int32).max, size=len(sizes) * repeats)
    pairs = [(size, repeat) for size in sizes for repeat in range(1, repeats + 1)]
    return {pair: int(unit_seed) for pair, unit_seed in zip(pairs, draws)}


def evaluate(sizes, repeats, fit_fn, gen_fn, label='y', params=RF_PARAMS, resampling=SIMULATION_RESAMPLING,
             seed=None):
    """Progressive sampling: cross-validated accuracy for increasing sample sizes.

    For every sample size, in the given order, and every repeat ``1..repeats`` a data set is
    obtained with ``gen_fn(size, repeat, random_state)`` and scored with
    ``fit_fn(data, label, params, resampling, random_state)``.

    :param sizes: strictly increasing sample sizes
    :param repeats: number of independent data sets per sample size
    :param fit_fn: returns the mean cross-validated accuracy in percent
    :param gen_fn: returns the data set for a (size, repeat) pair
    :param seed: seed of the whole run
    :return: DataFrame with the columns Sample_size, repeat, Mean_accuracy in evaluation order
    """
    sizes = check_plan(sizes, repeats)
    seeds = unit_seeds(sizes, repeats, seed)

    rows = []
    for size in sizes:
        for repeat in range(1, repeats + 1):
            random_state = seeds[(size, repeat)]
            data = gen_fn(size, repeat, random_state)
            accuracy = fit_fn(data, label, params, resampling, random_state)
            print("Sample size %d, repeat %d: CV accuracy=%0.3f" % (size, repeat, accuracy))
            rows.append(ResultRow(size, repeat, float(accuracy)))
    return pd.DataFrame.from_records(rows, columns=RESULT_COLUMNS)
