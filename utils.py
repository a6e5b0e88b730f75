import json
import os
from enum import Enum

import pandas as pd

RESULT_COLUMNS = ['Sample_size', 'repeat', 'Mean_accuracy']


class Mode(Enum):
    """Whether a study recomputes its results or reads the artifact of an earlier run.

    There is no staleness check: a cached artifact is returned as it is, even if the
    configuration of the study has changed since it was written.
    """
    RECOMPUTE = 'recompute'
    LOAD_CACHED = 'cached'


def get_serializable_results(table: pd.DataFrame):
    return [{'Sample_size': int(row.Sample_size),
             'repeat': int(row.repeat),
             'Mean_accuracy': float(row.Mean_accuracy)} for row in table[RESULT_COLUMNS].itertuples(index=False)]


def dump_results(table: pd.DataFrame, filename):
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, 'w') as json_file:
        json.dump(get_serializable_results(table), json_file, indent=4)


def load_results(filename):
    with open(filename, 'r') as json_file:
        records = json.load(json_file)
    table = pd.DataFrame.from_records(records, columns=RESULT_COLUMNS)
    return table.astype({'Sample_size': 'int64', 'repeat': 'int64', 'Mean_accuracy': 'float64'})


def run_or_load(mode: Mode, filename, compute):
    """Run ``compute`` and save its result table, or load the table saved by an earlier run.

    A missing artifact in ``LOAD_CACHED`` mode is an error, the results are never recomputed silently.
    """
    if mode == Mode.RECOMPUTE:
        table = compute()
        dump_results(table, filename)
        print('Results saved to', filename)
        return table
    elif mode == Mode.LOAD_CACHED:
        print('Loading results from', filename)
        return load_results(filename)
    raise ValueError("Unknown mode %r" % (mode,))
