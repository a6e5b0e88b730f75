import argparse

from progressive_sampling import cv_accuracy, evaluate, RF_PARAMS, WINE_RESAMPLING
from reporting import plot_accuracy, print_summary, save_plot
from utils import Mode, run_or_load
from wine import LABEL, load_wine, PartitionSampler, WINE_CACHE

# Some constants
seed = 1179
# The largest size times the number of repeats has to fit into the 4898 wines.
# Below 50 wines a partition often has a single good wine, which aborts the run.
sample_sizes = [50, 100, 200, 300, 400]
n_repeats = 10
results_file = 'studies/wine_results.json'
plot_file = 'studies/wine_accuracy.png'


def run_study(data, sizes=sample_sizes, repeats=n_repeats, fit_fn=cv_accuracy, random_seed=seed):
    sampler = PartitionSampler(data, repeats, seed=random_seed, label=LABEL, sizes=sizes)
    return evaluate(sizes, repeats, fit_fn, sampler, label=LABEL,
                    params=RF_PARAMS, resampling=WINE_RESAMPLING, seed=random_seed)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Progressive sampling on the white wine quality data')
    parser.add_argument('--mode', choices=[mode.value for mode in Mode], default=Mode.LOAD_CACHED.value,
                        help='recompute the results or load them from the results file')
    parser.add_argument('--data', default=WINE_CACHE, help='cached wine data')
    parser.add_argument('--results', default=results_file)
    parser.add_argument('--plot', default=plot_file)
    parser.add_argument('--seed', type=int, default=seed)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    mode = Mode(args.mode)

    def compute():
        return run_study(load_wine(args.data), sample_sizes, n_repeats, cv_accuracy, args.seed)

    table = run_or_load(mode, args.results, compute)
    print_summary(table)
    ax = plot_accuracy(table, title='White wine quality')
    save_plot(ax, args.plot)
    return table


if __name__ == '__main__':
    main()
