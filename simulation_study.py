import argparse
from functools import partial

from progressive_sampling import cv_accuracy, evaluate, RF_PARAMS, SIMULATION_RESAMPLING
from reporting import plot_accuracy, print_summary, save_plot
from simulation import simulation_sampler
from utils import Mode, run_or_load

# Some constants
seed = 8379
sample_sizes = [20, 100, 500, 1000, 2000, 5000]
n_repeats = 30
relevance = 0.1
interaction = 0
results_file = 'studies/simulation_results.json'
plot_file = 'studies/simulation_accuracy.png'


def run_study(sizes=sample_sizes, repeats=n_repeats, fit_fn=cv_accuracy, random_seed=seed):
    return evaluate(sizes, repeats, fit_fn, simulation_sampler(relevance, interaction), label='y',
                    params=RF_PARAMS, resampling=SIMULATION_RESAMPLING, seed=random_seed)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Progressive sampling on simulated data')
    parser.add_argument('--mode', choices=[mode.value for mode in Mode], default=Mode.LOAD_CACHED.value,
                        help='recompute the results or load them from the results file')
    parser.add_argument('--results', default=results_file)
    parser.add_argument('--plot', default=plot_file)
    parser.add_argument('--seed', type=int, default=seed)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    table = run_or_load(Mode(args.mode), args.results,
                        partial(run_study, sample_sizes, n_repeats, cv_accuracy, args.seed))
    print_summary(table)
    ax = plot_accuracy(table, title='Simulated data, relevance %.2f' % relevance)
    save_plot(ax, args.plot)
    return table


if __name__ == '__main__':
    main()
