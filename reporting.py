import os

import numpy as np
from matplotlib import pyplot as plt

STABLE_TOLERANCE = 1.0


def aggregate(table):
    """Minimum, mean, maximum and standard deviation of the accuracy for every sample size."""
    summary = table.groupby('Sample_size')['Mean_accuracy'].agg(['min', 'mean', 'max', 'std'])
    summary.columns = ['Min', 'Mean', 'Max', 'Std']
    return summary.reset_index().sort_values('Sample_size', ignore_index=True)


def minimum_stable_size(table, tolerance=STABLE_TOLERANCE):
    """Smallest sample size from which on the accuracy varies by at most ``tolerance`` points.

    The variation is the standard deviation of the accuracy across the repeats of a sample size.
    It has to stay within the tolerance for all larger sample sizes too. Returns None if no
    sample size qualifies.
    """
    summary = aggregate(table)
    stable = (summary['Std'] <= tolerance).to_numpy()
    candidate = None
    for size, is_stable in zip(summary['Sample_size'][::-1], stable[::-1]):
        if not is_stable:
            break
        candidate = int(size)
    return candidate


def plot_accuracy(table, smooth=True, jitter=0.15, random_state=0, ax=None, title=None):
    """Scatter plot of the accuracy of every repeat against the sample size.

    The sample sizes are placed at equal distances on the x axis, and the points are jittered
    horizontally so that equal accuracies stay visible.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(15, 10))
    sizes = sorted(table['Sample_size'].unique())
    position = {size: i for i, size in enumerate(sizes)}
    x = table['Sample_size'].map(position).to_numpy(dtype=float)
    y = table['Mean_accuracy'].to_numpy(dtype=float)

    rs = np.random.RandomState(random_state)
    ax.scatter(x + rs.uniform(-jitter, jitter, size=len(x)), y, alpha=0.6, label='repeats')

    summary = aggregate(table)
    ax.plot(range(len(sizes)), summary['Mean'], 'r_', markersize=20, mew=2, label='mean')
    # Quadratic trend over the position of the sample size
    if smooth and len(sizes) > 2:
        coef = np.polyfit(x, y, 2)
        grid = np.linspace(0, len(sizes) - 1, 100)
        ax.plot(grid, np.polyval(coef, grid), 'b-', label='trend')

    ax.set_xticks(range(len(sizes)))
    ax.set_xticklabels([str(size) for size in sizes])
    ax.set_ylim(0, 100)
    ax.set_xlabel('Sample size')
    ax.set_ylabel('Mean CV accuracy, %')
    if title:
        ax.set_title(title)
    ax.legend()
    return ax


def save_plot(ax, filename):
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    ax.figure.savefig(filename, dpi=300, bbox_inches='tight')
    plt.close(ax.figure)


def print_summary(table, tolerance=STABLE_TOLERANCE):
    print(aggregate(table).to_string(index=False))
    stable_size = minimum_stable_size(table, tolerance)
    if stable_size is None:
        print('No sample size gives an accuracy stable within %.1f points' % tolerance)
    else:
        print('Accuracy is stable within %.1f points from sample size %d' % (tolerance, stable_size))
    return stable_size
