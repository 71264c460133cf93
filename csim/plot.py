#! /usr/bin/env python3
"""Bar chart of csim summaries.

    for t in traces/*.trace; do csim -s 5 -E 1 -b 5 -t $t; done | csim-plot yi dave trans
"""

from matplotlib import pyplot as plt
import sys
import numpy as np


def parseSummaries(lines):
    """Collect (hits, misses, evictions) from `hits:H misses:M evictions:E` lines, other lines are ignored."""
    summaries = []
    for line in lines:
        fields = dict(f.split(':', 1) for f in line.split() if ':' in f)
        try:
            summaries.append([int(fields['hits']), int(fields['misses']), int(fields['evictions'])])
        except (KeyError, ValueError):
            continue
    return np.asarray(summaries, dtype=int).reshape(-1, 3)


def missRate(summaries):
    accesses = summaries[:,0] + summaries[:,1]
    return np.divide(summaries[:,1], accesses, out=np.zeros(len(summaries)), where=accesses > 0)


def plotSummaries(summaries, labels=()):
    """Grouped bars of hits/misses/evictions per run, miss rate on a second axis."""
    bar_width = 0.25
    index = np.arange(len(summaries))
    labels = list(labels) + [str(i) for i in range(len(labels), len(summaries))]

    fig, ax = plt.subplots()
    ax.bar(index, summaries[:,0], width=bar_width, color='C0', label='Hits')
    ax.bar(index + bar_width, summaries[:,1], width=bar_width, color='C3', label='Misses')
    ax.bar(index + 2*bar_width, summaries[:,2], width=bar_width, color='C7', label='Evictions')
    ax.set_ylabel("Accesses")
    ax.set_xticks(index + bar_width)
    ax.set_xticklabels(labels[:len(summaries)])
    ax.legend(loc='upper left')

    ax2 = ax.twinx()
    ax2.plot(index + bar_width, missRate(summaries) * 100, 'k.')
    ax2.set_ylabel("Miss rate (%)")
    ax2.set_ylim(0, 100)
    return fig


def main():
    summaries = parseSummaries(sys.stdin)
    if len(summaries) == 0:
        print("csim-plot: no summaries on stdin", file=sys.stderr)
        return 1
    plotSummaries(summaries, sys.argv[1:])
    plt.show()
    return 0


if __name__ == '__main__':
    sys.exit(main())
