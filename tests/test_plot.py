import unittest

import matplotlib
matplotlib.use("Agg")
import numpy as np
from matplotlib import pyplot as plt

from csim.plot import parseSummaries, missRate, plotSummaries


class TestPlot(unittest.TestCase):

    def test_parse(self):
        lines = ["hits:1 misses:3 evictions:1\n", "csim: something else\n", "hits:10 misses:0 evictions:0\n"]
        summaries = parseSummaries(lines)
        self.assertEqual(summaries.tolist(), [[1, 3, 1], [10, 0, 0]])

    def test_parse_empty(self):
        self.assertEqual(parseSummaries([]).shape, (0, 3))

    def test_miss_rate(self):
        rate = missRate(np.array([[1, 3, 1], [0, 0, 0]]))
        self.assertAlmostEqual(rate[0], 0.75)
        self.assertEqual(rate[1], 0)

    def test_plot(self):
        fig = plotSummaries(parseSummaries(["hits:1 misses:3 evictions:1", "hits:2 misses:2 evictions:0"]), ["yi"])
        self.assertEqual(len(fig.axes), 2)
        self.assertEqual(len(fig.axes[0].patches), 6)
        plt.close(fig)


if __name__ == '__main__':
    unittest.main()
