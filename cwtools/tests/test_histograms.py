"""
"""

import numpy as np
import pytest

from cwtools import histograms
from cwtools.errors import InvalidArgumentError


def test_percentile_uniform_1d():
    edges = [np.linspace(0.0, 10.0, 11)]
    dens = np.full(10, 0.1)
    for pc in [0.05, 0.25, 0.5, 0.77, 0.99]:
        test = histograms.percentile_of_hist(dens, edges, pc)
        assert np.shape(test) == ()
        assert np.isclose(test, 10.0 * pc)

    return


def test_percentile_nonuniform_bins():
    # two bins of different widths, each holding half the probability
    edges = [np.array([0.0, 1.0, 5.0])]
    dens = np.array([0.5, 0.125])
    assert np.isclose(histograms.percentile_of_hist(dens, edges, 0.25), 0.5)
    assert np.isclose(histograms.percentile_of_hist(dens, edges, 0.75), 3.0)
    return


def test_percentile_unnormalised():
    """Densities need not be normalised: percentiles use the total probability along the axis.
    """
    edges = [np.linspace(-2.0, 2.0, 5)]
    dens = np.array([1.0, 3.0, 3.0, 1.0])
    test = histograms.percentile_of_hist(10.0 * dens, edges, 0.5)
    assert np.isclose(test, 0.0)
    return


def test_percentile_2d_axes():
    xe = np.linspace(0.0, 4.0, 5)
    ye = np.linspace(0.0, 1.0, 3)
    # along x: uniform in each column;  along y: all probability in the lower bin
    dens = np.zeros((4, 2))
    dens[:, 0] = 1.0
    dens[:, 1] = 1e-30

    perc_x = histograms.percentile_of_hist(dens, [xe, ye], 0.5, axis=0)
    assert perc_x.shape == (2,)
    assert np.allclose(perc_x, 2.0)

    perc_y = histograms.percentile_of_hist(dens, [xe, ye], 0.5, axis=1)
    assert perc_y.shape == (4,)
    assert np.allclose(perc_y, 0.25)

    # negative axis is equivalent
    perc_neg = histograms.percentile_of_hist(dens, [xe, ye], 0.5, axis=-1)
    assert np.allclose(perc_neg, perc_y)
    return


def test_percentile_ignores_infinite_bins():
    edges = [np.array([-np.inf, 0.0, 1.0, 2.0, np.inf])]
    dens = np.array([5.0, 1.0, 1.0, 5.0])
    test = histograms.percentile_of_hist(dens, edges, 0.5)
    assert np.isclose(test, 1.0)
    return


def test_percentile_histogramdd_samples():
    np.random.seed(91)
    data = np.array([np.random.normal(size=20000), np.random.uniform(size=20000)]).T
    dens, edges = np.histogramdd(data, bins=(40, 5), density=True)
    test = histograms.percentile_of_hist(dens, edges, 0.5, axis=0)
    assert test.shape == (5,)
    # each column of a product distribution has the same median, near zero
    assert np.all(np.abs(test) < 0.1)
    return


def test_percentile_errors():
    edges = [np.linspace(0.0, 1.0, 5)]
    dens = np.ones(4)
    for pc in [0.0, 1.0, -0.5, [0.1, 0.2]]:
        with pytest.raises(InvalidArgumentError):
            histograms.percentile_of_hist(dens, edges, pc)

    with pytest.raises(InvalidArgumentError):
        histograms.percentile_of_hist(dens, edges, 0.5, axis=1)

    with pytest.raises(InvalidArgumentError):
        histograms.percentile_of_hist(dens, [np.linspace(0.0, 1.0, 4)], 0.5)

    with pytest.raises(InvalidArgumentError):
        histograms.percentile_of_hist(dens, edges + edges, 0.5)

    return
