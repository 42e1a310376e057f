"""Percentiles of pre-built histograms.

Histograms are described by their probability densities and bin edges, in the form returned by
``numpy.histogramdd(..., density=True)``, i.e. ``dens`` of shape ``(N1, N2, ...)`` and ``edges``
a sequence of arrays of lengths ``(N1+1, N2+1, ...)``.  Bins bounded by a non-finite edge (e.g.
overflow bins extending to infinity) carry no usable width, and are excluded.

"""

import numpy as np

from cwtools import log
from cwtools.errors import InvalidArgumentError


def percentile_of_hist(dens, edges, pc, axis=0):
    """Calculate the percentile(s) of a histogram along one of its dimensions.

    The densities are converted to probabilities using the areas of all bins, cumulated along
    `axis`, and normalised to the total probability along `axis`.  The percentile is then linearly
    interpolated within the bin in which the cumulative probability crosses `pc`.

    Parameters
    ----------
    dens : (N1, N2, ...) array_like
        Probability densities of the histogram bins.
    edges : sequence of array_like
        Bin edges for each dimension of `dens`.
    pc : float
        Percentile, as a fraction in the range ``(0, 1)``.
    axis : int
        Dimension to calculate the percentile(s) over.

    Returns
    -------
    perc : ndarray
        Percentiles, with the shape of the finite part of `dens` with `axis` removed.

    Examples
    --------
    >>> dens, edges = np.histogramdd(np.random.uniform(size=(1000, 2)), bins=10, density=True)
    >>> percentile_of_hist(dens, edges, 0.5, axis=1).shape
    (10,)

    """
    dens = np.asarray(dens, dtype=float)
    edges = [np.asarray(ee, dtype=float) for ee in edges]
    ndim = dens.ndim

    if (not np.isscalar(pc)) or (not (0.0 < pc < 1.0)):
        msg = f"Percentile `pc` must be a scalar in (0, 1), got {pc}!"
        log.error(msg)
        raise InvalidArgumentError(msg)
    if len(edges) != ndim:
        msg = f"Number of `edges` ({len(edges)}) does not match dimensions of `dens` ({ndim})!"
        log.error(msg)
        raise InvalidArgumentError(msg)
    if (not isinstance(axis, (int, np.integer))) or (not (-ndim <= axis < ndim)):
        msg = f"`axis`={axis} is invalid for a {ndim}-dimensional histogram!"
        log.error(msg)
        raise InvalidArgumentError(msg)
    axis = axis % ndim

    for ii, ee in enumerate(edges):
        if (ee.ndim != 1) or (ee.size != dens.shape[ii] + 1):
            msg = f"`edges[{ii}]` shape {ee.shape} does not match `dens` shape {dens.shape}!"
            log.error(msg)
            raise InvalidArgumentError(msg)

    # ---- select finite bins, and multiply densities by the widths along each dimension
    lowers = []
    widths = []
    prob = dens
    for ii, ee in enumerate(edges):
        finite = np.isfinite(ee[:-1]) & np.isfinite(ee[1:])
        prob = np.compress(finite, prob, axis=ii)
        lo = ee[:-1][finite]
        dx = ee[1:][finite] - lo
        lowers.append(lo)
        widths.append(dx)

        shape = [1] * ndim
        shape[ii] = dx.size
        prob = prob * dx.reshape(shape)

    # ---- cumulative probabilities along `axis`, starting from zero
    cumprob = np.cumsum(prob, axis=axis)
    zeros = np.zeros_like(np.take(cumprob, [0], axis=axis))
    cumprob = np.concatenate([zeros, cumprob], axis=axis)

    # normalise by the total probability along `axis`
    norm = np.take(cumprob, [-1], axis=axis)
    cumprob = cumprob / norm

    # ---- find the bins containing `pc`, and interpolate within them
    idx = np.count_nonzero(cumprob < pc, axis=axis) - 1
    idx = np.expand_dims(idx, axis)
    cp_lo = np.take_along_axis(cumprob, idx, axis=axis)
    cp_hi = np.take_along_axis(cumprob, idx + 1, axis=axis)

    xlo = lowers[axis][idx]
    dx = widths[axis][idx]
    perc = xlo + dx * (pc - cp_lo) / (cp_hi - cp_lo)
    return np.squeeze(perc, axis=axis)
