"""Statistical distribution functions for detection statistics.

The detection statistics of continuous-wave searches (e.g. the F-statistic, or sums of them over
segments) follow chi^2 distributions: central in pure noise, and non-central when a signal is
present, with the non-centrality set by the squared signal-to-noise ratio.  This module provides:

* `chi2_cdf` : cumulative distribution function of the (non-)central chi^2 distribution;
* `inv_false_alarm_chi2`, `inv_false_alarm_chi2_asym` : detection thresholds for a given false
  alarm probability;
* `binomial_confidence_interval`, `estimate_rate_from_samples` : rates of threshold crossings.

Notes
-----
The non-central chi^2 CDF is computed from its Poisson-mixture representation,

    P(x; k, lam) = sum_{j=0}^{inf} Poisson(j; lam/2) * P(k/2 + j, x/2),

where `P(a, z)` is the regularized lower incomplete gamma function.  Summation starts at the mode
of the Poisson weights, ``j0 = round(lam/2)``, and proceeds both upwards and downwards.  Successive
incomplete-gamma terms are obtained recursively from

    P(a + 1, z) = P(a, z) - z^a e^{-z} / Gamma(a + 1),

so that only one incomplete-gamma evaluation is needed per element.

"""

import numpy as np
import numpy.typing as npt
import scipy as sp
import scipy.optimize  # noqa
import scipy.special   # noqa
import scipy.stats     # noqa

from cwtools import log, utils
from cwtools.errors import InvalidArgumentError, NumericalNonConvergenceError

#: Relative error on the running sum at which the non-central chi^2 series is truncated.
NCX2_CDF_TOLERANCE = 1.0e-6
#: Maximum number of series iterations before `NumericalNonConvergenceError` is raised.
#: The number of iterations needed grows as ``sqrt(lam)``: the cap suffices for ``lam`` up to
#: about ``1e7``, while ``lam ~ 1e8`` exceeds it.
NCX2_CDF_MAX_ITER = 10000
#: False-alarm probabilities at or above this value are inverted numerically.
ASYM_PA_MAX = 0.1


# =================================================================================================
# ====    Chi^2 Distribution    ====
# =================================================================================================


def chi2_cdf(x: npt.ArrayLike, k: npt.ArrayLike, lam: npt.ArrayLike = 0.0) -> np.ndarray:
    """Cumulative distribution function of the non-central chi^2 distribution.

    Arguments are broadcast against each other.  Elements with ``lam == 0`` are evaluated with the
    central chi^2 CDF, elements with ``lam > 0`` with the bidirectional Poisson-mixture series.

    Parameters
    ----------
    x : array_like
        Value(s) of the chi^2 variable.
    k : array_like
        Number of degrees of freedom, must be positive.
    lam : array_like
        Non-centrality parameter, must be non-negative.

    Returns
    -------
    prob : ndarray
        ``P(X <= x)`` for ``X ~ chi^2(k, lam)``, with the broadcast shape of the inputs.

    Raises
    ------
    ShapeMismatchError
        If the arguments cannot be broadcast to a common shape.
    InvalidArgumentError
        If any `k <= 0`, any `lam < 0`, or any argument is not finite.
    NumericalNonConvergenceError
        If the series for any element does not converge within `NCX2_CDF_MAX_ITER` iterations.

    """
    x, k, lam = utils.broadcast_args(x, k, lam, names=['x', 'k', 'lam'])
    for name, vals in zip(['x', 'k', 'lam'], [x, k, lam]):
        utils.check_finite(name, vals)
    utils.check_positive('k', k, strict=True)
    utils.check_positive('lam', lam, strict=False)

    shape = x.shape
    x = x.ravel()
    k = k.ravel()
    lam = lam.ravel()
    prob = np.zeros(x.size)

    # zero non-centrality: central chi^2 CDF
    cent = (lam == 0.0)
    if np.any(cent):
        prob[cent] = _chi2_cdf_central(x[cent], k[cent])

    # positive non-centrality: series summation.  The CDF vanishes for `x <= 0`
    sel = (~cent) & (x > 0.0)
    if np.any(sel):
        prob[sel], failed = _chi2_cdf_series(x[sel], k[sel], lam[sel])
        if failed.size > 0:
            # `np.unravel_index` does not accept 0-d shapes
            if len(shape) == 0:
                indices = [()] * failed.size
            else:
                locs = np.unravel_index(np.flatnonzero(sel)[failed], shape)
                indices = list(zip(*[ll.tolist() for ll in locs]))
            msg = (
                f"Non-central chi^2 series failed to converge after {NCX2_CDF_MAX_ITER} iterations "
                f"for {len(indices)} element(s): {indices[:10]}"
            )
            log.error(msg)
            raise NumericalNonConvergenceError(msg, indices=indices)

    return prob.reshape(shape)


def _chi2_cdf_central(x, k):
    """Central chi^2 CDF, ``P(k/2, x/2)``, from `scipy.special.gammainc` (valid for large `k`).
    """
    return sp.special.gammainc(0.5 * k, 0.5 * np.clip(x, 0.0, None))


def _poisson_density(aa, mean):
    """Poisson density generalized to non-integer `aa`: ``mean^aa exp(-mean) / Gamma(aa + 1)``.
    """
    lnp = sp.special.xlogy(aa, mean) - mean - sp.special.gammaln(aa + 1.0)
    return np.exp(lnp)


def _chi2_cdf_series(x, k, lam):
    """Sum the Poisson-mixture series of the non-central chi^2 CDF.

    All arguments are 1D arrays with ``x > 0``, ``k > 0``, ``lam > 0``.

    Returns
    -------
    prob : (N,) ndarray
        Series sums.
    failed : (M,) ndarray of int
        Indices of elements that did not converge within `NCX2_CDF_MAX_ITER` iterations.

    """
    hx = 0.5 * x
    hk = 0.5 * k
    hlam = 0.5 * lam

    # starting index for summation: mode of the Poisson weights (rounding halves upwards)
    j0 = np.floor(hlam + 0.5)
    jp = j0.copy()
    jm = j0.copy()

    # Poisson weights of the upward (p) and downward (m) branches
    pois_p = sp.stats.poisson.pmf(j0, hlam)
    pois_m = pois_p.copy()

    # chi^2 CDF terms
    chi2_p = _chi2_cdf_central(x, k + 2.0 * j0)
    chi2_m = chi2_p.copy()

    prob = pois_p * chi2_p

    active = np.arange(x.size)
    num_iter = 0
    # the downward adjustment divides by `x/2`, which overflows for subnormal `x`; such elements
    # have vanishing terms and leave the active set on the first iteration
    with np.errstate(over='ignore', invalid='ignore'):
        # Poisson adjustments used to step the chi^2 terms
        adj_p = _poisson_density(hk + j0, hx)
        adj_m = adj_p * (hk + j0) / hx

        while (active.size > 0) and (num_iter < NCX2_CDF_MAX_ITER):
            ii = active

            # ---- upward branch
            pois_p[ii] *= hlam[ii] / (jp[ii] + 1.0)
            chi2_p[ii] -= adj_p[ii]
            adj_p[ii] *= hx[ii] / (hk[ii] + jp[ii] + 1.0)
            new = pois_p[ii] * chi2_p[ii]
            jp[ii] += 1.0

            # ---- downward branch, until index zero is reached
            down = (jm[ii] > 0.0)
            im = ii[down]
            if im.size > 0:
                pois_m[im] *= jm[im] / hlam[im]
                chi2_m[im] += adj_m[im]
                adj_m[im] *= (hk[im] + jm[im] - 1.0) / hx[im]
                new[down] += pois_m[im] * chi2_m[im]
                jm[im] -= 1.0

            prob[ii] += new

            # keep summing only the series whose newest terms are still significant
            active = ii[np.abs(new) > NCX2_CDF_TOLERANCE * np.abs(prob[ii])]
            num_iter += 1

    log.debug(f"non-central chi^2 series: {x.size} elements, {num_iter} iterations, {active.size} unconverged")
    return prob, active


# =================================================================================================
# ====    False Alarm Thresholds    ====
# =================================================================================================


def inv_false_alarm_chi2(pa, k):
    """Threshold `sa` on a central chi^2 variable with false alarm probability `pa`.

    i.e. ``P(chi^2_k > sa) = pa``, computed numerically with `scipy.stats.chi2.isf`.

    Parameters
    ----------
    pa : array_like
        False alarm probability, in ``(0, 1]``.
    k : array_like
        Degrees of freedom, must be positive.

    Returns
    -------
    sa : ndarray
        Threshold(s), with the broadcast shape of `pa` and `k`.

    """
    pa, k = _check_false_alarm_args(pa, k)
    return sp.stats.chi2.isf(pa, k)


def inv_false_alarm_chi2_asym(pa, k):
    """Threshold `sa` on a central chi^2 variable with false alarm probability `pa` (asymptotic).

    Uses an analytic, asymptotic inversion of the chi^2 CDF, which is accurate for very small false
    alarm probabilities and very large degrees of freedom.  For ``pa >= ASYM_PA_MAX`` this falls
    back to the numerical inversion `inv_false_alarm_chi2`.

    Parameters
    ----------
    pa : array_like
        False alarm probability, in ``(0, 1]``.
    k : array_like
        Degrees of freedom, must be positive.

    Returns
    -------
    sa : ndarray
        Threshold(s), with the broadcast shape of `pa` and `k`.

    """
    pa, k = _check_false_alarm_args(pa, k)
    sa = np.zeros_like(pa)

    asym = (pa < ASYM_PA_MAX)
    if np.any(~asym):
        sa[~asym] = sp.stats.chi2.isf(pa[~asym], k[~asym])

    if np.any(asym):
        kk = k[asym]
        eta0 = 2.0 / np.sqrt(kk) * sp.special.erfcinv(2.0 * pa[asym])
        eta = eta0 + 2.0 / (kk * eta0) * np.log(eta0 / (lambda_blend(eta0) - 1.0))
        sa[asym] = kk * lambda_blend(eta)

    return sa


def lambda_blend(eta):
    """Ratio of threshold to degrees of freedom as a function of the uniform-asymptotic variable.

    Smoothly blends a power series accurate at small `eta` with a logarithmic expansion accurate at
    large `eta`; the blend is applied over ``2 <= eta <= 4``.
    """
    eta = np.asarray(eta, dtype=float)
    lo = (eta <= 4.0)
    hi = (eta >= 2.0)

    lam_lo = np.zeros_like(eta)
    ee = eta[lo]
    lam_lo[lo] = 1.0 + ee + ee**2/3.0 + ee**3/36.0 - ee**4/270.0

    lam_hi = np.zeros_like(eta)
    yy = 1.0 + eta[hi]**2 / 2.0
    lam_hi[hi] = yy + (1.0 + 1.0/yy + 1.0/yy**2) * np.log(yy)

    lam = np.zeros_like(eta)
    lam[~hi] = lam_lo[~hi]
    lam[~lo] = lam_hi[~lo]
    both = lo & hi
    gg = np.tanh(5.0 * (eta[both] - 3.0))
    lam[both] = 0.5 * ((1.0 - gg) * lam_lo[both] + (1.0 + gg) * lam_hi[both])
    return lam


def _check_false_alarm_args(pa, k):
    pa, k = utils.broadcast_args(pa, k, names=['pa', 'k'])
    utils.check_positive('pa', pa, strict=True)
    utils.check_positive('k', k, strict=True)
    if np.any(pa > 1.0):
        msg = f"False alarm probabilities `pa` must be <= 1, max={np.max(pa):.4e}!"
        log.error(msg)
        raise InvalidArgumentError(msg)
    return pa, k


# =================================================================================================
# ====    Rates    ====
# =================================================================================================


def binomial_confidence_interval(num, num_pass, confidence=0.95):
    """Confidence interval on the success probability of a binomial distribution.

    The interval is the shortest one containing a fraction `confidence` of the posterior
    probability of the rate, ``Beta(num_pass + 1, num - num_pass + 1)`` (i.e. a uniform prior).
    It always contains the maximum-posterior estimate ``num_pass / num``.

    Parameters
    ----------
    num : int
        Number of trials, positive.
    num_pass : int
        Number of successes, ``0 <= num_pass <= num``.
    confidence : float
        Confidence level, in ``(0, 1)``.

    Returns
    -------
    lower, upper : float
        Bounds of the confidence interval.

    """
    if (num <= 0) or (num_pass < 0) or (num_pass > num):
        msg = f"Require `0 <= num_pass <= num` and `num > 0`, got {num=}, {num_pass=}!"
        log.error(msg)
        raise InvalidArgumentError(msg)
    _check_confidence(confidence)

    dist = sp.stats.beta(num_pass + 1.0, num - num_pass + 1.0)

    # posterior is monotonic in these cases: interval is attached to the boundary
    if num_pass == 0:
        return 0.0, float(dist.ppf(confidence))
    if num_pass == num:
        return float(dist.ppf(1.0 - confidence)), 1.0

    # choose the probability in the lower tail which minimizes the interval width
    def width(tail):
        return dist.ppf(tail + confidence) - dist.ppf(tail)

    res = sp.optimize.minimize_scalar(
        width, bounds=(0.0, 1.0 - confidence), method='bounded', options=dict(xatol=1e-10)
    )
    tail = res.x
    lower = float(dist.ppf(tail))
    upper = float(dist.ppf(tail + confidence))
    return lower, upper


def estimate_rate_from_samples(data, threshold, confidence=0.95):
    """Estimate the rate of threshold crossings in the given samples, with a confidence interval.

    For each threshold, ``K = count(data > threshold)`` of ``N = size(data)`` samples cross it.  The
    maximum-posterior rate is ``K / N``, and the confidence interval is given by
    `binomial_confidence_interval`.

    Parameters
    ----------
    data : array_like
        Samples, e.g. detection statistics in noise.
    threshold : array_like
        Threshold(s); may be a scalar or an array of any shape.
    confidence : float
        Confidence level of the interval, in ``(0, 1)``.

    Returns
    -------
    f_mpe, f_lower, f_upper : ndarray
        Maximum-posterior rate and confidence-interval bounds, each of the shape of `threshold`.

    """
    data = np.asarray(data, dtype=float).ravel()
    if data.size == 0:
        msg = "`data` must contain at least one sample!"
        log.error(msg)
        raise InvalidArgumentError(msg)
    _check_confidence(confidence)

    threshold = np.asarray(threshold, dtype=float)
    num = data.size

    f_mpe = np.full(threshold.shape, np.nan)
    f_lower = np.full(threshold.shape, np.nan)
    f_upper = np.full(threshold.shape, np.nan)
    for idx in np.ndindex(threshold.shape):
        num_pass = int(np.count_nonzero(data > threshold[idx]))
        f_mpe[idx] = num_pass / num
        f_lower[idx], f_upper[idx] = binomial_confidence_interval(num, num_pass, confidence)

    return f_mpe, f_lower, f_upper


def _check_confidence(confidence):
    if (not np.isscalar(confidence)) or (not (0.0 < confidence < 1.0)):
        msg = f"`confidence` must be a scalar in (0, 1), got {confidence}!"
        log.error(msg)
        raise InvalidArgumentError(msg)
    return
