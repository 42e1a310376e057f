"""Utility functions and tools.

Argument broadcasting and validation shared by the numerical modules.  Validation failures are
logged with the package logger and raised as the exception types in `cwtools.errors`.

"""

from typing import List

import numpy as np
import numpy.typing as npt

from cwtools import log
from cwtools.errors import ShapeMismatchError, InvalidArgumentError


# =================================================================================================
# ====    Argument Handling    ====
# =================================================================================================


def broadcast_args(*args: npt.ArrayLike, names=None) -> List[np.ndarray]:
    """Broadcast the input arguments against each other, returning float arrays of a common shape.

    Scalars broadcast against arrays; non-scalar arrays must follow numpy broadcasting rules.

    Parameters
    ----------
    *args : array_like
        Input values.
    names : list of str or `None`
        Names of the arguments, used only in error messages.

    Returns
    -------
    arrs : list of ndarray
        New (writable) float arrays, all with the broadcast shape.

    Raises
    ------
    ShapeMismatchError
        If the inputs cannot be broadcast to a common shape.

    """
    arrs = [np.asarray(aa, dtype=float) for aa in args]
    try:
        arrs = np.broadcast_arrays(*arrs)
    except ValueError as err:
        if names is None:
            names = [f"arg{ii}" for ii in range(len(arrs))]
        shapes = ", ".join(f"{nn}{np.shape(aa)}" for nn, aa in zip(names, arrs))
        msg = f"Arguments must be scalars or broadcastable to a common shape, got: {shapes}"
        log.error(msg)
        raise ShapeMismatchError(msg) from err

    # `broadcast_arrays` returns read-only views, make independent copies
    arrs = [np.array(aa) for aa in arrs]
    return arrs


def check_finite(name: str, vals: npt.ArrayLike):
    """Raise `InvalidArgumentError` if any value of `vals` is not finite.
    """
    vals = np.asarray(vals)
    if not np.all(np.isfinite(vals)):
        msg = f"`{name}` must be finite, got {np.count_nonzero(~np.isfinite(vals))} non-finite values!"
        log.error(msg)
        raise InvalidArgumentError(msg)
    return


def check_positive(name: str, vals: npt.ArrayLike, strict: bool = True):
    """Raise `InvalidArgumentError` unless all `vals` are positive.

    Parameters
    ----------
    name : str
        Name of the argument, used in the error message.
    vals : array_like
        Values to check.
    strict : bool
        If True, values must be `> 0`, otherwise `>= 0`.

    """
    vals = np.asarray(vals)
    bad = (vals <= 0.0) if strict else (vals < 0.0)
    if np.any(bad):
        rel = ">" if strict else ">="
        msg = f"`{name}` must be {rel} 0, got {np.count_nonzero(bad)} bad values (min={np.min(vals):.4e})!"
        log.error(msg)
        raise InvalidArgumentError(msg)
    return


# =================================================================================================
# ====    Mathematical & Numerical    ====
# =================================================================================================


def minmax(vals: npt.ArrayLike, filter: bool = False) -> np.ndarray:
    """Find the minimum and maximum values in the given array.

    Parameters
    ----------
    vals : npt.ArrayLike
        Input values in which to find extrema.
    filter : bool, optional
        Select only finite values from the input array.

    Returns
    -------
    extr : (2,) np.ndarray
        Minimum and maximum values.

    """
    if filter:
        vals = np.asarray(vals)
        vv = vals[np.isfinite(vals)]
    else:
        vv = vals
    extr = np.array([np.min(vv), np.max(vv)])
    return extr
