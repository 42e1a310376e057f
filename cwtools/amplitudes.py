"""Amplitude parameters of continuous-wave signals.

Two naming conventions are in use for the four amplitude parameters of a continuous-wave signal:

* "LIGO": ``h0`` (strain amplitude), ``cosi`` (cosine of inclination), ``psi`` (polarization
  angle), ``phi0`` (initial phase);
* "MLDC": ``Amplitude``, ``Inclination``, ``Polarization``, ``InitialPhase``.

"""

from typing import Mapping, Tuple

import numpy as np

from cwtools import log
from cwtools.errors import InvalidArgumentError

CONVENTION_LIGO = "LIGO"
CONVENTION_MLDC = "MLDC"

AMP_KEYS = {
    CONVENTION_LIGO: ("h0", "cosi", "psi", "phi0"),
    CONVENTION_MLDC: ("Amplitude", "Inclination", "Polarization", "InitialPhase"),
}


def check_amplitude_params(amp: Mapping) -> Tuple[str, int]:
    """Check the syntactic correctness of a set of amplitude parameters, and determine its convention.

    Exactly one of the conventions in `AMP_KEYS` must be present, with all four of its keys.
    Each value must be a column vector (shape ``(N,)`` or ``(N, 1)``, or a scalar for ``N = 1``),
    and all four must have the same length.

    Parameters
    ----------
    amp : Mapping
        Amplitude parameters, e.g. ``dict(h0=..., cosi=..., psi=..., phi0=...)``.

    Returns
    -------
    convention : str
        Either `CONVENTION_LIGO` or `CONVENTION_MLDC`.
    num_signals : int
        Number of signals, i.e. the common length of the parameter vectors.

    Raises
    ------
    InvalidArgumentError
        If the parameters are incomplete, ambiguous, missing, or badly shaped.

    """
    convention = None
    num_signals = None
    for conv, keys in AMP_KEYS.items():
        have = [kk in amp for kk in keys]
        if not any(have):
            continue

        if not all(have):
            missing = [kk for kk, hh in zip(keys, have) if not hh]
            msg = f"Incomplete amplitude parameters: need {{{', '.join(keys)}}}, missing {missing}!"
            log.error(msg)
            raise InvalidArgumentError(msg)

        if convention is not None:
            msg = (
                "Ambiguous convention: use either "
                f"{CONVENTION_LIGO} {AMP_KEYS[CONVENTION_LIGO]} or {CONVENTION_MLDC} {AMP_KEYS[CONVENTION_MLDC]}!"
            )
            log.error(msg)
            raise InvalidArgumentError(msg)

        convention = conv
        num_signals = _column_length(amp, keys)

    if convention is None:
        msg = f"No amplitude parameters found, expected one of {list(AMP_KEYS.values())}!"
        log.error(msg)
        raise InvalidArgumentError(msg)

    return convention, num_signals


def _column_length(amp, keys):
    """Common length of the column vectors ``amp[kk]`` for each of `keys`.
    """
    lengths = []
    for kk in keys:
        vals = np.asarray(amp[kk])
        if vals.ndim == 0:
            lengths.append(1)
        elif (vals.ndim == 1) or ((vals.ndim == 2) and (vals.shape[1] == 1)):
            lengths.append(vals.shape[0])
        else:
            msg = f"Amplitude params must be Nx1 column vectors, '{kk}' has shape {vals.shape}!"
            log.error(msg)
            raise InvalidArgumentError(msg)

    if len(set(lengths)) != 1:
        shapes = dict(zip(keys, lengths))
        msg = f"Amplitude params must be Nx1 column vectors of identical length, got {shapes}!"
        log.error(msg)
        raise InvalidArgumentError(msg)

    return lengths[0]
