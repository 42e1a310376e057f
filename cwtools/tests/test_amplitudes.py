"""
"""

import numpy as np
import pytest

from cwtools import amplitudes
from cwtools.errors import InvalidArgumentError


def _ligo(num=3):
    return dict(h0=np.ones(num), cosi=np.zeros(num), psi=np.zeros(num), phi0=np.zeros(num))


def _mldc(num=3):
    return dict(Amplitude=np.ones(num), Inclination=np.zeros(num), Polarization=np.zeros(num), InitialPhase=np.zeros(num))


class Test_check_amplitude_params:

    def test_ligo(self):
        conv, num = amplitudes.check_amplitude_params(_ligo(5))
        assert conv == amplitudes.CONVENTION_LIGO
        assert num == 5
        return

    def test_mldc(self):
        conv, num = amplitudes.check_amplitude_params(_mldc(2))
        assert conv == "MLDC"
        assert num == 2
        return

    def test_column_vectors(self):
        amp = {kk: vv[:, np.newaxis] for kk, vv in _ligo(4).items()}
        assert amplitudes.check_amplitude_params(amp) == ("LIGO", 4)
        return

    def test_scalars(self):
        amp = dict(h0=1e-24, cosi=0.5, psi=0.1, phi0=2.0)
        assert amplitudes.check_amplitude_params(amp) == ("LIGO", 1)
        return

    def test_extra_keys_ignored(self):
        amp = _mldc(3)
        amp['Freq'] = 100.0
        assert amplitudes.check_amplitude_params(amp) == ("MLDC", 3)
        return

    def test_incomplete(self):
        for full in [_ligo(), _mldc()]:
            for key in full:
                amp = dict(full)
                del amp[key]
                with pytest.raises(InvalidArgumentError):
                    amplitudes.check_amplitude_params(amp)
        return

    def test_ambiguous(self):
        amp = _ligo()
        amp.update(_mldc())
        with pytest.raises(InvalidArgumentError, match="Ambiguous"):
            amplitudes.check_amplitude_params(amp)
        return

    def test_empty(self):
        with pytest.raises(InvalidArgumentError):
            amplitudes.check_amplitude_params(dict(Freq=100.0))
        return

    def test_bad_shapes(self):
        # row vectors are not column vectors
        amp = {kk: vv[np.newaxis, :] for kk, vv in _ligo(3).items()}
        with pytest.raises(InvalidArgumentError):
            amplitudes.check_amplitude_params(amp)

        amp = _mldc(3)
        amp['Polarization'] = np.zeros(4)
        with pytest.raises(InvalidArgumentError, match="identical length"):
            amplitudes.check_amplitude_params(amp)

        return
