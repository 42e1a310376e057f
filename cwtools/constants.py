"""Numerical Constants

All times are in seconds, as raw floats.  Constants should only be added here when they are used in
multiple files/submodules.

"""
import astropy as ap
import astropy.units  # noqa

# ---- Time units
HOUR = ap.units.hour.to(ap.units.s)             #: Hour [s]
DAY = ap.units.day.to(ap.units.s)               #: Day [s]

# ---- Search defaults
TSFT_DEFAULT = 1800.0                           #: Default time-span of a short Fourier transform (SFT) [s]
