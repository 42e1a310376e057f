"""cwtools: Numerical utilities for continuous-wave (pulsar) gravitational-wave searches.

This package collects the small, stateless numerical routines that a continuous-wave search
pipeline needs around its core matched-filtering stage:

(1) **Statistics**: the cumulative distribution function of the non-central chi^2 distribution,
    evaluated by an adaptive bidirectional Poisson-mixture series, the inversion of central chi^2
    false-alarm probabilities (exact and asymptotic), and binomial rate estimation from samples.
(2) **Histograms**: percentiles of pre-built N-dimensional histograms.
(3) **Search setup**: checking amplitude-parameter sets and summarising segment lists.

All routines operate on in-memory numpy arrays and are safe to call from any pipeline stage.

"""

__author__ = "cwtools developers"
__copyright__ = "Copyright (c) 2024 cwtools developers"
__license__ = "MIT"

import os
import logging

__all__ = ["log"]

# ---- Setup root package variables

_PATH_PACKAGE = os.path.dirname(os.path.abspath(__file__))

LOG_SUFFIX = '.log'
LOG_FILENAME_WITH_TIME_STAMP = False

# ---- Load logger

from . import logger   # noqa
log = logger.get_logger(__name__, logging.WARNING)       #: global root logger from `cwtools.logger`

# ---- Import submodules

from . import constants       # noqa
from . import errors          # noqa
from . import utils           # noqa
from . import stats           # noqa
from . import histograms      # noqa
from . import amplitudes      # noqa
from . import segments        # noqa

# ---- Handle version

fname_version = os.path.join(_PATH_PACKAGE, 'version.txt')
with open(fname_version) as inn:
    version = inn.read().strip()

__version__ = version

# cleanup module namespace
del os, logging
