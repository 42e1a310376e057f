"""cwtools: Numerical utilities for continuous-wave (pulsar) gravitational-wave searches.
"""

from pathlib import Path
from setuptools import setup, find_packages

SETUP_PATH = Path(__file__).absolute().resolve().parent

# ---- Prepare Meta-Data ----

# NOTE: `short_description` gets first line of `__doc__` only (linebreaks not allowed by setuptools)
short_description = __doc__.strip().split('\n')[0]

fname_desc = SETUP_PATH.joinpath("README.md")
with open(fname_desc, "r") as handle:
    long_description = handle.read()

fname_reqs = SETUP_PATH.joinpath("requirements.txt")
with open(fname_reqs, "r") as handle:
    requirements = handle.read()

fname_vers = SETUP_PATH.joinpath('./cwtools/version.txt')
with open(fname_vers) as handle:
    version = handle.read().strip()


# ---- Perform Setup ----

setup(
    name='cwtools-gw',
    author='cwtools developers',
    description=short_description,
    long_description=long_description,
    long_description_content_type="text/markdown",
    version=version,
    license='MIT',

    # External dependencies loaded from 'requirements.txt'
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },

    # Which Python importable modules should be included when your package is installed
    packages=find_packages(),

    # Include package data listed in `MANIFEST.in` (i.e. `version.txt`)
    include_package_data=True,

    python_requires=">=3.9",          # Python version restrictions
)
