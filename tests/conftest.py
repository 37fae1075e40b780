"""Shared fixtures."""

import functools

import matplotlib
import pytest

matplotlib.use("Agg")

from mdbench import simulate  # noqa: E402
from mdbench.units import ArgonParameters  # noqa: E402

# 64 particles at the argon density; L* ≈ 4.3 so the cutoff must stay below 2.15
SMALL_PARAMS = ArgonParameters(n_particles=64, cutoff_ratio=2.0)


@pytest.fixture
def small_params():
    """Small argon system that integrates in milliseconds."""
    return SMALL_PARAMS


@pytest.fixture
def small_factory():
    """Problem factory for the small argon system."""
    return functools.partial(simulate.liquid_argon, params=SMALL_PARAMS)


@pytest.fixture
def small_problem(small_factory):
    """Small argon problem over a short time span."""
    return small_factory(0.1)
