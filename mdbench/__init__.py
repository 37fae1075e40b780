"""
mdbench - Integrator benchmarks on a liquid argon N-body simulation.

Compares symplectic fixed-step and adaptive error-controlled integrators
by runtime, energy conservation and force-evaluation count.

Quick Start:
    >>> from mdbench import simulate
    >>> from mdbench.benchmarks import ResultTable, run_benchmark
    >>> results = ResultTable()
    >>> run_benchmark(results, 0.5, ["VelocityVerlet", "Yoshida6"], [4e-3, 2e-3])
    >>> results.print_summary()
"""

__version__ = "0.1.0"

# High-level APIs
from . import plotting, simulate
from .forcefields import LennardJonesForce
from .integrators import get_integrator
from .problem import NBodyProblem
from .solution import Solution

# Core components for advanced users
from .system import Box, ParticleState
from .units import ArgonParameters, ReducedUnits

__all__ = [
    "simulate",
    "plotting",
    "ArgonParameters",
    "ReducedUnits",
    "Box",
    "ParticleState",
    "LennardJonesForce",
    "NBodyProblem",
    "Solution",
    "get_integrator",
]
