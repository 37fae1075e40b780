"""
High-level API: build the liquid argon problem and solve it.

Example:
    >>> from mdbench import simulate
    >>> problem = simulate.liquid_argon(t_end=0.5)
    >>> solution = simulate.solve(problem, "VelocityVerlet", dt=1e-3)
    >>> print(solution.n_accepted, solution.n_feval)
"""

from __future__ import annotations

from .forcefields import LennardJonesForce
from .integrators import FixedStep, Integrator, StepControl, Tolerance, get_integrator
from .problem import NBodyProblem
from .solution import Solution
from .system import Box, ParticleState, cell_node_positions, thermal_velocities
from .units import ArgonParameters


def liquid_argon(
    t_end: float,
    params: ArgonParameters | None = None,
    seed: int = 42,
    shift: bool = True,
    t_start: float = 0.0,
) -> NBodyProblem:
    """
    Build the liquid argon N-body problem in reduced units.

    Particles sit on the nodes of a cubic lattice filling the periodic box,
    with thermal velocities drawn from a seeded normal distribution and the
    centre-of-mass drift removed. They interact through a Lennard-Jones
    potential cut off at R* = R / σ.

    Args:
        t_end: End of the time span in reduced units (τ = σ√(m/ε)).
        params: Physical parameters (default: argon at 120 K, 1374 kg/m³, N=350).
        seed: Random seed for the velocities.
        shift: Shift the pair energy to zero at the cutoff.
        t_start: Start of the time span.

    Returns:
        Problem ready to be handed to an integrator.
    """
    if params is None:
        params = ArgonParameters()
    reduced = params.to_reduced()

    box = Box.cubic(reduced.box_length)
    force = LennardJonesForce(
        epsilon=reduced.epsilon,
        sigma=reduced.sigma,
        cutoff=reduced.cutoff,
        shift=shift,
    )
    force.check_box(box)

    n = reduced.n_particles
    state = ParticleState.create(
        positions=cell_node_positions(n, reduced.box_length),
        velocities=thermal_velocities(n, reduced.velocity_scale, seed=seed),
        masses=[reduced.mass] * n,
        box=box,
        time=t_start,
    )
    return NBodyProblem(state, force, (t_start, t_end), k_B=reduced.k_B)


def step_control(
    dt: float | None = None,
    abstol: float | None = None,
    reltol: float | None = None,
) -> StepControl:
    """Build a FixedStep from dt or a Tolerance from (abstol, reltol)."""
    if dt is not None:
        if abstol is not None or reltol is not None:
            raise ValueError("Give either dt or (abstol, reltol), not both")
        return FixedStep(dt)
    if abstol is None or reltol is None:
        raise ValueError("Adaptive integration needs both abstol and reltol")
    return Tolerance(abstol, reltol)


def solve(
    problem: NBodyProblem,
    integrator: str | Integrator,
    dt: float | None = None,
    abstol: float | None = None,
    reltol: float | None = None,
    save_every: int = 1,
) -> Solution:
    """
    Solve a problem with a named integrator.

    Args:
        problem: Problem to integrate.
        integrator: Integrator name (see ``integrators.available_integrators()``) or instance.
        dt: Step size for symplectic integrators.
        abstol: Absolute tolerance for adaptive integrators.
        reltol: Relative tolerance for adaptive integrators.
        save_every: Keep every n-th accepted step in the trajectory.

    Returns:
        Solution with trajectory and counters.
    """
    return get_integrator(integrator).solve(
        problem, step_control(dt, abstol, reltol), save_every=save_every
    )
