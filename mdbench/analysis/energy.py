"""Energy extraction from solutions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..solution import Solution


def total_energy(solution: Solution, t: float) -> float:
    """
    Total (kinetic + potential) energy at a saved time point.

    Args:
        solution: Integrated trajectory.
        t: Time; the nearest saved time point is used.

    Returns:
        Total energy.
    """
    positions, velocities = solution.state_at(t)
    return solution.problem.total_energy(positions, velocities)


def energy_error(solution: Solution) -> float:
    """Absolute energy drift |E(t_end) - E(t0)|."""
    t0, t_end = solution.problem.tspan
    return abs(total_energy(solution, t_end) - total_energy(solution, t0))


def energy_history(solution: Solution) -> NDArray[np.floating]:
    """Total energy at every saved time point, shape (K,)."""
    problem = solution.problem
    return np.array(
        [
            problem.total_energy(q, v)
            for q, v in zip(solution.positions, solution.velocities)
        ]
    )


def energy_error_history(
    solution: Solution,
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """
    Energy error magnitude over time.

    Returns:
        Tuple of (times, |E(t) - E(t0)|).
    """
    energies = energy_history(solution)
    return solution.t.copy(), np.abs(energies - energies[0])


def temperature_history(solution: Solution) -> NDArray[np.floating]:
    """Instantaneous temperature at every saved time point (N_dof = 3N - 3)."""
    problem = solution.problem
    n_dof = max(3 * problem.n_particles - 3, 1)
    kinetic = np.array([problem.kinetic_energy(v) for v in solution.velocities])
    return 2.0 * kinetic / (n_dof * problem.k_B)
