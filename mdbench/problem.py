"""N-body initial value problem."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from .forcefields import ForceProvider
    from .system import Box, ParticleState


class NBodyProblem:
    """
    Second-order initial value problem  q'' = F(q) / m  on a time span.

    Wraps an initial state and a force provider and exposes the right-hand
    side in the forms the integrators need. Every force evaluation goes
    through :meth:`acceleration`, which counts calls so solvers that do not
    report their own count can be compared fairly.

    Attributes:
        state: Initial particle state (not modified by solvers).
        force_provider: Force model.
        tspan: (t0, t_end).
        k_B: Boltzmann constant in the problem's units.
        force_evaluations: Number of force evaluations since the last reset.
    """

    def __init__(
        self,
        state: ParticleState,
        force_provider: ForceProvider,
        tspan: tuple[float, float],
        k_B: float = 1.0,
    ) -> None:
        t0, t_end = float(tspan[0]), float(tspan[1])
        if not t_end > t0:
            raise ValueError(f"tspan must be increasing, got ({t0}, {t_end})")
        self.state = state.copy()
        self.state.time = t0
        self.force_provider = force_provider
        self.tspan = (t0, t_end)
        self.k_B = k_B
        self.force_evaluations = 0
        self._inv_masses = 1.0 / self.state.masses[:, np.newaxis]

    @property
    def n_particles(self) -> int:
        """Return number of particles."""
        return self.state.n_particles

    @property
    def box(self) -> Box:
        """Return the periodic simulation cell."""
        return self.state.box

    @property
    def masses(self) -> NDArray[np.floating]:
        """Return particle masses."""
        return self.state.masses

    def reset_counters(self) -> None:
        """Zero the force evaluation counter."""
        self.force_evaluations = 0

    def acceleration(self, positions: NDArray[np.floating]) -> NDArray[np.floating]:
        """
        Compute accelerations F(q) / m.

        Args:
            positions: Particle positions, shape (N, 3).

        Returns:
            Accelerations, shape (N, 3).
        """
        self.force_evaluations += 1
        return self.force_provider.compute(positions, self.state.box) * self._inv_masses

    def initial_vector(self) -> NDArray[np.floating]:
        """Return the initial state as a flat [q, v] vector of length 6N."""
        return np.concatenate([self.state.positions.ravel(), self.state.velocities.ravel()])

    def split(
        self, y: NDArray[np.floating]
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Split a flat [q, v] vector (or a (6N, k) array of them) into positions and velocities."""
        n = self.n_particles
        if y.ndim == 1:
            return y[: 3 * n].reshape(n, 3), y[3 * n :].reshape(n, 3)
        k = y.shape[1]
        positions = y[: 3 * n].T.reshape(k, n, 3)
        velocities = y[3 * n :].T.reshape(k, n, 3)
        return positions, velocities

    def rhs(self, t: float, y: NDArray[np.floating]) -> NDArray[np.floating]:
        """First-order right-hand side d[q, v]/dt = [v, a(q)]."""
        positions, velocities = self.split(y)
        return np.concatenate([velocities.ravel(), self.acceleration(positions).ravel()])

    def kinetic_energy(self, velocities: NDArray[np.floating]) -> float:
        """Compute kinetic energy for a velocity array."""
        return float(0.5 * np.sum(self.state.masses[:, np.newaxis] * velocities**2))

    def potential_energy(self, positions: NDArray[np.floating]) -> float:
        """Compute potential energy for a position array (not counted as a force evaluation)."""
        return self.force_provider.potential_energy(positions, self.state.box)

    def total_energy(
        self, positions: NDArray[np.floating], velocities: NDArray[np.floating]
    ) -> float:
        """Compute kinetic plus potential energy."""
        return self.kinetic_energy(velocities) + self.potential_energy(positions)
