"""Particle state representation."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .box import Box


@dataclass
class ParticleState:
    """
    Phase-space point of an N-particle system.

    Positions are kept unwrapped: the integrators move particles freely and
    the force provider applies the minimum image convention.

    Attributes:
        positions: Particle positions, shape (N, 3).
        velocities: Particle velocities, shape (N, 3).
        masses: Particle masses, shape (N,).
        box: Periodic simulation cell.
        time: Simulation time of this state.
    """

    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    masses: NDArray[np.floating]
    box: Box
    time: float = 0.0

    def __post_init__(self) -> None:
        """Validate and convert arrays."""
        self.positions = np.asarray(self.positions, dtype=np.float64)
        self.velocities = np.asarray(self.velocities, dtype=np.float64)
        self.masses = np.asarray(self.masses, dtype=np.float64)

        n_particles = len(self.masses)
        if self.positions.shape != (n_particles, 3):
            raise ValueError(
                f"positions shape {self.positions.shape} incompatible with "
                f"{n_particles} particles"
            )
        if self.velocities.shape != (n_particles, 3):
            raise ValueError(
                f"velocities shape {self.velocities.shape} incompatible with "
                f"{n_particles} particles"
            )

    @property
    def n_particles(self) -> int:
        """Return number of particles."""
        return len(self.masses)

    @classmethod
    def create(
        cls,
        positions: ArrayLike,
        masses: ArrayLike,
        box: Box,
        velocities: ArrayLike | None = None,
        time: float = 0.0,
    ) -> ParticleState:
        """
        Create a ParticleState, defaulting velocities to zero.

        Args:
            positions: Particle positions, shape (N, 3).
            masses: Particle masses, shape (N,).
            box: Periodic simulation cell.
            velocities: Particle velocities, shape (N, 3). Defaults to zeros.
            time: Simulation time.

        Returns:
            New ParticleState instance.
        """
        positions = np.asarray(positions, dtype=np.float64)
        masses = np.asarray(masses, dtype=np.float64)
        if velocities is None:
            velocities = np.zeros((len(masses), 3), dtype=np.float64)
        return cls(
            positions=positions,
            velocities=velocities,
            masses=masses,
            box=box,
            time=time,
        )

    def copy(self) -> ParticleState:
        """Create a deep copy of this state."""
        return ParticleState(
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            masses=self.masses.copy(),
            box=self.box,  # Box is immutable
            time=self.time,
        )

    @property
    def kinetic_energy(self) -> float:
        """Compute total kinetic energy: sum(0.5 * m * v^2)."""
        return float(0.5 * np.sum(self.masses[:, np.newaxis] * self.velocities**2))

    def temperature(self, k_B: float = 1.0) -> float:
        """
        Compute instantaneous temperature from kinetic energy.

        Uses T = 2 * KE / (N_dof * k_B) where N_dof = 3*N - 3.
        Returns 0 if N <= 1.

        Args:
            k_B: Boltzmann constant in the units of the state (1 in reduced units).
        """
        if self.n_particles <= 1:
            return 0.0
        n_dof = 3 * self.n_particles - 3
        return 2.0 * self.kinetic_energy / (n_dof * k_B)

    @property
    def center_of_mass_velocity(self) -> NDArray[np.floating]:
        """Compute center of mass velocity."""
        total_mass = np.sum(self.masses)
        return np.sum(self.masses[:, np.newaxis] * self.velocities, axis=0) / total_mass
