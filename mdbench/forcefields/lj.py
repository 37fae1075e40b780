"""Lennard-Jones force implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .base import ForceProvider

if TYPE_CHECKING:
    from ..system import Box


class LennardJonesForce(ForceProvider):
    """
    Lennard-Jones 12-6 potential for a single species.

    V(r) = 4 * epsilon * [(sigma/r)^12 - (sigma/r)^6]  for r < cutoff

    All pairs are evaluated with the minimum image convention, so the
    cutoff may not exceed half the shortest box side.

    Attributes:
        epsilon: Well depth.
        sigma: Size parameter.
        cutoff: Cutoff distance.
        shift: Subtract V(cutoff) from the pair energy so it is continuous.
    """

    def __init__(
        self,
        epsilon: float = 1.0,
        sigma: float = 1.0,
        cutoff: float = 2.5,
        shift: bool = True,
    ) -> None:
        """
        Initialize Lennard-Jones force.

        Args:
            epsilon: Well depth.
            sigma: Size parameter.
            cutoff: Cutoff distance for interactions.
            shift: Shift the pair energy to zero at the cutoff. Forces are unaffected.
        """
        if epsilon <= 0 or sigma <= 0 or cutoff <= 0:
            raise ValueError(
                f"epsilon, sigma and cutoff must be positive, got "
                f"{epsilon}, {sigma}, {cutoff}"
            )
        self.epsilon = float(epsilon)
        self.sigma = float(sigma)
        self.cutoff = float(cutoff)
        self.shift = shift

        sr6 = (self.sigma / self.cutoff) ** 6
        self._energy_at_cutoff = 4.0 * self.epsilon * (sr6**2 - sr6) if shift else 0.0
        self._pairs: dict[int, tuple[NDArray[np.integer], NDArray[np.integer]]] = {}

    def check_box(self, box: Box) -> None:
        """Raise if the cutoff is incompatible with the minimum image convention."""
        if self.cutoff > 0.5 * box.min_length:
            raise ValueError(
                f"cutoff {self.cutoff} exceeds half the box length {0.5 * box.min_length}"
            )

    def _pair_indices(self, n: int) -> tuple[NDArray[np.integer], NDArray[np.integer]]:
        """Return cached upper-triangle pair indices for n particles."""
        if n not in self._pairs:
            self._pairs[n] = np.triu_indices(n, k=1)
        return self._pairs[n]

    def _interacting_pairs(
        self, positions: NDArray[np.floating], box: Box
    ) -> tuple[NDArray[np.integer], NDArray[np.integer], NDArray[np.floating], NDArray[np.floating]]:
        """Return (i, j, dr, r) for all pairs inside the cutoff."""
        i_indices, j_indices = self._pair_indices(len(positions))
        dr = box.minimum_image(positions[i_indices], positions[j_indices])
        r = np.linalg.norm(dr, axis=1)

        mask = r < self.cutoff
        return i_indices[mask], j_indices[mask], dr[mask], r[mask]

    def _pair_terms(
        self, r: NDArray[np.floating]
    ) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Return (sigma/r)^6 and (sigma/r)^12."""
        # Avoid division by zero
        r_safe = np.maximum(r, 1e-10)
        sig_over_r_6 = (self.sigma / r_safe) ** 6
        return sig_over_r_6, sig_over_r_6**2

    def compute(self, positions: NDArray[np.floating], box: Box) -> NDArray[np.floating]:
        """Compute Lennard-Jones forces."""
        return self.compute_with_energy(positions, box)[0]

    def potential_energy(self, positions: NDArray[np.floating], box: Box) -> float:
        """Compute Lennard-Jones potential energy."""
        positions = np.asarray(positions, dtype=np.float64)
        _, _, _, r = self._interacting_pairs(positions, box)
        if len(r) == 0:
            return 0.0
        sig_over_r_6, sig_over_r_12 = self._pair_terms(r)
        energy = 4.0 * self.epsilon * np.sum(sig_over_r_12 - sig_over_r_6)
        return float(energy - len(r) * self._energy_at_cutoff)

    def compute_with_energy(
        self, positions: NDArray[np.floating], box: Box
    ) -> tuple[NDArray[np.floating], float]:
        """Compute Lennard-Jones forces and potential energy."""
        positions = np.asarray(positions, dtype=np.float64)
        forces = np.zeros_like(positions)

        i_indices, j_indices, dr, r = self._interacting_pairs(positions, box)
        if len(r) == 0:
            return forces, 0.0

        sig_over_r_6, sig_over_r_12 = self._pair_terms(r)
        energy = 4.0 * self.epsilon * np.sum(sig_over_r_12 - sig_over_r_6)
        energy -= len(r) * self._energy_at_cutoff

        # F = -dV/dr = 24 * epsilon * [2*(sigma/r)^12 - (sigma/r)^6] / r
        r_safe = np.maximum(r, 1e-10)
        force_over_r = 24.0 * self.epsilon * (2.0 * sig_over_r_12 - sig_over_r_6) / r_safe**2

        # dr points from i to j
        force_vectors = force_over_r[:, np.newaxis] * dr

        # Newton's third law
        np.add.at(forces, j_indices, force_vectors)
        np.add.at(forces, i_indices, -force_vectors)

        return forces, float(energy)
