"""Base interface for force providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..system import Box


class ForceProvider(ABC):
    """
    Abstract base class for pairwise force models.

    Force providers work on raw position arrays so the same object can be
    driven by the fixed-step integrators and by scipy's first-order solvers.
    """

    @abstractmethod
    def compute(self, positions: NDArray[np.floating], box: Box) -> NDArray[np.floating]:
        """
        Compute forces on all particles.

        Args:
            positions: Particle positions, shape (N, 3).
            box: Periodic simulation cell.

        Returns:
            Forces array of shape (N, 3).
        """
        ...

    @abstractmethod
    def potential_energy(self, positions: NDArray[np.floating], box: Box) -> float:
        """
        Compute the total potential energy.

        Args:
            positions: Particle positions, shape (N, 3).
            box: Periodic simulation cell.

        Returns:
            Potential energy.
        """
        ...

    def compute_with_energy(
        self, positions: NDArray[np.floating], box: Box
    ) -> tuple[NDArray[np.floating], float]:
        """
        Compute forces and potential energy.

        Default implementation calls compute() and potential_energy();
        subclasses should override for efficiency.
        """
        return self.compute(positions, box), self.potential_energy(positions, box)
