"""Integration results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from .problem import NBodyProblem


@dataclass
class Solution:
    """
    Trajectory returned by an integrator.

    Attributes:
        t: Saved time points, shape (K,). Always contains t0 and t_end.
        positions: Saved positions, shape (K, N, 3).
        velocities: Saved velocities, shape (K, N, 3).
        n_accepted: Number of accepted time steps.
        n_feval: Number of force evaluations.
        algorithm: Name of the integrator that produced the solution.
        problem: The problem that was solved.
        success: Whether the solver reached t_end.
        message: Solver status message.
    """

    t: NDArray[np.floating]
    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    n_accepted: int
    n_feval: int
    algorithm: str
    problem: NBodyProblem = field(repr=False)
    success: bool = True
    message: str = ""

    def __post_init__(self) -> None:
        """Validate array shapes."""
        self.t = np.asarray(self.t, dtype=np.float64)
        if len(self.t) == 0:
            raise ValueError("Solution must contain at least one time point")
        if len(self.positions) != len(self.t) or len(self.velocities) != len(self.t):
            raise ValueError(
                f"trajectory length {len(self.positions)} does not match "
                f"{len(self.t)} time points"
            )

    @property
    def n_saved(self) -> int:
        """Return number of saved time points."""
        return len(self.t)

    def index_at(self, t: float) -> int:
        """Return the index of the saved time point nearest to t."""
        return int(np.argmin(np.abs(self.t - t)))

    def state_at(self, t: float) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
        """Return (positions, velocities) at the saved time point nearest to t."""
        i = self.index_at(t)
        return self.positions[i], self.velocities[i]
