"""Periodic simulation cell."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Box:
    """
    Orthorhombic periodic simulation cell.

    The cell spans [0, L) along each axis. Particles leaving one face
    re-enter through the opposite one.

    Attributes:
        lengths: Side lengths [Lx, Ly, Lz].
    """

    lengths: NDArray[np.floating]

    def __post_init__(self) -> None:
        """Validate and convert lengths."""
        lengths = np.asarray(self.lengths, dtype=np.float64)
        if lengths.shape == ():
            lengths = np.full(3, float(lengths))
        if lengths.shape != (3,):
            raise ValueError(f"Box lengths must be a scalar or (3,), got {lengths.shape}")
        if np.any(lengths <= 0):
            raise ValueError(f"Box lengths must be positive, got {lengths}")
        # Use object.__setattr__ since dataclass is frozen
        object.__setattr__(self, "lengths", lengths)

    @classmethod
    def orthorhombic(cls, lx: float, ly: float, lz: float) -> Box:
        """Create an orthorhombic box with given side lengths."""
        return cls(np.array([lx, ly, lz]))

    @classmethod
    def cubic(cls, length: float) -> Box:
        """Create a cubic box with given side length."""
        return cls.orthorhombic(length, length, length)

    @property
    def volume(self) -> float:
        """Return box volume."""
        return float(np.prod(self.lengths))

    @property
    def min_length(self) -> float:
        """Return the shortest side length."""
        return float(np.min(self.lengths))

    def minimum_image(
        self, r1: NDArray[np.floating], r2: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        """
        Compute minimum image displacement vector r2 - r1.

        Args:
            r1: First position(s), shape (3,) or (N, 3).
            r2: Second position(s), shape (3,) or (N, 3).

        Returns:
            Displacement vector(s) under minimum image convention.
        """
        dr = np.asarray(r2) - np.asarray(r1)
        return dr - self.lengths * np.round(dr / self.lengths)
